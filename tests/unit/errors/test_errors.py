"""Unit tests for structured errors, the registry and the factory."""

import pytest
import yaml

from stencil_core.errors import (
    ErrorCategory,
    ErrorFactory,
    ErrorRegistry,
    ErrorTemplate,
    StencilError,
    create_error,
)


class TestErrorRegistry:
    """Tests for ErrorRegistry."""

    def test_builtin_codes_present(self):
        """Every documented code has a template."""
        codes = ErrorRegistry().list_codes()
        for code in (
            "TEMPLATE_STRUCTURE_INVALID",
            "EXTENSION_NOT_FOUND",
            "EXTENSION_FAILED",
            "FRAMEWORK_ALREADY_ACTIVE",
            "RENDER_FAILED",
            "STYLE_FORMAT_UNSUPPORTED",
            "OUTPUT_WRITE_FAILED",
            "CONFIG_INVALID",
            "CONFIG_NOT_FOUND",
            "INTERNAL_ERROR",
        ):
            assert code in codes

    def test_create_interpolates_message(self):
        error = ErrorRegistry().create("CONFIG_NOT_FOUND", {"path": "stencil.yaml"})
        assert error.code == "CONFIG_NOT_FOUND"
        assert error.category == ErrorCategory.CONFIG
        assert error.message == "Configuration file not found: stencil.yaml"
        assert error.suggestion

    def test_missing_context_keeps_placeholder(self):
        error = ErrorRegistry().create("CONFIG_NOT_FOUND")
        assert error.message == "Configuration file not found: {path}"

    def test_unknown_code_raises(self):
        with pytest.raises(ValueError, match="Unknown error code"):
            ErrorRegistry().create("NOPE")

    def test_register_custom_template(self):
        registry = ErrorRegistry()
        registry.register(
            ErrorTemplate(
                code="CUSTOM",
                category=ErrorCategory.EXTENSION,
                message_template="Custom {thing}",
            )
        )
        error = registry.create("CUSTOM", {"thing": "failure", "detail": "more"})
        assert error.message == "Custom failure"
        assert error.detail == "more"

    def test_context_fields_copied(self):
        error = ErrorRegistry().create(
            "EXTENSION_FAILED",
            {"extension_key": "react", "stage": "process_events", "detail": "boom"},
        )
        assert error.extension_key == "react"
        assert error.stage == "process_events"
        assert "react" in error.message


class TestStencilError:
    """Tests for StencilError."""

    def test_is_exception(self):
        error = create_error("TEMPLATE_STRUCTURE_INVALID", detail="bad")
        assert isinstance(error, Exception)
        assert str(error) == "Invalid template structure: bad"

    def test_with_context_returns_copy(self):
        error = create_error("RENDER_FAILED", extension_key="vue", detail="x")
        tagged = error.with_context(node_id="0.1", stage="render_component")

        assert tagged is not error
        assert tagged.node_id == "0.1"
        assert tagged.stage == "render_component"
        assert tagged.extension_key == "vue"
        assert error.node_id is None

    def test_to_dict(self):
        error = create_error("CONFIG_INVALID", detail="broken")
        data = error.to_dict()
        assert data["code"] == "CONFIG_INVALID"
        assert data["category"] == "CONFIG"
        assert data["detail"] == "broken"
        assert data["cause"] is None
        assert "timestamp" in data


class TestErrorFactory:
    """Tests for ErrorFactory.from_exception."""

    def test_os_error_maps_to_output(self):
        error = ErrorFactory().from_exception(
            PermissionError(13, "Permission denied", "/tmp/out.jsx"), stage="output"
        )
        assert error.code == "OUTPUT_WRITE_FAILED"
        assert error.category == ErrorCategory.OUTPUT
        assert "/tmp/out.jsx" in error.message
        assert error.stage == "output"

    def test_yaml_error_maps_to_config(self):
        try:
            yaml.safe_load("a: [unterminated")
        except yaml.YAMLError as e:
            error = ErrorFactory().from_exception(e)
        assert error.code == "CONFIG_INVALID"

    def test_generic_exception_maps_to_internal(self):
        error = ErrorFactory().from_exception(
            RuntimeError("kaput"), extension_key="bem", stage="process_styles"
        )
        assert error.code == "INTERNAL_ERROR"
        assert error.extension_key == "bem"
        assert "kaput" in error.message

    def test_stencil_error_passes_through_with_context(self):
        original = create_error("RENDER_FAILED", extension_key="react", detail="x")
        error = ErrorFactory().from_exception(original, stage="render_component")
        assert error.code == "RENDER_FAILED"
        assert error.stage == "render_component"

    def test_create_merges_kwargs(self):
        error = ErrorFactory().create("EXTENSION_NOT_FOUND", {"key": "x"}, extension_type="styling")
        assert isinstance(error, StencilError)
        assert error.code == "EXTENSION_NOT_FOUND"
