"""Unit tests for ExtensionRegistry."""

import pytest

from stencil_core.errors import StencilError
from stencil_core.extensions import ExtensionMetadata
from stencil_core.extensions.builtin import (
    BemExtension,
    EventNormalizationUtility,
    ReactExtension,
    VueExtension,
)
from stencil_core.registry import ActiveExtensions, ExtensionRegistry
from stencil_core.types import ExtensionType


class PlainUtility:
    """Duck-typed utility: no base class required."""

    def __init__(self, key: str = "upper", version: str = "1.0.0"):
        self.metadata = ExtensionMetadata(
            key=key, name="Upper", version=version, type=ExtensionType.UTILITY
        )

    def process(self, concepts):
        return concepts


class HalfFramework:
    """Framework missing most operations."""

    framework = "react"
    metadata = ExtensionMetadata(
        key="half", name="Half", version="1.0.0", type=ExtensionType.FRAMEWORK
    )

    def process_events(self, events):
        return []


class TestRegistration:
    """Tests for register_* and validation."""

    def test_register_builtins(self):
        registry = ExtensionRegistry()
        assert registry.register(ReactExtension()).is_valid
        assert registry.register(BemExtension()).is_valid
        assert registry.register(EventNormalizationUtility()).is_valid

        assert registry.get_available_frameworks() == ["react"]
        assert registry.get_available_styling() == ["bem"]
        assert registry.get_available_utilities() == ["normalize-events"]
        assert registry.get_extension_count() == 3
        assert registry.get_extension_count("framework") == 1

    def test_duck_typed_extension_accepted(self):
        registry = ExtensionRegistry()
        assert registry.register_utility(PlainUtility()).is_valid
        assert registry.has_utility("upper")

    def test_each_missing_operation_reported(self):
        result = ExtensionRegistry().register_framework(HalfFramework())
        assert not result.is_valid
        missing = {issue.path for issue in result.errors}
        assert missing == {
            "process_conditionals",
            "process_iterations",
            "process_slots",
            "process_attributes",
            "render_component",
        }

    @pytest.mark.parametrize("key", ["React", "my_ext", "-x", "x-", ""])
    def test_invalid_keys_rejected(self, key):
        result = ExtensionRegistry().register_utility(PlainUtility(key=key))
        assert not result.is_valid
        assert any(issue.path == "metadata.key" for issue in result.errors)

    @pytest.mark.parametrize("key", ["a", "my-ext", "ext2"])
    def test_valid_keys_accepted(self, key):
        assert ExtensionRegistry().register_utility(PlainUtility(key=key)).is_valid

    def test_bad_version_rejected(self):
        result = ExtensionRegistry().register_utility(PlainUtility(version="1.0"))
        assert not result.is_valid
        assert "semantic versioning" in result.errors[0].message

    def test_duplicate_key_rejected_and_first_kept(self):
        registry = ExtensionRegistry()
        first = PlainUtility()
        registry.register_utility(first)
        result = registry.register_utility(PlainUtility())
        assert not result.is_valid
        assert "already registered" in result.errors[0].message
        assert registry.get_utility("upper") is first

    def test_kind_mismatch_rejected(self):
        result = ExtensionRegistry().register_styling(PlainUtility())
        assert not result.is_valid

    def test_same_key_different_kinds_allowed(self):
        registry = ExtensionRegistry()
        assert registry.register_utility(PlainUtility(key="react")).is_valid
        assert registry.register_framework(ReactExtension()).is_valid

    def test_missing_metadata(self):
        result = ExtensionRegistry().register(object())
        assert not result.is_valid


class TestQueriesAndRemoval:
    """Tests for lookups, removal and clear."""

    def test_remove(self):
        registry = ExtensionRegistry()
        registry.register(VueExtension())
        assert registry.remove_framework("vue")
        assert not registry.remove_framework("vue")
        assert registry.get_framework("vue") is None

    def test_clear(self):
        registry = ExtensionRegistry()
        registry.register(VueExtension())
        registry.register(BemExtension())
        registry.clear()
        assert registry.get_extension_count() == 0

    def test_get_extensions_by_type(self, registry):
        frameworks = registry.get_extensions_by_type(ExtensionType.FRAMEWORK)
        assert {ext.key for ext in frameworks} == {"react", "vue", "svelte"}


class TestActivation:
    """Tests for activate and ActiveExtensions."""

    def test_activate_reports_missing(self, registry):
        active, missing = registry.activate("react", "nope", ["normalize-events", "gone"])
        assert active.framework.key == "react"
        assert active.styling is None
        assert [u.key for u in active.utilities] == ["normalize-events"]
        assert missing == [(ExtensionType.STYLING, "nope"), (ExtensionType.UTILITY, "gone")]
        assert active.keys == ["react", "normalize-events"]

    def test_second_framework_rejected(self):
        active = ActiveExtensions(framework=ReactExtension())
        with pytest.raises(StencilError) as exc_info:
            active.activate_framework(VueExtension())
        assert exc_info.value.code == "FRAMEWORK_ALREADY_ACTIVE"

    def test_all_in_invocation_order(self, registry):
        active, _ = registry.activate("vue", "bem", ["normalize-events"])
        assert [ext.key for ext in active.all()] == ["vue", "bem", "normalize-events"]
