"""Property-based tests for configuration validation.

Tests env var resolution, deep merging, config validation, and defaults.
"""

import os
from unittest.mock import patch

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from stencil_core.config.loader import (
    VALID_SECTIONS,
    ConfigLoader,
    _resolve_env_vars_recursive,
    deep_merge,
    resolve_env_vars,
)
from stencil_core.errors import StencilError
from stencil_core.types import LogLevel, StyleOutputFormat

# =============================================================================
# Strategies for generating config data
# =============================================================================

# Valid env var names
valid_env_var_name = st.from_regex(r"^STENCIL_T_[A-Z0-9_]{1,20}$", fullmatch=True)

# Valid env var values
valid_env_var_value = st.from_regex(r"^[a-zA-Z0-9_\-./]{1,50}$", fullmatch=True)

# Valid config keys
valid_config_key = st.from_regex(r"^[a-z][a-z0-9_]{0,15}$", fullmatch=True)

# Nested mappings with string keys
nested_dicts = st.recursive(
    st.dictionaries(valid_config_key, st.integers(), max_size=4),
    lambda children: st.dictionaries(
        valid_config_key, st.one_of(st.integers(), children), max_size=4
    ),
    max_leaves=12,
)


def _without(var_name):
    return {k: v for k, v in os.environ.items() if k != var_name}


# =============================================================================
# Property Tests for Environment Variable Resolution
# =============================================================================


@pytest.mark.property
class TestEnvVarResolution:
    """Property tests for environment variable resolution."""

    @given(valid_env_var_name, valid_env_var_value)
    @settings(max_examples=50)
    def test_env_var_resolved_when_set(self, var_name, var_value):
        with patch.dict(os.environ, {var_name: var_value}):
            assert resolve_env_vars(f"${{{var_name}}}") == var_value

    @given(valid_env_var_name, valid_env_var_value, valid_env_var_value)
    @settings(max_examples=50)
    def test_value_wins_over_default(self, var_name, var_value, default):
        with patch.dict(os.environ, {var_name: var_value}):
            assert resolve_env_vars(f"${{{var_name}:-{default}}}") == var_value

    @given(valid_env_var_name, valid_env_var_value)
    @settings(max_examples=50)
    def test_default_used_when_unset(self, var_name, default):
        with patch.dict(os.environ, _without(var_name), clear=True):
            assert resolve_env_vars(f"${{{var_name}:-{default}}}") == default

    @given(valid_env_var_name)
    @settings(max_examples=30)
    def test_required_env_var_raises_when_unset(self, var_name):
        with patch.dict(os.environ, _without(var_name), clear=True):
            with pytest.raises(StencilError) as exc_info:
                resolve_env_vars(f"${{{var_name}}}")
            assert exc_info.value.code == "CONFIG_INVALID"

    @given(st.text(alphabet=st.characters(whitelist_categories=("L", "N")), min_size=1, max_size=50))
    @settings(max_examples=30)
    def test_string_without_env_vars_unchanged(self, text):
        assume("$" not in text)
        assert resolve_env_vars(text) == text


@pytest.mark.property
class TestRecursiveEnvVarResolution:
    """Property tests for recursive env var resolution in data structures."""

    @given(valid_env_var_name, valid_env_var_value)
    @settings(max_examples=30)
    def test_nested_dict_and_list(self, var_name, var_value):
        with patch.dict(os.environ, {var_name: var_value}):
            data = {"output": {"output_dir": f"${{{var_name}}}"}, "list": ["a", f"${{{var_name}}}"]}
            result = _resolve_env_vars_recursive(data)
            assert result["output"]["output_dir"] == var_value
            assert result["list"] == ["a", var_value]

    @given(st.integers(), st.booleans())
    @settings(max_examples=30)
    def test_non_string_values_unchanged(self, int_val, bool_val):
        data = {"int_val": int_val, "bool_val": bool_val, "none_val": None}
        assert _resolve_env_vars_recursive(data) == data


# =============================================================================
# Property Tests for Deep Merge
# =============================================================================


@pytest.mark.property
class TestDeepMerge:
    """Property tests for deep_merge."""

    @given(nested_dicts)
    @settings(max_examples=50)
    def test_empty_override_is_identity(self, base):
        assert deep_merge(base, {}) == base

    @given(nested_dicts, nested_dicts)
    @settings(max_examples=50)
    def test_override_keys_present(self, base, override):
        merged = deep_merge(base, override)
        assert set(merged) == set(base) | set(override)
        for key, value in override.items():
            if not isinstance(value, dict):
                assert merged[key] == value

    @given(nested_dicts, nested_dicts)
    @settings(max_examples=50)
    def test_inputs_not_mutated(self, base, override):
        base_before = repr(base)
        override_before = repr(override)
        deep_merge(base, override)
        assert repr(base) == base_before
        assert repr(override) == override_before


# =============================================================================
# Property Tests for Config Validation
# =============================================================================


@pytest.mark.property
class TestConfigValidation:
    """Property tests for configuration validation."""

    @given(st.integers(min_value=1, max_value=100000))
    @settings(max_examples=30)
    def test_positive_truncate_at_accepted(self, value):
        result = ConfigLoader().validate({"logging": {"options": {"truncate_at": value}}})
        assert result.is_valid

    @given(st.integers(max_value=0))
    @settings(max_examples=30)
    def test_non_positive_truncate_at_rejected(self, value):
        result = ConfigLoader().validate({"logging": {"options": {"truncate_at": value}}})
        assert [e.path for e in result.errors] == ["logging.options.truncate_at"]

    @given(st.sampled_from(list(StyleOutputFormat)), st.sampled_from(list(LogLevel)))
    def test_every_enum_value_accepted(self, output_format, level):
        data = {"styles": {"output_format": output_format.value}, "logging": {"level": level.value}}
        assert ConfigLoader().validate(data).is_valid

    @given(st.text(min_size=1, max_size=10))
    @settings(max_examples=30)
    def test_unknown_output_format_rejected(self, value):
        assume(value not in {f.value for f in StyleOutputFormat})
        result = ConfigLoader().validate({"styles": {"output_format": value}})
        assert [e.path for e in result.errors] == ["styles.output_format"]

    @given(valid_config_key)
    @settings(max_examples=30)
    def test_unknown_keys_generate_warnings(self, unknown_key):
        assume(unknown_key not in VALID_SECTIONS)
        result = ConfigLoader().validate({unknown_key: "some_value"})

        assert result.is_valid
        assert [w.path for w in result.warnings] == [unknown_key]


# =============================================================================
# Property Tests for Config Defaults
# =============================================================================


@pytest.mark.property
class TestConfigDefaults:
    """Property tests for configuration defaults."""

    def test_empty_config_uses_defaults(self):
        config = ConfigLoader().load_from_dict({})

        assert config.logging.level == LogLevel.INFO
        assert config.output.output_dir == "dist"
        assert config.output.write_files is False
        assert config.styles.output_format == StyleOutputFormat.CSS
        assert config.pipeline.framework is None
        assert config.analyzer.event_prefixes == ["on", "@", "v-on:", "on:"]

    @given(st.integers(min_value=1, max_value=1000), st.booleans())
    @settings(max_examples=30)
    def test_partial_config_preserves_other_defaults(self, truncate_at, show_context):
        config = ConfigLoader().load_from_dict(
            {"logging": {"options": {"truncate_at": truncate_at, "show_context": show_context}}}
        )

        assert config.logging.options.truncate_at == truncate_at
        assert config.logging.options.show_context is show_context
        assert config.logging.level == LogLevel.INFO
        assert config.logging.components.pipeline is True
        assert config.output.filename == "untitled"
