"""Stencil configuration loader."""

import os
import re
import typing
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from stencil_core.errors import create_error
from stencil_core.types import (
    LogFormat,
    LogLevel,
    StyleOutputFormat,
    ValidationIssue,
    ValidationResult,
)

from .models import EngineConfig

CONFIG_ENV_VAR = "STENCIL_CONFIG_PATH"
DEFAULT_CONFIG_FILE = "stencil.yaml"

VALID_SECTIONS = {"logging", "output", "styles", "analyzer", "pipeline"}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        StencilError: CONFIG_INVALID if a required var is not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary (inputs untouched)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def _enum_issue(
    path: str, value: Any, enum_type: type[Enum], errors: list[ValidationIssue]
) -> None:
    allowed = [member.value for member in enum_type]
    if value not in allowed:
        errors.append(
            ValidationIssue(
                path=path,
                message=f"{path.rsplit('.', 1)[-1]} must be one of: {', '.join(allowed)}",
                severity="error",
            )
        )


class ConfigLoader:
    """Load and validate stencil configuration."""

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional StencilLogger instance
        """
        self._config: EngineConfig | None = None
        self._config_path: Path | None = None
        self._logger = logger

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> EngineConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. STENCIL_CONFIG_PATH environment variable
        2. ./stencil.yaml
        3. If use_defaults=True and no file found, use default configuration

        An explicit path that does not exist is always an error.

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found

        Returns:
            Loaded EngineConfig instance

        Raises:
            StencilError: CONFIG_NOT_FOUND or CONFIG_INVALID
        """
        explicit = path is not None
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults and not explicit:
                if self._logger:
                    self._logger._log(
                        LogLevel.INFO, "pipeline", "No config file found, using defaults"
                    )
                return self.load_defaults()
            raise create_error("CONFIG_NOT_FOUND", path=str(config_path))

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration root must be a mapping",
            )

        data = _resolve_env_vars_recursive(data)
        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> EngineConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(
        self, data: dict[str, Any], config_path: Path | None = None
    ) -> EngineConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded EngineConfig instance

        Raises:
            StencilError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.is_valid:
            error_messages = [f"- {issue}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        try:
            config = self._dict_to_config(data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Failed to parse configuration: {e}",
            ) from e

        self._config = config
        self._config_path = config_path

        if self._logger:
            self._logger._log(LogLevel.DEBUG, "pipeline", "Configuration loaded")

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Unknown keys are warnings; wrong types and unknown enum values are
        errors. Every issue carries a dotted path.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key in data:
            if key not in VALID_SECTIONS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        for section in VALID_SECTIONS & set(data):
            if data[section] is not None and not isinstance(data[section], dict):
                errors.append(
                    ValidationIssue(
                        path=section,
                        message=f"{section} must be a dictionary",
                        severity="error",
                    )
                )

        logging_data = data.get("logging")
        if isinstance(logging_data, dict):
            if "level" in logging_data:
                _enum_issue("logging.level", logging_data["level"], LogLevel, errors)
            if "format" in logging_data:
                _enum_issue("logging.format", logging_data["format"], LogFormat, errors)
            options = logging_data.get("options")
            if isinstance(options, dict) and "truncate_at" in options:
                value = options["truncate_at"]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(
                        ValidationIssue(
                            path="logging.options.truncate_at",
                            message="truncate_at must be a positive integer",
                            severity="error",
                        )
                    )

        styles_data = data.get("styles")
        if isinstance(styles_data, dict) and "output_format" in styles_data:
            _enum_issue(
                "styles.output_format", styles_data["output_format"], StyleOutputFormat, errors
            )

        pipeline_data = data.get("pipeline")
        if isinstance(pipeline_data, dict):
            utilities = pipeline_data.get("utilities")
            if utilities is not None and not isinstance(utilities, list):
                errors.append(
                    ValidationIssue(
                        path="pipeline.utilities",
                        message="utilities must be a list of extension keys",
                        severity="error",
                    )
                )
            language = pipeline_data.get("language")
            if language is not None and language not in ("javascript", "typescript"):
                errors.append(
                    ValidationIssue(
                        path="pipeline.language",
                        message="language must be one of: javascript, typescript",
                        severity="error",
                    )
                )

        analyzer_data = data.get("analyzer")
        if isinstance(analyzer_data, dict):
            for key in ("event_prefixes", "ignore_attributes"):
                if key in analyzer_data and not isinstance(analyzer_data[key], list):
                    errors.append(
                        ValidationIssue(
                            path=f"analyzer.{key}",
                            message=f"{key} must be a list of strings",
                            severity="error",
                        )
                    )

        return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    def get(self) -> EngineConfig:
        """Get current configuration.

        Raises:
            StencilError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def reload(self) -> EngineConfig:
        """Reload configuration from the file it was loaded from."""
        if self._config_path is None:
            raise create_error("CONFIG_INVALID", detail="No config path set, cannot reload")
        return self.load(self._config_path)

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)
        return Path(DEFAULT_CONFIG_FILE)

    def _dict_to_config(self, data: dict[str, Any]) -> EngineConfig:
        kwargs: dict[str, Any] = {}

        for f in fields(EngineConfig):
            if data.get(f.name) is not None:
                kwargs[f.name] = self._convert_field(f.type, data[f.name])

        return EngineConfig(**kwargs)

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert a raw value to the dataclass field type it is assigned to."""
        if value is None:
            return None

        origin = typing.get_origin(field_type)

        if origin is list:
            if not isinstance(value, list):
                return value
            args = typing.get_args(field_type)
            if args:
                return [self._convert_field(args[0], item) for item in value]
            return value

        if hasattr(field_type, "__dataclass_fields__"):
            if isinstance(value, dict):
                kwargs = {}
                for f in fields(field_type):
                    if f.name in value:
                        kwargs[f.name] = self._convert_field(f.type, value[f.name])
                return field_type(**kwargs)
            return value

        if isinstance(field_type, type) and issubclass(field_type, Enum):
            if isinstance(value, str):
                return field_type(value)
            return value

        return value


_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton."""
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Convenience function to load config."""
    return get_config_loader().load(path)
