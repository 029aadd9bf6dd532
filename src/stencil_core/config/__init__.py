"""Stencil configuration - config loading and models."""

from .loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    ConfigLoader,
    deep_merge,
    get_config_loader,
    load_config,
    resolve_env_vars,
)
from .models import (
    AnalyzerConfig,
    EngineConfig,
    LoggingComponentsConfig,
    LoggingConfig,
    LoggingOptionsConfig,
    OutputConfig,
    PipelineConfig,
    StylesConfig,
)

__all__ = [
    # Config models
    "EngineConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    "LoggingOptionsConfig",
    "OutputConfig",
    "StylesConfig",
    "AnalyzerConfig",
    "PipelineConfig",
    # Loader
    "ConfigLoader",
    "get_config_loader",
    "load_config",
    "resolve_env_vars",
    "deep_merge",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_FILE",
]
