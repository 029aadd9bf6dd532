"""Stencil configuration data models."""

from dataclasses import dataclass, field

from stencil_core.analyzer import DEFAULT_EVENT_PREFIXES, DEFAULT_IGNORE_ATTRIBUTES
from stencil_core.types import LogFormat, LogLevel, StyleOutputFormat


@dataclass
class LoggingComponentsConfig:
    """Logging components configuration."""

    pipeline: bool = True
    analyzer: bool = True
    registry: bool = True
    styles: bool = True
    output: bool = True


@dataclass
class LoggingOptionsConfig:
    """Logging options configuration."""

    show_context: bool = True
    truncate_at: int = 200


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)
    options: LoggingOptionsConfig = field(default_factory=LoggingOptionsConfig)


@dataclass
class OutputConfig:
    """File output configuration."""

    write_files: bool = False
    output_dir: str = "dist"
    filename: str = "untitled"
    file_extension: str | None = None
    formatter_parser: str | None = None


@dataclass
class StylesConfig:
    """Style engine configuration."""

    output_format: StyleOutputFormat = StyleOutputFormat.CSS


@dataclass
class AnalyzerConfig:
    """Default concept extraction switches."""

    extract_events: bool = True
    extract_styling: bool = True
    extract_conditionals: bool = True
    extract_iterations: bool = True
    extract_slots: bool = True
    extract_attributes: bool = True
    event_prefixes: list[str] = field(default_factory=lambda: list(DEFAULT_EVENT_PREFIXES))
    ignore_attributes: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_ATTRIBUTES))


@dataclass
class PipelineConfig:
    """Default extension selection for ``render``."""

    framework: str | None = None
    styling: str | None = None
    utilities: list[str] = field(default_factory=list)
    language: str = "javascript"
    verbose: bool = False
    validate_concepts: bool = False


@dataclass
class EngineConfig:
    """Root configuration object."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    styles: StylesConfig = field(default_factory=StylesConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
