"""Stencil Application - wires configuration, logging, registry and pipeline.

This is the main entry point for embedding the engine: it loads the
configuration, builds the logger and error factory, registers the built-in
extensions and exposes ``render`` / ``render_file``.
"""

import asyncio
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, TextIO

import yaml

from stencil_core.analyzer import TemplateAnalyzer
from stencil_core.config import ConfigLoader, EngineConfig, deep_merge
from stencil_core.errors import ErrorFactory, ErrorRegistry, create_error
from stencil_core.extensions.builtin import builtin_extensions
from stencil_core.logging import LogConfig, StencilLogger
from stencil_core.output import FileOutputManager, Formatter, OutputOptions
from stencil_core.pipeline import ProcessingOptions, ProcessingPipeline, ProcessingResult
from stencil_core.registry import ExtensionRegistry
from stencil_core.types import LogLevel, ValidationResult

# Render options that configure file output rather than processing
OUTPUT_OPTION_KEYS = {
    "output_dir": "output_dir",
    "outputDir": "output_dir",
    "filename": "filename",
    "file_extension": "file_extension",
    "fileExtension": "file_extension",
    "formatter_parser": "formatter_parser",
    "prettierParser": "formatter_parser",
}
WRITE_OPTION_KEYS = ("write_files", "write_output_file", "writeOutputFile")


class StencilApplication:
    """
    Stencil Application orchestrator.

    Initialization sequence:

    1. Config loading
    2. Logger setup
    3. Error registry and factory
    4. Extension registry (built-in extensions)
    5. Template analyzer and processing pipeline
    6. File output manager
    """

    def __init__(
        self,
        config_path: str | Path | None = None,
        log_output: TextIO | None = None,
        formatter: Formatter | None = None,
        register_builtins: bool = True,
    ):
        """Initialize application.

        Args:
            config_path: Path to config file (optional)
            log_output: Output stream for logs (default: sys.stderr)
            formatter: Async source formatter used when writing files
            register_builtins: Register the built-in extensions
        """
        self._config_path = config_path
        self._log_output = log_output or sys.stderr
        self._formatter = formatter
        self._register_builtins = register_builtins
        self._initialized = False

        # Components (initialized in initialize())
        self.config_loader: ConfigLoader | None = None
        self.config: EngineConfig | None = None
        self.logger: StencilLogger | None = None
        self.error_registry: ErrorRegistry | None = None
        self.error_factory: ErrorFactory | None = None
        self.registry: ExtensionRegistry | None = None
        self.analyzer: TemplateAnalyzer | None = None
        self.pipeline: ProcessingPipeline | None = None
        self.output_manager: FileOutputManager | None = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Initialize all components. Safe to call more than once."""
        if self._initialized:
            return

        # 1. Config
        self.config_loader = ConfigLoader()
        self.config = self.config_loader.load(self._config_path)

        # 2. Logger
        logging_config = self.config.logging
        log_config = LogConfig(
            level=logging_config.level,
            format=logging_config.format,
            show_context=logging_config.options.show_context,
            truncate_at=logging_config.options.truncate_at,
            components=asdict(logging_config.components),
            output=self._log_output,
        )
        self.logger = StencilLogger(log_config)

        # 3. Error Registry & Factory
        self.error_registry = ErrorRegistry()
        self.error_factory = ErrorFactory(self.error_registry)

        # 4. Extension Registry
        self.registry = ExtensionRegistry(logger=self.logger)
        if self._register_builtins:
            for extension in builtin_extensions():
                result = self.registry.register(extension)
                if not result.is_valid:
                    raise create_error(
                        "INTERNAL_ERROR",
                        detail=f"Built-in extension rejected: {'; '.join(result.error_messages)}",
                    )

        # 5. Analyzer & Pipeline
        self.analyzer = TemplateAnalyzer(logger=self.logger)
        self.pipeline = ProcessingPipeline(
            self.registry,
            analyzer=self.analyzer,
            logger=self.logger,
            error_factory=self.error_factory,
        )

        # 6. Output
        self.output_manager = FileOutputManager(
            formatter=self._formatter,
            logger=self.logger,
            error_factory=self.error_factory,
        )

        self._initialized = True
        self.logger._log(
            LogLevel.INFO,
            "pipeline",
            "Stencil initialized",
            {
                "frameworks": self.registry.get_available_frameworks(),
                "styling": self.registry.get_available_styling(),
                "utilities": self.registry.get_available_utilities(),
            },
        )

    def register_extension(self, extension: Any) -> ValidationResult:
        """Register an additional extension."""
        self.initialize()
        return self.registry.register(extension)

    def build_options(self, **options: Any) -> tuple[ProcessingOptions, OutputOptions, bool]:
        """Merge configured defaults with per-call options.

        Returns:
            (processing options, output options, whether to write files)
        """
        self.initialize()
        config = self.config

        output_data = {
            "output_dir": config.output.output_dir,
            "filename": config.output.filename,
            "file_extension": config.output.file_extension,
            "formatter_parser": config.output.formatter_parser,
        }
        write_files = config.output.write_files
        processing_data: dict[str, Any] = {}
        for key, value in options.items():
            if key in OUTPUT_OPTION_KEYS:
                output_data[OUTPUT_OPTION_KEYS[key]] = value
            elif key in WRITE_OPTION_KEYS:
                write_files = bool(value)
            else:
                processing_data[key] = value

        defaults = {
            "framework": config.pipeline.framework,
            "styling": config.pipeline.styling,
            "utilities": list(config.pipeline.utilities),
            "language": config.pipeline.language,
            "verbose": config.pipeline.verbose,
            "validate_concepts": config.pipeline.validate_concepts,
            "analyzer": asdict(config.analyzer),
            "styles": {"output_format": config.styles.output_format},
        }
        merged = deep_merge(defaults, processing_data)
        return (
            ProcessingOptions.from_dict(merged),
            OutputOptions.from_dict(output_data),
            write_files,
        )

    async def render(self, template: Any, **options: Any) -> ProcessingResult:
        """Process a template and optionally write the result to disk.

        Args:
            template: Anything ``ProcessingPipeline.process`` accepts
            **options: Processing options (``framework``, ``styling``,
                ``utilities``, ``component``, analyzer flags, ...) plus output
                options (``output_dir``, ``filename``, ``file_extension``,
                ``write_files``)

        Returns:
            ProcessingResult

        Raises:
            StencilError: OUTPUT_WRITE_FAILED when writing is requested and fails
        """
        processing_options, output_options, write_files = self.build_options(**options)
        result = await self.pipeline.process(template, processing_options)

        if write_files and result.success:
            active, _ = self.registry.activate(
                processing_options.framework,
                processing_options.styling,
                processing_options.utilities,
            )
            await self.output_manager.write_result(
                result,
                options=output_options,
                extensions=active.all(),
                style_format=result.style_format or processing_options.styles.output_format,
            )
        return result

    async def render_file(self, path: str | Path, **options: Any) -> ProcessingResult:
        """Load a JSON or YAML template file and render it.

        The file stem becomes the default output filename.
        """
        path = Path(path)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise create_error(
                "TEMPLATE_STRUCTURE_INVALID",
                detail=f"Template file not found: {path}",
            ) from e
        try:
            template = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise create_error(
                "TEMPLATE_STRUCTURE_INVALID",
                detail=f"Template file is not valid JSON or YAML: {e}",
            ) from e

        options.setdefault("filename", path.stem)
        return await self.render(template, **options)
