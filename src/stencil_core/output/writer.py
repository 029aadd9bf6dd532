"""File output for rendered templates and their style sheets."""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from stencil_core.errors import ErrorFactory
from stencil_core.extensions.base import Extension
from stencil_core.logging import StencilLogger
from stencil_core.types import ExtensionType, LogLevel, StyleOutputFormat

from .types import Formatter, OutputOptions

logger = logging.getLogger(__name__)


def _is_framework(extension: Extension | None) -> bool:
    if extension is None:
        return False
    return getattr(extension.metadata, "type", None) in (ExtensionType.FRAMEWORK, "framework")


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class FileOutputManager:
    """Writes a rendered template (and its styles) under an output directory.

    Files are written in worker threads so the event loop is never blocked.
    Writing happens after processing; a failure raises ``StencilError``
    (``OUTPUT_WRITE_FAILED``) and leaves the in-memory result untouched.
    """

    def __init__(
        self,
        formatter: Formatter | None = None,
        logger: StencilLogger | None = None,
        error_factory: ErrorFactory | None = None,
    ):
        """Initialize output manager.

        Args:
            formatter: Async source formatter, used when ``formatter_parser`` is set
            logger: Optional StencilLogger instance
            error_factory: Factory for converting write failures
        """
        self._formatter = formatter
        self._logger = logger
        self._error_factory = error_factory or ErrorFactory()

    def get_output_path(
        self,
        options: OutputOptions | dict[str, Any] | None,
        extension: Extension | None = None,
    ) -> Path:
        """Resolve the template file path for one extension.

        Framework extensions write to a subdirectory named after their key;
        anything else writes to the base directory.
        """
        if not isinstance(options, OutputOptions):
            options = OutputOptions.from_dict(options)
        base = Path(options.output_dir or "dist")
        output_dir = base / extension.metadata.key if _is_framework(extension) else base
        suffix = options.file_extension or getattr(extension, "file_extension", None) or ".html"
        return output_dir / f"{options.filename or 'untitled'}{suffix}"

    def get_style_path(
        self,
        options: OutputOptions,
        template_path: Path,
        style_format: StyleOutputFormat | str,
    ) -> Path:
        suffix = ".scss" if StyleOutputFormat(style_format) == StyleOutputFormat.SCSS else ".css"
        return template_path.parent / f"{options.filename or 'untitled'}{suffix}"

    async def write_outputs(
        self,
        output: str,
        options: OutputOptions | dict[str, Any] | None = None,
        extensions: Sequence[Extension] = (),
        styles: str = "",
        style_format: StyleOutputFormat | str = StyleOutputFormat.CSS,
    ) -> list[Path]:
        """Write the rendered output, once per framework extension.

        Without a framework extension the output is written once to the base
        directory. Every extension's ``on_output_write`` hook is applied in
        order to the (optionally formatted) output before writing. A style
        sheet is written next to each template unless the style format is
        inline or there are no styles.

        Args:
            output: Rendered template text
            options: Output options
            extensions: Active extensions
            styles: Style sheet text
            style_format: Format of ``styles``

        Returns:
            Paths written, in order

        Raises:
            StencilError: OUTPUT_WRITE_FAILED if a file cannot be written
        """
        if not isinstance(options, OutputOptions):
            options = OutputOptions.from_dict(options)
        targets = [ext for ext in extensions if _is_framework(ext)] or [None]
        write_styles = bool(styles) and StyleOutputFormat(style_format) != StyleOutputFormat.INLINE

        written: list[Path] = []
        for target in targets:
            path = self.get_output_path(options, target)
            final = await self._format(output, options)
            for extension in extensions:
                hook = getattr(extension, "on_output_write", None)
                if hook is not None:
                    final = hook(final, options)

            await self._write(path, final, target)
            written.append(path)

            if write_styles:
                style_path = self.get_style_path(options, path, style_format)
                await self._write(style_path, styles, target)
                written.append(style_path)

        return written

    async def write_result(
        self,
        result: Any,
        options: OutputOptions | dict[str, Any] | None = None,
        extensions: Sequence[Extension] = (),
        style_format: StyleOutputFormat | str = StyleOutputFormat.CSS,
    ) -> list[Path]:
        """Write a ``ProcessingResult``'s output and styles."""
        return await self.write_outputs(
            result.output,
            options=options,
            extensions=extensions,
            styles=result.styles,
            style_format=style_format,
        )

    async def _format(self, source: str, options: OutputOptions) -> str:
        if self._formatter is None or not options.formatter_parser:
            return source
        return await self._formatter(source, {"parser": options.formatter_parser})

    async def _write(self, path: Path, content: str, extension: Extension | None) -> None:
        try:
            await asyncio.to_thread(_write_file, path, content)
        except OSError as e:
            error = self._error_factory.from_exception(
                e,
                extension_key=extension.metadata.key if extension else None,
                stage="output",
            )
            if self._logger:
                self._logger._log(
                    LogLevel.ERROR, "output", error.message, {"path": str(path)}
                )
            raise error from e

        logger.debug(f"Wrote {len(content)} characters to {path}")
        if self._logger:
            self._logger._log(LogLevel.INFO, "output", f"Wrote {path}")
