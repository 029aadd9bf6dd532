"""Output options."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

# (source, options) -> formatted source
Formatter = Callable[[str, dict[str, Any]], Awaitable[str]]


@dataclass
class OutputOptions:
    """Where and how rendered files are written.

    Attributes:
        output_dir: Base directory; framework output goes to ``<output_dir>/<key>``
        filename: File stem shared by the template and its style sheet
        file_extension: Forces the template file extension
        formatter_parser: Parser name handed to the formatter; no formatting when unset
    """

    output_dir: str = "dist"
    filename: str = "untitled"
    file_extension: str | None = None
    formatter_parser: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "OutputOptions":
        if not data:
            return cls()
        aliases = {
            "outputDir": "output_dir",
            "fileExtension": "file_extension",
            "formatterParser": "formatter_parser",
            "prettierParser": "formatter_parser",
        }
        kwargs = {}
        for key, value in data.items():
            name = aliases.get(key, key)
            if name in cls.__dataclass_fields__ and value is not None:
                kwargs[name] = value
        return cls(**kwargs)
