"""Style Processing Engine."""

from .emit import generate_css, generate_inline, generate_scss, inline_declarations
from .plugins import StylePlugin
from .processor import StyleProcessor, resolve_selector
from .types import (
    StyleDefinition,
    StyleOptions,
    StyleRegistry,
    camel_to_kebab,
    is_media_key,
    is_pseudo_key,
    media_query,
)

__all__ = [
    "StyleProcessor",
    "StylePlugin",
    "StyleRegistry",
    "StyleOptions",
    "StyleDefinition",
    "resolve_selector",
    "camel_to_kebab",
    "is_media_key",
    "is_pseudo_key",
    "media_query",
    "generate_css",
    "generate_scss",
    "generate_inline",
    "inline_declarations",
]
