"""Template analyzer - semantic extraction of component concepts."""

from .analyzer import TemplateAnalyzer
from .events import EventExtractor, handler_callee, parse_handler_parameters
from .options import (
    DEFAULT_EVENT_PREFIXES,
    DEFAULT_IGNORE_ATTRIBUTES,
    OPTION_ALIASES,
    AnalyzerOptions,
)
from .styling import StylingExtractor, parse_inline_style

__all__ = [
    "TemplateAnalyzer",
    "AnalyzerOptions",
    "DEFAULT_EVENT_PREFIXES",
    "DEFAULT_IGNORE_ATTRIBUTES",
    "OPTION_ALIASES",
    "EventExtractor",
    "StylingExtractor",
    "handler_callee",
    "parse_handler_parameters",
    "parse_inline_style",
]
