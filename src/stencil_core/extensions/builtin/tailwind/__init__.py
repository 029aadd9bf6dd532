"""Tailwind styling extension."""

from .css import CssGenerator, class_selector
from .extension import TailwindExtension, convert_css_to_tailwind, node_classes
from .parser import ParsedUtility, UtilityParser, UtilityValidation
from .tokens import TailwindTokens

__all__ = [
    "TailwindExtension",
    "TailwindTokens",
    "UtilityParser",
    "ParsedUtility",
    "UtilityValidation",
    "CssGenerator",
    "class_selector",
    "convert_css_to_tailwind",
    "node_classes",
]
