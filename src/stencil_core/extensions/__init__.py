"""Extension contract and built-in extensions."""

from .base import (
    FRAMEWORK_OPERATIONS,
    REQUIRED_OPERATIONS,
    STYLING_OPERATIONS,
    UTILITY_OPERATIONS,
    Extension,
    FrameworkExtension,
    StylingExtension,
    UtilityExtension,
)
from .framework import TemplateFrameworkExtension
from .types import (
    AttributeSyntax,
    BlockSyntax,
    ExtensionMetadata,
    FrameworkOutputs,
    RenderContext,
    StyleContext,
    StylingOutput,
)

__all__ = [
    # Contract
    "Extension",
    "FrameworkExtension",
    "StylingExtension",
    "UtilityExtension",
    "TemplateFrameworkExtension",
    "FRAMEWORK_OPERATIONS",
    "STYLING_OPERATIONS",
    "UTILITY_OPERATIONS",
    "REQUIRED_OPERATIONS",
    # Types
    "ExtensionMetadata",
    "AttributeSyntax",
    "BlockSyntax",
    "FrameworkOutputs",
    "StyleContext",
    "StylingOutput",
    "RenderContext",
]
