"""Extension registry."""

from .registry import KEY_PATTERN, VERSION_PATTERN, ExtensionRegistry
from .types import ActiveExtensions

__all__ = [
    "ExtensionRegistry",
    "ActiveExtensions",
    "KEY_PATTERN",
    "VERSION_PATTERN",
]
