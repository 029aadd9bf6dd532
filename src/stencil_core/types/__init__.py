"""Shared types for stencil."""

from .enums import (
    ExtensionType,
    FrameworkSyntax,
    LogFormat,
    LogLevel,
    NodeType,
    Severity,
    StyleOutputFormat,
    StylingApproach,
)
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "Severity",
    "NodeType",
    "ExtensionType",
    "FrameworkSyntax",
    "StylingApproach",
    "StyleOutputFormat",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
