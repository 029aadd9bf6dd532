"""Stencil error handling - structured errors and issue collection."""

from .collector import ErrorCollector, ProcessingIssue
from .errors import ErrorCategory, ErrorMatcher, ErrorTemplate, MatchResult, StencilError
from .factory import ErrorFactory, create_error, get_error_factory
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry

__all__ = [
    # Core error types
    "StencilError",
    "ErrorCategory",
    "ErrorTemplate",
    "MatchResult",
    # Registry and factory
    "ErrorRegistry",
    "ErrorFactory",
    "ErrorMatcherChain",
    "ErrorMatcher",
    # Issue collection
    "ErrorCollector",
    "ProcessingIssue",
    # Convenience functions
    "get_error_factory",
    "create_error",
]
