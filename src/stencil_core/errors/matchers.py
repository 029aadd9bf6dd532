"""Error matchers for converting exceptions to StencilErrors."""

from typing import Any

import yaml

from .errors import ErrorMatcher, MatchResult


class OSErrorMatcher(ErrorMatcher):
    """Matches file system failures raised while writing output."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, OSError)

    def extract(self, error: Exception) -> MatchResult:
        context: dict[str, Any] = {"detail": str(error)}
        filename = getattr(error, "filename", None)
        context["path"] = filename if filename else "unknown"
        return MatchResult(code="OUTPUT_WRITE_FAILED", context=context)


class YAMLErrorMatcher(ErrorMatcher):
    """Matches YAML parse errors from configuration files."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, yaml.YAMLError)

    def extract(self, error: Exception) -> MatchResult:
        return MatchResult(code="CONFIG_INVALID", context={"detail": str(error)})


class GenericErrorMatcher(ErrorMatcher):
    """Fallback matcher for any exception."""

    def matches(self, error: Exception) -> bool:
        """Always matches."""
        return True

    def extract(self, error: Exception) -> MatchResult:
        """Extract generic error info.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with INTERNAL_ERROR code
        """
        return MatchResult(
            code="INTERNAL_ERROR",
            context={"detail": str(error), "error_type": type(error).__name__},
        )


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self) -> None:
        """Initialize matcher chain with built-in matchers."""
        self.matchers: list[ErrorMatcher] = []
        self._load_builtin_matchers()

    def match(self, error: Exception) -> MatchResult:
        """Find first matching matcher and extract result.

        Args:
            error: Exception to match

        Returns:
            MatchResult from first matching matcher
        """
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)

        return MatchResult(code="INTERNAL_ERROR", context={"detail": str(error)})

    def _load_builtin_matchers(self) -> None:
        """Load built-in matchers in priority order."""
        self.matchers = [
            OSErrorMatcher(),
            YAMLErrorMatcher(),
            GenericErrorMatcher(),  # Fallback - must be last
        ]
