"""Stencil error types and error templates."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    STRUCTURE = "STRUCTURE"
    EXTRACTION = "EXTRACTION"
    EXTENSION = "EXTENSION"
    RENDER = "RENDER"
    STYLE = "STYLE"
    OUTPUT = "OUTPUT"
    CONFIG = "CONFIG"
    SYSTEM = "SYSTEM"


@dataclass
class StencilError(Exception):
    """Structured error with context. Base exception for all stencil errors."""

    # Identity
    code: str  # e.g., "EXTENSION_FAILED"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Context
    node_id: str | None = None  # Which template node
    extension_key: str | None = None  # Which extension
    stage: str | None = None  # Which pipeline stage

    # Error chain (max depth 3)
    cause: "StencilError | None" = None

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for reports and JSON logs.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "node_id": self.node_id,
            "extension_key": self.extension_key,
            "stage": self.stage,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }

    def with_context(
        self,
        node_id: str | None = None,
        extension_key: str | None = None,
        stage: str | None = None,
    ) -> "StencilError":
        """Return copy with additional context.

        Args:
            node_id: Optional node identifier
            extension_key: Optional extension key
            stage: Optional pipeline stage

        Returns:
            New StencilError instance with updated context
        """
        return StencilError(
            code=self.code,
            category=self.category,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
            node_id=node_id or self.node_id,
            extension_key=extension_key or self.extension_key,
            stage=stage or self.stage,
            cause=self.cause,
            timestamp=self.timestamp,
        )


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Extension '{extension_key}' not found"
    detail_template: str | None = None
    suggestion_template: str | None = None


@dataclass
class MatchResult:
    """Result of matching an exception."""

    code: str
    context: dict[str, Any]


class ErrorMatcher(ABC):
    """Base class for exception matchers."""

    @abstractmethod
    def matches(self, error: Exception) -> bool:
        """Check if this matcher handles the error.

        Args:
            error: Exception to check

        Returns:
            True if this matcher can handle the error
        """

    @abstractmethod
    def extract(self, error: Exception) -> MatchResult:
        """Extract error code and context from the exception.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with error code and context
        """
