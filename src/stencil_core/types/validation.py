"""Shared validation types for stencil."""

from dataclasses import dataclass, field


@dataclass
class ValidationIssue:
    """Single validation issue (error or warning).

    Used by:
    - ConfigLoader (config validation)
    - ExtensionRegistry (extension contract validation)
    """

    path: str  # e.g., "metadata.key" or "output.dir"
    message: str  # Human-readable description
    severity: str = "error"  # "error" | "warning"

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


@dataclass
class ValidationResult:
    """Result of validation (config or extension registration).

    Used by:
    - ConfigLoader.validate()
    - ExtensionRegistry.register_*()
    """

    is_valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Ensure is_valid is False if there are errors."""
        if self.errors:
            self.is_valid = False

    def add_error(self, path: str, message: str) -> None:
        """Record an error and mark the result invalid."""
        self.errors.append(ValidationIssue(path=path, message=message))
        self.is_valid = False

    def add_warning(self, path: str, message: str) -> None:
        """Record a warning."""
        self.warnings.append(ValidationIssue(path=path, message=message, severity="warning"))

    @property
    def error_messages(self) -> list[str]:
        """Plain error messages, in the order they were recorded."""
        return [issue.message for issue in self.errors]

    @property
    def warning_messages(self) -> list[str]:
        """Plain warning messages, in the order they were recorded."""
        return [issue.message for issue in self.warnings]
