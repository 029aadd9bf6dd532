"""Append-only collector of issues raised while processing a template."""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

from stencil_core.types import Severity


@dataclass
class ProcessingIssue:
    """One error, warning or informational note.

    Attributes:
        message: Human-readable description
        node_id: Identity of the node the issue was found on, if any
        extension: Extension key or stage name that raised the issue
        severity: error | warning | info
        context: Free-form structured data (category, error code, ...)
    """

    message: str
    node_id: str | None = None
    extension: str | None = None
    severity: Severity = Severity.ERROR
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for reports."""
        return {
            "message": self.message,
            "node_id": self.node_id,
            "extension": self.extension,
            "severity": self.severity.value,
            "context": dict(self.context),
        }


class ErrorCollector:
    """Collects processing issues keyed by node identity and stage."""

    def __init__(self) -> None:
        self._issues: list[ProcessingIssue] = []

    def add_error(self, issue: ProcessingIssue) -> None:
        """Append a fully built issue."""
        self._issues.append(issue)

    def add_simple_error(
        self,
        message: str,
        node_id: str | None = None,
        extension: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Record an error-severity issue."""
        self._add(Severity.ERROR, message, node_id, extension, context)

    def add_warning(
        self,
        message: str,
        node_id: str | None = None,
        extension: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Record a warning-severity issue."""
        self._add(Severity.WARNING, message, node_id, extension, context)

    def add_info(
        self,
        message: str,
        node_id: str | None = None,
        extension: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Record an info-severity issue."""
        self._add(Severity.INFO, message, node_id, extension, context)

    def _add(
        self,
        severity: Severity,
        message: str,
        node_id: str | None,
        extension: str | None,
        context: dict[str, Any] | None,
    ) -> None:
        self._issues.append(
            ProcessingIssue(
                message=message,
                node_id=node_id,
                extension=extension,
                severity=severity,
                context=context or {},
            )
        )

    def get_errors(self) -> list[ProcessingIssue]:
        """All issues in insertion order (a copy)."""
        return list(self._issues)

    def get_errors_by_severity(self, severity: Severity | str) -> list[ProcessingIssue]:
        """Issues of one severity, in insertion order."""
        severity = Severity(severity)
        return [issue for issue in self._issues if issue.severity == severity]

    def has_errors(self) -> bool:
        return any(issue.severity == Severity.ERROR for issue in self._issues)

    def has_warnings(self) -> bool:
        return any(issue.severity == Severity.WARNING for issue in self._issues)

    def get_error_count(self, severity: Severity | str | None = None) -> int:
        """Count issues, optionally restricted to one severity."""
        if severity is None:
            return len(self._issues)
        return len(self.get_errors_by_severity(severity))

    def merge(self, other: "ErrorCollector") -> None:
        """Append every issue of another collector."""
        self._issues.extend(other.get_errors())

    def clear(self) -> None:
        self._issues.clear()

    def format_errors(self) -> str:
        """Human-readable report grouped by node identity.

        Issues without a node are grouped under "general".
        """
        if not self._issues:
            return "No errors found."

        grouped: OrderedDict[str, list[ProcessingIssue]] = OrderedDict()
        for issue in self._issues:
            grouped.setdefault(issue.node_id or "general", []).append(issue)

        lines: list[str] = []
        for node_id, issues in grouped.items():
            lines.append(f"Node {node_id}:")
            for issue in issues:
                source = f" ({issue.extension})" if issue.extension else ""
                lines.append(f"  [{issue.severity.value.upper()}]{source} {issue.message}")
        return "\n".join(lines)

    def to_list(self) -> list[dict[str, Any]]:
        return [issue.to_dict() for issue in self._issues]

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self):
        return iter(list(self._issues))
