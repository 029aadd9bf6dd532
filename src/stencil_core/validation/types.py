"""Concept validation types."""

from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import Any

from stencil_core.concepts import ComponentConcept
from stencil_core.types import Severity

STAGE = "concept-validator"

# camelCase spellings accepted by from_dict
OPTION_ALIASES = {
    "checkAccessibility": "check_accessibility",
    "checkPerformance": "check_performance",
    "checkBestPractices": "check_best_practices",
    "crossConcept": "cross_concept",
    "customRules": "custom_rules",
}


@dataclass
class ConceptWarning:
    """A problem found in a concept.

    Attributes:
        severity: ERROR lowers ``is_valid``; WARNING and INFO only the score
        message: Human-readable description
        node_id: Node the concept came from
        suggestion: How to fix it, if there is an obvious way
    """

    severity: Severity
    message: str
    node_id: str | None = None
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


@dataclass
class ConceptSuggestion:
    """Advice that does not affect the score."""

    kind: str  # "best-practice" | "performance" | "accessibility"
    message: str
    target: str = "component"
    priority: int = 2


@dataclass
class ConceptValidation:
    """Outcome of validating one component's concepts.

    ``score`` is the lowest category score, clamped to ``[0, 1]``.
    """

    is_valid: bool = True
    warnings: list[ConceptWarning] = field(default_factory=list)
    suggestions: list[ConceptSuggestion] = field(default_factory=list)
    score: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "score": self.score,
            "warnings": [warning.to_dict() for warning in self.warnings],
            "suggestions": [asdict(suggestion) for suggestion in self.suggestions],
        }


ValidationRule = Callable[[ComponentConcept, "ValidationOptions"], list[ConceptWarning]]


@dataclass
class ValidationOptions:
    """What the concept validator checks.

    Attributes:
        framework: Target framework key; enables its compatibility checks
        check_accessibility: Suggest keyboard and ARIA improvements
        check_performance: Suggest delegation, keys and external CSS
        check_best_practices: Suggest simpler class lists and styles
        cross_concept: Check events, attributes and styling against each other
        custom_rules: Extra callables returning warnings for a component
    """

    framework: str | None = None
    check_accessibility: bool = False
    check_performance: bool = False
    check_best_practices: bool = False
    cross_concept: bool = True
    custom_rules: list[ValidationRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ValidationOptions":
        """Build options from snake_case or camelCase keys."""
        if not data:
            return cls()
        known = set(cls.__dataclass_fields__)
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = OPTION_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = list(value) if name == "custom_rules" else value
        return cls(**kwargs)
