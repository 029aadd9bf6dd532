"""Types for the processing pipeline."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from stencil_core.analyzer import OPTION_ALIASES, AnalyzerOptions
from stencil_core.concepts import ComponentConcept
from stencil_core.errors import ErrorCollector
from stencil_core.nodes import ComponentMetadata
from stencil_core.styles import StyleOptions
from stencil_core.types import StyleOutputFormat
from stencil_core.validation import ConceptValidation, ValidationOptions

from .performance import PerformanceMetrics


@dataclass
class ProcessingOptions:
    """Options of one ``process`` call.

    Attributes:
        framework: Key of the framework extension to activate
        styling: Key of the styling extension to activate
        utilities: Keys of utility extensions, in invocation order
        component: Metadata passed to the framework's render context
        analyzer: Concept extraction options
        styles: Style engine options
        language: "javascript" or "typescript" (framework renderers)
        verbose: Surface collected issues on the diagnostic stream
        validate_concepts: Run the concept validator after the utility fold
        validation: Concept validator options (framework defaults to ``framework``)
    """

    framework: str | None = None
    styling: str | None = None
    utilities: list[str] = field(default_factory=list)
    component: ComponentMetadata | None = None
    analyzer: AnalyzerOptions = field(default_factory=AnalyzerOptions)
    styles: StyleOptions = field(default_factory=StyleOptions)
    language: str = "javascript"
    verbose: bool = False
    validate_concepts: bool = False
    validation: ValidationOptions = field(default_factory=ValidationOptions)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ProcessingOptions":
        """Build options from a mapping.

        Unknown keys land in ``extra``; analyzer flags may be given at the top
        level (``extractEvents``) or under ``analyzer``.
        """
        if not data:
            return cls()
        data = dict(data)
        component = data.pop("component", None)
        if isinstance(component, dict):
            component = ComponentMetadata(**component)

        analyzer_value = data.pop("analyzer", None)
        if isinstance(analyzer_value, AnalyzerOptions):
            analyzer_data = {
                name: getattr(analyzer_value, name)
                for name in AnalyzerOptions.__dataclass_fields__
            }
        else:
            analyzer_data = dict(analyzer_value or {})
        styles_data = data.pop("styles", None)
        validation_data = data.pop("validation", None)

        kwargs: dict[str, Any] = {}
        for name in ("framework", "styling", "language", "verbose"):
            if name in data:
                kwargs[name] = data.pop(name)
        for key in ("validate_concepts", "validateConcepts"):
            if key in data:
                kwargs["validate_concepts"] = bool(data.pop(key))
        if "utilities" in data:
            kwargs["utilities"] = list(data.pop("utilities") or [])

        for key in list(data):
            if key in AnalyzerOptions.__dataclass_fields__ or key in OPTION_ALIASES:
                analyzer_data[key] = data.pop(key)

        return cls(
            component=component,
            analyzer=AnalyzerOptions.from_dict(analyzer_data),
            styles=StyleOptions.from_dict(styles_data)
            if not isinstance(styles_data, StyleOptions)
            else styles_data,
            validation=validation_data
            if isinstance(validation_data, ValidationOptions)
            else ValidationOptions.from_dict(validation_data),
            extra=data,
            **kwargs,
        )


@dataclass
class ProcessingMetadata:
    """What a ``process`` call used and found.

    Attributes:
        extensions_used: framework, then styling, then utilities (keys)
        concept_counts: Occurrences per concept category
        has_concepts: Presence flag per concept category
        timestamp: When processing finished
        validation_score: Concept validation score, when validation ran
    """

    extensions_used: list[str] = field(default_factory=list)
    concept_counts: dict[str, int] = field(default_factory=dict)
    has_concepts: dict[str, bool] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    validation_score: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "extensions_used": list(self.extensions_used),
            "concept_counts": dict(self.concept_counts),
            "has_concepts": dict(self.has_concepts),
            "timestamp": self.timestamp.isoformat(),
            "validation_score": self.validation_score,
        }


@dataclass
class ProcessingResult:
    """Result envelope of ``ProcessingPipeline.process``.

    Always returned, never raised: inspect ``errors`` to decide whether the
    output is usable.
    """

    output: str = ""
    concepts: ComponentConcept = field(default_factory=ComponentConcept)
    metadata: ProcessingMetadata = field(default_factory=ProcessingMetadata)
    errors: ErrorCollector = field(default_factory=ErrorCollector)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    styles: str = ""
    style_format: StyleOutputFormat | None = None
    validation: ConceptValidation | None = None

    @property
    def success(self) -> bool:
        return not self.errors.has_errors()

    def to_dict(self) -> dict[str, Any]:
        """Serialize for reports and JSON output."""
        return {
            "output": self.output,
            "styles": self.styles,
            "style_format": self.style_format.value if self.style_format else None,
            "concepts": self.concepts.to_dict(),
            "metadata": self.metadata.to_dict(),
            "errors": self.errors.to_list(),
            "performance": self.performance.to_dict(),
            "validation": self.validation.to_dict() if self.validation else None,
        }
