"""Processing Pipeline - concept extraction, extension transforms and rendering."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from stencil_core.analyzer import TemplateAnalyzer
from stencil_core.concepts import ComponentConcept
from stencil_core.errors import (
    ErrorCollector,
    ErrorFactory,
    ProcessingIssue,
    StencilError,
    get_error_factory,
)
from stencil_core.extensions.types import (
    FrameworkOutputs,
    RenderContext,
    StyleContext,
    StylingOutput,
)
from stencil_core.logging import LogConfig, PipelineLogger, StencilLogger
from stencil_core.nodes import ComponentMetadata, TemplateEnvelope, TemplateNode, parse_nodes
from stencil_core.registry import ExtensionRegistry
from stencil_core.types import LogLevel, Severity, StyleOutputFormat
from stencil_core.validation import ConceptValidation, ConceptValidator

from .outcome import ExtensionFault, fold_utilities, invoke
from .performance import PerformanceTracker
from .types import ProcessingMetadata, ProcessingOptions, ProcessingResult

logger = logging.getLogger(__name__)

# (operation, concept field) in invocation order
FRAMEWORK_TRANSFORMS = (
    ("process_events", "events"),
    ("process_conditionals", "conditionals"),
    ("process_iterations", "iterations"),
    ("process_slots", "slots"),
    ("process_attributes", "attributes"),
)


class ProcessingPipeline:
    """
    Turn a template into framework output.

    Stage order (none skippable):
    1. Reset accounting, start timing
    2. Extract concepts
    3. Resolve active extensions
    4. Fold utility extensions over the concepts
       (then validate the concepts, when ``validate_concepts`` is set)
    5. Run the five framework transforms
    6. Run the styling transform
    7. Render with the framework extension
    8. Assemble metadata
    9. Return the envelope; ``process`` never raises
    """

    def __init__(
        self,
        registry: ExtensionRegistry,
        analyzer: TemplateAnalyzer | None = None,
        logger: StencilLogger | None = None,
        error_factory: ErrorFactory | None = None,
    ):
        """Initialize pipeline.

        Args:
            registry: Registry the active extensions are resolved from
            analyzer: Template analyzer (a default one if omitted)
            logger: Optional logger
            error_factory: Error factory (the shared default if omitted)
        """
        self._registry = registry
        self._analyzer = analyzer or TemplateAnalyzer(logger=logger)
        self._logger = logger
        self._error_factory = error_factory or get_error_factory()
        self._last_errors = ErrorCollector()
        self._last_tracker = PerformanceTracker()

    @property
    def registry(self) -> ExtensionRegistry:
        return self._registry

    def get_analyzer(self) -> TemplateAnalyzer:
        return self._analyzer

    def get_errors(self) -> ErrorCollector:
        """Collector of the most recent ``process`` call."""
        return self._last_errors

    def get_performance_tracker(self) -> PerformanceTracker:
        """Tracker of the most recent ``process`` call."""
        return self._last_tracker

    async def process(
        self,
        template: Any,
        options: ProcessingOptions | dict[str, Any] | None = None,
    ) -> ProcessingResult:
        """
        Process a template.

        Args:
            template: Node list, list of node mappings, TemplateEnvelope, or a
                mapping with ``nodes`` (and optional ``component``)
            options: Processing options (object or mapping)

        Returns:
            ProcessingResult; failures are reported in ``result.errors``
        """
        errors = ErrorCollector()
        tracker = PerformanceTracker()
        self._last_errors = errors
        self._last_tracker = tracker
        tracker.start()

        run_logger: PipelineLogger | None = None
        concepts = ComponentConcept()
        try:
            options = self._coerce_options(options)

            # Structural errors stop here, before any extension runs
            try:
                nodes, component = self._normalize_input(template, options)
            except StencilError as e:
                self._record(errors, e.with_context(stage="structure"))
                return self._finish(errors, tracker, concepts, options, run_logger)

            run_logger = self._pipeline_logger(component, options)
            if run_logger:
                run_logger.started(options.framework, len(nodes))

            # Concept extraction
            tracker.start_extension("analyzer")
            self._analyzer.clear_errors()
            concepts = self._analyzer.extract_concepts(nodes, options.analyzer)
            errors.merge(self._analyzer.get_errors())
            tracker.end_extension("analyzer")
            tracker.increment_concept_count(concepts.total_count())

            # Active extensions; unknown keys are warnings
            active, missing = self._registry.activate(
                framework=options.framework,
                styling=options.styling,
                utilities=options.utilities,
            )
            for kind, key in missing:
                error = self._error_factory.create(
                    "EXTENSION_NOT_FOUND", extension_key=key, extension_type=kind.value
                )
                self._record(errors, error, severity=Severity.WARNING)

            # Utilities: left fold, faults skipped
            concepts, _ = fold_utilities(
                active.utilities,
                concepts,
                on_fault=lambda fault: self._record_fault(errors, fault, run_logger),
                timer=tracker,
            )

            # Concept validation, only when asked for
            validation: ConceptValidation | None = None
            if options.validate_concepts:
                validation = self._validate(concepts, options, errors, tracker, run_logger)

            # Framework transforms, each guarded on its own
            outputs = FrameworkOutputs()
            framework = active.framework
            if framework is not None:
                key = framework.metadata.key
                tracker.start_extension(key)
                for operation, concept_field in FRAMEWORK_TRANSFORMS:
                    transform = getattr(framework, operation)
                    outcome = invoke(key, operation, transform, getattr(concepts, concept_field))
                    if outcome.ok:
                        setattr(outputs, concept_field, list(outcome.value or []))
                    else:
                        self._record_fault(errors, outcome.fault, run_logger)
                tracker.end_extension(key)

            # Styling transform
            styling_output: StylingOutput | None = None
            styling = active.styling
            if styling is not None:
                key = styling.metadata.key
                tracker.start_extension(key)
                outcome = invoke(
                    key,
                    "process_styles",
                    styling.process_styles,
                    concepts.styling,
                    StyleContext(nodes=nodes, options=options.styles),
                )
                tracker.end_extension(key)
                if outcome.ok:
                    styling_output = outcome.value
                else:
                    self._record_fault(errors, outcome.fault, run_logger)

            # Render
            output = ""
            if framework is not None:
                key = framework.metadata.key
                context = RenderContext(
                    component=component,
                    options=options,
                    nodes=nodes,
                    outputs=outputs,
                    styling=styling_output,
                )
                tracker.start_extension(f"{key}:render")
                outcome = invoke(
                    key, "render_component", framework.render_component, concepts, context
                )
                tracker.end_extension(f"{key}:render")
                if outcome.ok:
                    output = outcome.value or ""
                else:
                    error = self._error_factory.create(
                        "RENDER_FAILED", extension_key=key, detail=str(outcome.fault.error)
                    )
                    self._record(errors, error.with_context(stage="render_component"))
                    if run_logger:
                        run_logger.stage("render").failed(key, outcome.fault.error)
            else:
                errors.add_warning(
                    "No framework extension available for rendering",
                    extension="pipeline",
                    context={"stage": "render"},
                )

            result = self._finish(errors, tracker, concepts, options, run_logger, active.keys)
            result.output = output
            if validation is not None:
                result.validation = validation
                result.metadata.validation_score = validation.score
            if styling_output:
                result.styles = styling_output.styles
                result.style_format = StyleOutputFormat(styling_output.format)
            return result

        except Exception as e:
            logger.exception("Unhandled error while processing template")
            error = self._error_factory.from_exception(e, stage="pipeline")
            self._record(errors, error)
            if run_logger:
                run_logger.failed(e)
            return ProcessingResult(
                output="",
                concepts=ComponentConcept(),
                metadata=ProcessingMetadata(),
                errors=errors,
                performance=tracker.get_metrics(),
            )

    def _finish(
        self,
        errors: ErrorCollector,
        tracker: PerformanceTracker,
        concepts: ComponentConcept,
        options: ProcessingOptions,
        run_logger: PipelineLogger | None,
        extensions_used: list[str] | None = None,
    ) -> ProcessingResult:
        counts = concepts.counts()
        metadata = ProcessingMetadata(
            extensions_used=list(extensions_used or []),
            concept_counts=counts,
            has_concepts={name: count > 0 for name, count in counts.items()},
            timestamp=datetime.now(UTC),
        )
        performance = tracker.get_metrics()

        if options.verbose:
            verbose_logger = run_logger or self._pipeline_logger(ComponentMetadata(), options)
            if verbose_logger:
                for issue in errors:
                    verbose_logger.issue(issue)
        if run_logger:
            run_logger.completed(
                performance.total_time_ms,
                errors.get_error_count(Severity.ERROR),
                errors.get_error_count(Severity.WARNING),
            )

        return ProcessingResult(
            output="",
            concepts=concepts,
            metadata=metadata,
            errors=errors,
            performance=performance,
        )

    def _validate(
        self,
        concepts: ComponentConcept,
        options: ProcessingOptions,
        errors: ErrorCollector,
        tracker: PerformanceTracker,
        run_logger: PipelineLogger | None,
    ) -> ConceptValidation | None:
        """Run the concept validator; a crash is recorded like an extension fault."""
        validation_options = options.validation
        if validation_options.framework is None:
            validation_options = replace(validation_options, framework=options.framework)

        tracker.start_extension("concept-validation")
        outcome = invoke(
            "concept-validator",
            "validate_component",
            ConceptValidator(errors).validate_component,
            concepts,
            validation_options,
        )
        tracker.end_extension("concept-validation")
        if outcome.ok:
            return outcome.value
        self._record_fault(errors, outcome.fault, run_logger)
        return None

    def _coerce_options(
        self, options: ProcessingOptions | dict[str, Any] | None
    ) -> ProcessingOptions:
        if isinstance(options, ProcessingOptions):
            return options
        return ProcessingOptions.from_dict(options)

    def _normalize_input(
        self, template: Any, options: ProcessingOptions
    ) -> tuple[list[TemplateNode], ComponentMetadata]:
        """Split the input into nodes and component metadata.

        Raises:
            StencilError: TEMPLATE_STRUCTURE_INVALID for any other shape
        """
        envelope_component: ComponentMetadata | None = None

        if isinstance(template, dict):
            try:
                template = TemplateEnvelope.model_validate(template)
            except ValidationError as e:
                raise self._error_factory.create(
                    "TEMPLATE_STRUCTURE_INVALID", detail=_first_error(e)
                ) from e

        if isinstance(template, TemplateEnvelope):
            envelope_component = template.component
            nodes = template.template_nodes()
        else:
            nodes = parse_nodes(template)

        component = options.component or envelope_component or ComponentMetadata()
        return nodes, component

    def _pipeline_logger(
        self, component: ComponentMetadata, options: ProcessingOptions
    ) -> PipelineLogger | None:
        if self._logger:
            return self._logger.pipeline(component.name)
        if options.verbose:
            return StencilLogger(LogConfig(level=LogLevel.DEBUG)).pipeline(component.name)
        return None

    def _record(
        self,
        errors: ErrorCollector,
        error: StencilError,
        severity: Severity = Severity.ERROR,
    ) -> None:
        errors.add_error(
            ProcessingIssue(
                message=error.message,
                node_id=error.node_id,
                extension=error.extension_key or error.stage,
                severity=severity,
                context={
                    "code": error.code,
                    "category": error.category.value,
                    "stage": error.stage,
                    "detail": error.detail,
                },
            )
        )

    def _record_fault(
        self,
        errors: ErrorCollector,
        fault: ExtensionFault,
        run_logger: PipelineLogger | None,
    ) -> None:
        error = self._error_factory.create(
            "EXTENSION_FAILED",
            extension_key=fault.extension_key,
            stage=fault.stage,
            detail=str(fault.error),
        )
        self._record(errors, error)
        logger.debug(f"{fault.message} ({type(fault.error).__name__})")
        if run_logger:
            run_logger.stage(fault.stage).failed(fault.extension_key, fault.error)


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else str(error)
