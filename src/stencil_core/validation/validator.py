"""Concept validator - quality checks and a score for extracted concepts.

Each concept category is scored on its own, starting at 1.0 and losing a
fixed penalty per problem. The component score is the lowest category
score. Warnings never stop processing; only ERROR warnings make the
component invalid.
"""

import logging
import re
from collections.abc import Iterable

from stencil_core.concepts import (
    Attribute,
    ComponentConcept,
    Conditional,
    Event,
    Iteration,
    Slot,
    StylingConcept,
)
from stencil_core.errors import ErrorCollector
from stencil_core.extensions.builtin.react import MODIFIER_CODE
from stencil_core.normalization import COMMON_EVENTS, SVELTE_MODIFIER_ALIASES
from stencil_core.normalization.events import SVELTE_MODIFIERS, VUE_MODIFIERS
from stencil_core.styles import camel_to_kebab
from stencil_core.types import Severity

from .types import (
    STAGE,
    ConceptSuggestion,
    ConceptValidation,
    ConceptWarning,
    ValidationOptions,
)

logger = logging.getLogger(__name__)

_CLASS_NAME = re.compile(r"^[a-zA-Z_-][a-zA-Z0-9_-]*$")
_ATTRIBUTE_NAME = re.compile(r"^[a-zA-Z_:@][-a-zA-Z0-9_:.@]*$")
_CSS_PROPERTY = re.compile(r"^(--[\w-]+|-?[a-z][a-z0-9-]*)$")
_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNCTION_COLOR = re.compile(r"^(rgba?|hsla?|var|color-mix)\(.*\)$")
_NAMED_COLOR = re.compile(r"^[a-zA-Z]+$")

FRAMEWORK_MODIFIERS = {
    "react": frozenset(MODIFIER_CODE),
    "vue": VUE_MODIFIERS,
    "svelte": SVELTE_MODIFIERS | frozenset(SVELTE_MODIFIER_ALIASES),
}


def is_valid_class_name(name: str) -> bool:
    return bool(_CLASS_NAME.match(name))


def is_valid_attribute_name(name: str) -> bool:
    return bool(_ATTRIBUTE_NAME.match(name))


def is_valid_color(value: str) -> bool:
    """Hex, functional (``rgb()``, ``var()``...) or a bare color keyword."""
    value = value.strip()
    return bool(
        _HEX_COLOR.match(value) or _FUNCTION_COLOR.match(value) or _NAMED_COLOR.match(value)
    )


def is_complex_condition(condition: str) -> bool:
    return "&&" in condition or "||" in condition or "(" in condition


class _Category:
    """Warnings, suggestions and score of one concept category."""

    def __init__(self) -> None:
        self.warnings: list[ConceptWarning] = []
        self.suggestions: list[ConceptSuggestion] = []
        self.score = 1.0

    def warn(
        self,
        severity: Severity,
        message: str,
        node_id: str | None,
        penalty: float,
        suggestion: str | None = None,
    ) -> None:
        self.warnings.append(ConceptWarning(severity, message, node_id, suggestion))
        self.score -= penalty

    def suggest(
        self, kind: str, message: str, target: str = "component", priority: int = 2
    ) -> None:
        self.suggestions.append(ConceptSuggestion(kind, message, target, priority))


class ConceptValidator:
    """
    Validate extracted concepts and report findings to an error collector.

    Checks per category:
    - events: known event names, non-empty handlers, modifiers the target
      framework can express
    - styling: class name syntax, CSS property names, color values, empty values
    - conditionals: missing condition, empty ``then`` branch
    - iterations: missing items or item name, React iterations without a key
    - slots: duplicate names
    - attributes: missing or malformed names, duplicates on one node
    """

    def __init__(self, errors: ErrorCollector | None = None):
        self._errors = errors if errors is not None else ErrorCollector()

    def get_errors(self) -> ErrorCollector:
        return self._errors

    def validate_component(
        self,
        concepts: ComponentConcept,
        options: ValidationOptions | None = None,
    ) -> ConceptValidation:
        """Validate every category and report the warnings.

        ERROR warnings are recorded as errors, the rest as warnings, all under
        the ``concept-validator`` extension.
        """
        options = options or ValidationOptions()
        categories = [
            self._events(concepts.events, options),
            self._styling(concepts.styling, options),
            self._conditionals(concepts.conditionals),
            self._iterations(concepts.iterations, options),
            self._slots(concepts.slots),
            self._attributes(concepts.attributes),
        ]
        if options.cross_concept:
            categories.append(self._consistency(concepts, options))

        validation = ConceptValidation()
        for category in categories:
            validation.warnings.extend(category.warnings)
            validation.suggestions.extend(category.suggestions)
            validation.score = min(validation.score, category.score)

        for rule in options.custom_rules:
            validation.warnings.extend(rule(concepts, options))

        validation.score = max(0.0, round(validation.score, 4))
        validation.is_valid = not any(
            warning.severity == Severity.ERROR for warning in validation.warnings
        )
        self._report(validation.warnings)
        logger.debug(
            f"Validated concepts: score={validation.score}, "
            f"{len(validation.warnings)} warnings, {len(validation.suggestions)} suggestions"
        )
        return validation

    def _report(self, warnings: Iterable[ConceptWarning]) -> None:
        for warning in warnings:
            context = {"suggestion": warning.suggestion} if warning.suggestion else None
            if warning.severity == Severity.ERROR:
                self._errors.add_simple_error(warning.message, warning.node_id, STAGE, context)
            elif warning.severity == Severity.WARNING:
                self._errors.add_warning(warning.message, warning.node_id, STAGE, context)
            else:
                self._errors.add_info(warning.message, warning.node_id, STAGE, context)

    def _events(self, events: list[Event], options: ValidationOptions) -> _Category:
        category = _Category()
        supported = FRAMEWORK_MODIFIERS.get(options.framework or "")

        for event in events:
            if event.name.lower() not in COMMON_EVENTS:
                category.warn(
                    Severity.WARNING,
                    f"Invalid or uncommon event name: {event.name}",
                    event.node_id,
                    0.05,
                    "Use standard HTML event names (click, change, submit)",
                )
            if not event.handler.strip():
                category.warn(
                    Severity.ERROR,
                    "Event has empty handler",
                    event.node_id,
                    0.25,
                    "Provide a valid handler function",
                )
            # Vue accepts any key name on keyboard events
            vue_key = options.framework == "vue" and event.name.startswith("key")
            if supported is not None and not vue_key:
                for modifier in event.modifiers:
                    if modifier not in supported:
                        category.warn(
                            Severity.WARNING,
                            f"{options.framework} does not support the "
                            f"'{modifier}' modifier on '{event.name}'",
                            event.node_id,
                            0.05,
                            "Handle the modifier in the event handler function",
                        )
            if options.check_accessibility and event.name == "click":
                category.suggest(
                    "accessibility", "Add keyboard support for click events", event.node_id, 3
                )

        if options.check_performance and len(events) > 10:
            category.suggest(
                "performance", "Consider event delegation for multiple similar events", priority=3
            )
        return category

    def _styling(self, styling: StylingConcept, options: ValidationOptions) -> _Category:
        category = _Category()

        for name in styling.static_classes:
            if not is_valid_class_name(name):
                category.warn(
                    Severity.WARNING,
                    f"Invalid CSS class name: {name}",
                    None,
                    0.03,
                    "Class names start with a letter, '_' or '-'",
                )

        for prop, value in styling.inline_styles.items():
            css_name = camel_to_kebab(prop)
            if not _CSS_PROPERTY.match(css_name):
                category.warn(Severity.WARNING, f"Invalid CSS property: {prop}", None, 0.05)
            if not str(value).strip():
                category.warn(
                    Severity.ERROR, f"Empty CSS value for property: {prop}", None, 0.08
                )
            elif css_name.endswith("color") and not is_valid_color(str(value)):
                category.warn(Severity.WARNING, f"Invalid color value: {value}", None, 0.05)

        if options.check_performance and len(styling.inline_styles) > 5:
            category.suggest(
                "performance", "Consider external CSS for better performance", priority=3
            )
        if options.check_best_practices and len(styling.static_classes) > 8:
            category.suggest("best-practice", "Consider using fewer, more semantic CSS classes")
        return category

    def _conditionals(self, conditionals: list[Conditional]) -> _Category:
        category = _Category()
        for conditional in conditionals:
            if not conditional.condition.strip():
                category.warn(
                    Severity.ERROR,
                    "Conditional missing condition expression",
                    conditional.node_id,
                    0.15,
                )
            elif is_complex_condition(conditional.condition):
                category.suggest(
                    "best-practice",
                    "Consider extracting complex condition to a computed property",
                    conditional.node_id,
                )
            if not conditional.then:
                category.warn(
                    Severity.WARNING,
                    "Conditional has empty then branch",
                    conditional.node_id,
                    0.05,
                    "Provide content for when condition is true",
                )
        return category

    def _iterations(self, iterations: list[Iteration], options: ValidationOptions) -> _Category:
        category = _Category()
        for iteration in iterations:
            if not iteration.items.strip():
                category.warn(
                    Severity.ERROR, "Iteration missing items expression", iteration.node_id, 0.15
                )
            if not iteration.item.strip():
                category.warn(
                    Severity.ERROR, "Iteration missing item variable name", iteration.node_id, 0.15
                )
            if options.framework == "react" and not iteration.key:
                category.warn(
                    Severity.WARNING,
                    "React iterations should have a key expression for performance",
                    iteration.node_id,
                    0.08,
                    "Add a unique key expression (e.g. item.id)",
                )
            if iteration.key and iteration.key in ("index", iteration.index):
                category.suggest(
                    "best-practice",
                    "Avoid using index as key - use unique item property instead",
                    iteration.node_id,
                    4,
                )
            if options.check_performance and not iteration.key:
                category.suggest(
                    "performance",
                    "Add key expression for better rendering performance",
                    iteration.node_id,
                    4,
                )
        return category

    def _slots(self, slots: list[Slot]) -> _Category:
        category = _Category()
        seen: set[str] = set()
        for slot in slots:
            if slot.name in seen:
                category.warn(
                    Severity.WARNING,
                    f"Duplicate slot name: {slot.name}",
                    slot.node_id,
                    0.05,
                    "Use unique slot names within a component",
                )
            seen.add(slot.name)
        return category

    def _attributes(self, attributes: list[Attribute]) -> _Category:
        category = _Category()
        seen: set[tuple[str, str]] = set()
        for attribute in attributes:
            if not attribute.name:
                category.warn(Severity.ERROR, "Attribute missing name", attribute.node_id, 0.1)
                continue
            if (attribute.node_id, attribute.name) in seen:
                category.warn(
                    Severity.WARNING,
                    f"Duplicate attribute: {attribute.name}",
                    attribute.node_id,
                    0.03,
                )
            seen.add((attribute.node_id, attribute.name))
            if not is_valid_attribute_name(attribute.name):
                category.warn(
                    Severity.WARNING,
                    f"Invalid HTML attribute name: {attribute.name}",
                    attribute.node_id,
                    0.05,
                )
        return category

    def _consistency(self, concepts: ComponentConcept, options: ValidationOptions) -> _Category:
        category = _Category()
        styling = concepts.styling
        if styling.inline_styles and styling.static_classes:
            category.suggest(
                "best-practice", "Mixing inline styles and CSS classes can impact maintainability"
            )
        if options.check_accessibility:
            clicks = any(event.name == "click" for event in concepts.events)
            has_role = any(attribute.name == "role" for attribute in concepts.attributes)
            if clicks and not has_role:
                category.suggest(
                    "accessibility",
                    "Interactive elements should have appropriate ARIA roles",
                    priority=4,
                )
        cancels = any("cancel" in event.handler.lower() for event in concepts.events)
        if cancels and any("success" in name for name in styling.static_classes):
            category.suggest(
                "best-practice",
                "Potential semantic mismatch: cancel action with success styling",
                priority=3,
            )
        return category
