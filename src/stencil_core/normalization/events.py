"""Event normalization between canonical events and framework attribute syntax."""

import re
from dataclasses import dataclass, field

from stencil_core.concepts import Event
from stencil_core.errors import ErrorCollector
from stencil_core.types import FrameworkSyntax

STAGE = "event-normalizer"

COMMON_EVENTS = (
    "click",
    "change",
    "submit",
    "input",
    "focus",
    "blur",
    "keydown",
    "keyup",
    "mousedown",
    "mouseup",
    "mouseover",
    "mouseout",
    "mouseenter",
    "mouseleave",
    "load",
    "error",
    "resize",
    "scroll",
)

VUE_MODIFIERS = frozenset(
    {
        "stop", "prevent", "capture", "self", "once", "passive",
        "left", "right", "middle", "ctrl", "alt", "shift", "meta", "exact",
    }
)
SVELTE_MODIFIERS = frozenset(
    {
        "preventDefault", "stopPropagation", "stopImmediatePropagation",
        "passive", "nonpassive", "capture", "once", "self", "trusted",
    }
)
# Vue spellings the Svelte renderer translates
SVELTE_MODIFIER_ALIASES = {"prevent": "preventDefault", "stop": "stopPropagation"}

_WORD_SEPARATORS = re.compile(r"[-_:]")


@dataclass
class FrameworkEventAttribute:
    """Framework attribute name for an event plus its modifiers.

    Modifiers are always returned unchanged; for React the caller decides how
    to re-encode them.
    """

    attribute_name: str
    modifiers: list[str] = field(default_factory=list)


@dataclass
class CanonicalEvent:
    name: str
    modifiers: list[str] = field(default_factory=list)


@dataclass
class NormalizedEvent:
    """Result of EventNormalizer.normalize_event."""

    original: Event
    common_name: str
    framework_attribute: str
    modifiers: list[str]
    was_normalized: bool


def _react_name(name: str) -> str:
    return "on" + "".join(word[:1].upper() + word[1:] for word in _WORD_SEPARATORS.split(name))


def _append_modifiers(attribute: str, modifiers: list[str], target: FrameworkSyntax) -> str:
    """Vue and Svelte carry modifiers in the attribute; React does not."""
    if target == FrameworkSyntax.VUE:
        return attribute + "".join(f".{m}" for m in modifiers)
    if target == FrameworkSyntax.SVELTE:
        return attribute + "".join(f"|{m}" for m in modifiers)
    return attribute


def to_framework_attribute(
    event: Event | CanonicalEvent, target: FrameworkSyntax | str
) -> FrameworkEventAttribute:
    """Render a canonical event as a framework attribute name.

    Args:
        event: Event with a canonical lowercase name
        target: react, vue or svelte

    Returns:
        FrameworkEventAttribute

    Raises:
        ValueError: If target is not a known syntax
    """
    target = FrameworkSyntax(target)
    name = event.name.lower()
    modifiers = list(event.modifiers)

    if target == FrameworkSyntax.REACT:
        attribute = _react_name(name)
    elif target == FrameworkSyntax.VUE:
        attribute = _append_modifiers("@" + name, modifiers, target)
    else:
        attribute = _append_modifiers("on:" + name, modifiers, target)

    return FrameworkEventAttribute(attribute_name=attribute, modifiers=modifiers)


def parse_framework_attribute(attribute: str) -> CanonicalEvent | None:
    """Parse any supported event attribute syntax into canonical form.

    ``@submit.prevent`` -> ``submit`` with ``["prevent"]``;
    ``on:click|once`` -> ``click`` with ``["once"]``; ``onKeyDown`` ->
    ``keydown``. Returns None for attributes that are not events.
    """
    if attribute.startswith("v-on:"):
        name, *modifiers = attribute[5:].split(".")
    elif attribute.startswith("@"):
        name, *modifiers = attribute[1:].split(".")
    elif attribute.startswith("on:"):
        name, *modifiers = attribute[3:].split("|")
    elif len(attribute) > 2 and attribute.startswith("on") and attribute[2].isupper():
        name, modifiers = attribute[2:], []
    else:
        return None
    if not name:
        return None
    return CanonicalEvent(name=name.lower(), modifiers=[m for m in modifiers if m])


def convert_event_attribute(attribute: str, target: FrameworkSyntax | str) -> str | None:
    """Translate an event attribute from one syntax to another."""
    canonical = parse_framework_attribute(attribute)
    if canonical is None:
        return None
    return to_framework_attribute(canonical, target).attribute_name


class EventNormalizer:
    """Maps events onto framework attributes and validates their modifiers.

    Common events have a fixed mapping table; custom mappings (common name ->
    per-framework attribute) override it.
    """

    def __init__(
        self,
        custom_mappings: dict[str, dict[str, str]] | None = None,
        error_collector: ErrorCollector | None = None,
    ):
        self._errors = error_collector or ErrorCollector()
        self._mappings: dict[str, dict[str, str]] = {
            name: {
                syntax.value: to_framework_attribute(CanonicalEvent(name), syntax).attribute_name
                for syntax in FrameworkSyntax
            }
            for name in COMMON_EVENTS
        }
        self._mappings.update(custom_mappings or {})

    def extract_common_event_name(self, event_name: str) -> str:
        """Strip framework prefixes and modifiers: ``@click.prevent`` -> ``click``."""
        canonical = parse_framework_attribute(event_name)
        if canonical is not None:
            return canonical.name
        return event_name.split(".")[0].split("|")[0].lower()

    def find_event_mapping(self, common_name: str) -> dict[str, str] | None:
        return self._mappings.get(common_name)

    def find_common_name_from_framework(
        self, framework_event: str, framework: FrameworkSyntax | str
    ) -> str | None:
        """Reverse lookup of a mapped framework attribute."""
        framework = FrameworkSyntax(framework).value
        for common_name, mapping in self._mappings.items():
            if mapping.get(framework) == framework_event:
                return common_name
        return None

    def normalize_event(
        self,
        event: Event,
        framework: FrameworkSyntax | str,
        validate: bool = True,
    ) -> NormalizedEvent:
        """Map one event onto a framework, recording validation warnings."""
        framework = FrameworkSyntax(framework)
        common_name = self.extract_common_event_name(event.name)
        mapping = self.find_event_mapping(common_name)

        if mapping is None or framework.value not in mapping:
            if validate:
                self._errors.add_warning(
                    f"No normalization mapping found for event: {common_name}",
                    event.node_id,
                    STAGE,
                )
            attribute = to_framework_attribute(
                CanonicalEvent(common_name, list(event.modifiers)), framework
            )
            return NormalizedEvent(
                original=event,
                common_name=common_name,
                framework_attribute=attribute.attribute_name,
                modifiers=list(event.modifiers),
                was_normalized=False,
            )

        if validate:
            self._validate_modifiers(event, framework)

        return NormalizedEvent(
            original=event,
            common_name=common_name,
            framework_attribute=_append_modifiers(
                mapping[framework.value], list(event.modifiers), framework
            ),
            modifiers=list(event.modifiers),
            was_normalized=True,
        )

    def normalize_events(
        self, events: list[Event], framework: FrameworkSyntax | str, validate: bool = True
    ) -> list[NormalizedEvent]:
        return [self.normalize_event(event, framework, validate) for event in events]

    def is_valid_modifier(self, modifier: str, framework: FrameworkSyntax | str) -> bool:
        """Whether a modifier can be expressed by a framework's event syntax.

        React has no modifier syntax; its renderer inlines them into the handler.
        """
        framework = FrameworkSyntax(framework)
        if framework == FrameworkSyntax.VUE:
            return modifier in VUE_MODIFIERS
        if framework == FrameworkSyntax.SVELTE:
            return modifier in SVELTE_MODIFIERS or modifier in SVELTE_MODIFIER_ALIASES
        return modifier in {"prevent", "stop", "self", "once", "preventDefault", "stopPropagation"}

    def _validate_modifiers(self, event: Event, framework: FrameworkSyntax) -> None:
        for modifier in event.modifiers:
            if not self.is_valid_modifier(modifier, framework):
                self._errors.add_warning(
                    f"Unknown {framework.value.capitalize()} event modifier: {modifier}",
                    event.node_id,
                    STAGE,
                )

    def add_custom_mapping(self, common_name: str, mapping: dict[str, str]) -> None:
        self._mappings[common_name] = dict(mapping)

    def remove_mapping(self, common_name: str) -> None:
        self._mappings.pop(common_name, None)

    def get_mappings(self) -> dict[str, dict[str, str]]:
        return {name: dict(mapping) for name, mapping in self._mappings.items()}

    def get_supported_events(self, framework: FrameworkSyntax | str) -> list[str]:
        framework = FrameworkSyntax(framework).value
        return [m[framework] for m in self._mappings.values() if framework in m]

    def get_common_event_names(self) -> list[str]:
        return list(self._mappings)

    def get_errors(self) -> ErrorCollector:
        return self._errors

    def clear_errors(self) -> None:
        self._errors.clear()
