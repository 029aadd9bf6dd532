"""Event normalization across framework syntaxes."""

from .events import (
    COMMON_EVENTS,
    SVELTE_MODIFIER_ALIASES,
    CanonicalEvent,
    EventNormalizer,
    FrameworkEventAttribute,
    NormalizedEvent,
    convert_event_attribute,
    parse_framework_attribute,
    to_framework_attribute,
)

__all__ = [
    "to_framework_attribute",
    "parse_framework_attribute",
    "convert_event_attribute",
    "FrameworkEventAttribute",
    "CanonicalEvent",
    "NormalizedEvent",
    "EventNormalizer",
    "COMMON_EVENTS",
    "SVELTE_MODIFIER_ALIASES",
]
