"""Analyzer options."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_EVENT_PREFIXES = ["on", "@", "v-on:", "on:"]
DEFAULT_IGNORE_ATTRIBUTES = ["key", "ref"]

# camelCase spellings accepted by from_dict
OPTION_ALIASES = {
    "extractEvents": "extract_events",
    "extractStyling": "extract_styling",
    "extractConditionals": "extract_conditionals",
    "extractIterations": "extract_iterations",
    "extractSlots": "extract_slots",
    "extractAttributes": "extract_attributes",
    "eventPrefixes": "event_prefixes",
    "ignoreAttributes": "ignore_attributes",
}


@dataclass
class AnalyzerOptions:
    """Which concept categories to extract and how to recognise events.

    Attributes:
        extract_events: Extract event bindings
        extract_styling: Extract classes, inline styles and style bindings
        extract_conditionals: Extract ``if`` nodes
        extract_iterations: Extract ``for`` nodes
        extract_slots: Extract ``slot`` nodes
        extract_attributes: Extract remaining attributes
        event_prefixes: Attribute-key prefixes that denote events. The list is
            tried longest prefix first, not in the order given, so ``on:`` is
            matched before ``on``. A bare ``on`` needs an uppercase letter next
        ignore_attributes: Attribute names never reported as attributes
    """

    extract_events: bool = True
    extract_styling: bool = True
    extract_conditionals: bool = True
    extract_iterations: bool = True
    extract_slots: bool = True
    extract_attributes: bool = True
    event_prefixes: list[str] = field(default_factory=lambda: list(DEFAULT_EVENT_PREFIXES))
    ignore_attributes: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_ATTRIBUTES))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "AnalyzerOptions":
        """Build options from snake_case or camelCase keys."""
        if not data:
            return cls()
        known = set(cls.__dataclass_fields__)
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = OPTION_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = list(value) if isinstance(value, (list, tuple)) else value
        return cls(**kwargs)
