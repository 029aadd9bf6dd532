"""Framework-agnostic concepts extracted from a template."""

import copy
from dataclasses import asdict, dataclass, field
from typing import Any

from stencil_core.nodes import TemplateNode, node_to_dict


@dataclass
class Event:
    """An event binding in canonical form.

    Attributes:
        name: Canonical lowercase event name (e.g. "click")
        handler: Handler expression as written in the template
        parameters: Positional arguments parsed from ``handler(a, b)``
        modifiers: Modifiers in declaration order (e.g. ["prevent"])
        node_id: Node the event was found on
    """

    name: str
    handler: str
    parameters: list[str] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)
    node_id: str = "root"


@dataclass
class StylingConcept:
    """Styling facts aggregated over the whole template."""

    static_classes: list[str] = field(default_factory=list)
    dynamic_classes: list[str] = field(default_factory=list)
    inline_styles: dict[str, str] = field(default_factory=dict)
    style_bindings: dict[str, str] = field(default_factory=dict)
    extension_data: dict[str, dict[str, Any]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (
            self.static_classes
            or self.dynamic_classes
            or self.inline_styles
            or self.style_bindings
            or self.extension_data
        )


@dataclass
class Conditional:
    condition: str
    then: list[TemplateNode] = field(default_factory=list)
    else_: list[TemplateNode] | None = None
    node_id: str = "root"


@dataclass
class Iteration:
    items: str
    item: str
    children: list[TemplateNode] = field(default_factory=list)
    index: str | None = None
    key: str | None = None
    node_id: str = "root"


@dataclass
class Slot:
    name: str
    fallback: list[TemplateNode] | None = None
    node_id: str = "root"


@dataclass
class Attribute:
    name: str
    value: Any
    is_expression: bool = False
    node_id: str = "root"


@dataclass
class ComponentConcept:
    """Everything the analyzer knows about a template."""

    events: list[Event] = field(default_factory=list)
    styling: StylingConcept = field(default_factory=StylingConcept)
    conditionals: list[Conditional] = field(default_factory=list)
    iterations: list[Iteration] = field(default_factory=list)
    slots: list[Slot] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)

    def copy(self) -> "ComponentConcept":
        """Deep copy, so a transform can never alias the caller's data."""
        return copy.deepcopy(self)

    def counts(self) -> dict[str, int]:
        """Occurrences per concept category."""
        styling = self.styling
        return {
            "events": len(self.events),
            "styling": len(styling.static_classes)
            + len(styling.dynamic_classes)
            + len(styling.inline_styles)
            + len(styling.style_bindings),
            "conditionals": len(self.conditionals),
            "iterations": len(self.iterations),
            "slots": len(self.slots),
            "attributes": len(self.attributes),
        }

    def total_count(self) -> int:
        return sum(self.counts().values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain data (nodes in their wire shape)."""
        return {
            "events": [asdict(event) for event in self.events],
            "styling": asdict(self.styling),
            "conditionals": [
                {
                    "condition": c.condition,
                    "then": [node_to_dict(n) for n in c.then],
                    "else": None if c.else_ is None else [node_to_dict(n) for n in c.else_],
                    "node_id": c.node_id,
                }
                for c in self.conditionals
            ],
            "iterations": [
                {
                    "items": i.items,
                    "item": i.item,
                    "index": i.index,
                    "key": i.key,
                    "children": [node_to_dict(n) for n in i.children],
                    "node_id": i.node_id,
                }
                for i in self.iterations
            ],
            "slots": [
                {
                    "name": s.name,
                    "fallback": None
                    if s.fallback is None
                    else [node_to_dict(n) for n in s.fallback],
                    "node_id": s.node_id,
                }
                for s in self.slots
            ],
            "attributes": [asdict(a) for a in self.attributes],
        }
