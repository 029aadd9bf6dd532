"""Framework-agnostic concepts."""

from .types import (
    Attribute,
    ComponentConcept,
    Conditional,
    Event,
    Iteration,
    Slot,
    StylingConcept,
)

__all__ = [
    "ComponentConcept",
    "Event",
    "StylingConcept",
    "Conditional",
    "Iteration",
    "Slot",
    "Attribute",
]
