"""Extension base classes.

Extensions come in three kinds, each with its own required operations:

- FrameworkExtension: process_events, process_conditionals,
  process_iterations, process_slots, process_attributes, render_component
- StylingExtension: process_styles
- UtilityExtension: process

The registry validates these operations on any object, so subclassing is
optional; the base classes below make the contract explicit.
"""

from abc import ABC, abstractmethod
from typing import Any

from stencil_core.concepts import (
    Attribute,
    ComponentConcept,
    Conditional,
    Event,
    Iteration,
    Slot,
    StylingConcept,
)
from stencil_core.types import ExtensionType

from .types import (
    AttributeSyntax,
    BlockSyntax,
    ExtensionMetadata,
    RenderContext,
    StyleContext,
    StylingOutput,
)

FRAMEWORK_OPERATIONS = (
    "process_events",
    "process_conditionals",
    "process_iterations",
    "process_slots",
    "process_attributes",
    "render_component",
)
STYLING_OPERATIONS = ("process_styles",)
UTILITY_OPERATIONS = ("process",)

REQUIRED_OPERATIONS: dict[ExtensionType, tuple[str, ...]] = {
    ExtensionType.FRAMEWORK: FRAMEWORK_OPERATIONS,
    ExtensionType.STYLING: STYLING_OPERATIONS,
    ExtensionType.UTILITY: UTILITY_OPERATIONS,
}


class Extension:
    """Common base of all extensions.

    Attributes:
        metadata: Extension identity
    """

    metadata: ExtensionMetadata

    @property
    def key(self) -> str:
        return self.metadata.key

    def on_output_write(self, output: str, options: Any = None) -> str:
        """Post-process final text right before it is written to disk."""
        return output

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.metadata.key!r})"


class FrameworkExtension(Extension, ABC):
    """Turns concepts into one framework's syntax and renders the component.

    Attributes:
        framework: Target syntax identifier (react, vue, svelte)
        file_extension: Extension of the rendered file
    """

    framework: str
    file_extension: str = ".html"

    @abstractmethod
    def process_events(self, events: list[Event]) -> list[AttributeSyntax]: ...

    @abstractmethod
    def process_conditionals(self, conditionals: list[Conditional]) -> list[BlockSyntax]: ...

    @abstractmethod
    def process_iterations(self, iterations: list[Iteration]) -> list[BlockSyntax]: ...

    @abstractmethod
    def process_slots(self, slots: list[Slot]) -> list[BlockSyntax]: ...

    @abstractmethod
    def process_attributes(self, attributes: list[Attribute]) -> list[AttributeSyntax]: ...

    @abstractmethod
    def render_component(self, concepts: ComponentConcept, context: RenderContext) -> str: ...


class StylingExtension(Extension, ABC):
    """Turns the styling concept into emitted styles.

    Attributes:
        styling: Styling approach identifier (bem, tailwind, ...)
    """

    styling: str

    @abstractmethod
    def process_styles(
        self, styling: StylingConcept, context: StyleContext | None = None
    ) -> StylingOutput: ...


class UtilityExtension(Extension, ABC):
    """Transforms the concept set before framework and styling processing."""

    @abstractmethod
    def process(self, concepts: ComponentConcept) -> ComponentConcept: ...
