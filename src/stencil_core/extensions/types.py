"""Extension contract types.

This module defines the data passed between the pipeline and extensions:
- ExtensionMetadata: identity of an extension
- AttributeSyntax / BlockSyntax: per-node output of the framework transforms
- FrameworkOutputs: everything the framework transforms produced
- StyleContext / StylingOutput: input and output of a styling extension
- RenderContext: input of the final render call
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from stencil_core.nodes import ComponentMetadata, TemplateNode
from stencil_core.types import ExtensionType, StyleOutputFormat

if TYPE_CHECKING:
    from stencil_core.styles import StyleOptions


@dataclass
class ExtensionMetadata:
    """Identity of an extension.

    Attributes:
        key: Unique key per kind (lowercase, internal hyphens)
        name: Display name
        version: Three-part numeric version ("1.0.0")
        type: framework | styling | utility
    """

    key: str
    name: str
    version: str
    type: ExtensionType | str
    description: str | None = None


@dataclass
class AttributeSyntax:
    """One rendered attribute of one element (``onClick={save}``)."""

    node_id: str
    name: str
    syntax: str


@dataclass
class BlockSyntax:
    """Syntax wrapped around the child lists of a structural node.

    The rendered form is ``open + first + separator + second + close``, where
    ``second`` and ``separator`` only appear for a conditional with an else
    branch.
    """

    node_id: str
    open: str
    close: str
    separator: str = ""


@dataclass
class FrameworkOutputs:
    """Results of the five framework transforms, indexed by node."""

    events: list[AttributeSyntax] = field(default_factory=list)
    conditionals: list[BlockSyntax] = field(default_factory=list)
    iterations: list[BlockSyntax] = field(default_factory=list)
    slots: list[BlockSyntax] = field(default_factory=list)
    attributes: list[AttributeSyntax] = field(default_factory=list)

    def events_for(self, node_id: str) -> list[AttributeSyntax]:
        return [item for item in self.events if item.node_id == node_id]

    def attributes_for(self, node_id: str) -> list[AttributeSyntax]:
        return [item for item in self.attributes if item.node_id == node_id]

    def block_for(self, node_id: str) -> BlockSyntax | None:
        for block in (*self.conditionals, *self.iterations, *self.slots):
            if block.node_id == node_id:
                return block
        return None


@dataclass
class StyleContext:
    """What a styling extension may look at besides the styling concept."""

    nodes: list[TemplateNode] = field(default_factory=list)
    options: "StyleOptions | None" = None


@dataclass
class StylingOutput:
    """Result of a styling extension.

    Attributes:
        styles: Style sheet text (may be empty)
        format: Format of ``styles``
        classes: Extra class names per node id
        inline: Inline declarations per node id (replace the node's own)
    """

    styles: str = ""
    format: StyleOutputFormat = StyleOutputFormat.CSS
    classes: dict[str, list[str]] = field(default_factory=dict)
    inline: dict[str, str] = field(default_factory=dict)


@dataclass
class RenderContext:
    """Input of ``render_component`` besides the concepts."""

    component: ComponentMetadata = field(default_factory=ComponentMetadata)
    options: Any = None  # ProcessingOptions
    nodes: list[TemplateNode] = field(default_factory=list)
    outputs: FrameworkOutputs = field(default_factory=FrameworkOutputs)
    styling: StylingOutput | None = None
