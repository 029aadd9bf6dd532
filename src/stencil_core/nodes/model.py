"""Template node model.

A template is an ordered list of nodes. Each node is one of the variants
below, selected by its ``type``; only the fields of that variant are
meaningful.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Union

from stencil_core.types import NodeType


@dataclass
class ElementNode:
    """An element with static and expression attributes."""

    tag: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    expression_attributes: dict[str, str] = field(default_factory=dict)
    children: list[TemplateNode] = field(default_factory=list)
    self_closing: bool = False
    extensions: dict[str, Any] = field(default_factory=dict)
    type: str = field(default=NodeType.ELEMENT.value, init=False)

    @property
    def style_declaration(self) -> dict[str, Any] | None:
        """Structured style declaration, if the element carries one.

        Either ``attributes["style"]`` as a mapping or ``attributes["styles"]``.
        """
        style = self.attributes.get("style")
        if isinstance(style, dict):
            return style
        styles = self.attributes.get("styles")
        if isinstance(styles, dict):
            return styles
        return None

    @property
    def class_names(self) -> list[str]:
        """Whitespace-split tokens of the static ``class`` attribute."""
        value = self.attributes.get("class")
        if not isinstance(value, str):
            return []
        return value.split()


@dataclass
class TextNode:
    content: str = ""
    type: str = field(default=NodeType.TEXT.value, init=False)


@dataclass
class CommentNode:
    content: str = ""
    type: str = field(default=NodeType.COMMENT.value, init=False)


@dataclass
class ConditionalNode:
    """``if`` node: renders ``then`` when the condition holds, else ``else_``."""

    condition: str | None = None
    then: list[TemplateNode] = field(default_factory=list)
    else_: list[TemplateNode] | None = None
    type: str = field(default=NodeType.CONDITIONAL.value, init=False)


@dataclass
class IterationNode:
    """``for`` node: renders ``children`` once per element of ``items``."""

    items: str | None = None
    item: str | None = None
    index: str | None = None
    key: str | None = None
    children: list[TemplateNode] = field(default_factory=list)
    type: str = field(default=NodeType.ITERATION.value, init=False)


@dataclass
class SlotNode:
    name: str | None = None
    fallback: list[TemplateNode] | None = None
    type: str = field(default=NodeType.SLOT.value, init=False)


@dataclass
class FragmentNode:
    children: list[TemplateNode] = field(default_factory=list)
    type: str = field(default=NodeType.FRAGMENT.value, init=False)


@dataclass
class UnknownNode:
    """Node whose ``type`` is not one of the known variants."""

    type: str = "unknown"
    children: list[TemplateNode] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)


TemplateNode = Union[
    ElementNode,
    TextNode,
    CommentNode,
    ConditionalNode,
    IterationNode,
    SlotNode,
    FragmentNode,
    UnknownNode,
]


# Node identity

PathSegment = tuple[str, int]  # (child-list field, index)


def node_id(path: list[PathSegment] | tuple[PathSegment, ...]) -> str:
    """Path-based node identity.

    ``[]`` is ``"root"``; ``[("children", 0), ("then", 1)]`` is
    ``"root.children[0].then[1]"``.
    """
    if not path:
        return "root"
    return "root" + "".join(f".{name}[{index}]" for name, index in path)


def parse_node_id(value: str) -> list[PathSegment]:
    """Inverse of :func:`node_id`."""
    if value == "root":
        return []
    return [(name, int(index)) for name, index in re.findall(r"\.(\w+)\[(\d+)\]", value)]


def child_lists(node: TemplateNode) -> list[tuple[str, list[TemplateNode]]]:
    """Named child lists of a node, in traversal order."""
    if isinstance(node, ConditionalNode):
        lists = [("then", node.then)]
        if node.else_ is not None:
            lists.append(("else", node.else_))
        return lists
    if isinstance(node, SlotNode):
        return [("fallback", node.fallback)] if node.fallback else []
    if isinstance(node, (ElementNode, IterationNode, FragmentNode, UnknownNode)):
        return [("children", node.children)]
    return []
