"""Build template nodes from JSON/YAML-shaped data."""

import re
from typing import Any

from stencil_core.errors import create_error
from stencil_core.types import NodeType

from .model import (
    CommentNode,
    ConditionalNode,
    ElementNode,
    FragmentNode,
    IterationNode,
    SlotNode,
    TemplateNode,
    TextNode,
    UnknownNode,
)

# Attribute keys that always carry an expression rather than a literal value
EXPRESSION_KEY_PREFIXES = ("@", ":", "on:", "v-on:", "v-bind:", "bind:")
EXPRESSION_KEYS = {"className"}
_REACT_EVENT_KEY = re.compile(r"^on[A-Z]")
BINDING_PREFIXES = ("v-bind:", "bind:", ":")


def is_expression_key(name: str) -> bool:
    """Whether an attribute key denotes an expression binding."""
    return (
        name.startswith(EXPRESSION_KEY_PREFIXES)
        or name in EXPRESSION_KEYS
        or bool(_REACT_EVENT_KEY.match(name))
    )


def bound_name(name: str) -> str:
    """Attribute name without its binding prefix (``:disabled`` -> ``disabled``)."""
    for prefix in BINDING_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


def parse_nodes(data: Any, path: str = "nodes") -> list[TemplateNode]:
    """Parse a node list.

    Args:
        data: List of node mappings (already-built nodes pass through)
        path: Location used in error messages

    Returns:
        List of template nodes

    Raises:
        StencilError: TEMPLATE_STRUCTURE_INVALID if data is not a list of mappings
    """
    if not isinstance(data, list):
        raise create_error(
            "TEMPLATE_STRUCTURE_INVALID",
            detail=f"expected a list of nodes at '{path}', got {type(data).__name__}",
        )
    return [parse_node(item, f"{path}[{index}]") for index, item in enumerate(data)]


def parse_node(data: Any, path: str = "node") -> TemplateNode:
    """Parse a single node mapping."""
    if isinstance(
        data,
        (ElementNode, TextNode, CommentNode, ConditionalNode, IterationNode, SlotNode,
         FragmentNode, UnknownNode),
    ):
        return data
    if not isinstance(data, dict):
        raise create_error(
            "TEMPLATE_STRUCTURE_INVALID",
            detail=f"expected a node object at '{path}', got {type(data).__name__}",
        )

    node_type = data.get("type") or NodeType.ELEMENT.value

    if node_type == NodeType.ELEMENT.value:
        return _parse_element(data, path)
    if node_type == NodeType.TEXT.value:
        return TextNode(content=str(data.get("content", "")))
    if node_type == NodeType.COMMENT.value:
        return CommentNode(content=str(data.get("content", "")))
    if node_type == NodeType.CONDITIONAL.value:
        else_data = data.get("else")
        return ConditionalNode(
            condition=data.get("condition"),
            then=_parse_children(data.get("then"), f"{path}.then"),
            else_=None if else_data is None else _parse_children(else_data, f"{path}.else"),
        )
    if node_type == NodeType.ITERATION.value:
        return IterationNode(
            items=data.get("items"),
            item=data.get("item"),
            index=data.get("index"),
            key=data.get("key"),
            children=_parse_children(data.get("children"), f"{path}.children"),
        )
    if node_type == NodeType.SLOT.value:
        fallback = data.get("fallback")
        return SlotNode(
            name=data.get("name"),
            fallback=None if fallback is None else _parse_children(fallback, f"{path}.fallback"),
        )
    if node_type == NodeType.FRAGMENT.value:
        return FragmentNode(children=_parse_children(data.get("children"), f"{path}.children"))

    return UnknownNode(
        type=str(node_type),
        children=_parse_children(data.get("children"), f"{path}.children"),
        raw=dict(data),
    )


def _parse_children(data: Any, path: str) -> list[TemplateNode]:
    if data is None:
        return []
    return parse_nodes(data, path)


def _parse_element(data: dict[str, Any], path: str) -> ElementNode:
    attributes: dict[str, Any] = {}
    expressions: dict[str, str] = {}

    for name, value in (data.get("attributes") or {}).items():
        if isinstance(value, dict) and set(value) == {"expression"}:
            expressions[name] = str(value["expression"])
        elif is_expression_key(name):
            expressions[name] = str(value)
        else:
            attributes[name] = value

    explicit = data.get("expressionAttributes", data.get("expression_attributes")) or {}
    for name, value in explicit.items():
        expressions[name] = str(value)

    return ElementNode(
        tag=data.get("tag"),
        attributes=attributes,
        expression_attributes=expressions,
        children=_parse_children(data.get("children"), f"{path}.children"),
        self_closing=bool(data.get("selfClosing", data.get("self_closing", False))),
        extensions=dict(data.get("extensions") or {}),
    )


def node_to_dict(node: TemplateNode) -> dict[str, Any]:
    """Serialize a node back to its wire shape."""
    if isinstance(node, ElementNode):
        result: dict[str, Any] = {"type": node.type}
        if node.tag is not None:
            result["tag"] = node.tag
        if node.attributes:
            result["attributes"] = dict(node.attributes)
        if node.expression_attributes:
            result["expressionAttributes"] = dict(node.expression_attributes)
        if node.children:
            result["children"] = [node_to_dict(child) for child in node.children]
        if node.self_closing:
            result["selfClosing"] = True
        if node.extensions:
            result["extensions"] = dict(node.extensions)
        return result
    if isinstance(node, (TextNode, CommentNode)):
        return {"type": node.type, "content": node.content}
    if isinstance(node, ConditionalNode):
        result = {"type": node.type, "condition": node.condition}
        result["then"] = [node_to_dict(child) for child in node.then]
        if node.else_ is not None:
            result["else"] = [node_to_dict(child) for child in node.else_]
        return result
    if isinstance(node, IterationNode):
        result = {"type": node.type, "items": node.items, "item": node.item}
        if node.index is not None:
            result["index"] = node.index
        if node.key is not None:
            result["key"] = node.key
        result["children"] = [node_to_dict(child) for child in node.children]
        return result
    if isinstance(node, SlotNode):
        result = {"type": node.type, "name": node.name}
        if node.fallback is not None:
            result["fallback"] = [node_to_dict(child) for child in node.fallback]
        return result
    if isinstance(node, FragmentNode):
        return {"type": node.type, "children": [node_to_dict(c) for c in node.children]}
    return dict(node.raw) or {"type": node.type}
