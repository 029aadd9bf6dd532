"""Plain recursive tree-to-markup serializer."""

from html import escape
from typing import Any

from stencil_core.nodes import (
    CommentNode,
    ElementNode,
    FragmentNode,
    SlotNode,
    TemplateNode,
    TextNode,
    UnknownNode,
)
from stencil_core.styles import StyleProcessor, inline_declarations

# Elements that never have content
SELF_CLOSING_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Structured style keys; never written as plain attributes
STYLE_KEYS = ("style", "styles")


def is_self_closing(tag: str, node: ElementNode | None = None) -> bool:
    """Whether an element renders as ``<tag />``."""
    return tag.lower() in SELF_CLOSING_TAGS or bool(node is not None and node.self_closing)


def render_attribute(name: str, value: Any) -> str:
    """One static attribute as ``name="value"`` (bare name for True, "" to omit)."""
    if value is True:
        return name
    if value is False or value is None:
        return ""
    if isinstance(value, dict):
        return ""
    return f'{name}="{escape(str(value), quote=True)}"'


def render_to_html(
    nodes: list[TemplateNode],
    style_processor: StyleProcessor | None = None,
) -> str:
    """Serialize nodes to static markup.

    Expression attributes and control-flow nodes have no static form and are
    skipped; a slot renders its fallback.

    Args:
        nodes: Parsed template nodes
        style_processor: When given, each element's base style declarations
            are written to its ``style`` attribute

    Returns:
        Markup text
    """
    return "".join(_render_node(node, style_processor) for node in nodes)


def _render_node(node: TemplateNode, style_processor: StyleProcessor | None) -> str:
    if isinstance(node, TextNode):
        return node.content
    if isinstance(node, CommentNode):
        return f"<!-- {node.content} -->"
    if isinstance(node, ElementNode):
        return _render_element(node, style_processor)
    if isinstance(node, FragmentNode):
        return render_to_html(node.children, style_processor)
    if isinstance(node, SlotNode):
        return render_to_html(node.fallback or [], style_processor)
    if isinstance(node, UnknownNode):
        return render_to_html(node.children, style_processor)
    return ""


def _render_element(node: ElementNode, style_processor: StyleProcessor | None) -> str:
    tag = node.tag or "div"

    parts = [
        render_attribute(name, value)
        for name, value in node.attributes.items()
        if name not in STYLE_KEYS
    ]

    style: str | None = None
    if style_processor is not None:
        style = style_processor.get_inline_styles(node)
    if style is None:
        raw = node.attributes.get("style")
        if isinstance(raw, str) and raw:
            style = raw
        elif node.style_declaration:
            style = inline_declarations(node.style_declaration)
    if style:
        parts.append(f'style="{escape(style, quote=True)}"')

    attributes = "".join(f" {part}" for part in parts if part)
    children = render_to_html(node.children, style_processor)

    if is_self_closing(tag, node) and not children:
        return f"<{tag}{attributes} />"
    return f"<{tag}{attributes}>{children}</{tag}>"
