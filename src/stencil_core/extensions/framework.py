"""Shared tree rendering for framework extensions.

The five framework transforms produce syntax fragments indexed by node id.
``TemplateFrameworkExtension.render_template`` walks the original nodes,
computing the same node ids as the analyzer, and splices those fragments
back into markup:

- elements get their attribute and event syntax, plus class and style
- conditionals, iterations and slots are wrapped in their block syntax
- a structural node without a block (malformed or failed transform) is omitted
"""

from abc import abstractmethod
from typing import Any

from stencil_core.analyzer import parse_inline_style
from stencil_core.analyzer.styling import CLASS_BINDING_KEYS, STYLE_BINDING_KEYS
from stencil_core.concepts import Attribute, Conditional, Event, Iteration, Slot
from stencil_core.nodes import (
    CommentNode,
    ConditionalNode,
    ElementNode,
    FragmentNode,
    IterationNode,
    PathSegment,
    SlotNode,
    TemplateNode,
    TextNode,
    UnknownNode,
    child_lists,
    node_id,
)
from stencil_core.render import is_self_closing
from stencil_core.styles import inline_declarations

from .base import FrameworkExtension
from .types import AttributeSyntax, BlockSyntax, RenderContext


class TemplateFrameworkExtension(FrameworkExtension):
    """Framework extension that renders by walking the template nodes.

    Subclasses supply the syntax hooks; the process_* operations and the
    tree walk are shared.
    """

    # Syntax hooks

    @abstractmethod
    def event_syntax(self, event: Event) -> str:
        """Full attribute text of one event binding (``onClick={save}``)."""

    @abstractmethod
    def attribute_syntax(self, name: str, value: Any, is_expression: bool) -> str:
        """Full attribute text, or "" to omit the attribute."""

    @abstractmethod
    def conditional_block(self, conditional: Conditional) -> BlockSyntax: ...

    @abstractmethod
    def iteration_block(self, iteration: Iteration) -> BlockSyntax: ...

    @abstractmethod
    def slot_block(self, slot: Slot) -> BlockSyntax: ...

    @abstractmethod
    def class_attributes(self, static: list[str], binding: str | None) -> list[str]:
        """Attribute texts carrying the element's classes."""

    @abstractmethod
    def style_attributes(self, declarations: dict[str, str], binding: str | None) -> list[str]:
        """Attribute texts carrying the element's inline style."""

    def render_comment(self, content: str) -> str:
        return f"<!-- {content} -->"

    def wrap_fragment(self, content: str) -> str:
        return content

    # Framework operations

    def process_events(self, events: list[Event]) -> list[AttributeSyntax]:
        return [
            AttributeSyntax(node_id=event.node_id, name=event.name, syntax=self.event_syntax(event))
            for event in events
        ]

    def process_conditionals(self, conditionals: list[Conditional]) -> list[BlockSyntax]:
        return [self.conditional_block(conditional) for conditional in conditionals]

    def process_iterations(self, iterations: list[Iteration]) -> list[BlockSyntax]:
        return [self.iteration_block(iteration) for iteration in iterations]

    def process_slots(self, slots: list[Slot]) -> list[BlockSyntax]:
        return [self.slot_block(slot) for slot in slots]

    def process_attributes(self, attributes: list[Attribute]) -> list[AttributeSyntax]:
        results = []
        for attribute in attributes:
            syntax = self.attribute_syntax(attribute.name, attribute.value, attribute.is_expression)
            if syntax:
                results.append(
                    AttributeSyntax(node_id=attribute.node_id, name=attribute.name, syntax=syntax)
                )
        return results

    # Tree walk

    def render_template(self, context: RenderContext) -> str:
        """Markup of the whole template."""
        return self.render_nodes(context.nodes, context, [])

    def render_roots(self, context: RenderContext) -> list[str]:
        """Markup of each root node that produces output."""
        rendered = (
            self.render_node(node, context, [("children", index)])
            for index, node in enumerate(context.nodes)
        )
        return [markup for markup in rendered if markup]

    def render_nodes(
        self,
        nodes: list[TemplateNode],
        context: RenderContext,
        parent_path: list[PathSegment],
        field_name: str = "children",
    ) -> str:
        return "".join(
            self.render_node(node, context, [*parent_path, (field_name, index)])
            for index, node in enumerate(nodes)
        )

    def render_node(
        self, node: TemplateNode, context: RenderContext, path: list[PathSegment]
    ) -> str:
        if isinstance(node, TextNode):
            return node.content
        if isinstance(node, CommentNode):
            return self.render_comment(node.content)
        if isinstance(node, ElementNode):
            return self.render_element(node, context, path)
        if isinstance(node, FragmentNode):
            return self.wrap_fragment(self.render_nodes(node.children, context, path))
        if isinstance(node, (ConditionalNode, IterationNode, SlotNode)):
            return self.render_block(node, context, path)
        if isinstance(node, UnknownNode):
            return self.render_nodes(node.children, context, path)
        return ""

    def render_block(
        self, node: TemplateNode, context: RenderContext, path: list[PathSegment]
    ) -> str:
        block = context.outputs.block_for(node_id(path))
        if block is None:
            return ""
        parts = [
            self.render_nodes(children, context, path, field_name)
            for field_name, children in child_lists(node)
        ]
        if len(parts) == 2:
            return f"{block.open}{parts[0]}{block.separator}{parts[1]}{block.close}"
        return f"{block.open}{''.join(parts)}{block.close}"

    def render_element(
        self, node: ElementNode, context: RenderContext, path: list[PathSegment]
    ) -> str:
        current_id = node_id(path)
        override = node.extensions.get(self.metadata.key) or {}
        children = self.render_nodes(node.children, context, path)
        if override.get("ignore"):
            return children

        tag = override.get("tag") or node.tag or "div"
        parts = self.element_attributes(node, current_id, context, override)
        attributes = "".join(f" {part}" for part in parts if part)

        if is_self_closing(tag, node) and not children:
            return f"<{tag}{attributes} />"
        return f"<{tag}{attributes}>{children}</{tag}>"

    def element_attributes(
        self,
        node: ElementNode,
        current_id: str,
        context: RenderContext,
        override: dict[str, Any],
    ) -> list[str]:
        """Attribute texts of one element, in output order."""
        outputs = context.outputs
        styling = context.styling
        parts = [item.syntax for item in outputs.attributes_for(current_id)]

        static = list(node.class_names)
        if styling is not None:
            for name in styling.classes.get(current_id, []):
                if name not in static:
                    static.append(name)
        class_binding = next(
            (node.expression_attributes[key] for key in CLASS_BINDING_KEYS
             if key in node.expression_attributes),
            None,
        )
        parts.extend(self.class_attributes(static, class_binding))

        declarations: dict[str, str] = {}
        if styling is not None and current_id in styling.inline:
            # The styling extension decided this node's inline style
            declarations.update(parse_inline_style(styling.inline[current_id]))
        else:
            raw_style = node.attributes.get("style")
            if isinstance(raw_style, str):
                declarations.update(parse_inline_style(raw_style))
            if styling is None and node.style_declaration:
                # Without a styling extension, structured styles are inlined
                inline = inline_declarations(node.style_declaration)
                if inline:
                    declarations.update(parse_inline_style(inline))
        style_binding = next(
            (node.expression_attributes[key] for key in STYLE_BINDING_KEYS
             if key in node.expression_attributes),
            None,
        )
        parts.extend(self.style_attributes(declarations, style_binding))

        parts.extend(item.syntax for item in outputs.events_for(current_id))

        for name, value in (override.get("attributes") or {}).items():
            parts.append(self.attribute_syntax(name, value, False))
        expression_overrides = override.get(
            "expressionAttributes", override.get("expression_attributes")
        ) or {}
        for name, value in expression_overrides.items():
            parts.append(self.attribute_syntax(name, value, True))

        return parts
