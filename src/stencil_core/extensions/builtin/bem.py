"""BEM styling extension: block__element--modifier classes and nested SCSS.

Per-node data lives under ``extensions.bem``::

    {"block": "card"}                                  -> card
    {"element": "title"}                               -> card__title
    {"element": "title", "modifiers": ["active"]}      -> card__title card__title--active
    {"ignore": true}                                   -> no classes

A node without ``block`` inherits the nearest ancestor block.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

from stencil_core.analyzer import parse_inline_style
from stencil_core.concepts import StylingConcept
from stencil_core.nodes import ElementNode, PathSegment, TemplateNode, child_lists, node_id
from stencil_core.styles import (
    StyleOptions,
    StylePlugin,
    StyleProcessor,
    StyleRegistry,
    camel_to_kebab,
    generate_scss,
    is_media_key,
    is_pseudo_key,
    media_query,
)
from stencil_core.types import ExtensionType, StyleOutputFormat, StylingApproach

from ..base import StylingExtension
from ..types import ExtensionMetadata, StyleContext, StylingOutput

logger = logging.getLogger(__name__)


@dataclass
class BemName:
    block: str
    element: str | None = None
    modifiers: list[str] = field(default_factory=list)


def merge_declaration(target: dict[str, Any], declaration: dict[str, Any]) -> None:
    """Deep-merge ``declaration`` into ``target`` in place."""
    for key, value in declaration.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            merge_declaration(target[key], value)
        elif isinstance(value, dict):
            target[key] = {}
            merge_declaration(target[key], value)
        else:
            target[key] = value


def scss_rules(definition: dict[str, Any], indent: int) -> list[str]:
    """Nested SCSS lines of one selector body."""
    pad = " " * indent
    lines: list[str] = []
    for key, value in definition.items():
        if not isinstance(value, dict):
            lines.append(f"{pad}{camel_to_kebab(key)}: {value};")
        elif is_media_key(key):
            lines.append(f"{pad}@media {media_query(key)} {{")
            lines.extend(scss_rules(value, indent + 2))
            lines.append(f"{pad}}}")
        elif is_pseudo_key(key):
            lines.append(f"{pad}&{key} {{")
            lines.extend(scss_rules(value, indent + 2))
            lines.append(f"{pad}}}")
        else:
            lines.append(f"{pad}{key} {{")
            lines.extend(scss_rules(value, indent + 2))
            lines.append(f"{pad}}}")
    return lines


class BemStylePlugin(StylePlugin):
    """Stores BEM-named elements under their BEM selector.

    In SCSS mode the whole sheet is produced from the BEM tree, with
    non-BEM selectors appended in the engine's own SCSS form.
    """

    name = "bem"

    def __init__(self, selectors: dict[int, str], tree: "OrderedDict[str, dict[str, Any]]"):
        super().__init__()
        self._selectors = selectors
        self._tree = tree

    def on_process_node(self, node: ElementNode, selector: str) -> str | None:
        return self._selectors.get(id(node))

    def generate_styles(
        self,
        registry: StyleRegistry,
        options: StyleOptions,
        tree: list[TemplateNode] | None = None,
    ) -> str | None:
        output_format = getattr(options.output_format, "value", options.output_format)
        if output_format != StyleOutputFormat.SCSS.value or not self._tree:
            return None

        blocks = []
        for block, definition in self._tree.items():
            lines = [f".{block} {{", *scss_rules(definition, 2), "}"]
            blocks.append("\n".join(lines))

        owned = set(self._selectors.values())
        rest = StyleRegistry()
        for selector, definition in registry.items():
            if selector not in owned:
                rest.merge(selector, definition)
        remaining = generate_scss(rest)
        if remaining:
            blocks.append(remaining)
        return "\n\n".join(blocks)


class BemExtension(StylingExtension):
    """Generates BEM class names and style sheets."""

    metadata = ExtensionMetadata(
        key="bem",
        name="BEM Styling Extension",
        version="1.0.0",
        type=ExtensionType.STYLING,
        description="Block__element--modifier naming with SCSS output",
    )
    styling = StylingApproach.BEM.value

    def __init__(self, element_separator: str = "__", modifier_separator: str = "--"):
        self.element_separator = element_separator
        self.modifier_separator = modifier_separator

    def class_names(self, name: BemName) -> list[str]:
        """``[base, base--mod, ...]`` where base is ``block`` or ``block__element``."""
        base = name.block
        if name.element:
            base = f"{name.block}{self.element_separator}{name.element}"
        return [base, *(f"{base}{self.modifier_separator}{m}" for m in name.modifiers)]

    def resolve_name(self, data: dict[str, Any], inherited_block: str | None) -> BemName | None:
        """BEM name of a node from its ``extensions.bem`` data."""
        if data.get("ignore"):
            return None
        block = data.get("block") or inherited_block
        if not block:
            return None
        modifiers = list(data.get("modifiers") or [])
        if data.get("modifier"):
            modifiers.append(data["modifier"])
        return BemName(block=block, element=data.get("element"), modifiers=modifiers)

    def process_styles(
        self, styling: StylingConcept, context: StyleContext | None = None
    ) -> StylingOutput:
        nodes = context.nodes if context else []
        options = (context.options if context else None) or StyleOptions()

        selectors: dict[int, str] = {}
        tree: OrderedDict[str, dict[str, Any]] = OrderedDict()
        classes: dict[str, list[str]] = {}
        styled: list[tuple[str, ElementNode]] = []

        def walk(children: list[TemplateNode], parent: list[PathSegment], field_name: str,
                 block: str | None) -> None:
            for index, node in enumerate(children):
                path = [*parent, (field_name, index)]
                current_id = node_id(path)
                current_block = block
                if isinstance(node, ElementNode):
                    data = styling.extension_data.get(current_id, {}).get("bem")
                    if data is None:
                        data = node.extensions.get("bem")
                    name = self.resolve_name(data, block) if isinstance(data, dict) else None
                    if name is not None:
                        current_block = name.block
                        names = self.class_names(name)
                        classes[current_id] = names
                        target = names[1] if name.modifiers else names[0]
                        selectors[id(node)] = f".{target}"
                        if node.style_declaration:
                            self._add_to_tree(tree, name, node.style_declaration)
                    if node.style_declaration:
                        styled.append((current_id, node))
                for child_field, grandchildren in child_lists(node):
                    walk(grandchildren, path, child_field, current_block)

        walk(nodes, [], "children", None)

        processor = StyleProcessor(plugins=[BemStylePlugin(selectors, tree)])
        processor.process_tree(nodes)
        styles = processor.generate_output(options, nodes)

        output_format = StyleOutputFormat(options.output_format)
        inline: dict[str, str] = {}
        if output_format == StyleOutputFormat.INLINE:
            for current_id, node in styled:
                merged: dict[str, str] = {}
                raw_style = node.attributes.get("style")
                if isinstance(raw_style, str):
                    merged.update(parse_inline_style(raw_style))
                declarations = processor.get_inline_styles(node)
                if declarations:
                    merged.update(parse_inline_style(declarations))
                inline[current_id] = "; ".join(f"{k}: {v}" for k, v in merged.items())

        logger.debug(f"BEM classes generated for {len(classes)} nodes")
        return StylingOutput(styles=styles, format=output_format, classes=classes, inline=inline)

    def _add_to_tree(
        self,
        tree: "OrderedDict[str, dict[str, Any]]",
        name: BemName,
        declaration: dict[str, Any],
    ) -> None:
        target = tree.setdefault(name.block, {})
        if name.element:
            target = target.setdefault(f"&{self.element_separator}{name.element}", {})
        if name.modifiers:
            target = target.setdefault(f"&{self.modifier_separator}{name.modifiers[0]}", {})
        merge_declaration(target, declaration)
