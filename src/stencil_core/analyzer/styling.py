"""Styling extraction: classes, inline styles and style bindings."""

from typing import Any

from stencil_core.concepts import StylingConcept
from stencil_core.nodes import ElementNode

# Highest precedence first
CLASS_BINDING_KEYS = (":class", "v-bind:class", "class", "className")
STYLE_BINDING_KEYS = (":style", "v-bind:style", "style")

STATIC_STYLING_KEYS = frozenset({"class", "style", "styles"})
EXPRESSION_STYLING_KEYS = frozenset(CLASS_BINDING_KEYS + STYLE_BINDING_KEYS)


def parse_inline_style(value: str) -> dict[str, str]:
    """Parse ``"color: red; font-size: 16px"`` into a property map."""
    styles: dict[str, str] = {}
    for declaration in value.split(";"):
        if ":" not in declaration:
            continue
        prop, _, val = declaration.partition(":")
        prop, val = prop.strip(), val.strip()
        if prop and val:
            styles[prop] = val
    return styles


def _base_declarations(style: dict[str, Any]) -> dict[str, str]:
    return {
        prop: str(value)
        for prop, value in style.items()
        if not isinstance(value, dict)
    }


class StylingExtractor:
    """Accumulates the styling of each element into one StylingConcept."""

    def extract(self, node: ElementNode, node_id: str, styling: StylingConcept) -> None:
        styling.static_classes.extend(node.class_names)

        bound_classes = [
            node.expression_attributes[key]
            for key in CLASS_BINDING_KEYS
            if key in node.expression_attributes
        ]
        if bound_classes:
            styling.dynamic_classes.extend(bound_classes)
            styling.style_bindings["class"] = bound_classes[0]

        style = node.attributes.get("style")
        if isinstance(style, str):
            styling.inline_styles.update(parse_inline_style(style))
        declaration = node.style_declaration
        if declaration:
            styling.inline_styles.update(_base_declarations(declaration))

        for key in STYLE_BINDING_KEYS:
            if key in node.expression_attributes:
                styling.style_bindings["style"] = node.expression_attributes[key]
                break

        if node.extensions:
            styling.extension_data[node_id] = dict(node.extensions)
