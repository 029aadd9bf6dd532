"""Tailwind styling extension."""

import logging
from typing import Any

from stencil_core.analyzer import parse_inline_style
from stencil_core.concepts import StylingConcept
from stencil_core.nodes import ElementNode, PathSegment, TemplateNode, child_lists, node_id
from stencil_core.styles import camel_to_kebab, inline_declarations
from stencil_core.types import ExtensionType, StyleOutputFormat, StylingApproach

from ...base import StylingExtension
from ...types import ExtensionMetadata, StyleContext, StylingOutput
from .css import OUTPUT_STRATEGIES, CssGenerator
from .parser import UtilityParser
from .tokens import TailwindTokens

logger = logging.getLogger(__name__)

UNKNOWN_CLASS_HANDLING = ("warn", "error", "ignore")

_DISPLAY_CLASSES = {"flex": "flex", "block": "block", "inline": "inline", "none": "hidden"}


def _reverse(table: dict[str, str], prefix: str) -> dict[str, str]:
    return {value.lower(): f"{prefix}-{name}" for name, value in table.items()}


def convert_css_to_tailwind(
    styles: dict[str, Any], tokens: TailwindTokens | None = None
) -> tuple[list[str], dict[str, Any]]:
    """Map CSS declarations onto utilities where a token matches exactly.

    The conversion is lossy: declarations without an exact token match are
    returned unchanged in ``remaining``.

    Args:
        styles: Property -> value (camelCase or kebab-case keys)
        tokens: Token tables (defaults if omitted)

    Returns:
        (utility classes, remaining declarations)
    """
    tokens = tokens or TailwindTokens()
    converters = {
        "background-color": _reverse(tokens.colors, "bg"),
        "color": _reverse(tokens.colors, "text"),
        "font-size": _reverse(tokens.font_sizes, "text"),
        "padding": _reverse(tokens.spacing, "p"),
        "margin": _reverse(tokens.spacing, "m"),
        "display": _DISPLAY_CLASSES,
    }

    classes: list[str] = []
    remaining: dict[str, Any] = {}
    for prop, value in styles.items():
        table = converters.get(camel_to_kebab(prop))
        utility = None
        if table and not isinstance(value, dict):
            utility = table.get(str(value).strip().lower())
        if utility:
            classes.append(utility)
        else:
            remaining[prop] = value
    return classes, remaining


def node_classes(data: dict[str, Any]) -> list[str]:
    """Classes declared under a node's ``extensions.tailwind``.

    ``{"class": "p-4", "responsive": {"md": "p-8"}, "variants": {"hover": ["bg-blue-600"]}}``
    gives ``["p-4", "md:p-8", "hover:bg-blue-600"]``.
    """

    def split(value: Any) -> list[str]:
        if isinstance(value, str):
            return value.split()
        return [str(item) for item in value or []]

    classes = split(data.get("class"))
    for group in ("responsive", "variants"):
        for prefix, value in (data.get(group) or {}).items():
            classes.extend(f"{prefix}:{name}" for name in split(value))
    return classes


class TailwindExtension(StylingExtension):
    """Validates utility classes and emits fallback CSS for them.

    Args:
        output_strategy: css, scss-apply or pass-through
        unknown_class_handling: warn (keep, prefixed), error (raise) or ignore (drop)
        custom_class_prefix: Prefix of kept unknown classes under ``warn``
        config: Tailwind-style config mapping for the token tables
    """

    metadata = ExtensionMetadata(
        key="tailwind",
        name="Tailwind Styling Extension",
        version="1.0.0",
        type=ExtensionType.STYLING,
        description="Utility-class validation and CSS generation",
    )
    styling = StylingApproach.TAILWIND.value

    def __init__(
        self,
        output_strategy: str = "css",
        unknown_class_handling: str = "warn",
        custom_class_prefix: str = "custom",
        config: dict[str, Any] | None = None,
    ):
        if output_strategy not in OUTPUT_STRATEGIES:
            raise ValueError(f"Unknown Tailwind output strategy: {output_strategy}")
        if unknown_class_handling not in UNKNOWN_CLASS_HANDLING:
            raise ValueError(f"Unknown class handling mode: {unknown_class_handling}")
        self.output_strategy = output_strategy
        self.unknown_class_handling = unknown_class_handling
        self.custom_class_prefix = custom_class_prefix
        self.tokens = TailwindTokens.from_config(config)
        self.parser = UtilityParser(self.tokens)
        self.generator = CssGenerator(self.tokens)

    def resolve_classes(self, classes: list[str]) -> dict[str, str | None]:
        """Apply the unknown-class policy to each distinct class.

        Returns:
            class -> class to emit (None when dropped)

        Raises:
            ValueError: Unknown class under the ``error`` policy
        """
        resolved: dict[str, str | None] = {}
        for class_name in classes:
            if class_name in resolved:
                continue
            if self.output_strategy == "pass-through":
                resolved[class_name] = class_name
                continue
            validation = self.parser.validate_utility(class_name)
            if validation.valid:
                resolved[class_name] = class_name
            elif self.unknown_class_handling == "error":
                raise ValueError(f"Unknown Tailwind class: {class_name} ({validation.error})")
            elif self.unknown_class_handling == "warn":
                logger.warning(f"Unknown Tailwind class: {class_name} ({validation.error})")
                resolved[class_name] = f"{self.custom_class_prefix}-{class_name}"
            else:
                resolved[class_name] = None
        return resolved

    def process_styles(
        self, styling: StylingConcept, context: StyleContext | None = None
    ) -> StylingOutput:
        node_extra: dict[str, list[str]] = {}
        inline: dict[str, str] = {}

        def walk(children: list[TemplateNode], parent: list[PathSegment], field_name: str) -> None:
            for index, node in enumerate(children):
                path = [*parent, (field_name, index)]
                current_id = node_id(path)
                if isinstance(node, ElementNode):
                    extra: list[str] = []
                    data = styling.extension_data.get(current_id, {}).get("tailwind")
                    if data is None:
                        data = node.extensions.get("tailwind")
                    if isinstance(data, dict):
                        extra.extend(node_classes(data))

                    declarations: dict[str, Any] = {}
                    raw_style = node.attributes.get("style")
                    if isinstance(raw_style, str):
                        declarations.update(parse_inline_style(raw_style))
                    if node.style_declaration:
                        base = inline_declarations(node.style_declaration)
                        if base:
                            declarations.update(parse_inline_style(base))
                    if declarations:
                        converted, remaining = convert_css_to_tailwind(declarations, self.tokens)
                        extra.extend(converted)
                        if remaining:
                            inline[current_id] = "; ".join(
                                f"{prop}: {value}" for prop, value in remaining.items()
                            )
                        else:
                            inline[current_id] = ""
                    if extra:
                        node_extra[current_id] = extra
                for child_field, grandchildren in child_lists(node):
                    walk(grandchildren, path, child_field)

        walk(context.nodes if context else [], [], "children")

        candidates = [*styling.static_classes, *(c for extra in node_extra.values() for c in extra)]
        resolved = self.resolve_classes(candidates)
        classes = {
            current_id: [resolved[c] for c in extra if resolved[c]]
            for current_id, extra in node_extra.items()
        }
        valid = [name for name, emitted in resolved.items() if emitted == name]

        styles = self.generator.generate(self.parser.parse_utilities(valid), self.output_strategy)
        output_format = StyleOutputFormat.CSS
        if self.output_strategy == "scss-apply":
            output_format = StyleOutputFormat.SCSS
        return StylingOutput(styles=styles, format=output_format, classes=classes, inline=inline)
