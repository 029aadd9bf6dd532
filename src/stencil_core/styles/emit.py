"""Built-in style sheet generators."""

from collections import OrderedDict

from .types import (
    StyleDefinition,
    StyleRegistry,
    camel_to_kebab,
    is_media_key,
    is_pseudo_key,
    media_query,
)


def _declarations(values: StyleDefinition, indent: str) -> str:
    return "\n".join(f"{indent}{camel_to_kebab(k)}: {v};" for k, v in values.items())


def inline_declarations(definition: StyleDefinition) -> str | None:
    """Base declarations as ``"prop: value; prop2: value2"``, None if there are none."""
    parts = [
        f"{camel_to_kebab(key)}: {value}"
        for key, value in definition.items()
        if not is_media_key(key) and not is_pseudo_key(key) and not isinstance(value, dict)
    ]
    return "; ".join(parts) if parts else None


def generate_inline(registry: StyleRegistry) -> str:
    """Style block holding only pseudo-class and media rules.

    Base declarations are inlined per element and never repeated here.
    """
    rules: list[str] = []
    for selector, definition in registry.items():
        for key, value in definition.items():
            if not isinstance(value, dict):
                continue
            if is_media_key(key):
                rules.append(
                    f"@media {media_query(key)} {{\n  {selector} {{\n"
                    f"{_declarations(value, '    ')}\n  }}\n}}"
                )
            elif is_pseudo_key(key):
                rules.append(f"{selector}{key} {{\n{_declarations(value, '  ')}\n}}")

    if not rules:
        return ""
    return "<style>\n" + "\n\n".join(rules) + "\n</style>"


def generate_css(registry: StyleRegistry) -> str:
    """Flat CSS: base rules, then pseudo rules, then one block per media query."""
    base_rules: list[str] = []
    pseudo_rules: list[str] = []
    media: OrderedDict[str, list[str]] = OrderedDict()

    for selector, definition in registry.items():
        base: StyleDefinition = {}
        for key, value in definition.items():
            if is_media_key(key) and isinstance(value, dict):
                media.setdefault(media_query(key), []).append(
                    f"  {selector} {{\n{_declarations(value, '    ')}\n  }}"
                )
            elif is_pseudo_key(key) and isinstance(value, dict):
                pseudo_rules.append(f"{selector}{key} {{\n{_declarations(value, '  ')}\n}}")
            elif not isinstance(value, dict):
                base[key] = value
        if base:
            base_rules.append(f"{selector} {{\n{_declarations(base, '  ')}\n}}")

    blocks = base_rules + pseudo_rules
    for query, rules in media.items():
        blocks.append(f"@media {query} {{\n" + "\n".join(rules) + "\n}")
    return "\n\n".join(blocks)


def generate_scss(registry: StyleRegistry) -> str:
    """Nested SCSS using ``&`` for pseudo-classes and media queries."""
    blocks: list[str] = []
    for selector, definition in registry.items():
        rules: list[str] = []
        for key, value in definition.items():
            if is_media_key(key) and isinstance(value, dict):
                rules.append(
                    f"  @media {media_query(key)} {{\n    & {{\n"
                    f"{_declarations(value, '      ')}\n    }}\n  }}"
                )
            elif is_pseudo_key(key) and isinstance(value, dict):
                rules.append(f"  &{key} {{\n{_declarations(value, '    ')}\n  }}")
            elif not isinstance(value, dict):
                rules.append(f"  {camel_to_kebab(key)}: {value};")
        if rules:
            blocks.append(f"{selector} {{\n" + "\n".join(rules) + "\n}")
    return "\n\n".join(blocks)
