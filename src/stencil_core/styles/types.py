"""Style engine types."""

import re
from collections import OrderedDict
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from stencil_core.types import StyleOutputFormat

StyleDefinition = dict[str, Any]

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def camel_to_kebab(name: str) -> str:
    """``fontSize`` -> ``font-size``; already-hyphenated names pass through."""
    return _CAMEL_BOUNDARY.sub(r"\1-\2", name).lower()


def is_media_key(key: str) -> bool:
    return key.startswith("@media")


def is_pseudo_key(key: str) -> bool:
    return key.startswith(":")


def is_nested_key(key: str) -> bool:
    return is_media_key(key) or is_pseudo_key(key)


def media_query(key: str) -> str:
    """Query text of an ``@media`` key, always parenthesised once.

    ``"@media (min-width: 768px)"`` and ``"@media min-width: 768px"`` both give
    ``"(min-width: 768px)"``.
    """
    query = key[len("@media"):].strip()
    if query.startswith("("):
        return query
    return f"({query})"


@dataclass
class StyleOptions:
    """Options of the style engine.

    Attributes:
        output_format: inline, css or scss
    """

    output_format: StyleOutputFormat | str = StyleOutputFormat.CSS

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "StyleOptions":
        if not data:
            return cls()
        value = data.get("output_format", data.get("outputFormat", StyleOutputFormat.CSS))
        return cls(output_format=value)


class StyleRegistry:
    """Ordered map of selector -> merged style definition for one render pass."""

    def __init__(self) -> None:
        self._styles: OrderedDict[str, StyleDefinition] = OrderedDict()

    def merge(self, selector: str, declaration: StyleDefinition) -> StyleDefinition:
        """Deep-merge a declaration into the entry for a selector.

        ``@media`` and ``:pseudo`` keys merge their nested maps (new values win
        per property); every other key is overwritten.
        """
        merged = dict(self._styles.get(selector, {}))
        for key, value in declaration.items():
            if is_nested_key(key) and isinstance(value, dict):
                existing = merged.get(key)
                nested = dict(existing) if isinstance(existing, dict) else {}
                nested.update(value)
                merged[key] = nested
            else:
                merged[key] = value
        self._styles[selector] = merged
        return merged

    def get(self, selector: str) -> StyleDefinition | None:
        return self._styles.get(selector)

    def items(self) -> Iterator[tuple[str, StyleDefinition]]:
        return iter(list(self._styles.items()))

    def selectors(self) -> list[str]:
        return list(self._styles)

    def clear(self) -> None:
        self._styles.clear()

    def __len__(self) -> int:
        return len(self._styles)

    def __contains__(self, selector: object) -> bool:
        return selector in self._styles
