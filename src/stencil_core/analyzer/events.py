"""Event extraction from expression attributes."""

import re

from stencil_core.concepts import Event

_CALL_ARGUMENTS = re.compile(r"[\w$.]+\s*\(([^)]*)\)")
_CALLEE = re.compile(r"^\s*([\w$.]+)\s*(?:\(|$)")

# Prefix -> modifier delimiter. Unlisted prefixes use ".".
_MODIFIER_DELIMITERS = {"on:": "|", "@": ".", "v-on:": "."}


def parse_handler_parameters(handler: str) -> list[str]:
    """Positional parameters of the first function call in a handler expression.

    ``"select(item.id, $event)"`` -> ``["item.id", "$event"]``. Arrow-function
    parameter lists are not calls: ``"() => save(item)"`` -> ``["item"]``. A
    bare identifier yields ``[]``.
    """
    match = _CALL_ARGUMENTS.search(handler)
    if not match:
        return []
    return [part.strip() for part in match.group(1).split(",") if part.strip()]


def handler_callee(handler: str) -> str | None:
    """Function a handler calls: ``"select(item.id)"`` and ``"select"`` -> ``"select"``.

    None for anything that is not a plain call or reference (arrow functions,
    statements).
    """
    match = _CALLEE.match(handler)
    return match.group(1) if match else None


class EventExtractor:
    """Recognises event bindings by attribute-key prefix."""

    def __init__(self, prefixes: list[str]):
        # Longest prefix first, so "on:" is tried before "on"
        self._prefixes = sorted(prefixes, key=len, reverse=True)

    def match(self, key: str) -> tuple[str, list[str]] | None:
        """Split an attribute key into (canonical name, modifiers).

        Returns:
            None when the key is not an event binding
        """
        for prefix in self._prefixes:
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            if not rest:
                continue
            if prefix == "on":
                # React style: onClick, onKeyDown
                if not rest[0].isupper():
                    continue
                return rest.lower(), []
            delimiter = _MODIFIER_DELIMITERS.get(prefix, ".")
            name, *modifiers = rest.split(delimiter)
            if not name:
                continue
            return name.lower(), [m for m in modifiers if m]
        return None

    def is_event_key(self, key: str) -> bool:
        return self.match(key) is not None

    def extract(self, expression_attributes: dict[str, str], node_id: str) -> list[Event]:
        """Events of one element, in attribute order."""
        events: list[Event] = []
        for key, handler in expression_attributes.items():
            matched = self.match(key)
            if matched is None:
                continue
            name, modifiers = matched
            events.append(
                Event(
                    name=name,
                    handler=handler,
                    parameters=parse_handler_parameters(handler),
                    modifiers=modifiers,
                    node_id=node_id,
                )
            )
        return events
