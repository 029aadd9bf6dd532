"""Built-in extensions."""

from .bem import BemExtension, BemStylePlugin
from .events import EventNormalizationUtility
from .react import ReactExtension
from .svelte import SvelteExtension
from .tailwind import TailwindExtension
from .vue import VueExtension


def builtin_extensions() -> list:
    """Fresh instances of every built-in extension."""
    return [
        ReactExtension(),
        VueExtension(),
        SvelteExtension(),
        BemExtension(),
        TailwindExtension(),
        EventNormalizationUtility(),
    ]


__all__ = [
    "ReactExtension",
    "VueExtension",
    "SvelteExtension",
    "BemExtension",
    "BemStylePlugin",
    "TailwindExtension",
    "EventNormalizationUtility",
    "builtin_extensions",
]
