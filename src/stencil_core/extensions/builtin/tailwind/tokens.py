"""Design tokens used to map utilities to CSS."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_BREAKPOINTS = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}

DEFAULT_COLORS = {
    "red-500": "#ef4444",
    "blue-500": "#3b82f6",
    "blue-600": "#2563eb",
    "green-500": "#10b981",
    "yellow-500": "#eab308",
    "purple-500": "#a855f7",
    "pink-500": "#ec4899",
    "indigo-500": "#6366f1",
    "gray-500": "#6b7280",
    "gray-800": "#1f2937",
    "white": "#ffffff",
    "black": "#000000",
}

DEFAULT_SPACING = {
    "0": "0px",
    "1": "0.25rem",
    "2": "0.5rem",
    "3": "0.75rem",
    "4": "1rem",
    "5": "1.25rem",
    "6": "1.5rem",
    "8": "2rem",
    "10": "2.5rem",
    "12": "3rem",
}

DEFAULT_FONT_SIZES = {
    "xs": "0.75rem",
    "sm": "0.875rem",
    "base": "1rem",
    "lg": "1.125rem",
    "xl": "1.25rem",
    "2xl": "1.5rem",
}

VARIANTS = frozenset(
    {
        "hover", "focus", "active", "disabled", "first", "last", "odd", "even",
        "visited", "checked", "invalid", "required", "group-hover", "group-focus",
        "focus-within", "focus-visible", "motion-safe", "motion-reduce", "dark",
        "print", "portrait", "landscape", "first-letter", "first-line", "selection",
        "file", "marker", "before", "after",
    }
)

UTILITY_PREFIXES = frozenset(
    {
        "bg", "text", "border", "rounded", "shadow", "outline", "ring",
        "p", "px", "py", "pt", "pr", "pb", "pl",
        "m", "mx", "my", "mt", "mr", "mb", "ml",
        "w", "h", "max-w", "max-h", "min-w", "min-h",
        "flex", "grid", "block", "hidden", "inline",
        "absolute", "relative", "fixed", "sticky",
        "top", "right", "bottom", "left", "z", "opacity", "font",
    }
)

# Utility prefix -> CSS properties it may set
AFFECTED_PROPERTIES = {
    "bg": ["background-color", "background-image", "background-size"],
    "text": ["color", "font-size", "text-align", "text-decoration"],
    "border": ["border-width", "border-color", "border-style"],
    "rounded": ["border-radius"],
    "shadow": ["box-shadow"],
    "p": ["padding"],
    "px": ["padding-left", "padding-right"],
    "py": ["padding-top", "padding-bottom"],
    "pt": ["padding-top"],
    "pr": ["padding-right"],
    "pb": ["padding-bottom"],
    "pl": ["padding-left"],
    "m": ["margin"],
    "mx": ["margin-left", "margin-right"],
    "my": ["margin-top", "margin-bottom"],
    "mt": ["margin-top"],
    "mr": ["margin-right"],
    "mb": ["margin-bottom"],
    "ml": ["margin-left"],
    "w": ["width"],
    "h": ["height"],
    "max-w": ["max-width"],
    "max-h": ["max-height"],
    "min-w": ["min-width"],
    "min-h": ["min-height"],
    "flex": ["display", "flex-direction", "flex-wrap", "flex-grow", "flex-shrink"],
    "grid": ["display", "grid-template-columns", "grid-template-rows"],
    "block": ["display"],
    "hidden": ["display"],
    "inline": ["display"],
    "absolute": ["position"],
    "relative": ["position"],
    "fixed": ["position"],
    "sticky": ["position"],
    "top": ["top"],
    "right": ["right"],
    "bottom": ["bottom"],
    "left": ["left"],
    "z": ["z-index"],
    "opacity": ["opacity"],
    "font": ["font-family", "font-weight", "font-size"],
}


def _flatten_colors(colors: dict[str, Any]) -> dict[str, str]:
    flat: dict[str, str] = {}
    for name, value in colors.items():
        if isinstance(value, str):
            flat[name] = value
        elif isinstance(value, dict):
            for shade, hex_value in value.items():
                if isinstance(hex_value, str):
                    flat[f"{name}-{shade}"] = hex_value
    return flat


@dataclass
class TailwindTokens:
    """Token tables; each falls back to the built-in defaults."""

    breakpoints: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BREAKPOINTS))
    colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    spacing: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SPACING))
    font_sizes: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FONT_SIZES))

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> "TailwindTokens":
        """Build tokens from a Tailwind-style ``{"theme": {...}}`` mapping."""
        theme = (config or {}).get("theme") or {}
        tokens = cls()

        screens = theme.get("screens") or {}
        if screens:
            tokens.breakpoints = {}
            for name, value in screens.items():
                if isinstance(value, str):
                    tokens.breakpoints[name] = value
                elif isinstance(value, dict) and value.get("min"):
                    tokens.breakpoints[name] = value["min"]

        colors = theme.get("colors") or {}
        if colors:
            tokens.colors = _flatten_colors(colors)

        spacing = theme.get("spacing") or {}
        if spacing:
            tokens.spacing = {str(k): str(v) for k, v in spacing.items()}

        font_sizes = theme.get("fontSize") or {}
        if font_sizes:
            tokens.font_sizes = {}
            for name, value in font_sizes.items():
                if isinstance(value, str):
                    tokens.font_sizes[name] = value
                elif isinstance(value, (list, tuple)) and value:
                    tokens.font_sizes[name] = str(value[0])

        return tokens
