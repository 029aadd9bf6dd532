"""Fallback CSS generation for Tailwind utilities.

Only the utilities covered by the token tables produce declarations; the
rest are dropped from the generated sheet.
"""

import re
from collections import OrderedDict
from dataclasses import dataclass, field

from .parser import ParsedUtility, utility_prefix
from .tokens import TailwindTokens

OUTPUT_STRATEGIES = ("css", "scss-apply", "pass-through")

WIDTHS = {
    "auto": "auto",
    "full": "100%",
    "1/2": "50%",
    "1/3": "33.333333%",
    "2/3": "66.666667%",
    "1/4": "25%",
    "3/4": "75%",
}
HEIGHTS = {"auto": "auto", "full": "100%", "screen": "100vh"}
FLEX = {
    "": ["display: flex"],
    "col": ["display: flex", "flex-direction: column"],
    "row": ["display: flex", "flex-direction: row"],
    "wrap": ["flex-wrap: wrap"],
    "1": ["flex: 1 1 0%"],
}
RADII = {
    "": "0.25rem",
    "sm": "0.125rem",
    "md": "0.375rem",
    "lg": "0.5rem",
    "xl": "0.75rem",
    "full": "9999px",
}
SHADOWS = {
    "": "0 1px 3px 0 rgb(0 0 0 / 0.1), 0 1px 2px -1px rgb(0 0 0 / 0.1)",
    "sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
    "md": "0 4px 6px -1px rgb(0 0 0 / 0.1), 0 2px 4px -2px rgb(0 0 0 / 0.1)",
    "lg": "0 10px 15px -3px rgb(0 0 0 / 0.1), 0 4px 6px -4px rgb(0 0 0 / 0.1)",
}
RINGS = {
    "": "0 0 0 3px rgb(59 130 246 / 0.5)",
    "1": "0 0 0 1px rgb(59 130 246 / 0.5)",
    "2": "0 0 0 2px rgb(59 130 246 / 0.5)",
    "4": "0 0 0 4px rgb(59 130 246 / 0.5)",
}
SPACING_PROPERTIES = {
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
}

_SELECTOR_SPECIALS = re.compile(r"([:/.\[\]%])")


def class_selector(class_name: str) -> str:
    """``md:hover:p-4`` -> ``.md\\:hover\\:p-4``."""
    return "." + _SELECTOR_SPECIALS.sub(r"\\\1", class_name)


@dataclass
class UtilityGroups:
    """Utilities grouped by scope, in first-seen order."""

    base: list[ParsedUtility] = field(default_factory=list)
    variants: "OrderedDict[str, list[ParsedUtility]]" = field(default_factory=OrderedDict)
    responsive: "OrderedDict[str, list[ParsedUtility]]" = field(default_factory=OrderedDict)


class CssGenerator:
    """Turns parsed utilities into CSS, SCSS ``@apply`` or pass-through text."""

    def __init__(self, tokens: TailwindTokens | None = None):
        self.tokens = tokens or TailwindTokens()

    def generate(self, utilities: list[ParsedUtility], strategy: str = "css") -> str:
        """Generate style text.

        Args:
            utilities: Parsed utilities
            strategy: css, scss-apply or pass-through

        Raises:
            ValueError: For an unknown strategy
        """
        if strategy not in OUTPUT_STRATEGIES:
            raise ValueError(f"Unknown Tailwind output strategy: {strategy}")
        if strategy == "pass-through":
            return " ".join(u.original for u in utilities)
        if strategy == "scss-apply":
            return self.generate_scss_apply(utilities)
        return self.generate_css(utilities)

    def group_by_scope(self, utilities: list[ParsedUtility]) -> UtilityGroups:
        groups = UtilityGroups()
        for utility in utilities:
            if utility.responsive:
                groups.responsive.setdefault(utility.responsive, []).append(utility)
            elif utility.variants:
                for variant in utility.variants:
                    groups.variants.setdefault(variant, []).append(utility)
            else:
                groups.base.append(utility)
        return groups

    def generate_css(self, utilities: list[ParsedUtility]) -> str:
        """One rule per utility: base, then variants, then media blocks."""
        groups = self.group_by_scope(utilities)
        blocks: list[str] = []

        for utility in groups.base:
            rule = self._rule(utility, "")
            if rule:
                blocks.append(rule)

        for variant, members in groups.variants.items():
            for utility in members:
                rule = self._rule(utility, f":{variant}")
                if rule:
                    blocks.append(rule)

        for breakpoint, members in groups.responsive.items():
            min_width = self.tokens.breakpoints.get(breakpoint, "768px")
            rules = []
            for utility in members:
                pseudo = "".join(f":{variant}" for variant in utility.variants)
                rule = self._rule(utility, pseudo, indent="  ")
                if rule:
                    rules.append(rule)
            if rules:
                blocks.append(f"@media (min-width: {min_width}) {{\n" + "\n".join(rules) + "\n}")

        return "\n\n".join(blocks)

    def generate_scss_apply(self, utilities: list[ParsedUtility]) -> str:
        groups = self.group_by_scope(utilities)
        lines: list[str] = []
        if groups.base:
            lines.append("@apply " + " ".join(u.original for u in groups.base) + ";")
        for variant, members in groups.variants.items():
            lines.append(f"&:{variant} {{")
            lines.append("  @apply " + " ".join(u.original for u in members) + ";")
            lines.append("}")
        for breakpoint, members in groups.responsive.items():
            min_width = self.tokens.breakpoints.get(breakpoint, "768px")
            lines.append(f"@media (min-width: {min_width}) {{")
            lines.append("  @apply " + " ".join(u.original for u in members) + ";")
            lines.append("}")
        return "\n".join(lines)

    def _rule(self, utility: ParsedUtility, pseudo: str, indent: str = "") -> str | None:
        declarations = self.declarations(utility)
        if not declarations:
            return None
        body = "\n".join(f"{indent}  {declaration};" for declaration in declarations)
        return f"{indent}{class_selector(utility.original)}{pseudo} {{\n{body}\n{indent}}}"

    def declarations(self, utility: ParsedUtility) -> list[str]:
        """CSS declarations (``"prop: value"``) of a base utility; [] if unmapped."""
        base = utility.base
        prefix = utility_prefix(base)
        if prefix is None:
            return []
        value = base[len(prefix) + 1:] if base != prefix else ""
        colors = self.tokens.colors
        spacing = self.tokens.spacing

        if prefix == "bg":
            return [f"background-color: {colors[value]}"] if value in colors else []
        if prefix == "text":
            if value in colors:
                return [f"color: {colors[value]}"]
            if value in self.tokens.font_sizes:
                return [f"font-size: {self.tokens.font_sizes[value]}"]
            return []
        if prefix in SPACING_PROPERTIES:
            if value == "auto" and prefix.startswith("m"):
                size = "auto"
            elif value in spacing:
                size = spacing[value]
            else:
                return []
            return [f"{prop}: {size}" for prop in SPACING_PROPERTIES[prefix]]
        if prefix in ("w", "h"):
            prop = "width" if prefix == "w" else "height"
            keywords = WIDTHS if prefix == "w" else HEIGHTS
            if value in spacing:
                return [f"{prop}: {spacing[value]}"]
            if value in keywords:
                return [f"{prop}: {keywords[value]}"]
            if value.isdigit():
                return [f"{prop}: {int(value) * 0.25:g}rem"]
            return []
        if prefix == "flex":
            return list(FLEX.get(value, FLEX[""]))
        if prefix == "hidden":
            return ["display: none"]
        if prefix in ("block", "inline") and not value:
            return [f"display: {prefix}"]
        if prefix == "rounded":
            return [f"border-radius: {RADII.get(value, RADII[''])}"]
        if prefix == "border":
            if not value:
                return ["border-width: 1px"]
            return [f"border-color: {colors[value]}"] if value in colors else []
        if prefix == "shadow":
            return [f"box-shadow: {SHADOWS.get(value, SHADOWS[''])}"]
        if prefix == "ring":
            return [f"box-shadow: {RINGS.get(value, RINGS[''])}"]
        if prefix == "outline":
            return ["outline: none"] if value == "none" else []
        if prefix in ("absolute", "relative", "fixed", "sticky") and not value:
            return [f"position: {prefix}"]
        if prefix == "opacity" and value.isdigit():
            return [f"opacity: {int(value) / 100:g}"]
        return []
