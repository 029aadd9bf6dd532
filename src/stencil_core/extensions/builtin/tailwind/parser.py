"""Parsing and validation of Tailwind utility classes."""

from dataclasses import dataclass, field

from .tokens import AFFECTED_PROPERTIES, UTILITY_PREFIXES, VARIANTS, TailwindTokens


@dataclass
class ParsedUtility:
    """One utility class split into its parts.

    ``md:hover:bg-blue-500`` -> responsive ``md``, variants ``["hover"]``,
    base ``bg-blue-500``.
    """

    base: str
    responsive: str | None = None
    variants: list[str] = field(default_factory=list)
    original: str = ""


@dataclass
class UtilityValidation:
    valid: bool
    error: str | None = None
    properties: list[str] = field(default_factory=list)


def utility_prefix(base: str) -> str | None:
    """Longest known prefix of a base utility (``max-w-lg`` -> ``max-w``)."""
    matches = [p for p in UTILITY_PREFIXES if base == p or base.startswith(p + "-")]
    return max(matches, key=len) if matches else None


class UtilityParser:
    """Splits utility classes into breakpoint, variants and base."""

    def __init__(self, tokens: TailwindTokens | None = None):
        self.tokens = tokens or TailwindTokens()

    def parse_utility_class(self, class_name: str) -> ParsedUtility:
        *prefixes, base = class_name.split(":")
        responsive = None
        variants: list[str] = []

        # Right to left: the innermost breakpoint wins
        for prefix in reversed(prefixes):
            if prefix in self.tokens.breakpoints and responsive is None:
                responsive = prefix
            else:
                variants.insert(0, prefix)

        return ParsedUtility(
            base=base, responsive=responsive, variants=variants, original=class_name
        )

    def parse_utilities(self, class_names: str | list[str]) -> list[ParsedUtility]:
        """Parse a space-separated string or a list of classes."""
        if isinstance(class_names, str):
            classes = class_names.split()
        else:
            classes = [name.strip() for name in class_names if name and name.strip()]
        return [self.parse_utility_class(name) for name in classes]

    def validate_utility(self, class_name: str) -> UtilityValidation:
        parsed = self.parse_utility_class(class_name)

        prefix = utility_prefix(parsed.base)
        if prefix is None:
            return UtilityValidation(
                valid=False, error=f"Unknown utility prefix: {parsed.base.split('-')[0]}"
            )

        for variant in parsed.variants:
            if variant in VARIANTS:
                continue
            if variant in self.tokens.breakpoints:
                return UtilityValidation(valid=False, error=f"Unknown breakpoint: {variant}")
            return UtilityValidation(valid=False, error=f"Unknown variant: {variant}")

        return UtilityValidation(valid=True, properties=self.affected_properties(parsed.base))

    def affected_properties(self, utility: str) -> list[str]:
        """CSS properties a utility may set."""
        base = utility.rsplit(":", 1)[-1]
        prefix = utility_prefix(base) or base.split("-")[0]
        return list(AFFECTED_PROPERTIES.get(prefix, [prefix]))
