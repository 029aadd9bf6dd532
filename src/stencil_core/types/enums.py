"""Shared enumerations for stencil."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class Severity(str, Enum):
    """Severity of a collected processing issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class NodeType(str, Enum):
    """Template node variants."""

    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    CONDITIONAL = "if"
    ITERATION = "for"
    SLOT = "slot"
    FRAGMENT = "fragment"


class ExtensionType(str, Enum):
    """Extension kinds accepted by the registry."""

    FRAMEWORK = "framework"
    STYLING = "styling"
    UTILITY = "utility"


class FrameworkSyntax(str, Enum):
    """Target syntaxes a framework extension can declare."""

    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"


class StylingApproach(str, Enum):
    """Styling approaches known to the registry."""

    BEM = "bem"
    TAILWIND = "tailwind"
    CSS_MODULES = "css-modules"
    STYLED_COMPONENTS = "styled-components"


class StyleOutputFormat(str, Enum):
    """Output formats of the style processing engine."""

    INLINE = "inline"
    CSS = "css"
    SCSS = "scss"
