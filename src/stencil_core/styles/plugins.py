"""Style plugin base class.

A style plugin can intervene at two points:
1. on_process_node - rewrite the selector a node's styles are stored under
2. generate_styles - produce the whole style sheet instead of the built-in
   generators
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from stencil_core.nodes import ElementNode, TemplateNode

    from .types import StyleOptions, StyleRegistry


class StylePlugin:
    """Base class for style plugins.

    Attributes:
        name: Plugin name used in log messages
        fail_open: If True, errors are logged and the plugin is skipped
    """

    name: str = "base"
    fail_open: bool = True

    def __init__(self, config: dict[str, Any] | None = None):
        self.config = config or {}

    def on_process_node(self, node: "ElementNode", selector: str) -> str | None:
        """Return a replacement selector, or None to keep ``selector``."""
        return None

    def generate_styles(
        self,
        registry: "StyleRegistry",
        options: "StyleOptions",
        tree: "list[TemplateNode] | None" = None,
    ) -> str | None:
        """Return the complete style output, or None/"" to defer."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
