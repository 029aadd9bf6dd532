"""Style Processing Engine - selector resolution, deep merge and style sheet emission."""

import logging

from stencil_core.errors import ErrorCollector, create_error
from stencil_core.logging.logger import StencilLogger
from stencil_core.nodes import ElementNode, TemplateNode, child_lists
from stencil_core.types import LogLevel, StyleOutputFormat

from .emit import generate_css, generate_inline, generate_scss, inline_declarations
from .plugins import StylePlugin
from .types import StyleOptions, StyleRegistry

logger = logging.getLogger(__name__)

STAGE = "style-processor"


def resolve_selector(node: ElementNode) -> str | None:
    """``.`` + first class token, else the tag name, else None."""
    classes = node.class_names
    if classes:
        return f".{classes[0]}"
    if node.tag:
        return node.tag
    return None


class StyleProcessor:
    """Collects element style declarations into a StyleRegistry and emits them.

    One processor serves one render pass at a time; call reset() (or
    process_tree(), which resets) before a new pass.
    """

    def __init__(
        self,
        plugins: list[StylePlugin] | None = None,
        logger: StencilLogger | None = None,
        error_collector: ErrorCollector | None = None,
    ):
        """Initialize processor.

        Args:
            plugins: Style plugins, consulted in order
            logger: Optional logger
            error_collector: Collector for warnings (a private one by default)
        """
        self._plugins = list(plugins or [])
        self._logger = logger
        self._errors = error_collector or ErrorCollector()
        self.registry = StyleRegistry()

    def _log(self, level: LogLevel, message: str, context: dict | None = None) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "styles", message, context)

    @property
    def plugins(self) -> list[StylePlugin]:
        return list(self._plugins)

    def add_plugin(self, plugin: StylePlugin) -> None:
        self._plugins.append(plugin)

    def get_errors(self) -> ErrorCollector:
        return self._errors

    def reset(self) -> None:
        """Start a new render pass."""
        self.registry = StyleRegistry()

    def has_styles(self) -> bool:
        return len(self.registry) > 0

    def process_node(self, node: TemplateNode, node_id: str | None = None) -> str | None:
        """Merge a node's style declaration into the registry.

        Args:
            node: Any template node; only styled elements are processed
            node_id: Identity used for warnings

        Returns:
            The selector the declaration was stored under, or None
        """
        if not isinstance(node, ElementNode):
            return None
        declaration = node.style_declaration
        if not declaration:
            return None

        selector = resolve_selector(node)
        if selector is None:
            self._errors.add_warning(
                "Node has styles but no selector found", node_id, STAGE
            )
            self._log(LogLevel.WARN, "Node has styles but no selector found", {"node_id": node_id})
            return None

        for plugin in self._plugins:
            try:
                replacement = plugin.on_process_node(node, selector)
            except Exception as e:
                if not plugin.fail_open:
                    raise
                logger.warning(f"Style plugin {plugin.name} error in on_process_node: {e}")
                continue
            if isinstance(replacement, str) and replacement:
                logger.debug(f"Selector transformed by {plugin.name}: {selector} -> {replacement}")
                selector = replacement

        self.registry.merge(selector, declaration)
        return selector

    def process_tree(self, nodes: list[TemplateNode]) -> None:
        """Reset, then process every node of a tree in pre-order."""
        self.reset()
        self._process_all(nodes)

    def _process_all(self, nodes: list[TemplateNode]) -> None:
        for node in nodes:
            self.process_node(node)
            for _, children in child_lists(node):
                self._process_all(children)

    def generate_output(
        self,
        options: StyleOptions | None = None,
        original_tree: list[TemplateNode] | None = None,
    ) -> str:
        """Emit the registry in the requested format.

        Plugin output, when non-empty, is used verbatim.

        Args:
            options: Style options (CSS by default)
            original_tree: Tree the registry was built from, passed to plugins

        Returns:
            Style output text

        Raises:
            StencilError: STYLE_FORMAT_UNSUPPORTED for an unknown format
        """
        options = options or StyleOptions()

        for plugin in self._plugins:
            try:
                output = plugin.generate_styles(self.registry, options, original_tree)
            except Exception as e:
                if not plugin.fail_open:
                    raise
                logger.warning(f"Style plugin {plugin.name} error in generate_styles: {e}")
                continue
            if output:
                self._log(LogLevel.DEBUG, f"Using style output from plugin '{plugin.name}'")
                return output

        try:
            output_format = StyleOutputFormat(options.output_format)
        except ValueError:
            raise create_error(
                "STYLE_FORMAT_UNSUPPORTED", output_format=options.output_format
            ) from None

        if output_format == StyleOutputFormat.INLINE:
            return generate_inline(self.registry)
        if output_format == StyleOutputFormat.SCSS:
            return generate_scss(self.registry)
        return generate_css(self.registry)

    def get_inline_styles(self, node: TemplateNode) -> str | None:
        """The node's own base declarations as ``"prop: value; prop2: value2"``.

        Nested media and pseudo blocks are excluded, and so are declarations
        other nodes merged under the same selector.
        """
        if not isinstance(node, ElementNode):
            return None
        declaration = node.style_declaration
        if not declaration or resolve_selector(node) is None:
            return None
        return inline_declarations(declaration)
