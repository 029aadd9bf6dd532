"""Template analyzer: one pre-order walk that extracts component concepts."""

import logging
from typing import Any

from stencil_core.concepts import (
    Attribute,
    ComponentConcept,
    Conditional,
    Iteration,
    Slot,
)
from stencil_core.errors import ErrorCollector
from stencil_core.logging.logger import StencilLogger
from stencil_core.nodes import (
    CommentNode,
    ConditionalNode,
    ElementNode,
    FragmentNode,
    IterationNode,
    PathSegment,
    SlotNode,
    TemplateNode,
    TextNode,
    UnknownNode,
    bound_name,
    child_lists,
    node_id,
    parse_nodes,
)
from stencil_core.types import LogLevel

from .events import EventExtractor
from .options import AnalyzerOptions
from .styling import EXPRESSION_STYLING_KEYS, STATIC_STYLING_KEYS, StylingExtractor

logger = logging.getLogger(__name__)

STAGE = "analyzer"


class TemplateAnalyzer:
    """Extracts framework-agnostic concepts from a template node tree.

    The walk is pre-order: a node's own concepts are recorded before those of
    its descendants. Malformed conditional, iteration and slot nodes are
    dropped with a warning; extraction never fails because of them.
    """

    def __init__(
        self,
        options: AnalyzerOptions | None = None,
        logger: StencilLogger | None = None,
    ):
        """Initialize analyzer.

        Args:
            options: Default options (per-call options override them)
            logger: Optional logger
        """
        self._options = options or AnalyzerOptions()
        self._logger = logger
        self._errors = ErrorCollector()
        self._styling = StylingExtractor()

    def _log(self, level: LogLevel, message: str, context: dict[str, Any] | None = None) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "analyzer", message, context)

    def extract_concepts(
        self,
        nodes: list[TemplateNode] | list[dict[str, Any]],
        options: AnalyzerOptions | dict[str, Any] | None = None,
    ) -> ComponentConcept:
        """Extract concepts from a node list.

        Args:
            nodes: Template nodes (raw node mappings are parsed first)
            options: Options for this call; defaults to the analyzer's options

        Returns:
            A fresh ComponentConcept

        Raises:
            StencilError: TEMPLATE_STRUCTURE_INVALID if nodes is not a list
        """
        if isinstance(options, dict):
            options = AnalyzerOptions.from_dict(options)
        options = options or self._options

        nodes = parse_nodes(nodes)
        concepts = ComponentConcept()
        events = EventExtractor(options.event_prefixes)

        self._walk(nodes, [], concepts, options, events)

        self._log(
            LogLevel.DEBUG,
            "Extracted concepts",
            {"counts": concepts.counts(), "issues": self._errors.get_error_count()},
        )
        return concepts

    def get_errors(self) -> ErrorCollector:
        """Issues accumulated since the last clear_errors()."""
        return self._errors

    def clear_errors(self) -> None:
        self._errors.clear()

    def _walk(
        self,
        nodes: list[TemplateNode],
        parent_path: list[PathSegment],
        concepts: ComponentConcept,
        options: AnalyzerOptions,
        events: EventExtractor,
        field_name: str = "children",
    ) -> None:
        for index, node in enumerate(nodes):
            path = [*parent_path, (field_name, index)]
            current_id = node_id(path)
            try:
                self._extract_node(node, current_id, concepts, options, events)
            except Exception as e:
                logger.debug(f"Error processing node {current_id}: {e}")
                self._errors.add_simple_error(
                    f"Error processing node: {e}", current_id, STAGE
                )
                continue

            for child_field, children in child_lists(node):
                self._walk(children, path, concepts, options, events, child_field)

    def _extract_node(
        self,
        node: TemplateNode,
        current_id: str,
        concepts: ComponentConcept,
        options: AnalyzerOptions,
        events: EventExtractor,
    ) -> None:
        if isinstance(node, ElementNode):
            if options.extract_events:
                concepts.events.extend(events.extract(node.expression_attributes, current_id))
            if options.extract_attributes:
                concepts.attributes.extend(
                    self._extract_attributes(node, current_id, options, events)
                )
            if options.extract_styling:
                self._styling.extract(node, current_id, concepts.styling)
        elif isinstance(node, ConditionalNode):
            if options.extract_conditionals:
                conditional = self._extract_conditional(node, current_id)
                if conditional:
                    concepts.conditionals.append(conditional)
        elif isinstance(node, IterationNode):
            if options.extract_iterations:
                iteration = self._extract_iteration(node, current_id)
                if iteration:
                    concepts.iterations.append(iteration)
        elif isinstance(node, SlotNode):
            if options.extract_slots:
                slot = self._extract_slot(node, current_id)
                if slot:
                    concepts.slots.append(slot)
        elif isinstance(node, (TextNode, CommentNode, FragmentNode)):
            pass
        elif isinstance(node, UnknownNode):
            self._errors.add_warning(
                f"Unknown node type '{node.type}' for structural extraction",
                current_id,
                STAGE,
                {"category": "structure", "node_type": node.type},
            )

    def _missing(self, category: str, message: str, current_id: str) -> None:
        self._errors.add_warning(
            message,
            current_id,
            STAGE,
            {"category": category, "code": "CONCEPT_FIELD_MISSING"},
        )

    def _extract_conditional(self, node: ConditionalNode, current_id: str) -> Conditional | None:
        if not node.condition:
            self._missing("conditionals", "Conditional node missing condition", current_id)
            return None
        return Conditional(
            condition=node.condition,
            then=list(node.then),
            else_=None if node.else_ is None else list(node.else_),
            node_id=current_id,
        )

    def _extract_iteration(self, node: IterationNode, current_id: str) -> Iteration | None:
        if not node.items or not node.item:
            self._missing(
                "iterations",
                "Iteration node missing required properties (items, item)",
                current_id,
            )
            return None
        return Iteration(
            items=node.items,
            item=node.item,
            children=list(node.children),
            index=node.index,
            key=node.key,
            node_id=current_id,
        )

    def _extract_slot(self, node: SlotNode, current_id: str) -> Slot | None:
        if not node.name:
            self._missing("slots", "Slot node missing name", current_id)
            return None
        return Slot(
            name=node.name,
            fallback=None if node.fallback is None else list(node.fallback),
            node_id=current_id,
        )

    def _extract_attributes(
        self,
        node: ElementNode,
        current_id: str,
        options: AnalyzerOptions,
        events: EventExtractor,
    ) -> list[Attribute]:
        ignored = set(options.ignore_attributes)
        attributes: list[Attribute] = []

        for name, value in node.attributes.items():
            if name in STATIC_STYLING_KEYS or name in ignored:
                continue
            attributes.append(
                Attribute(name=name, value=value, is_expression=False, node_id=current_id)
            )

        for name, value in node.expression_attributes.items():
            if name in EXPRESSION_STYLING_KEYS or events.is_event_key(name):
                continue
            if name in ignored or bound_name(name) in ignored:
                continue
            attributes.append(
                Attribute(name=name, value=value, is_expression=True, node_id=current_id)
            )

        return attributes
