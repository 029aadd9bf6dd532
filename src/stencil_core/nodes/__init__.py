"""Template node model."""

from .envelope import ComponentMetadata, TemplateEnvelope
from .model import (
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
    child_lists,
    node_id,
    parse_node_id,
)
from .parser import bound_name, is_expression_key, node_to_dict, parse_node, parse_nodes

__all__ = [
    # Node variants
    "TemplateNode",
    "ElementNode",
    "TextNode",
    "CommentNode",
    "ConditionalNode",
    "IterationNode",
    "SlotNode",
    "FragmentNode",
    "UnknownNode",
    # Identity
    "PathSegment",
    "node_id",
    "parse_node_id",
    "child_lists",
    # Parsing
    "parse_nodes",
    "parse_node",
    "node_to_dict",
    "is_expression_key",
    "bound_name",
    # Envelope
    "ComponentMetadata",
    "TemplateEnvelope",
]
