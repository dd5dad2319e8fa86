"""Graph module: node network types, construction, and input parsing."""

from src.graph.build import DuplicateNode, MalformedGraph, build_graph
from src.graph.parse import (
    InputFormatError,
    Network,
    parse_network,
    parse_node,
)
from src.graph.types import (
    GraphModel,
    Instruction,
    Label,
    LabelPredicate,
    Node,
)

__all__ = [
    "DuplicateNode",
    "GraphModel",
    "InputFormatError",
    "Instruction",
    "Label",
    "LabelPredicate",
    "MalformedGraph",
    "Network",
    "Node",
    "build_graph",
    "parse_network",
    "parse_node",
]
