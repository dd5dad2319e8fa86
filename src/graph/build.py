"""GraphModel construction with eager totality checking.

Every edge target must name a declared node. The check runs once at build
time so that traversal never meets a dangling edge.
"""

import logging
from collections.abc import Iterable

import numpy as np

from src.config.puzzle import LABEL_WIDTH
from src.graph.types import GraphModel, Label

log = logging.getLogger(__name__)


class MalformedGraph(Exception):
    """Raised when a node table cannot form a total GraphModel."""


class DuplicateNode(MalformedGraph):
    """Raised when the same node label is defined more than once."""


def _check_label(label: Label, role: str, node: Label) -> None:
    if not isinstance(label, str) or len(label) != LABEL_WIDTH:
        raise MalformedGraph(
            f"{role} label {label!r} of node {node!r} is not "
            f"{LABEL_WIDTH} characters wide"
        )


def build_graph(triples: Iterable[tuple[Label, Label, Label]]) -> GraphModel:
    """Build an immutable GraphModel from (node, left, right) triples.

    Args:
        triples: Node definitions in declaration order.

    Returns:
        GraphModel whose edge table references only declared nodes.

    Raises:
        MalformedGraph: If the table is empty, a label has the wrong width,
            or an edge target is not declared.
        DuplicateNode: If a node label is defined twice.
    """
    definitions: list[tuple[Label, Label, Label]] = []
    index: dict[Label, int] = {}

    for node, left, right in triples:
        _check_label(node, "node", node)
        _check_label(left, "left", node)
        _check_label(right, "right", node)
        if node in index:
            raise DuplicateNode(
                f"Node {node!r} defined twice (entries {index[node]} "
                f"and {len(definitions)})"
            )
        index[node] = len(definitions)
        definitions.append((node, left, right))

    if not definitions:
        raise MalformedGraph("Graph has no nodes")

    dangling = sorted(
        {
            target
            for _, left, right in definitions
            for target in (left, right)
            if target not in index
        }
    )
    if dangling:
        raise MalformedGraph(
            f"Edge targets without a node definition: {', '.join(dangling)}"
        )

    edges = np.array(
        [[index[left], index[right]] for _, left, right in definitions],
        dtype=np.int32,
    )
    edges.setflags(write=False)

    log.debug("Built graph with %d nodes", len(definitions))
    return GraphModel(
        labels=tuple(node for node, _, _ in definitions),
        index=index,
        edges=edges,
    )
