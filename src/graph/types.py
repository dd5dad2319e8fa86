"""Graph data structures for the instruction-driven node network."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

Label = str
LabelPredicate = Callable[[Label], bool]


class Instruction(IntEnum):
    """Binary edge selector; the value is the column in the edge table."""

    L = 0
    R = 1


@dataclass(frozen=True, slots=True)
class Node:
    """Outgoing edges of a single node. Self-loops are allowed."""

    left: Label
    right: Label

    def follow(self, instruction: Instruction) -> Label:
        return self.left if instruction is Instruction.L else self.right


@dataclass(frozen=True, eq=False)
class GraphModel:
    """Immutable node network: every node has a left and a right successor.

    Labels are stored in declaration order; edges live in an (n, 2) int32
    table indexed by node position, column 0 for L and column 1 for R.
    Uses frozen=True but omits slots=True since numpy arrays don't interact
    well with __slots__. Construct through build_graph(), which enforces
    that every edge target is a declared node.
    """

    labels: tuple[Label, ...]  # node labels in declaration order
    index: dict[Label, int]  # label -> row in edges
    edges: np.ndarray  # int32 array of shape (n, 2), read-only

    def __len__(self) -> int:
        return len(self.labels)

    def __contains__(self, label: object) -> bool:
        return label in self.index

    def __iter__(self) -> Iterator[Label]:
        return iter(self.labels)

    def index_of(self, label: Label) -> int:
        """Row of a label in the edge table. Raises KeyError if unknown."""
        try:
            return self.index[label]
        except KeyError:
            raise KeyError(f"Unknown node label {label!r}") from None

    def label_of(self, idx: int) -> Label:
        return self.labels[idx]

    def lookup(self, label: Label) -> Node:
        """Return the Node for label. Raises KeyError if unknown."""
        left, right = self.edges[self.index_of(label)]
        return Node(left=self.labels[left], right=self.labels[right])

    def successor(self, idx: int, instruction: Instruction) -> int:
        """Index of the node reached from idx by following instruction."""
        return int(self.edges[idx, instruction])

    def labels_where(self, predicate: LabelPredicate) -> list[Label]:
        """Labels satisfying predicate, in declaration order."""
        return [label for label in self.labels if predicate(label)]
