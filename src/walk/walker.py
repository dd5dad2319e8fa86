"""Instruction-driven walkers: one stateful walker, and batch tracing.

Implements two traversal modes:
1. Walker: a single stateful cursor advanced one step at a time, used by
   the solvers that decide on their own when to stop
2. trace_walks: vectorized lockstep traversal of many walkers for a fixed
   number of steps, used for brute-force cross-checks
"""

from collections.abc import Iterator, Sequence

import numpy as np

from src.graph.types import GraphModel, Label
from src.walk.cursor import InstructionCursor


class Walker:
    """Current node and step index of one walk through the graph.

    The sequence of visited nodes is unbounded; iterating a Walker never
    stops on its own. Restart by constructing a new Walker.
    """

    __slots__ = ("graph", "cursor", "node", "step_index")

    def __init__(
        self,
        graph: GraphModel,
        cursor: InstructionCursor,
        start: Label,
        step_index: int = 0,
    ) -> None:
        self.graph = graph
        self.cursor = cursor
        self.node = graph.index_of(start)
        self.step_index = step_index

    @property
    def label(self) -> Label:
        return self.graph.label_of(self.node)

    @property
    def phase(self) -> int:
        return self.cursor.phase(self.step_index)

    def advance(self) -> Label:
        """Follow the edge selected by the current instruction.

        Returns:
            Label of the node reached after this step.
        """
        instruction = self.cursor.symbol_at(self.step_index)
        self.node = self.graph.successor(self.node, instruction)
        self.step_index += 1
        return self.graph.label_of(self.node)

    def __iter__(self) -> Iterator[Label]:
        while True:
            yield self.advance()

    def __repr__(self) -> str:
        return f"Walker(node={self.label!r}, step_index={self.step_index})"


def trace_walks(
    graph: GraphModel,
    cursor: InstructionCursor,
    starts: Sequence[Label] | np.ndarray,
    n_steps: int,
    first_step: int = 0,
) -> np.ndarray:
    """Advance many walkers in lockstep using vectorized edge lookups.

    Processes one step at a time across all walkers using NumPy indexing
    into the edge table. All walkers share the same instruction at each
    step.

    Args:
        graph: Graph to walk.
        cursor: Instruction cursor driving every walker.
        starts: Start labels, or an int array of start node indices.
        n_steps: Number of steps to take.
        first_step: Step index of the starting column, selects the
            instruction phase when continuing an earlier trace.

    Returns:
        Array of shape (len(starts), n_steps + 1) with dtype int32 holding
        node indices. Column 0 holds the start nodes.
    """
    if isinstance(starts, np.ndarray):
        start_idx = starts.astype(np.int32)
    else:
        start_idx = np.array(
            [graph.index_of(label) for label in starts], dtype=np.int32
        )

    trace = np.zeros((len(start_idx), n_steps + 1), dtype=np.int32)
    trace[:, 0] = start_idx

    period = len(cursor)
    for step in range(1, n_steps + 1):
        instruction = cursor.symbols[(first_step + step - 1) % period]
        trace[:, step] = graph.edges[trace[:, step - 1], instruction]

    return trace
