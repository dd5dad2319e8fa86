"""Single-path solver: step count from one start node to a terminal node."""

import logging

from src.graph.types import GraphModel, Label, LabelPredicate
from src.walk.cursor import InstructionCursor
from src.walk.walker import Walker

log = logging.getLogger(__name__)


class StepBudgetExceeded(Exception):
    """Raised when a walk exceeds its step budget without terminating."""

    def __init__(self, start: Label, steps: int, message: str | None = None):
        self.start = start
        self.steps = steps
        super().__init__(
            message
            or f"No terminal node reached from {start!r} within {steps} steps"
        )


class UnknownStartLabel(LookupError):
    """Raised when a walk is asked to start from a label not in the graph."""

    def __init__(self, start: Label):
        self.start = start
        super().__init__(f"Start label {start!r} is not a node of the graph")


def check_start(graph: GraphModel, start: Label) -> None:
    if start not in graph:
        raise UnknownStartLabel(start)


def state_space_size(graph: GraphModel, cursor: InstructionCursor) -> int:
    """Number of distinct (node, instruction phase) states."""
    return len(graph) * len(cursor)


def solve_single_walk(
    graph: GraphModel,
    cursor: InstructionCursor,
    start: Label,
    is_terminal: LabelPredicate,
    max_steps: int | None = None,
) -> int:
    """Count steps from start until a terminal node is visited.

    The start node itself is never tested: the answer is the number of
    advances performed when the walker first lands on a terminal node.

    Args:
        graph: Graph to walk.
        cursor: Instruction cursor.
        start: Start label.
        is_terminal: Predicate marking terminal labels.
        max_steps: Step budget. Defaults to the number of (node, phase)
            states; a walk that has not terminated by then cycles forever.

    Returns:
        1-based step count of the first terminal visit.

    Raises:
        UnknownStartLabel: If start is not a node of graph.
        StepBudgetExceeded: If no terminal node is reached within budget.
    """
    check_start(graph, start)
    budget = max_steps if max_steps is not None else state_space_size(graph, cursor)
    walker = Walker(graph, cursor, start)

    while walker.step_index < budget:
        label = walker.advance()
        if is_terminal(label):
            log.info(
                "Reached %s from %s in %d steps", label, start, walker.step_index
            )
            return walker.step_index

    raise StepBudgetExceeded(start, budget)
