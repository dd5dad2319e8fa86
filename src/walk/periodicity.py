"""Periodicity detection for a single walker's visits to accepting nodes.

The walk is a path through the finite product automaton
(node x instruction phase), so its visits to accepting nodes must repeat.
The detector records every accepting observation as a (phase, node) pair
and stops at the first one that repeats, or at the first accepting
observation that falls on phase 0, whichever comes first. That step count
is reported as the walker's period.

The reported period equals the true cycle length only when the accepting
recurrence is aligned with step 0. PeriodResult keeps the data needed to
check that assumption (first_hit, cycle_start).
"""

import logging
from dataclasses import dataclass

from src.graph.types import GraphModel, Label, LabelPredicate
from src.walk.cursor import InstructionCursor
from src.walk.single import StepBudgetExceeded, check_start, state_space_size
from src.walk.walker import Walker

log = logging.getLogger(__name__)


class PeriodicityNotFound(StepBudgetExceeded):
    """Raised when no accepting recurrence is seen within the step budget."""

    def __init__(self, start: Label, steps: int):
        super().__init__(
            start,
            steps,
            f"No accepting recurrence from {start!r} within {steps} steps",
        )


@dataclass(frozen=True, slots=True)
class PeriodResult:
    """Outcome of periodicity detection for one start node."""

    start: Label
    period: int  # step count at the first detected recurrence
    node: Label  # accepting node occupied at that step
    phase: int  # period mod instruction length
    first_hit: int  # step of the first accepting observation
    cycle_start: int | None  # step where the repeated pair was first seen
    hits: int  # accepting observations, including the final one

    @property
    def aligned(self) -> bool:
        """Whether the recurrence is consistent with a cycle from step 0.

        A phase-0 stop cannot be judged without walking further and is
        treated as aligned here; verify_period() walks further. A repeated pair first seen at step c and again
        at step p is aligned when the cycle length p - c equals c.
        """
        if self.cycle_start is None:
            return True
        return self.period - self.cycle_start == self.cycle_start


def detect_period(
    graph: GraphModel,
    cursor: InstructionCursor,
    start: Label,
    is_accepting: LabelPredicate,
    max_steps: int | None = None,
) -> PeriodResult:
    """Walk from start until an accepting observation recurs.

    Args:
        graph: Graph to walk.
        cursor: Instruction cursor.
        start: Start label.
        is_accepting: Predicate marking accepting labels.
        max_steps: Step budget. Defaults to twice the number of
            (node, phase) states, enough for the walk to enter its cycle
            and traverse it once.

    Returns:
        PeriodResult for the first recurrence.

    Raises:
        UnknownStartLabel: If start is not a node of graph.
        PeriodicityNotFound: If the budget runs out first.
    """
    check_start(graph, start)
    budget = (
        max_steps
        if max_steps is not None
        else 2 * state_space_size(graph, cursor)
    )
    walker = Walker(graph, cursor, start)
    seen: dict[tuple[int, Label], int] = {}  # (phase, node) -> first step
    first_hit: int | None = None

    while walker.step_index < budget:
        label = walker.advance()
        if not is_accepting(label):
            continue

        step = walker.step_index
        phase = cursor.phase(step)
        if first_hit is None:
            first_hit = step

        key = (phase, label)
        if key in seen or phase == 0:
            result = PeriodResult(
                start=start,
                period=step,
                node=label,
                phase=phase,
                first_hit=first_hit,
                cycle_start=seen.get(key),
                hits=len(seen) + 1,
            )
            log.debug(
                "Period for %s: %d (node=%s, phase=%d, first_hit=%d, hits=%d)",
                start,
                result.period,
                label,
                phase,
                first_hit,
                result.hits,
            )
            return result

        seen[key] = step

    raise PeriodicityNotFound(start, budget)
