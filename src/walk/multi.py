"""Multi-walker synchronization via per-walker periods and LCM.

One walker starts on every start label. Each walker's period is detected
independently, and the periods are combined by least common multiple to
give the first step at which every walker stands on an accepting node.

The LCM answer assumes every walker is accepting at every multiple of its
period. Each detected period is re-walked once to check that it recurs, and
walkers that fail the check, or whose recurrence shows a transient, are
logged as warnings and mark the result as not aligned.
simulate_multi_walk() gives a brute-force reference for small inputs.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from src.graph.types import GraphModel, Label, LabelPredicate
from src.walk.cache import PeriodCache, network_fingerprint
from src.walk.cursor import InstructionCursor
from src.walk.periodicity import PeriodResult, detect_period
from src.walk.single import StepBudgetExceeded
from src.walk.walker import Walker, trace_walks

log = logging.getLogger(__name__)

SIMULATION_CHUNK = 4096


class NoStartLabels(ValueError):
    """Raised when no label in the graph satisfies the start predicate."""


@dataclass(frozen=True)
class MultiWalkResult:
    """Combined step count and the per-walker periods it was built from."""

    steps: int
    periods: tuple[PeriodResult, ...]
    verified: tuple[bool, ...] = ()  # verify_period() outcome per walker

    @property
    def aligned(self) -> bool:
        return all(p.aligned for p in self.periods) and all(self.verified)


def start_labels(graph: GraphModel, is_start: LabelPredicate) -> list[Label]:
    """All start labels, in declaration order."""
    return graph.labels_where(is_start)


def combine_periods(periods: Iterable[int]) -> int:
    """Least common multiple of all periods.

    Python integers are unbounded, so the result never overflows.

    Raises:
        ValueError: If periods is empty or contains a non-positive value.
    """
    values = list(periods)
    if not values:
        raise ValueError("Cannot combine an empty set of periods")
    for p in values:
        if p <= 0:
            raise ValueError(f"Periods must be positive, got {p}")

    combined = 1
    for p in values:
        combined = combined * p // math.gcd(combined, p)
    return combined


def verify_period(
    graph: GraphModel,
    cursor: InstructionCursor,
    result: PeriodResult,
) -> bool:
    """Re-walk one period from the detected state and check it recurs.

    Returns:
        True if the walker is back on result.node at the same instruction
        phase after another result.period steps.
    """
    walker = Walker(graph, cursor, result.node, step_index=result.period)
    for _ in range(result.period):
        walker.advance()
    return walker.label == result.node and walker.phase == result.phase


def solve_multi_walk(
    graph: GraphModel,
    cursor: InstructionCursor,
    is_start: LabelPredicate,
    is_accepting: LabelPredicate,
    max_steps: int | None = None,
    cache: PeriodCache | None = None,
    cache_tag: str = "",
) -> MultiWalkResult:
    """First step at which all walkers are simultaneously accepting.

    Args:
        graph: Graph to walk.
        cursor: Instruction cursor shared by all walkers.
        is_start: Predicate selecting start labels.
        is_accepting: Predicate marking accepting labels.
        max_steps: Per-walker step budget passed to detect_period().
        cache: Optional caller-owned cache of detected periods.
        cache_tag: Identifies is_accepting within cache keys.

    Returns:
        MultiWalkResult with the LCM of all detected periods.

    Raises:
        NoStartLabels: If the graph has no start labels.
        PeriodicityNotFound: If any walker exhausts its budget.
    """
    starts = start_labels(graph, is_start)
    if not starts:
        raise NoStartLabels("Graph has no start labels")

    fingerprint = (
        network_fingerprint(graph, cursor) if cache is not None else ""
    )
    log.info("Detecting periods for %d walkers", len(starts))

    periods: list[PeriodResult] = []
    verified: list[bool] = []
    for start in starts:
        key = (fingerprint, cache_tag, start)
        result = cache.get(key) if cache is not None else None
        if result is None:
            result = detect_period(graph, cursor, start, is_accepting, max_steps)
            if cache is not None:
                cache.put(key, result)
        else:
            log.debug("Period cache hit for %s", start)

        if not result.aligned:
            log.warning(
                "Walker %s: accepting cycle of length %d starts at step %d, "
                "not aligned with step 0; LCM answer may be wrong",
                start,
                result.period - result.cycle_start,
                result.cycle_start,
            )
        recurs = verify_period(graph, cursor, result)
        if not recurs:
            log.warning(
                "Walker %s: period %d does not recur from %s; "
                "LCM answer may be wrong",
                start,
                result.period,
                result.node,
            )
        periods.append(result)
        verified.append(recurs)

    steps = combine_periods(p.period for p in periods)
    log.info(
        "Combined %d periods into %d steps", len(periods), steps
    )
    return MultiWalkResult(
        steps=steps, periods=tuple(periods), verified=tuple(verified)
    )


def simulate_multi_walk(
    graph: GraphModel,
    cursor: InstructionCursor,
    starts: list[Label],
    is_accepting: LabelPredicate,
    max_steps: int = 1_000_000,
) -> int:
    """Brute-force lockstep simulation of all walkers.

    Advances every walker in chunks with trace_walks() and returns the
    first step at which all of them are on accepting nodes.

    Raises:
        NoStartLabels: If starts is empty.
        StepBudgetExceeded: If no such step occurs within max_steps.
    """
    if not starts:
        raise NoStartLabels("Cannot simulate without start labels")

    accepting = np.array([is_accepting(label) for label in graph.labels])
    current = np.array([graph.index_of(s) for s in starts], dtype=np.int32)
    done = 0

    while done < max_steps:
        n = min(SIMULATION_CHUNK, max_steps - done)
        trace = trace_walks(graph, cursor, current, n, first_step=done)
        all_accepting = accepting[trace[:, 1:]].all(axis=0)
        hits = np.flatnonzero(all_accepting)
        if hits.size:
            return done + int(hits[0]) + 1
        current = trace[:, -1]
        done += n

    raise StepBudgetExceeded(
        ", ".join(starts),
        max_steps,
        f"Walkers {starts} not simultaneously accepting within "
        f"{max_steps} steps",
    )
