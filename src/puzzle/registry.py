"""Puzzle registry and per-part execution with isolated failures."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from functools import partial

from src.config.puzzle import PuzzleConfig
from src.graph.build import MalformedGraph
from src.graph.parse import InputFormatError
from src.puzzle import day08
from src.walk.cache import PeriodCache
from src.walk.cursor import EmptyInstructionSequence, InvalidInstruction
from src.walk.multi import NoStartLabels
from src.walk.single import StepBudgetExceeded, UnknownStartLabel

log = logging.getLogger(__name__)

PartFn = Callable[[str, PuzzleConfig], str]

# Failures a part can report without aborting the run. StepBudgetExceeded
# includes PeriodicityNotFound, MalformedGraph includes DuplicateNode.
PART_ERRORS = (
    InputFormatError,
    EmptyInstructionSequence,
    InvalidInstruction,
    MalformedGraph,
    UnknownStartLabel,
    NoStartLabels,
    StepBudgetExceeded,
)


@dataclass(frozen=True)
class Puzzle:
    """One day's puzzle: two pure functions from input text to answer."""

    day: int
    part1: PartFn
    part2: PartFn
    uses_period_cache: bool = False  # part2 accepts a cache= keyword

    def part(self, n: int) -> PartFn:
        if n == 1:
            return self.part1
        if n == 2:
            return self.part2
        raise ValueError(f"Part must be 1 or 2, got {n}")


@dataclass(frozen=True, slots=True)
class PartOutcome:
    """Answer or failure message of one part, with wall-clock time."""

    part: int
    ok: bool
    answer: str | None
    message: str | None
    elapsed: float


PUZZLES: dict[int, Puzzle] = {
    8: Puzzle(day=8, part1=day08.part1, part2=day08.part2, uses_period_cache=True),
}


def get_puzzle(day: int) -> Puzzle:
    try:
        return PUZZLES[day]
    except KeyError:
        raise KeyError(f"Day {day:02d} not implemented yet") from None


def with_cache(puzzle: Puzzle, cache: PeriodCache) -> Puzzle:
    """Bind a caller-owned period cache to the puzzle's part 2."""
    if not puzzle.uses_period_cache:
        return puzzle
    return replace(puzzle, part2=partial(puzzle.part2, cache=cache))


def run_part(
    puzzle: Puzzle, part: int, text: str, config: PuzzleConfig
) -> PartOutcome:
    """Run one part, reporting domain failures instead of raising them."""
    fn = puzzle.part(part)
    t0 = time.monotonic()
    try:
        answer = fn(text, config)
    except PART_ERRORS as exc:
        elapsed = time.monotonic() - t0
        log.error("Day %02d part %d failed: %s", puzzle.day, part, exc)
        return PartOutcome(
            part=part,
            ok=False,
            answer=None,
            message=f"{type(exc).__name__}: {exc}",
            elapsed=elapsed,
        )
    elapsed = time.monotonic() - t0
    log.info("Day %02d part %d solved in %.3fs", puzzle.day, part, elapsed)
    return PartOutcome(
        part=part, ok=True, answer=answer, message=None, elapsed=elapsed
    )
