"""Walk module: instruction cursor, walkers, solvers, and period caching."""

from src.walk.cache import PeriodCache, load_cache, network_fingerprint, save_cache
from src.walk.cursor import (
    EmptyInstructionSequence,
    InstructionCursor,
    InvalidInstruction,
)
from src.walk.multi import (
    MultiWalkResult,
    NoStartLabels,
    combine_periods,
    simulate_multi_walk,
    solve_multi_walk,
    start_labels,
    verify_period,
)
from src.walk.periodicity import PeriodicityNotFound, PeriodResult, detect_period
from src.walk.single import StepBudgetExceeded, UnknownStartLabel, solve_single_walk
from src.walk.walker import Walker, trace_walks

__all__ = [
    "EmptyInstructionSequence",
    "InstructionCursor",
    "InvalidInstruction",
    "MultiWalkResult",
    "NoStartLabels",
    "PeriodCache",
    "PeriodResult",
    "PeriodicityNotFound",
    "StepBudgetExceeded",
    "UnknownStartLabel",
    "Walker",
    "combine_periods",
    "detect_period",
    "load_cache",
    "network_fingerprint",
    "save_cache",
    "simulate_multi_walk",
    "solve_multi_walk",
    "solve_single_walk",
    "start_labels",
    "trace_walks",
    "verify_period",
]
