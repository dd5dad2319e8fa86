"""Cyclic instruction lookup.

The instruction sequence is read as a pure function of the step index,
so one cursor can drive any number of walkers at different positions.
"""

from dataclasses import dataclass

import numpy as np

from src.graph.types import Instruction


class EmptyInstructionSequence(ValueError):
    """Raised when a cursor is built from a zero-length sequence."""


class InvalidInstruction(ValueError):
    """Raised when an instruction string holds a character other than L or R."""


@dataclass(frozen=True, eq=False)
class InstructionCursor:
    """Instruction sequence consumed cyclically: step i uses i mod P.

    Omits slots=True since numpy arrays don't interact well with __slots__.
    """

    symbols: np.ndarray  # uint8 array of Instruction values, read-only

    def __post_init__(self) -> None:
        if len(self.symbols) == 0:
            raise EmptyInstructionSequence(
                "Instruction sequence must not be empty"
            )

    @classmethod
    def from_string(cls, text: str) -> "InstructionCursor":
        """Build a cursor from a string of 'L' and 'R' characters."""
        try:
            values = [Instruction[ch].value for ch in text]
        except KeyError as exc:
            raise InvalidInstruction(
                f"Invalid instruction {exc.args[0]!r} in {text!r}, "
                f"expected only 'L' or 'R'"
            ) from None
        symbols = np.array(values, dtype=np.uint8)
        symbols.setflags(write=False)
        return cls(symbols=symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def symbol_at(self, step_index: int) -> Instruction:
        """Instruction consumed at step_index (0-indexed)."""
        if step_index < 0:
            raise ValueError(f"step_index must be >= 0, got {step_index}")
        return Instruction(int(self.symbols[step_index % len(self.symbols)]))

    def phase(self, step_index: int) -> int:
        """Position of step_index within the instruction cycle."""
        return step_index % len(self.symbols)

    def __str__(self) -> str:
        return "".join(Instruction(int(s)).name for s in self.symbols)
