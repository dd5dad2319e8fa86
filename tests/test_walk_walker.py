"""Tests for the instruction cursor, the stateful walker, and batch tracing."""

from itertools import islice

import numpy as np
import pytest

from src.graph.build import build_graph
from src.graph.types import GraphModel, Instruction
from src.walk.cursor import (
    EmptyInstructionSequence,
    InstructionCursor,
    InvalidInstruction,
)
from src.walk.walker import Walker, trace_walks


def _make_multi_graph() -> GraphModel:
    """Two independent ghost loops sharing a sink node."""
    return build_graph(
        [
            ("11A", "11B", "XXX"),
            ("11B", "XXX", "11Z"),
            ("11Z", "11B", "XXX"),
            ("22A", "22B", "XXX"),
            ("22B", "22C", "22C"),
            ("22C", "22Z", "22Z"),
            ("22Z", "22B", "22B"),
            ("XXX", "XXX", "XXX"),
        ]
    )


class TestInstructionCursor:
    """Cyclic instruction lookup."""

    def test_symbol_at_wraps(self) -> None:
        cursor = InstructionCursor.from_string("LLR")
        expected = [Instruction.L, Instruction.L, Instruction.R] * 3
        assert [cursor.symbol_at(i) for i in range(9)] == expected

    def test_large_index(self) -> None:
        cursor = InstructionCursor.from_string("LR")
        assert cursor.symbol_at(10**18 + 1) is Instruction.R

    def test_length_and_phase(self) -> None:
        cursor = InstructionCursor.from_string("LRLRR")
        assert len(cursor) == 5
        assert cursor.phase(12) == 2

    def test_str_round_trip(self) -> None:
        assert str(InstructionCursor.from_string("RLLR")) == "RLLR"

    def test_empty_sequence_rejected(self) -> None:
        with pytest.raises(EmptyInstructionSequence):
            InstructionCursor.from_string("")

    def test_empty_array_rejected(self) -> None:
        with pytest.raises(EmptyInstructionSequence):
            InstructionCursor(symbols=np.array([], dtype=np.uint8))

    def test_invalid_character_rejected(self) -> None:
        with pytest.raises(InvalidInstruction, match="'X'"):
            InstructionCursor.from_string("LXR")

    def test_negative_index_rejected(self) -> None:
        cursor = InstructionCursor.from_string("LR")
        with pytest.raises(ValueError, match="step_index"):
            cursor.symbol_at(-1)


class TestWalker:
    """Single walker state transitions."""

    def test_advance_follows_instructions(self) -> None:
        graph = _make_multi_graph()
        walker = Walker(graph, InstructionCursor.from_string("LR"), "11A")
        assert walker.step_index == 0
        assert walker.advance() == "11B"
        assert walker.advance() == "11Z"
        assert walker.step_index == 2
        assert walker.label == "11Z"
        assert walker.phase == 0

    def test_iteration_is_unbounded(self) -> None:
        graph = _make_multi_graph()
        walker = Walker(graph, InstructionCursor.from_string("LR"), "22A")
        visited = list(islice(walker, 7))
        assert visited == ["22B", "22C", "22Z", "22B", "22C", "22Z", "22B"]
        assert walker.step_index == 7

    def test_independent_walkers_share_cursor(self) -> None:
        graph = _make_multi_graph()
        cursor = InstructionCursor.from_string("LR")
        a = Walker(graph, cursor, "11A")
        b = Walker(graph, cursor, "11A")
        a.advance()
        a.advance()
        assert b.step_index == 0
        assert b.advance() == "11B"

    def test_unknown_start(self) -> None:
        graph = _make_multi_graph()
        with pytest.raises(KeyError):
            Walker(graph, InstructionCursor.from_string("L"), "QQQ")


class TestTraceWalks:
    """Vectorized lockstep tracing matches the stateful walker."""

    def test_trace_shape_and_start_column(self) -> None:
        graph = _make_multi_graph()
        cursor = InstructionCursor.from_string("LR")
        trace = trace_walks(graph, cursor, ["11A", "22A"], 5)
        assert trace.shape == (2, 6)
        assert trace.dtype == np.int32
        assert [graph.label_of(i) for i in trace[:, 0]] == ["11A", "22A"]

    def test_trace_matches_walker(self) -> None:
        graph = _make_multi_graph()
        cursor = InstructionCursor.from_string("LR")
        trace = trace_walks(graph, cursor, ["11A", "22A"], 12)
        for row, start in zip(trace, ["11A", "22A"]):
            walker = Walker(graph, cursor, start)
            expected = list(islice(walker, 12))
            assert [graph.label_of(i) for i in row[1:]] == expected

    def test_continuation_with_first_step(self) -> None:
        graph = _make_multi_graph()
        cursor = InstructionCursor.from_string("LR")
        full = trace_walks(graph, cursor, ["22A"], 9)
        head = trace_walks(graph, cursor, ["22A"], 4)
        tail = trace_walks(graph, cursor, head[:, -1], 5, first_step=4)
        np.testing.assert_array_equal(full[:, 4:], tail)
