"""Tests for the caller-owned period cache and its JSON storage."""

import json
from pathlib import Path

import pytest

from src.graph.build import build_graph
from src.graph.types import GraphModel
from src.walk.cache import (
    PeriodCache,
    load_cache,
    network_fingerprint,
    save_cache,
)
from src.walk.cursor import InstructionCursor
from src.walk.multi import solve_multi_walk
from src.walk.periodicity import PeriodResult

TRIPLES = [
    ("11A", "11B", "XXX"),
    ("11B", "XXX", "11Z"),
    ("11Z", "11B", "XXX"),
    ("22A", "22B", "XXX"),
    ("22B", "22C", "22C"),
    ("22C", "22Z", "22Z"),
    ("22Z", "22B", "22B"),
    ("XXX", "XXX", "XXX"),
]


def _ends_a(label: str) -> bool:
    return label.endswith("A")


def _ends_z(label: str) -> bool:
    return label.endswith("Z")


def _make_graph() -> GraphModel:
    return build_graph(TRIPLES)


def _make_result(start: str = "11A", period: int = 2) -> PeriodResult:
    return PeriodResult(
        start=start,
        period=period,
        node="11Z",
        phase=0,
        first_hit=period,
        cycle_start=None,
        hits=1,
    )


class TestNetworkFingerprint:
    """Fingerprints identify node tables together with instruction strings."""

    def test_independent_of_declaration_order(self) -> None:
        cursor = InstructionCursor.from_string("LR")
        reordered = build_graph(list(reversed(TRIPLES)))
        assert network_fingerprint(_make_graph(), cursor) == network_fingerprint(
            reordered, cursor
        )

    def test_differs_on_edge_change(self) -> None:
        cursor = InstructionCursor.from_string("LR")
        changed = [("11A", "XXX", "11B")] + TRIPLES[1:]
        assert network_fingerprint(_make_graph(), cursor) != network_fingerprint(
            build_graph(changed), cursor
        )

    def test_differs_on_instruction_change(self) -> None:
        graph = _make_graph()
        assert network_fingerprint(
            graph, InstructionCursor.from_string("LR")
        ) != network_fingerprint(graph, InstructionCursor.from_string("LLL"))

    def test_is_short_hex(self) -> None:
        fp = network_fingerprint(_make_graph(), InstructionCursor.from_string("L"))
        assert len(fp) == 16
        int(fp, 16)


class TestPeriodCache:
    """In-memory memo behavior."""

    def test_put_and_get(self) -> None:
        cache = PeriodCache()
        key = ("fp", "tag", "11A")
        assert cache.get(key) is None
        cache.put(key, _make_result())
        assert key in cache
        assert len(cache) == 1
        assert cache.get(key) == _make_result()

    def test_solver_fills_cache(self) -> None:
        graph = _make_graph()
        cursor = InstructionCursor.from_string("LR")
        cache = PeriodCache()
        result = solve_multi_walk(
            graph, cursor, _ends_a, _ends_z, cache=cache, cache_tag="z"
        )
        assert result.steps == 6
        assert len(cache) == 2
        assert (network_fingerprint(graph, cursor), "z", "22A") in cache

    def test_solver_reuses_cache(self, monkeypatch) -> None:
        graph = _make_graph()
        cursor = InstructionCursor.from_string("LR")
        cache = PeriodCache()
        solve_multi_walk(graph, cursor, _ends_a, _ends_z, cache=cache)

        def _fail(*args, **kwargs):
            raise AssertionError("detect_period called despite cache hit")

        monkeypatch.setattr("src.walk.multi.detect_period", _fail)
        result = solve_multi_walk(graph, cursor, _ends_a, _ends_z, cache=cache)
        assert result.steps == 6

    def test_instruction_change_misses_cache(self) -> None:
        graph = build_graph(
            [
                ("22A", "22B", "22B"),
                ("22B", "22C", "22C"),
                ("22C", "22Z", "22Z"),
                ("22Z", "22B", "22B"),
            ]
        )
        cache = PeriodCache()
        first = solve_multi_walk(
            graph, InstructionCursor.from_string("LR"), _ends_a, _ends_z, cache=cache
        )
        second = solve_multi_walk(
            graph, InstructionCursor.from_string("LLL"), _ends_a, _ends_z, cache=cache
        )
        assert first.steps == 6
        assert second.steps == 3
        assert len(cache) == 2

    def test_caches_are_independent(self) -> None:
        graph = _make_graph()
        cursor = InstructionCursor.from_string("LR")
        first, second = PeriodCache(), PeriodCache()
        solve_multi_walk(graph, cursor, _ends_a, _ends_z, cache=first)
        assert len(first) == 2
        assert len(second) == 0


class TestCacheStorage:
    """JSON save/load round-trip."""

    def test_round_trip(self, tmp_path: Path) -> None:
        cache = PeriodCache()
        cache.put(("fp", "tag", "11A"), _make_result("11A", 2))
        cache.put(("fp", "tag", "22A"), _make_result("22A", 6))
        path = save_cache(cache, tmp_path / "sub" / "periods.json")

        loaded = load_cache(path)
        assert len(loaded) == 2
        assert loaded.get(("fp", "tag", "22A")) == _make_result("22A", 6)

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        cache = PeriodCache()
        cache.put(("fp", "tag", "11A"), _make_result())
        save_cache(cache, tmp_path / "periods.json")
        assert [p.name for p in tmp_path.iterdir()] == ["periods.json"]

    def test_missing_file_gives_empty_cache(self, tmp_path: Path) -> None:
        assert len(load_cache(tmp_path / "absent.json")) == 0

    def test_version_mismatch(self, tmp_path: Path) -> None:
        path = tmp_path / "periods.json"
        path.write_text(json.dumps({"version": 99, "entries": []}))
        with pytest.raises(ValueError, match="version"):
            load_cache(path)

    def test_version_1_file_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "periods.json"
        path.write_text(json.dumps({"version": 1, "entries": []}))
        with pytest.raises(ValueError, match="version 1"):
            load_cache(path)
