"""Caller-owned period cache with network-fingerprint keys and JSON storage.

Follows the graph cache pattern: keys are derived from a SHA-256 hash of
the inputs that determine the result (node table and instruction string),
so a changed network never hits a stale entry. The cache is an explicit
object handed to the solver, never module-level state.
"""

import json
import logging
import os
import tempfile
from collections.abc import ItemsView
from dataclasses import asdict
from pathlib import Path

from src.config.hashing import stable_hash
from src.graph.types import GraphModel, Label
from src.walk.cursor import InstructionCursor
from src.walk.periodicity import PeriodResult

log = logging.getLogger(__name__)

# Version 1 keyed entries on the node table alone.
CACHE_VERSION = 2

CacheKey = tuple[str, str, Label]  # (network fingerprint, predicate tag, start)


def network_fingerprint(graph: GraphModel, cursor: InstructionCursor) -> str:
    """Hash of the node table and instruction string.

    The node table is sorted first, so declaration order does not matter.

    Returns:
        First 16 hex characters of the SHA-256 over both inputs.
    """
    table = sorted(
        [label, *(graph.labels[int(i)] for i in graph.edges[idx])]
        for idx, label in enumerate(graph.labels)
    )
    return stable_hash([table, str(cursor)])


class PeriodCache:
    """Memo of PeriodResult values keyed by network, predicate tag and start."""

    def __init__(self) -> None:
        self._entries: dict[CacheKey, PeriodResult] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: CacheKey) -> PeriodResult | None:
        return self._entries.get(key)

    def put(self, key: CacheKey, result: PeriodResult) -> None:
        self._entries[key] = result

    def items(self) -> ItemsView[CacheKey, PeriodResult]:
        return self._entries.items()


def save_cache(cache: PeriodCache, path: Path) -> Path:
    """Write cache entries as JSON, atomically replacing any existing file.

    Args:
        cache: Cache to persist.
        path: Destination JSON file.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "version": CACHE_VERSION,
        "entries": [
            {
                "fingerprint": fingerprint,
                "tag": tag,
                "result": asdict(result),
            }
            for (fingerprint, tag, _), result in cache.items()
        ],
    }

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(payload, f, indent=2, sort_keys=True)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    log.info("Period cache saved to %s (%d entries)", path, len(cache))
    return path


def load_cache(path: Path) -> PeriodCache:
    """Load a cache written by save_cache().

    Returns:
        The loaded PeriodCache, or an empty one if path does not exist.

    Raises:
        ValueError: If the file was written by an incompatible version.
    """
    path = Path(path)
    cache = PeriodCache()
    if not path.exists():
        log.info("No period cache at %s, starting empty", path)
        return cache

    with open(path) as f:
        payload = json.load(f)

    version = payload.get("version")
    if version != CACHE_VERSION:
        raise ValueError(
            f"Unsupported period cache version {version!r} in {path}, "
            f"expected {CACHE_VERSION}"
        )

    for entry in payload["entries"]:
        result = PeriodResult(**entry["result"])
        cache.put((entry["fingerprint"], entry["tag"], result.start), result)

    log.info("Period cache loaded from %s (%d entries)", path, len(cache))
    return cache
