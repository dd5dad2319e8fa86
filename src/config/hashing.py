"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any


def stable_hash(payload: Any) -> str:
    """First 16 hex characters of the SHA-256 of canonical JSON."""
    serialized = json.dumps(
        payload,
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":"),
        indent=None,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def config_hash(config: Any) -> str:
    """Deterministic SHA-256 hash of a config object.

    Args:
        config: Any dataclass instance (or sub-config).

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    return stable_hash(asdict(config))
