"""Puzzle configuration system with frozen, hashable, serializable dataclasses."""

from src.config.puzzle import (
    LABEL_WIDTH,
    BudgetConfig,
    LabelRules,
    PuzzleConfig,
)
from src.config.defaults import DEFAULT_CONFIG
from src.config.hashing import config_hash, stable_hash
from src.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "LABEL_WIDTH",
    "BudgetConfig",
    "LabelRules",
    "PuzzleConfig",
    "DEFAULT_CONFIG",
    "config_hash",
    "stable_hash",
    "config_to_json",
    "config_from_json",
    "config_to_dict",
    "config_from_dict",
]
