"""Default configuration: single source of truth for puzzle parameters."""

from src.config.puzzle import PuzzleConfig

# Start labels end in "A", accepting labels end in "Z"; the single path runs
# from "AAA" to "ZZZ". The step budget is derived from the graph size.
DEFAULT_CONFIG = PuzzleConfig()
