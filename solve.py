#!/usr/bin/env python3
"""Entry point for solving a day's puzzle from its input file.

Usage:
    python solve.py
    python solve.py --input inputs/day08.txt --part 2
    python solve.py --config config.json --cache .cache/periods.json --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

from src.config import DEFAULT_CONFIG, config_from_json, config_hash
from src.puzzle.registry import PartOutcome, get_puzzle, run_part, with_cache
from src.walk.cache import load_cache, save_cache

log = logging.getLogger(__name__)


def print_outcome(outcome: PartOutcome) -> None:
    if outcome.ok:
        print(f" -> Part {outcome.part}: {outcome.answer}")
    else:
        print(f" -> Part {outcome.part}: FAILED ({outcome.message})")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Solve a day's puzzle")
    parser.add_argument(
        "--day",
        type=int,
        default=8,
        help="Puzzle day number",
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Path to the puzzle input (default: inputs/dayNN.txt)",
    )
    parser.add_argument(
        "--part",
        type=int,
        choices=(1, 2),
        default=None,
        help="Run only this part (default: both)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a puzzle config JSON file",
    )
    parser.add_argument(
        "--cache",
        type=str,
        default=None,
        help="Path to a period cache JSON file, created if missing",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        puzzle = get_puzzle(args.day)
    except KeyError as exc:
        print(f"Error: {exc.args[0]}", file=sys.stderr)
        return 1

    input_path = Path(args.input or f"inputs/day{args.day:02d}.txt")
    if not input_path.exists():
        print(f"Error: input file not found: {input_path}", file=sys.stderr)
        return 1
    text = input_path.read_text()

    config = DEFAULT_CONFIG
    if args.config is not None:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            return 1
        config = config_from_json(config_path.read_text())
    log.info("Config hash: %s", config_hash(config))

    cache = None
    if args.cache is not None:
        cache = load_cache(Path(args.cache))
        puzzle = with_cache(puzzle, cache)

    print(f"Day {puzzle.day:02d}")
    parts = (args.part,) if args.part is not None else (1, 2)
    outcomes = [run_part(puzzle, part, text, config) for part in parts]
    for outcome in outcomes:
        print_outcome(outcome)

    if cache is not None:
        save_cache(cache, Path(args.cache))

    return 0 if all(o.ok for o in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
