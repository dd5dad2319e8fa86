"""Day 8: walking the node network with L/R instructions.

Part 1 counts steps on the single path from the configured start to the
configured terminal. Part 2 starts a walker on every start label and
reports the first step at which all of them are accepting.
"""

import logging

from src.config.defaults import DEFAULT_CONFIG
from src.config.hashing import config_hash
from src.config.puzzle import PuzzleConfig
from src.graph.build import build_graph
from src.graph.parse import parse_network
from src.graph.types import GraphModel
from src.walk.cache import PeriodCache
from src.walk.cursor import InstructionCursor
from src.walk.multi import solve_multi_walk
from src.walk.single import solve_single_walk

log = logging.getLogger(__name__)


def load_network(text: str) -> tuple[GraphModel, InstructionCursor]:
    """Parse puzzle text and build the validated graph and cursor."""
    network = parse_network(text)
    cursor = InstructionCursor.from_string(network.instructions)
    graph = build_graph(network.nodes)
    log.info(
        "Loaded network: %d nodes, %d instructions", len(graph), len(cursor)
    )
    return graph, cursor


def part1(text: str, config: PuzzleConfig = DEFAULT_CONFIG) -> str:
    graph, cursor = load_network(text)
    rules = config.labels
    steps = solve_single_walk(
        graph,
        cursor,
        rules.single_start,
        rules.is_single_terminal,
        max_steps=config.budget.max_steps,
    )
    return str(steps)


def part2(
    text: str,
    config: PuzzleConfig = DEFAULT_CONFIG,
    cache: PeriodCache | None = None,
) -> str:
    graph, cursor = load_network(text)
    rules = config.labels
    result = solve_multi_walk(
        graph,
        cursor,
        rules.is_start,
        rules.is_accepting,
        max_steps=config.budget.max_steps,
        cache=cache,
        cache_tag=config_hash(rules),
    )
    return str(result.steps)
