"""Puzzle text parsing into an instruction string and node definitions.

Expected layout:

    LLR

    AAA = (BBB, BBB)
    BBB = (AAA, ZZZ)
    ZZZ = (ZZZ, ZZZ)

The first non-blank line is the instruction string; every following
non-blank line defines one node.
"""

import re
from dataclasses import dataclass

from src.graph.types import Label

NODE_RE = re.compile(r"^(\w{3}) = \((\w{3}), (\w{3})\)$")


class InputFormatError(ValueError):
    """Raised when puzzle text does not follow the expected layout."""


@dataclass(frozen=True, slots=True)
class Network:
    """Parsed puzzle input, before graph validation."""

    instructions: str
    nodes: tuple[tuple[Label, Label, Label], ...]


def parse_node(line: str, lineno: int = 0) -> tuple[Label, Label, Label]:
    """Parse one "XXX = (YYY, ZZZ)" line into a (node, left, right) triple."""
    match = NODE_RE.match(line.strip())
    if match is None:
        raise InputFormatError(f"Line {lineno}: cannot parse node {line!r}")
    return match.group(1), match.group(2), match.group(3)


def parse_network(text: str) -> Network:
    """Split puzzle text into instructions and node triples.

    Only the layout is checked here; totality and duplicate checks belong
    to build_graph().

    Raises:
        InputFormatError: On a missing instruction line, missing nodes, or
            a node line that does not match the expected pattern. The message
            carries the 1-based line number.
    """
    instructions: str | None = None
    nodes: list[tuple[Label, Label, Label]] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        if instructions is None:
            if "=" in line:
                raise InputFormatError(
                    f"Line {lineno}: expected instruction line, got node "
                    f"definition {line!r}"
                )
            instructions = line
            continue
        nodes.append(parse_node(line, lineno))

    if instructions is None:
        raise InputFormatError("Input has no instruction line")
    if not nodes:
        raise InputFormatError("Input has no node definitions")

    return Network(instructions=instructions, nodes=tuple(nodes))
