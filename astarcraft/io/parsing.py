"""Fixed-format problem input: grid rows, agent count, one agent per line."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO

from astarcraft.config.constants import GRID_HEIGHT, GRID_WIDTH
from astarcraft.domain.agent import Agent
from astarcraft.domain.geometry import Direction
from astarcraft.domain.grid import Grid, build_grid
from astarcraft.errors import MalformedInputError


@dataclass(frozen=True)
class Problem:
    """Parsed input: the grid and the agent roster."""

    grid: Grid
    agents: tuple[Agent, ...]


def _parse_int(token: str, label: str, line_no: int) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise MalformedInputError(
            f"line {line_no}: {label} must be an integer, got {token!r}"
        ) from exc


def _parse_agent(raw: str, agent_id: int, line_no: int, width: int, height: int) -> Agent:
    tokens = raw.split()
    if len(tokens) != 3:
        raise MalformedInputError(f"line {line_no}: expected 'x y direction', got {raw!r}")
    x = _parse_int(tokens[0], "x", line_no)
    y = _parse_int(tokens[1], "y", line_no)
    if not (0 <= x < width and 0 <= y < height):
        raise MalformedInputError(f"line {line_no}: agent position ({x},{y}) is outside the grid")
    try:
        direction = Direction.from_symbol(tokens[2])
    except MalformedInputError as exc:
        raise MalformedInputError(f"line {line_no}: {exc}") from exc
    return Agent(agent_id=agent_id, x=x, y=y, direction=direction)


def parse_problem(
    lines: Iterable[str], width: int = GRID_WIDTH, height: int = GRID_HEIGHT
) -> Problem:
    """Parse ``height`` grid rows, an agent count and the agent lines.

    Trailing blank lines are ignored; any other deviation raises
    ``MalformedInputError`` naming the 1-based line number.
    """
    all_lines = [line.rstrip("\r\n") for line in lines]
    while all_lines and not all_lines[-1].strip():
        all_lines.pop()

    if len(all_lines) < height + 1:
        raise MalformedInputError(
            f"expected {height} grid rows and an agent count, got {len(all_lines)} lines"
        )
    grid = build_grid(all_lines[:height], width=width, height=height)

    count_line = height + 1
    n_agents = _parse_int(all_lines[height].strip(), "agent count", count_line)
    if n_agents < 0:
        raise MalformedInputError(f"line {count_line}: agent count must be >= 0")
    agent_lines = all_lines[height + 1 :]
    if len(agent_lines) != n_agents:
        raise MalformedInputError(f"expected {n_agents} agent lines, got {len(agent_lines)}")

    agents = tuple(
        _parse_agent(raw, agent_id=i, line_no=count_line + 1 + i, width=width, height=height)
        for i, raw in enumerate(agent_lines)
    )
    return Problem(grid=grid, agents=agents)


def read_problem(
    stream: TextIO, width: int = GRID_WIDTH, height: int = GRID_HEIGHT
) -> Problem:
    return parse_problem(stream.read().splitlines(), width=width, height=height)
