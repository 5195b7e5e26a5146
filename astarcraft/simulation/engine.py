"""Agent simulator and score aggregation.

An agent survives one step per move that lands on a non-blocked cell in a
(position, facing) state it has not been in during the current run. The
visited set starts empty for every agent; agents never share history.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from astarcraft.config.constants import NUM_DIRECTIONS
from astarcraft.domain.agent import Agent, AgentState
from astarcraft.domain.geometry import CLOCKWISE_ORDER
from astarcraft.domain.grid import BLOCKED_CODE, OPEN_CODE, Grid
from astarcraft.errors import InvariantViolation

logger = logging.getLogger(__name__)

# (dx, dy) indexed by clockwise direction index; matches the marker codes.
_DELTAS: tuple[tuple[int, int], ...] = tuple((d.dx, d.dy) for d in CLOCKWISE_ORDER)


def state_bound(grid: Grid) -> int:
    """Number of distinct (position, facing) states on ``grid``."""
    return grid.width * grid.height * NUM_DIRECTIONS


def simulate(
    grid: Grid,
    agent: Agent,
    *,
    seed_blocked: bool = False,
    max_steps: int | None = None,
) -> int:
    """Return the number of steps ``agent`` survives on ``grid``.

    ``seed_blocked`` pre-loads every (blocked cell, facing) state into the
    visited set so landing on a blocked cell is caught by the ordinary
    revisit check; the result is identical either way.

    Raises ``InvariantViolation`` if the survived count exceeds ``max_steps``
    (default: the number of distinct states on the grid).
    """
    width, height = grid.width, grid.height
    codes = grid.flat_codes
    limit = state_bound(grid) if max_steps is None else max_steps

    x, y = agent.x % width, agent.y % height
    heading = agent.direction.index
    code = codes[y * width + x]
    if code < OPEN_CODE:
        heading = code

    visited: set[int] = set()
    if seed_blocked:
        for pos in grid.blocked_cells():
            base = (pos.y * width + pos.x) * NUM_DIRECTIONS
            visited.update(range(base, base + NUM_DIRECTIONS))

    survived = 0
    while True:
        dx, dy = _DELTAS[heading]
        x = (x + dx) % width
        y = (y + dy) % height
        cell = y * width + x
        code = codes[cell]
        if code < OPEN_CODE:
            heading = code
        elif code == BLOCKED_CODE and not seed_blocked:
            break
        state = cell * NUM_DIRECTIONS + heading
        if state in visited:
            break
        visited.add(state)
        survived += 1
        if survived > limit:
            raise InvariantViolation(
                f"agent {agent.agent_id} survived {survived} steps, above the bound of {limit}"
            )
    return survived


def trace(grid: Grid, agent: Agent) -> list[AgentState]:
    """Return the surviving states of ``agent`` in order.

    Object-level twin of ``simulate``: ``len(trace(g, a)) == simulate(g, a)``.
    """
    walker = agent.clone()
    _redirect(grid, walker)
    visited: set[AgentState] = set()
    path: list[AgentState] = []
    limit = state_bound(grid)
    while len(path) <= limit:
        walker.move(grid.width, grid.height)
        _redirect(grid, walker)
        if grid.is_blocked(walker.position):
            return path
        state = walker.state()
        if state in visited:
            return path
        visited.add(state)
        path.append(state)
    raise InvariantViolation(f"agent {agent.agent_id} trace exceeded {limit} states")


def _redirect(grid: Grid, agent: Agent) -> None:
    cell = grid.cell_at(agent.position)
    if cell.direction is not None:
        agent.direction = cell.direction


def score_breakdown(grid: Grid, agents: Sequence[Agent]) -> list[int]:
    """Per-agent survival counts in roster order."""
    return [simulate(grid, agent) for agent in agents]


def score(grid: Grid, agents: Sequence[Agent]) -> int:
    """Aggregate fitness of ``grid``: total steps survived by all agents."""
    total = sum(score_breakdown(grid, agents))
    logger.debug("scored %d agents: total=%d", len(agents), total)
    return total
