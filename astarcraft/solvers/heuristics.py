"""Dead-end and corner filling heuristics.

Dead ends get a marker pointing back out through their open exit. Corners
get one marker chosen from ``CORNER_TABLE`` so that agents circulate around
the platform edge in a consistent rotation (clockwise or anti-clockwise).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from astarcraft.domain.agent import Agent
from astarcraft.domain.geometry import NEIGHBOR_ORDER, Direction
from astarcraft.domain.grid import CellKind, Grid
from astarcraft.domain.placement import Candidate, Placement
from astarcraft.simulation.engine import score

logger = logging.getLogger(__name__)

DEAD_END_BLOCKED = 3
CORNER_BLOCKED = 2

# (blocked neighbor pair, clockwise) -> marker direction
CornerKey = tuple[frozenset[Direction], bool]
CORNER_TABLE: dict[CornerKey, Direction] = {
    (frozenset({Direction.UP, Direction.RIGHT}), True): Direction.DOWN,
    (frozenset({Direction.UP, Direction.RIGHT}), False): Direction.LEFT,
    (frozenset({Direction.UP, Direction.LEFT}), True): Direction.RIGHT,
    (frozenset({Direction.UP, Direction.LEFT}), False): Direction.DOWN,
    (frozenset({Direction.DOWN, Direction.LEFT}), True): Direction.UP,
    (frozenset({Direction.DOWN, Direction.LEFT}), False): Direction.RIGHT,
    (frozenset({Direction.DOWN, Direction.RIGHT}), True): Direction.LEFT,
    (frozenset({Direction.DOWN, Direction.RIGHT}), False): Direction.UP,
}

CLOCKWISE_LABEL = "heuristic-clockwise"
ANTICLOCKWISE_LABEL = "heuristic-anticlockwise"


def fill(grid: Grid, clockwise: bool) -> Placement:
    """Return dead-end and corner markers for every open cell of ``grid``.

    Pure: the same grid and orientation always give an identical placement.
    """
    placement = Placement()
    for pos in grid.open_cells():
        n_blocked = grid.neighbor_blocked_count(pos)
        if n_blocked not in (DEAD_END_BLOCKED, CORNER_BLOCKED):
            continue
        kinds = {
            direction: grid.cell_at(neighbor).kind
            for direction, neighbor in zip(NEIGHBOR_ORDER, grid.neighbors(pos), strict=True)
        }
        if n_blocked == DEAD_END_BLOCKED:
            for direction in NEIGHBOR_ORDER:
                if kinds[direction] is CellKind.OPEN:
                    placement.add(pos, direction)
        else:
            blocked = frozenset(d for d, kind in kinds.items() if kind is CellKind.BLOCKED)
            # Opposite pairs (a corridor) have no table entry.
            corner_direction = CORNER_TABLE.get((blocked, clockwise))
            if corner_direction is not None:
                placement.add(pos, corner_direction)
    return placement


def best_heuristic(grid: Grid, agents: Sequence[Agent]) -> Candidate:
    """Score both rotations and keep the better; clockwise wins ties."""
    clockwise = fill(grid, clockwise=True)
    score_clockwise = score(grid.apply(clockwise), agents)
    logger.debug("expected score clockwise %d", score_clockwise)

    anticlockwise = fill(grid, clockwise=False)
    score_anticlockwise = score(grid.apply(anticlockwise), agents)
    logger.debug("expected score anti-clockwise %d", score_anticlockwise)

    if score_clockwise < score_anticlockwise:
        return Candidate(anticlockwise, score_anticlockwise, ANTICLOCKWISE_LABEL)
    return Candidate(clockwise, score_clockwise, CLOCKWISE_LABEL)
