"""Claimed-state greedy detours (alternate strategy).

Unlike the canonical simulator, agents here share one set of claimed
(position, facing) states, processed in roster order: later agents steer
around the paths of earlier ones. The resulting placement is still scored
with the canonical, history-free simulator.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from astarcraft.config.constants import NUM_DIRECTIONS
from astarcraft.domain.agent import Agent, AgentState
from astarcraft.domain.geometry import CLOCKWISE_ORDER, Direction, Position
from astarcraft.domain.grid import CellKind, Grid
from astarcraft.domain.placement import Candidate, Placement
from astarcraft.simulation.engine import score, state_bound

logger = logging.getLogger(__name__)

GREEDY_LABEL = "greedy"


class _Overlay:
    """Read view of ``grid`` with the markers placed so far on top."""

    def __init__(self, grid: Grid, placement: Placement) -> None:
        self.grid = grid
        self.placement = placement

    def heading_at(self, pos: Position, facing: Direction) -> Direction:
        placed = self.placement.get(pos)
        if placed is not None:
            return placed
        cell = self.grid.cell_at(pos)
        return cell.direction if cell.direction is not None else facing

    def landing(self, pos: Position, facing: Direction) -> AgentState | None:
        """State after one move from ``pos``; ``None`` if it hits a blocked cell."""
        target = pos.moved(facing, self.grid.width, self.grid.height)
        if self.grid.is_blocked(target):
            return None
        return AgentState(target, self.heading_at(target, facing))

    def accepts_marker(self, pos: Position) -> bool:
        return self.grid.cell_at(pos).kind is CellKind.OPEN and pos not in self.placement


def _alternatives(facing: Direction) -> list[Direction]:
    """Other headings in clockwise order, starting after ``facing``."""
    start = facing.index
    return [CLOCKWISE_ORDER[(start + k) % NUM_DIRECTIONS] for k in range(1, NUM_DIRECTIONS)]


def _detour(
    overlay: _Overlay, state: AgentState, claimed: set[AgentState]
) -> tuple[Direction, AgentState] | None:
    """First alternative heading whose landing is open and unclaimed."""
    if not overlay.accepts_marker(state.position):
        return None
    for heading in _alternatives(state.direction):
        landing = overlay.landing(state.position, heading)
        if landing is not None and landing not in claimed:
            return heading, landing
    return None


def greedy_fill(grid: Grid, agents: Sequence[Agent]) -> Placement:
    """Place detour markers so each agent avoids blocked cells and claimed states."""
    placement = Placement()
    overlay = _Overlay(grid, placement)
    claimed: set[AgentState] = set()
    limit = state_bound(grid)

    for agent in agents:
        pos = agent.position.wrapped(grid.width, grid.height)
        state = AgentState(pos, overlay.heading_at(pos, agent.direction))
        for _ in range(limit):
            claimed.add(state)
            landing = overlay.landing(state.position, state.direction)
            if landing is None or landing in claimed:
                detour = _detour(overlay, state, claimed)
                if detour is None:
                    break
                heading, landing = detour
                placement.add(state.position, heading)
                claimed.add(AgentState(state.position, heading))
            state = landing
        logger.debug(
            "greedy walk for agent %d done, %d markers so far", agent.agent_id, len(placement)
        )
    return placement


def best_greedy(grid: Grid, agents: Sequence[Agent]) -> Candidate:
    placement = greedy_fill(grid, agents)
    total = score(grid.apply(placement), agents)
    logger.debug("expected score greedy %d", total)
    return Candidate(placement, total, GREEDY_LABEL)
