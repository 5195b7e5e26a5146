"""Domain layer: geometry, grid model, agents and placements."""

from astarcraft.domain.agent import Agent, AgentState
from astarcraft.domain.geometry import CLOCKWISE_ORDER, NEIGHBOR_ORDER, Direction, Position
from astarcraft.domain.grid import (
    BLOCKED,
    OPEN,
    Cell,
    CellKind,
    Grid,
    build_grid,
)
from astarcraft.domain.placement import Candidate, Marker, Placement

__all__ = [
    "Agent",
    "AgentState",
    "BLOCKED",
    "CLOCKWISE_ORDER",
    "Candidate",
    "Cell",
    "CellKind",
    "Direction",
    "Grid",
    "Marker",
    "NEIGHBOR_ORDER",
    "OPEN",
    "Placement",
    "Position",
    "build_grid",
]
