"""Robot agents and the (position, facing) state used for cycle detection."""

from __future__ import annotations

from dataclasses import dataclass

from astarcraft.config.constants import GRID_HEIGHT, GRID_WIDTH
from astarcraft.domain.geometry import Direction, Position


@dataclass(frozen=True)
class AgentState:
    """Immutable (position, facing) pair; equal iff both components are equal."""

    position: Position
    direction: Direction


@dataclass
class Agent:
    """A single robot: identity, position and facing. Mutable during a run."""

    agent_id: int
    x: int
    y: int
    direction: Direction

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def clone(self) -> Agent:
        return Agent(agent_id=self.agent_id, x=self.x, y=self.y, direction=self.direction)

    def move(self, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> None:
        """Advance one cell in the facing direction, wrapping at the edges."""
        self.x = (self.x + self.direction.dx) % width
        self.y = (self.y + self.direction.dy) % height

    def state(self) -> AgentState:
        return AgentState(self.position, self.direction)
