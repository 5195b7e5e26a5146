"""Headings and wrapped grid coordinates.

Coordinates follow the input convention: ``x`` is the column, ``y`` the row,
and ``y`` grows downwards. Every move wraps around both edges (toroidal
topology), so a position is always in range for its grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from astarcraft.config.constants import GRID_HEIGHT, GRID_WIDTH, NUM_DIRECTIONS
from astarcraft.errors import MalformedInputError


class Direction(Enum):
    """Agent heading / marker orientation, valued by its input letter."""

    UP = "U"
    RIGHT = "R"
    DOWN = "D"
    LEFT = "L"

    @classmethod
    def from_symbol(cls, symbol: str) -> Direction:
        """Parse a direction letter, raising ``MalformedInputError`` if unknown."""
        try:
            return cls(symbol)
        except ValueError as exc:
            valid = ", ".join(d.value for d in cls)
            raise MalformedInputError(
                f"direction must be one of {valid}, got {symbol!r}"
            ) from exc

    @property
    def index(self) -> int:
        """Position in the clockwise cycle (U=0, R=1, D=2, L=3)."""
        return _INDEX[self]

    @property
    def dx(self) -> int:
        return _OFFSETS[self][0]

    @property
    def dy(self) -> int:
        return _OFFSETS[self][1]

    def clockwise(self) -> Direction:
        return CLOCKWISE_ORDER[(self.index + 1) % NUM_DIRECTIONS]

    def anticlockwise(self) -> Direction:
        return CLOCKWISE_ORDER[(self.index - 1) % NUM_DIRECTIONS]

    def opposite(self) -> Direction:
        return CLOCKWISE_ORDER[(self.index + 2) % NUM_DIRECTIONS]


CLOCKWISE_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)
"""Fixed cyclic order used when trying alternative headings."""

NEIGHBOR_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)
"""Direction towards each entry of ``Position.neighbors()`` (top, bottom, left, right)."""

_INDEX: dict[Direction, int] = {d: i for i, d in enumerate(CLOCKWISE_ORDER)}
_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


@dataclass(frozen=True)
class Position:
    """A cell coordinate (column ``x``, row ``y``)."""

    x: int
    y: int

    def moved(
        self, direction: Direction, width: int = GRID_WIDTH, height: int = GRID_HEIGHT
    ) -> Position:
        """Return the adjacent position in ``direction``, wrapping at the edges."""
        return Position((self.x + direction.dx) % width, (self.y + direction.dy) % height)

    def wrapped(self, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> Position:
        return Position(self.x % width, self.y % height)

    def neighbors(self, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> list[Position]:
        """Return the 4 wrapped neighbors in the order top, bottom, left, right."""
        return [self.moved(d, width, height) for d in NEIGHBOR_ORDER]

    def __str__(self) -> str:
        return f"({self.x},{self.y})"
