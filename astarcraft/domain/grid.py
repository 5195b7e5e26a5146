"""Immutable toroidal cell grid with cached topology indexes.

Cells are stored as a read-only ``numpy`` ``int8`` array of codes: ``0..3``
are markers (the clockwise index of their direction), then ``OPEN_CODE`` and
``BLOCKED_CODE``. A ``Grid`` never changes after construction; ``apply``
returns a new value built from a copy of the code array.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, cast

import numpy as np

from astarcraft.config.constants import (
    BLOCKED_SYMBOL,
    CELL_SYMBOLS,
    GRID_HEIGHT,
    GRID_WIDTH,
    OPEN_SYMBOL,
)
from astarcraft.domain.geometry import CLOCKWISE_ORDER, Direction, Position
from astarcraft.errors import MalformedInputError

if TYPE_CHECKING:
    from astarcraft.domain.placement import Marker

OPEN_CODE = 4
BLOCKED_CODE = 5


class CellKind(Enum):
    """Tag of a grid cell."""

    BLOCKED = "blocked"
    OPEN = "open"
    MARKER = "marker"


@dataclass(frozen=True)
class Cell:
    """Tagged cell value: ``Blocked | Open | Marker(direction)``."""

    kind: CellKind
    direction: Direction | None = None

    def __post_init__(self) -> None:
        if (self.kind is CellKind.MARKER) != (self.direction is not None):
            raise ValueError("only marker cells carry a direction")

    @classmethod
    def marker(cls, direction: Direction) -> Cell:
        return cls(CellKind.MARKER, direction)

    @classmethod
    def from_symbol(cls, symbol: str) -> Cell:
        """Parse one grid character."""
        if symbol == BLOCKED_SYMBOL:
            return BLOCKED
        if symbol == OPEN_SYMBOL:
            return OPEN
        return cls.marker(Direction.from_symbol(symbol))

    @property
    def symbol(self) -> str:
        if self.kind is CellKind.BLOCKED:
            return BLOCKED_SYMBOL
        if self.kind is CellKind.OPEN:
            return OPEN_SYMBOL
        return cast(Direction, self.direction).value

    @property
    def code(self) -> int:
        if self.kind is CellKind.BLOCKED:
            return BLOCKED_CODE
        if self.kind is CellKind.OPEN:
            return OPEN_CODE
        return cast(Direction, self.direction).index


BLOCKED = Cell(CellKind.BLOCKED)
OPEN = Cell(CellKind.OPEN)

_CELLS_BY_CODE: tuple[Cell, ...] = (
    *(Cell.marker(d) for d in CLOCKWISE_ORDER),
    OPEN,
    BLOCKED,
)


def cell_from_code(code: int) -> Cell:
    return _CELLS_BY_CODE[code]


class Grid:
    """Toroidal grid of cells plus derived read-only indexes.

    The indexes (open cells, blocked cells, blocked-neighbor counts of open
    cells) are computed once in the constructor and owned by the instance.
    """

    def __init__(self, codes: np.ndarray) -> None:
        array = np.array(codes, dtype=np.int8)
        if array.ndim != 2 or array.size == 0:
            raise ValueError("grid codes must be a non-empty 2-D array")
        if array.min() < 0 or array.max() > BLOCKED_CODE:
            raise ValueError("grid codes out of range")
        array.flags.writeable = False
        self._codes = array
        self.height, self.width = (int(n) for n in array.shape)
        self._flat: tuple[int, ...] = tuple(int(c) for c in array.ravel())

        blocked = (array == BLOCKED_CODE).astype(np.int8)
        # Toroidal 4-neighborhood: rolling wraps around both edges.
        counts = (
            np.roll(blocked, 1, axis=0)
            + np.roll(blocked, -1, axis=0)
            + np.roll(blocked, 1, axis=1)
            + np.roll(blocked, -1, axis=1)
        )
        open_ys, open_xs = np.nonzero(array == OPEN_CODE)
        self._open_cells = tuple(
            Position(int(x), int(y)) for y, x in zip(open_ys, open_xs, strict=True)
        )
        self._blocked_neighbor_counts: dict[Position, int] = {
            pos: int(counts[pos.y, pos.x]) for pos in self._open_cells
        }
        blocked_ys, blocked_xs = np.nonzero(blocked)
        self._blocked_cells = tuple(
            Position(int(x), int(y)) for y, x in zip(blocked_ys, blocked_xs, strict=True)
        )

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    @property
    def codes(self) -> np.ndarray:
        """Read-only ``(height, width)`` code array."""
        return self._codes

    @property
    def flat_codes(self) -> tuple[int, ...]:
        """Row-major codes as plain ints, indexed by ``y * width + x``."""
        return self._flat

    def cell_at(self, pos: Position) -> Cell:
        return _CELLS_BY_CODE[self._flat[(pos.y % self.height) * self.width + pos.x % self.width]]

    def is_blocked(self, pos: Position) -> bool:
        return self.cell_at(pos).kind is CellKind.BLOCKED

    def neighbors(self, pos: Position) -> list[Position]:
        """Wrapped neighbors in the order top, bottom, left, right."""
        return pos.neighbors(self.width, self.height)

    # ------------------------------------------------------------------
    # Derived indexes
    # ------------------------------------------------------------------

    def open_cells(self) -> tuple[Position, ...]:
        """Open (unmarked, non-blocked) cells in row-major order."""
        return self._open_cells

    def blocked_cells(self) -> tuple[Position, ...]:
        return self._blocked_cells

    def neighbor_blocked_count(self, pos: Position) -> int:
        """Number of Blocked cells among the 4 neighbors of an Open cell."""
        return self._blocked_neighbor_counts[pos]

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def apply(self, markers: Iterable[Marker]) -> Grid:
        """Return a new grid with each marker written onto its cell.

        Later markers for the same position overwrite earlier ones. The
        receiver is left untouched.
        """
        codes = self._codes.copy()
        for marker in markers:
            x = marker.position.x % self.width
            y = marker.position.y % self.height
            if codes[y, x] == BLOCKED_CODE:
                raise ValueError(f"cannot place a marker on blocked cell {marker.position}")
            codes[y, x] = marker.direction.index
        return Grid(codes)

    def rows(self) -> list[str]:
        """Symbol rows, the inverse of ``build_grid``."""
        symbols = [cell.symbol for cell in _CELLS_BY_CODE]
        return [
            "".join(symbols[c] for c in self._flat[y * self.width : (y + 1) * self.width])
            for y in range(self.height)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._codes.shape == other._codes.shape and self._flat == other._flat

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._flat))

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, open={len(self._open_cells)})"


def build_grid(
    rows: Sequence[str], width: int = GRID_WIDTH, height: int = GRID_HEIGHT
) -> Grid:
    """Build a grid from ``height`` rows of ``width`` cell symbols."""
    if len(rows) != height:
        raise MalformedInputError(f"expected {height} grid rows, got {len(rows)}")
    codes = np.empty((height, width), dtype=np.int8)
    for y, raw_row in enumerate(rows):
        row = raw_row.rstrip("\r\n")
        if len(row) != width:
            raise MalformedInputError(
                f"grid row {y} must have {width} cells, got {len(row)}: {row!r}"
            )
        for x, symbol in enumerate(row):
            if symbol not in CELL_SYMBOLS:
                raise MalformedInputError(f"unrecognized cell symbol {symbol!r} at ({x},{y})")
            codes[y, x] = Cell.from_symbol(symbol).code
    return Grid(codes)
