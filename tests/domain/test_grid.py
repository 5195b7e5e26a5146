"""Tests for astarcraft.domain.grid module."""

from __future__ import annotations

import numpy as np
import pytest

from astarcraft.domain.geometry import Direction, Position
from astarcraft.domain.grid import BLOCKED, OPEN, Cell, CellKind, build_grid
from astarcraft.domain.placement import Marker, Placement
from astarcraft.errors import MalformedInputError

CORRIDOR_5X3 = ["#####", "#...#", "#####"]
ROOM_4X4 = ["####", "#..#", "#..#", "####"]


class TestBuildGrid:
    def test_dimensions(self) -> None:
        grid = build_grid(CORRIDOR_5X3, width=5, height=3)
        assert (grid.width, grid.height) == (5, 3)

    def test_wrong_row_count(self) -> None:
        with pytest.raises(MalformedInputError, match="expected 3 grid rows"):
            build_grid(CORRIDOR_5X3[:2], width=5, height=3)

    def test_wrong_row_length(self) -> None:
        with pytest.raises(MalformedInputError, match="must have 5 cells"):
            build_grid(["#####", "#..#", "#####"], width=5, height=3)

    def test_unrecognized_symbol(self) -> None:
        with pytest.raises(MalformedInputError, match="unrecognized cell symbol"):
            build_grid(["#####", "#.x.#", "#####"], width=5, height=3)

    def test_strips_line_endings(self) -> None:
        grid = build_grid([row + "\n" for row in CORRIDOR_5X3], width=5, height=3)
        assert grid.rows() == CORRIDOR_5X3

    def test_preexisting_markers(self) -> None:
        grid = build_grid(["#####", "#.U.#", "#####"], width=5, height=3)
        assert grid.cell_at(Position(2, 1)) == Cell.marker(Direction.UP)
        assert Position(2, 1) not in grid.open_cells()


class TestCellAccess:
    def test_cell_kinds(self) -> None:
        grid = build_grid(CORRIDOR_5X3, width=5, height=3)
        assert grid.cell_at(Position(0, 0)) is BLOCKED
        assert grid.cell_at(Position(1, 1)) is OPEN
        assert grid.is_blocked(Position(4, 1))

    def test_cell_at_wraps(self) -> None:
        grid = build_grid(CORRIDOR_5X3, width=5, height=3)
        assert grid.cell_at(Position(6, 4)) == grid.cell_at(Position(1, 1))

    def test_marker_cell_requires_direction(self) -> None:
        with pytest.raises(ValueError):
            Cell(CellKind.MARKER)
        with pytest.raises(ValueError):
            Cell(CellKind.OPEN, Direction.UP)

    @pytest.mark.parametrize("direction", list(Direction))
    def test_marker_symbol_and_code(self, direction: Direction) -> None:
        cell = Cell.marker(direction)
        assert cell.symbol == direction.value
        assert cell.code == direction.index
        assert Cell.from_symbol(cell.symbol) == cell


class TestDerivedIndexes:
    def test_open_cells_row_major(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        assert grid.open_cells() == (
            Position(1, 1),
            Position(2, 1),
            Position(1, 2),
            Position(2, 2),
        )

    def test_open_cells_stable_across_calls(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        assert grid.open_cells() == grid.open_cells()

    def test_blocked_cells(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        assert len(grid.blocked_cells()) == 12
        assert grid.blocked_cells()[0] == Position(0, 0)

    def test_neighbor_blocked_count(self) -> None:
        grid = build_grid(CORRIDOR_5X3, width=5, height=3)
        assert grid.neighbor_blocked_count(Position(1, 1)) == 3
        assert grid.neighbor_blocked_count(Position(2, 1)) == 2
        assert grid.neighbor_blocked_count(Position(3, 1)) == 3

    def test_neighbor_blocked_count_wraps(self) -> None:
        # (0, 1) sees (4, 1) on its left through the border.
        grid = build_grid(["#####", "....#", "#####"], width=5, height=3)
        assert grid.neighbor_blocked_count(Position(0, 1)) == 3
        assert grid.neighbor_blocked_count(Position(1, 1)) == 2

    def test_neighbor_blocked_count_only_for_open_cells(self) -> None:
        grid = build_grid(CORRIDOR_5X3, width=5, height=3)
        with pytest.raises(KeyError):
            grid.neighbor_blocked_count(Position(0, 0))

    def test_codes_are_read_only(self) -> None:
        grid = build_grid(CORRIDOR_5X3, width=5, height=3)
        with pytest.raises(ValueError):
            grid.codes[0, 0] = 4


class TestApply:
    def test_returns_new_grid_without_mutating_receiver(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        before = grid.rows()
        marked = grid.apply(Placement([Marker(Position(1, 1), Direction.RIGHT)]))
        assert grid.rows() == before
        assert marked.cell_at(Position(1, 1)) == Cell.marker(Direction.RIGHT)
        assert grid.cell_at(Position(1, 1)) is OPEN

    def test_previous_results_are_not_mutated(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        first = grid.apply(Placement([Marker(Position(1, 1), Direction.RIGHT)]))
        first_rows = first.rows()
        first.apply(Placement([Marker(Position(2, 2), Direction.LEFT)]))
        assert first.rows() == first_rows

    def test_indexes_recomputed(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        marked = grid.apply(Placement([Marker(Position(1, 1), Direction.RIGHT)]))
        assert Position(1, 1) not in marked.open_cells()
        assert len(marked.open_cells()) == 3

    def test_disjoint_placements_compose(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        p1 = Placement(
            [Marker(Position(1, 1), Direction.RIGHT), Marker(Position(2, 1), Direction.DOWN)]
        )
        p2 = Placement([Marker(Position(2, 2), Direction.LEFT)])
        assert grid.apply(p1).apply(p2) == grid.apply(p1.union(p2))
        assert grid.apply(p2).apply(p1) == grid.apply(p1.union(p2))

    def test_last_write_wins(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        markers = [Marker(Position(1, 1), Direction.RIGHT), Marker(Position(1, 1), Direction.UP)]
        assert grid.apply(markers).cell_at(Position(1, 1)) == Cell.marker(Direction.UP)

    def test_blocked_cell_rejected(self) -> None:
        grid = build_grid(ROOM_4X4, width=4, height=4)
        with pytest.raises(ValueError, match="blocked cell"):
            grid.apply([Marker(Position(0, 0), Direction.UP)])

    def test_equality_and_hash(self) -> None:
        a = build_grid(ROOM_4X4, width=4, height=4)
        b = build_grid(ROOM_4X4, width=4, height=4)
        assert a == b
        assert hash(a) == hash(b)
        assert a != a.apply([Marker(Position(1, 1), Direction.UP)])

    def test_rows_roundtrip_with_markers(self) -> None:
        rows = ["####", "#RD#", "#UL#", "####"]
        assert build_grid(rows, width=4, height=4).rows() == rows

    def test_grid_rejects_bad_code_arrays(self) -> None:
        from astarcraft.domain.grid import Grid

        with pytest.raises(ValueError):
            Grid(np.zeros((0, 0), dtype=np.int8))
        with pytest.raises(ValueError):
            Grid(np.full((2, 2), 9, dtype=np.int8))


class TestPlacement:
    def test_overwrite_keeps_insertion_slot(self) -> None:
        placement = Placement()
        placement.add(Position(1, 1), Direction.UP)
        placement.add(Position(2, 1), Direction.LEFT)
        placement.add(Position(1, 1), Direction.DOWN)
        assert [str(m) for m in placement] == ["1 1 D", "2 1 L"]
        assert len(placement) == 2

    def test_contains_and_get(self) -> None:
        placement = Placement([Marker(Position(3, 4), Direction.RIGHT)])
        assert Position(3, 4) in placement
        assert placement.get(Position(3, 4)) is Direction.RIGHT
        assert placement.get(Position(0, 0)) is None
