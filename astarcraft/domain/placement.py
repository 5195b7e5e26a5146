"""Marker placements and scored candidates."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from astarcraft.domain.geometry import Direction, Position


@dataclass(frozen=True)
class Marker:
    """One arrow to write onto a grid cell."""

    position: Position
    direction: Direction

    def __str__(self) -> str:
        return f"{self.position.x} {self.position.y} {self.direction.value}"


class Placement:
    """Ordered set of markers keyed by position.

    Adding a marker for a position already present overwrites its direction
    (last write wins) but keeps the first insertion slot, so iteration and
    serialization order stay stable.
    """

    def __init__(self, markers: Iterable[Marker] = ()) -> None:
        self._markers: dict[Position, Direction] = {}
        for marker in markers:
            self.add(marker.position, marker.direction)

    def add(self, position: Position, direction: Direction) -> None:
        self._markers[position] = direction

    def get(self, position: Position) -> Direction | None:
        return self._markers.get(position)

    def positions(self) -> frozenset[Position]:
        return frozenset(self._markers)

    def union(self, other: Placement) -> Placement:
        """Return a new placement with ``other`` written after ``self``."""
        return Placement([*self, *other])

    def __contains__(self, position: object) -> bool:
        return position in self._markers

    def __iter__(self) -> Iterator[Marker]:
        for position, direction in self._markers.items():
            yield Marker(position, direction)

    def __len__(self) -> int:
        return len(self._markers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Placement):
            return NotImplemented
        return list(self._markers.items()) == list(other._markers.items())

    def __repr__(self) -> str:
        return f"Placement({' '.join(str(m) for m in self)!r})"


@dataclass(frozen=True)
class Candidate:
    """A placement together with its aggregate score and producing strategy."""

    placement: Placement
    score: int
    label: str = ""
