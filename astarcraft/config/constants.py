"""Board geometry, cell alphabet and search defaults.

The default board is 19 columns by 10 rows. Cells are written with one
character each: void, platform, or an arrow letter listed clockwise from
Up. The two sampling probabilities belong to the plain and the weighted
random-search variants.
"""

from __future__ import annotations

GRID_WIDTH = 19
"""Default grid width in cells."""

GRID_HEIGHT = 10
"""Default grid height in cells."""

NUM_DIRECTIONS = 4
"""Number of headings an agent or marker can take."""

BLOCKED_SYMBOL = "#"
"""Input symbol for an impassable (void) cell."""

OPEN_SYMBOL = "."
"""Input symbol for an empty platform cell."""

DIRECTION_SYMBOLS: tuple[str, ...] = ("U", "R", "D", "L")
"""Marker/heading letters in clockwise order."""

CELL_SYMBOLS: frozenset[str] = frozenset((BLOCKED_SYMBOL, OPEN_SYMBOL, *DIRECTION_SYMBOLS))
"""Every symbol accepted in a grid row."""

DEFAULT_TIME_BUDGET = 0.9
"""Default wall-clock budget (seconds) for randomized search."""

UNIFORM_PLACE_PROBABILITY = 0.5
"""Per-cell placement probability of the plain uniform sampler."""

WEIGHTED_PLACE_PROBABILITY = 0.7
"""Per-cell placement probability of the weighted sampler (skip 0.3 / place 0.7)."""
