"""Result-line serialization and debug dumps."""

from __future__ import annotations

import logging

from astarcraft.domain.grid import Grid
from astarcraft.domain.placement import Placement

logger = logging.getLogger(__name__)


def format_placement(placement: Placement) -> str:
    """Space-separated ``x y D`` triples in placement order."""
    return " ".join(str(marker) for marker in placement)


def log_grid(grid: Grid, level: int = logging.DEBUG) -> None:
    """Dump the grid rows to the log side channel."""
    if not logger.isEnabledFor(level):
        return
    for row in grid.rows():
        logger.log(level, "%s", row)
