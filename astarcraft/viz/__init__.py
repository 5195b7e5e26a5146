"""Visualization: PNG rendering of solved grids."""

from astarcraft.viz.render import build_cell_array, render_grid

__all__ = ["build_cell_array", "render_grid"]
