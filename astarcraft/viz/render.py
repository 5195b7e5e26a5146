"""Matplotlib rendering of a grid, its markers and agent start positions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import BoundaryNorm, ListedColormap  # noqa: E402
from matplotlib.image import AxesImage  # noqa: E402
from matplotlib.patches import Patch  # noqa: E402

from astarcraft.domain.agent import Agent  # noqa: E402
from astarcraft.domain.geometry import Direction  # noqa: E402
from astarcraft.domain.grid import BLOCKED_CODE, OPEN_CODE, Grid, cell_from_code  # noqa: E402

KIND_BLOCKED = 0
KIND_OPEN = 1
KIND_MARKER = 2

ARROW_GLYPHS: dict[Direction, str] = {
    Direction.UP: "↑",
    Direction.RIGHT: "→",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
}


@dataclass(frozen=True)
class Theme:
    """Colors for the three cell kinds plus overlays."""

    blocked_color: str = "#1A1A1A"
    open_color: str = "#F0F0F0"
    marker_color: str = "#FFC107"
    agent_color: str = "#FF5722"
    grid_line_color: str = "#CCCCCC"


DEFAULT_THEME = Theme()


def build_cell_array(grid: Grid) -> np.ndarray:
    """Return an (H, W) int array of cell kinds: 0 blocked, 1 open, 2 marker."""
    codes = grid.codes
    kinds = np.full(codes.shape, KIND_MARKER, dtype=int)
    kinds[codes == OPEN_CODE] = KIND_OPEN
    kinds[codes == BLOCKED_CODE] = KIND_BLOCKED
    return kinds


def _kind_cmap(theme: Theme) -> tuple[ListedColormap, BoundaryNorm]:
    cmap = ListedColormap([theme.blocked_color, theme.open_color, theme.marker_color])
    norm = BoundaryNorm([-0.5, 0.5, 1.5, 2.5], cmap.N)
    return cmap, norm


def _draw_cell_grid(ax: plt.Axes, kinds: np.ndarray, theme: Theme) -> AxesImage:
    cmap, norm = _kind_cmap(theme)
    img = ax.imshow(kinds, cmap=cmap, norm=norm, origin="upper", aspect="equal")
    h, w = kinds.shape
    for x in range(w + 1):
        ax.axvline(x - 0.5, color=theme.grid_line_color, linewidth=0.5)
    for y in range(h + 1):
        ax.axhline(y - 0.5, color=theme.grid_line_color, linewidth=0.5)
    ax.set_xticks([])
    ax.set_yticks([])
    return img


def render_grid(
    grid: Grid,
    output_path: Path,
    *,
    agents: Sequence[Agent] = (),
    title: str | None = None,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Write a PNG of ``grid`` with arrow glyphs on markers and agent starts."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(grid.width * 0.4 + 1, grid.height * 0.4 + 1))
    _draw_cell_grid(ax, build_cell_array(grid), theme)
    for y in range(grid.height):
        for x in range(grid.width):
            direction = cell_from_code(grid.flat_codes[y * grid.width + x]).direction
            if direction is not None:
                ax.text(x, y, ARROW_GLYPHS[direction], ha="center", va="center", fontsize=9)
    for agent in agents:
        ax.plot(agent.x, agent.y, "o", color=theme.agent_color, markersize=5, alpha=0.8)
        ax.text(
            agent.x,
            agent.y - 0.35,
            agent.direction.value,
            ha="center",
            va="center",
            fontsize=6,
            color=theme.agent_color,
        )
    handles = [
        Patch(facecolor=theme.blocked_color, edgecolor="gray", label="Void"),
        Patch(facecolor=theme.open_color, edgecolor="gray", label="Platform"),
        Patch(facecolor=theme.marker_color, edgecolor="gray", label="Arrow"),
    ]
    ax.legend(
        handles=handles, loc="upper center", bbox_to_anchor=(0.5, -0.02), ncol=3, fontsize=7
    )
    if title:
        ax.set_title(title, fontsize=10)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
