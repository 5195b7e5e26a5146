"""I/O layer: input parsing and result serialization."""

from astarcraft.io.output import format_placement, log_grid
from astarcraft.io.parsing import Problem, parse_problem, read_problem

__all__ = [
    "Problem",
    "format_placement",
    "log_grid",
    "parse_problem",
    "read_problem",
]
