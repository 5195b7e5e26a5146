"""Simulation engine: per-agent survival and aggregate scoring."""

from astarcraft.simulation.engine import score, score_breakdown, simulate, state_bound, trace

__all__ = [
    "score",
    "score_breakdown",
    "simulate",
    "state_bound",
    "trace",
]
