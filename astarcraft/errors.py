"""Exception taxonomy shared across layers."""

from __future__ import annotations


class MalformedInputError(ValueError):
    """Raised when grid rows, symbols or agent lines do not match the input format."""


class InvariantViolation(RuntimeError):
    """Raised when a simulation outlives the finite-state bound (a cycle-detection bug)."""
