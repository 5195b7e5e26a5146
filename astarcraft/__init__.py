"""Arrow placement on a toroidal grid to maximize robot survival time."""

__version__ = "0.1.0"
