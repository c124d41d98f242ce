"""Conway's Game of Life on a periodic grid, run whole or as blocks with simulated halo exchange."""

__version__ = "0.1.0"