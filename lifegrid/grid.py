"""Periodic two-dimensional process grids and their neighbour relations."""

from __future__ import annotations

from math import prod
from typing import Iterator, Sequence

# Relative positions of the eight neighbours, row by row.
NEIGHBOUR_OFFSETS = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

# Grid shapes used for particular process counts in experiments.
_FIXED_DIMS = {
    32: (1, 32),
    256: (8, 32),
    512: (16, 32),
    1024: (32, 32),
}


class CartTopology:
    """A Cartesian grid of ranks numbered in row-major order."""

    def __init__(self, dims: Sequence[int], periods: Sequence[bool] | None = None) -> None:
        dims = tuple(int(d) for d in dims)
        if not dims or any(d < 1 for d in dims):
            raise ValueError("every grid dimension must be at least 1")
        if periods is None:
            periods = (True,) * len(dims)
        periods = tuple(bool(p) for p in periods)
        if len(periods) != len(dims):
            raise ValueError("periods must have one entry per dimension")
        self.dims = dims
        self.periods = periods
        self.size = prod(dims)

    def __repr__(self) -> str:
        return f"CartTopology(dims={self.dims}, periods={self.periods})"

    def coords(self, rank: int) -> tuple[int, ...]:
        """Return the grid coordinates of ``rank``."""
        if not 0 <= rank < self.size:
            raise ValueError(f"rank {rank} is outside the grid")
        result = []
        for extent in reversed(self.dims):
            rank, position = divmod(rank, extent)
            result.append(position)
        return tuple(reversed(result))

    def rank(self, coords: Sequence[int]) -> int:
        """Return the rank at ``coords``, wrapping along periodic dimensions."""
        if len(coords) != len(self.dims):
            raise ValueError("coordinates do not match the grid dimensions")
        rank = 0
        for position, extent, periodic in zip(coords, self.dims, self.periods):
            if periodic:
                position %= extent
            elif not 0 <= position < extent:
                raise ValueError(f"coordinate {position} is outside a non-periodic dimension")
            rank = rank * extent + position
        return rank

    def _offset(self, rank: int, direction: int, disp: int) -> int | None:
        coords = list(self.coords(rank))
        coords[direction] += disp
        if not self.periods[direction] and not 0 <= coords[direction] < self.dims[direction]:
            return None
        return self.rank(coords)

    def shift(self, rank: int, direction: int, disp: int) -> tuple[int | None, int | None]:
        """Return ``(source, dest)`` for a shift by ``disp`` along ``direction``.

        ``None`` stands for a missing neighbour past the edge of a
        non-periodic dimension.
        """
        if not 0 <= direction < len(self.dims):
            raise ValueError(f"direction {direction} is outside the grid")
        return self._offset(rank, direction, -disp), self._offset(rank, direction, disp)

    def neighbors(self, rank: int) -> tuple[int, ...]:
        """Return the eight surrounding ranks of a 2-D grid, wrapping at every edge."""
        if len(self.dims) != 2:
            raise ValueError("neighbours are defined for two-dimensional grids only")
        row, col = self.coords(rank)
        rows, cols = self.dims
        return tuple(
            (((row + dr) % rows) * cols) + (col + dc) % cols for dr, dc in NEIGHBOUR_OFFSETS
        )


def _factorizations(nnodes: int, ndims: int, cap: int) -> Iterator[tuple[int, ...]]:
    if ndims == 1:
        if nnodes <= cap:
            yield (nnodes,)
        return
    for first in range(min(nnodes, cap), 0, -1):
        if nnodes % first == 0:
            for rest in _factorizations(nnodes // first, ndims - 1, first):
                yield (first, *rest)


def dims_create(nnodes: int, ndims: int) -> tuple[int, ...]:
    """Split ``nnodes`` into ``ndims`` factors as evenly as possible, largest first."""
    if nnodes < 1:
        raise ValueError("the number of nodes must be positive")
    if ndims < 1:
        raise ValueError("the number of dimensions must be positive")
    return min(
        _factorizations(nnodes, ndims, nnodes),
        key=lambda dims: (dims[0] - dims[-1], dims[0]),
    )


def choose_dims(size: int) -> tuple[int, int]:
    """Return the process grid shape used for ``size`` processes."""
    if size in _FIXED_DIMS:
        return _FIXED_DIMS[size]
    rows, cols = dims_create(size, 2)
    return rows, cols