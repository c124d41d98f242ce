"""Grid helpers: creation, random filling, halo extension and one generation step."""

from __future__ import annotations

from itertools import product
from typing import Sequence

from lifegrid.crand import GlibcRandom

Matrix = list[list[int]]

HALO = 2

# Offsets from a cell to the eight cells counted as its neighbours.
_STENCIL = (
    (-2, -2),
    (-1, 0),
    (-1, 1),
    (0, -2),
    (0, 1),
    (2, -2),
    (2, 0),
    (2, 2),
)


def new_matrix(rows: int, cols: int) -> Matrix:
    """Return a ``rows`` x ``cols`` grid of dead cells."""
    if rows < 0 or cols < 0:
        raise ValueError("matrix dimensions must be non-negative")
    return [[0] * cols for _ in range(rows)]


def matrices_are_equal(first: Sequence[Sequence[int]], second: Sequence[Sequence[int]]) -> bool:
    """Return True when both grids have the same shape and contents."""
    return [list(row) for row in first] == [list(row) for row in second]


def fill_matrix(
    rows: int,
    cols: int,
    n: int,
    density: int,
    offset_r: int,
    offset_c: int,
    rng: GlibcRandom,
) -> Matrix:
    """Draw a full ``n`` x ``n`` board from ``rng`` and keep the given tile.

    Every cell of the global board consumes one random number, so each tile
    sees the same board as a sequential run with the same seed.
    """
    matrix = new_matrix(rows, cols)
    for i, j in product(range(n), range(n)):
        alive = 1 if rng.rand() % 100 < density else 0
        if offset_r <= i < offset_r + rows and offset_c <= j < offset_c + cols:
            matrix[i - offset_r][j - offset_c] = alive
    return matrix


def fill_extended_grid(matrix: Sequence[Sequence[int]]) -> Matrix:
    """Surround ``matrix`` with a two-cell periodic halo."""
    rows = len(matrix)
    cols = len(matrix[0]) if rows else 0
    if rows == 0 or cols == 0:
        raise ValueError("cannot extend an empty matrix")
    return [
        [matrix[(i - HALO) % rows][(j - HALO) % cols] for j in range(cols + 2 * HALO)]
        for i in range(rows + 2 * HALO)
    ]


def format_matrix(matrix: Sequence[Sequence[int]]) -> str:
    """Render a grid as rows of space-terminated cell values."""
    return "".join("".join(f"{value} " for value in row) + "\n" for row in matrix)


def update_matrix(extended: Sequence[Sequence[int]]) -> Matrix:
    """Compute the next generation of the interior of a halo-extended grid."""
    rows = len(extended) - 2 * HALO
    cols = (len(extended[0]) if extended else 0) - 2 * HALO
    if rows <= 0 or cols <= 0:
        raise ValueError("extended matrix is too small")
    result = new_matrix(rows, cols)
    for i, j in product(range(HALO, rows + HALO), range(HALO, cols + HALO)):
        neighbours = sum(extended[i + di][j + dj] for di, dj in _STENCIL)
        survives = neighbours == 3 or (neighbours == 2 and extended[i][j] != 0)
        result[i - HALO][j - HALO] = int(survives)
    return result