"""Halo exchange between the tiles of a distributed board, all ranks at once.

Each function takes the local tiles of every rank, indexed by rank, and
returns what each rank would hold after the exchange.
"""

from __future__ import annotations

from typing import Sequence

from lifegrid.grid import CartTopology
from lifegrid.matrix import HALO, Matrix, new_matrix

Tile = Sequence[Sequence[int]]


def _tile_shape(topology: CartTopology, matrices: Sequence[Tile]) -> tuple[int, int]:
    if len(topology.dims) != 2:
        raise ValueError("halo exchange needs a two-dimensional grid")
    if len(matrices) != topology.size:
        raise ValueError(f"expected {topology.size} tiles, got {len(matrices)}")
    rows = len(matrices[0])
    cols = len(matrices[0][0]) if rows else 0
    for tile in matrices:
        if len(tile) != rows or any(len(row) != cols for row in tile):
            raise ValueError("all tiles must have the same shape")
    if rows < HALO or cols < HALO:
        raise ValueError(f"tiles must be at least {HALO}x{HALO}")
    return rows, cols


def _with_interior(tile: Tile, rows: int, cols: int) -> Matrix:
    extended = new_matrix(rows + 2 * HALO, cols + 2 * HALO)
    for i, row in enumerate(tile):
        extended[i + HALO][HALO : cols + HALO] = list(row)
    return extended


def _collective_blocks(tile: Tile) -> list[list[int]]:
    """Pack the eight outgoing pieces in the order of the neighbour list."""
    cols = len(tile[0])
    top, bottom = tile[:HALO], tile[len(tile) - HALO :]
    return [
        [v for row in top for v in row[:HALO]],
        [v for row in top for v in row[cols - HALO :]],
        [v for row in bottom for v in row[:HALO]],
        [v for row in bottom for v in row[cols - HALO :]],
        [v for row in tile for v in row[:HALO]],
        [v for row in tile for v in row[cols - HALO :]],
        [v for row in top for v in row],
        [v for row in bottom for v in row],
    ]


def _collective_edges(topology: CartTopology, rank: int) -> list[int]:
    ul, _, ur, _, _, ll, _, lr = topology.neighbors(rank)
    left, right = topology.shift(rank, 1, 1)
    up, down = topology.shift(rank, 0, 1)
    edges = [ul, ur, ll, lr, left, right, up, down]
    if None in edges:
        raise ValueError("neighbourhood exchange needs a periodic grid")
    return edges


def _unpack_regions(rows: int, cols: int) -> list[tuple[range, range]]:
    near, far_r, far_c = range(HALO), range(rows + HALO, rows + 2 * HALO), range(
        cols + HALO, cols + 2 * HALO
    )
    inner_r, inner_c = range(HALO, rows + HALO), range(HALO, cols + HALO)
    return [
        (far_r, far_c),
        (far_r, near),
        (near, far_c),
        (near, near),
        (inner_r, far_c),
        (inner_r, near),
        (far_r, inner_c),
        (near, inner_c),
    ]


def collectives_communicate(topology: CartTopology, matrices: Sequence[Tile]) -> list[Matrix]:
    """Exchange halos with one neighbourhood all-to-all over the eight neighbours.

    Block ``i`` of a rank comes from its ``i``-th neighbour. Where one rank
    appears several times among the neighbours, messages pair up in the
    order of the neighbour lists on both sides.
    """
    rows, cols = _tile_shape(topology, matrices)
    blocks = [_collective_blocks(tile) for tile in matrices]
    edges = [_collective_edges(topology, rank) for rank in range(topology.size)]
    regions = _unpack_regions(rows, cols)

    result = []
    for rank, tile in enumerate(matrices):
        extended = _with_interior(tile, rows, cols)
        own_edges = edges[rank]
        for index, source in enumerate(own_edges):
            occurrence = own_edges[:index].count(source)
            slots = [j for j, dest in enumerate(edges[source]) if dest == rank]
            if occurrence >= len(slots):
                raise ValueError("neighbour lists are not symmetric")
            received = blocks[source][slots[occurrence]]
            region_rows, region_cols = regions[index]
            if len(received) != len(region_rows) * len(region_cols):
                raise ValueError("received block does not fit its halo region")
            values = iter(received)
            for i in region_rows:
                for j in region_cols:
                    extended[i][j] = next(values)
        result.append(extended)
    return result


def sendrecv_communicate(topology: CartTopology, matrices: Sequence[Tile]) -> list[Matrix]:
    """Exchange halos pairwise with each of the eight neighbours."""
    rows, cols = _tile_shape(topology, matrices)
    result = []
    for rank, tile in enumerate(matrices):
        ul, up, ur, left, right, ll, down, lr = (
            matrices[n] for n in topology.neighbors(rank)
        )
        extended = _with_interior(tile, rows, cols)
        inner = slice(HALO, cols + HALO)
        extended[0][inner] = list(up[rows - 2])
        extended[1][inner] = list(up[rows - 1])
        extended[rows + 2][inner] = list(down[0])
        extended[rows + 3][inner] = list(down[1])
        for i in range(rows):
            row = extended[i + HALO]
            row[0], row[1] = left[i][cols - 2], left[i][cols - 1]
            row[cols + 2], row[cols + 3] = right[i][0], right[i][1]
        for di in range(HALO):
            for dj in range(HALO):
                extended[di][dj] = ul[rows - 2 + di][cols - 2 + dj]
                extended[di][cols + 2 + dj] = ur[rows - 2 + di][dj]
                extended[rows + 2 + di][dj] = ll[di][cols - 2 + dj]
                extended[rows + 2 + di][cols + 2 + dj] = lr[di][dj]
        result.append(extended)
    return result


def gather_ranks(topology: CartTopology, matrices: Sequence[Tile], n: int) -> Matrix:
    """Assemble every rank's tile into the global ``n`` x ``n`` board."""
    if len(topology.dims) != 2:
        raise ValueError("gathering needs a two-dimensional grid")
    if len(matrices) != topology.size:
        raise ValueError(f"expected {topology.size} tiles, got {len(matrices)}")
    rows = len(matrices[0])
    cols = len(matrices[0][0]) if rows else 0
    if any(len(tile) != rows or any(len(row) != cols for row in tile) for tile in matrices):
        raise ValueError("all tiles must have the same shape")
    if rows * topology.dims[0] != n or cols * topology.dims[1] != n:
        raise ValueError("tiles do not cover an n x n board")
    board = new_matrix(n, n)
    for rank, tile in enumerate(matrices):
        prow, pcol = topology.coords(rank)
        offset_r, offset_c = prow * rows, pcol * cols
        for i, row in enumerate(tile):
            board[offset_r + i][offset_c : offset_c + cols] = list(row)
    return board