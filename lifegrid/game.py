"""Running the simulation on a simulated process grid and sequentially."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from typing import Callable, Sequence, TextIO

from lifegrid.communication import collectives_communicate, gather_ranks, sendrecv_communicate
from lifegrid.crand import GlibcRandom
from lifegrid.grid import CartTopology, choose_dims
from lifegrid.matrix import (
    Matrix,
    fill_extended_grid,
    fill_matrix,
    format_matrix,
    matrices_are_equal,
    update_matrix,
)
from lifegrid.utilities import Options, count_cells, parse_arguments

HEADER = "np\tn\tseed\tdensity\titers\tdimx\tdimy\timplementation\ttime (ms)\talive\tdead\n"

Communicate = Callable[[CartTopology, Sequence[Sequence[Sequence[int]]]], list[Matrix]]


@dataclass(frozen=True)
class SimulationParams:
    """Settings of a run together with the layout of the process grid."""

    n: int
    seed: int
    density: int
    iterations: int
    verbose: bool
    verify: bool
    reps: int
    size: int
    dims: tuple[int, int]
    topology: CartTopology
    n_loc_r: int
    n_loc_c: int

    def offsets(self, rank: int) -> tuple[int, int]:
        """Return the global row and column of the first cell of ``rank``'s tile."""
        prow, pcol = self.topology.coords(rank)
        return prow * self.n_loc_r, pcol * self.n_loc_c


@dataclass(frozen=True)
class SimulationResult:
    """The final board of a run and what was measured on it."""

    board: Matrix
    time_ms: float
    alive: int
    dead: int
    matches: bool | None = None


def _output(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def initialize(options: Options, size: int) -> SimulationParams:
    """Lay out ``size`` ranks on a periodic grid and split the board between them."""
    if size < 1:
        raise ValueError("the number of processes must be positive")
    rows, cols = choose_dims(size)
    topology = CartTopology((rows, cols), (True, True))
    if options.n % rows != 0 or options.n % cols != 0:
        raise ValueError("n should be divisible by nprows and npcols")
    return SimulationParams(
        n=options.n,
        seed=options.seed,
        density=options.density,
        iterations=options.iterations,
        verbose=options.verbose,
        verify=options.verify,
        reps=options.reps,
        size=size,
        dims=(rows, cols),
        topology=topology,
        n_loc_r=options.n // rows,
        n_loc_c=options.n // cols,
    )


def _report_layout(params: SimulationParams, out: TextIO) -> None:
    if not params.verbose:
        return
    # Ranks keep their order when the grid is rebuilt, so the groups agree.
    out.write("Communicator after reordering are MPI_CONGRUENT.\n")
    out.write(f"n_loc_r: {params.n_loc_r} n_loc_c: {params.n_loc_c}\n")
    for rank in range(params.size):
        prow, pcol = params.topology.coords(rank)
        offset_r, offset_c = params.offsets(rank)
        out.write(
            f"Rank {rank}: prow_idx: {prow} pcol_idx: {pcol} "
            f"m_offset_r: {offset_r} m_offset_c: {offset_c}\n"
        )


def run_simulation(
    params: SimulationParams,
    communicate: Communicate,
    label: str,
    out: TextIO | None = None,
) -> SimulationResult:
    """Run every rank's share of the board and report the result as rank 0 does."""
    out = _output(out)
    tiles: list[Matrix] = []
    for rank in range(params.size):
        offset_r, offset_c = params.offsets(rank)
        tiles.append(
            fill_matrix(
                params.n_loc_r,
                params.n_loc_c,
                params.n,
                params.density,
                offset_r,
                offset_c,
                GlibcRandom(params.seed),
            )
        )

    if params.verbose:
        for tile in tiles:
            out.write("Generation 0:\n")
            out.write(format_matrix(tile))

    rows, cols = params.dims
    out.write(
        f"{params.size}\t{params.n}\t{params.seed}\t{params.density}\t"
        f"{params.iterations}\t{rows}\t{cols}\t"
    )

    start = time.perf_counter()
    for _ in range(params.iterations):
        extended = communicate(params.topology, tiles)
        tiles = [update_matrix(grid) for grid in extended]
    elapsed_ms = (time.perf_counter() - start) * 1000

    out.write(f"{label}\t{elapsed_ms:.6f}")

    board = gather_ranks(params.topology, tiles, params.n)

    if params.verbose:
        out.write(f"Parallel Final Generation {params.iterations}:\n")
        out.write(format_matrix(board))

    alive, dead = count_cells(board)
    out.write(f"\t{alive}\t{dead}\n")

    matches = None
    if params.verify:
        reference = run_sequential_simulation(
            params.n, params.seed, params.density, params.iterations, False, out
        )
        matches = matrices_are_equal(reference.board, board)
        out.write(f"Matrices {'match' if matches else 'do not match'}.\n")

    return SimulationResult(board, elapsed_ms, alive, dead, matches)


def run_sequential_simulation(
    n: int,
    seed: int,
    density: int,
    iterations: int,
    verbose: bool = False,
    out: TextIO | None = None,
) -> SimulationResult:
    """Run the whole board in one piece; the time is in milliseconds."""
    out = _output(out)
    matrix = fill_matrix(n, n, n, density, 0, 0, GlibcRandom(seed))
    if verbose:
        out.write("Generation 0:\n")
        out.write(format_matrix(matrix))

    start = time.perf_counter()
    for _ in range(iterations):
        matrix = update_matrix(fill_extended_grid(matrix))
    elapsed_ms = (time.perf_counter() - start) * 1000

    alive, dead = count_cells(matrix)
    return SimulationResult(matrix, elapsed_ms, alive, dead)


def _run(
    argv: Sequence[str],
    size: int,
    out: TextIO | None,
    communicate: Communicate,
    label: str,
) -> list[SimulationResult]:
    out = _output(out)
    params = initialize(parse_arguments(argv, Options()), size)
    _report_layout(params, out)
    out.write(HEADER)
    return [run_simulation(params, communicate, label, out) for _ in range(params.reps)]


def run_collectives(
    argv: Sequence[str], size: int = 1, out: TextIO | None = None
) -> list[SimulationResult]:
    """Parse ``argv`` and run the neighbourhood all-to-all variant ``reps`` times."""
    return _run(argv, size, out, collectives_communicate, "collectives")


def run_sendrecv(
    argv: Sequence[str], size: int = 1, out: TextIO | None = None
) -> list[SimulationResult]:
    """Parse ``argv`` and run the pairwise exchange variant ``reps`` times."""
    return _run(argv, size, out, sendrecv_communicate, "sendrecv")