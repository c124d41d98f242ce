"""Command-line entry points for the sequential and distributed runs."""

from __future__ import annotations

import os
import sys
from typing import Sequence

from lifegrid.game import run_collectives, run_sendrecv, run_sequential_simulation
from lifegrid.matrix import format_matrix
from lifegrid.utilities import Options, parse_arguments

SEQUENTIAL_HEADER = "n\tseed\tdensity\titers\timplementation\ttime (ms)\talive\tdead\n"
PROCS_VARIABLE = "LIFEGRID_PROCS"

_SEQUENTIAL_DEFAULTS = Options(n=10, seed=10, density=10, iterations=3, reps=1)


def _arguments(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def _process_count() -> int:
    text = os.environ.get(PROCS_VARIABLE, "1")
    try:
        size = int(text)
    except ValueError:
        raise ValueError(f"{PROCS_VARIABLE} must be a whole number, got {text!r}") from None
    if size < 1:
        raise ValueError(f"{PROCS_VARIABLE} must be positive")
    return size


def main_sequential(argv: Sequence[str] | None = None) -> int:
    """Run the single-piece simulation and print one line per repetition."""
    out = sys.stdout
    out.write(SEQUENTIAL_HEADER)
    try:
        options = parse_arguments(_arguments(argv), _SEQUENTIAL_DEFAULTS)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    for _ in range(options.reps):
        result = run_sequential_simulation(
            options.n, options.seed, options.density, options.iterations, options.verbose, out
        )
        if options.verbose:
            out.write("Final matrix:\n")
            out.write(format_matrix(result.board))
        out.write(
            f"{options.n}\t{options.seed}\t{options.density}\t{options.iterations}\t"
            f"sequential\t{result.time_ms:.6f}\t{result.alive}\t{result.dead}\n"
        )
    return 0


def main_collectives(argv: Sequence[str] | None = None) -> int:
    """Run the all-to-all variant on ``LIFEGRID_PROCS`` simulated ranks."""
    try:
        run_collectives(_arguments(argv), _process_count(), sys.stdout)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    return 0


def main_sendrecv(argv: Sequence[str] | None = None) -> int:
    """Run the pairwise exchange variant on ``LIFEGRID_PROCS`` simulated ranks."""
    try:
        run_sendrecv(_arguments(argv), _process_count(), sys.stdout)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    return 0