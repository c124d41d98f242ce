# lifegrid

lifegrid runs Conway's Game of Life on a square, periodic (toroidal) grid.
It can run in three ways. One is a plain sequential run over the whole grid.
The other two split the grid into blocks laid out on a two-dimensional grid
of ranks, and every generation they swap a two-cell halo between neighbouring
blocks. The swap is done either with pairwise exchanges with each of the
eight neighbours ("sendrecv") or with one all-to-all exchange over the
eight neighbours ("collectives").

The first grid comes from a seeded generator, `lifegrid.crand.GlibcRandom`,
that reproduces the C library's `rand()` sequence. Every cell of the whole
grid takes one number from the stream. A given seed and density therefore
always give the same starting pattern, whatever the block layout.

## Installation

    pip install .

To run the tests as well:

    pip install ".[test]"
    pytest

## Commands

    lifegrid-sequential -n 100 -s 1 -d 30 -i 10
    lifegrid-sendrecv   -n 100 -s 1 -d 30 -i 10
    lifegrid-collectives -n 100 -s 1 -d 30 -i 10

Options shared by all commands:

| Option | Meaning | Default |
| --- | --- | --- |
| `-n`, `--number` | side length of the grid | 10 |
| `-s`, `--seed` | seed of the random stream | 10 |
| `-d`, `--density` | percentage of live cells at the start, 1 to 100 | 10 |
| `-i`, `--iterations` | number of generations | 3 for `lifegrid-sequential`, 2 for the block runs |
| `-r`, `--reps` | number of repetitions | 1 |
| `-v`, `--verbose` | print the grids (the block runs also print the layout) | off |
| `-c`, `--verify` | block runs only: compare the result with a sequential run and print `Matrices match.` or `Matrices do not match.` | off |

Long options that take a value are written `--number=100`. Long option names
may be shortened as long as they stay unambiguous.

The number of ranks used by `lifegrid-sendrecv` and `lifegrid-collectives`
comes from the `LIFEGRID_PROCS` environment variable, which defaults to 1:

    LIFEGRID_PROCS=4 lifegrid-sendrecv -n 100 -s 1 -d 30 -i 10

The grid of ranks is chosen by `lifegrid.grid.choose_dims`. It uses fixed
shapes for 32, 256, 512 and 1024 ranks (1x32, 8x32, 16x32 and 32x32). For any
other count it uses the most even factorisation from `dims_create`. The
grid side must divide evenly by both the number of block rows and the number
of block columns.

Each command prints a tab-separated header followed by one row per
repetition. The row gives the parameters, the time taken in milliseconds and
the numbers of live and dead cells at the end. For a bad option, a density
outside 1 to 100, a grid side that does not divide evenly, or a bad
`LIFEGRID_PROCS`, the command prints a message on standard error and exits
with status 1.

## Library use

    from lifegrid.game import run_sequential_simulation, run_sendrecv

    result = run_sequential_simulation(20, 1, 30, 10)
    print(result.alive, result.dead, result.time_ms)

    results = run_sendrecv(["-n", "20", "-s", "1", "-d", "30", "-i", "10", "-c"], size=4)
    print(results[0].matches)

`run_sequential_simulation` and `run_simulation` return a `SimulationResult`,
which holds the final `board`, `time_ms`, `alive`, `dead` and, for a
verified block run, `matches`. `run_collectives` and `run_sendrecv` take a
list of arguments, a rank count and an optional text stream, and return one
result per repetition. `initialize` builds the `SimulationParams` for a set of
`Options` and a rank count.

The package is split into these modules:

- `lifegrid.matrix` holds the grid operations: `new_matrix`, `fill_matrix`,
  `fill_extended_grid`, `update_matrix`, `matrices_are_equal` and
  `format_matrix`.
- `lifegrid.utilities` holds `parse_arguments`, `Options`, `UsageError` and
  `count_cells`, which returns `(alive, dead)`.
- `lifegrid.grid` holds the Cartesian rank layout: `CartTopology`, with
  `coords`, `rank`, `shift` and `neighbors`, and `dims_create` and
  `choose_dims`.
- `lifegrid.communication` holds the halo exchanges, `sendrecv_communicate`
  and `collectives_communicate`, and `gather_ranks`, which puts the blocks
  back together into one grid.

## What it does not do

The blocks and their halo exchanges are all simulated one after another in a
single Python process. Nothing is spread over several processes or machines.
The times reported therefore measure that single process, not a parallel
run.