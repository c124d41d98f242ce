import pytest

from lifegrid.utilities import Options, UsageError, count_cells, parse_arguments


def test_empty_argv_keeps_defaults():
    defaults = Options(n=12, seed=3, density=20, iterations=4)
    assert parse_arguments([], defaults) == defaults


def test_none_defaults_uses_option_defaults():
    assert parse_arguments([]) == Options()


def test_short_options_separate_values():
    opts = parse_arguments(["-n", "20", "-s", "5", "-d", "50", "-i", "7", "-r", "3"], Options())
    assert (opts.n, opts.seed, opts.density, opts.iterations, opts.reps) == (20, 5, 50, 7, 3)


def test_short_options_attached_values():
    opts = parse_arguments(["-n20", "-d50"], Options())
    assert (opts.n, opts.density) == (20, 50)


def test_clustered_flags():
    opts = parse_arguments(["-vc"], Options())
    assert opts.verbose is True
    assert opts.verify is True


def test_flag_clustered_with_value_option():
    opts = parse_arguments(["-vn", "30"], Options())
    assert opts.verbose is True
    assert opts.n == 30


def test_long_options_with_equals():
    opts = parse_arguments(["--number=30", "--seed=4", "--verbose"], Options())
    assert (opts.n, opts.seed, opts.verbose) == (30, 4, True)


def test_long_option_prefix():
    opts = parse_arguments(["--dens=60", "--iter=9"], Options())
    assert (opts.density, opts.iterations) == (60, 9)


def test_ambiguous_long_prefix_raises():
    with pytest.raises(UsageError):
        parse_arguments(["--ver"], Options())


def test_long_value_option_without_value_raises():
    with pytest.raises(UsageError):
        parse_arguments(["--number"], Options())


def test_unknown_short_option_raises():
    with pytest.raises(UsageError, match="Usage"):
        parse_arguments(["-x"], Options())


def test_unknown_long_option_raises():
    with pytest.raises(UsageError):
        parse_arguments(["--bogus=1"], Options())


def test_missing_argument_raises():
    with pytest.raises(UsageError):
        parse_arguments(["-n"], Options())


@pytest.mark.parametrize("density", ["0", "101", "-5"])
def test_density_out_of_range_raises(density):
    with pytest.raises(UsageError, match="Density should be between 1 and 100"):
        parse_arguments(["-d", density], Options())


def test_bad_default_density_raises():
    with pytest.raises(UsageError):
        parse_arguments([], Options(density=0))


def test_non_numeric_value_reads_as_zero():
    opts = parse_arguments(["-s", "abc"], Options())
    assert opts.seed == 0


def test_numeric_prefix_is_used():
    opts = parse_arguments(["-n", "12xyz"], Options())
    assert opts.n == 12


def test_non_options_are_skipped():
    opts = parse_arguments(["extra", "-n", "8", "word"], Options())
    assert opts.n == 8


def test_double_dash_stops_parsing():
    opts = parse_arguments(["-n", "8", "--", "-n", "16"], Options())
    assert opts.n == 8


def test_count_cells_totals():
    matrix = [[1, 0, 1], [0, 0, 1]]
    alive, dead = count_cells(matrix)
    assert alive == 3
    assert dead == 3


def test_count_cells_non_one_counts_dead():
    alive, dead = count_cells([[2, 1], [0, 1]])
    assert (alive, dead) == (2, 2)


def test_count_cells_sum_matches_size():
    matrix = [[(i * j) % 2 for j in range(7)] for i in range(5)]
    alive, dead = count_cells(matrix)
    assert alive + dead == 35