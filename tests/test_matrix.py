import pytest

from lifegrid.crand import GlibcRandom
from lifegrid.matrix import (
    fill_extended_grid,
    fill_matrix,
    format_matrix,
    matrices_are_equal,
    new_matrix,
    update_matrix,
)


def _numbered(rows, cols):
    return [[r * cols + c for c in range(cols)] for r in range(rows)]


def _shift(matrix, dr, dc):
    rows, cols = len(matrix), len(matrix[0])
    return [[matrix[(i - dr) % rows][(j - dc) % cols] for j in range(cols)] for i in range(rows)]


def test_new_matrix_shape_and_zeros():
    m = new_matrix(3, 5)
    assert len(m) == 3
    assert all(len(row) == 5 for row in m)
    assert all(v == 0 for row in m for v in row)


def test_new_matrix_rows_independent():
    m = new_matrix(2, 2)
    m[0][0] = 1
    assert m[1][0] == 0


def test_new_matrix_negative_raises():
    with pytest.raises(ValueError):
        new_matrix(-1, 2)


def test_matrices_are_equal():
    a = [[1, 0], [0, 1]]
    assert matrices_are_equal(a, [[1, 0], [0, 1]])
    assert not matrices_are_equal(a, [[1, 0], [1, 1]])
    assert not matrices_are_equal(a, [[1, 0]])


def test_fill_matrix_full_density_all_alive():
    m = fill_matrix(4, 4, 4, 100, 0, 0, GlibcRandom(3))
    assert all(v == 1 for row in m for v in row)


def test_fill_matrix_zero_density_all_dead():
    m = fill_matrix(4, 4, 4, 0, 0, 0, GlibcRandom(3))
    assert all(v == 0 for row in m for v in row)


def test_fill_matrix_tiles_match_whole_board():
    n = 6
    whole = fill_matrix(n, n, n, 40, 0, 0, GlibcRandom(9))
    for offset_r in (0, 3):
        for offset_c in (0, 2, 4):
            tile = fill_matrix(3, 2, n, 40, offset_r, offset_c, GlibcRandom(9))
            expected = [row[offset_c:offset_c + 2] for row in whole[offset_r:offset_r + 3]]
            assert tile == expected


def test_fill_matrix_same_seed_reproducible():
    a = fill_matrix(8, 8, 8, 30, 0, 0, GlibcRandom(5))
    b = fill_matrix(8, 8, 8, 30, 0, 0, GlibcRandom(5))
    assert matrices_are_equal(a, b)


def test_fill_extended_grid_shape_and_center():
    m = _numbered(4, 5)
    ext = fill_extended_grid(m)
    assert len(ext) == 8
    assert all(len(row) == 9 for row in ext)
    assert [row[2:7] for row in ext[2:6]] == m


def test_fill_extended_grid_edges_and_corners():
    m = _numbered(4, 5)
    ext = fill_extended_grid(m)
    assert ext[0][2:7] == m[2]
    assert ext[1][2:7] == m[3]
    assert ext[6][2:7] == m[0]
    assert ext[7][2:7] == m[1]
    assert [ext[i][0] for i in range(2, 6)] == [row[3] for row in m]
    assert [ext[i][8] for i in range(2, 6)] == [row[1] for row in m]
    assert ext[0][0] == m[2][3]
    assert ext[1][1] == m[3][4]
    assert ext[0][8] == m[2][1]
    assert ext[7][0] == m[1][3]
    assert ext[7][8] == m[1][1]


def test_fill_extended_grid_empty_raises():
    with pytest.raises(ValueError):
        fill_extended_grid([])


def test_format_matrix():
    assert format_matrix([[1, 0], [0, 1]]) == "1 0 \n0 1 \n"


def test_update_all_dead_stays_dead():
    m = new_matrix(5, 5)
    assert update_matrix(fill_extended_grid(m)) == m


def test_update_all_alive_dies():
    m = [[1] * 5 for _ in range(5)]
    assert update_matrix(fill_extended_grid(m)) == new_matrix(5, 5)


def test_update_birth_with_three_counted_neighbours():
    m = new_matrix(6, 6)
    m[1][2] = m[1][3] = m[2][3] = 1
    result = update_matrix(fill_extended_grid(m))
    assert result[2][2] == 1


def test_update_is_translation_invariant_on_torus():
    m = fill_matrix(7, 7, 7, 35, 0, 0, GlibcRandom(11))
    step = update_matrix(fill_extended_grid(m))
    shifted_step = update_matrix(fill_extended_grid(_shift(m, 2, 3)))
    assert shifted_step == _shift(step, 2, 3)


def test_update_result_is_binary_and_shaped():
    m = fill_matrix(6, 8, 8, 50, 0, 0, GlibcRandom(2))
    result = update_matrix(fill_extended_grid(m))
    assert len(result) == 6
    assert all(len(row) == 8 for row in result)
    assert {v for row in result for v in row} <= {0, 1}


def test_update_too_small_raises():
    with pytest.raises(ValueError):
        update_matrix([[0] * 4 for _ in range(4)])