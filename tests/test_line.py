import numpy as np
import pytest

from voxkit.grid import VoxelGrid
from voxkit.line import LineAlgorithm, LineVoxelizer


def occupied(grid):
    return {tuple(int(v) for v in cell) for cell in np.argwhere(grid.values != 0)}


def draw(start, end, algorithm, size=10):
    grid = VoxelGrid.from_shape(size, size, size)
    LineVoxelizer(start, end, algorithm).voxelize(grid)
    return grid


def test_bresenham_axis_aligned_line():
    grid = draw((0, 0, 0), (5, 0, 0), LineAlgorithm.BRESENHAM)
    assert occupied(grid) == {(x, 0, 0) for x in range(6)}


def test_ilv_matches_bresenham():
    a = draw((0, 0, 0), (7, 3, 5), LineAlgorithm.ILV)
    b = draw((0, 0, 0), (7, 3, 5), LineAlgorithm.BRESENHAM)
    assert a == b


@pytest.mark.parametrize(
    "start,end",
    [((0, 0, 0), (7, 3, 5)), ((7, 3, 5), (0, 0, 0)), ((1, 8, 2), (3, 0, 6))],
)
def test_bresenham_one_cell_per_major_step(start, end):
    grid = draw(start, end, LineAlgorithm.BRESENHAM)
    cells = occupied(grid)
    major = max(abs(e - s) for s, e in zip(start, end))
    assert len(cells) == major + 1
    assert tuple(start) in cells
    assert tuple(end) in cells


def test_dda_diagonal():
    grid = draw((0, 0, 0), (4, 4, 4), LineAlgorithm.DDA)
    assert occupied(grid) == {(i, i, i) for i in range(5)}


def test_dda_zero_length_marks_single_cell():
    grid = draw((3, 2, 1), (3, 2, 1), LineAlgorithm.DDA)
    assert occupied(grid) == {(3, 2, 1)}


def test_dda_endpoints_set():
    grid = draw((0, 1, 2), (9, 4, 7), LineAlgorithm.DDA)
    cells = occupied(grid)
    assert (0, 1, 2) in cells
    assert (9, 4, 7) in cells


def test_rlv_matches_bresenham_on_axis():
    start, end = (0.5, 0.5, 0.5), (5.5, 0.5, 0.5)
    rlv = draw(start, end, LineAlgorithm.RLV)
    bres = draw(start, end, LineAlgorithm.BRESENHAM)
    assert occupied(rlv) == occupied(bres)


def test_rlv_zero_length_marks_start():
    grid = draw((2.5, 2.5, 2.5), (2.5, 2.5, 2.5), LineAlgorithm.RLV)
    assert occupied(grid) == {(2, 2, 2)}


def test_slv_is_superset_of_rlv():
    start, end = (0.5, 0.5, 0.5), (5.5, 0.5, 0.5)
    rlv = occupied(draw(start, end, LineAlgorithm.RLV))
    slv = occupied(draw(start, end, LineAlgorithm.SLV))
    assert rlv < slv
    assert (0, 1, 1) in slv


def test_line_leaving_grid_is_clipped():
    grid = draw((0, 0, 0), (20, 0, 0), LineAlgorithm.BRESENHAM)
    assert occupied(grid) == {(x, 0, 0) for x in range(grid.width)}


def test_algorithm_from_value():
    voxelizer = LineVoxelizer((0, 0, 0), (1, 1, 1), "dda")
    assert voxelizer.algorithm is LineAlgorithm.DDA


def test_bad_vector_rejected():
    with pytest.raises(ValueError):
        LineVoxelizer((0, 0), (1, 1, 1))