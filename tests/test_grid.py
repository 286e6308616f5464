import pytest

from voxkit.grid import VoxelGrid


def test_dimensions_from_bounds():
    grid = VoxelGrid(1.0, (0, 0, 0), (10, 10, 5))
    assert grid.dimensions == (11, 11, 6)


def test_from_shape_dimensions():
    grid = VoxelGrid.from_shape(4, 5, 6)
    assert grid.dimensions == (4, 5, 6)
    assert (grid.width, grid.height, grid.depth) == (4, 5, 6)
    assert grid.resolution == 1.0


def test_from_shape_rejects_empty():
    with pytest.raises(ValueError):
        VoxelGrid.from_shape(0, 3, 3)


def test_invalid_resolution():
    with pytest.raises(ValueError):
        VoxelGrid(0.0, (0, 0, 0), (1, 1, 1))


def test_inverted_bounds_rejected():
    with pytest.raises(ValueError):
        VoxelGrid(1.0, (5, 0, 0), (0, 1, 1))


def test_new_grid_is_empty():
    grid = VoxelGrid.from_shape(3, 3, 3)
    assert grid.count_occupied() == 0
    assert grid.occupancy_rate() == 0.0


def test_set_and_get_roundtrip():
    grid = VoxelGrid.from_shape(4, 4, 4)
    grid.set((1, 2, 3), True)
    assert grid.get((1, 2, 3)) == 1.0
    assert grid.get((3, 2, 1)) == 0.0
    grid.set((1, 2, 3), 2.5)
    assert grid.get((1, 2, 3)) == 2.5


@pytest.mark.parametrize("pos", [(-1, 0, 0), (4, 0, 0), (0, 4, 0), (0, 0, 4)])
def test_get_out_of_range(pos):
    grid = VoxelGrid.from_shape(4, 4, 4)
    with pytest.raises(IndexError):
        grid.get(pos)
    with pytest.raises(IndexError):
        grid.set(pos, True)


def test_is_valid_position():
    grid = VoxelGrid.from_shape(2, 3, 4)
    assert grid.is_valid_position((1, 2, 3))
    assert not grid.is_valid_position((2, 0, 0))
    assert not grid.is_valid_position((0, -1, 0))


def test_world_grid_roundtrip():
    grid = VoxelGrid(0.5, (-2.0, 1.0, 3.0), (2.0, 5.0, 7.0))
    for index in [(0, 0, 0), (3, 4, 5), (8, 8, 8)]:
        assert grid.world_to_grid(grid.grid_to_world(index)) == index


def test_world_to_grid_truncates():
    grid = VoxelGrid(0.5, (0, 0, 0), (4, 4, 4))
    assert grid.world_to_grid((1.2, 0.4, 0.99)) == (2, 0, 1)


def test_grid_to_world_origin():
    grid = VoxelGrid(2.0, (1.0, -3.0, 7.0), (9.0, 5.0, 15.0))
    assert grid.grid_to_world((0, 0, 0)) == (1.0, -3.0, 7.0)
    assert grid.origin == grid.min_bounds


def test_fill_and_occupancy():
    grid = VoxelGrid.from_shape(3, 4, 5)
    grid.fill(True)
    assert grid.count_occupied() == 3 * 4 * 5
    assert grid.occupancy_rate() == 1.0
    grid.fill(False)
    assert grid.count_occupied() == 0


def test_set_region_counts_inclusive_box():
    grid = VoxelGrid.from_shape(6, 6, 6)
    grid.set_region((1, 2, 3), (3, 4, 5), True)
    assert grid.count_occupied() == (3 - 1 + 1) * (4 - 2 + 1) * (5 - 3 + 1)
    assert grid.get((1, 2, 3)) == 1.0
    assert grid.get((3, 4, 5)) == 1.0
    assert grid.get((0, 2, 3)) == 0.0


def test_set_region_out_of_range():
    grid = VoxelGrid.from_shape(4, 4, 4)
    with pytest.raises(IndexError):
        grid.set_region((0, 0, 0), (4, 1, 1), True)


def test_copy_is_independent():
    grid = VoxelGrid.from_shape(3, 3, 3)
    grid.set((1, 1, 1), True)
    clone = grid.copy()
    assert clone == grid
    clone.set((0, 0, 0), True)
    assert grid.get((0, 0, 0)) == 0.0
    assert clone != grid