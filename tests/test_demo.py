import numpy as np

from voxkit import demo
from voxkit.grid import VoxelGrid
from voxkit.svo import SVOStorage


def test_same_seed_same_grid():
    first = demo.build_demo_grid(7)
    second = demo.build_demo_grid(7)
    assert first.count_occupied() > 0
    assert first.count_occupied() == second.count_occupied()
    assert np.array_equal(first.values, second.values)


def test_grid_is_cubic():
    grid = demo.build_demo_grid(3)
    assert grid.dimensions == (demo.GRID_SIZE,) * 3


def test_occupied_cells_form_a_solid_box():
    grid = demo.build_demo_grid(11)
    cells = np.argwhere(grid.values != 0)
    assert len(cells) > 0
    extent = cells.max(axis=0) - cells.min(axis=0) + 1
    assert int(np.prod(extent)) == len(cells)


def test_box_stays_inside_grid():
    for seed in range(5):
        grid = demo.build_demo_grid(seed)
        cells = np.argwhere(grid.values != 0)
        assert cells.min() > 0
        assert cells.max() < demo.GRID_SIZE - 1


def test_main_writes_octree(tmp_path, capsys):
    output = tmp_path / "scene.svo"
    assert demo.main(["--seed", "5", "--output", str(output)]) == 0
    assert str(output) in capsys.readouterr().out

    storage = SVOStorage()
    storage.load(output)
    size = demo.GRID_SIZE
    restored = storage.to_voxel_grid(VoxelGrid.from_shape(size, size, size))
    assert restored == demo.build_demo_grid(5)