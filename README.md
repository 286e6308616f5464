# voxkit

Dense voxel grids, with tools to fill them from shapes and lines, transform
them, and store them as sparse voxel octrees.

## Modules

- `voxkit.grid.VoxelGrid` is a dense grid that covers an axis-aligned
  world-space box at a fixed resolution. Create it with
  `VoxelGrid(resolution, min_bounds, max_bounds)`, or with
  `VoxelGrid.from_shape(width, height, depth)` for a unit-resolution grid at
  the origin. Each cell holds a float. Occupied cells hold 1.0, and any
  non-zero value counts as occupied.
  - It provides `get`, `set`, `fill`, `set_region`, `count_occupied`,
    `occupancy_rate`, `copy`, `world_to_grid`, `grid_to_world` and
    `is_valid_position`.
  - The numpy cell array is available as `values[x, y, z]`.
  - An access outside the grid raises `IndexError`.
- `voxkit.voxelizers` marks the cells that shapes cover:
  - `BoxVoxelizer(center, size)` for an axis-aligned box;
  - `CylinderVoxelizer(center, axis, radius, height)` for a finite cylinder;
  - `CorridorVoxelizer(control_points, radius, num_segments=10)` for a tube
    around a Catmull-Rom spline. It needs at least four control points and
    also provides `evaluate_spline`, `evaluate_spline_derivative` and
    `contains`.
- `voxkit.line.LineVoxelizer(start, end, algorithm)` rasterises a line
  segment. The `LineAlgorithm` choices are `RLV`, `SLV`, `ILV`, `DDA` and
  `BRESENHAM`, and the default is `BRESENHAM`.
- `voxkit.operators` holds operator objects whose `apply(grid)` changes the
  grid in place:
  - morphology: `SmoothOperator`, `DilateOperator`, `ErodeOperator`,
    `OffsetOperator`, `OpeningOperator` and `ClosingOperator`;
  - boolean operations against a second grid: `UnionOperator`,
    `IntersectionOperator` and `DifferenceOperator`. These raise
    `GridMismatchError` when the two grids differ in dimensions.
  - `DistanceTransformOperator(max_distance)` replaces each cell with its
    face-step distance to the nearest occupied cell, capped at
    `max_distance`.
  - `ConnectedComponentsOperator(connectivity)` labels each occupied region
    1, 2, and so on. `apply` returns the number of components, which is also
    stored in `component_count`.
  - `FillOperator(seed_point, connectivity)` replaces the grid with the empty
    region that can be reached from the seed. A seed outside the grid raises
    `IndexError`.
  - `InterpolationOperator(position)` samples the grid by trilinear
    interpolation. `apply` returns the value, which is also stored in
    `value`. A position outside the grid raises `IndexError`.
- `voxkit.svo.SVOStorage` converts a cubic grid to a sparse voxel octree and
  back.
  - `from_voxel_grid` raises `ValueError` for a grid that is not cubic. The
    octree covers the whole grid when the side length is a power of two.
  - `to_voxel_grid(grid)` writes the stored occupancy into `grid` and
    returns it.
  - `to_bytes` and `from_bytes` convert the octree to and from the binary
    encoding, and `save` and `load` use the same encoding for files.
  - `node_count` returns the number of nodes in the tree.

  The encoding begins with two little-endian unsigned 64-bit integers: the
  depth and the side length. The nodes follow in pre-order, two bytes each:
  a leaf flag and a value. Each inner node is followed by its eight children.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Example

```python
from voxkit.grid import VoxelGrid
from voxkit.voxelizers import BoxVoxelizer
from voxkit.operators import DilateOperator
from voxkit.svo import SVOStorage

grid = VoxelGrid.from_shape(16, 16, 16)
BoxVoxelizer(center=(8.0, 8.0, 8.0), size=(4.0, 4.0, 4.0)).voxelize(grid)
DilateOperator(1).apply(grid)
print(grid.count_occupied(), grid.occupancy_rate())

svo = SVOStorage(grid)
svo.save("shape.svo")

restored = SVOStorage()
restored.load("shape.svo")
copy = restored.to_voxel_grid(VoxelGrid.from_shape(16, 16, 16))
assert copy == grid
```

## Demo

```
voxkit-demo [--seed N] [--output svo.bin]
```

The demo places one box of random position and size in a 128×128×128 grid.
It stores the grid as a sparse voxel octree and writes the octree to the
output file, which is `svo.bin` by default. It then prints how many voxels are
occupied and how many octree nodes were written. The same scene is available
from Python through `voxkit.demo.build_demo_grid(seed)`.

## Limitations

- voxkit has no viewer and does not render grids on screen. The demo
  only writes a file and prints a summary.
- Sparse voxel octrees are the only compact storage format. Other
  files can only be produced from the numpy array in `VoxelGrid.values`.