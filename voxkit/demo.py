"""Build a random box scene, store it as an octree and report on it."""

from __future__ import annotations

import argparse
import random
from typing import Sequence

from .grid import VoxelGrid
from .svo import SVOStorage
from .voxelizers import BoxVoxelizer

GRID_SIZE = 128
_SCENE_EXTENT = 1000.0


def build_demo_grid(seed: int | None = None) -> VoxelGrid:
    """Return a cubic grid holding one randomly placed and sized box.

    Positions fall in the middle 80% of the grid and box edges span 5% to 15%
    of it.
    """
    rng = random.Random(seed)
    scale = GRID_SIZE / _SCENE_EXTENT
    grid = VoxelGrid.from_shape(GRID_SIZE, GRID_SIZE, GRID_SIZE)
    center = tuple((100.0 + rng.random() * 800.0) * scale for _ in range(3))
    edge = (50.0 + rng.random() * 100.0) * scale
    BoxVoxelizer(center, (edge, edge, edge)).voxelize(grid)
    return grid


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Voxelize a random box and save it as a sparse voxel octree."
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--output", default="svo.bin", help="octree output file")
    args = parser.parse_args(argv)

    grid = build_demo_grid(args.seed)
    storage = SVOStorage(grid)
    storage.save(args.output)
    print(
        f"occupied {grid.count_occupied()} of {grid.values.size} voxels; "
        f"{storage.node_count()} octree nodes written to {args.output}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())