"""Rasterisation of straight line segments into a voxel grid."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Iterator

import numpy as np

from .grid import Index3, VoxelGrid


class LineAlgorithm(Enum):
    """Line rasterisation strategies."""

    RLV = "rlv"
    SLV = "slv"
    ILV = "ilv"
    DDA = "dda"
    BRESENHAM = "bresenham"


def _as_vec(values: Iterable[float], name: str) -> np.ndarray:
    vec = np.asarray(list(values), dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have exactly three components")
    return vec


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _mark(grid: VoxelGrid, position: Index3) -> None:
    if grid.is_valid_position(position):
        grid.set(position, 1.0)


def _bresenham_cells(start: Index3, end: Index3) -> Iterator[Index3]:
    """Integer cells along the line between two grid indices, both included."""
    delta = [abs(e - s) for s, e in zip(start, end)]
    step = [1 if s < e else -1 for s, e in zip(start, end)]
    dx, dy, dz = delta
    if dx >= dy and dx >= dz:
        major = 0
    elif dy >= dx and dy >= dz:
        major = 1
    else:
        major = 2
    minors = [axis for axis in range(3) if axis != major]
    errors = {axis: 2 * delta[axis] - delta[major] for axis in minors}
    position = list(start)
    for _ in range(delta[major] + 1):
        yield (position[0], position[1], position[2])
        for axis in minors:
            if errors[axis] > 0:
                position[axis] += step[axis]
                errors[axis] -= 2 * delta[major]
            errors[axis] += 2 * delta[axis]
        position[major] += step[major]


class LineVoxelizer:
    """Marks the cells crossed by the segment from ``start`` to ``end``."""

    def __init__(
        self,
        start: Iterable[float],
        end: Iterable[float],
        algorithm: LineAlgorithm = LineAlgorithm.BRESENHAM,
    ) -> None:
        self.start = _as_vec(start, "start")
        self.end = _as_vec(end, "end")
        self.algorithm = LineAlgorithm(algorithm)

    def voxelize(self, grid: VoxelGrid) -> None:
        handlers = {
            LineAlgorithm.RLV: self._voxelize_rlv,
            LineAlgorithm.SLV: self._voxelize_slv,
            LineAlgorithm.ILV: self._voxelize_integer,
            LineAlgorithm.DDA: self._voxelize_dda,
            LineAlgorithm.BRESENHAM: self._voxelize_integer,
        }
        handlers[self.algorithm](grid)

    def _march(self, grid: VoxelGrid) -> Iterator[Index3]:
        """Sample the segment in world space at steps of one over the resolution."""
        delta = self.end - self.start
        length = float(np.linalg.norm(delta))
        direction = delta / length if length > 0.0 else np.zeros(3)
        step = 1.0 / grid.resolution
        t = 0.0
        while t <= length:
            yield grid.world_to_grid(self.start + direction * t)
            t += step

    def _voxelize_rlv(self, grid: VoxelGrid) -> None:
        for position in self._march(grid):
            _mark(grid, position)

    def _voxelize_slv(self, grid: VoxelGrid) -> None:
        self._voxelize_rlv(grid)
        offsets = [
            (dx, dy, dz) for dx in (-1, 0, 1) for dy in (-1, 0, 1) for dz in (-1, 0, 1)
        ]
        for x, y, z in self._march(grid):
            for dx, dy, dz in offsets:
                _mark(grid, (x + dx, y + dy, z + dz))

    def _voxelize_integer(self, grid: VoxelGrid) -> None:
        start = grid.world_to_grid(self.start)
        end = grid.world_to_grid(self.end)
        for position in _bresenham_cells(start, end):
            _mark(grid, position)

    def _voxelize_dda(self, grid: VoxelGrid) -> None:
        start = grid.world_to_grid(self.start)
        end = grid.world_to_grid(self.end)
        deltas = [e - s for s, e in zip(start, end)]
        steps = max(abs(d) for d in deltas)
        if steps == 0:
            _mark(grid, start)
            return
        increments = [d / steps for d in deltas]
        current = [float(s) for s in start]
        for _ in range(steps + 1):
            x, y, z = (_round_half_away(c) for c in current)
            _mark(grid, (x, y, z))
            current = [c + inc for c, inc in zip(current, increments)]