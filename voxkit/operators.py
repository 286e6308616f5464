"""Morphological, boolean and analysis operators acting on voxel grids."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from itertools import product
from typing import Iterable

import numpy as np

from .grid import Index3, VoxelGrid

_FACE_OFFSETS: tuple[Index3, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)
_CUBE_OFFSETS: tuple[Index3, ...] = tuple(product((-1, 0, 1), repeat=3))


class GridMismatchError(ValueError):
    """Raised when two grids taking part in one operation differ in shape."""


def _shifted(mask: np.ndarray, offset: Index3, fill: bool) -> np.ndarray:
    """Return ``out`` with ``out[p] = mask[p + offset]`` and ``fill`` outside the grid."""
    reach = max(abs(o) for o in offset)
    if reach == 0:
        return mask
    padded = np.pad(mask, reach, mode="constant", constant_values=fill)
    window = tuple(
        slice(reach + o, reach + o + n) for o, n in zip(offset, mask.shape)
    )
    return padded[window]


def _occupied(grid: VoxelGrid) -> np.ndarray:
    return grid.values != 0


def _write(grid: VoxelGrid, mask: np.ndarray) -> None:
    grid.values[...] = mask.astype(np.float64)


def _neighbourhood(connectivity: int) -> list[Index3]:
    """Neighbour offsets; connectivity 6 leaves out only the corner diagonals."""
    offsets = [o for o in _CUBE_OFFSETS if o != (0, 0, 0)]
    if connectivity == 6:
        offsets = [o for o in offsets if 0 in o]
    return offsets


def _flood(passable: np.ndarray, seed: Index3, offsets: list[Index3]) -> np.ndarray:
    """Cells reachable from ``seed`` through passable cells; the seed is always included."""
    shape = passable.shape
    reached = np.zeros(shape, dtype=bool)
    reached[seed] = True
    queue = deque([seed])
    while queue:
        x, y, z = queue.popleft()
        for dx, dy, dz in offsets:
            n = (x + dx, y + dy, z + dz)
            if all(0 <= c < s for c, s in zip(n, shape)) and passable[n] and not reached[n]:
                reached[n] = True
                queue.append(n)
    return reached


def _require_same_shape(grid: VoxelGrid, other: VoxelGrid) -> None:
    if grid.dimensions != other.dimensions:
        raise GridMismatchError(
            f"grid dimensions {grid.dimensions} differ from {other.dimensions}"
        )


@dataclass
class SmoothOperator:
    """Majority filter over each cell's 3x3x3 neighbourhood inside the grid."""

    iterations: int = 1
    threshold: float = 0.5

    def apply(self, grid: VoxelGrid) -> None:
        if self.iterations <= 0:
            return
        occupied = _occupied(grid)
        inside = np.ones(occupied.shape, dtype=bool)
        total = sum(_shifted(inside, o, False).astype(int) for o in _CUBE_OFFSETS)
        for _ in range(self.iterations):
            active = sum(_shifted(occupied, o, False).astype(int) for o in _CUBE_OFFSETS)
            occupied = active / total >= self.threshold
        _write(grid, occupied)


@dataclass
class DilateOperator:
    """Grows occupied regions by their face neighbours."""

    iterations: int = 1

    def apply(self, grid: VoxelGrid) -> None:
        if self.iterations <= 0:
            return
        occupied = _occupied(grid)
        for _ in range(self.iterations):
            grown = occupied.copy()
            for offset in _FACE_OFFSETS:
                grown |= _shifted(occupied, offset, False)
            occupied = grown
        _write(grid, occupied)


@dataclass
class ErodeOperator:
    """Clears occupied cells with an empty face neighbour inside the grid."""

    iterations: int = 1

    def apply(self, grid: VoxelGrid) -> None:
        if self.iterations <= 0:
            return
        occupied = _occupied(grid)
        for _ in range(self.iterations):
            kept = occupied.copy()
            for offset in _FACE_OFFSETS:
                kept &= _shifted(occupied, offset, True)
            occupied = kept
        _write(grid, occupied)


@dataclass
class OffsetOperator:
    """Marks cells within ``distance`` of an occupied cell; a negative distance inverts."""

    distance: float = 1.0

    def apply(self, grid: VoxelGrid) -> None:
        if self.distance == 0.0:
            return
        radius = abs(self.distance)
        reach = math.ceil(radius)
        span = range(-reach, reach + 1)
        occupied = _occupied(grid)
        reached = np.zeros(occupied.shape, dtype=bool)
        for offset in product(span, repeat=3):
            if math.sqrt(sum(o * o for o in offset)) <= radius:
                reached |= _shifted(occupied, offset, False)
        _write(grid, reached if self.distance > 0.0 else ~reached)


@dataclass
class UnionOperator:
    """Occupies every cell occupied in either grid."""

    other: VoxelGrid

    def apply(self, grid: VoxelGrid) -> None:
        _require_same_shape(grid, self.other)
        _write(grid, _occupied(grid) | _occupied(self.other))


@dataclass
class IntersectionOperator:
    """Keeps only cells occupied in both grids."""

    other: VoxelGrid

    def apply(self, grid: VoxelGrid) -> None:
        _require_same_shape(grid, self.other)
        _write(grid, _occupied(grid) & _occupied(self.other))


@dataclass
class DifferenceOperator:
    """Removes the cells occupied in the other grid."""

    other: VoxelGrid

    def apply(self, grid: VoxelGrid) -> None:
        _require_same_shape(grid, self.other)
        _write(grid, _occupied(grid) & ~_occupied(self.other))


@dataclass
class OpeningOperator:
    """Erosion followed by dilation."""

    iterations: int = 1

    def apply(self, grid: VoxelGrid) -> None:
        if self.iterations <= 0:
            return
        ErodeOperator(self.iterations).apply(grid)
        DilateOperator(self.iterations).apply(grid)


@dataclass
class ClosingOperator:
    """Dilation followed by erosion."""

    iterations: int = 1

    def apply(self, grid: VoxelGrid) -> None:
        if self.iterations <= 0:
            return
        DilateOperator(self.iterations).apply(grid)
        ErodeOperator(self.iterations).apply(grid)


@dataclass
class DistanceTransformOperator:
    """Replaces cells by their face-step distance to the nearest occupied cell.

    Distances are capped at ``max_distance``.
    """

    max_distance: float = 10.0

    def apply(self, grid: VoxelGrid) -> None:
        occupied = _occupied(grid)
        distances = np.full(occupied.shape, float(self.max_distance))
        distances[occupied] = 0.0
        visited = occupied.copy()
        frontier = occupied
        level = 0
        while frontier.any():
            level += 1
            if not level < self.max_distance:
                break
            grown = np.zeros(occupied.shape, dtype=bool)
            for offset in _FACE_OFFSETS:
                grown |= _shifted(frontier, offset, False)
            frontier = grown & ~visited
            distances[frontier] = level
            visited |= frontier
        grid.values[...] = distances


@dataclass
class ConnectedComponentsOperator:
    """Labels occupied regions 1, 2, ... in z-y-x scan order; empty cells become 0.

    A connectivity of 6 excludes only the corner-diagonal neighbours; any
    other value uses all 26.
    """

    connectivity: int = 6
    component_count: int = field(default=0, init=False)

    def apply(self, grid: VoxelGrid) -> int:
        occupied = _occupied(grid)
        offsets = _neighbourhood(self.connectivity)
        labels = np.zeros(occupied.shape, dtype=np.int64)
        label = 0
        for z, y, x in np.argwhere(occupied.transpose(2, 1, 0)):
            seed = (int(x), int(y), int(z))
            if labels[seed]:
                continue
            label += 1
            labels[_flood(occupied, seed, offsets)] = label
        grid.values[...] = labels
        self.component_count = label
        return label


@dataclass
class FillOperator:
    """Replaces the grid by the empty region reachable from a seed cell."""

    seed_point: Iterable[int]
    connectivity: int = 6

    def apply(self, grid: VoxelGrid) -> None:
        seed = tuple(int(c) for c in self.seed_point)
        if len(seed) != 3 or not grid.is_valid_position(seed):
            raise IndexError(f"seed point {seed} out of range")
        empty = ~_occupied(grid)
        filled = _flood(empty, seed, _neighbourhood(self.connectivity))  # type: ignore[arg-type]
        _write(grid, filled)


@dataclass
class InterpolationOperator:
    """Samples the grid at a continuous position by trilinear interpolation."""

    position: Iterable[float]
    value: float = field(default=0.0, init=False)

    def apply(self, grid: VoxelGrid) -> float:
        point = tuple(float(c) for c in self.position)
        if len(point) != 3:
            raise ValueError("position must have exactly three components")
        if not all(0.0 <= p < d for p, d in zip(point, grid.dimensions)):
            raise IndexError(f"position {point} outside the grid")
        lower = [int(math.floor(p)) for p in point]
        upper = [min(lo + 1, d - 1) for lo, d in zip(lower, grid.dimensions)]
        xd, yd, zd = (p - lo for p, lo in zip(point, lower))
        (x0, y0, z0), (x1, y1, z1) = lower, upper
        v = grid.values
        c00 = v[x0, y0, z0] * (1.0 - xd) + v[x1, y0, z0] * xd
        c01 = v[x0, y0, z1] * (1.0 - xd) + v[x1, y0, z1] * xd
        c10 = v[x0, y1, z0] * (1.0 - xd) + v[x1, y1, z0] * xd
        c11 = v[x0, y1, z1] * (1.0 - xd) + v[x1, y1, z1] * xd
        c0 = c00 * (1.0 - yd) + c10 * yd
        c1 = c01 * (1.0 - yd) + c11 * yd
        self.value = float(c0 * (1.0 - zd) + c1 * zd)
        return self.value