"""Dense three-dimensional voxel grid with world/grid coordinate mapping."""

from __future__ import annotations

from typing import Iterable

import numpy as np

Vector3 = tuple[float, float, float]
Index3 = tuple[int, int, int]


def _vec3(values: Iterable[float], name: str) -> Vector3:
    items = tuple(float(v) for v in values)
    if len(items) != 3:
        raise ValueError(f"{name} must have exactly three components")
    return items  # type: ignore[return-value]


def _index3(values: Iterable[int]) -> Index3:
    items = tuple(int(v) for v in values)
    if len(items) != 3:
        raise ValueError("grid positions must have exactly three components")
    return items  # type: ignore[return-value]


class VoxelGrid:
    """A regular grid of cells spanning an axis-aligned box in world space.

    Each cell holds a float. Occupancy is stored as 1.0 (set) or 0.0
    (clear); any non-zero value counts as occupied.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        resolution: float,
        min_bounds: Iterable[float],
        max_bounds: Iterable[float],
    ) -> None:
        if resolution <= 0:
            raise ValueError("resolution must be positive")
        self._resolution = float(resolution)
        self._min_bounds = _vec3(min_bounds, "min_bounds")
        self._max_bounds = _vec3(max_bounds, "max_bounds")
        dims = tuple(
            int((hi - lo) / self._resolution) + 1
            for lo, hi in zip(self._min_bounds, self._max_bounds)
        )
        if any(d < 1 for d in dims):
            raise ValueError("max_bounds must not lie below min_bounds")
        self._dimensions: Index3 = dims  # type: ignore[assignment]
        self._data = np.zeros(dims, dtype=np.float64)

    @classmethod
    def from_shape(cls, width: int, height: int, depth: int) -> "VoxelGrid":
        """Create a unit-resolution grid at the origin with the given cell counts."""
        if min(width, height, depth) < 1:
            raise ValueError("grid dimensions must be at least 1")
        return cls(1.0, (0.0, 0.0, 0.0), (width - 1, height - 1, depth - 1))

    @property
    def resolution(self) -> float:
        return self._resolution

    @property
    def min_bounds(self) -> Vector3:
        return self._min_bounds

    @property
    def max_bounds(self) -> Vector3:
        return self._max_bounds

    @property
    def origin(self) -> Vector3:
        return self._min_bounds

    @property
    def dimensions(self) -> Index3:
        return self._dimensions

    @property
    def width(self) -> int:
        return self._dimensions[0]

    @property
    def height(self) -> int:
        return self._dimensions[1]

    @property
    def depth(self) -> int:
        return self._dimensions[2]

    @property
    def values(self) -> np.ndarray:
        """The cell array, indexed as ``values[x, y, z]``."""
        return self._data

    def _checked(self, position: Iterable[int]) -> Index3:
        index = _index3(position)
        if not self.is_valid_position(index):
            raise IndexError(f"grid position {index} out of range")
        return index

    def get(self, position: Iterable[int]) -> float:
        """Return the value stored at a grid position."""
        return float(self._data[self._checked(position)])

    def set(self, position: Iterable[int], value: float) -> None:
        """Store a value at a grid position."""
        self._data[self._checked(position)] = float(value)

    def world_to_grid(self, world_pos: Iterable[float]) -> Index3:
        """Map a world point to the grid index containing it (truncating toward zero)."""
        point = _vec3(world_pos, "world_pos")
        return tuple(  # type: ignore[return-value]
            int((p - lo) / self._resolution)
            for p, lo in zip(point, self._min_bounds)
        )

    def grid_to_world(self, grid_pos: Iterable[int]) -> Vector3:
        """Map a grid index to the world position of its corner."""
        index = _index3(grid_pos)
        return tuple(  # type: ignore[return-value]
            lo + i * self._resolution for i, lo in zip(index, self._min_bounds)
        )

    def is_valid_position(self, position: Iterable[int]) -> bool:
        index = _index3(position)
        return all(0 <= i < d for i, d in zip(index, self._dimensions))

    def fill(self, value: float) -> None:
        self._data.fill(float(value))

    def set_region(
        self,
        min_corner: Iterable[int],
        max_corner: Iterable[int],
        value: float,
    ) -> None:
        """Set every cell in the inclusive box between two valid corners."""
        lo = _index3(min_corner)
        hi = _index3(max_corner)
        if not (self.is_valid_position(lo) and self.is_valid_position(hi)):
            raise IndexError("region bounds out of range")
        region = tuple(slice(a, b + 1) for a, b in zip(lo, hi))
        if all(a <= b for a, b in zip(lo, hi)):
            self._data[region] = float(value)

    def count_occupied(self) -> int:
        return int(np.count_nonzero(self._data))

    def occupancy_rate(self) -> float:
        return self.count_occupied() / self._data.size

    def copy(self) -> "VoxelGrid":
        clone = VoxelGrid(self._resolution, self._min_bounds, self._max_bounds)
        clone._data = self._data.copy()
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VoxelGrid):
            return NotImplemented
        return (
            self._resolution == other._resolution
            and self._min_bounds == other._min_bounds
            and self._dimensions == other._dimensions
            and bool(np.array_equal(self._data, other._data))
        )

    def __repr__(self) -> str:
        return (
            f"VoxelGrid(resolution={self._resolution}, "
            f"min_bounds={self._min_bounds}, dimensions={self._dimensions})"
        )