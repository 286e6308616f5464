"""Rasterisation of boxes, cylinders and spline corridors into a voxel grid."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from .grid import VoxelGrid


def _as_vec(values: Iterable[float], name: str) -> np.ndarray:
    vec = np.asarray(list(values), dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have exactly three components")
    return vec


def _clamp_box(
    grid: VoxelGrid, lo: np.ndarray, hi: np.ndarray
) -> tuple[np.ndarray, np.ndarray] | None:
    lo = np.maximum(lo, 0)
    hi = np.minimum(hi, np.asarray(grid.dimensions) - 1)
    if np.any(hi < lo):
        return None
    return lo, hi


def _region(grid: VoxelGrid, lo: np.ndarray, hi: np.ndarray):
    """Return the slice of the cell array and the world positions of its cells."""
    slices = tuple(slice(int(a), int(b) + 1) for a, b in zip(lo, hi))
    axes = [np.arange(int(a), int(b) + 1) for a, b in zip(lo, hi)]
    indices = np.stack(np.meshgrid(*axes, indexing="ij"), axis=-1)
    world = np.asarray(grid.origin) + indices * grid.resolution
    return slices, world


class BoxVoxelizer:
    """Marks every cell touched by an axis-aligned box."""

    def __init__(self, center: Iterable[float], size: Iterable[float]) -> None:
        self.center = _as_vec(center, "center")
        self.size = _as_vec(size, "size")

    def voxelize(self, grid: VoxelGrid) -> None:
        half = self.size * 0.5
        origin = np.asarray(grid.origin)
        lo = np.trunc((self.center - half - origin) / grid.resolution).astype(int)
        hi = np.trunc((self.center + half - origin) / grid.resolution).astype(int)
        box = _clamp_box(grid, lo, hi)
        if box is None:
            return
        slices = tuple(slice(int(a), int(b) + 1) for a, b in zip(*box))
        grid.values[slices] = 1.0


class CylinderVoxelizer:
    """Marks cells whose corners lie inside a finite cylinder."""

    def __init__(
        self,
        center: Iterable[float],
        axis: Iterable[float],
        radius: float,
        height: float,
    ) -> None:
        direction = _as_vec(axis, "axis")
        length = float(np.linalg.norm(direction))
        if length == 0.0:
            raise ValueError("axis must be non-zero")
        self.center = _as_vec(center, "center")
        self.axis = direction / length
        self.radius = float(radius)
        self.height = float(height)

    def voxelize(self, grid: VoxelGrid) -> None:
        half_height = self.height / 2.0
        start = self.center - self.axis * half_height
        end = self.center + self.axis * half_height
        grid_start = np.asarray(grid.world_to_grid(start))
        grid_end = np.asarray(grid.world_to_grid(end))
        reach = int(np.ceil(self.radius / grid.resolution))
        box = _clamp_box(
            grid,
            np.minimum(grid_start, grid_end) - reach,
            np.maximum(grid_start, grid_end) + reach,
        )
        if box is None:
            return
        slices, world = _region(grid, *box)
        projection = (world - start) @ self.axis
        on_axis = start + projection[..., None] * self.axis
        dist_squared = np.sum((world - on_axis) ** 2, axis=-1)
        mask = (
            (projection >= 0.0)
            & (projection <= self.height)
            & (dist_squared <= self.radius * self.radius)
        )
        grid.values[slices][mask] = 1.0


class CorridorVoxelizer:
    """Marks cells within a radius of a Catmull-Rom spline through control points."""

    def __init__(
        self,
        control_points: Sequence[Iterable[float]],
        radius: float,
        num_segments: int = 10,
    ) -> None:
        points = [_as_vec(p, "control point") for p in control_points]
        if len(points) < 4:
            raise ValueError("a corridor needs at least four control points")
        if num_segments < 1:
            raise ValueError("num_segments must be at least 1")
        self.control_points = np.stack(points)
        self.radius = float(radius)
        self.num_segments = int(num_segments)
        self._samples = np.array(
            [
                self.evaluate_spline(i / self.num_segments, segment)
                for segment in range(len(points) - 3)
                for i in range(self.num_segments)
            ]
        )

    def _segment_points(self, segment: int) -> np.ndarray:
        if not 0 <= segment < len(self.control_points) - 3:
            raise IndexError(f"spline segment {segment} out of range")
        return self.control_points[segment : segment + 4]

    def evaluate_spline(self, t: float, segment: int) -> np.ndarray:
        """Point on the spline at parameter ``t`` of the given segment."""
        p0, p1, p2, p3 = self._segment_points(segment)
        t2 = t * t
        t3 = t2 * t
        return 0.5 * (
            (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t3
            + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t2
            + (-p0 + p2) * t
            + 2.0 * p1
        )

    def evaluate_spline_derivative(self, t: float, segment: int) -> np.ndarray:
        """Tangent of the spline at parameter ``t`` of the given segment."""
        p0, p1, p2, p3 = self._segment_points(segment)
        return 0.5 * (
            3.0 * (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t * t
            + 2.0 * (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t
            + (-p0 + p2)
        )

    def contains(self, point: Iterable[float]) -> bool:
        """Whether a point lies within the radius of any sampled spline point."""
        target = _as_vec(point, "point")
        distances = np.linalg.norm(self._samples - target, axis=1)
        return bool(np.any(distances <= self.radius))

    def voxelize(self, grid: VoxelGrid) -> None:
        low = self.control_points.min(axis=0) - self.radius
        high = self.control_points.max(axis=0) + self.radius
        box = _clamp_box(
            grid,
            np.asarray(grid.world_to_grid(low)),
            np.asarray(grid.world_to_grid(high)),
        )
        if box is None:
            return
        slices, world = _region(grid, *box)
        mask = np.zeros(world.shape[:-1], dtype=bool)
        for sample in self._samples:
            mask |= np.linalg.norm(world - sample, axis=-1) <= self.radius
        grid.values[slices][mask] = 1.0