"""Voxel grids, shape and line voxelizers, grid operators and sparse voxel octree storage."""

__version__ = "0.1.0"
__all__ = ["grid", "voxelizers", "line", "svo", "demo", "operators"]