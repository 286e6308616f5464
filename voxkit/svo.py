"""Sparse voxel octree storage with a compact binary encoding."""

from __future__ import annotations

import math
import os
import struct
from dataclasses import dataclass
from typing import Union

import numpy as np

from .grid import VoxelGrid

_HEADER = struct.Struct("<QQ")
_NODE = struct.Struct("<??")

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class SVONode:
    """An octree node; inner nodes hold eight children in x-y-z bit order."""

    is_leaf: bool = True
    value: bool = False
    children: tuple["SVONode", ...] = ()


class SVOStorage:
    """Sparse voxel octree built from a cubic occupancy grid."""

    def __init__(self, grid: VoxelGrid | None = None) -> None:
        self.max_depth = 0
        self.resolution = 0
        self.root = SVONode()
        if grid is not None:
            self.from_voxel_grid(grid)

    def from_voxel_grid(self, grid: VoxelGrid) -> None:
        """Rebuild the tree from a grid whose three dimensions are equal."""
        sx, sy, sz = grid.dimensions
        if not sx == sy == sz:
            raise ValueError("only cubic grids can be stored in an octree")
        occupied = grid.values != 0
        self.resolution = sx
        self.max_depth = int(math.log2(sx))
        self.root = self._build(occupied, 0, 0, 0, sx)

    def _build(self, occupied: np.ndarray, x: int, y: int, z: int, size: int) -> SVONode:
        if size == 1:
            return SVONode(is_leaf=True, value=bool(occupied[x, y, z]))
        region = occupied[x : x + size, y : y + size, z : z + size]
        first = bool(region[0, 0, 0])
        uniform = bool(region.all()) if first else not region.any()
        if uniform:
            return SVONode(is_leaf=True, value=first)
        half = size // 2
        children = tuple(
            self._build(
                occupied,
                x + (half if i & 1 else 0),
                y + (half if i & 2 else 0),
                z + (half if i & 4 else 0),
                half,
            )
            for i in range(8)
        )
        return SVONode(is_leaf=False, value=False, children=children)

    def to_voxel_grid(self, grid: VoxelGrid) -> VoxelGrid:
        """Write the stored occupancy into ``grid`` and return it."""
        if self.resolution and any(d < self.resolution for d in grid.dimensions):
            raise IndexError("grid is too small for the stored octree")
        self._paint(self.root, grid, 0, 0, 0, self.resolution)
        return grid

    def _paint(self, node: SVONode, grid: VoxelGrid, x: int, y: int, z: int, size: int) -> None:
        if node.is_leaf:
            grid.values[x : x + size, y : y + size, z : z + size] = float(node.value)
            return
        half = size // 2
        for i, child in enumerate(node.children):
            self._paint(
                child,
                grid,
                x + (half if i & 1 else 0),
                y + (half if i & 2 else 0),
                z + (half if i & 4 else 0),
                half,
            )

    def to_bytes(self) -> bytes:
        """Encode the header and the tree in pre-order."""
        parts = [_HEADER.pack(self.max_depth, self.resolution)]

        def emit(node: SVONode) -> None:
            parts.append(_NODE.pack(node.is_leaf, node.value))
            if not node.is_leaf:
                for child in node.children:
                    emit(child)

        emit(self.root)
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes) -> "SVOStorage":
        """Decode storage produced by :meth:`to_bytes`."""
        if len(data) < _HEADER.size:
            raise ValueError("truncated octree header")
        storage = cls()
        storage.max_depth, storage.resolution = _HEADER.unpack_from(data, 0)
        offset = _HEADER.size

        def read() -> SVONode:
            nonlocal offset
            if offset + _NODE.size > len(data):
                raise ValueError("truncated octree data")
            is_leaf, value = _NODE.unpack_from(data, offset)
            offset += _NODE.size
            if is_leaf:
                return SVONode(is_leaf=True, value=value)
            children = tuple(read() for _ in range(8))
            return SVONode(is_leaf=False, value=value, children=children)

        try:
            storage.root = read()
        except RecursionError as exc:
            raise ValueError("octree data nested too deeply") from exc
        return storage

    def save(self, path: PathLike) -> None:
        with open(path, "wb") as stream:
            stream.write(self.to_bytes())

    def load(self, path: PathLike) -> None:
        """Replace this storage with the contents of a saved file."""
        with open(path, "rb") as stream:
            loaded = self.from_bytes(stream.read())
        self.max_depth = loaded.max_depth
        self.resolution = loaded.resolution
        self.root = loaded.root

    def node_count(self) -> int:
        count = 0
        pending = [self.root]
        while pending:
            node = pending.pop()
            count += 1
            if not node.is_leaf:
                pending.extend(node.children)
        return count