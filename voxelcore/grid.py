"""A sparse voxel world made of 16×16×16 chunks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence

from .camera import Camera
from .chunk import Chunk, MeshData
from .raycast import hit_face_index, intersect_ray_aabb

Pos3 = tuple[int, int, int]

DEFAULT_REACH = 8.0


def floor_div(a: int, b: int) -> int:
    """Integer division rounding towards negative infinity."""
    return a // b


def chunk_coord(world_pos: Sequence[int]) -> Pos3:
    """Coordinate of the chunk that holds a world block position."""
    x, y, z = world_pos
    size = Chunk.SIZE
    return (floor_div(x, size), floor_div(y, size), floor_div(z, size))


def _local_pos(world_pos: Pos3, coord: Pos3) -> Pos3:
    size = Chunk.SIZE
    return (
        world_pos[0] - coord[0] * size,
        world_pos[1] - coord[1] * size,
        world_pos[2] - coord[2] * size,
    )


def _origin(coord: Pos3) -> Pos3:
    size = Chunk.SIZE
    return (coord[0] * size, coord[1] * size, coord[2] * size)


@dataclass
class LookedAtResult:
    """The first block hit by a ray, if any.

    ``face_index`` is 0=+X, 1=-X, 2=+Y, 3=-Y, 4=+Z, 5=-Z, or -1 with no hit.
    """

    hit: bool = False
    block_pos: Pos3 = (0, 0, 0)
    block_id: int = 0
    block_data: Any = None
    face_index: int = -1


class Grid:
    """Blocks at integer world positions, stored in chunks created on demand.

    ``registry`` is any object whose ``get(block_id)`` returns the block's data
    (its face tiles) or ``None`` for an unknown block.
    """

    def __init__(self, registry: Any = None) -> None:
        self.registry = registry
        self._chunks: dict[Pos3, Chunk] = {}
        self._meshes: dict[Pos3, MeshData] = {}

    def _mark_neighbors_dirty(self, coord: Pos3, local: Pos3) -> None:
        last = Chunk.SIZE - 1
        for axis in range(3):
            for edge, step in ((0, -1), (last, 1)):
                if local[axis] != edge:
                    continue
                neighbor = list(coord)
                neighbor[axis] += step
                chunk = self._chunks.get((neighbor[0], neighbor[1], neighbor[2]))
                if chunk is not None:
                    chunk.mark_dirty()

    def add_block(self, x: int, y: int, z: int, block_id: int) -> bool:
        """Place a block; return False if the ID is unknown or the cell is taken."""
        if self.registry is not None and self.registry.get(block_id) is None:
            return False
        pos = (x, y, z)
        if self.has_block_at(pos):
            return False
        coord = chunk_coord(pos)
        local = _local_pos(pos, coord)
        chunk = self._chunks.get(coord)
        if chunk is None:
            chunk = self._chunks[coord] = Chunk()
        chunk.set_block(*local, block_id)
        chunk.mark_dirty()
        self._mark_neighbors_dirty(coord, local)
        return True

    def remove_block(self, pos: Sequence[int]) -> bool:
        """Remove the block at ``pos``; return False if there was none."""
        world = (pos[0], pos[1], pos[2])
        coord = chunk_coord(world)
        chunk = self._chunks.get(coord)
        if chunk is None:
            return False
        local = _local_pos(world, coord)
        if not chunk.remove_block(*local):
            return False
        chunk.mark_dirty()
        self._mark_neighbors_dirty(coord, local)
        if chunk.is_empty():
            del self._chunks[coord]
            self._meshes.pop(coord, None)
        return True

    def clear(self) -> None:
        """Remove every block."""
        self._chunks.clear()
        self._meshes.clear()

    def has_block_at(self, pos: Sequence[int]) -> bool:
        """Return True if a block occupies ``pos``."""
        world = (pos[0], pos[1], pos[2])
        coord = chunk_coord(world)
        chunk = self._chunks.get(coord)
        return chunk is not None and chunk.has_block(*_local_pos(world, coord))

    def rebuild_visibility(self) -> None:
        """Mark every chunk so its mesh is rebuilt on the next request."""
        for chunk in self._chunks.values():
            chunk.mark_dirty()

    def block_count(self) -> int:
        """Total number of blocks."""
        return sum(chunk.block_count() for chunk in self._chunks.values())

    def blocks(self) -> Iterator[tuple[Pos3, int]]:
        """Yield ``(world_pos, block_id)`` for every block."""
        for coord, chunk in self._chunks.items():
            ox, oy, oz = _origin(coord)
            for lx, ly, lz, block_id in chunk.blocks():
                yield (ox + lx, oy + ly, oz + lz), block_id

    def find_looked_at(
        self,
        ray_origin: Sequence[float],
        ray_direction: Sequence[float],
        max_distance: float = DEFAULT_REACH,
    ) -> LookedAtResult:
        """Return the nearest block hit by a ray within ``max_distance``."""
        nearest = LookedAtResult()
        nearest_distance = max_distance
        for pos, block_id in self.blocks():
            center = (float(pos[0]), float(pos[1]), float(pos[2]))
            distance = intersect_ray_aabb(
                ray_origin,
                ray_direction,
                tuple(c - 0.5 for c in center),
                tuple(c + 0.5 for c in center),
                max_distance,
            )
            if distance is None or distance > nearest_distance:
                continue
            nearest_distance = distance
            hit_point = tuple(o + d * distance for o, d in zip(ray_origin, ray_direction))
            nearest = LookedAtResult(
                hit=True,
                block_pos=pos,
                block_id=block_id,
                block_data=self.registry.get(block_id) if self.registry is not None else None,
                face_index=hit_face_index(hit_point, center),
            )
        return nearest

    def query_looked_at(self, camera: Camera, max_distance: float = DEFAULT_REACH) -> LookedAtResult:
        """Cast a ray from the camera along its view direction."""
        return self.find_looked_at(camera.position, camera.forward(), max_distance)

    def chunk_meshes(self, atlas_width: int, atlas_height: int) -> dict[Pos3, MeshData]:
        """Return each chunk's mesh keyed by its world origin, rebuilding dirty ones.

        Without a registry nothing can be meshed and the result is empty.
        """
        if self.registry is None:
            return {}
        result: dict[Pos3, MeshData] = {}
        for coord, chunk in self._chunks.items():
            origin = _origin(coord)
            if chunk.is_dirty() or coord not in self._meshes:
                self._meshes[coord] = chunk.build_mesh(
                    origin, atlas_width, atlas_height, self.registry, self.has_block_at
                )
            result[origin] = self._meshes[coord]
        return result