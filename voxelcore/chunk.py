"""Fixed-size cubes of blocks and their greedy-meshed surface geometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, NamedTuple, Optional

from .atlas import TILE_PIXEL_SIZE

Pos3 = tuple[int, int, int]
Vertex = tuple[float, float, float, float, float, float, float]

_QUAD_INDICES = (0, 1, 2, 2, 3, 0)


@dataclass(frozen=True)
class FaceTile:
    """Column and row of a tile in the block atlas."""

    x: int = 0
    y: int = 0


class _FaceInfo(NamedTuple):
    normal_axis: int
    normal_dir: int
    u_axis: int
    v_axis: int
    flip_u: bool
    flip_v: bool


# Face order matches the atlas face-tile order: front, back, left, right, top, bottom.
_FACES = (
    _FaceInfo(2, +1, 0, 1, False, False),  # +Z
    _FaceInfo(2, -1, 0, 1, True, False),  # -Z
    _FaceInfo(0, -1, 2, 1, False, False),  # -X
    _FaceInfo(0, +1, 2, 1, True, False),  # +X
    _FaceInfo(1, +1, 0, 2, False, True),  # +Y
    _FaceInfo(1, -1, 0, 2, False, False),  # -Y
)


@dataclass
class MeshData:
    """Triangle geometry of a chunk.

    Each vertex is ``(x, y, z, u, v, tile_u0, tile_v0)`` in chunk-local space;
    ``indices`` holds three entries per triangle, two triangles per quad.
    """

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    @property
    def quad_count(self) -> int:
        """Number of quads in the mesh."""
        return len(self.vertices) // 4


class Chunk:
    """A 16×16×16 cube of block IDs addressed by local coordinates."""

    SIZE = 16

    def __init__(self) -> None:
        self._blocks: dict[Pos3, int] = {}
        self._dirty = True

    def _key(self, lx: int, ly: int, lz: int) -> Pos3:
        if not all(0 <= c < self.SIZE for c in (lx, ly, lz)):
            raise IndexError(f"local position ({lx}, {ly}, {lz}) is outside the chunk")
        return (lx, ly, lz)

    def has_block(self, lx: int, ly: int, lz: int) -> bool:
        """Return True if a block occupies the local position."""
        return self._key(lx, ly, lz) in self._blocks

    def set_block(self, lx: int, ly: int, lz: int, block_id: int) -> None:
        """Place or replace the block at the local position."""
        self._blocks[self._key(lx, ly, lz)] = block_id
        self._dirty = True

    def remove_block(self, lx: int, ly: int, lz: int) -> bool:
        """Remove the block at the local position; return False if there was none."""
        if self._blocks.pop(self._key(lx, ly, lz), None) is None:
            return False
        self._dirty = True
        return True

    def block_count(self) -> int:
        """Number of blocks in the chunk."""
        return len(self._blocks)

    def is_empty(self) -> bool:
        """Return True if the chunk holds no blocks."""
        return not self._blocks

    def mark_dirty(self) -> None:
        """Flag the mesh as needing a rebuild."""
        self._dirty = True

    def is_dirty(self) -> bool:
        """Return True if the mesh is out of date."""
        return self._dirty

    def blocks(self) -> Iterator[tuple[int, int, int, int]]:
        """Yield ``(lx, ly, lz, block_id)`` for every block, in x, y, z order."""
        for (lx, ly, lz), block_id in sorted(self._blocks.items()):
            yield lx, ly, lz, block_id

    def build_mesh(
        self,
        chunk_origin: Pos3,
        atlas_width: int,
        atlas_height: int,
        registry: Any,
        has_block_at_world: Callable[[Pos3], bool],
    ) -> MeshData:
        """Greedy-mesh the visible faces and clear the dirty flag.

        ``registry.get(block_id)`` must return the block's six face tiles (or an
        object with a ``face_tiles`` attribute holding them), or ``None`` for an
        unknown block, whose faces are then skipped. ``has_block_at_world`` is
        asked about neighbours outside this chunk, in world coordinates.
        """
        tile_w = TILE_PIXEL_SIZE / (atlas_width if atlas_width > 0 else 1)
        tile_h = TILE_PIXEL_SIZE / (atlas_height if atlas_height > 0 else 1)
        mesh = MeshData()

        for face, info in enumerate(_FACES):
            for depth in range(self.SIZE):
                mask = [
                    [
                        self._mask_cell(
                            face, info, depth, u, v, chunk_origin, registry, has_block_at_world
                        )
                        for v in range(self.SIZE)
                    ]
                    for u in range(self.SIZE)
                ]
                self._emit_quads(mesh, mask, info, depth, tile_w, tile_h)

        self._dirty = False
        return mesh

    def _mask_cell(
        self,
        face: int,
        info: _FaceInfo,
        depth: int,
        u: int,
        v: int,
        origin: Pos3,
        registry: Any,
        has_block_at_world: Callable[[Pos3], bool],
    ) -> Optional[tuple[int, int]]:
        local = [0, 0, 0]
        local[info.normal_axis] = depth
        local[info.u_axis] = u
        local[info.v_axis] = v
        block_id = self._blocks.get((local[0], local[1], local[2]))
        if block_id is None:
            return None

        neighbor = list(local)
        neighbor[info.normal_axis] += info.normal_dir
        if all(0 <= c < self.SIZE for c in neighbor):
            solid = (neighbor[0], neighbor[1], neighbor[2]) in self._blocks
        else:
            solid = has_block_at_world(
                (origin[0] + neighbor[0], origin[1] + neighbor[1], origin[2] + neighbor[2])
            )
        if solid:
            return None

        data = registry.get(block_id)
        if data is None:
            return None
        tile = getattr(data, "face_tiles", data)[face]
        return (tile.x, tile.y)

    def _emit_quads(
        self,
        mesh: MeshData,
        mask: list[list[Optional[tuple[int, int]]]],
        info: _FaceInfo,
        depth: int,
        tile_w: float,
        tile_h: float,
    ) -> None:
        size = self.SIZE
        visited = [[False] * size for _ in range(size)]

        for u0 in range(size):
            for v0 in range(size):
                cell = mask[u0][v0]
                if cell is None or visited[u0][v0]:
                    continue

                width = 1
                while u0 + width < size and mask[u0 + width][v0] == cell and not visited[u0 + width][v0]:
                    width += 1

                height = 1
                while v0 + height < size and all(
                    mask[u0 + w][v0 + height] == cell and not visited[u0 + w][v0 + height]
                    for w in range(width)
                ):
                    height += 1

                for w in range(width):
                    for h in range(height):
                        visited[u0 + w][v0 + h] = True

                self._add_quad(mesh, info, depth, u0, v0, width, height, cell, tile_w, tile_h)

    @staticmethod
    def _add_quad(
        mesh: MeshData,
        info: _FaceInfo,
        depth: int,
        u0: int,
        v0: int,
        width: int,
        height: int,
        cell: tuple[int, int],
        tile_w: float,
        tile_h: float,
    ) -> None:
        tile_u0 = cell[0] * tile_w
        tile_v0 = cell[1] * tile_h
        uvs = (
            (tile_u0, tile_v0 + height * tile_h),
            (tile_u0 + width * tile_w, tile_v0 + height * tile_h),
            (tile_u0 + width * tile_w, tile_v0),
            (tile_u0, tile_v0),
        )
        u_low, u_high = u0 - 0.5, u0 + width - 0.5
        v_low, v_high = v0 - 0.5, v0 + height - 0.5
        d_face = depth + info.normal_dir * 0.5

        base = len(mesh.vertices)
        for corner, (tex_u, tex_v) in enumerate(uvs):
            hi_u = corner in (0, 3) if info.flip_u else corner in (1, 2)
            hi_v = corner in (0, 1) if info.flip_v else corner in (2, 3)
            pos = [0.0, 0.0, 0.0]
            pos[info.normal_axis] = d_face
            pos[info.u_axis] = u_high if hi_u else u_low
            pos[info.v_axis] = v_high if hi_v else v_low
            mesh.vertices.append((pos[0], pos[1], pos[2], tex_u, tex_v, tile_u0, tile_v0))
        mesh.indices.extend(base + i for i in _QUAD_INDICES)