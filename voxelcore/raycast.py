"""Ray picking against unit blocks, plus the fixed debug and falling-block geometry."""

from __future__ import annotations

from typing import Optional, Sequence

from .chunk import _FACES, MeshData

Vec3 = tuple[float, float, float]

_PARALLEL_EPSILON = 0.0001
_QUAD_INDICES = (0, 1, 2, 2, 3, 0)

# Corner pairs of the twelve cube edges: bottom ring (-Z), top ring (+Z), then the pillars.
_WIREFRAME_EDGES: tuple[tuple[Vec3, Vec3], ...] = (
    ((-0.5, -0.5, -0.5), (0.5, -0.5, -0.5)),
    ((0.5, -0.5, -0.5), (0.5, 0.5, -0.5)),
    ((0.5, 0.5, -0.5), (-0.5, 0.5, -0.5)),
    ((-0.5, 0.5, -0.5), (-0.5, -0.5, -0.5)),
    ((-0.5, -0.5, 0.5), (0.5, -0.5, 0.5)),
    ((0.5, -0.5, 0.5), (0.5, 0.5, 0.5)),
    ((0.5, 0.5, 0.5), (-0.5, 0.5, 0.5)),
    ((-0.5, 0.5, 0.5), (-0.5, -0.5, 0.5)),
    ((-0.5, -0.5, -0.5), (-0.5, -0.5, 0.5)),
    ((0.5, -0.5, -0.5), (0.5, -0.5, 0.5)),
    ((0.5, 0.5, -0.5), (0.5, 0.5, 0.5)),
    ((-0.5, 0.5, -0.5), (-0.5, 0.5, 0.5)),
)

# Slightly pushed-out quads for each face, indexed 0=+X, 1=-X, 2=+Y, 3=-Y, 4=+Z, 5=-Z.
_FACE_OUTLINES: tuple[tuple[Vec3, Vec3, Vec3, Vec3], ...] = (
    ((0.502, -0.5, -0.5), (0.502, -0.5, 0.5), (0.502, 0.5, 0.5), (0.502, 0.5, -0.5)),
    ((-0.502, -0.5, 0.5), (-0.502, -0.5, -0.5), (-0.502, 0.5, -0.5), (-0.502, 0.5, 0.5)),
    ((-0.5, 0.502, -0.5), (0.5, 0.502, -0.5), (0.5, 0.502, 0.5), (-0.5, 0.502, 0.5)),
    ((-0.5, -0.502, 0.5), (0.5, -0.502, 0.5), (0.5, -0.502, -0.5), (-0.5, -0.502, -0.5)),
    ((-0.5, -0.5, 0.502), (0.5, -0.5, 0.502), (0.5, 0.5, 0.502), (-0.5, 0.5, 0.502)),
    ((0.5, -0.5, -0.502), (-0.5, -0.5, -0.502), (-0.5, 0.5, -0.502), (0.5, 0.5, -0.502)),
)


def intersect_ray_aabb(
    ray_origin: Sequence[float],
    ray_direction: Sequence[float],
    aabb_min: Sequence[float],
    aabb_max: Sequence[float],
    max_distance: float,
) -> Optional[float]:
    """Return the entry distance of a ray into a box within ``max_distance``, or ``None``.

    A ray starting inside the box hits at distance 0.
    """
    t_min = 0.0
    t_max = max_distance
    for origin, direction, slab_min, slab_max in zip(ray_origin, ray_direction, aabb_min, aabb_max):
        if abs(direction) < _PARALLEL_EPSILON:
            if origin < slab_min or origin > slab_max:
                return None
            continue
        inverse = 1.0 / direction
        t0 = (slab_min - origin) * inverse
        t1 = (slab_max - origin) * inverse
        if t0 > t1:
            t0, t1 = t1, t0
        t_min = max(t_min, t0)
        t_max = min(t_max, t1)
        if t_min > t_max:
            return None
    return t_min


def hit_face_index(hit_point: Sequence[float], center: Sequence[float]) -> int:
    """Return the face a point on a block's surface lies on.

    Faces are numbered 0=+X, 1=-X, 2=+Y, 3=-Y, 4=+Z, 5=-Z; the axis with the
    largest offset from the centre wins, X before Y before Z on ties.
    """
    lx, ly, lz = (p - c for p, c in zip(hit_point, center))
    ax, ay, az = abs(lx), abs(ly), abs(lz)
    if ax >= ay and ax >= az:
        return 0 if lx > 0.0 else 1
    if ay >= ax and ay >= az:
        return 2 if ly > 0.0 else 3
    return 4 if lz > 0.0 else 5


def wireframe_edges() -> tuple[tuple[Vec3, Vec3], ...]:
    """The twelve edges of a unit cube centred on the origin, as point pairs."""
    return _WIREFRAME_EDGES


def face_outline(face_index: int) -> tuple[Vec3, Vec3, Vec3, Vec3]:
    """The four corners of the outline drawn on a face (0=+X ... 5=-Z)."""
    if not 0 <= face_index < len(_FACE_OUTLINES):
        raise IndexError(f"face index {face_index} is out of range")
    return _FACE_OUTLINES[face_index]


def float_block_vertices(face_tiles: Sequence, tile_width: float, tile_height: float) -> MeshData:
    """Build the 24-vertex, 36-index mesh of a whole unit block centred on the origin.

    ``face_tiles`` holds six tiles with ``x`` and ``y`` attributes, in the
    order front, back, left, right, top, bottom.
    """
    mesh = MeshData()
    for face, info in enumerate(_FACES):
        tile = face_tiles[face]
        tile_u0 = tile.x * tile_width
        tile_v0 = tile.y * tile_height
        uvs = (
            (tile_u0, tile_v0 + tile_height),
            (tile_u0 + tile_width, tile_v0 + tile_height),
            (tile_u0 + tile_width, tile_v0),
            (tile_u0, tile_v0),
        )
        d_face = info.normal_dir * 0.5
        base = len(mesh.vertices)
        for corner, (tex_u, tex_v) in enumerate(uvs):
            hi_u = corner in (0, 3) if info.flip_u else corner in (1, 2)
            hi_v = corner in (0, 1) if info.flip_v else corner in (2, 3)
            pos = [0.0, 0.0, 0.0]
            pos[info.normal_axis] = d_face
            pos[info.u_axis] = 0.5 if hi_u else -0.5
            pos[info.v_axis] = 0.5 if hi_v else -0.5
            mesh.vertices.append((pos[0], pos[1], pos[2], tex_u, tex_v, tile_u0, tile_v0))
        mesh.indices.extend(base + i for i in _QUAD_INDICES)
    return mesh