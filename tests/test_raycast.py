import pytest

from voxelcore.chunk import Chunk, FaceTile
from voxelcore.raycast import (
    face_outline,
    float_block_vertices,
    hit_face_index,
    intersect_ray_aabb,
    wireframe_edges,
)

BOX_MIN = (-0.5, -0.5, -0.5)
BOX_MAX = (0.5, 0.5, 0.5)


def test_ray_hits_box_on_near_face():
    origin = (-5.0, 0.0, 0.0)
    t = intersect_ray_aabb(origin, (1.0, 0.0, 0.0), BOX_MIN, BOX_MAX, 10.0)
    assert t is not None
    assert abs(origin[0] + t - BOX_MIN[0]) < 1e-9


def test_ray_inside_box_hits_at_zero():
    assert intersect_ray_aabb((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), BOX_MIN, BOX_MAX, 8.0) == 0.0


def test_ray_pointing_away_misses():
    assert intersect_ray_aabb((-5.0, 0.0, 0.0), (-1.0, 0.0, 0.0), BOX_MIN, BOX_MAX, 10.0) is None


def test_ray_too_short_misses():
    assert intersect_ray_aabb((-5.0, 0.0, 0.0), (1.0, 0.0, 0.0), BOX_MIN, BOX_MAX, 2.0) is None


def test_parallel_ray_outside_slab_misses():
    assert intersect_ray_aabb((-5.0, 2.0, 0.0), (1.0, 0.0, 0.0), BOX_MIN, BOX_MAX, 10.0) is None


def test_diagonal_hit_point_lies_on_box_surface():
    origin = (-3.0, -2.0, -1.0)
    direction = (0.8, 0.6, 0.0)
    t = intersect_ray_aabb(origin, direction, BOX_MIN, BOX_MAX, 20.0)
    assert t is not None
    point = [o + d * t for o, d in zip(origin, direction)]
    assert all(-0.5 - 1e-9 <= c <= 0.5 + 1e-9 for c in point)
    assert any(abs(abs(c) - 0.5) < 1e-9 for c in point)


@pytest.mark.parametrize(
    "point, expected",
    [
        ((0.5, 0.1, 0.2), 0),
        ((-0.5, 0.1, 0.2), 1),
        ((0.1, 0.5, 0.2), 2),
        ((0.1, -0.5, 0.2), 3),
        ((0.1, 0.2, 0.5), 4),
        ((0.1, 0.2, -0.5), 5),
    ],
)
def test_hit_face_index_at_origin(point, expected):
    assert hit_face_index(point, (0.0, 0.0, 0.0)) == expected


def test_hit_face_index_is_relative_to_center():
    assert hit_face_index((3.5, 2.0, 1.0), (3.0, 2.0, 1.0)) == hit_face_index(
        (0.5, 0.0, 0.0), (0.0, 0.0, 0.0)
    )


def test_wireframe_edges_are_unit_cube_edges():
    edges = wireframe_edges()
    assert len(edges) == 12
    for start, end in edges:
        assert all(abs(c) == 0.5 for c in start + end)
        differing = [a != b for a, b in zip(start, end)]
        assert sum(differing) == 1
    assert len({frozenset(edge) for edge in edges}) == len(edges)


@pytest.mark.parametrize("face, axis, sign", [(0, 0, 1), (1, 0, -1), (2, 1, 1), (3, 1, -1), (4, 2, 1), (5, 2, -1)])
def test_face_outline_lies_just_outside_face(face, axis, sign):
    corners = face_outline(face)
    assert len(corners) == 4
    for corner in corners:
        assert corner[axis] * sign > 0.5
        assert all(abs(c) == 0.5 for i, c in enumerate(corner) if i != axis)


@pytest.mark.parametrize("face", [-1, 6])
def test_face_outline_rejects_bad_index(face):
    with pytest.raises(IndexError):
        face_outline(face)


def _tiles():
    return [FaceTile(i, i + 1) for i in range(6)]


def test_float_block_vertices_shape():
    mesh = float_block_vertices(_tiles(), 0.5, 0.25)
    assert len(mesh.vertices) == 24
    assert len(mesh.indices) == 36
    assert mesh.quad_count == 6
    assert max(mesh.indices) == 23
    for vertex in mesh.vertices:
        assert all(abs(c) == 0.5 for c in vertex[:3])


def test_float_block_vertices_tile_origin_per_face():
    tiles = _tiles()
    mesh = float_block_vertices(tiles, 0.5, 0.25)
    for face, tile in enumerate(tiles):
        for vertex in mesh.vertices[face * 4:face * 4 + 4]:
            assert vertex[5] == tile.x * 0.5
            assert vertex[6] == tile.y * 0.25


class _Registry:
    def __init__(self, tiles):
        self._tiles = tiles

    def get(self, block_id):
        return self._tiles if block_id == 1 else None


def test_float_block_matches_single_block_chunk_mesh():
    tiles = _tiles()
    chunk = Chunk()
    chunk.set_block(0, 0, 0, 1)
    chunk_mesh = chunk.build_mesh((0, 0, 0), 64, 128, _Registry(tiles), lambda pos: False)
    assert float_block_vertices(tiles, 0.5, 0.25) == chunk_mesh