import pytest

from voxelcore.camera import Camera
from voxelcore.chunk import Chunk, FaceTile
from voxelcore.grid import Grid, LookedAtResult, chunk_coord, floor_div


def _registry():
    return {1: [FaceTile(0, 0)] * 6, 2: [FaceTile(1, 0)] * 6}


@pytest.mark.parametrize("a", range(-40, 41))
def test_floor_div_invariant(a):
    q = floor_div(a, Chunk.SIZE)
    assert q * Chunk.SIZE <= a < (q + 1) * Chunk.SIZE


def test_chunk_coord_negative():
    assert chunk_coord((-1, 0, 15)) == (-1, 0, 0)
    assert chunk_coord((16, -16, -17)) == (1, -1, -2)


def test_add_and_query():
    grid = Grid(_registry())
    assert grid.add_block(3, -2, 40, 1) is True
    assert grid.has_block_at((3, -2, 40))
    assert not grid.has_block_at((3, -2, 41))
    assert grid.block_count() == 1


def test_add_duplicate_rejected():
    grid = Grid(_registry())
    assert grid.add_block(0, 0, 0, 1)
    assert grid.add_block(0, 0, 0, 2) is False
    assert list(grid.blocks()) == [((0, 0, 0), 1)]


def test_unknown_block_rejected_with_registry():
    grid = Grid(_registry())
    assert grid.add_block(0, 0, 0, 99) is False
    assert grid.block_count() == 0


def test_any_block_accepted_without_registry():
    grid = Grid()
    assert grid.add_block(0, 0, 0, 99)
    assert grid.block_count() == 1


def test_remove_block():
    grid = Grid(_registry())
    assert grid.remove_block((0, 0, 0)) is False
    grid.add_block(-1, -1, -1, 1)
    assert list(grid.blocks()) == [((-1, -1, -1), 1)]
    assert grid.remove_block((-1, -1, -1)) is True
    assert grid.remove_block((-1, -1, -1)) is False
    assert grid.block_count() == 0
    assert grid.chunk_meshes(64, 64) == {}


def test_clear():
    grid = Grid(_registry())
    for x in range(20):
        grid.add_block(x, 0, 0, 1)
    assert grid.block_count() == 20
    grid.clear()
    assert grid.block_count() == 0
    assert list(grid.blocks()) == []


def test_meshes_across_chunk_border():
    grid = Grid(_registry())
    grid.add_block(15, 0, 0, 1)
    grid.add_block(16, 0, 0, 1)
    meshes = grid.chunk_meshes(64, 64)
    assert set(meshes) == {(0, 0, 0), (16, 0, 0)}
    assert all(mesh.quad_count == 5 for mesh in meshes.values())

    grid.remove_block((16, 0, 0))
    meshes = grid.chunk_meshes(64, 64)
    assert set(meshes) == {(0, 0, 0)}
    assert meshes[(0, 0, 0)].quad_count == 6


def test_meshes_cached_until_dirty():
    grid = Grid(_registry())
    grid.add_block(0, 0, 0, 1)
    first = grid.chunk_meshes(64, 64)[(0, 0, 0)]
    assert grid.chunk_meshes(64, 64)[(0, 0, 0)] is first
    grid.rebuild_visibility()
    rebuilt = grid.chunk_meshes(64, 64)[(0, 0, 0)]
    assert rebuilt is not first
    assert rebuilt.quad_count == first.quad_count


def test_meshes_empty_without_registry():
    grid = Grid()
    grid.add_block(0, 0, 0, 1)
    assert grid.chunk_meshes(64, 64) == {}


def test_find_looked_at_nearest():
    registry = _registry()
    grid = Grid(registry)
    grid.add_block(0, 0, 5, 2)
    grid.add_block(0, 0, 3, 1)
    result = grid.find_looked_at((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), 8.0)
    assert result.hit
    assert result.block_pos == (0, 0, 3)
    assert result.block_id == 1
    assert result.block_data is registry[1]
    assert result.face_index == 5


def test_find_looked_at_face_plus_x():
    grid = Grid(_registry())
    grid.add_block(-3, 0, 0, 1)
    result = grid.find_looked_at((0.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 8.0)
    assert result.hit
    assert result.face_index == 0


def test_find_looked_at_out_of_reach():
    grid = Grid(_registry())
    grid.add_block(0, 0, 20, 1)
    result = grid.find_looked_at((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), 8.0)
    assert result == LookedAtResult()
    assert result.face_index == -1


def test_query_looked_at_uses_camera():
    grid = Grid(_registry())
    grid.add_block(4, 0, 0, 2)
    camera = Camera(position=(0.0, 0.0, 0.0))
    result = grid.query_looked_at(camera, 8.0)
    assert result.hit
    assert result.block_pos == (4, 0, 0)
    assert result.face_index == 1
    camera.yaw_radians = 3.14159
    assert grid.query_looked_at(camera, 8.0).hit is False