import pytest
from PIL import Image

from voxelcore.atlas import TILE_PIXEL_SIZE, AtlasTexture, load_atlas


def test_empty_atlas_maps_full_quad():
    assert AtlasTexture().tile_uv(3, 4) == (0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 1.0)


def test_first_tile_starts_at_origin():
    atlas = AtlasTexture(width=TILE_PIXEL_SIZE * 4, height=TILE_PIXEL_SIZE * 2)
    uv = atlas.tile_uv(0, 0)
    assert uv[0] == 0.0
    assert uv[6] == 0.0
    assert uv[7] == 0.0


def test_tile_size_matches_atlas_fraction():
    atlas = AtlasTexture(width=TILE_PIXEL_SIZE * 8, height=TILE_PIXEL_SIZE * 4)
    u0, v1, u1, v1b, u1b, v0, u0b, v0b = atlas.tile_uv(2, 1)
    assert u1 - u0 == pytest.approx(TILE_PIXEL_SIZE / atlas.width)
    assert v1 - v0 == pytest.approx(TILE_PIXEL_SIZE / atlas.height)
    assert (u0, v1, u1, v0) == (u0b, v1b, u1b, v0b)


def test_adjacent_tiles_share_edges():
    atlas = AtlasTexture(width=TILE_PIXEL_SIZE * 4, height=TILE_PIXEL_SIZE * 4)
    left = atlas.tile_uv(1, 2)
    right = atlas.tile_uv(2, 2)
    assert left[2] == pytest.approx(right[0])
    below = atlas.tile_uv(1, 3)
    assert left[1] == pytest.approx(below[7])


def test_last_tile_reaches_edge():
    atlas = AtlasTexture(width=TILE_PIXEL_SIZE * 4, height=TILE_PIXEL_SIZE * 4)
    uv = atlas.tile_uv(3, 3)
    assert uv[2] == pytest.approx(1.0)
    assert uv[1] == pytest.approx(1.0)


def test_load_atlas_roundtrip(tmp_path):
    path = tmp_path / "atlas.png"
    image = Image.new("RGB", (64, 32), (10, 20, 30))
    image.save(path)
    atlas = load_atlas(path)
    assert (atlas.width, atlas.height) == (64, 32)
    assert len(atlas.pixels) == 64 * 32 * 4
    assert atlas.pixels[:4] == bytes((10, 20, 30, 255))


def test_load_atlas_missing_file(tmp_path):
    with pytest.raises(OSError, match="could not load atlas"):
        load_atlas(tmp_path / "missing.png")


def test_load_atlas_not_an_image(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"not an image")
    with pytest.raises(OSError, match="could not load atlas"):
        load_atlas(path)