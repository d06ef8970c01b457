"""Texture atlas images and tile UV lookup."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from PIL import Image

TILE_PIXEL_SIZE = 32

_FULL_QUAD_UV = (0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 1.0)


@dataclass
class AtlasTexture:
    """An RGBA atlas image split into square tiles."""

    width: int = 0
    height: int = 0
    pixels: bytes = b""

    def tile_uv(self, tile_x: int, tile_y: int) -> tuple[float, ...]:
        """Return the four (u, v) corners of a tile, flattened to eight floats.

        Corners run bottom-left, bottom-right, top-right, top-left. An atlas
        with no size maps to the whole unit square.
        """
        if self.width <= 0 or self.height <= 0:
            return _FULL_QUAD_UV

        tile_w = TILE_PIXEL_SIZE / self.width
        tile_h = TILE_PIXEL_SIZE / self.height
        u0 = tile_x * tile_w
        v0 = tile_y * tile_h
        u1 = u0 + tile_w
        v1 = v0 + tile_h
        return (u0, v1, u1, v1, u1, v0, u0, v0)


def load_atlas(path: Union[str, Path]) -> AtlasTexture:
    """Load an image file as an RGBA atlas; raise ``OSError`` on failure."""
    try:
        with Image.open(path) as image:
            rgba = image.convert("RGBA")
    except OSError as exc:
        raise OSError(f"could not load atlas '{path}': {exc}") from exc
    return AtlasTexture(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())