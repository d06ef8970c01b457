"""Core world, input and data-file handling for a chunked voxel engine."""

__version__ = "0.1.0"
__all__ = [
    "atlas",
    "camera",
    "chunk",
    "dataformat",
    "filedialog",
    "grid",
    "hotbar",
    "keybinds",
    "raycast",
]