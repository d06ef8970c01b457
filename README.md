# voxelcore

The world-side core of a voxel engine. It has no rendering code and no windowing code, so you can use it in tools, in servers and in tests.

## Modules

- `voxelcore.dataformat` parses the engine's `.data` files. These are `key : value` documents, and a value can be any of:
  - an integer or a float;
  - a string or a bool;
  - a bare tag (`Tag`);
  - an integer or float range (`1..4` gives `IntRange`, `0.5..2.0` gives `FloatRange`);
  - a typed array such as `int[1, 2]` or `tag[a, b]` (`TypedArray`);
  - a nested `{ ... }` object (`Object`);
  - a key chord such as `<LC+s>` (`Keybind`).

  Parse text with `parse_string` and files with `parse_file`. Both return a `Document`, and `Document.get(key)` looks up a value. On bad input both raise `ParseError`, and the message gives the line number.
- `voxelcore.atlas` loads an image as an RGBA `AtlasTexture` with `load_atlas`. `AtlasTexture.tile_uv(tile_x, tile_y)` returns the texture coordinates of a 32-pixel tile.
- `voxelcore.keybinds` covers key input:
  - `Scancode` values, `KeyChord`, and `Keybinds`, which holds the default chord for every action;
  - token conversion in both directions with `key_token_to_scancode` and `scancode_to_key_token`;
  - chord matching against a collection of held scancodes with `chord_held` and `chord_pressed`;
  - formatting with `chord_to_data_string` and `chord_to_display_string`;
  - keybind files with `load_keybinds` and `save_keybinds`. Any action a file does not set keeps its default.
- `voxelcore.hotbar` provides a nine-slot `Hotbar`. Selection wraps around at both ends, and `current_block_id()` returns 0 when the selected slot is empty.
- `voxelcore.camera` provides a yaw/pitch `Camera`. It gives:
  - a forward vector;
  - a look-at view matrix, as four rows;
  - keyboard fly movement (WASD, space for up, left ctrl for down);
  - mouse look, with pitch clamped to ±1.5 rad.
- `voxelcore.chunk` provides a 16×16×16 `Chunk` that stores blocks and tracks whether its mesh is out of date. `Chunk.build_mesh` greedy-meshes the visible faces into `MeshData`.
- `voxelcore.raycast` has:
  - ray/box intersection (`intersect_ray_aabb`);
  - face picking (`hit_face_index`);
  - the geometry for the cube wireframe and the face outlines (`wireframe_edges`, `face_outline`);
  - the mesh of a single block (`float_block_vertices`).
- `voxelcore.grid` provides the chunked world `Grid`, which can:
  - add and remove blocks, count them and iterate over them;
  - cast rays to find the looked-at block (`Grid.find_looked_at`, `Grid.query_looked_at`);
  - build per-chunk meshes keyed by chunk origin (`Grid.chunk_meshes`).

  The block registry you pass in only needs a `get(block_id)` method.
- `voxelcore.filedialog` opens a native file or folder picker through zenity or kdialog (`open_file_dialog`, `open_folder_dialog`). It returns the chosen path. If neither tool is installed, or the user cancels, it returns `None`. `shell_quote` quotes text for a POSIX shell.

## Example

```python
from voxelcore.dataformat import parse_string
from voxelcore.grid import Grid

doc = parse_string("gravity : -9.81\njump : <SP>\n")
print(doc.get("gravity"))          # -9.81

grid = Grid()
grid.add_block(0, 0, 0, 1)
grid.add_block(1, 0, 0, 1)
print(grid.block_count())          # 2

hit = grid.find_looked_at((-3.0, 0.0, 0.0), (1.0, 0.0, 0.0), 8.0)
print(hit.hit, hit.block_pos, hit.face_index)   # True (0, 0, 0) 1
```

## What it does not do

This package is not a playable game. The following are not included:

- a window, a renderer or a game loop;
- physics, player movement or collision;
- terrain generation;
- block or biome registries loaded from data files;
- world saving and loading;
- menus;
- a command to run.

Meshes come back as plain vertex and index lists. Drawing them is up to the caller.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```