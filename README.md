# quadkit

Building blocks for an immediate-mode user interface, plus a loader for
maps saved by the Tiled editor in JSON format. Nothing here draws to a
screen: the package computes layout positions, text-editing state, draw
commands and triangle meshes that a renderer of your choice can consume.

## What is inside

- `quadkit.primitives`: `Vec2`, `Rect`, `RectOffset`, `Color`,
  `ElementState`, `Alignment`, `LabelParams` and the draw commands
  (`DrawRect`, `DrawLine`, `DrawSprite`, `DrawTriangle`, `DrawCharacter`,
  `DrawRawTexture`, `Clip`). Every command can be shifted with `offset`.
- `quadkit.cursor`: the layout `Cursor`, its `Scroll` state and the
  `Layout` modes (`Layout.VERTICAL`, `Layout.HORIZONTAL`, or a `Vec2` for a
  free position), which decide where the next widget goes.
- `quadkit.text_editor`: `EditboxState`, the state of a text box: cursor
  movement by characters, words and lines, selection by mouse clicks
  (single, double and triple), and undo/redo. Editing methods take the
  current text and return the edited text.
- `quadkit.mesh`: `Vertex`, `DrawList` and `render_command`, which turn
  draw commands into batched vertices and 16-bit indices, starting a new
  draw list when the clipping zone or texture changes or a batch grows
  past 8000 vertices or 4000 indices.
- `quadkit.style`: `Style`, which resolves text colour, background colour
  and background sprite for an `ElementState`, and sums margins with
  `border_margin`.
- `quadkit.tiled_format`: data classes for the Tiled JSON formats and the
  strict parsers `parse_map` and `parse_tileset`.
- `quadkit.tiled_errors`: `TiledError` and its subclasses `JsonError`,
  `NonUniqueLayerName`, `TextureNotFound` and `LayerTypeNotFound`.
- `quadkit.tilemap`: `load_map`, which builds a `Map` of named `Layer`s and
  `TileSet`s, with `tiles`, `get_tile` and `contains_layer`.

## Installing

```
pip install .
```

## Editing text

```python
from quadkit.text_editor import EditboxState

state = EditboxState()
text = state.insert_character("", "h")
text = state.insert_character(text, "i")   # "hi"
text = state.undo(text)                    # "h"
text = state.redo(text)                    # "hi"

state.select_all(text)
print(state.selected_text(text))           # "hi"
text = state.delete_selected(text)         # ""
```

## Laying out widgets

```python
from quadkit.cursor import Cursor, Layout
from quadkit.primitives import Rect, Vec2

cursor = Cursor(Rect(0, 0, 200, 100), margin=2)
first = cursor.fit(Vec2(50, 20), Layout.VERTICAL)    # Vec2(2, 2)
second = cursor.fit(Vec2(50, 20), Layout.VERTICAL)   # Vec2(2, 24)
free = cursor.fit(Vec2(10, 10), Vec2(100, 5))        # placed at (100, 5)
```

Call `cursor.reset()` at the start of each frame.

## Building meshes

```python
from quadkit.mesh import render_command
from quadkit.primitives import Color, DrawRect, Rect

draw_lists = []
render_command(
    draw_lists,
    DrawRect(Rect(10, 10, 40, 20), Rect(0, 0, 1, 1), fill=Color.from_rgba(255, 0, 0, 255)),
)
batch = draw_lists[-1]
print(len(batch.vertices), batch.indices)   # 4 [0, 1, 2, 0, 2, 3]
```

## Loading a Tiled map

```python
from quadkit.tilemap import load_map

with open("level.json") as handle:
    level = load_map(handle.read(), {"tiles.png": my_texture})

for x, y, tile in level.tiles("ground"):
    if tile is not None:
        print(x, y, tile.tileset, tile.id)
```

`textures` maps the image names used in the JSON to any texture object you
like; `external_tilesets` maps tileset `source` names to their JSON text.
Both may be mappings or sequences of `(name, value)` pairs. Missing
textures, layers with duplicate names or of unknown types, and malformed
JSON raise subclasses of `quadkit.tiled_errors.TiledError`.

## What this package does not do

- It does not render anything, open windows or load fonts or images; the
  texture objects you pass in are only stored and compared.
- It has no keyboard or mouse event handling: nothing turns key presses
  into calls on `EditboxState`, and there are no ready-made widgets
  (buttons, edit boxes, windows). You call the editing and layout methods
  yourself.

## Running the tests

```
pip install .[test]
pytest
```