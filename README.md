# pixed

Building blocks for a raster pixel editor, in plain Python. Pillow is the
only dependency; it is used to write GIF files.

## Modules

- `pixed.platform`: the `Key` enum (with `Key.from_char` and
  `is_modifier`), `InputState`, `MouseButton` and `OtherMouseButton`,
  `ModifiersState`, `KeyboardInput`, window hints (`Resizable`, `Visible`),
  `GraphicsContext`, logical and physical sizes and positions, and a family
  of `WindowEvent` classes (`Resized`, `CursorMoved`, `MouseInput`,
  `KeyboardEvent`, `ScaleFactorChanged`, ...) with `is_input()`.
  `pixel_ratio()` returns the scale factor on macOS and `1.0` elsewhere.
  `LogicalSize.to_tuple()` and `PhysicalSize.to_tuple()` round rather than
  truncate.
- `pixed.pixels`: `Rgba8`, `Bgra8` and `Rgb8` colours with packing to and
  from 32-bit words, `Rgba8.parse` for `#rrggbb` and `#rrggbbaa`, and
  `PixelView` / `PixelViewMut` views over flat row-major pixel lists.
  Offsets outside the buffer give `None` from `get` and are ignored by `set`.
- `pixed.resources`: `Pixels` buffers in RGBA or BGRA order, zlib-compressed
  `Snapshot`s forming an undo history per view (`ViewResources`), `Resources`
  keyed by view id, and a `ResourceManager` that can save a view as an SVG
  (one rectangle per non-transparent pixel) or as a looping animated GIF
  (one image per frame of the view).
- `pixed.palette`: a `Palette` of unique colours laid out in columns of
  cells, with `handle_cursor_moved` to find the colour under the cursor.
- `pixed.parser`: parsers for pieces of a command language. Each takes a
  string and returns `(value, rest)`, raising `ParseError` on bad input:
  `parse_identifier`, `parse_word`, `parse_comment`, `parse_path` (a leading
  `~` expands to the home directory on POSIX), `parse_paths`, `parse_key`,
  `parse_input_state`, `parse_direction`, `parse_color`, `parse_quoted`,
  `parse_setting` and `parse_tuple`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Colours:

```python
from pixed.pixels import Rgba8

red = Rgba8.parse("#ff0000")
print(red)                  # #ff0000
faded = red.with_alpha(128)
print(faded)                # #ff000080
```

Undo history for a view:

```python
from pixed.pixels import Rgba8
from pixed.resources import Pixels, ResourceManager, ViewExtent

manager = ResourceManager()
pixels = Pixels.from_rgba8([Rgba8(0, 0, 0, 255)] * 4)
manager.add_view(1, 2, 2, 1, pixels)

view = manager.lock().get_view(1)
view.push_snapshot(Pixels.from_rgba8([Rgba8(255, 0, 0, 255)] * 4), ViewExtent(2, 2, 1))
view.prev_snapshot()        # back to the black image
view.next_snapshot()        # forward to the red one

manager.save_view_svg(1, "out.svg")
```

Pushing a snapshot while not at the newest one discards the snapshots after
the current one. `Resources.get_snapshot` raises `KeyError` for an unknown
view. `Resources.get_snapshot_rect` takes a `Rect` whose origin is the
bottom-left corner of the view.

Saving an animation:

```python
from datetime import timedelta

manager.save_view_gif(1, "out.gif", timedelta(milliseconds=100), [Rgba8(255, 0, 0, 255)])
```

The palette is sorted together with a transparent colour at index 0;
pixels not in the palette become transparent. More than 256 colours raises
`ValueError`.

Parsing command arguments:

```python
from pixed.parser import parse_color, parse_key, parse_paths

color, rest = parse_color("#00ff00/0.5")   # alpha 0.5 of 255 -> 127
paths, rest = parse_paths("one.png two.png")
key, rest = parse_key("<ctrl>")
```

Palettes:

```python
from pixed.palette import Palette
from pixed.pixels import Rgba8

palette = Palette(cellsize=24.0, height=16)
palette.add(Rgba8.parse("#ff0000"))
palette.add(Rgba8.parse("#ff0000"))   # duplicates are ignored
len(palette)                          # 1
```

## What this package does not do

It provides data structures and parsers only. There is no window, no
renderer, no event loop, no command-line program, no command interpreter
and no image loading; the window events and keys are plain values for an
application to produce and consume.