# fdfkit

A small, headless graphics toolkit for showing wireframe maps. The whole
rendering model lives in memory, so it needs no display. The model has:

- a window that owns images and runs loop hooks;
- RGBA images, each with any number of placed instances that carry a depth;
- a render queue sorted by depth;
- keyboard, mouse and cursor state with callbacks;
- loaders for XPM42 and PNG textures;
- keyboard controls that pan, zoom and scale a map view.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `fdfkit.window`

`Window(width, height, title, resize=False)` is a virtual window. Frames are
composited into `Window.framebuffer`, an `Image`, and nothing is shown on a
screen. A window can be used as a context manager, and it is terminated when
the block exits.

- `new_image(width, height)` and `texture_to_image(texture)` create images
  that the window owns. `delete_image(image)` removes an image and every draw
  call that uses it.
- `image_to_window(image, x, y)` places a new instance of the image and
  returns the instance's index. Each new instance gets the next depth value.
  `set_instance_depth(instance, z)` changes the depth, and the queue is
  sorted again before the next frame is drawn.
- `loop_hook(func)` registers a function that is called with no arguments
  once per frame. `loop()` runs the hooks and then `render()`, frame after
  frame, until `close_window()` is called. `request_close()` does the same as
  a user closing the window: it sets the close flag and then calls the
  function given to `close_hook`. `should_close()` reports the flag.
- `render()` clears the frame to `(51, 51, 51, 255)`. It then draws every
  enabled instance in queue order and blends each one by its source alpha.
  It returns the frame.
- `projection_matrix()` returns the column-major orthographic matrix, as 16
  floats, that is used to place images.
- `set_window_size` applies the limits given to `set_window_limit` and then
  calls the function given to `resize_hook`. `DONT_CARE` (-1) leaves a limit
  open.
- The window also has `set_window_pos` / `get_window_pos`,
  `set_window_title`, `set_icon`, `set_cursor`, `set_cursor_mode`,
  `set_mouse_pos` / `get_mouse_pos`, `is_key_down`, `is_mouse_down`, `focus`
  and `get_time`. `get_time` returns the seconds since the window was created.
- `terminate()` releases the images, draw calls and hooks. After that, the
  calls that create images, place them, add hooks, run the loop or render
  raise `RuntimeError`.

`set_setting(Setting.X, value)` changes a global option that windows read
when they are created. The options are `STRETCH_IMAGE`, `FULLSCREEN`,
`MAXIMIZED`, `DECORATED` and `HEADLESS`. With `STRETCH_IMAGE` on, frames are
drawn at the window's first size and then scaled to its current size.
`get_monitor_size(index)` reads the entries of `MONITORS`. An index past the
end gives `(0, 0)`, and a negative index raises `ValueError`.

### `fdfkit.images`

- `Image(width, height)` is an RGBA buffer. Each side must be between 1 and
  32767; any other size raises `MlxError` with `ErrorCode.INVDIM`.
  - `put_pixel(x, y, color)` stores a `0xRRGGBBAA` colour, and
    `get_pixel(x, y)` reads one back. A position outside the image raises
    `MlxError` with `ErrorCode.INVPOS`.
  - `resize(width, height)` rescales the buffer with nearest-neighbour
    sampling.
  - `add_instance(x, y, z)` appends an `Instance`.
  - `Image.from_texture(texture)` copies a `Texture` into a new image.
- `encode_pixel(color)` returns the four bytes, R G B A, that are stored for
  a colour.

### `fdfkit.renderqueue`

`RenderQueue` holds `DrawCall(image, instance_id)` entries.

- `push_front(call)` adds a call at the head of the queue.
- `remove_image(image)` removes and returns every call for that image.
- `sort()` orders the calls by ascending depth. Calls with the same depth
  swap their relative order.

### `fdfkit.xpm42`

`load_xpm42(path)` and `read_xpm42(stream)` decode an XPM42 image into an
`Xpm` (`texture`, `color_count`, `cpp`, `mode`). The format is:

```
!XPM42
<width> <height> <colour count> <chars per pixel> <c|m>
<key> #RRGGBBAA          one line per colour
<pixel keys>             one line per row
```

Mode `m` converts colours to grayscale. These errors raise `MlxError`:

| Problem | Error code |
| --- | --- |
| The path does not contain `.xpm42` | `INVEXT` |
| The file cannot be opened | `INVFILE` |
| The data is malformed | `INVXPM` |

### `fdfkit.png`

`load_png(path)` decodes a PNG file with Pillow into an RGBA `Texture`. A
file that is not a valid PNG raises `MlxError` with `ErrorCode.INVPNG`.

### `fdfkit.input`

`InputState` keeps track of the keys and mouse buttons that are held down and
of the cursor position.

- `press`, `release`, `press_button`, `release_button`, `move_cursor` and
  `scroll` change the state.
- They call the functions registered with `set_key_hook`, `set_mouse_hook`,
  `set_cursor_hook` and `set_scroll_hook`.
- Pressing a key that is already down is reported as `Action.REPEAT`.

The module also defines:

- the enums `Key`, `Action`, `MouseButton`, `MouseMode` and `CursorShape`;
- `KeyEvent`;
- `create_std_cursor(shape)` and `create_cursor(texture)`, which return a
  `Cursor`.

### `fdfkit.controls`

`keyboard_control(view, window, redraw)` changes a `ViewState` according to
the keys held in the window:

| Keys | Effect |
| --- | --- |
| W, A, S, D | Pan the centre by 3 pixels on both axes |
| Up / Down | Change the zoom by 3; it never goes below 1 |
| Keypad plus / minus | Change the height scale by 0.1 |
| Escape | Terminate the window and raise `SystemExit(0)` |

Panning, zooming and scaling each call `redraw(view)` when they change
something. The function returns whether anything changed.

### `fdfkit.errors` and `fdfkit.util`

Failures raise `MlxError`, which holds an `ErrorCode` in its `code`
attribute. `strerror(code)` returns the message for a code. `util` provides
`fnv_hash` (64-bit FNV-1a) and `rgba_to_mono`.

## Example

```python
from fdfkit.controls import ViewState, keyboard_control
from fdfkit.input import Key
from fdfkit.window import Window

with Window(400, 400, "map") as win:
    img = win.new_image(200, 200)
    img.put_pixel(10, 10, 0xFF0000FF)
    win.image_to_window(img, 100, 100)

    view = ViewState()
    win.input.press(Key.UP)
    keyboard_control(view, win, lambda v: None)   # view.zoom_level is now 4

    frame = win.render()
    print(hex(frame.get_pixel(110, 110)))          # 0xff0000ff
```

## What it does not do

- It does not open a window on screen and does not read a real keyboard or
  mouse. Input comes from calls on `InputState`, and frames are only
  available as `Image` buffers.
- It has no command-line program.
- It does not read map files, and it does not draw projected wireframe lines
  itself. The `redraw` function passed to `keyboard_control` must supply
  that drawing.