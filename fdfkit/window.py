"""A virtual window that holds images, runs loop hooks and composites frames."""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from enum import IntEnum

from fdfkit.errors import ErrorCode, MlxError
from fdfkit.images import BPP, Image, Instance, Texture
from fdfkit.input import Cursor, InputState, MouseMode
from fdfkit.renderqueue import DrawCall, RenderQueue

DONT_CARE = -1

# Virtual displays reported by get_monitor_size, as (width, height).
MONITORS: list[tuple[int, int]] = [(1920, 1080)]

_CLEAR_PIXEL = bytes((51, 51, 51, 255))


class Setting(IntEnum):
    """Global options read when a window is created or drawn."""

    STRETCH_IMAGE = 0
    FULLSCREEN = 1
    MAXIMIZED = 2
    DECORATED = 3
    HEADLESS = 4


_settings: dict[Setting, bool] = {
    Setting.STRETCH_IMAGE: False,
    Setting.FULLSCREEN: False,
    Setting.MAXIMIZED: False,
    Setting.DECORATED: True,
    Setting.HEADLESS: False,
}


def set_setting(setting: Setting | int, value: bool) -> None:
    """Change a global setting; it affects windows created afterwards."""
    try:
        key = Setting(setting)
    except ValueError:
        raise ValueError(f"invalid settings value: {setting!r}") from None
    _settings[key] = bool(value)


def get_monitor_size(index: int) -> tuple[int, int]:
    """Return the size of a monitor, or (0, 0) when there is no such monitor."""
    if index < 0:
        raise ValueError("index out of bounds")
    if index >= len(MONITORS):
        return (0, 0)
    return MONITORS[index]


def _require_callable(func: object) -> None:
    if not callable(func):
        raise TypeError(f"hook must be callable, got {func!r}")


def _blend(src: bytes, dst: bytes) -> bytes:
    """Blend RGBA rows with source-alpha / one-minus-source-alpha weights."""
    alphas = (a for a in src[3::4] for _ in range(BPP))
    return bytes(
        (s * a + d * (255 - a) + 127) // 255 for s, d, a in zip(src, dst, alphas)
    )


def _blit(surface: Image, image: Image, x: int, y: int) -> None:
    left = max(x, 0)
    top = max(y, 0)
    right = min(x + image.width, surface.width)
    bottom = min(y + image.height, surface.height)
    if left >= right or top >= bottom:
        return
    span = (right - left) * BPP
    opaque = b"\xff" * (right - left)
    for row in range(top, bottom):
        src_at = ((row - y) * image.width + (left - x)) * BPP
        dst_at = (row * surface.width + left) * BPP
        src = bytes(image.pixels[src_at:src_at + span])
        alphas = src[3::4]
        if alphas == opaque:
            surface.pixels[dst_at:dst_at + span] = src
        elif alphas.count(0) == len(alphas):
            continue
        else:
            dst = bytes(surface.pixels[dst_at:dst_at + span])
            surface.pixels[dst_at:dst_at + span] = _blend(src, dst)


class Window:
    """A window with images, draw calls, hooks and input state.

    Frames are composited into ``framebuffer`` instead of being shown on a
    screen. Usable as a context manager that terminates it on exit.
    """

    def __init__(self, width: int, height: int, title: str, resize: bool = False) -> None:
        if not isinstance(title, str):
            raise TypeError("title must be a string")
        if width <= 0:
            raise ValueError("window width must be positive")
        if height <= 0:
            raise ValueError("window height must be positive")
        self.width = width
        self.height = height
        self.initial_width = width
        self.initial_height = height
        self.title = title
        self.resizable = bool(resize)
        self.fullscreen = _settings[Setting.FULLSCREEN]
        self.maximized = _settings[Setting.MAXIMIZED]
        self.decorated = _settings[Setting.DECORATED]
        self.visible = not _settings[Setting.HEADLESS]
        self.position: tuple[int, int] = (0, 0)
        self.limits: tuple[int, int, int, int] = (DONT_CARE,) * 4
        self.icon: Texture | None = None
        self.cursor: Cursor | None = None
        self.cursor_mode = MouseMode.NORMAL
        self.focused = False
        self.input = InputState()
        self.images: list[Image] = []
        self.render_queue = RenderQueue()
        self.zdepth = 0
        self.delta_time = 0.0
        self.framebuffer: Image | None = None
        self._hooks: list[Callable[[], None]] = []
        self._close_hook: Callable[[], None] | None = None
        self._resize_hook: Callable[[int, int], None] | None = None
        self._sort_pending = False
        self._should_close = False
        self._terminated = False
        self._start = time.monotonic()

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._terminated:
            self.terminate()

    def __repr__(self) -> str:
        return f"Window({self.width}x{self.height}, title={self.title!r})"

    def _check_alive(self) -> None:
        if self._terminated:
            raise RuntimeError("window has been terminated")

    # Images

    def new_image(self, width: int, height: int) -> Image:
        """Create a blank image owned by this window."""
        self._check_alive()
        image = Image(width, height)
        self.images.insert(0, image)
        return image

    def image_to_window(self, image: Image, x: int, y: int) -> int:
        """Place a new instance of ``image`` at (x, y); return its index."""
        self._check_alive()
        index = image.add_instance(x, y, self.zdepth)
        self.zdepth += 1
        self._sort_pending = True
        self.render_queue.push_front(DrawCall(image, index))
        return index

    def delete_image(self, image: Image) -> None:
        """Remove an image and all of its draw calls from the window."""
        self._check_alive()
        self.render_queue.remove_image(image)
        self.images = [owned for owned in self.images if owned is not image]

    def texture_to_image(self, texture: Texture) -> Image:
        """Create an image owned by this window from a texture's pixels."""
        self._check_alive()
        image = Image.from_texture(texture)
        self.images.insert(0, image)
        return image

    def set_instance_depth(self, instance: Instance, zdepth: int) -> None:
        """Change an instance's depth; the queue is resorted before the next draw."""
        if instance.z == zdepth:
            return
        instance.z = zdepth
        self._sort_pending = True

    # Loop

    def loop_hook(self, func: Callable[[], None]) -> bool:
        """Add a function called with no arguments once per frame."""
        self._check_alive()
        _require_callable(func)
        self._hooks.append(func)
        return True

    def _run_hooks(self) -> None:
        for hook in self._hooks:
            if self._should_close:
                break
            hook()

    def render(self) -> Image:
        """Composite every enabled instance into ``framebuffer`` and return it."""
        self._check_alive()
        if self._sort_pending:
            self._sort_pending = False
            self.render_queue.sort()
        stretch = _settings[Setting.STRETCH_IMAGE]
        width = self.initial_width if stretch else self.width
        height = self.initial_height if stretch else self.height
        surface = Image(width, height)
        surface.pixels = bytearray(_CLEAR_PIXEL * (width * height))
        for call in self.render_queue:
            instance = call.instance()
            if call.image.enabled and instance.enabled:
                _blit(surface, call.image, instance.x, instance.y)
        if stretch:
            surface.resize(self.width, self.height)
        self.framebuffer = surface
        return surface

    def loop(self) -> None:
        """Run frames until the window is asked to close."""
        self._check_alive()
        previous = 0.0
        while not self._should_close:
            now = self.get_time()
            self.delta_time = now - previous
            previous = now
            self._run_hooks()
            self.render()

    def close_window(self) -> None:
        """Ask the loop to stop after the current frame."""
        self._should_close = True

    def request_close(self) -> None:
        """Act as if the user closed the window: set the flag, then call the close hook."""
        self._should_close = True
        if self._close_hook:
            self._close_hook()

    def should_close(self) -> bool:
        """Return whether the window has been asked to close."""
        return self._should_close

    def terminate(self) -> None:
        """Release every image, draw call and hook; the window is unusable afterwards."""
        self._check_alive()
        self._hooks.clear()
        self.render_queue = RenderQueue()
        self.images.clear()
        self.framebuffer = None
        self._terminated = True

    def projection_matrix(self) -> tuple[float, ...]:
        """Return the column-major orthographic projection used to place images."""
        depth = float(self.zdepth)
        stretch = _settings[Setting.STRETCH_IMAGE]
        width = float(self.initial_width if stretch else self.width)
        height = float(self.initial_height if stretch else self.height)
        span = depth - -depth
        if span:
            z_scale = -2.0 / span
            z_offset = -((depth + -depth) / span)
        else:
            z_scale = -math.inf
            z_offset = math.nan
        return (
            2.0 / width, 0.0, 0.0, 0.0,
            0.0, 2.0 / -height, 0.0, 0.0,
            0.0, 0.0, z_scale, 0.0,
            -1.0, -(height / -height), z_offset, 1.0,
        )

    # Window properties

    def close_hook(self, func: Callable[[], None]) -> None:
        """Call ``func()`` when the user closes the window."""
        _require_callable(func)
        self._close_hook = func

    def resize_hook(self, func: Callable[[int, int], None]) -> None:
        """Call ``func(width, height)`` whenever the window changes size."""
        _require_callable(func)
        self._resize_hook = func

    def _clamp(self, value: int, low: int, high: int) -> int:
        if low != DONT_CARE:
            value = max(value, low)
        if high != DONT_CARE:
            value = min(value, high)
        return value

    def set_window_size(self, width: int, height: int) -> None:
        """Resize the window, honouring any size limits."""
        if width <= 0 or height <= 0:
            raise MlxError(ErrorCode.INVDIM, f"{width}x{height}")
        min_w, min_h, max_w, max_h = self.limits
        self.width = self._clamp(width, min_w, max_w)
        self.height = self._clamp(height, min_h, max_h)
        if self._resize_hook:
            self._resize_hook(self.width, self.height)

    def set_window_pos(self, x: int, y: int) -> None:
        """Move the window."""
        self.position = (x, y)

    def get_window_pos(self) -> tuple[int, int]:
        """Return the window's position."""
        return self.position

    def set_window_limit(self, min_w: int, min_h: int, max_w: int, max_h: int) -> None:
        """Set size limits; DONT_CARE (-1) leaves a bound open."""
        self.limits = (min_w, min_h, max_w, max_h)

    def set_window_title(self, title: str) -> None:
        """Change the window's title."""
        if not isinstance(title, str):
            raise TypeError("title must be a string")
        self.title = title

    def set_icon(self, texture: Texture) -> None:
        """Use a texture as the window icon."""
        self.icon = texture

    def set_cursor(self, cursor: Cursor) -> None:
        """Use ``cursor`` while over the window."""
        self.cursor = cursor

    def set_cursor_mode(self, mode: MouseMode | int) -> None:
        """Set how the cursor behaves over the window."""
        self.cursor_mode = MouseMode(mode)

    def set_mouse_pos(self, x: int, y: int) -> None:
        """Move the cursor to (x, y)."""
        self.input.cursor_position = (float(x), float(y))

    def get_mouse_pos(self) -> tuple[int, int]:
        """Return the cursor position truncated to whole pixels."""
        x, y = self.input.cursor_position
        return (int(x), int(y))

    def is_key_down(self, key: int) -> bool:
        """Return whether a key is held."""
        return self.input.is_key_down(key)

    def is_mouse_down(self, button: int) -> bool:
        """Return whether a mouse button is held."""
        return self.input.is_mouse_down(button)

    def focus(self) -> None:
        """Give the window input focus."""
        self.focused = True

    def get_time(self) -> float:
        """Return the seconds elapsed since the window was created."""
        return time.monotonic() - self._start