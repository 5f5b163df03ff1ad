"""Keyboard, mouse and cursor state with event hooks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from fdfkit.errors import ErrorCode, MlxError
from fdfkit.images import Texture

_KEY_CODES: dict[str, int] = {
    "SPACE": 32,
    "APOSTROPHE": 39,
    "COMMA": 44,
    "MINUS": 45,
    "PERIOD": 46,
    "SLASH": 47,
    "SEMICOLON": 59,
    "EQUAL": 61,
    "LEFT_BRACKET": 91,
    "BACKSLASH": 92,
    "RIGHT_BRACKET": 93,
    "GRAVE_ACCENT": 96,
    "ESCAPE": 256,
    "ENTER": 257,
    "TAB": 258,
    "BACKSPACE": 259,
    "INSERT": 260,
    "DELETE": 261,
    "RIGHT": 262,
    "LEFT": 263,
    "DOWN": 264,
    "UP": 265,
    "PAGE_UP": 266,
    "PAGE_DOWN": 267,
    "HOME": 268,
    "END": 269,
    "CAPS_LOCK": 280,
    "SCROLL_LOCK": 281,
    "NUM_LOCK": 282,
    "PRINT_SCREEN": 283,
    "PAUSE": 284,
    "KP_DECIMAL": 330,
    "KP_DIVIDE": 331,
    "KP_MULTIPLY": 332,
    "KP_SUBTRACT": 333,
    "KP_ADD": 334,
    "KP_ENTER": 335,
    "KP_EQUAL": 336,
    "LEFT_SHIFT": 340,
    "LEFT_CONTROL": 341,
    "LEFT_ALT": 342,
    "LEFT_SUPER": 343,
    "RIGHT_SHIFT": 344,
    "RIGHT_CONTROL": 345,
    "RIGHT_ALT": 346,
    "RIGHT_SUPER": 347,
    "MENU": 348,
}
_KEY_CODES.update({f"DIGIT_{n}": 48 + n for n in range(10)})
_KEY_CODES.update({chr(code): code for code in range(ord("A"), ord("Z") + 1)})
_KEY_CODES.update({f"F{n}": 289 + n for n in range(1, 26)})
_KEY_CODES.update({f"KP_{n}": 320 + n for n in range(10)})

Key = IntEnum("Key", _KEY_CODES, module=__name__)
Key.__doc__ = "Keyboard key codes."


class Action(IntEnum):
    """What happened to a key or button."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class MouseButton(IntEnum):
    """Mouse button codes."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class MouseMode(IntEnum):
    """How the cursor behaves over the window."""

    NORMAL = 0x00034001
    HIDDEN = 0x00034002
    DISABLED = 0x00034003


class CursorShape(IntEnum):
    """Standard system cursor shapes."""

    ARROW = 0x00036001
    IBEAM = 0x00036002
    CROSSHAIR = 0x00036003
    HAND = 0x00036004
    HRESIZE = 0x00036005
    VRESIZE = 0x00036006


@dataclass(frozen=True)
class Cursor:
    """A cursor, either a standard shape or built from a texture."""

    shape: CursorShape | None = None
    texture: Texture | None = None


@dataclass(frozen=True)
class KeyEvent:
    """Data passed to the key hook."""

    key: int
    action: Action
    os_key: int = 0
    modifier: int = 0


def create_std_cursor(shape: CursorShape | int) -> Cursor:
    """Return a standard cursor; VRESIZE and anything outside the range are refused."""
    if not CursorShape.ARROW <= shape < CursorShape.VRESIZE:
        raise ValueError(f"invalid standard cursor type: {shape!r}")
    return Cursor(shape=CursorShape(shape))


def create_cursor(texture: Texture) -> Cursor:
    """Return a cursor drawn from a texture."""
    needed = texture.width * texture.height * texture.bytes_per_pixel
    if texture.width <= 0 or texture.height <= 0 or len(texture.pixels) < needed:
        raise MlxError(ErrorCode.MEMFAIL, "cursor texture is unusable")
    return Cursor(texture=texture)


def _require_callable(func: object) -> None:
    if not callable(func):
        raise TypeError(f"hook must be callable, got {func!r}")


class InputState:
    """Tracks pressed keys, pressed buttons and the cursor, firing hooks on change."""

    def __init__(self) -> None:
        self._keys: set[int] = set()
        self._buttons: set[int] = set()
        self.cursor_position: tuple[float, float] = (0.0, 0.0)
        self._key_hook: Callable[[KeyEvent], None] | None = None
        self._mouse_hook: Callable[[int, Action, int], None] | None = None
        self._scroll_hook: Callable[[float, float], None] | None = None
        self._cursor_hook: Callable[[float, float], None] | None = None

    def press(self, key: int) -> None:
        """Mark a key as down; a key already down is reported as a repeat."""
        code = int(key)
        action = Action.REPEAT if code in self._keys else Action.PRESS
        self._keys.add(code)
        if self._key_hook:
            self._key_hook(KeyEvent(code, action))

    def release(self, key: int) -> None:
        """Mark a key as up; releasing a key that is not down does nothing."""
        code = int(key)
        if code not in self._keys:
            return
        self._keys.discard(code)
        if self._key_hook:
            self._key_hook(KeyEvent(code, Action.RELEASE))

    def is_key_down(self, key: int) -> bool:
        """Return whether a key is currently held."""
        return int(key) in self._keys

    def press_button(self, button: int) -> None:
        """Mark a mouse button as down."""
        code = int(button)
        self._buttons.add(code)
        if self._mouse_hook:
            self._mouse_hook(code, Action.PRESS, 0)

    def release_button(self, button: int) -> None:
        """Mark a mouse button as up; releasing one that is not down does nothing."""
        code = int(button)
        if code not in self._buttons:
            return
        self._buttons.discard(code)
        if self._mouse_hook:
            self._mouse_hook(code, Action.RELEASE, 0)

    def is_mouse_down(self, button: int) -> bool:
        """Return whether a mouse button is currently held."""
        return int(button) in self._buttons

    def move_cursor(self, x: float, y: float) -> None:
        """Move the cursor and report the new position."""
        self.cursor_position = (float(x), float(y))
        if self._cursor_hook:
            self._cursor_hook(float(x), float(y))

    def scroll(self, dx: float, dy: float) -> None:
        """Report a scroll by the given offsets."""
        if self._scroll_hook:
            self._scroll_hook(float(dx), float(dy))

    def set_key_hook(self, func: Callable[[KeyEvent], None]) -> None:
        """Call ``func(event)`` on every key press, repeat and release."""
        _require_callable(func)
        self._key_hook = func

    def set_mouse_hook(self, func: Callable[[int, Action, int], None]) -> None:
        """Call ``func(button, action, modifier)`` on every button change."""
        _require_callable(func)
        self._mouse_hook = func

    def set_scroll_hook(self, func: Callable[[float, float], None]) -> None:
        """Call ``func(dx, dy)`` on every scroll."""
        _require_callable(func)
        self._scroll_hook = func

    def set_cursor_hook(self, func: Callable[[float, float], None]) -> None:
        """Call ``func(x, y)`` on every cursor move."""
        _require_callable(func)
        self._cursor_hook = func