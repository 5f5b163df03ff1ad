import pytest

from fdfkit.errors import ErrorCode, MlxError
from fdfkit.images import Texture
from fdfkit.input import (
    Action,
    CursorShape,
    InputState,
    Key,
    KeyEvent,
    MouseButton,
    create_cursor,
    create_std_cursor,
)


def test_letter_keys_use_their_character_codes():
    state = InputState()
    events = []
    state.set_key_hook(events.append)
    state.press(Key.W)
    state.press(Key.DIGIT_5)
    assert state.is_key_down(ord("W"))
    assert state.is_key_down(ord("5"))
    assert [e.key for e in events] == [ord("W"), ord("5")]


def test_press_and_release_track_state():
    state = InputState()
    state.press(Key.W)
    assert state.is_key_down(Key.W)
    assert not state.is_key_down(Key.S)
    state.release(Key.W)
    assert not state.is_key_down(Key.W)


def test_key_hook_reports_press_repeat_release():
    state = InputState()
    events = []
    state.set_key_hook(events.append)
    state.press(Key.ESCAPE)
    state.press(Key.ESCAPE)
    state.release(Key.ESCAPE)
    assert [e.action for e in events] == [Action.PRESS, Action.REPEAT, Action.RELEASE]
    assert events[0] == KeyEvent(Key.ESCAPE, Action.PRESS, 0, 0)


def test_release_of_unpressed_key_is_silent():
    state = InputState()
    events = []
    state.set_key_hook(events.append)
    state.release(Key.A)
    assert events == []


def test_mouse_buttons_and_hook():
    state = InputState()
    calls = []
    state.set_mouse_hook(lambda button, action, mods: calls.append((button, action, mods)))
    state.press_button(MouseButton.LEFT)
    assert state.is_mouse_down(MouseButton.LEFT)
    state.release_button(MouseButton.LEFT)
    assert not state.is_mouse_down(MouseButton.LEFT)
    assert calls == [(MouseButton.LEFT, Action.PRESS, 0), (MouseButton.LEFT, Action.RELEASE, 0)]


def test_cursor_moves_and_hook():
    state = InputState()
    seen = []
    state.set_cursor_hook(lambda x, y: seen.append((x, y)))
    state.move_cursor(12, 34)
    assert state.cursor_position == (12.0, 34.0)
    assert seen == [(12.0, 34.0)]


def test_scroll_hook_receives_offsets():
    state = InputState()
    seen = []
    state.set_scroll_hook(lambda dx, dy: seen.append((dx, dy)))
    state.scroll(0, -1.5)
    assert seen == [(0.0, -1.5)]


@pytest.mark.parametrize(
    "setter", ["set_key_hook", "set_mouse_hook", "set_scroll_hook", "set_cursor_hook"]
)
def test_hooks_must_be_callable(setter):
    with pytest.raises(TypeError):
        getattr(InputState(), setter)(None)


def test_standard_cursor_shapes():
    assert create_std_cursor(CursorShape.HAND).shape is CursorShape.HAND
    with pytest.raises(ValueError):
        create_std_cursor(CursorShape.VRESIZE)
    with pytest.raises(ValueError):
        create_std_cursor(0)


def test_texture_cursor():
    texture = Texture(2, 2, bytearray(16))
    assert create_cursor(texture).texture is texture
    with pytest.raises(MlxError) as info:
        create_cursor(Texture(2, 2, bytearray(3)))
    assert info.value.code is ErrorCode.MEMFAIL