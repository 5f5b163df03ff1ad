"""Keyboard handling for the wireframe view: pan, zoom, height scale and quit."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from fdfkit.input import Key
from fdfkit.window import Window

WHITE = 0xFFFFFFFF

PAN_STEP = 3
ZOOM_STEP = 3
SCALE_STEP = 0.1
MIN_ZOOM = 1


@dataclass
class ViewState:
    """How the map is shown: zoom, height scale, window size and centre."""

    zoom_level: int = 1
    scale_factor: float = 1.0
    x_window_size: int = 0
    y_window_size: int = 0
    x_center: int = 0
    y_center: int = 0


Redraw = Callable[[ViewState], None]


def _pan(view: ViewState, window: Window) -> bool:
    moves = (
        (Key.W, -PAN_STEP, -PAN_STEP),
        (Key.A, -PAN_STEP, PAN_STEP),
        (Key.S, PAN_STEP, PAN_STEP),
        (Key.D, PAN_STEP, -PAN_STEP),
    )
    changed = False
    for key, dx, dy in moves:
        if window.is_key_down(key):
            view.x_center += dx
            view.y_center += dy
            changed = True
    return changed


def _zoom(view: ViewState, window: Window) -> bool:
    changed = False
    if window.is_key_down(Key.UP):
        view.zoom_level += ZOOM_STEP
        changed = True
    if window.is_key_down(Key.DOWN):
        view.zoom_level = max(view.zoom_level - ZOOM_STEP, MIN_ZOOM)
        changed = True
    return changed


def _scale(view: ViewState, window: Window) -> bool:
    changed = False
    if window.is_key_down(Key.KP_ADD):
        view.scale_factor += SCALE_STEP
        changed = True
    if window.is_key_down(Key.KP_SUBTRACT):
        view.scale_factor -= SCALE_STEP
        changed = True
    return changed


def keyboard_control(view: ViewState, window: Window, redraw: Redraw) -> bool:
    """Apply the held keys to ``view`` and redraw after each kind of change.

    Escape terminates the window and raises ``SystemExit(0)``. Panning,
    zooming and scaling each trigger their own call to ``redraw(view)``.
    Returns whether anything changed.
    """
    if window.is_key_down(Key.ESCAPE):
        window.terminate()
        raise SystemExit(0)
    changed = False
    for step in (_pan, _zoom, _scale):
        if step(view, window):
            redraw(view)
            changed = True
    return changed