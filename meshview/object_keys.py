"""Keyboard actions that move, turn and resize the selected object."""

from __future__ import annotations

import math
from enum import Enum, auto

from meshview.geometry import Vec3
from meshview.scene import Flag, Scene, SceneObject

STEP = 1.0
ANGLE = math.radians(5.0)
SCALE = 0.1
MIN_AXIS = 0.1
MAX_AXIS = 10.0

_X_AXIS = Vec3(1.0, 0.0, 0.0)
_Y_AXIS = Vec3(0.0, 1.0, 0.0)
_Z_AXIS = Vec3(0.0, 0.0, 1.0)


class Key(Enum):
    """Keys the viewer responds to."""

    A = auto()
    D = auto()
    S = auto()
    W = auto()
    Z = auto()
    E = auto()
    KP_1 = auto()
    KP_2 = auto()
    KP_4 = auto()
    KP_6 = auto()
    KP_8 = auto()
    KP_9 = auto()
    KP_ADD = auto()
    KP_SUBTRACT = auto()
    TAB = auto()
    ESCAPE = auto()


_MOVES = {
    Key.A: Vec3(-STEP, 0.0, 0.0),
    Key.D: Vec3(STEP, 0.0, 0.0),
    Key.S: Vec3(0.0, -STEP, 0.0),
    Key.W: Vec3(0.0, STEP, 0.0),
    Key.Z: Vec3(0.0, 0.0, -STEP),
    Key.E: Vec3(0.0, 0.0, STEP),
}

# Keypad key -> (basis axis, grow with shift?, rotation angle, rotation axis).
_KEYPAD = {
    Key.KP_4: ("i", True, ANGLE, _Y_AXIS),
    Key.KP_6: ("i", False, -ANGLE, _Y_AXIS),
    Key.KP_8: ("j", True, ANGLE, _X_AXIS),
    Key.KP_2: ("j", False, -ANGLE, _X_AXIS),
    Key.KP_9: ("k", True, ANGLE, _Z_AXIS),
    Key.KP_1: ("k", False, -ANGLE, _Z_AXIS),
}


def _length(obj: SceneObject, name: str) -> float:
    return getattr(obj.basis, name).length()


def _resize(obj: SceneObject, name: str, length: float) -> None:
    setattr(obj.basis, name, getattr(obj.basis, name).resized(length))


def _grow(obj: SceneObject, name: str) -> None:
    if _length(obj, name) < MAX_AXIS:
        _resize(obj, name, _length(obj, name) + SCALE)
    if _length(obj, name) < MIN_AXIS:
        _resize(obj, name, MIN_AXIS)


def _shrink(obj: SceneObject, name: str) -> None:
    if _length(obj, name) > MIN_AXIS:
        _resize(obj, name, _length(obj, name) - SCALE)
    if _length(obj, name) > MAX_AXIS:
        _resize(obj, name, MAX_AXIS)


def handle_move_key(scene: Scene, key: Key, shift: bool) -> None:
    """Move the selected object one step along a world axis unless shift is held."""
    obj = scene.selected()
    offset = _MOVES.get(key)
    if offset is not None and not shift:
        obj.basis.origin = obj.basis.origin + offset
    obj.flags |= Flag.CHANGE


def handle_keypad(scene: Scene, key: Key, shift: bool) -> None:
    """Turn the selected object, or with shift resize one of its axes; +/- scale all."""
    obj = scene.selected()
    if key in _KEYPAD:
        name, grow, angle, axis = _KEYPAD[key]
        if shift:
            (_grow if grow else _shrink)(obj, name)
        else:
            obj.basis.rotate(angle, axis)
    elif key is Key.KP_SUBTRACT:
        for name in ("i", "j", "k"):
            _resize(obj, name, _length(obj, name) - SCALE)
        for name in ("i", "j", "k"):
            if _length(obj, name) < MIN_AXIS:
                _resize(obj, name, MIN_AXIS)
    elif key is Key.KP_ADD:
        scale = SCALE * 1000 if shift else SCALE
        for name in ("i", "j", "k"):
            _resize(obj, name, _length(obj, name) + scale)
    obj.flags |= Flag.CHANGE


def next_object(scene: Scene) -> None:
    """Select the next object, wrapping round to the first."""
    scene.selected_index += 1
    if scene.selected_index >= len(scene.objects):
        scene.selected_index = 0


def close(scene: Scene) -> None:
    """Mark the scene's window as closed."""
    scene.is_open = False