"""Keyboard and scroll actions that steer the camera and switch overlays."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from meshview.geometry import Vec3
from meshview.object_keys import ANGLE, MIN_AXIS, SCALE, STEP
from meshview.scene import Flag, Scene

# Requests handed back to the display by ``handle_function_key``.
TOGGLE_PROJECTION = "toggle_projection"
TOGGLE_BACKGROUND = "toggle_background"
TOGGLE_RAY_IMAGE = "toggle_ray_image"
RENDER = "render"

# Arrow key -> camera-space step for a shifted press.
_ARROW_STEPS = {
    "right": (STEP, 0.0),
    "left": (-STEP, 0.0),
    "up": (0.0, STEP),
    "down": (0.0, -STEP),
}

# Function key -> flag toggled on the view, or on the selected object with shift.
_FLAG_KEYS = {
    "f1": Flag.DRAW_BOX,
    "f2": Flag.DRAW_AXIS,
    "f3": Flag.DRAW_NORM,
    "f4": Flag.DRAW_LINE,
    "f5": Flag.DRAW_OBJ,
}

# Function key -> request for the display, regardless of shift.
_REQUEST_KEYS = {
    "f6": TOGGLE_PROJECTION,
    "f10": TOGGLE_BACKGROUND,
    "f11": TOGGLE_RAY_IMAGE,
    "f12": RENDER,
}


def _key_name(key: str) -> str:
    return key.strip().lower()


def handle_arrow(scene: Scene, key: str, shift: bool) -> None:
    """Turn the camera with an arrow key; with shift, step its origin instead.

    ``key`` is one of ``"right"``, ``"left"``, ``"up"`` or ``"down"``; any
    other key only marks the camera as changed.
    """
    camera = scene.camera
    name = _key_name(key)
    if name in _ARROW_STEPS:
        if shift:
            dx, dy = _ARROW_STEPS[name]
            x, y, z, _ = camera.ivm @ np.array((dx, dy, 0.0, 1.0))
            camera.basis.origin = Vec3(float(x), float(y), float(z))
        else:
            basis = camera.basis
            turns: dict[str, tuple[float, Vec3]] = {
                "right": (ANGLE, basis.j),
                "left": (-ANGLE, basis.j),
                "up": (ANGLE, basis.i),
                "down": (-ANGLE, basis.i),
            }
            angle, axis = turns[name]
            basis.rotate(angle, axis)
    camera.changed = True


def handle_function_key(scene: Scene, key: str, shift: bool) -> Optional[str]:
    """Act on a function key ``"f1"`` to ``"f12"``.

    F1 to F5 toggle the box, axis, normal, line and object overlays of the
    view, or of the selected object when shift is held; F7 toggles the BVH
    overlay. F6, F10, F11 and F12 leave the scene alone and return the
    request the display should carry out. Otherwise ``None`` is returned.
    """
    name = _key_name(key)
    if name in _FLAG_KEYS:
        flag = _FLAG_KEYS[name]
        if shift:
            obj = scene.selected()
            obj.flags ^= flag
        else:
            scene.view_flags ^= flag
        return None
    if name == "f7":
        scene.view_flags ^= Flag.DRAW_BVH
        return None
    return _REQUEST_KEYS.get(name)


def _resize_axes(scene: Scene, delta: float) -> None:
    basis = scene.camera.basis
    basis.i = basis.i.resized(basis.i.length() + delta)
    basis.j = basis.j.resized(basis.j.length() + delta)
    basis.k = basis.k.resized(basis.k.length() + delta)


def _zoom(scene: Scene, fov_delta: float, after: Optional[Callable[[], None]] = None) -> None:
    camera = scene.camera
    camera.changed = True
    if camera.perspective:
        camera.set_perspective(camera.fov + fov_delta)
        return
    _resize_axes(scene, -fov_delta * SCALE)
    if after is not None:
        after()


def zoom_in(scene: Scene) -> None:
    """Narrow the field of view by a degree, or enlarge the axes without perspective."""
    _zoom(scene, -1.0)


def zoom_out(scene: Scene) -> None:
    """Widen the field of view by a degree, or shrink the axes without perspective.

    After shrinking, an axis with any negative component is set to the
    minimum axis length.
    """

    def clamp() -> None:
        basis = scene.camera.basis
        if not basis.is_non_negative(0):
            basis.i = basis.i.resized(MIN_AXIS)
        if not basis.is_non_negative(1):
            basis.j = basis.j.resized(MIN_AXIS)
        if not basis.is_non_negative(2):
            basis.k = basis.k.resized(MIN_AXIS)

    _zoom(scene, 1.0, clamp)