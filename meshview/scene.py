"""Scene state: objects, lights and planes kept in step with the camera."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Optional

import numpy as np

from meshview.basis import Basis
from meshview.box import Box
from meshview.camera import Camera
from meshview.geometry import Vec3


class Flag(IntFlag):
    """State and drawing switches carried by objects, the world and the view."""

    CHANGE = 1
    DRAW_OBJ = 2
    DRAW_AXIS = 4
    DRAW_BOX = 8
    DRAW_NORM = 16
    DRAW_LINE = 32
    DRAW_BVH = 64


class SceneError(Exception):
    """Raised when the scene cannot do what was asked of it."""


def _direction_to_camera(camera: Camera, vector: Vec3) -> Vec3:
    x, y, z = camera.vm[:3, :3] @ np.array((vector.x, vector.y, vector.z))
    return Vec3(float(x), float(y), float(z))


@dataclass
class SceneObject:
    """A shape given in object space, placed in the world by its basis.

    ``basis.origin`` is the object's position in the world; the axes
    ``i``, ``j`` and ``k`` orient and scale it.
    """

    vertices: tuple[Vec3, ...]
    normals: tuple[Vec3, ...] = ()
    basis: Basis = field(default_factory=Basis)
    box: Optional[Box] = None
    color: int = 0xFFFFFFFF
    flags: Flag = Flag.CHANGE | Flag.DRAW_OBJ
    world_vertices: list[Vec3] = field(default_factory=list, init=False)
    world_normals: list[Vec3] = field(default_factory=list, init=False)
    world_box: list[Vec3] = field(default_factory=list, init=False)
    world_axes: list[Vec3] = field(default_factory=list, init=False)
    camera_vertices: list[Vec3] = field(default_factory=list, init=False)
    camera_normals: list[Vec3] = field(default_factory=list, init=False)
    camera_box: list[Vec3] = field(default_factory=list, init=False)
    camera_axes: list[Vec3] = field(default_factory=list, init=False)
    camera_origin: Vec3 = field(default_factory=Vec3, init=False)

    def _local(self, point: Vec3) -> Vec3:
        b = self.basis
        return b.i.scaled(point.x) + b.j.scaled(point.y) + b.k.scaled(point.z)

    def _place(self) -> None:
        origin = self.basis.origin
        self.world_vertices = [self._local(v) + origin for v in self.vertices]
        i, j, k = self.basis.i.unit(), self.basis.j.unit(), self.basis.k.unit()
        self.world_normals = [
            (i.scaled(n.x) + j.scaled(n.y) + k.scaled(n.z)).unit() for n in self.normals
        ]
        self.world_box = (
            [self._local(c) + origin for c in self.box.corners] if self.box else []
        )
        self.world_axes = [
            origin,
            origin + self.basis.i,
            origin + self.basis.j,
            origin + self.basis.k,
        ]

    def _view(self, camera: Camera) -> None:
        self.camera_origin = camera.to_camera_space(self.basis.origin)
        self.camera_vertices = [camera.to_camera_space(v) for v in self.world_vertices]
        self.camera_normals = [_direction_to_camera(camera, n) for n in self.world_normals]
        self.camera_box = [camera.to_camera_space(c) for c in self.world_box]
        self.camera_axes = [camera.to_camera_space(a) for a in self.world_axes]


@dataclass
class Scene:
    """Objects, lights and planes seen through one camera."""

    camera: Camera
    objects: list[SceneObject] = field(default_factory=list)
    lights: list[Vec3] = field(default_factory=list)
    planes: list[tuple[Vec3, Vec3]] = field(default_factory=list)
    flags: Flag = Flag(0)
    view_flags: Flag = Flag(0)
    selected_index: int = 0
    is_open: bool = True
    camera_lights: list[Vec3] = field(default_factory=list, init=False)
    camera_planes: list[tuple[Vec3, Vec3]] = field(default_factory=list, init=False)

    def _empty(self) -> bool:
        return not self.objects and not self.planes

    def selected(self) -> SceneObject:
        """The object that the keyboard currently acts on."""
        if not self.objects:
            raise SceneError("the scene holds no objects")
        return self.objects[self.selected_index]

    def apply_changes(self) -> None:
        """Bring every changed object, the world and the camera up to date."""
        if self._empty():
            return
        for obj in self.objects:
            if obj.flags & Flag.CHANGE:
                self.update_object(obj)
        if self.flags & Flag.CHANGE:
            self.update_world()
        if self.camera.changed:
            self.update_world()

    def update_object(self, obj: SceneObject) -> None:
        """Recompute one object's world and camera coordinates."""
        obj._place()
        obj._view(self.camera)
        obj.flags &= ~Flag.CHANGE

    def update_world(self) -> None:
        """Recompute every object, then the camera view."""
        if self._empty():
            return
        for obj in self.objects:
            obj._place()
            obj._view(self.camera)
        self.update_camera()
        self.flags &= ~Flag.CHANGE

    def update_camera(self) -> None:
        """Rebuild the camera matrices and move everything into camera space."""
        camera = self.camera
        camera.set_view()
        camera.refresh_projection(camera.fov)
        if self._empty():
            return
        for obj in self.objects:
            obj._view(camera)
        self.camera_planes = [
            (camera.to_camera_space(point), _direction_to_camera(camera, normal).unit())
            for point, normal in self.planes
        ]
        self.camera_lights = [camera.to_camera_space(light) for light in self.lights]
        camera.changed = False