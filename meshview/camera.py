"""A pinhole camera: view matrix, projection matrix and projection to pixels."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from meshview.basis import Basis, camera_basis_from_normal
from meshview.geometry import Vec3

logger = logging.getLogger(__name__)

DEGREES_TO_RADIANS = math.pi / 180.0

MIN_FOV = 1.0
MAX_FOV = 179.0


def _identity() -> np.ndarray:
    return np.identity(4, dtype=float)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


@dataclass(frozen=True)
class Pixel:
    """A projected point: screen position, camera depth, clip ``w`` and colour."""

    x: int
    y: int
    z: float
    w: float
    color: int


@dataclass
class Camera:
    """Camera placed at ``position`` looking along ``basis.k``."""

    basis: Basis
    position: Vec3
    fov: float
    hfov: float
    tng: float
    near: float
    far: float
    right: float
    left: float
    top: float
    bottom: float
    aspect: float
    half_width: float
    half_height: float
    perspective: bool = True
    changed: bool = True
    vm: np.ndarray = field(default_factory=_identity)
    ivm: np.ndarray = field(default_factory=_identity)
    pm: np.ndarray = field(default_factory=_identity)

    def set_view(self) -> None:
        """Rebuild the world-to-camera matrix and its inverse from the basis."""
        vm = np.zeros((4, 4), dtype=float)
        for row, axis in enumerate((self.basis.i, self.basis.j, self.basis.k)):
            vm[row, :3] = (axis.x, axis.y, axis.z)
            vm[row, 3] = -axis.dot(self.position)
        vm[3, 3] = 1.0
        self.vm = vm
        self.ivm = np.linalg.inv(vm)

    def set_identity_projection(self) -> None:
        """Use the identity as the projection matrix."""
        self.pm = _identity()

    def set_perspective(self, fov: float) -> None:
        """Set a perspective projection for ``fov`` degrees.

        A field of view outside 1..179 degrees is ignored and leaves the
        camera unchanged.
        """
        if fov < MIN_FOV or fov > MAX_FOV:
            return
        depth = self.far - self.near
        if depth == 0.0:
            raise ValueError("near and far planes coincide")
        self.fov = fov
        self.hfov = fov * DEGREES_TO_RADIANS
        focal = 1.0 / math.tan(self.hfov * 0.5)
        pm = np.zeros((4, 4), dtype=float)
        pm[0, 0] = focal
        pm[1, 1] = -focal
        pm[2, 2] = -(self.far / depth)
        pm[2, 3] = 1.0
        pm[3, 2] = 1.0 / depth
        self.pm = pm

    def refresh_projection(self, fov: float) -> None:
        """Rebuild the projection: perspective when enabled, identity otherwise."""
        if not self.perspective:
            self.set_identity_projection()
            return
        if self.far == 0.0:
            self.far = self.near * 2.0
            logger.debug("near = %f; far = %f", self.near, self.far)
        self.set_perspective(fov)

    def to_camera_space(self, point: Vec3) -> Vec3:
        """Transform a world point into camera coordinates."""
        x, y, z, _ = self.vm @ np.array((point.x, point.y, point.z, 1.0))
        return Vec3(float(x), float(y), float(z))

    def project(self, point: Vec3, color: int) -> Pixel:
        """Project a camera-space point onto the screen."""
        x, y, _, w = self.pm @ np.array((point.x, point.y, point.z, 1.0))
        w = float(w)
        if w == 0.0:
            raise ValueError("point projects to infinity (w is zero)")
        return Pixel(
            x=int(_round_half_away(float(x) / w) + self.right),
            y=int(_round_half_away(float(y) / w) + self.top),
            z=point.z,
            w=w,
            color=color,
        )


def create_camera(center: Vec3, normal: Vec3, fov: float, width: int, height: int) -> Camera:
    """Camera at ``center`` looking along ``normal`` for a ``width`` x ``height`` screen."""
    if width <= 0 or height <= 0:
        raise ValueError("screen size must be positive")
    basis = camera_basis_from_normal(normal.unit())
    hfov = fov * DEGREES_TO_RADIANS
    tng = math.tan(hfov * 0.5)
    right = width * 0.5
    top = height * 0.5
    aspect = width / height
    camera = Camera(
        basis=basis,
        position=center,
        fov=fov,
        hfov=hfov,
        tng=tng,
        near=right / tng,
        far=0.0,
        right=right,
        left=-right,
        top=top,
        bottom=-top,
        aspect=aspect,
        half_width=hfov,
        half_height=hfov / aspect,
    )
    camera.set_view()
    return camera