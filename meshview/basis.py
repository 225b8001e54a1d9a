"""Local coordinate bases and the rotations that orient them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from meshview.geometry import Vec3

Matrix3 = tuple[tuple[float, float, float], ...]

IDENTITY: Matrix3 = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))

_TOLERANCE = 1e-6


def _apply(matrix: Matrix3, vector: Vec3) -> Vec3:
    return Vec3(*(row[0] * vector.x + row[1] * vector.y + row[2] * vector.z for row in matrix))


@dataclass
class Basis:
    """Three axis vectors and an origin; the axes may carry a scale."""

    i: Vec3 = field(default_factory=lambda: Vec3(1.0, 0.0, 0.0))
    j: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    k: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 1.0))
    origin: Vec3 = field(default_factory=Vec3)

    @property
    def vectors(self) -> tuple[Vec3, Vec3, Vec3, Vec3]:
        """The axes followed by the origin, indexed 0 to 3."""
        return (self.i, self.j, self.k, self.origin)

    def copy_lengths(self, source: Basis) -> None:
        """Give each axis the length of the matching axis of ``source``."""
        self.i = self.i.resized(source.i.length())
        self.j = self.j.resized(source.j.length())
        self.k = self.k.resized(source.k.length())

    def is_non_negative(self, axis: int) -> bool:
        """True when no component of the vector at ``axis`` is negative."""
        vector = self.vectors[axis]
        return not (vector.x < 0 or vector.y < 0 or vector.z < 0)

    def normalize(self) -> None:
        """Scale every axis to length one."""
        self.i = self.i.unit()
        self.j = self.j.unit()
        self.k = self.k.unit()

    def rotate(self, angle: float, axis: Vec3) -> None:
        """Rotate the axes by ``angle`` radians about ``axis``, keeping their lengths."""
        lengths = (self.i.length(), self.j.length(), self.k.length())
        self.i, self.j, self.k = (
            rotate_vector(vector, angle, axis).resized(length)
            for vector, length in zip((self.i, self.j, self.k), lengths)
        )


def rotation_matrix(source: Vec3, target: Vec3) -> Matrix3:
    """Rotation taking the direction of ``source`` onto that of ``target``.

    The identity is returned when the directions already agree or when
    they are parallel, so that no rotation axis can be found.
    """
    axis = source.cross(target)
    cosine = source.dot(target) / (source.length() * target.length())
    cosine = max(-1.0, min(cosine, 1.0))
    angle = math.acos(cosine)
    if abs(angle) < _TOLERANCE or axis.length() < _TOLERANCE:
        return IDENTITY
    x, y, z = axis.unit()
    sine = math.sin(angle)
    rest = 1.0 - cosine
    return (
        (cosine + x * x * rest, x * y * rest - z * sine, x * z * rest + y * sine),
        (y * x * rest + z * sine, cosine + y * y * rest, y * z * rest - x * sine),
        (z * x * rest - y * sine, z * y * rest + x * sine, cosine + z * z * rest),
    )


def rotate_vector(vector: Vec3, angle: float, axis: Vec3) -> Vec3:
    """Rotate ``vector`` by ``angle`` radians about ``axis`` (right-handed)."""
    if axis.length() == 0.0:
        raise ValueError("rotation axis must not be the zero vector")
    k = axis.unit()
    cosine = math.cos(angle)
    sine = math.sin(angle)
    return (
        vector.scaled(cosine)
        + k.cross(vector).scaled(sine)
        + k.scaled(k.dot(vector) * (1.0 - cosine))
    )


def basis_from_normal(normal: Vec3) -> Basis:
    """Basis whose ``j`` axis points along ``normal``."""
    if normal == Vec3():
        return Basis()
    j = normal.unit()
    matrix = rotation_matrix(Vec3(0.0, 1.0, 0.0), j)
    return Basis(
        i=_apply(matrix, Vec3(1.0, 0.0, 0.0)),
        j=j,
        k=_apply(matrix, Vec3(0.0, 0.0, 1.0)),
    )


def camera_basis_from_normal(normal: Vec3) -> Basis:
    """Basis whose ``k`` axis, the viewing direction, points along ``normal``."""
    if normal == Vec3():
        return Basis()
    k = normal.unit()
    matrix = rotation_matrix(Vec3(0.0, 0.0, 1.0), k)
    return Basis(
        i=_apply(matrix, Vec3(1.0, 0.0, 0.0)),
        j=_apply(matrix, Vec3(0.0, 1.0, 0.0)),
        k=k,
    )