"""Three-component vectors and triangles used throughout the viewer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator

# Factor used to average three vertices into a centroid.
CENTROID_FACTOR = 0.3333


@dataclass(frozen=True)
class Vec3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, axis: int) -> float:
        return (self.x, self.y, self.z)[axis]

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, factor: float) -> Vec3:
        return self.scaled(factor)

    __rmul__ = __mul__

    def dot(self, other: Vec3) -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Vector product."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Euclidean magnitude."""
        return math.sqrt(self.dot(self))

    def unit(self) -> Vec3:
        """The vector scaled to length one; a zero vector stays zero."""
        return self.resized(1.0)

    def scaled(self, factor: float) -> Vec3:
        """Every component multiplied by ``factor``."""
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def resized(self, length: float) -> Vec3:
        """The vector with its direction kept and its magnitude set to ``length``."""
        current = self.length()
        if current == 0.0:
            return self
        return self.scaled(length / current)

    def minimum(self, other: Vec3) -> Vec3:
        """Component-wise minimum."""
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def maximum(self, other: Vec3) -> Vec3:
        """Component-wise maximum."""
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))


@dataclass(frozen=True)
class Triangle:
    """A triangle given by its three vertices."""

    a: Vec3
    b: Vec3
    c: Vec3

    @property
    def vertices(self) -> tuple[Vec3, Vec3, Vec3]:
        return (self.a, self.b, self.c)

    def centroid(self) -> Vec3:
        """Average of the three vertices."""
        return (self.a + (self.b + self.c)).scaled(CENTROID_FACTOR)


def centroids(triangles: Iterable[Triangle]) -> list[Vec3]:
    """Centroids of ``triangles`` in the same order."""
    return [triangle.centroid() for triangle in triangles]