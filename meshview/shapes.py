"""Triangle meshes for cones and cylinders standing on the y axis."""

from __future__ import annotations

import math
from dataclasses import dataclass

from meshview.box import Box, centered_box
from meshview.geometry import Triangle, Vec3

UP = Vec3(0.0, 1.0, 0.0)
DOWN = Vec3(0.0, -1.0, 0.0)


@dataclass(frozen=True)
class Face:
    """A triangle given by indices into a mesh's vertex and normal lists."""

    vertices: tuple[int, int, int]
    normals: tuple[int, int, int]


@dataclass(frozen=True)
class Mesh:
    """Vertices, normals and faces of a shape, with its bounding box."""

    vertices: tuple[Vec3, ...]
    normals: tuple[Vec3, ...]
    faces: tuple[Face, ...]
    box: Box
    radius: float
    half_height: float
    edge: float = 0.0

    def triangles(self) -> list[Triangle]:
        """The faces as triangles of actual vertex positions."""
        return [
            Triangle(*(self.vertices[index] for index in face.vertices))
            for face in self.faces
        ]


def _segments(angle_step: float) -> int:
    if angle_step <= 0:
        raise ValueError("angle step must be positive")
    size = int(360 // angle_step)
    if size < 1:
        raise ValueError("angle step must not exceed 360 degrees")
    return size


def _circle(radius: float, angle_step: float, size: int) -> list[tuple[float, float]]:
    return [
        (radius * math.cos(math.radians(angle_step * k)),
         radius * math.sin(math.radians(angle_step * k)))
        for k in range(size)
    ]


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _ring_faces(
    size: int, first: int, second: int, apex: int
) -> list[tuple[int, int, int]]:
    return [(first + i, first + (i + 1) % size, apex) for i in range(size)] + [
        (second + i, second + (i + 1) % size, apex + 1) for i in range(size)
    ]


def make_cone(diameter: float, height: float, angle_step: float) -> Mesh:
    """A cone with its apex at +height/2 and its base circle at -height/2."""
    size = _segments(angle_step)
    radius = diameter * 0.5
    half = height * 0.5
    circle = _circle(radius, angle_step, size)
    ring = [Vec3(x, -half, z) for x, z in circle]
    radial = [Vec3(x, 0.0, z).unit() for x, z in circle]
    vertices = [Vec3(0.0, half, 0.0), Vec3(0.0, -half, 0.0), *ring]
    normals = [UP, DOWN, *radial, *radial]
    side_normals = size + 2
    faces: list[Face] = []
    for i in range(size):
        j = (i + 1) % size
        faces.append(
            Face((2 + i, 2 + j, 0), (side_normals + i, side_normals + j, side_normals + j))
        )
    for i in range(size):
        j = (i + 1) % size
        faces.append(Face((2 + i, 2 + j, 1), (1, 1, 1)))
    return Mesh(
        vertices=tuple(vertices),
        normals=tuple(normals),
        faces=tuple(faces),
        box=centered_box(radius, half),
        radius=radius,
        half_height=half,
    )


def make_cylinder(diameter: float, height: float, angle_step: float) -> Mesh:
    """A capped cylinder of the given size, its side cut into horizontal bands.

    Every vertex carries its own normal: caps point up or down, the side
    points away from the axis.
    """
    size = _segments(angle_step)
    radius = diameter * 0.5
    half = height * 0.5
    if radius <= 0:
        raise ValueError("cylinder diameter must be positive")
    count = int(_round_half_away(half * 2.0 / radius) + 1)
    if count < 2:
        raise ValueError("cylinder is too short for its diameter")
    step = half * 2.0 / count

    circle = _circle(radius, angle_step, size)
    radial = [Vec3(x, 0.0, z).unit() for x, z in circle]
    top = [Vec3(x, half, z) for x, z in circle]
    bottom = [Vec3(x, -half, z) for x, z in circle]

    vertices = [Vec3(0.0, half, 0.0), Vec3(0.0, -half, 0.0), *top, *bottom, *top, *bottom]
    normals = [UP, DOWN, *([UP] * size), *([DOWN] * size), *radial, *radial]
    for band in range(1, count):
        y = half - (step * band + 1)
        vertices.extend(Vec3(x, y, z) for x, z in circle)
        normals.extend(radial)
    edge = (vertices[2] - vertices[3]).length()

    top_cap, bottom_cap = 2, 2 + size
    top_side, bottom_side = 2 + 2 * size, 2 + 3 * size

    def ring(band: int) -> int:
        return 2 + 4 * size + (band - 1) * size

    triples: list[tuple[int, int, int]] = []
    for band in range(1, count - 1):
        a, b = ring(band), ring(band + 1)
        triples.extend((a + i, a + (i + 1) % size, b + i) for i in range(size))
        triples.extend((b + i, b + (i + 1) % size, a + (i + 1) % size) for i in range(size))

    first, last = ring(1), ring(count - 1)
    previous = [(p - 1) % size for p in range(size)]
    triples.extend((top_side + i, top_side + p, first + i) for p, i in enumerate(previous))
    triples.extend((first + i, first + p, top_side + p) for p, i in enumerate(previous))
    triples.extend((last + i, last + p, bottom_side + i) for p, i in enumerate(previous))
    triples.extend((bottom_side + i, bottom_side + p, last + p) for p, i in enumerate(previous))

    triples.extend(_ring_faces(size, top_cap, bottom_cap, 0))

    return Mesh(
        vertices=tuple(vertices),
        normals=tuple(normals),
        faces=tuple(Face(triple, triple) for triple in triples),
        box=centered_box(radius, half),
        radius=radius,
        half_height=half,
        edge=edge,
    )