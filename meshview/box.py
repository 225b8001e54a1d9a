"""Eight-cornered boxes around objects, with their twelve triangles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from meshview.geometry import Triangle, Vec3

# Corner indices of the twelve triangles covering a box.
BOX_TRIANGLES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 3),
    (1, 2, 3),
    (2, 3, 6),
    (3, 6, 7),
    (0, 3, 4),
    (3, 4, 7),
    (0, 1, 4),
    (1, 4, 5),
    (1, 5, 6),
    (1, 2, 6),
    (4, 5, 6),
    (4, 6, 7),
)


@dataclass(frozen=True)
class Box:
    """A box given by its eight corners."""

    corners: tuple[Vec3, ...]

    def __post_init__(self) -> None:
        if len(self.corners) != 8:
            raise ValueError(f"a box has 8 corners, got {len(self.corners)}")

    def triangles(self) -> list[Triangle]:
        """The twelve triangles that make up the box surface."""
        return [
            Triangle(self.corners[a], self.corners[b], self.corners[c])
            for a, b, c in BOX_TRIANGLES
        ]


def box_from_min_max(low: Vec3, high: Vec3) -> Box:
    """Box whose lower corners mirror ``low`` and upper corners mirror ``high``."""
    return Box(
        (
            Vec3(low.x, low.y, low.z),
            Vec3(low.x, low.y, -low.z),
            Vec3(-low.x, low.y, -low.z),
            Vec3(-low.x, low.y, low.z),
            Vec3(-high.x, high.y, -high.z),
            Vec3(-high.x, high.y, high.z),
            Vec3(high.x, high.y, high.z),
            Vec3(high.x, high.y, -high.z),
        )
    )


def bounding_box(points: Iterable[Vec3]) -> Box:
    """Box built from the component-wise minimum and maximum of ``points``."""
    iterator = iter(points)
    try:
        low = high = next(iterator)
    except StopIteration:
        raise ValueError("cannot bound an empty set of points") from None
    for point in iterator:
        low = low.minimum(point)
        high = high.maximum(point)
    return box_from_min_max(low, high)


def centered_box(half_width: float, half_height: float) -> Box:
    """Box centred on the origin, ``half_height`` along y and ``half_width`` along x and z."""
    w, h = half_width, half_height
    return Box(
        (
            Vec3(w, h, w),
            Vec3(-w, h, w),
            Vec3(-w, h, -w),
            Vec3(w, h, -w),
            Vec3(w, -h, w),
            Vec3(-w, -h, w),
            Vec3(-w, -h, -w),
            Vec3(w, -h, -w),
        )
    )