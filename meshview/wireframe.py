"""Wireframe overlays: RGBA images and projected segments for debug drawing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from meshview.camera import Camera, Pixel
from meshview.geometry import Triangle, Vec3

BYTES_PER_PIXEL = 4

TRANSPARENT = 0x00000000
BVH_BOX_COLOR = 0x70C795E8
AXIS_X_COLOR = 0xFF0000FF
AXIS_Y_COLOR = 0xFF00FF00
AXIS_Z_COLOR = 0xFFFF0000

# Corner index pairs forming the twelve edges of a box from ``box_corners``.
BOX_EDGES: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (0, 4), (1, 5), (2, 6), (3, 7),
    (4, 5), (5, 6), (6, 7), (7, 4),
)

Segment = tuple[Pixel, Pixel]


@dataclass
class Image:
    """A ``width`` x ``height`` image stored as RGBA bytes, row by row."""

    width: int
    height: int
    data: bytearray = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("image size must be positive")
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise ValueError(f"image data must hold {expected} bytes, got {len(self.data)}")

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) lies outside a {self.width}x{self.height} image")
        return (y * self.width + x) * BYTES_PER_PIXEL

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` (0xRRGGBBAA) at column ``x``, row ``y``."""
        offset = self._offset(x, y)
        self.data[offset:offset + BYTES_PER_PIXEL] = (color & 0xFFFFFFFF).to_bytes(4, "big")

    def pixel(self, x: int, y: int) -> int:
        """The colour (0xRRGGBBAA) at column ``x``, row ``y``."""
        offset = self._offset(x, y)
        return int.from_bytes(self.data[offset:offset + BYTES_PER_PIXEL], "big")


def create_image(width: int, height: int, color: int = TRANSPARENT) -> Image:
    """A new image with every pixel set to ``color``."""
    if width <= 0 or height <= 0:
        raise ValueError("image size must be positive")
    fill = (color & 0xFFFFFFFF).to_bytes(4, "big")
    return Image(width, height, bytearray(fill * (width * height)))


def box_corners(box_min: Vec3, box_max: Vec3) -> tuple[Vec3, ...]:
    """The eight corners of an axis-aligned box, bottom face first."""
    lo, hi = box_min, box_max
    return (
        lo,
        Vec3(hi.x, lo.y, lo.z),
        Vec3(hi.x, lo.y, hi.z),
        Vec3(lo.x, lo.y, hi.z),
        Vec3(lo.x, hi.y, lo.z),
        Vec3(hi.x, hi.y, lo.z),
        hi,
        Vec3(lo.x, hi.y, hi.z),
    )


def box_segments(
    camera: Camera, box_min: Vec3, box_max: Vec3, color: int = BVH_BOX_COLOR
) -> list[Segment]:
    """Projected edges of an axis-aligned box given in camera space."""
    pixels = [camera.project(corner, color) for corner in box_corners(box_min, box_max)]
    return [(pixels[a], pixels[b]) for a, b in BOX_EDGES]


def triangle_segments(camera: Camera, triangle: Triangle, color: int) -> list[Segment]:
    """Projected outline of a camera-space triangle: ab, bc, ca."""
    a, b, c = (camera.project(vertex, color) for vertex in triangle.vertices)
    return [(a, b), (b, c), (c, a)]


def axis_segments(
    camera: Camera, origin: Vec3, x_end: Vec3, y_end: Vec3, z_end: Vec3
) -> list[Segment]:
    """Projected x, y and z axes from ``origin``, coloured per axis."""
    segments = []
    for end, color in ((x_end, AXIS_X_COLOR), (y_end, AXIS_Y_COLOR), (z_end, AXIS_Z_COLOR)):
        segments.append((camera.project(origin, color), camera.project(end, color)))
    return segments


def normal_segments(
    camera: Camera,
    vertices: Sequence[Vec3],
    normals: Sequence[Vec3],
    length: float,
    color: int,
) -> list[Segment]:
    """Projected normals of ``length`` drawn from each camera-space vertex."""
    if len(vertices) != len(normals):
        raise ValueError("every vertex needs exactly one normal")
    return [
        (camera.project(vertex, color), camera.project(vertex + normal.resized(length), color))
        for vertex, normal in zip(vertices, normals)
    ]


def draw_vertex(image: Image, camera: Camera, point: Vec3, color: int) -> bool:
    """Plot a camera-space point; return whether it landed visibly on the image."""
    try:
        pixel = camera.project(point, color)
    except ValueError:
        return False
    if (
        pixel.w <= 0
        or pixel.z <= 0
        or pixel.x < 0
        or pixel.y < 0
        or pixel.x >= image.width
        or pixel.y >= image.height
    ):
        return False
    image.set_pixel(pixel.x, pixel.y, pixel.color)
    return True


def draw_vertices(image: Image, camera: Camera, points: Iterable[Vec3], color: int) -> int:
    """Plot every point; return how many were visible."""
    return sum(draw_vertex(image, camera, point, color) for point in points)