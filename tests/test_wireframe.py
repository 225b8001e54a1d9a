from collections import Counter

import pytest

from meshview.camera import create_camera
from meshview.geometry import Triangle, Vec3
from meshview.wireframe import (
    AXIS_X_COLOR,
    AXIS_Y_COLOR,
    AXIS_Z_COLOR,
    BVH_BOX_COLOR,
    Image,
    axis_segments,
    box_corners,
    box_segments,
    create_image,
    draw_vertex,
    draw_vertices,
    normal_segments,
    triangle_segments,
)


@pytest.fixture
def camera():
    cam = create_camera(Vec3(), Vec3(0.0, 0.0, 1.0), 70.0, 100, 80)
    cam.set_identity_projection()
    return cam


def test_create_image_fills_with_color():
    image = create_image(4, 3, 0x11223344)
    assert (image.width, image.height) == (4, 3)
    assert all(image.pixel(x, y) == 0x11223344 for x in range(4) for y in range(3))


def test_create_image_byte_order_is_rgba():
    image = create_image(2, 1, 0x11223344)
    assert bytes(image.data[:4]) == bytes([0x11, 0x22, 0x33, 0x44])
    assert len(image.data) == 2 * 1 * 4


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
def test_create_image_rejects_bad_size(width, height):
    with pytest.raises(ValueError):
        create_image(width, height)


def test_image_rejects_wrong_data_length():
    with pytest.raises(ValueError):
        Image(2, 2, bytearray(3))


def test_set_pixel_round_trip_leaves_others():
    image = create_image(3, 3, 0)
    image.set_pixel(1, 2, 0xAABBCCDD)
    assert image.pixel(1, 2) == 0xAABBCCDD
    assert image.pixel(2, 1) == 0


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 3)])
def test_pixel_out_of_range(x, y):
    image = create_image(3, 3)
    with pytest.raises(IndexError):
        image.set_pixel(x, y, 1)
    with pytest.raises(IndexError):
        image.pixel(x, y)


def test_box_corners_extremes_and_distinct():
    low, high = Vec3(-1.0, -2.0, -3.0), Vec3(4.0, 5.0, 6.0)
    corners = box_corners(low, high)
    assert len(set(corners)) == 8
    assert corners[0] == low
    assert corners[6] == high
    for corner in corners:
        assert {corner.x} <= {low.x, high.x}
        assert {corner.y} <= {low.y, high.y}
        assert {corner.z} <= {low.z, high.z}


def test_box_segments_each_corner_on_three_edges(camera):
    low, high = Vec3(-10.0, -10.0, 5.0), Vec3(10.0, 15.0, 9.0)
    segments = box_segments(camera, low, high)
    assert len(segments) == 12
    counts = Counter()
    for start, end in segments:
        counts[(start.x, start.y, start.z)] += 1
        counts[(end.x, end.y, end.z)] += 1
        assert start.color == BVH_BOX_COLOR
    assert sorted(counts.values()) == [3] * 8


def test_triangle_segments_form_closed_loop(camera):
    tri = Triangle(Vec3(1.0, 2.0, 3.0), Vec3(-4.0, 5.0, 6.0), Vec3(7.0, -8.0, 9.0))
    segments = triangle_segments(camera, tri, 0x12345678)
    assert len(segments) == 3
    for k in range(3):
        assert segments[k][1] == segments[(k + 1) % 3][0]
    assert segments[0][0] == camera.project(tri.a, 0x12345678)


def test_axis_segments_colors(camera):
    origin = Vec3(0.0, 0.0, 5.0)
    segments = axis_segments(
        camera, origin, Vec3(1.0, 0.0, 5.0), Vec3(0.0, 1.0, 5.0), Vec3(0.0, 0.0, 6.0)
    )
    colors = [(s.color, e.color) for s, e in segments]
    assert colors == [
        (AXIS_X_COLOR, AXIS_X_COLOR),
        (AXIS_Y_COLOR, AXIS_Y_COLOR),
        (AXIS_Z_COLOR, AXIS_Z_COLOR),
    ]
    starts = {(s.x, s.y, s.z) for s, _ in segments}
    assert len(starts) == 1


def test_normal_segments_end_at_scaled_normal(camera):
    vertices = [Vec3(1.0, 1.0, 5.0), Vec3(-3.0, 2.0, 7.0)]
    normals = [Vec3(0.0, 2.0, 0.0), Vec3(3.0, 0.0, 4.0)]
    segments = normal_segments(camera, vertices, normals, 10.0, 0xFF)
    assert len(segments) == 2
    for (start, end), vertex, normal in zip(segments, vertices, normals):
        assert start == camera.project(vertex, 0xFF)
        assert end == camera.project(vertex + normal.resized(10.0), 0xFF)


def test_normal_segments_length_mismatch(camera):
    with pytest.raises(ValueError):
        normal_segments(camera, [Vec3()], [], 1.0, 0)


def test_draw_vertex_visible_sets_pixel(camera):
    image = create_image(100, 80, 0)
    point = Vec3(3.0, -4.0, 5.0)
    assert draw_vertex(image, camera, point, 0xCAFEBABE) is True
    pixel = camera.project(point, 0xCAFEBABE)
    assert image.pixel(pixel.x, pixel.y) == 0xCAFEBABE


def test_draw_vertex_behind_camera_is_skipped(camera):
    image = create_image(100, 80, 0)
    before = bytes(image.data)
    assert draw_vertex(image, camera, Vec3(0.0, 0.0, -1.0), 0xFFFFFFFF) is False
    assert draw_vertex(image, camera, Vec3(0.0, 0.0, 0.0), 0xFFFFFFFF) is False
    assert bytes(image.data) == before


def test_draw_vertex_off_screen_is_skipped(camera):
    image = create_image(100, 80, 0)
    before = bytes(image.data)
    assert draw_vertex(image, camera, Vec3(1000.0, 0.0, 5.0), 0xFFFFFFFF) is False
    assert draw_vertex(image, camera, Vec3(0.0, -1000.0, 5.0), 0xFFFFFFFF) is False
    assert bytes(image.data) == before


def test_draw_vertices_counts_visible(camera):
    image = create_image(100, 80, 0)
    points = [Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -5.0), Vec3(500.0, 0.0, 5.0)]
    assert draw_vertices(image, camera, points, 0xFF) == 1