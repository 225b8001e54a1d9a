import math

import pytest

from meshview.box import centered_box
from meshview.geometry import Vec3
from meshview.shapes import make_cone, make_cylinder


def _axis_distance(v: Vec3) -> float:
    return math.hypot(v.x, v.z)


def test_cone_apex_and_base_centre():
    mesh = make_cone(2.0, 3.0, 30)
    assert mesh.vertices[0] == Vec3(0.0, 1.5, 0.0)
    assert mesh.vertices[1] == Vec3(0.0, -1.5, 0.0)


def test_cone_face_count():
    mesh = make_cone(2.0, 3.0, 30)
    assert len(mesh.faces) == 24


def test_cone_ring_lies_on_base_circle():
    mesh = make_cone(4.0, 2.0, 45)
    for vertex in mesh.vertices[2:]:
        assert _axis_distance(vertex) == pytest.approx(2.0)
        assert vertex.y == pytest.approx(-1.0)


def test_cone_faces_meet_apex_or_base_centre():
    mesh = make_cone(2.0, 2.0, 60)
    half = len(mesh.faces) // 2
    assert all(face.vertices[2] == 0 for face in mesh.faces[:half])
    assert all(face.vertices[2] == 1 for face in mesh.faces[half:])


def test_cone_normals():
    mesh = make_cone(2.0, 2.0, 45)
    half = len(mesh.faces) // 2
    for face in mesh.faces[:half]:
        for index in face.normals:
            normal = mesh.normals[index]
            assert normal.length() == pytest.approx(1.0)
            assert normal.y == 0.0
    for face in mesh.faces[half:]:
        assert all(mesh.normals[i] == Vec3(0.0, -1.0, 0.0) for i in face.normals)


def test_cone_box():
    mesh = make_cone(2.0, 4.0, 90)
    assert mesh.box == centered_box(1.0, 2.0)


def test_cylinder_counts():
    mesh = make_cylinder(2.0, 2.0, 90)
    assert len(mesh.vertices) == 26
    assert len(mesh.faces) == 32


def test_cylinder_uses_every_vertex():
    mesh = make_cylinder(2.0, 4.0, 30)
    used = {index for face in mesh.faces for index in face.vertices}
    assert used == set(range(len(mesh.vertices)))


def test_cylinder_vertices_on_surface():
    mesh = make_cylinder(3.0, 5.0, 20)
    for vertex in mesh.vertices[2:]:
        assert _axis_distance(vertex) == pytest.approx(1.5)
    assert mesh.vertices[0] == Vec3(0.0, 2.5, 0.0)
    assert mesh.vertices[1] == Vec3(0.0, -2.5, 0.0)


def test_cylinder_face_normals_follow_vertices():
    mesh = make_cylinder(2.0, 3.0, 45)
    assert all(face.normals == face.vertices for face in mesh.faces)
    assert len(mesh.normals) == len(mesh.vertices)


def test_cylinder_cap_normals():
    mesh = make_cylinder(2.0, 2.0, 45)
    size = 360 // 45
    top_cap = mesh.faces[-2 * size:-size]
    bottom_cap = mesh.faces[-size:]
    for face in top_cap:
        assert all(mesh.normals[i] == Vec3(0.0, 1.0, 0.0) for i in face.normals)
        assert face.vertices[2] == 0
    for face in bottom_cap:
        assert all(mesh.normals[i] == Vec3(0.0, -1.0, 0.0) for i in face.normals)
        assert face.vertices[2] == 1


def test_cylinder_edge_is_uniform_chord():
    mesh = make_cylinder(2.0, 2.0, 30)
    size = 360 // 30
    ring = mesh.vertices[2:2 + size]
    for k in range(size - 1):
        assert (ring[k] - ring[k + 1]).length() == pytest.approx(mesh.edge)


def test_triangles_match_faces():
    mesh = make_cylinder(2.0, 2.0, 60)
    triangles = mesh.triangles()
    assert len(triangles) == len(mesh.faces)
    for triangle, face in zip(triangles, mesh.faces):
        assert triangle.vertices == tuple(mesh.vertices[i] for i in face.vertices)


def test_cylinder_box():
    mesh = make_cylinder(6.0, 2.0, 90)
    assert mesh.box == centered_box(3.0, 1.0)
    assert mesh.radius == 3.0
    assert mesh.half_height == 1.0


@pytest.mark.parametrize("step", [0, -10, 400])
def test_bad_angle_step(step):
    with pytest.raises(ValueError):
        make_cone(2.0, 2.0, step)
    with pytest.raises(ValueError):
        make_cylinder(2.0, 2.0, step)


def test_cylinder_zero_diameter():
    with pytest.raises(ValueError):
        make_cylinder(0.0, 2.0, 30)


def test_cylinder_too_short():
    with pytest.raises(ValueError):
        make_cylinder(2.0, 0.1, 30)