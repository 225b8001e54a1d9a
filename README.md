# meshview

A small toolkit for triangle-mesh scenes: immutable 3D vectors and
triangles, coordinate bases and rotations, a pinhole camera with view and
projection matrices, a bounding volume hierarchy for ray queries, generated
cone and cylinder meshes, wireframe segment builders with an in-memory RGBA
image, and a scene model driven by keyboard actions.

## Installation

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Modules

| Module | What it provides |
| --- | --- |
| `meshview.geometry` | `Vec3`, `Triangle`, `centroids` |
| `meshview.basis` | `Basis`, `basis_from_normal`, `camera_basis_from_normal`, `rotation_matrix`, `rotate_vector` |
| `meshview.bvh` | `BVH`, `BVHNode`, `build_bvh`, `build_all`, `intersect_aabb` |
| `meshview.camera` | `Camera`, `Pixel`, `create_camera` |
| `meshview.box` | `Box`, `bounding_box`, `box_from_min_max`, `centered_box` |
| `meshview.shapes` | `Mesh`, `make_cone`, `make_cylinder` |
| `meshview.wireframe` | `Image`, `create_image`, `box_corners`, `box_segments`, `triangle_segments`, `axis_segments`, `normal_segments`, `draw_vertex`, `draw_vertices` |
| `meshview.scene` | `Scene`, `SceneObject`, `Flag`, `SceneError` |
| `meshview.object_keys` | `Key`, `handle_move_key`, `handle_keypad`, `next_object`, `close` |
| `meshview.view_keys` | `handle_arrow`, `handle_function_key`, `zoom_in`, `zoom_out` |

## Examples

Build a cylinder mesh, index it with a BVH and list the triangles in the
leaves whose boxes a ray reaches:

```python
from meshview.geometry import Vec3
from meshview.shapes import make_cylinder
from meshview.bvh import build_bvh

mesh = make_cylinder(diameter=2.0, height=4.0, angle_step=10)
bvh = build_bvh(mesh.triangles())

candidates = list(bvh.traverse(Vec3(0.0, 0.0, -10.0), Vec3(0.0, 0.0, 1.0), 100.0))
triangles = [bvh.triangles[index] for index in candidates]
```

`traverse` yields candidate triangle indices; testing the ray against each
triangle is left to the caller.

Project a point through a camera and plot it:

```python
from meshview.geometry import Vec3
from meshview.camera import create_camera
from meshview.wireframe import create_image, draw_vertex

camera = create_camera(Vec3(0.0, 0.0, -20.0), Vec3(0.0, 0.0, 1.0), 70.0, 640, 480)
image = create_image(640, 480, 0x000000FF)
point = camera.to_camera_space(Vec3(0.0, 0.0, 0.0))
visible = draw_vertex(image, camera, point, 0xFFFFFFFF)
```

A new camera uses the identity projection until `refresh_projection` (or
`set_perspective`) is called; `Scene.update_camera` does this for you.

Keep a scene in camera space:

```python
from meshview.scene import Scene, SceneObject

scene = Scene(camera=camera, objects=[SceneObject(vertices=tuple(mesh.vertices))])
scene.apply_changes()
projected = [camera.project(v, 0xFFFFFFFF) for v in scene.selected().camera_vertices]
```

## Keyboard actions

`meshview.object_keys` acts on the selected object of a `Scene`:
`handle_move_key` steps it along a world axis (`Key.A`/`D`, `S`/`W`, `Z`/`E`),
`handle_keypad` rotates it about a world axis or, with shift, resizes one of
its basis axes, and `Key.KP_ADD`/`Key.KP_SUBTRACT` scale all three axes.
`next_object` moves the selection on, wrapping round, and `close` sets
`Scene.is_open` to `False`.

`meshview.view_keys` takes key names as strings. `handle_arrow` turns the
camera with `"right"`, `"left"`, `"up"` or `"down"`, or with shift moves its
origin. `handle_function_key` toggles `Flag` overlays for `"f1"` to `"f5"`
(on the view, or on the selected object with shift) and `Flag.DRAW_BVH` for
`"f7"`; for `"f6"`, `"f10"`, `"f11"` and `"f12"` it returns a request string
(`TOGGLE_PROJECTION`, `TOGGLE_BACKGROUND`, `TOGGLE_RAY_IMAGE`, `RENDER`) for
the caller to act on. `zoom_in` and `zoom_out` change the field of view by a
degree, or resize the camera axes when perspective is off.

## What this package does not do

There is no window, event loop or command-line program: key handlers only
change a `Scene`, and the requests returned by `handle_function_key` are
for your own display code to carry out. There is no shading or ray-traced
image: nothing answers the `RENDER` request. The wireframe functions return
pairs of projected `Pixel`s but do not draw lines into an `Image`; only
single points are plotted, by `draw_vertex`. Scenes are built in code; no
scene file format is read.