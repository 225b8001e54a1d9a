"""Bounding volume hierarchy over a triangle mesh."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence

from meshview.geometry import Triangle, Vec3, centroids

# Direction components smaller than this are nudged away from zero.
EPSILON = 1e-6

_FAR = 1e30


@dataclass
class BVHNode:
    """A node covering ``count`` triangles starting at ``first`` in the order list.

    Interior nodes have ``count == 0`` and children at ``left`` and ``left + 1``.
    """

    first: int
    count: int
    left: int = 0
    box_min: Vec3 = field(default_factory=lambda: Vec3(_FAR, _FAR, _FAR))
    box_max: Vec3 = field(default_factory=lambda: Vec3(-_FAR, -_FAR, -_FAR))

    @property
    def is_leaf(self) -> bool:
        return self.count > 0


@dataclass
class BVH:
    """Nodes, the permuted triangle order, and the triangles themselves."""

    nodes: list[BVHNode]
    order: list[int]
    triangles: tuple[Triangle, ...]

    def leaf_triangles(self, node: BVHNode) -> list[int]:
        """Indices into ``triangles`` held by a leaf node."""
        return self.order[node.first:node.first + node.count]

    def traverse(self, origin: Vec3, direction: Vec3, length: float) -> Iterator[int]:
        """Yield indices of triangles in leaves whose boxes the ray reaches."""
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            if not intersect_aabb(origin, direction, length, node.box_min, node.box_max):
                continue
            if node.is_leaf:
                yield from self.leaf_triangles(node)
            else:
                stack.append(node.left + 1)
                stack.append(node.left)


def _nudged(direction: Vec3) -> tuple[float, float, float]:
    def nudge(value: float) -> float:
        if abs(value) < EPSILON:
            return EPSILON if value >= 0 else -EPSILON
        return value

    return (nudge(direction.x), nudge(direction.y), nudge(direction.z))


def intersect_aabb(
    origin: Vec3, direction: Vec3, length: float, box_min: Vec3, box_max: Vec3
) -> bool:
    """Slab test: does the ray reach the box before ``length`` and ahead of its origin?"""
    near, far = -_FAR * _FAR, _FAR * _FAR
    for axis, d in enumerate(_nudged(direction)):
        t0 = (box_min[axis] - origin[axis]) / d
        t1 = (box_max[axis] - origin[axis]) / d
        near = max(near, min(t0, t1))
        far = min(far, max(t0, t1))
    return far >= near and near < length and far > 0


def _grow(node: BVHNode, triangles: Sequence[Triangle], order: Sequence[int]) -> None:
    low = Vec3(_FAR, _FAR, _FAR)
    high = Vec3(-_FAR, -_FAR, -_FAR)
    for index in order[node.first:node.first + node.count]:
        for vertex in triangles[index].vertices:
            low = low.minimum(vertex)
            high = high.maximum(vertex)
    node.box_min = low
    node.box_max = high


def _partition(node: BVHNode, centres: Sequence[Vec3], order: list[int]) -> int:
    extent = node.box_max - node.box_min
    axis = 0
    if extent.y > extent.x:
        axis = 1
    if extent.z > extent[axis]:
        axis = 2
    split = node.box_min[axis] + extent[axis] * 0.5
    i = node.first
    j = i + node.count - 1
    while i <= j:
        if centres[order[i]][axis] < split:
            i += 1
        else:
            order[i], order[j] = order[j], order[i]
            j -= 1
    return i


def build_bvh(triangles: Iterable[Triangle]) -> BVH:
    """Build a hierarchy by splitting boxes at the middle of their longest side."""
    tris = tuple(triangles)
    if not tris:
        raise ValueError("cannot build a BVH without triangles")
    centres = centroids(tris)
    order = list(range(len(tris)))
    nodes = [BVHNode(first=0, count=len(tris))]
    _grow(nodes[0], tris, order)
    stack = [0]
    while stack:
        node = nodes[stack.pop()]
        if node.count <= 2:
            continue
        split = _partition(node, centres, order)
        left_count = split - node.first
        if left_count in (0, node.count):
            continue
        left = BVHNode(first=node.first, count=left_count)
        right = BVHNode(first=split, count=node.count - left_count)
        node.left = len(nodes)
        node.count = 0
        nodes.extend((left, right))
        _grow(left, tris, order)
        _grow(right, tris, order)
        stack.append(node.left + 1)
        stack.append(node.left)
    return BVH(nodes=nodes, order=order, triangles=tris)


def build_all(triangle_lists: Iterable[Iterable[Triangle]]) -> list[Optional[BVH]]:
    """One hierarchy per mesh; a mesh without triangles gets ``None``."""
    result: list[Optional[BVH]] = []
    for triangles in triangle_lists:
        tris = tuple(triangles)
        result.append(build_bvh(tris) if tris else None)
    return result