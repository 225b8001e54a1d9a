"""Triangle-mesh scenes: vectors, bases, cameras, BVH queries, cone and cylinder meshes, wireframes and key actions."""

__version__ = "0.1.0"