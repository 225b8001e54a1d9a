[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshview"
version = "0.1.0"
description = "Triangle-mesh scene toolkit: cameras, projection, bounding volume hierarchies, cone and cylinder meshes, and wireframe overlays"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["3d", "mesh", "bvh", "camera", "projection", "wireframe", "scene"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["meshview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
