[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelcore"
version = "0.1.0"
description = "Core data structures for a chunked voxel world: data-file parsing, keybinds, hotbar, camera, greedy chunk meshing and ray picking."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["voxel", "chunk", "meshing", "greedy-meshing", "raycast", "game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["voxelcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
