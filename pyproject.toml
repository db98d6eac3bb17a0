[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockworld"
version = "0.1.0"
description = "Voxel world data structures: block and chunk positions, chunks with paletted encoding, biomes, a bounding volume hierarchy, game of life and noise terrain"
requires-python = ">=3.10"
dependencies = []
keywords = ["voxel", "chunk", "block", "palette", "heightmap", "bvh", "game-of-life", "terrain", "simplex-noise"]
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
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["blockworld"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
