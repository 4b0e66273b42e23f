[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelhex"
version = "0.1.1"
description = "Sparse voxel box-tree storage primitives: object pooling, bencode serialization and MagicaVoxel geometry helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["voxel", "octree", "boxtree", "bencode", "magicavoxel", "serialization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voxelhex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
