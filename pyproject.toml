[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxkit"
version = "0.1.0"
description = "Voxel grids, shape and line voxelizers, grid operators and sparse voxel octree storage"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["voxel", "voxelization", "octree", "svo", "morphology", "3d"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
voxkit-demo = "voxkit.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["voxkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
