[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arcgrid"
version = "0.1.0"
description = "Grid image primitives, task I/O, transforms, colour and orientation normalisation and answer scoring for abstraction-and-reasoning puzzles"
requires-python = ">=3.10"
dependencies = []
keywords = ["arc", "abstraction", "reasoning", "grid", "puzzle"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["arcgrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
