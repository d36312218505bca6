[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nsflow"
version = "0.1.0"
description = "Building blocks for an incompressible Navier-Stokes solver on staggered, ghost-layered grids"
requires-python = ">=3.10"
keywords = ["cfd", "navier-stokes", "staggered-grid", "sor", "poisson", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["nsflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
