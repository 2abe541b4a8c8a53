[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smoothlie"
version = "0.1.0"
description = "Polynomial bases, manifold operations, numerical derivatives, the C1 Lie group and Dubins paths"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = [
    "lie group",
    "manifold",
    "polynomial basis",
    "numerical differentiation",
    "dubins",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["smoothlie"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
