[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "evosim"
version = "3.0.1"
description = "Building blocks for a bitwise evolutionary simulation: genomes, environmental fitness, interactions, image-driven environments and species logging"
requires-python = ">=3.10"
keywords = ["evolution", "simulation", "artificial life", "phylogeny", "newick"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Life",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["evosim*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
