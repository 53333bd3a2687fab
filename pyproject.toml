[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tskm"
version = "1.0.0"
description = "Closed sequence, closed phrase and partial-order mining over chord sequences"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "time series",
    "knowledge mining",
    "closed itemsets",
    "sequential patterns",
    "BIDE",
    "DCI-Closed",
    "interval data",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tskm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
