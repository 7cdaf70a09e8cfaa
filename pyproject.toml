[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xlsxcells"
version = "0.1.0"
description = "Spreadsheet cell, column, data-validation and Excel date handling, with a compact binary cell-store record codec"
requires-python = ">=3.10"
dependencies = []
keywords = ["xlsx", "excel", "spreadsheet", "cells", "dates", "data-validation"]
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
    "Topic :: Office/Business :: Financial :: Spreadsheet",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xlsxcells"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
