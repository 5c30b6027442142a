[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paintkit"
version = "0.4.0"
description = "Canvas, tool selection, rectangular selections and undo/redo history for a raster paint editor"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["paint", "raster", "editor", "selection", "undo", "canvas"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["paintkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
