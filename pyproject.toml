[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixed"
version = "0.4.0"
description = "Core data structures for a raster pixel editor: input events, colours, pixel buffers, undo snapshots, palettes and command parsing."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["pixel", "pixel-art", "editor", "sprite", "palette", "gif", "svg", "undo"]
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
packages = ["pixed"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
