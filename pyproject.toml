[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simple-engine"
version = "0.1.0"
description = "A small 2D OpenGL game engine with sprites, tilemaps, parallax layers, anchored UI elements and a following camera, plus a playable demo level."
requires-python = ">=3.10"
keywords = ["game", "engine", "2d", "opengl", "pyglet", "tilemap", "sprite", "camera"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "numpy",
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
simple-engine = "simple_engine.app:main"

[tool.hatch.build.targets.wheel]
packages = ["simple_engine"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
