"""A small 2D OpenGL game engine: sprites, tilemaps, parallax layers, anchored UI, a following camera and a demo game."""

__version__ = "0.1.0"