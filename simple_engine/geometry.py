"""Two-dimensional vectors, axis-aligned boxes, transforms and 4x4 matrices.

Matrices are ``numpy`` arrays in mathematical (row-major) layout and act on
column vectors, so a point ``p`` is transformed as ``matrix @ p``.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True, slots=True)
class Vec2:
    """An immutable pair of floats."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: float | Vec2) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: float) -> Vec2:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Vec2(self.x / other, self.y / other)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; a zero vector has none."""
        magnitude = self.length()
        if magnitude == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return Vec2(self.x / magnitude, self.y / magnitude)


@dataclass(frozen=True, slots=True)
class AABB:
    """Axis-aligned bounding box given by its lower and upper corners."""

    min: Vec2 = field(default_factory=Vec2)
    max: Vec2 = field(default_factory=Vec2)

    @classmethod
    def from_center_and_half_size(cls, center: Vec2, half_size: Vec2) -> AABB:
        return cls(center - half_size, center + half_size)

    def intersects(self, other: AABB) -> bool:
        """True when the boxes overlap; touching edges do not count."""
        return (
            self.min.x < other.max.x
            and self.max.x > other.min.x
            and self.min.y < other.max.y
            and self.max.y > other.min.y
        )


def identity_matrix() -> np.ndarray:
    return np.identity(4, dtype=np.float64)


def translation_matrix(x: float, y: float) -> np.ndarray:
    matrix = identity_matrix()
    matrix[0, 3] = x
    matrix[1, 3] = y
    return matrix


def rotation_z_matrix(angle: float) -> np.ndarray:
    """Counter-clockwise rotation about the z axis, angle in radians."""
    cosine = math.cos(angle)
    sine = math.sin(angle)
    matrix = identity_matrix()
    matrix[0, 0] = cosine
    matrix[0, 1] = -sine
    matrix[1, 0] = sine
    matrix[1, 1] = cosine
    return matrix


def scale_matrix(x: float, y: float) -> np.ndarray:
    matrix = identity_matrix()
    matrix[0, 0] = x
    matrix[1, 1] = y
    return matrix


def ortho_matrix(left: float, right: float, bottom: float, top: float, near: float, far: float) -> np.ndarray:
    """Orthographic projection onto the [-1, 1] clip cube."""
    matrix = identity_matrix()
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


@dataclass
class Transform:
    """Position, rotation (radians) and scale of an object in the plane."""

    position: Vec2 = field(default_factory=Vec2)
    rotation: float = 0.0
    scale: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))

    def matrix(self) -> np.ndarray:
        """Model matrix: scale, then rotate, then translate."""
        return (
            translation_matrix(self.position.x, self.position.y)
            @ rotation_z_matrix(self.rotation)
            @ scale_matrix(self.scale.x, self.scale.y)
        )