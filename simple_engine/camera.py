"""Orthographic 2D camera with smoothed following, a dead zone and bounds."""

from __future__ import annotations

import math

import numpy as np

from simple_engine.geometry import Vec2, ortho_matrix, translation_matrix

_MIN_ASPECT_RATIO = 0.0001


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class Camera:
    """A camera looking at ``position`` with a view ``2 * half_height`` tall."""

    def __init__(self) -> None:
        self.position = Vec2()
        self.target_position = Vec2()
        self.half_height = 1.0
        self._follow_sharpness = 8.0
        self._dead_zone_half_size = Vec2()
        self._bounds: tuple[Vec2, Vec2] | None = None
        self._last_aspect_ratio = 16.0 / 9.0
        self._has_follow_target = False

    def view_matrix(self) -> np.ndarray:
        return translation_matrix(-self.position.x, -self.position.y)

    def projection_matrix(self, aspect_ratio: float) -> np.ndarray:
        """Projection for the given aspect ratio, remembered for bounds clamping."""
        self._last_aspect_ratio = max(aspect_ratio, _MIN_ASPECT_RATIO)
        half_width = self.half_height * aspect_ratio
        return ortho_matrix(-half_width, half_width, -self.half_height, self.half_height, -1.0, 1.0)

    def update(self, delta_time: float) -> None:
        """Move exponentially towards the follow target."""
        if not self._has_follow_target:
            return
        elapsed = max(delta_time, 0.0)
        factor = 1.0 - math.exp(-self._follow_sharpness * elapsed)
        self.position = self._clamp_to_bounds(
            self.position + (self.target_position - self.position) * factor
        )

    def set_follow_target(self, target: Vec2) -> None:
        """Follow ``target``, moving the aim only once it leaves the dead zone."""
        if not self._has_follow_target:
            next_target = target
        else:
            current = self.target_position
            half = self._dead_zone_half_size
            x = current.x
            if target.x < current.x - half.x:
                x = target.x + half.x
            elif target.x > current.x + half.x:
                x = target.x - half.x
            y = current.y
            if target.y < current.y - half.y:
                y = target.y + half.y
            elif target.y > current.y + half.y:
                y = target.y - half.y
            next_target = Vec2(x, y)

        self.target_position = self._clamp_to_bounds(next_target)
        self._has_follow_target = True

    def clear_follow_target(self) -> None:
        self._has_follow_target = False
        self.target_position = self.position

    @property
    def follow_sharpness(self) -> float:
        return self._follow_sharpness

    @follow_sharpness.setter
    def follow_sharpness(self, sharpness: float) -> None:
        self._follow_sharpness = max(sharpness, 0.0)

    @property
    def dead_zone(self) -> Vec2:
        """Full size of the dead zone around the follow target."""
        return self._dead_zone_half_size * 2.0

    @dead_zone.setter
    def dead_zone(self, size: Vec2) -> None:
        half = size * 0.5
        self._dead_zone_half_size = Vec2(max(half.x, 0.0), max(half.y, 0.0))

    def set_bounds(self, min_bounds: Vec2, max_bounds: Vec2) -> None:
        """Keep the visible area inside the given world rectangle."""
        self._bounds = (min_bounds, max_bounds)
        self.target_position = self._clamp_to_bounds(self.target_position)
        self.position = self._clamp_to_bounds(self.position)

    def clear_bounds(self) -> None:
        self._bounds = None

    @property
    def has_bounds(self) -> bool:
        return self._bounds is not None

    @property
    def has_follow_target(self) -> bool:
        return self._has_follow_target

    def _clamp_to_bounds(self, value: Vec2) -> Vec2:
        if self._bounds is None:
            return value

        low, high = self._bounds
        half_width = self.half_height * self._last_aspect_ratio
        min_x, max_x = low.x + half_width, high.x - half_width
        min_y, max_y = low.y + self.half_height, high.y - self.half_height

        x = (low.x + high.x) * 0.5 if min_x > max_x else _clamp(value.x, min_x, max_x)
        y = (low.y + high.y) * 0.5 if min_y > max_y else _clamp(value.y, min_y, max_y)
        return Vec2(x, y)