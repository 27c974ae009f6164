"""Keyboard-driven movement of the player object."""

from __future__ import annotations

from typing import Any

from simple_engine.geometry import Vec2
from simple_engine.keyboard import Scancode
from simple_engine.scene import DEFAULT_COLLISION_SCALE, Scene
from simple_engine.sprite import RenderObject

DEFAULT_MOVE_SPEED = 1.5


class PlayerController:
    """Moves the player with W, A, S and D at a constant speed."""

    def __init__(
        self, move_speed: float = DEFAULT_MOVE_SPEED, collision_scale: float = DEFAULT_COLLISION_SCALE
    ) -> None:
        self.move_speed = move_speed
        self.collision_scale = collision_scale

    def update(self, input: Any, scene: Scene, player: RenderObject, delta_time: float) -> bool:
        """Move the player through the scene; True when it moved."""
        direction = self.input_direction(input)
        if direction.length() <= 0.0:
            return False
        step = direction.normalized() * (self.move_speed * delta_time)
        return scene.move_object(player, step, self.collision_scale)

    def input_direction(self, input: Any) -> Vec2:
        """Sum of the pressed direction keys, not normalized."""
        x = 0.0
        y = 0.0
        if input.is_key_pressed(Scancode.W):
            y += 1.0
        if input.is_key_pressed(Scancode.S):
            y -= 1.0
        if input.is_key_pressed(Scancode.A):
            x -= 1.0
        if input.is_key_pressed(Scancode.D):
            x += 1.0
        return Vec2(x, y)