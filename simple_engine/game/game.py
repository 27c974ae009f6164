"""The game layer: builds the level and drives the player each frame."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from simple_engine.engine import EngineError, GameLayer
from simple_engine.game.game_scene import GameScene
from simple_engine.game.player_controller import PlayerController
from simple_engine.graphics_backend import is_backend_loaded

log = logging.getLogger(__name__)


class Game(GameLayer):
    """Owns the level scene and the player controller."""

    def __init__(self, asset_root: str | Path | None = None) -> None:
        self._asset_root = asset_root
        self._scene: GameScene | None = None
        self._player_controller = PlayerController()

    def init(self) -> None:
        """Build the level; needs a loaded graphics backend."""
        log.info("Game initialization started.")

        if not is_backend_loaded():
            message = "Game initialization called before graphics functions were loaded."
            log.error(message)
            raise EngineError(message)

        scene = GameScene(self._asset_root)
        try:
            scene.build()
        except EngineError:
            log.error("Failed to build GameScene.")
            raise
        self._scene = scene
        log.info("Game initialization completed after graphics initialization.")

    def update(self, input: Any, delta_time: float) -> None:
        if self._scene is None:
            return
        player = self._scene.player
        if player is not None:
            self._player_controller.update(input, self._scene, player, delta_time)
        self._scene.update(delta_time)

    def render(self, renderer: Any, window: Any) -> None:
        if self._scene is not None:
            self._scene.render(renderer, window)

    def shutdown(self) -> None:
        if self._scene is not None:
            log.info("Shutting down game scene.")
            self._scene = None