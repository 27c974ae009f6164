"""The demo level: parallax sky, a few shapes, a HUD and a walled tilemap."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from simple_engine.engine import EngineError
from simple_engine.geometry import Transform, Vec2
from simple_engine.material import WHITE, Material
from simple_engine.mesh import Mesh, MeshError, create_triangle
from simple_engine.parallax import ParallaxLayer
from simple_engine.scene import Scene
from simple_engine.sprite import RenderObject, Sprite
from simple_engine.texture import Texture, TextureError
from simple_engine.texture_atlas import TextureAtlas
from simple_engine.tilemap import Tilemap
from simple_engine.ui import UIAnchor, UIElement

log = logging.getLogger(__name__)

ASSET_ROOT_VARIABLE = "SIMPLE_ENGINE_ASSET_ROOT"
CHECKER_TEXTURE = "checker.ppm"

_PARALLAX_LAYERS = (
    (Vec2(0.0, 2.2), Vec2(8.5, 3.5), 0.10, (0.70, 0.82, 1.00, 1.0), -30),
    (Vec2(0.0, 1.2), Vec2(7.0, 2.4), 0.35, (0.55, 0.68, 0.86, 1.0), -20),
    (Vec2(0.0, 0.2), Vec2(6.0, 1.8), 0.60, (0.42, 0.52, 0.68, 1.0), -10),
)

_HUD_ELEMENTS = (
    (Vec2(20.0, 20.0), Vec2(180.0, 28.0), (0.18, 0.22, 0.30, 0.95), 1000),
    (Vec2(24.0, 24.0), Vec2(120.0, 20.0), (0.92, 0.28, 0.24, 0.95), 1001),
    (Vec2(20.0, 56.0), Vec2(32.0, 32.0), WHITE, 1002),
)

ORANGE = (0.95, 0.55, 0.20, 1.0)
BLUE = (0.35, 0.85, 1.0, 1.0)
GREEN = (0.45, 1.0, 0.55, 1.0)


def default_asset_root() -> Path:
    """The asset directory from the environment, else ``./assets``."""
    configured = os.environ.get(ASSET_ROOT_VARIABLE)
    return Path(configured) if configured else Path.cwd() / "assets"


class GameScene(Scene):
    """The playable level, with the camera following the player."""

    def __init__(self, asset_root: str | Path | None = None) -> None:
        super().__init__()
        self._asset_root = Path(asset_root) if asset_root is not None else default_asset_root()
        self._player: RenderObject | None = None

    @property
    def player(self) -> RenderObject | None:
        return self._player

    def build(self) -> None:
        """Populate the level; raises :class:`EngineError` without a shader."""
        log.info("Building GameScene after renderer and graphics initialization.")

        shader = self.default_shader()
        if shader is None:
            log.error("GameScene could not create the default shader.")
            raise EngineError("GameScene could not create the default shader.")

        triangle = self._load_triangle()
        checker = self._load_checker()

        for base, size, factor, tint, layer in _PARALLAX_LAYERS:
            self.add_parallax_layer(ParallaxLayer(checker, base, size, factor, tint, layer))

        for position, size, tint, layer in _HUD_ELEMENTS:
            self.add_ui_element(UIElement(checker, position, size, UIAnchor.TOP_LEFT, tint, layer))

        orange = Material(shader, ORANGE)
        blue = Material(shader, BLUE)
        green = Material(shader, GREEN)

        self._player = self.create_render_object(
            triangle, orange, Transform(position=Vec2(0.0, 1.5), scale=Vec2(1.0, 1.0)), 1.0
        )
        self.create_render_object(
            triangle, blue, Transform(position=Vec2(-0.9, 0.45), scale=Vec2(0.65, 0.65)), -0.7
        )
        self.create_sprite(
            checker, Transform(position=Vec2(0.95, -0.35), scale=Vec2(0.85, 1.1)), WHITE, 0.45
        )
        self.create_render_object(
            Sprite.shared_quad_mesh(),
            green,
            Transform(position=Vec2(0.35, 0.8), scale=Vec2(0.55, 0.55)),
            -0.3,
        )

        world = self.add_tilemap(self._build_tilemap(checker))
        self.camera.dead_zone = Vec2(0.75, 0.45)
        bounds = world.world_bounds
        self.camera.set_bounds(bounds.min, bounds.max)

        log.info("GameScene build completed successfully.")

    def update(self, delta_time: float) -> None:
        if self._player is not None:
            self.camera.set_follow_target(self._player.transform.position)
        else:
            self.camera.clear_follow_target()
        super().update(delta_time)

    @staticmethod
    def _load_triangle() -> Mesh | None:
        try:
            return create_triangle()
        except MeshError:
            return None

    def _load_checker(self) -> Texture | None:
        texture = Texture()
        try:
            texture.load_from_file(self._asset_root / CHECKER_TEXTURE)
        except TextureError:
            return None
        return texture

    @staticmethod
    def _build_tilemap(texture: Texture | None) -> Tilemap:
        tilemap = Tilemap(TextureAtlas(texture, 2, 2), 8, 6, Vec2(0.5, 0.5), Vec2(-2.0, 2.0))
        tilemap.render_layer = 0

        bottom = tilemap.height - 1
        for x in range(tilemap.width):
            tilemap.set_tile(x, bottom, x % 4)
            tilemap.set_tile_solid(x, bottom, True)

        for y in range(2, tilemap.height):
            tilemap.set_tile(0, y, 1)
            tilemap.set_tile_solid(0, y, True)

        for x, y, index in ((3, 4, 2), (4, 4, 3), (5, 3, 0)):
            tilemap.set_tile(x, y, index)
            tilemap.set_tile_solid(x, y, True)

        return tilemap