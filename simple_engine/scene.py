"""A scene: world objects, parallax layers, tilemaps, interface and a camera."""

from __future__ import annotations

import copy
import logging
from typing import Any

from simple_engine.camera import Camera
from simple_engine.geometry import AABB, Transform, Vec2
from simple_engine.graphics_backend import BackendError
from simple_engine.material import WHITE, Color, Material
from simple_engine.mesh import Mesh
from simple_engine.parallax import ParallaxLayer
from simple_engine.shader import Shader, ShaderError
from simple_engine.sprite import RenderObject, Sprite
from simple_engine.texture import Texture
from simple_engine.tilemap import Tilemap
from simple_engine.ui import UIElement

log = logging.getLogger(__name__)

DEFAULT_COLLISION_SCALE = 0.8


def _by_layer(objects: list[RenderObject]) -> list[RenderObject]:
    return sorted(objects, key=lambda obj: obj.render_layer)


class Scene:
    """Owns everything drawn in one frame and keeps it in draw order."""

    def __init__(self) -> None:
        self._objects: list[RenderObject] = []
        self._parallax_layers: list[ParallaxLayer] = []
        self._tilemaps: list[Tilemap] = []
        self._render_objects: list[RenderObject] = []
        self._ui_elements: list[UIElement] = []
        self._ui_render_objects: list[RenderObject] = []
        self._default_shader: Shader | None = None
        self._camera = Camera()
        log.info("Scene created without GPU resources. Default shader will be created lazily.")

    def update(self, delta_time: float) -> None:
        """Advance the camera, layers, objects, tile sprites and interface."""
        self._camera.update(delta_time)

        for layer in self._parallax_layers:
            layer.update(self._camera.position)

        for obj in self._objects:
            obj.update(delta_time)

        tilemap_changed = False
        for tilemap in self._tilemaps:
            for sprite in tilemap.sprites:
                sprite.update(delta_time)
            if tilemap.dirty:
                tilemap.clear_dirty()
                tilemap_changed = True

        if tilemap_changed:
            self._rebuild_render_objects()

        for element in self._ui_elements:
            element.update(delta_time)

    def render(self, renderer: Any, window: Any) -> None:
        renderer.render_scene(window, self)

    def create_render_object(
        self,
        mesh: Mesh | None,
        material: Material | None,
        transform: Transform | None = None,
        rotation_speed: float = 0.0,
    ) -> RenderObject:
        obj = RenderObject(mesh, material, transform, rotation_speed)
        self._objects.append(obj)
        self._rebuild_render_objects()
        return obj

    def create_sprite(
        self,
        texture: Texture | None,
        transform: Transform | None = None,
        tint: Color = WHITE,
        rotation_speed: float = 0.0,
    ) -> Sprite:
        """Add a sprite; without a shader it gets an empty, undrawable material."""
        sprite = Sprite.create(self._ensure_default_shader(), texture, transform, tint)
        if sprite is None:
            sprite = Sprite(Sprite.shared_quad_mesh(), Material(), transform)
        sprite.rotation_speed = rotation_speed
        self._objects.append(sprite)
        self._rebuild_render_objects()
        return sprite

    def add_tilemap(self, tilemap: Tilemap) -> Tilemap:
        """Add a copy of ``tilemap`` and return the copy the scene owns."""
        instance = copy.copy(tilemap)
        instance.initialize(self._ensure_default_shader())
        instance.clear_dirty()
        self._tilemaps.append(instance)
        self._rebuild_render_objects()
        return instance

    def add_parallax_layer(self, layer: ParallaxLayer) -> ParallaxLayer:
        """Add a copy of ``layer`` and return the copy the scene owns."""
        instance = copy.copy(layer)
        instance.initialize(self._ensure_default_shader())
        if instance.sprite is not None:
            instance.update(self._camera.position)
        self._parallax_layers.append(instance)
        self._rebuild_render_objects()
        return instance

    def add_ui_element(self, element: UIElement) -> UIElement:
        """Add a copy of ``element`` and return the copy the scene owns."""
        instance = copy.copy(element)
        instance.initialize(self._ensure_default_shader())
        self._ui_elements.append(instance)
        self._rebuild_ui_render_objects()
        return instance

    def move_object(
        self, obj: RenderObject, displacement: Vec2, collision_scale: float = DEFAULT_COLLISION_SCALE
    ) -> bool:
        """Move along x, then y, skipping any axis that would hit a solid tile.

        Returns True when the object moved along at least one axis.
        """
        half_size = obj.transform.scale * (0.5 * collision_scale)
        position = obj.transform.position
        moved = False

        if displacement.x != 0.0:
            candidate = Vec2(position.x + displacement.x, position.y)
            if not self._collides_with_solid_tiles(AABB.from_center_and_half_size(candidate, half_size)):
                position = candidate
                moved = True

        if displacement.y != 0.0:
            candidate = Vec2(position.x, position.y + displacement.y)
            if not self._collides_with_solid_tiles(AABB.from_center_and_half_size(candidate, half_size)):
                position = candidate
                moved = True

        obj.transform.position = position
        return moved

    def update_ui_layout(self, viewport_width: int, viewport_height: int) -> None:
        for element in self._ui_elements:
            element.update_layout(viewport_width, viewport_height)
        self._rebuild_ui_render_objects()

    @property
    def objects(self) -> tuple[RenderObject, ...]:
        """World objects in draw order."""
        return tuple(self._render_objects)

    @property
    def ui_objects(self) -> tuple[RenderObject, ...]:
        """Interface sprites in draw order."""
        return tuple(self._ui_render_objects)

    @property
    def camera(self) -> Camera:
        return self._camera

    def default_shader(self) -> Shader | None:
        """The shared sprite shader, compiled on first use; None if it fails."""
        return self._ensure_default_shader()

    def _ensure_default_shader(self) -> Shader | None:
        if self._default_shader is None:
            log.info("Creating default scene shader after graphics initialization.")
            try:
                self._default_shader = Material.create_default_shader()
            except (ShaderError, BackendError) as error:
                log.error(str(error))
        return self._default_shader

    def _collides_with_solid_tiles(self, bounds: AABB) -> bool:
        return any(tilemap.collides_with(bounds) for tilemap in self._tilemaps)

    def _rebuild_render_objects(self) -> None:
        objects: list[RenderObject] = [
            layer.sprite for layer in self._parallax_layers if layer.sprite is not None
        ]
        objects.extend(self._objects)
        for tilemap in self._tilemaps:
            objects.extend(tilemap.sprites)
        self._render_objects = _by_layer(objects)

    def _rebuild_ui_render_objects(self) -> None:
        self._ui_render_objects = _by_layer(
            [element.sprite for element in self._ui_elements if element.sprite is not None]
        )