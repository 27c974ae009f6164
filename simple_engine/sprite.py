"""Drawable objects and textured sprites built on a shared quad mesh."""

from __future__ import annotations

import logging
import weakref
from dataclasses import replace

from simple_engine.geometry import Transform, Vec2
from simple_engine.material import WHITE, Color, Material
from simple_engine.mesh import Mesh, MeshError, create_quad
from simple_engine.shader import Shader
from simple_engine.sprite_animation import SpriteAnimation
from simple_engine.texture import Texture
from simple_engine.texture_atlas import AtlasRegion, TextureAtlas

log = logging.getLogger(__name__)


class RenderObject:
    """A mesh drawn with a material at a transform, optionally spinning."""

    def __init__(
        self,
        mesh: Mesh | None = None,
        material: Material | None = None,
        transform: Transform | None = None,
        rotation_speed: float = 0.0,
        render_layer: int = 0,
    ) -> None:
        self.mesh = mesh
        self.material = material
        self.transform = replace(transform) if transform is not None else Transform()
        self.rotation_speed = rotation_speed
        self.render_layer = render_layer

    def update(self, delta_time: float) -> None:
        self.transform.rotation += self.rotation_speed * delta_time


class Sprite(RenderObject):
    """A textured quad that can show an atlas region or play an animation."""

    _quad_mesh_ref: weakref.ref[Mesh] | None = None

    def __init__(
        self,
        mesh: Mesh | None = None,
        material: Material | None = None,
        transform: Transform | None = None,
    ) -> None:
        super().__init__(mesh, material, transform, 0.0)
        self._animation = SpriteAnimation()
        self._has_animation = False
        self._atlas_region = AtlasRegion()

    @classmethod
    def create(
        cls,
        shader: Shader | None,
        texture: Texture | None,
        transform: Transform | None = None,
        tint: Color = WHITE,
    ) -> Sprite | None:
        """A sprite with its own material; None when there is no shader."""
        if shader is None:
            return None
        material = Material(shader, tint, texture)
        return cls(cls.shared_quad_mesh(), material, transform)

    @classmethod
    def shared_quad_mesh(cls) -> Mesh | None:
        """The quad mesh shared by all live sprites, created on demand."""
        cached = Sprite._quad_mesh_ref() if Sprite._quad_mesh_ref is not None else None
        if cached is not None:
            return cached
        try:
            mesh = create_quad()
        except MeshError as error:
            log.error(str(error))
            return None
        Sprite._quad_mesh_ref = weakref.ref(mesh)
        return mesh

    def update(self, delta_time: float) -> None:
        super().update(delta_time)
        if not self._has_animation or self.material is None:
            return
        self._animation.update(delta_time)
        self._animation.apply(self.material)

    def set_texture(self, texture: Texture | None) -> None:
        if self.material is not None:
            self.material.texture = texture

    def set_tint(self, tint: Color) -> None:
        if self.material is not None:
            self.material.base_color = tint

    def set_size(self, size: Vec2) -> None:
        self.transform.scale = size

    def set_texture_region(self, min_uv: Vec2, max_uv: Vec2) -> None:
        self.set_atlas_region(AtlasRegion(min_uv, max_uv))

    def set_atlas_region(self, region: AtlasRegion) -> None:
        """Show ``region``; an invalid region falls back to the whole texture.

        A running animation is reconfigured to play inside the new region.
        """
        self._atlas_region = region if region.is_valid() else AtlasRegion()

        if self._has_animation:
            animation = self._animation
            self.set_animation_from_atlas_region(
                self._atlas_region,
                animation.frame_count,
                animation.columns,
                animation.rows,
                animation.frame_duration,
                animation.looping,
                animation.start_frame,
            )
            return

        self._apply_current_texture_region()

    def set_atlas_cell(
        self, atlas: TextureAtlas, column: int, row: int, width_in_cells: int = 1, height_in_cells: int = 1
    ) -> None:
        self.set_texture(atlas.texture)
        self.set_atlas_region(atlas.region(column, row, width_in_cells, height_in_cells))

    def set_atlas_index(
        self, atlas: TextureAtlas, index: int, width_in_cells: int = 1, height_in_cells: int = 1
    ) -> None:
        self.set_texture(atlas.texture)
        self.set_atlas_region(atlas.region_by_index(index, width_in_cells, height_in_cells))

    def reset_texture_region(self) -> None:
        self._atlas_region = AtlasRegion()
        self._apply_current_texture_region()

    def set_animation_grid(
        self,
        frame_count: int,
        columns: int,
        rows: int,
        frame_duration: float,
        loop: bool = True,
        start_frame: int = 0,
    ) -> None:
        """Animate over a grid laid across the current atlas region."""
        self.set_animation_from_atlas_region(
            self._atlas_region, frame_count, columns, rows, frame_duration, loop, start_frame
        )

    def set_animation_from_atlas_region(
        self,
        region: AtlasRegion,
        frame_count: int,
        columns: int,
        rows: int,
        frame_duration: float,
        loop: bool = True,
        start_frame: int = 0,
    ) -> None:
        if self.material is None:
            return
        self._atlas_region = region if region.is_valid() else AtlasRegion()
        self._animation.configure_grid(
            frame_count, columns, rows, frame_duration, loop, start_frame, self._atlas_region
        )
        self._animation.apply(self.material)
        self._has_animation = self._animation.is_valid()

    def clear_animation(self) -> None:
        self._has_animation = False
        self._animation.stop()
        self._apply_current_texture_region()

    @property
    def has_animation(self) -> bool:
        return self._has_animation

    @property
    def animation(self) -> SpriteAnimation:
        return self._animation

    @property
    def atlas_region(self) -> AtlasRegion:
        return self._atlas_region

    def _apply_current_texture_region(self) -> None:
        if self.material is None:
            return
        if self._has_animation:
            self._animation.apply(self.material)
            return
        self.material.set_texture_region(self._atlas_region.min_uv, self._atlas_region.max_uv)