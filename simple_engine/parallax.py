"""Background layers that scroll at a fraction of the camera's movement."""

from __future__ import annotations

from simple_engine.geometry import Transform, Vec2
from simple_engine.material import WHITE, Color
from simple_engine.shader import Shader
from simple_engine.sprite import Sprite
from simple_engine.texture import Texture
from simple_engine.texture_atlas import AtlasRegion

DEFAULT_PARALLAX_RENDER_LAYER = -100


class ParallaxLayer:
    """A sprite placed at ``base_position + camera * parallax_factor``."""

    def __init__(
        self,
        texture: Texture | None = None,
        base_position: Vec2 | None = None,
        size: Vec2 | None = None,
        parallax_factor: float = 0.0,
        tint: Color = WHITE,
        render_layer: int = DEFAULT_PARALLAX_RENDER_LAYER,
    ) -> None:
        self._texture = texture
        self._sprite: Sprite | None = None
        self._region = AtlasRegion()
        self._base_position = base_position if base_position is not None else Vec2()
        self._size = size if size is not None else Vec2(1.0, 1.0)
        self._tint = tint
        self.parallax_factor = parallax_factor
        self._render_layer = render_layer

    def initialize(self, shader: Shader | None) -> None:
        """Create the layer's sprite; needs both a shader and a texture."""
        if shader is None or self._texture is None:
            return
        transform = Transform(position=self._base_position, scale=self._size)
        sprite = Sprite.create(shader, self._texture, transform, self._tint)
        if sprite is None:
            return
        sprite.render_layer = self._render_layer
        sprite.set_atlas_region(self._region)
        self._sprite = sprite

    def update(self, camera_position: Vec2) -> None:
        if self._sprite is None:
            return
        self._sprite.transform.position = self._base_position + camera_position * self.parallax_factor

    @property
    def base_position(self) -> Vec2:
        return self._base_position

    @base_position.setter
    def base_position(self, position: Vec2) -> None:
        self._base_position = position
        if self._sprite is not None:
            self._sprite.transform.position = position

    def set_atlas_region(self, region: AtlasRegion) -> None:
        self._region = region if region.is_valid() else AtlasRegion()
        if self._sprite is not None:
            self._sprite.set_atlas_region(self._region)

    @property
    def render_layer(self) -> int:
        return self._render_layer

    @render_layer.setter
    def render_layer(self, layer: int) -> None:
        self._render_layer = layer
        if self._sprite is not None:
            self._sprite.render_layer = layer

    @property
    def sprite(self) -> Sprite | None:
        return self._sprite