"""Screen-space interface elements anchored to corners or the centre."""

from __future__ import annotations

import enum

from simple_engine.geometry import Transform, Vec2
from simple_engine.material import WHITE, Color
from simple_engine.shader import Shader
from simple_engine.sprite import Sprite
from simple_engine.texture import Texture
from simple_engine.texture_atlas import AtlasRegion

DEFAULT_UI_RENDER_LAYER = 1000


class UIAnchor(enum.Enum):
    TOP_LEFT = enum.auto()
    TOP_RIGHT = enum.auto()
    BOTTOM_LEFT = enum.auto()
    BOTTOM_RIGHT = enum.auto()
    CENTER = enum.auto()


class UIElement:
    """A textured rectangle positioned in pixels relative to an anchor.

    For corner anchors ``screen_position`` is the offset of the element's
    nearest corner from the viewport corner; for the centre anchor it is the
    offset of the element's centre from the viewport centre.
    """

    def __init__(
        self,
        texture: Texture | None = None,
        screen_position: Vec2 | None = None,
        size: Vec2 | None = None,
        anchor: UIAnchor = UIAnchor.TOP_LEFT,
        tint: Color = WHITE,
        render_layer: int = DEFAULT_UI_RENDER_LAYER,
    ) -> None:
        self._texture = texture
        self._sprite: Sprite | None = None
        self._region = AtlasRegion()
        self.screen_position = screen_position if screen_position is not None else Vec2()
        self.size = size if size is not None else Vec2(32.0, 32.0)
        self.anchor = anchor
        self._tint = tint
        self._render_layer = render_layer

    def initialize(self, shader: Shader | None) -> None:
        """Create the element's sprite; needs both a shader and a texture."""
        if shader is None or self._texture is None:
            return
        sprite = Sprite.create(shader, self._texture, Transform(scale=self.size), self._tint)
        if sprite is None:
            return
        sprite.render_layer = self._render_layer
        sprite.set_atlas_region(self._region)
        self._sprite = sprite

    def update(self, delta_time: float) -> None:
        if self._sprite is not None:
            self._sprite.update(delta_time)

    def update_layout(self, viewport_width: int, viewport_height: int) -> None:
        """Place the sprite for a viewport of the given pixel size."""
        if self._sprite is None:
            return
        self._sprite.transform.scale = self.size
        self._sprite.transform.position = self.anchored_position(viewport_width, viewport_height)
        self._sprite.render_layer = self._render_layer

    def set_atlas_region(self, region: AtlasRegion) -> None:
        self._region = region if region.is_valid() else AtlasRegion()
        if self._sprite is not None:
            self._sprite.set_atlas_region(self._region)

    def anchored_position(self, viewport_width: int, viewport_height: int) -> Vec2:
        """Centre of the element in pixels, origin at the bottom-left."""
        half = self.size * 0.5
        offset = self.screen_position
        width = float(viewport_width)
        height = float(viewport_height)

        if self.anchor is UIAnchor.TOP_LEFT:
            return Vec2(offset.x + half.x, height - offset.y - half.y)
        if self.anchor is UIAnchor.TOP_RIGHT:
            return Vec2(width - offset.x - half.x, height - offset.y - half.y)
        if self.anchor is UIAnchor.BOTTOM_LEFT:
            return Vec2(offset.x + half.x, offset.y + half.y)
        if self.anchor is UIAnchor.BOTTOM_RIGHT:
            return Vec2(width - offset.x - half.x, offset.y + half.y)
        return Vec2(width * 0.5 + offset.x, height * 0.5 + offset.y)

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