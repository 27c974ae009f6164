"""Grids of atlas tiles with per-cell solidity for collision tests."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable

from simple_engine.geometry import AABB, Transform, Vec2
from simple_engine.shader import Shader
from simple_engine.sprite import Sprite
from simple_engine.texture_atlas import TextureAtlas

log = logging.getLogger(__name__)

EMPTY_TILE = -1


class Tilemap:
    """A ``width`` x ``height`` grid hanging down and right from ``position``.

    Row 0 is the top row: cell ``(x, y)`` spans ``position.x + x * tile_size.x``
    to the right and ``position.y - y * tile_size.y`` downwards.  Each cell
    holds an atlas index (``-1`` for empty) and a solid flag.
    """

    def __init__(
        self,
        atlas: TextureAtlas | None = None,
        width: int = 0,
        height: int = 0,
        tile_size: Vec2 | None = None,
        position: Vec2 | None = None,
    ) -> None:
        self._atlas = atlas if atlas is not None else TextureAtlas()
        self._shader: Shader | None = None
        self._position = position if position is not None else Vec2()
        self._tile_size = tile_size if tile_size is not None else Vec2(1.0, 1.0)
        self._width = max(width, 0)
        self._height = max(height, 0)
        cell_count = self._width * self._height
        self._tiles = [EMPTY_TILE] * cell_count
        self._solid = [False] * cell_count
        self._sprites: list[Sprite] = []
        self._render_layer = 0
        self._dirty = False

    def __copy__(self) -> Tilemap:
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._atlas = copy.copy(self._atlas)
        clone._tiles = list(self._tiles)
        clone._solid = list(self._solid)
        clone._sprites = list(self._sprites)
        return clone

    def initialize(self, shader: Shader | None) -> None:
        """Attach the shader used for tile sprites and build them."""
        self._shader = shader
        self._rebuild_sprites()

    def set_tile(self, x: int, y: int, atlas_index: int) -> None:
        """Set a cell's atlas index; coordinates outside the grid are ignored."""
        if not self._contains(x, y):
            return
        self._tiles[self._index(x, y)] = atlas_index
        self._rebuild_sprites()

    def set_tiles(self, tiles: Iterable[int]) -> None:
        """Replace every cell, row by row; a list of the wrong length is ignored."""
        values = list(tiles)
        if len(values) != self._width * self._height:
            return
        self._tiles = values
        self._rebuild_sprites()

    def set_tile_solid(self, x: int, y: int, solid: bool) -> None:
        if not self._contains(x, y):
            return
        self._solid[self._index(x, y)] = solid

    def tile(self, x: int, y: int) -> int:
        """Atlas index of a cell, or -1 when empty or outside the grid."""
        if not self._contains(x, y):
            return EMPTY_TILE
        return self._tiles[self._index(x, y)]

    def is_tile_solid(self, x: int, y: int) -> bool:
        if not self._contains(x, y):
            return False
        return self._solid[self._index(x, y)]

    def blocks_cell(self, x: int, y: int) -> bool:
        """True when the cell holds a tile and is marked solid."""
        return self.tile(x, y) >= 0 and self.is_tile_solid(x, y)

    def collides_with(self, bounds: AABB) -> bool:
        """True when ``bounds`` overlaps any blocking cell."""
        size = self._tile_size
        if size.x <= 0.0 or size.y <= 0.0 or self._width <= 0 or self._height <= 0:
            return False

        origin = self._position
        start_x = max(0, int((bounds.min.x - origin.x) / size.x))
        end_x = min(self._width - 1, int((bounds.max.x - origin.x) / size.x))
        start_y = max(0, int((origin.y - bounds.max.y) / size.y))
        end_y = min(self._height - 1, int((origin.y - bounds.min.y) / size.y))

        return any(
            self.blocks_cell(x, y) and bounds.intersects(self._cell_bounds(x, y))
            for y in range(start_y, end_y + 1)
            for x in range(start_x, end_x + 1)
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def atlas(self) -> TextureAtlas:
        return self._atlas

    @property
    def position(self) -> Vec2:
        return self._position

    @position.setter
    def position(self, position: Vec2) -> None:
        self._position = position
        self._rebuild_sprites()

    @property
    def tile_size(self) -> Vec2:
        return self._tile_size

    @tile_size.setter
    def tile_size(self, tile_size: Vec2) -> None:
        self._tile_size = tile_size
        self._rebuild_sprites()

    @property
    def render_layer(self) -> int:
        return self._render_layer

    @render_layer.setter
    def render_layer(self, layer: int) -> None:
        self._render_layer = layer
        for sprite in self._sprites:
            sprite.render_layer = layer
        self._dirty = True

    @property
    def world_bounds(self) -> AABB:
        """The rectangle covered by the whole grid."""
        low = self._position + Vec2(0.0, -float(self._height) * self._tile_size.y)
        high = self._position + Vec2(float(self._width) * self._tile_size.x, 0.0)
        return AABB(low, high)

    @property
    def sprites(self) -> tuple[Sprite, ...]:
        return tuple(self._sprites)

    @property
    def dirty(self) -> bool:
        """True when the sprites changed since the last :meth:`clear_dirty`."""
        return self._dirty

    def clear_dirty(self) -> None:
        self._dirty = False

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _index(self, x: int, y: int) -> int:
        return y * self._width + x

    def _cell_bounds(self, x: int, y: int) -> AABB:
        min_x = self._position.x + x * self._tile_size.x
        max_y = self._position.y - y * self._tile_size.y
        return AABB(
            Vec2(min_x, max_y - self._tile_size.y),
            Vec2(min_x + self._tile_size.x, max_y),
        )

    def _rebuild_sprites(self) -> None:
        self._sprites = []
        texture = self._atlas.texture
        if self._shader is None or texture is None:
            self._dirty = True
            return

        size = self._tile_size
        for y in range(self._height):
            for x in range(self._width):
                atlas_index = self.tile(x, y)
                if atlas_index < 0:
                    continue
                center = Vec2(
                    self._position.x + x * size.x + size.x * 0.5,
                    self._position.y - y * size.y - size.y * 0.5,
                )
                sprite = Sprite.create(self._shader, texture, Transform(position=center, scale=size))
                if sprite is None:
                    continue
                sprite.set_atlas_index(self._atlas, atlas_index)
                sprite.render_layer = self._render_layer
                self._sprites.append(sprite)

        self._dirty = True