"""UV regions and grid-based texture atlases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from simple_engine.geometry import Vec2


def _clamp(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into the closed range ``[low, high]``."""
    return min(max(value, low), high)


def _unit_vector() -> Vec2:
    return Vec2(1.0, 1.0)


@dataclass(frozen=True, slots=True)
class AtlasRegion:
    """A rectangle in texture coordinates; defaults to the whole texture."""

    min_uv: Vec2 = field(default_factory=Vec2)
    max_uv: Vec2 = field(default_factory=_unit_vector)

    def is_valid(self) -> bool:
        """True when the region is non-empty and lies inside [0, 1]."""
        low, high = self.min_uv, self.max_uv
        inside = low.x >= 0.0 and low.y >= 0.0 and high.x <= 1.0 and high.y <= 1.0
        return inside and high.x > low.x and high.y > low.y

    @property
    def size(self) -> Vec2:
        return self.max_uv - self.min_uv


class TextureAtlas:
    """A texture divided into an even grid of cells."""

    def __init__(self, texture: Any = None, columns: int = 1, rows: int = 1) -> None:
        self.texture = texture
        self.configure_grid(columns, rows)

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return self._rows

    def configure_grid(self, columns: int, rows: int) -> None:
        """Set the grid size; each dimension is at least one cell."""
        self._columns = max(columns, 1)
        self._rows = max(rows, 1)

    def is_valid(self) -> bool:
        return self.texture is not None and self._columns > 0 and self._rows > 0

    def full_region(self) -> AtlasRegion:
        return AtlasRegion()

    def region(self, column: int, row: int, width_in_cells: int = 1, height_in_cells: int = 1) -> AtlasRegion:
        """UV region of a block of cells; out-of-range values are clamped."""
        column = _clamp(column, 0, self._columns - 1)
        row = _clamp(row, 0, self._rows - 1)
        width = _clamp(width_in_cells, 1, self._columns - column)
        height = _clamp(height_in_cells, 1, self._rows - row)

        cell_w = 1.0 / self._columns
        cell_h = 1.0 / self._rows
        min_uv = Vec2(column * cell_w, row * cell_h)
        return AtlasRegion(min_uv, Vec2(min_uv.x + cell_w * width, min_uv.y + cell_h * height))

    def region_by_index(self, index: int, width_in_cells: int = 1, height_in_cells: int = 1) -> AtlasRegion:
        """Region of the cell counted row by row from the top-left."""
        index = _clamp(index, 0, self._columns * self._rows - 1)
        row, column = divmod(index, self._columns)
        return self.region(column, row, width_in_cells, height_in_cells)