"""Frame-by-frame animation over a grid of cells inside an atlas region."""

from __future__ import annotations

from typing import Protocol

from simple_engine.geometry import Vec2
from simple_engine.texture_atlas import AtlasRegion, _clamp

_MIN_FRAME_DURATION = 0.0001


class TextureRegionTarget(Protocol):
    def set_texture_region(self, min_uv: Vec2, max_uv: Vec2) -> None: ...

    def reset_texture_region(self) -> None: ...


class SpriteAnimation:
    """Steps through ``frame_count`` cells of a ``columns`` x ``rows`` grid."""

    def __init__(self) -> None:
        self.frame_count = 1
        self.columns = 1
        self.rows = 1
        self.start_frame = 0
        self.current_frame = 0
        self.frame_duration = 0.1
        self.looping = True
        self.playing = False
        self.atlas_region = AtlasRegion()
        self._accumulated_time = 0.0

    def configure_grid(
        self,
        frame_count: int,
        columns: int,
        rows: int,
        frame_duration: float,
        loop: bool = True,
        start_frame: int = 0,
        atlas_region: AtlasRegion | None = None,
    ) -> None:
        """Set up the grid and start playing from ``start_frame``."""
        self.columns = max(columns, 1)
        self.rows = max(rows, 1)
        total_frames = self.columns * self.rows

        self.frame_count = _clamp(frame_count, 1, total_frames)
        self.frame_duration = max(frame_duration, _MIN_FRAME_DURATION)
        self.looping = loop
        self.start_frame = _clamp(start_frame, 0, total_frames - self.frame_count)
        self.playing = True
        region = atlas_region if atlas_region is not None else AtlasRegion()
        self.atlas_region = region if region.is_valid() else AtlasRegion()
        self.set_frame(self.start_frame)

    @property
    def _last_frame(self) -> int:
        return self.start_frame + self.frame_count - 1

    def update(self, delta_time: float) -> None:
        """Advance by the elapsed time, looping or stopping at the last frame."""
        if not self.is_valid() or not self.playing:
            return

        self._accumulated_time += max(delta_time, 0.0)
        while self._accumulated_time >= self.frame_duration:
            self._accumulated_time -= self.frame_duration
            if self.current_frame < self._last_frame:
                self.current_frame += 1
            elif self.looping:
                self.current_frame = self.start_frame
            else:
                self.current_frame = self._last_frame
                self.playing = False
                self._accumulated_time = 0.0
                break

    def apply(self, material: TextureRegionTarget) -> None:
        """Point the material at the current frame's UV rectangle."""
        if not self.is_valid():
            material.reset_texture_region()
            return

        frame_size = self.frame_size
        row, column = divmod(self.current_frame, self.columns)
        base = self.atlas_region.min_uv
        min_uv = Vec2(base.x + column * frame_size.x, base.y + row * frame_size.y)
        material.set_texture_region(min_uv, min_uv + frame_size)

    def reset(self) -> None:
        self.current_frame = self.start_frame
        self._accumulated_time = 0.0

    def play(self) -> None:
        if self.is_valid():
            self.playing = True

    def stop(self) -> None:
        self.playing = False

    def set_frame(self, frame_index: int) -> None:
        """Jump to a frame, clamped to the animation's range."""
        if not self.is_valid():
            self.current_frame = 0
            return
        self.current_frame = _clamp(frame_index, self.start_frame, self._last_frame)
        self._accumulated_time = 0.0

    def is_valid(self) -> bool:
        return (
            min(self.frame_count, self.columns, self.rows) > 0
            and self.start_frame >= 0
            and self.start_frame + self.frame_count <= self.columns * self.rows
        )

    @property
    def frame_size(self) -> Vec2:
        """UV size of one grid cell within the atlas region."""
        atlas_size = self.atlas_region.size
        return Vec2(atlas_size.x / self.columns, atlas_size.y / self.rows)