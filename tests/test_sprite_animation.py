import pytest

from simple_engine.geometry import Vec2
from simple_engine.sprite_animation import SpriteAnimation
from simple_engine.texture_atlas import AtlasRegion


class _RecordingMaterial:
    def __init__(self):
        self.region = None
        self.resets = 0

    def set_texture_region(self, min_uv, max_uv):
        self.region = (min_uv, max_uv)

    def reset_texture_region(self):
        self.resets += 1


def _configured(frame_count=3, columns=3, rows=1, duration=0.5, loop=True, start_frame=0, region=None):
    animation = SpriteAnimation()
    animation.configure_grid(frame_count, columns, rows, duration, loop, start_frame, region)
    return animation


def _frames_after_steps(animation, steps, delta=0.5):
    seen = []
    for _ in range(steps):
        animation.update(delta)
        seen.append(animation.current_frame)
    return seen


def test_defaults():
    animation = SpriteAnimation()
    assert animation.is_valid()
    assert not animation.playing
    assert animation.frame_duration == pytest.approx(0.1)
    assert animation.frame_count == 1
    assert animation.atlas_region == AtlasRegion()


@pytest.mark.parametrize("animation, delta", [(SpriteAnimation(), 10.0), (_configured(), -3.0)])
def test_update_without_progress_keeps_start_frame(animation, delta):
    animation.update(delta)
    assert animation.current_frame == animation.start_frame


def test_configure_clamps_values():
    animation = _configured(frame_count=50, columns=0, rows=2, duration=0.0)
    assert animation.columns == 1
    assert animation.frame_count == animation.columns * animation.rows
    assert animation.frame_duration == pytest.approx(0.0001)
    assert animation.playing


def test_start_frame_is_clamped_to_fit():
    animation = _configured(frame_count=3, columns=2, rows=2, start_frame=10)
    assert animation.start_frame + animation.frame_count == animation.columns * animation.rows
    assert animation.current_frame == animation.start_frame


def test_invalid_atlas_region_is_replaced():
    animation = _configured(region=AtlasRegion(Vec2(0.8, 0.8), Vec2(0.2, 0.2)))
    assert animation.atlas_region == AtlasRegion()


@pytest.mark.parametrize(
    "kwargs, steps, expected",
    [
        ({}, 3, [1, 2, 0]),
        ({"frame_count": 2, "columns": 4, "start_frame": 2}, 2, [3, 2]),
    ],
)
def test_looping_animation_cycles_frames(kwargs, steps, expected):
    animation = _configured(**kwargs)
    assert _frames_after_steps(animation, steps) == expected
    assert animation.playing


def test_full_cycle_in_one_update_returns_to_start():
    animation = _configured(frame_count=4, columns=4)
    animation.update(0.5 * animation.frame_count)
    assert animation.current_frame == animation.start_frame


def test_non_looping_animation_stops_on_last_frame():
    animation = _configured(loop=False)
    last = animation.start_frame + animation.frame_count - 1
    assert _frames_after_steps(animation, 2, delta=10.0) == [last, last]
    assert not animation.playing


def test_stop_and_play():
    animation = _configured()
    animation.stop()
    animation.update(0.5)
    assert not animation.playing
    assert animation.current_frame == animation.start_frame
    animation.play()
    animation.update(0.5)
    assert animation.current_frame == animation.start_frame + 1


def test_set_frame_clamps_and_reset_returns_to_start():
    animation = _configured(frame_count=2, columns=4, start_frame=1)
    animation.set_frame(-5)
    assert animation.current_frame == animation.start_frame
    animation.set_frame(100)
    assert animation.current_frame == animation.start_frame + animation.frame_count - 1
    animation.reset()
    assert animation.current_frame == animation.start_frame


def test_apply_covers_each_cell_of_the_grid():
    animation = _configured(frame_count=4, columns=2, rows=2)
    material = _RecordingMaterial()
    regions = []
    for frame in range(4):
        animation.set_frame(frame)
        animation.apply(material)
        regions.append(material.region)

    size = animation.frame_size
    assert regions[0][0] == Vec2(0.0, 0.0)
    assert all(max_uv - min_uv == size for min_uv, max_uv in regions)
    assert all(AtlasRegion(min_uv, max_uv).is_valid() for min_uv, max_uv in regions)
    assert len({min_uv for min_uv, _ in regions}) == 4
    assert sum((b - a).x * (b - a).y for a, b in regions) == pytest.approx(1.0)
    assert material.resets == 0


def test_apply_stays_inside_atlas_region():
    region = AtlasRegion(Vec2(0.5, 0.0), Vec2(1.0, 0.5))
    animation = _configured(frame_count=2, columns=2, rows=1, region=region)
    material = _RecordingMaterial()

    animation.apply(material)
    assert material.region[0] == region.min_uv

    animation.set_frame(1)
    animation.apply(material)
    assert material.region[1].x == pytest.approx(region.max_uv.x)
    assert material.region[1].y == pytest.approx(region.max_uv.y)