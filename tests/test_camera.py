import numpy as np
import pytest

from simple_engine.camera import Camera
from simple_engine.geometry import Vec2


def _distance(a, b):
    return (a - b).length()


def test_defaults():
    camera = Camera()
    assert camera.follow_sharpness == 8.0
    assert camera.half_height == 1.0
    assert camera.position == Vec2()
    assert not camera.has_follow_target
    assert not camera.has_bounds


def test_view_matrix_moves_position_to_origin():
    camera = Camera()
    camera.position = Vec2(2.5, -1.5)
    result = camera.view_matrix() @ np.array([2.5, -1.5, 0.0, 1.0])
    np.testing.assert_allclose(result, [0.0, 0.0, 0.0, 1.0])


def test_projection_maps_view_corner_to_clip_corner():
    camera = Camera()
    camera.half_height = 3.0
    aspect = 2.0
    projection = camera.projection_matrix(aspect)
    corner = projection @ np.array([aspect * camera.half_height, camera.half_height, 0.0, 1.0])
    np.testing.assert_allclose(corner[:2], [1.0, 1.0])


def test_first_follow_target_is_taken_exactly():
    camera = Camera()
    camera.dead_zone = Vec2(4.0, 4.0)
    camera.set_follow_target(Vec2(1.25, -0.75))
    assert camera.target_position == Vec2(1.25, -0.75)
    assert camera.has_follow_target


def test_target_inside_dead_zone_keeps_aim():
    camera = Camera()
    camera.dead_zone = Vec2(2.0, 2.0)
    camera.set_follow_target(Vec2())
    camera.set_follow_target(Vec2(0.5, -0.5))
    assert camera.target_position == Vec2()


def test_target_outside_dead_zone_pulls_aim_to_edge():
    camera = Camera()
    camera.dead_zone = Vec2(2.0, 2.0)
    camera.set_follow_target(Vec2())
    camera.set_follow_target(Vec2(3.0, 0.0))
    assert 3.0 - camera.target_position.x == pytest.approx(camera.dead_zone.x / 2)
    assert camera.target_position.y == 0.0


def test_dead_zone_and_sharpness_clamp_negative_values():
    camera = Camera()
    camera.dead_zone = Vec2(-2.0, 3.0)
    assert camera.dead_zone == Vec2(0.0, 3.0)
    camera.follow_sharpness = -5.0
    assert camera.follow_sharpness == 0.0


def test_update_without_target_does_not_move():
    camera = Camera()
    camera.position = Vec2(1.0, 1.0)
    camera.update(1.0)
    assert camera.position == Vec2(1.0, 1.0)


def test_update_approaches_and_converges_on_target():
    camera = Camera()
    camera.set_follow_target(Vec2(4.0, 2.0))
    before = _distance(camera.position, camera.target_position)
    camera.update(0.1)
    after = _distance(camera.position, camera.target_position)
    assert after < before
    camera.update(100.0)
    assert camera.position.x == pytest.approx(4.0)
    assert camera.position.y == pytest.approx(2.0)


def test_two_small_steps_equal_one_large_step():
    first = Camera()
    second = Camera()
    for camera in (first, second):
        camera.set_follow_target(Vec2(5.0, -3.0))
    first.update(0.05)
    first.update(0.05)
    second.update(0.1)
    assert first.position.x == pytest.approx(second.position.x)
    assert first.position.y == pytest.approx(second.position.y)


def test_negative_delta_and_zero_sharpness_do_not_move():
    camera = Camera()
    camera.set_follow_target(Vec2(5.0, 5.0))
    camera.update(-1.0)
    assert camera.position == Vec2()
    camera.follow_sharpness = 0.0
    camera.update(1.0)
    assert camera.position == Vec2()


def test_clear_follow_target_pins_target_to_position():
    camera = Camera()
    camera.set_follow_target(Vec2(5.0, 5.0))
    camera.update(0.1)
    camera.clear_follow_target()
    assert not camera.has_follow_target
    assert camera.target_position == camera.position


def test_bounds_clamp_target_using_default_aspect():
    camera = Camera()
    camera.set_bounds(Vec2(-10.0, -10.0), Vec2(10.0, 10.0))
    camera.set_follow_target(Vec2(100.0, 100.0))
    assert camera.has_bounds
    assert camera.target_position.x == pytest.approx(10.0 - 16.0 / 9.0)
    assert camera.target_position.y == pytest.approx(10.0 - camera.half_height)


def test_bounds_use_last_projection_aspect():
    camera = Camera()
    camera.projection_matrix(1.0)
    camera.set_bounds(Vec2(-10.0, -10.0), Vec2(10.0, 10.0))
    camera.set_follow_target(Vec2(100.0, 0.0))
    assert camera.target_position.x == pytest.approx(10.0 - camera.half_height)


def test_bounds_smaller_than_view_center_the_camera():
    camera = Camera()
    camera.set_bounds(Vec2(2.0, -1.0), Vec2(4.0, 1.0))
    assert camera.position.x == pytest.approx((2.0 + 4.0) / 2)
    assert camera.position.y == pytest.approx(0.0)


def test_set_bounds_clamps_current_position():
    camera = Camera()
    camera.set_bounds(Vec2(5.0, 5.0), Vec2(20.0, 20.0))
    assert camera.position.x == pytest.approx(5.0 + 16.0 / 9.0)
    assert camera.position.y == pytest.approx(5.0 + camera.half_height)


def test_clear_bounds_stops_clamping():
    camera = Camera()
    camera.set_bounds(Vec2(-1.0, -1.0), Vec2(1.0, 1.0))
    camera.clear_bounds()
    camera.set_follow_target(Vec2(50.0, -50.0))
    assert not camera.has_bounds
    assert camera.target_position == Vec2(50.0, -50.0)