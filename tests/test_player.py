import math

import pytest

from cubcaster.player import Action, handle_action, move, rotate
from cubcaster.raycaster import Camera

GRID = [
    "1111111",
    "1000001",
    "1000001",
    "1000001",
    "1111111",
]


def north_camera(x=2.5, y=3.5):
    return Camera.from_start(0, 0, "N").__class__(x, y, -1.0, 0.0, 0.0, 0.66)


def test_rotate_left_then_right_restores_view():
    camera = north_camera()
    rotate(camera, Action.ROTATE_LEFT)
    rotate(camera, Action.ROTATE_RIGHT)
    assert camera.dir_x == pytest.approx(-1.0)
    assert camera.dir_y == pytest.approx(0.0, abs=1e-12)
    assert camera.plane_x == pytest.approx(0.0, abs=1e-12)
    assert camera.plane_y == pytest.approx(0.66)


def test_rotation_keeps_vector_lengths():
    camera = north_camera()
    for _ in range(10):
        rotate(camera, Action.ROTATE_RIGHT)
    assert math.hypot(camera.dir_x, camera.dir_y) == pytest.approx(1.0)
    assert math.hypot(camera.plane_x, camera.plane_y) == pytest.approx(0.66)


def test_rotate_right_from_north_turns_east():
    camera = north_camera()
    rotate(camera, Action.ROTATE_RIGHT)
    assert camera.dir_y > 0
    assert camera.dir_x == pytest.approx(-math.cos(camera.rot_speed))


def test_rotate_rejects_movement():
    with pytest.raises(ValueError):
        rotate(north_camera(), Action.FORWARD)


def test_forward_moves_along_direction():
    camera = north_camera()
    move(camera, GRID, Action.FORWARD)
    assert camera.pos_x == pytest.approx(2.5 - camera.move_speed)
    assert camera.pos_y == pytest.approx(3.5)


def test_backward_moves_against_direction():
    camera = north_camera()
    move(camera, GRID, Action.BACKWARD)
    assert camera.pos_x == pytest.approx(2.5 + camera.move_speed)


def test_strafing_moves_sideways():
    right = north_camera()
    move(right, GRID, Action.STRAFE_RIGHT)
    left = north_camera()
    move(left, GRID, Action.STRAFE_LEFT)
    assert right.pos_y == pytest.approx(3.5 + right.move_speed)
    assert left.pos_y == pytest.approx(3.5 - left.move_speed)
    assert right.pos_x == pytest.approx(2.5)


def test_walls_block_movement():
    camera = north_camera(x=1.05, y=1.05)
    move(camera, GRID, Action.FORWARD)
    move(camera, GRID, Action.STRAFE_LEFT)
    assert (camera.pos_x, camera.pos_y) == (1.05, 1.05)


def test_move_rejects_rotation():
    with pytest.raises(ValueError):
        move(north_camera(), GRID, Action.ROTATE_LEFT)


def test_handle_action_quit_stops():
    camera = north_camera()
    assert handle_action(camera, GRID, Action.QUIT) is False
    assert camera.pos_x == 2.5


def test_handle_action_applies_and_continues():
    camera = north_camera()
    assert handle_action(camera, GRID, Action.FORWARD) is True
    assert camera.pos_x < 2.5
    assert handle_action(camera, GRID, Action.ROTATE_LEFT) is True
    assert camera.dir_y < 0