"""Player actions: turning the view and walking through the map."""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence

from cubcaster.raycaster import Camera

_FLOOR = "0"


class Action(enum.Enum):
    """Things the player can do with a key press."""

    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    FORWARD = "forward"
    BACKWARD = "backward"
    STRAFE_LEFT = "strafe_left"
    STRAFE_RIGHT = "strafe_right"
    QUIT = "quit"


_ROTATIONS = frozenset({Action.ROTATE_LEFT, Action.ROTATE_RIGHT})
_MOVES = frozenset(
    {Action.FORWARD, Action.BACKWARD, Action.STRAFE_LEFT, Action.STRAFE_RIGHT}
)


def _rotated(x: float, y: float, angle: float) -> tuple[float, float]:
    cos, sin = math.cos(angle), math.sin(angle)
    return x * cos - y * sin, x * sin + y * cos


def rotate(camera: Camera, action: Action) -> None:
    """Turn the view direction and camera plane by the camera's rotation speed."""
    if action is Action.ROTATE_LEFT:
        angle = camera.rot_speed
    elif action is Action.ROTATE_RIGHT:
        angle = -camera.rot_speed
    else:
        raise ValueError(f"not a rotation: {action}")
    camera.dir_x, camera.dir_y = _rotated(camera.dir_x, camera.dir_y, angle)
    camera.plane_x, camera.plane_y = _rotated(camera.plane_x, camera.plane_y, angle)


def _is_floor(grid: Sequence[Sequence[str]], x: float, y: float) -> bool:
    line, col = int(x), int(y)
    if 0 <= line < len(grid) and 0 <= col < len(grid[line]):
        return grid[line][col] == _FLOOR
    return False


def _step(camera: Camera, action: Action) -> tuple[float, float]:
    speed = camera.move_speed
    if action is Action.FORWARD:
        return camera.dir_x * speed, camera.dir_y * speed
    if action is Action.BACKWARD:
        return -camera.dir_x * speed, -camera.dir_y * speed
    if action is Action.STRAFE_RIGHT:
        return camera.dir_y * speed, -camera.dir_x * speed
    if action is Action.STRAFE_LEFT:
        return -camera.dir_y * speed, camera.dir_x * speed
    raise ValueError(f"not a movement: {action}")


def move(camera: Camera, grid: Sequence[Sequence[str]], action: Action) -> None:
    """Walk one step, axis by axis, onto floor cells only."""
    dx, dy = _step(camera, action)
    if _is_floor(grid, camera.pos_x + dx, camera.pos_y):
        camera.pos_x += dx
    if _is_floor(grid, camera.pos_x, camera.pos_y + dy):
        camera.pos_y += dy


def handle_action(camera: Camera, grid: Sequence[Sequence[str]], action: Action) -> bool:
    """Apply an action; return False when the player asked to quit."""
    if action is Action.QUIT:
        return False
    if action in _ROTATIONS:
        rotate(camera, action)
    elif action in _MOVES:
        move(camera, grid, action)
    return True