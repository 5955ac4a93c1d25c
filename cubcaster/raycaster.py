"""Camera, ray casting with DDA and textured frame rendering."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from cubcaster.xpm import XpmImage

_WALL = "1"
_DARKEN_MASK = 8355711
_MIN_DISTANCE = 1e-9

_FACING = {
    "N": ((-1.0, 0.0), (0.0, 0.66)),
    "S": ((1.0, 0.0), (0.0, -0.33)),
    "E": ((0.0, 1.0), (0.33, 0.0)),
    "W": ((0.0, -1.0), (-0.66, 0.0)),
}


def facing_vectors(start_char: str) -> tuple[tuple[float, float], tuple[float, float]]:
    """Direction and camera plane vectors for a starting character."""
    try:
        return _FACING[start_char]
    except KeyError:
        raise ValueError(f"not a starting character: {start_char!r}") from None


@dataclass
class Camera:
    """The player's position, view direction and camera plane."""

    pos_x: float
    pos_y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    move_speed: float = 0.1
    rot_speed: float = 0.05

    @classmethod
    def from_start(cls, line: int, col: int, start_char: str) -> Camera:
        """A camera at a map cell, facing the way the start character says."""
        (dir_x, dir_y), (plane_x, plane_y) = facing_vectors(start_char)
        return cls(float(line), float(col), dir_x, dir_y, plane_x, plane_y)


@dataclass(frozen=True)
class WallHit:
    """Where one ray met a wall."""

    map_x: int
    map_y: int
    side: int
    perp_wall_dist: float
    ray_dir_x: float
    ray_dir_y: float
    wall_x: float


def _delta(ray_dir: float) -> float:
    return math.inf if ray_dir == 0 else abs(1 / ray_dir)


def _is_wall(grid: Sequence[Sequence[str]], line: int, col: int) -> bool:
    if 0 <= line < len(grid) and 0 <= col < len(grid[line]):
        return grid[line][col] == _WALL
    return True


def cast_ray(camera: Camera, grid: Sequence[Sequence[str]], x: int, width: int) -> WallHit:
    """Cast the ray for screen column ``x`` and step through the grid to a wall."""
    camera_x = 2 * x / width - 1
    ray_dir_x = camera.dir_x + camera.plane_x * camera_x
    ray_dir_y = camera.dir_y + camera.plane_y * camera_x
    map_x = int(camera.pos_x)
    map_y = int(camera.pos_y)
    delta_x = _delta(ray_dir_x)
    delta_y = _delta(ray_dir_y)

    if ray_dir_x < 0:
        step_x = -1
        side_x = (camera.pos_x - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1.0 - camera.pos_x) * delta_x
    if ray_dir_y < 0:
        step_y = -1
        side_y = (camera.pos_y - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1.0 - camera.pos_y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _is_wall(grid, map_x, map_y):
            break

    if side == 0:
        perp = (map_x - camera.pos_x + (1 - step_x) // 2) / ray_dir_x
        wall_x = camera.pos_y + perp * ray_dir_y
    else:
        perp = (map_y - camera.pos_y + (1 - step_y) // 2) / ray_dir_y
        wall_x = camera.pos_x + perp * ray_dir_x
    wall_x -= math.floor(wall_x)
    return WallHit(map_x, map_y, side, perp, ray_dir_x, ray_dir_y, wall_x)


def texture_index(side: int, ray_dir_x: float, ray_dir_y: float) -> int:
    """Which of the four wall textures a hit shows."""
    if side == 0:
        return 0 if ray_dir_x < 0 else 2
    return 1 if ray_dir_y >= 0 else 3


def texture_column(hit: WallHit, tex_width: int) -> int:
    """The texture column for the point where the ray struck the wall."""
    tex_x = int(hit.wall_x * tex_width)
    if hit.side == 0 and hit.ray_dir_x > 0:
        tex_x = tex_width - tex_x - 1
    if hit.side == 1 and hit.ray_dir_y < 0:
        tex_x = tex_width - tex_x - 1
    return tex_x


def darken(colour: int) -> int:
    """Halve each channel, used for walls seen along the y axis."""
    return (colour >> 1) & _DARKEN_MASK


def _draw_column(
    frame: list[list[int]],
    x: int,
    hit: WallHit,
    textures: Sequence[XpmImage],
    ceiling: int,
    floor: int,
    height: int,
) -> None:
    distance = max(hit.perp_wall_dist, _MIN_DISTANCE)
    line_height = int(height / distance)
    half = height // 2
    draw_start = -(line_height // 2) + half
    if draw_start < 0 or draw_start > height:
        draw_start = 0
    draw_end = line_height // 2 + half
    if draw_end >= height:
        draw_end = height - 1

    texture = textures[texture_index(hit.side, hit.ray_dir_x, hit.ray_dir_y)]
    tex_x = texture_column(hit, texture.width)
    step = texture.height / line_height if line_height else 0.0
    tex_pos = (draw_start - half + line_height // 2) * step

    if draw_start == 0:
        draw_end = height
    for y in range(draw_start):
        frame[y][x] = ceiling
    for y in range(draw_start, draw_end):
        tex_y = int(tex_pos) & (texture.height - 1)
        tex_pos += step
        colour = texture.pixels[texture.width * tex_y + tex_x]
        if hit.side == 1:
            colour = darken(colour)
        frame[y][x] = colour
    # The row right after the wall slice is left untouched.
    for y in range(max(draw_start, draw_end) + 1, height):
        frame[y][x] = floor


def render_frame(
    camera: Camera,
    grid: Sequence[Sequence[str]],
    textures: Sequence[XpmImage],
    ceiling: int,
    floor: int,
    width: int,
    height: int,
) -> list[list[int]]:
    """Render one frame as rows of 0xRRGGBB pixels."""
    frame = [[0] * width for _ in range(height)]
    for x in range(width):
        hit = cast_ray(camera, grid, x, width)
        _draw_column(frame, x, hit, textures, ceiling, floor, height)
    return frame