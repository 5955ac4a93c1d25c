"""The game window: texture loading, key handling and the frame loop."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from cubcaster.errors import CubError, ErrorCode, format_error  # noqa: E402
from cubcaster.params import Direction  # noqa: E402
from cubcaster.player import Action, handle_action  # noqa: E402
from cubcaster.raycaster import Camera, render_frame  # noqa: E402
from cubcaster.scene import Scene, load_scene, validate_args  # noqa: E402
from cubcaster.xpm import XpmImage, load_xpm  # noqa: E402

WIDTH = 640
HEIGHT = 480
TEX_WIDTH = 64
TEX_HEIGHT = 64
TITLE = "cub3D"
FPS = 60

_KEYS = {
    pygame.K_ESCAPE: Action.QUIT,
    pygame.K_LEFT: Action.ROTATE_LEFT,
    pygame.K_RIGHT: Action.ROTATE_RIGHT,
    pygame.K_w: Action.FORWARD,
    pygame.K_s: Action.BACKWARD,
    pygame.K_a: Action.STRAFE_LEFT,
    pygame.K_d: Action.STRAFE_RIGHT,
}


def load_textures(scene: Scene, tex_width: int, tex_height: int) -> list[XpmImage]:
    """Load the four wall textures in direction order into fixed-size buffers.

    Pixels are copied in storage order; a smaller image leaves the rest
    black and a larger one is cut short.
    """
    size = tex_width * tex_height
    textures = []
    for direction in Direction:
        try:
            image = load_xpm(scene.textures[direction])
        except (OSError, ValueError) as exc:
            raise CubError(ErrorCode.MLX_ERROR, exc) from exc
        pixels = image.pixels[:size]
        pixels += [0] * (size - len(pixels))
        textures.append(XpmImage(tex_width, tex_height, pixels))
    return textures


def action_for_key(key: int) -> Action | None:
    """The action bound to a pygame key code, or None."""
    return _KEYS.get(key)


def _frame_surface(frame: Sequence[Sequence[int]], width: int, height: int) -> pygame.Surface:
    flat = [pixel for row in frame for pixel in row]
    buffer = bytearray(len(flat) * 3)
    buffer[0::3] = bytes((pixel >> 16) & 0xFF for pixel in flat)
    buffer[1::3] = bytes((pixel >> 8) & 0xFF for pixel in flat)
    buffer[2::3] = bytes(pixel & 0xFF for pixel in flat)
    return pygame.image.frombuffer(bytes(buffer), (width, height), "RGB")


class Game:
    """A loaded scene with its camera, ready to render and play."""

    def __init__(self, scene: Scene, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.scene = scene
        self.width = width
        self.height = height
        start = scene.map_data.start
        self.camera = Camera.from_start(start.line, start.col, scene.map_data.start_char)
        self.grid = scene.map_data.grid
        self.textures = load_textures(scene, TEX_WIDTH, TEX_HEIGHT)
        self.ceiling = scene.ceiling_colour()
        self.floor = scene.floor_colour()

    def frame(self) -> list[list[int]]:
        """Render the current view as rows of 0xRRGGBB pixels."""
        return render_frame(
            self.camera, self.grid, self.textures,
            self.ceiling, self.floor, self.width, self.height,
        )

    def run(self) -> None:
        """Open the window and play until it is closed or Escape is pressed."""
        pygame.init()
        try:
            try:
                screen = pygame.display.set_mode((self.width, self.height))
            except pygame.error as exc:
                raise CubError(ErrorCode.MLX_ERROR, exc) from exc
            pygame.display.set_caption(TITLE)
            clock = pygame.time.Clock()
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        action = action_for_key(event.key)
                        if action is not None and not handle_action(
                            self.camera, self.grid, action
                        ):
                            running = False
                if not running:
                    break
                screen.blit(_frame_surface(self.frame(), self.width, self.height), (0, 0))
                pygame.display.flip()
                clock.tick(FPS)
        finally:
            pygame.quit()
        print("Closing the game...")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        path = validate_args([TITLE, *args])
        game = Game(load_scene(path))
        game.run()
    except CubError as error:
        print(format_error(error))
        return error.exit_status()
    return 0


if __name__ == "__main__":
    sys.exit(main())