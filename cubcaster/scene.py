"""Loading a whole scene file: parameters followed by the map."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from cubcaster.colours import encode_rgb
from cubcaster.errors import CubError, ErrorCode
from cubcaster.grid import MapData, validate_map
from cubcaster.params import Direction, SceneParams, Surface, is_valid_parameter_char

SCENE_EXTENSION = ".cub"


@dataclass
class Scene:
    """Everything read from a scene file."""

    textures: dict[Direction, str]
    colours: dict[Surface, tuple[int, int, int]]
    map_data: MapData = field(repr=False)

    def floor_colour(self) -> int:
        """The floor colour as 0xRRGGBB."""
        return encode_rgb(*self.colours[Surface.FLOOR])

    def ceiling_colour(self) -> int:
        """The ceiling colour as 0xRRGGBB."""
        return encode_rgb(*self.colours[Surface.CEILING])


def validate_args(argv: Sequence[str]) -> Path:
    """Check the command line names one readable ``.cub`` file and return it.

    ``argv`` includes the program name, as ``sys.argv`` does.
    """
    if len(argv) != 2:
        raise CubError(ErrorCode.WRONG_ARGS_NO)
    name = argv[1]
    if not name.endswith(SCENE_EXTENSION):
        raise CubError(ErrorCode.FILE_EXTENSION_ERROR)
    path = Path(name)
    try:
        with open(path, "rb"):
            pass
    except OSError as exc:
        raise CubError(ErrorCode.SYSCALL_ERROR, exc) from exc
    return path


def _trim(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def parse_scene(lines: Iterable[str]) -> Scene:
    """Read the parameter lines, then the map, raising CubError on any fault."""
    source = iter(lines)
    params = SceneParams()
    first_map_line: str | None = None
    for raw in source:
        line = _trim(raw)
        if not line:
            continue
        if not is_valid_parameter_char(line[0]):
            first_map_line = line
            break
        params.add_line(line)
    if not params.is_complete():
        raise CubError(ErrorCode.MISSING_PARAMETER)
    map_lines = [] if first_map_line is None else [first_map_line, *source]
    map_data = validate_map(map_lines)
    return Scene(dict(params.textures), dict(params.colours), map_data)


def load_scene(path: str | Path) -> Scene:
    """Open a scene file and parse it."""
    try:
        handle = open(path, encoding="utf-8")
    except OSError as exc:
        raise CubError(ErrorCode.SYSCALL_ERROR, exc) from exc
    with handle:
        return parse_scene(handle)