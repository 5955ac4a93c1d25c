"""Texture and colour parameters at the top of a scene file."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field

from cubcaster.errors import CubError, ErrorCode

_PARAMETER_CHARS = frozenset("NSEWFC")
_IDENTIFIERS = ("NO ", "SO ", "WE ", "EA ", "F ", "C ")
_DIRECTION_IDS = ("NO", "SO", "WE", "EA")
_COLOUR_CHARS = frozenset("+-0123456789")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")

PARAMETER_COUNT = 6


class Direction(enum.IntEnum):
    """Wall faces, in texture order."""

    NO = 0
    SO = 1
    EA = 2
    WE = 3


class Surface(enum.IntEnum):
    """Flat surfaces that take a plain colour."""

    FLOOR = 0
    CEILING = 1


_DIRECTIONS = {"N": Direction.NO, "S": Direction.SO, "E": Direction.EA, "W": Direction.WE}
_SURFACES = {"C": Surface.CEILING, "F": Surface.FLOOR}


def is_valid_parameter_char(char: str) -> bool:
    """Whether a line starting with ``char`` may be a parameter line."""
    return len(char) == 1 and char in _PARAMETER_CHARS


def has_valid_param_identifier(line: str) -> bool:
    """Whether the line starts with a known identifier and a space."""
    return line.startswith(_IDENTIFIERS)


def is_direction_identifier(identifier: str) -> bool:
    """Whether the identifier names a wall texture."""
    return identifier[:2] in _DIRECTION_IDS


def direction_for(char: str) -> Direction:
    """Map N, S, E or W to its wall direction."""
    try:
        return _DIRECTIONS[char]
    except KeyError:
        raise ValueError(f"not a direction character: {char!r}") from None


def surface_for(char: str) -> Surface:
    """Map F or C to its surface."""
    try:
        return _SURFACES[char]
    except KeyError:
        raise ValueError(f"not a surface character: {char!r}") from None


def jump_spaces(text: str) -> int:
    """Count the spaces at the start of the text."""
    return len(text) - len(text.lstrip(" "))


def _atoi(text: str) -> int:
    sign, digits = _ATOI.match(text).groups()
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def convert_colour(text: str) -> int:
    """Read one colour channel, which must lie between 0 and 255."""
    trimmed = text.strip(" \t\v\r")
    if any(char not in _COLOUR_CHARS for char in trimmed):
        raise CubError(ErrorCode.INVALID_COLOUR_PARAM)
    value = _atoi(trimmed)
    if not 0 <= value <= 255:
        raise CubError(ErrorCode.INVALID_COLOUR_PARAM)
    return value


def parse_colour(line: str) -> tuple[int, int, int]:
    """Read the three channels of a colour line such as ``F 220,100,0``."""
    if line.count(",") != 2:
        raise CubError(ErrorCode.INVALID_COLOUR_PARAM)
    parts = [part for part in line[1:].split(",") if part]
    if len(parts) != 3:
        raise CubError(ErrorCode.INVALID_COLOUR_PARAM)
    red, green, blue = (convert_colour(part) for part in parts)
    return red, green, blue


@dataclass
class SceneParams:
    """The texture paths and colours collected from a scene file."""

    textures: dict[Direction, str] = field(default_factory=dict)
    colours: dict[Surface, tuple[int, int, int]] = field(default_factory=dict)

    def add_line(self, line: str) -> None:
        """Record one parameter line, raising CubError when it is invalid."""
        if not has_valid_param_identifier(line):
            raise CubError(ErrorCode.INVALID_TEXTURE_PARAMS)
        if is_direction_identifier(line[:2]):
            self._add_texture(line)
        else:
            self._add_colour(line)

    def _add_texture(self, line: str) -> None:
        direction = direction_for(line[0])
        if direction in self.textures:
            raise CubError(ErrorCode.REDUNDANT_PARAMETER_FOUND)
        path = line[2 + jump_spaces(line[2:]):]
        try:
            with open(path, "rb"):
                pass
        except OSError as exc:
            raise CubError(ErrorCode.SYSCALL_ERROR, exc) from exc
        self.textures[direction] = path

    def _add_colour(self, line: str) -> None:
        surface = surface_for(line[0])
        if surface in self.colours:
            raise CubError(ErrorCode.REDUNDANT_PARAMETER_FOUND)
        self.colours[surface] = parse_colour(line)

    def is_complete(self) -> bool:
        """Whether all four textures and both colours are present."""
        return len(self.textures) + len(self.colours) == PARAMETER_COUNT