"""Error codes, their messages and the exception raised for them."""

from __future__ import annotations

import enum

_HEADER = " \u274c Error "

_VALID_CHARS = "01NSEW "


class ErrorCode(enum.IntEnum):
    """Reasons a scene cannot be loaded or the game cannot start."""

    SYSCALL_ERROR = 0
    WRONG_ARGS_NO = 1
    FILE_EXTENSION_ERROR = 2
    INVALID_TEXTURE_PARAMS = 3
    MISSING_PARAMETER = 4
    REDUNDANT_PARAMETER_FOUND = 5
    INVALID_COLOUR_PARAM = 6
    INVALID_MAP = 7
    MEMORY_ALLOCATION = 8
    INVALID_CHAR_FOUND = 9
    INVALID_MAP_SIZE = 10
    MISSING_STARTING_POS_CHAR_ERROR = 11
    MULTIPLE_POS_CHARS_FOUND = 12
    PLAYER_OFF_MAP = 13
    MLX_ERROR = 14


_MESSAGES = {
    ErrorCode.SYSCALL_ERROR: "Undefined error message",
    ErrorCode.WRONG_ARGS_NO: "Run: ./cub3d PATH_TO_MAP",
    ErrorCode.FILE_EXTENSION_ERROR: "File extension must be .cub",
    ErrorCode.INVALID_TEXTURE_PARAMS: (
        "Invalid texture parameter. Must be either NO, SO, EA, WE, F or C, "
        "followed by a space and the path to the texture file."
    ),
    ErrorCode.MISSING_PARAMETER: (
        "Missing parameter. Provide 4 texture file paths and 2 colours."
    ),
    ErrorCode.REDUNDANT_PARAMETER_FOUND: (
        "Redundant parameter found. Parameter duplicates not allowed."
    ),
    ErrorCode.INVALID_COLOUR_PARAM: (
        "Invalid colour format. Use: R, G, B, each value ranging from 0 to 255."
    ),
    ErrorCode.INVALID_MAP: "Invalid map.",
    ErrorCode.MEMORY_ALLOCATION: "Error allocating memory. Ran out of RAM?",
    ErrorCode.INVALID_CHAR_FOUND: (
        f"Map has invalid char. Valid chars are: {_VALID_CHARS}"
    ),
    ErrorCode.INVALID_MAP_SIZE: "Invalid map size.",
    ErrorCode.MISSING_STARTING_POS_CHAR_ERROR: (
        "No starting position character found. Valid chars are: N, S, E, W."
    ),
    ErrorCode.MULTIPLE_POS_CHARS_FOUND: (
        "Multiple starting position characters found. Only one allowed."
    ),
    ErrorCode.PLAYER_OFF_MAP: "Player starting position is outside the map.",
    ErrorCode.MLX_ERROR: "MLX error",
}


def error_message(code: ErrorCode | int) -> str:
    """Return the fixed message for an error code."""
    return _MESSAGES[ErrorCode(code)]


def _system_text(detail: object) -> str:
    if isinstance(detail, OSError):
        return detail.strerror or str(detail)
    if detail:
        return str(detail)
    return "Unknown error"


class CubError(Exception):
    """Raised when the scene or the game setup is invalid."""

    def __init__(self, code: ErrorCode | int, detail: object = None) -> None:
        self.code = ErrorCode(code)
        self.detail = detail
        if self.code is ErrorCode.SYSCALL_ERROR:
            text = _system_text(detail)
        else:
            text = error_message(self.code)
        super().__init__(text)

    def exit_status(self) -> int:
        """Process exit status: the code plus the system error number, if any."""
        errno = getattr(self.detail, "errno", None) or 0
        return int(self.code) + errno


def format_error(error: CubError) -> str:
    """Render an error the way it is shown to the player."""
    if error.code is ErrorCode.SYSCALL_ERROR:
        body = _system_text(error.detail)
    else:
        body = error_message(error.code)
    return f"{_HEADER}\n{body}"