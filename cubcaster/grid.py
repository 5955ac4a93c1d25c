"""Map grid: padding, wall tracing and player position checks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from cubcaster.errors import CubError, ErrorCode
from cubcaster.params import Direction

Grid = list[list[str]]

VALID_CHARS = frozenset("01NSEW ")
STARTING_CHARS = frozenset("NSEW")

_WALL = "1"
_TRACED = "x"
_ABANDONED = "y"
_FLOOR = "0"
_VOID = " "

_MOVE_ORDER = (Direction.NO, Direction.EA, Direction.SO, Direction.WE)
_NEIGHBOUR_ORDER = (Direction.NO, Direction.EA, Direction.SO, Direction.WE)


@dataclass(frozen=True)
class Position:
    """A cell of the grid, by line and column."""

    line: int
    col: int

    def moved(self, direction: Direction) -> Position:
        """The neighbouring cell in the given direction."""
        if direction is Direction.NO:
            return Position(self.line - 1, self.col)
        if direction is Direction.EA:
            return Position(self.line, self.col + 1)
        if direction is Direction.SO:
            return Position(self.line + 1, self.col)
        return Position(self.line, self.col - 1)


@dataclass
class MapData:
    """A validated map with the player's starting cell and facing."""

    grid: Grid
    start: Position
    start_char: str

    @property
    def rows(self) -> list[str]:
        """The grid as a list of strings."""
        return ["".join(row) for row in self.grid]


def _cell(grid: Grid, line: int, col: int) -> str:
    if 0 <= line < len(grid) and 0 <= col < len(grid[line]):
        return grid[line][col]
    return ""


def _at(grid: Grid, pos: Position) -> str:
    return _cell(grid, pos.line, pos.col)


def _set(grid: Grid, pos: Position, char: str) -> None:
    grid[pos.line][pos.col] = char


def longest_line_length(rows: Iterable[str]) -> int:
    """Length of the longest row, 0 for no rows."""
    return max((len(row) for row in rows), default=0)


def pad_map(rows: list[str]) -> Grid:
    """Surround the map with spaces so every row has the same length.

    A blank row goes above and below, every row is filled out to the
    longest length, and one space is added at each end of every row.
    """
    length = longest_line_length(rows)
    blank = _VOID * length
    padded = [blank, *(row.ljust(length, _VOID) for row in rows), blank]
    return [list(_VOID + row + _VOID) for row in padded]


def validate_size(grid: Grid) -> None:
    """Reject grids with fewer than three rows or rows shorter than five."""
    if len(grid) < 3 or len(grid[0]) < 5:
        raise CubError(ErrorCode.INVALID_MAP_SIZE)


def validate_characters(grid: Grid) -> None:
    """Check every cell is a valid character and exactly one is a start."""
    found_start = False
    for row in grid:
        for char in row:
            if char not in VALID_CHARS:
                raise CubError(ErrorCode.INVALID_CHAR_FOUND)
            if char in STARTING_CHARS:
                if found_start:
                    raise CubError(ErrorCode.MULTIPLE_POS_CHARS_FOUND)
                found_start = True
    if not found_start:
        raise CubError(ErrorCode.MISSING_STARTING_POS_CHAR_ERROR)


def find_starting_point(grid: Grid) -> Position:
    """The first wall cell in reading order."""
    for line, row in enumerate(grid):
        for col, char in enumerate(row):
            if char == _WALL:
                return Position(line, col)
    raise CubError(ErrorCode.INVALID_MAP)


def _touches_void(grid: Grid, pos: Position) -> bool:
    return any(
        _cell(grid, pos.line + dl, pos.col + dc) == _VOID
        for dl in (-1, 0, 1)
        for dc in (-1, 0, 1)
    )


def is_valid_move(grid: Grid, position: Position) -> bool:
    """Whether the cell is an untraced wall lying next to empty space."""
    return _at(grid, position) == _WALL and _touches_void(grid, position)


def has_valid_move(grid: Grid, position: Position) -> bool:
    """Whether any of the four neighbours is a valid move."""
    return any(is_valid_move(grid, position.moved(d)) for d in Direction)


def next_move(grid: Grid, position: Position) -> Position | None:
    """The first valid neighbour, trying north, east, south then west."""
    for direction in _MOVE_ORDER:
        candidate = position.moved(direction)
        if is_valid_move(grid, candidate):
            return candidate
    return None


def _has_neighbouring_wall(grid: Grid, pos: Position) -> bool:
    return any(_at(grid, pos.moved(d)) == _WALL for d in _NEIGHBOUR_ORDER)


def _traced_neighbour(grid: Grid, pos: Position) -> Position | None:
    for direction in _NEIGHBOUR_ORDER:
        candidate = pos.moved(direction)
        if _at(grid, candidate) == _TRACED:
            return candidate
    return None


def _step_forward(grid: Grid, pos: Position) -> Position | None:
    target = next_move(grid, pos)
    if target is not None:
        _set(grid, target, _TRACED)
    return target


def _reverse(grid: Grid, pos: Position) -> Position | None:
    """Walk back along the traced path until a fresh wall is in reach."""
    while not _has_neighbouring_wall(grid, pos):
        back = _traced_neighbour(grid, pos)
        if back is None:
            return None
        _set(grid, pos, _ABANDONED)
        pos = back
    return _step_forward(grid, pos)


def _decide_next(grid: Grid, pos: Position) -> Position | None:
    if has_valid_move(grid, pos):
        return _step_forward(grid, pos)
    return _reverse(grid, pos)


def trace_outer_walls(grid: Grid) -> None:
    """Follow the outer wall from its first cell until it closes.

    Traced cells are marked ``x``; cells on dead ends are marked ``y``.
    Raises CubError when the wall does not lead back to its start.
    """
    start = find_starting_point(grid)
    target = _decide_next(grid, start)
    while target is not None and target != start:
        target = _decide_next(grid, target)
    if target != start:
        raise CubError(ErrorCode.INVALID_MAP)


def find_player(grid: Grid) -> tuple[Position, str]:
    """Locate the starting cell, replace it with floor and return it."""
    for line, row in enumerate(grid):
        for col, char in enumerate(row):
            if char in STARTING_CHARS:
                row[col] = _FLOOR
                return Position(line, col), char
    raise CubError(ErrorCode.MISSING_STARTING_POS_CHAR_ERROR)


def _changes_side(grid: Grid, line: int, col: int) -> bool:
    enters_from_above = _cell(grid, line - 1, col) == _TRACED
    col += 1
    while _cell(grid, line, col) == _TRACED:
        col += 1
    leaves_above = _cell(grid, line - 1, col - 1) == _TRACED
    return enters_from_above != leaves_above


def check_player_inside(grid: Grid, position: Position) -> None:
    """Cast a ray eastwards and count wall crossings; even means outside."""
    row = grid[position.line]
    crossings = 0
    col = position.col + 1
    while col < len(row):
        if row[col] == _TRACED:
            if _cell(grid, position.line, col + 1) != _TRACED:
                crossings += 1
            else:
                crossings += _changes_side(grid, position.line, col)
                col += 1
                while _cell(grid, position.line, col) == _TRACED:
                    col += 1
        col += 1
    if crossings % 2 == 0:
        raise CubError(ErrorCode.PLAYER_OFF_MAP)


def revert_contour(grid: Grid) -> None:
    """Turn traced cells back into walls."""
    for row in grid:
        for col, char in enumerate(row):
            if char == _TRACED:
                row[col] = _WALL


def validate_map(lines: Iterable[str]) -> MapData:
    """Build and check the map from the lines following the parameters.

    Blank lines are dropped. Raises CubError for any invalid map.
    """
    text = "\n".join(line.removesuffix("\n") for line in lines)
    rows = [row for row in text.split("\n") if row]
    grid = pad_map(rows)
    validate_size(grid)
    validate_characters(grid)
    trace_outer_walls(grid)
    start, start_char = find_player(grid)
    check_player_inside(grid, start)
    revert_contour(grid)
    return MapData(grid, start, start_char)