import pytest

from cubcaster.errors import CubError, ErrorCode
from cubcaster.grid import (
    MapData,
    Position,
    check_player_inside,
    find_player,
    find_starting_point,
    has_valid_move,
    is_valid_move,
    longest_line_length,
    next_move,
    pad_map,
    revert_contour,
    trace_outer_walls,
    validate_characters,
    validate_map,
    validate_size,
)
from cubcaster.params import Direction

SQUARE = ["111", "1N1", "111"]
OFF_MAP = ["111  ", "101 N", "111  "]


def _rows(grid):
    return ["".join(row) for row in grid]


def test_position_moved_each_direction():
    pos = Position(5, 7)
    assert pos.moved(Direction.NO) == Position(4, 7)
    assert pos.moved(Direction.SO) == Position(6, 7)
    assert pos.moved(Direction.EA) == Position(5, 8)
    assert pos.moved(Direction.WE) == Position(5, 6)


def test_longest_line_length():
    assert longest_line_length(["1", "111", "11"]) == 3
    assert longest_line_length([]) == 0


def test_pad_map_shape():
    rows = ["1", "111", "11"]
    grid = pad_map(rows)
    assert len(grid) == len(rows) + 2
    assert all(len(row) == 3 + 2 for row in grid)
    assert set(grid[0]) == {" "}
    assert set(grid[-1]) == {" "}
    for original, padded in zip(rows, _rows(grid[1:-1])):
        assert padded == " " + original.ljust(3) + " "


def test_validate_size_rejects_small_grid():
    with pytest.raises(CubError) as info:
        validate_size(pad_map(["N"]))
    assert info.value.code is ErrorCode.INVALID_MAP_SIZE


def test_validate_characters_errors():
    with pytest.raises(CubError) as info:
        validate_characters(pad_map(["1X1", "1N1"]))
    assert info.value.code is ErrorCode.INVALID_CHAR_FOUND
    with pytest.raises(CubError) as info:
        validate_characters(pad_map(["1NS1"]))
    assert info.value.code is ErrorCode.MULTIPLE_POS_CHARS_FOUND
    with pytest.raises(CubError) as info:
        validate_characters(pad_map(["111"]))
    assert info.value.code is ErrorCode.MISSING_STARTING_POS_CHAR_ERROR


def test_find_starting_point_first_wall():
    grid = pad_map(SQUARE)
    start = find_starting_point(grid)
    assert grid[start.line][start.col] == "1"
    assert all(ch != "1" for row in grid[: start.line] for ch in row)


def test_find_starting_point_without_walls():
    with pytest.raises(CubError) as info:
        find_starting_point(pad_map(["000", "0N0", "000"]))
    assert info.value.code is ErrorCode.INVALID_MAP


def test_valid_moves_on_square():
    grid = pad_map(SQUARE)
    corner = Position(1, 1)
    assert is_valid_move(grid, corner.moved(Direction.EA))
    assert not is_valid_move(grid, corner.moved(Direction.NO))
    assert has_valid_move(grid, corner)
    assert next_move(grid, corner) == corner.moved(Direction.EA)


def test_next_move_none_when_isolated():
    grid = pad_map(["000", "0N0", "000"])
    assert next_move(grid, Position(2, 2)) is None
    assert not has_valid_move(grid, Position(2, 2))


def test_trace_marks_whole_ring():
    grid = pad_map(SQUARE)
    walls = sum(row.count("1") for row in grid)
    trace_outer_walls(grid)
    assert sum(row.count("1") for row in grid) == 0
    assert sum(row.count("x") for row in grid) == walls


def test_find_player_replaces_char():
    grid = pad_map(SQUARE)
    pos, char = find_player(grid)
    assert char == "N"
    assert grid[pos.line][pos.col] == "0"


def test_check_player_inside_and_revert():
    grid = pad_map(SQUARE)
    trace_outer_walls(grid)
    pos, _ = find_player(grid)
    check_player_inside(grid, pos)
    revert_contour(grid)
    assert sum(row.count("x") for row in grid) == 0
    expected = pad_map(["111", "101", "111"])
    assert grid == expected


def test_validate_map_square():
    data = validate_map(["111\n", "1N1\n", "111\n"])
    assert isinstance(data, MapData)
    assert data.start_char == "N"
    assert data.rows[data.start.line][data.start.col] == "0"
    assert data.rows == _rows(pad_map(["111", "101", "111"]))


def test_validate_map_drops_blank_lines():
    with_blank = validate_map(["111\n", "\n", "1E1\n", "111"])
    without = validate_map(["111", "1E1", "111"])
    assert with_blank.rows == without.rows
    assert with_blank.start == without.start


def test_validate_map_player_outside():
    with pytest.raises(CubError) as info:
        validate_map(OFF_MAP)
    assert info.value.code is ErrorCode.PLAYER_OFF_MAP


def test_validate_map_no_walls():
    with pytest.raises(CubError) as info:
        validate_map(["000", "0N0", "000"])
    assert info.value.code is ErrorCode.INVALID_MAP


def test_validate_map_empty():
    with pytest.raises(CubError) as info:
        validate_map([])
    assert info.value.code is ErrorCode.INVALID_MAP_SIZE