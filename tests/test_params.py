import pytest

from cubcaster.errors import CubError, ErrorCode
from cubcaster.params import (
    Direction,
    SceneParams,
    Surface,
    convert_colour,
    direction_for,
    has_valid_param_identifier,
    is_direction_identifier,
    is_valid_parameter_char,
    jump_spaces,
    parse_colour,
    surface_for,
)


@pytest.fixture
def texture_files(tmp_path):
    paths = {}
    for name in ("NO", "SO", "EA", "WE"):
        path = tmp_path / f"{name.lower()}.xpm"
        path.write_text("x")
        paths[name] = str(path)
    return paths


@pytest.mark.parametrize("char,expected", [("N", True), ("C", True), ("F", True), ("1", False), ("X", False), (" ", False)])
def test_parameter_chars(char, expected):
    assert is_valid_parameter_char(char) is expected


@pytest.mark.parametrize(
    "line,expected",
    [("NO ./a", True), ("EA x", True), ("F 1,2,3", True), ("C 1,2,3", True),
     ("NO./a", False), ("FX", False), ("N ./a", False), ("", False)],
)
def test_identifiers(line, expected):
    assert has_valid_param_identifier(line) is expected


def test_direction_identifier():
    assert is_direction_identifier("WE")
    assert not is_direction_identifier("F ")


def test_direction_and_surface_lookup():
    assert direction_for("N") is Direction.NO
    assert direction_for("W") is Direction.WE
    assert surface_for("F") is Surface.FLOOR
    assert surface_for("C") is Surface.CEILING
    with pytest.raises(ValueError):
        direction_for("F")
    with pytest.raises(ValueError):
        surface_for("N")


def test_jump_spaces():
    assert jump_spaces("   x  ") == 3
    assert jump_spaces("x") == 0


@pytest.mark.parametrize("text,expected", [(" 42 ", 42), ("0", 0), ("255", 255), ("+7", 7), (" ", 0)])
def test_convert_colour(text, expected):
    assert convert_colour(text) == expected


@pytest.mark.parametrize("text", ["256", "-1", "4a", "1.5"])
def test_convert_colour_rejects(text):
    with pytest.raises(CubError) as info:
        convert_colour(text)
    assert info.value.code is ErrorCode.INVALID_COLOUR_PARAM


def test_parse_colour():
    assert parse_colour("F 220,100,0") == (220, 100, 0)
    assert parse_colour("C  1 , 2 , 3") == (1, 2, 3)


@pytest.mark.parametrize("line", ["F 1,2", "F 1,2,3,4", "F 1,,2,3", "F ,1,2", "F 1,2,300"])
def test_parse_colour_rejects(line):
    with pytest.raises(CubError) as info:
        parse_colour(line)
    assert info.value.code is ErrorCode.INVALID_COLOUR_PARAM


def test_scene_params_complete(texture_files):
    params = SceneParams()
    for name, path in texture_files.items():
        params.add_line(f"{name}  {path}")
    assert not params.is_complete()
    params.add_line("F 220,100,0")
    params.add_line("C 225,30,0")
    assert params.is_complete()
    assert params.textures[Direction.EA] == texture_files["EA"]
    assert params.colours[Surface.FLOOR] == (220, 100, 0)


def test_duplicate_texture(texture_files):
    params = SceneParams()
    params.add_line(f"NO {texture_files['NO']}")
    with pytest.raises(CubError) as info:
        params.add_line(f"NO {texture_files['SO']}")
    assert info.value.code is ErrorCode.REDUNDANT_PARAMETER_FOUND


def test_duplicate_colour():
    params = SceneParams()
    params.add_line("C 1,2,3")
    with pytest.raises(CubError) as info:
        params.add_line("C 4,5,6")
    assert info.value.code is ErrorCode.REDUNDANT_PARAMETER_FOUND


def test_missing_texture_file(tmp_path):
    params = SceneParams()
    with pytest.raises(CubError) as info:
        params.add_line(f"SO {tmp_path / 'absent.xpm'}")
    assert info.value.code is ErrorCode.SYSCALL_ERROR
    assert Direction.SO not in params.textures


def test_invalid_identifier():
    with pytest.raises(CubError) as info:
        SceneParams().add_line("NORTH ./a")
    assert info.value.code is ErrorCode.INVALID_TEXTURE_PARAMS