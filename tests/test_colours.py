import pytest

from cubcaster.colours import encode_rgb, good_colour, lookup_colour

RGB565 = (11, 5, 5, 6, 0, 5)


def test_lookup_known_colour():
    assert lookup_colour("snow") == 0xFFFAFA
    assert lookup_colour("ghost white") == 0xF8F8FF


def test_lookup_ignores_case():
    assert lookup_colour("SNOW") == lookup_colour("snow")
    assert lookup_colour("Light Green") == 0x90EE90


def test_lookup_first_duplicate_wins():
    assert lookup_colour("dark slate") == 0x2F4F4F
    assert lookup_colour("light slate") == 0x778899
    assert lookup_colour("light goldenrod") == 0xFAFAD2


def test_lookup_none_is_transparent():
    assert lookup_colour("none") == -1


def test_lookup_unknown_raises():
    with pytest.raises(KeyError):
        lookup_colour("no such colour")


def test_grey_and_gray_agree():
    for n in range(101):
        assert lookup_colour(f"grey{n}") == lookup_colour(f"gray{n}")


def test_grey_scale_is_monotonic():
    values = [lookup_colour(f"gray{n}") for n in range(101)]
    assert values == sorted(values)
    assert values[0] == lookup_colour("black")
    assert values[-1] == lookup_colour("white")


def test_encode_matches_named_colours():
    assert encode_rgb(255, 0, 0) == lookup_colour("red")
    assert encode_rgb(0, 255, 0) == lookup_colour("green")
    assert encode_rgb(0, 0, 255) == lookup_colour("blue")
    assert encode_rgb(255, 255, 255) == lookup_colour("white")


@pytest.mark.parametrize("rgb", [(0, 0, 0), (12, 200, 7), (255, 128, 64)])
def test_encode_round_trip(rgb):
    value = encode_rgb(*rgb)
    assert ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF) == rgb


def test_encode_truncates_to_eight_bits():
    assert encode_rgb(256 + 1, 2, 3) == encode_rgb(1, 2, 3)


@pytest.mark.parametrize("depth", [24, 32])
def test_good_colour_deep_visual_unchanged(depth):
    assert good_colour(0x123456, depth, RGB565) == 0x123456


def test_good_colour_rgb565_extremes():
    assert good_colour(0xFFFFFF, 16, RGB565) == 0xFFFF
    assert good_colour(0x000000, 16, RGB565) == 0


def test_good_colour_rgb565_channels_do_not_overlap():
    red = good_colour(lookup_colour("red"), 16, RGB565)
    green = good_colour(lookup_colour("green"), 16, RGB565)
    blue = good_colour(lookup_colour("blue"), 16, RGB565)
    assert red & green == 0 and red & blue == 0 and green & blue == 0
    assert red | green | blue == good_colour(0xFFFFFF, 16, RGB565)


def test_good_colour_bad_shifts():
    with pytest.raises(ValueError):
        good_colour(0xFFFFFF, 16, (1, 2, 3))