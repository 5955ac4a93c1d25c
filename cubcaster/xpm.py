"""Reader for XPM images as used for wall textures."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from cubcaster.colours import lookup_colour

TRANSPARENT = 0xFF000000

_WORD_SPLIT = re.compile(r"[ \t]+")
_HEX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]*)")
_DEC = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")


@dataclass
class XpmImage:
    """A decoded image: pixels are 0xRRGGBB values stored row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split text on spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def _blank_comments(text: str, opener: str, closer: str, keep: int) -> str:
    chars = list(text)
    quoted = False
    pos = 0
    while pos < len(chars):
        if chars[pos] == '"':
            quoted = not quoted
        elif not quoted and "".join(chars[pos:pos + len(opener)]) == opener:
            end = "".join(chars).find(closer, pos + len(opener))
            stop = len(chars) if end == -1 else end + keep
            for i in range(pos, min(stop, len(chars))):
                chars[i] = " "
            pos = stop
            continue
        pos += 1
    return "".join(chars)


def strip_comments(text: str) -> str:
    """Blank out C-style comments that lie outside double quotes.

    Block comments go first, then line comments with their newline. The
    text keeps its length.
    """
    text = _blank_comments(text, "/*", "*/", 2)
    return _blank_comments(text, "//", "\n", 1)


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _atoi(text: str) -> int:
    match = _DEC.match(text)
    sign, digits = match.groups()
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def text_to_rgb(name: str, end: str | None = None) -> int:
    """Turn an XPM colour spec into 0xRRGGBB.

    ``#hex`` values are read as hexadecimal; otherwise the name (joined
    with ``end`` when given) is looked up in the colour table. Unknown
    names give 0 and ``none`` gives -1.
    """
    if name.startswith("#"):
        sign, digits = _HEX.match(name[1:]).groups()
        value = int(digits, 16) if digits else 0
        return _to_int32(-value if sign == "-" else value)
    if end is not None:
        name = f"{name} {end}"[:63]
    try:
        return lookup_colour(name)
    except KeyError:
        return 0


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode an image from its XPM strings: header, colours, then rows."""
    source = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(source)
        except StopIteration:
            raise ValueError(f"XPM data ends before the {what}") from None

    header = split_words(next_line("header"))
    if len(header) < 4:
        raise ValueError("XPM header needs width, height, colours and chars per pixel")
    width, height, count, cpp = (_atoi(word) for word in header[:4])
    if not (width and height and count and cpp):
        raise ValueError("XPM header values must be non-zero")
    if width < 0 or height < 0 or count < 0 or cpp < 0:
        raise ValueError("XPM header values must be positive")

    # Short keys let later definitions override earlier ones; long keys
    # keep the first definition.
    last_wins = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(count):
        line = next_line("colour table")
        words = split_words(line[cpp:])
        try:
            spec = words.index("c") + 1
        except ValueError:
            raise ValueError(f"colour line without a 'c' key: {line!r}") from None
        if spec >= len(words):
            raise ValueError(f"colour line without a value: {line!r}")
        end = words[spec + 1] if spec + 1 < len(words) else None
        rgb = text_to_rgb(words[spec], end)
        key = line[:cpp]
        if last_wins or key not in palette:
            palette[key] = rgb

    pixels: list[int] = []
    for _ in range(height):
        row = next_line("pixel rows")
        if len(row) < width * cpp:
            raise ValueError(f"pixel row too short: {row!r}")
        for x in range(width):
            colour = palette.get(row[x * cpp:(x + 1) * cpp], 0)
            if colour == -1:
                colour = TRANSPARENT
            pixels.append(colour & 0xFFFFFFFF)
    return XpmImage(width, height, pixels)


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the contents of an XPM file."""
    return parse_xpm(quoted_lines(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    return parse_xpm_text(Path(path).read_text(encoding="latin-1"))