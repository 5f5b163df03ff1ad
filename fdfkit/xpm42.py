"""Reader for the XPM42 text image format.

An XPM42 file looks like this::

    !XPM42
    <width> <height> <colour count> <chars per pixel> <c|m>
    <key> #RRGGBBAA          (one line per colour)
    <pixel keys>             (one line per image row)

Mode ``c`` keeps colours as they are; mode ``m`` turns them to grayscale.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import IO, AnyStr

from fdfkit.errors import ErrorCode, MlxError
from fdfkit.images import BPP, Texture, encode_pixel
from fdfkit.util import fnv_hash, rgba_to_mono

_MAGIC = b"!XPM42\n"
_HEADER_LIMIT = 63
_TABLE_SIZE = 65535
_MAX_DIM = 32767
_MAX_CPP = 10

_INT_RE = re.compile(rb"[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_CHANNEL_RE = re.compile(rb"\s*([+-]?)([0-9a-fA-F]*)")


@dataclass
class Xpm:
    """A decoded XPM42 image."""

    texture: Texture
    color_count: int
    cpp: int
    mode: str


class _FormatError(Exception):
    """Internal signal that the file does not follow the format."""


def _readline(stream: IO[AnyStr], limit: int = -1) -> bytes:
    line = stream.readline(limit)
    if isinstance(line, str):
        line = line.encode("utf-8")
    return line


def _parse_int(token: bytes) -> int:
    sign = -1 if token.startswith(b"-") else 1
    digits = token.lstrip(b"+-")
    if digits[:2] in (b"0x", b"0X"):
        value = int(digits[2:], 16)
    elif len(digits) > 1 and digits.startswith(b"0"):
        value = int(digits[1:], 8)
    else:
        value = int(digits)
    return sign * value


def _scan_header(line: bytes) -> tuple[list[int], str | None]:
    """Read up to four integers and one mode character, scanf style."""
    numbers: list[int] = []
    pos = 0
    while len(numbers) < 4:
        while pos < len(line) and line[pos:pos + 1].isspace():
            pos += 1
        match = _INT_RE.match(line, pos)
        if not match:
            return numbers, None
        numbers.append(_parse_int(match.group()))
        pos = match.end()
    while pos < len(line) and line[pos:pos + 1].isspace():
        pos += 1
    if pos >= len(line):
        return numbers, None
    return numbers, chr(line[pos])


def _parse_channel(chunk: bytes) -> int:
    match = _CHANNEL_RE.match(chunk)
    sign, digits = match.group(1), match.group(2)
    value = int(digits, 16) if digits else 0
    if sign == b"-":
        value = -value
    return value & 0xFF


def _parse_entry(line: bytes, cpp: int, mode: str) -> tuple[int, int]:
    """Return the table slot and colour described by one colour line."""
    if line.rfind(b" ") != cpp:
        raise _FormatError("colour key has the wrong length")
    if not line[cpp:cpp + 1].isspace() or line[cpp + 1:cpp + 2] != b"#":
        raise _FormatError("colour entry lacks '#'")
    if not line[cpp + 2:cpp + 3].isalnum():
        raise _FormatError("colour value is not alphanumeric")
    start = cpp + 2
    color = 0
    for shift, offset in zip((24, 16, 8, 0), range(start, start + 8, 2)):
        color |= _parse_channel(line[offset:offset + 2]) << shift
    if mode == "m":
        color = rgba_to_mono(color)
    return fnv_hash(line[:cpp]) % _TABLE_SIZE, color


def _decode(stream: IO[AnyStr]) -> Xpm:
    if _readline(stream, _HEADER_LIMIT) != _MAGIC:
        raise _FormatError("missing !XPM42 marker")
    header = _readline(stream, _HEADER_LIMIT)
    if not header:
        raise _FormatError("missing header line")
    numbers, mode = _scan_header(header)
    if len(numbers) < 4:
        raise _FormatError("header is incomplete")
    width, height, color_count, cpp = numbers
    if not (0 <= width <= _MAX_DIM and 0 <= height <= _MAX_DIM):
        raise _FormatError("dimensions out of range")
    if mode not in ("c", "m"):
        raise _FormatError("unknown colour mode")
    if not 0 <= cpp <= _MAX_CPP:
        raise _FormatError("too many characters per pixel")

    table: dict[int, int] = {}
    for _ in range(color_count):
        line = _readline(stream)
        if not line:
            raise _FormatError("colour table is truncated")
        slot, color = _parse_entry(line, cpp, mode)
        table[slot] = color

    rows = []
    for _ in range(height):
        line = _readline(stream)
        if not line:
            raise _FormatError("pixel data is truncated")
        if line.endswith(b"\n"):
            line = line[:-1]
        if len(line) != width * cpp:
            raise _FormatError("pixel row has the wrong length")
        rows.extend(
            encode_pixel(table.get(fnv_hash(line[x * cpp:(x + 1) * cpp]) % _TABLE_SIZE, 0))
            for x in range(width)
        )
    texture = Texture(width, height, bytearray(b"".join(rows)), BPP)
    return Xpm(texture=texture, color_count=color_count, cpp=cpp, mode=mode)


def read_xpm42(stream: IO[AnyStr]) -> Xpm:
    """Decode an XPM42 image from an open text or binary stream."""
    try:
        return _decode(stream)
    except _FormatError as exc:
        raise MlxError(ErrorCode.INVXPM, str(exc)) from None


def load_xpm42(path: str | os.PathLike[str]) -> Xpm:
    """Load an XPM42 image from a file whose name contains ``.xpm42``."""
    if ".xpm42" not in os.fspath(path):
        raise MlxError(ErrorCode.INVEXT, os.fspath(path))
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise MlxError(ErrorCode.INVFILE, str(exc)) from None
    with handle:
        return read_xpm42(handle)