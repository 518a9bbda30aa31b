"""Reader for XPM42, a plain-text RGBA pixmap format.

An XPM42 file starts with the line ``!XPM42``, followed by a header line
``<width> <height> <colors> <chars-per-pixel> <mode>`` where mode is ``c``
for colour or ``m`` for monochrome. Then come the colour entries
(``<key> #RRGGBBAA``) and finally one line of pixel keys per image row.
"""

from __future__ import annotations

import os
import re
import struct
from dataclasses import dataclass
from typing import BinaryIO, Union

from raycub.image import ErrorCode, ImageError, Texture

MAGIC = b"!XPM42\n"
MAX_DIMENSION = 0x7FFF
MAX_CPP = 10
TABLE_SIZE = 0xFFFF
HEADER_LIMIT = 63
FNV_PRIME = 0x100000001B3
FNV_OFFSET = 0xCBF29CE484222325
_MASK64 = 0xFFFFFFFFFFFFFFFF

_INT = re.compile(rb"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_CHAR = re.compile(rb"\s*(\S)")
_HEX_PREFIX = re.compile(rb"[0-9a-fA-F]*")
_SPACES = b" \t\n\r\f\v"


@dataclass
class XPM:
    """A decoded XPM42 pixmap."""

    texture: Texture
    color_count: int
    cpp: int
    mode: str


def fnv_hash(data: bytes) -> int:
    """Return the 64-bit FNV-1a hash of ``data``, bytes taken as signed chars."""
    value = FNV_OFFSET
    for byte in data:
        signed = byte - 0x100 if byte >= 0x80 else byte
        value ^= signed & _MASK64
        value = (value * FNV_PRIME) & _MASK64
    return value


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _weighted(weight: float, channel: int) -> int:
    return int(_f32(_f32(weight) * channel)) & 0xFF


def rgba_to_mono(color: int) -> int:
    """Convert a 32-bit RGBA colour to grey, keeping its alpha."""
    red = _weighted(0.299, (color >> 24) & 0xFF)
    green = _weighted(0.587, (color >> 16) & 0xFF)
    blue = _weighted(0.114, (color >> 8) & 0xFF)
    grey = (red + green + blue) & 0xFF
    return (grey << 24) | (grey << 16) | (grey << 8) | (color & 0xFF)


def _invalid(detail: str) -> ImageError:
    return ImageError(ErrorCode.INVXPM, detail)


def _to_int(sign: bytes, digits: bytes) -> int:
    if digits[:2].lower() == b"0x":
        value = int(digits[2:], 16)
    elif digits.startswith(b"0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return -value if sign == b"-" else value


def _scan_header(line: bytes) -> list[int | str]:
    values: list[int | str] = []
    pos = 0
    for _ in range(4):
        match = _INT.match(line, pos)
        if not match:
            return values
        values.append(_to_int(match.group(1), match.group(2)))
        pos = match.end()
    match = _CHAR.match(line, pos)
    if match:
        values.append(match.group(1).decode("latin-1"))
    return values


def _hex_channel(chunk: bytes) -> int:
    text = chunk.lstrip(_SPACES)
    negative = False
    if text[:1] in (b"+", b"-"):
        negative = text[:1] == b"-"
        text = text[1:]
    digits = _HEX_PREFIX.match(text).group(0)
    value = int(digits, 16) if digits else 0
    return (-value if negative else value) & 0xFF


def _parse_entry(line: bytes, cpp: int) -> tuple[bytes, int]:
    if line.rfind(b" ") != cpp:
        raise _invalid("malformed colour entry")
    start = cpp + 2
    if line[cpp + 1:start] != b"#" or not line[start:start + 1].isalnum():
        raise _invalid("malformed colour entry")
    color = 0
    for shift, offset in ((24, 0), (16, 2), (8, 4), (0, 6)):
        chunk = line[start + offset:start + offset + 2]
        color |= _hex_channel(chunk) << shift
    return line[:cpp], color & 0xFFFFFFFF


def _read_line(stream: BinaryIO) -> bytes:
    line = stream.readline()
    if not line:
        raise _invalid("unexpected end of file")
    return line


def _read_table(stream: BinaryIO, count: int, cpp: int, mode: str) -> dict[int, int]:
    table: dict[int, int] = {}
    for _ in range(count):
        key, color = _parse_entry(_read_line(stream), cpp)
        if mode == "m":
            color = rgba_to_mono(color)
        table[fnv_hash(key) % TABLE_SIZE] = color
    return table


def _read_data(
    stream: BinaryIO, width: int, height: int, cpp: int, table: dict[int, int]
) -> bytearray:
    pixels = bytearray()
    for _ in range(height):
        line = _read_line(stream)
        if line.endswith(b"\n"):
            line = line[:-1]
        if len(line) != width * cpp:
            raise _invalid("pixel row has the wrong length")
        keys = (line[i * cpp:(i + 1) * cpp] for i in range(width))
        for key in keys:
            color = table.get(fnv_hash(key) % TABLE_SIZE, 0)
            pixels += color.to_bytes(4, "big")
    return pixels


def read_xpm42(stream: BinaryIO) -> XPM:
    """Decode an XPM42 pixmap from a binary stream."""
    if stream.readline(HEADER_LIMIT) != MAGIC:
        raise _invalid("missing !XPM42 declaration")
    header = stream.readline(HEADER_LIMIT)
    values = _scan_header(header)
    if len(values) < 5:
        raise _invalid("incomplete header")
    width, height, count, cpp, mode = values
    if not (0 <= width <= MAX_DIMENSION and 0 <= height <= MAX_DIMENSION):
        raise _invalid("dimensions out of range")
    if mode not in ("c", "m"):
        raise _invalid(f"unknown colour mode {mode!r}")
    if not 0 <= cpp <= MAX_CPP:
        raise _invalid("characters per pixel out of range")
    table = _read_table(stream, count, cpp, mode)
    pixels = _read_data(stream, width, height, cpp, table)
    return XPM(Texture(width, height, pixels), count, cpp, mode)


def load_xpm42(path: Union[str, "os.PathLike[str]"]) -> XPM:
    """Read an ``.xpm42`` file from disk."""
    name = os.fspath(path)
    if ".xpm42" not in name:
        raise ImageError(ErrorCode.INVEXT, name)
    try:
        handle = open(name, "rb")
    except OSError:
        raise ImageError(ErrorCode.INVFILE, name) from None
    with handle:
        return read_xpm42(handle)