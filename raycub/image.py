"""RGBA pixel buffers: drawable images and textures loaded from PNG files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Union

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

BPP = 4
MAX_DIMENSION = 0x7FFF


class ErrorCode(IntEnum):
    """Failure kinds reported by image and texture operations."""

    SUCCESS = 0
    INVEXT = 1
    INVFILE = 2
    INVPNG = 3
    INVXPM = 4
    INVPOS = 5
    INVDIM = 6
    INVIMG = 7
    VERTFAIL = 8
    FRAGFAIL = 9
    SHDRFAIL = 10
    MEMFAIL = 11
    GLADFAIL = 12
    GLFWFAIL = 13
    WINFAIL = 14
    STRTOOBIG = 15


_MESSAGES = {
    ErrorCode.SUCCESS: "No Errors",
    ErrorCode.INVEXT: "File has invalid extension",
    ErrorCode.INVFILE: "Failed to open the file",
    ErrorCode.INVPNG: "PNG file is invalid or corrupted",
    ErrorCode.INVXPM: "XPM42 file is invalid or corrupted",
    ErrorCode.INVPOS: "The specified X or Y positions are out of bounds",
    ErrorCode.INVDIM: "The specified Width or Height dimensions are out of bounds",
    ErrorCode.INVIMG: "The provided image is invalid, might indicate mismanagement of images",
    ErrorCode.VERTFAIL: "Failed to compile the vertex shader.",
    ErrorCode.FRAGFAIL: "Failed to compile the fragment shader.",
    ErrorCode.SHDRFAIL: "Failed to compile the shaders.",
    ErrorCode.MEMFAIL: "Failed to allocate memory",
    ErrorCode.GLADFAIL: "Failed to initialize GLAD",
    ErrorCode.GLFWFAIL: "Failed to initialize GLFW",
    ErrorCode.WINFAIL: "Failed to create window",
    ErrorCode.STRTOOBIG: "String is too big to be drawn",
}


def strerror(code: int) -> str:
    """Return the English description of an error code."""
    try:
        return _MESSAGES[ErrorCode(code)]
    except ValueError:
        raise ValueError(f"unknown error code: {code}") from None


class ImageError(Exception):
    """Raised when an image or texture operation fails."""

    def __init__(self, code: ErrorCode, detail: str | None = None) -> None:
        message = strerror(code)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.code = ErrorCode(code)


def _pack(color: int) -> bytes:
    return (color & 0xFFFFFFFF).to_bytes(4, "big")


def _unpack(buffer: bytearray, offset: int) -> int:
    return int.from_bytes(buffer[offset:offset + BPP], "big")


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


@dataclass
class Texture:
    """Decoded RGBA pixel data, four bytes per pixel, row by row."""

    width: int
    height: int
    pixels: bytearray
    bytes_per_pixel: int = BPP

    def __post_init__(self) -> None:
        self.pixels = bytearray(self.pixels)
        expected = self.width * self.height * self.bytes_per_pixel
        if len(self.pixels) != expected:
            raise ValueError(
                f"pixel buffer holds {len(self.pixels)} bytes, expected {expected}"
            )

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y) packed as a 32-bit RGBA value."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ImageError(ErrorCode.INVPOS, f"({x}, {y})")
        return _unpack(self.pixels, (y * self.width + x) * self.bytes_per_pixel)


def _check_dimensions(width: int, height: int) -> None:
    if not (0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION):
        raise ImageError(ErrorCode.INVDIM, f"{width}x{height}")


@dataclass
class Image:
    """A drawable RGBA image, initially fully transparent black."""

    width: int
    height: int
    pixels: bytearray = field(default_factory=bytearray, repr=False)
    enabled: bool = True

    def __post_init__(self) -> None:
        _check_dimensions(self.width, self.height)
        size = self.width * self.height * BPP
        if not self.pixels:
            self.pixels = bytearray(size)
        elif len(self.pixels) != size:
            raise ValueError(f"pixel buffer holds {len(self.pixels)} bytes, expected {size}")
        else:
            self.pixels = bytearray(self.pixels)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ImageError(ErrorCode.INVPOS, f"({x}, {y})")
        return (y * self.width + x) * BPP

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store a 32-bit RGBA colour at (x, y) as R, G, B, A bytes."""
        offset = self._offset(x, y)
        self.pixels[offset:offset + BPP] = _pack(color)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y) as a 32-bit RGBA value."""
        return _unpack(self.pixels, self._offset(x, y))

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``."""
        self.pixels[:] = _pack(color) * (self.width * self.height)

    def resize(self, width: int, height: int) -> None:
        """Scale the image to a new size with nearest-neighbour sampling."""
        _check_dimensions(width, height)
        if width == self.width and height == self.height:
            return
        wstep = _f32(self.width / width)
        hstep = _f32(self.height / height)
        columns = [int(_f32(i * wstep)) * BPP for i in range(width)]
        source = self.pixels
        resized = bytearray()
        for j in range(height):
            row_start = int(_f32(j * hstep)) * self.width * BPP
            for column in columns:
                start = row_start + column
                resized += source[start:start + BPP]
        self.pixels = resized
        self.width = width
        self.height = height


def texture_to_image(texture: Texture) -> Image:
    """Create a new image holding a copy of the texture's pixels."""
    image = Image(texture.width, texture.height)
    image.pixels[:] = texture.pixels
    return image


def load_png(path: Union[str, "Path"]) -> Texture:
    """Decode a PNG file into an RGBA texture."""
    try:
        with PILImage.open(path) as source:
            if source.format != "PNG":
                raise ImageError(ErrorCode.INVPNG, str(path))
            rgba = source.convert("RGBA")
            return Texture(rgba.width, rgba.height, bytearray(rgba.tobytes()))
    except (OSError, UnidentifiedImageError, SyntaxError, ValueError) as exc:
        if isinstance(exc, ImageError):
            raise
        raise ImageError(ErrorCode.INVPNG, str(path)) from exc