"""Pixel buffers: images, textures and their on-screen instances."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from fdfkit.errors import ErrorCode, MlxError

BPP = 4
_MAX_DIM = 32767


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def encode_pixel(color: int) -> bytes:
    """Return the four RGBA bytes stored for a 0xRRGGBBAA colour."""
    return (color & 0xFFFFFFFF).to_bytes(4, "big")


def _check_dims(width: int, height: int) -> None:
    if not width or not height or width > _MAX_DIM or height > _MAX_DIM or width < 0 or height < 0:
        raise MlxError(ErrorCode.INVDIM, f"{width}x{height}")


@dataclass
class Instance:
    """One placement of an image in the window."""

    x: int
    y: int
    z: int
    enabled: bool = True


@dataclass
class Texture:
    """Raw decoded pixel data, not yet drawable."""

    width: int
    height: int
    pixels: bytearray
    bytes_per_pixel: int = BPP


class Image:
    """A drawable RGBA buffer with any number of instances."""

    def __init__(self, width: int, height: int) -> None:
        _check_dims(width, height)
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height * BPP)
        self.instances: list[Instance] = []
        self.enabled = True

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height}, instances={len(self.instances)})"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise MlxError(ErrorCode.INVPOS, f"({x}, {y})")
        return (y * self.width + x) * BPP

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store a 0xRRGGBBAA colour at (x, y)."""
        start = self._offset(x, y)
        self.pixels[start:start + BPP] = encode_pixel(color)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the 0xRRGGBBAA colour stored at (x, y)."""
        start = self._offset(x, y)
        return int.from_bytes(self.pixels[start:start + BPP], "big")

    def resize(self, width: int, height: int) -> None:
        """Rescale the buffer with nearest-neighbour sampling."""
        _check_dims(width, height)
        if width == self.width and height == self.height:
            return
        wstep = _f32(self.width / width)
        hstep = _f32(self.height / height)
        origin = memoryview(self.pixels)
        result = bytearray(width * height * BPP)
        columns = [int(_f32(i * wstep)) for i in range(width)]
        out = 0
        for j in range(height):
            row = int(_f32(j * hstep)) * self.width
            for col in columns:
                src = (row + col) * BPP
                result[out:out + BPP] = origin[src:src + BPP]
                out += BPP
        origin.release()
        self.pixels = result
        self.width = width
        self.height = height

    def add_instance(self, x: int, y: int, z: int) -> int:
        """Append an enabled instance and return its index."""
        self.instances.append(Instance(x, y, z))
        return len(self.instances) - 1

    @classmethod
    def from_texture(cls, texture: Texture) -> Image:
        """Build an image holding a copy of a texture's pixels."""
        image = cls(texture.width, texture.height)
        row_len = texture.width * texture.bytes_per_pixel
        needed = row_len * texture.height
        if len(texture.pixels) < needed or len(image.pixels) < needed:
            raise MlxError(ErrorCode.INVIMG, "texture pixel data is too short")
        image.pixels[:needed] = texture.pixels[:needed]
        return image