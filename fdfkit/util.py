"""Small helpers: FNV-1a hashing and grayscale conversion."""

from __future__ import annotations

import struct

_FNV_PRIME = 0x100000001B3
_FNV_OFFSET = 0xCBF29CE484222325
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


_R_WEIGHT = _f32(0.299)
_G_WEIGHT = _f32(0.587)
_B_WEIGHT = _f32(0.114)


def fnv_hash(data: bytes | str) -> int:
    """Return the 64-bit FNV-1a hash of ``data``.

    Bytes are treated as signed chars, so values of 0x80 and above are
    sign-extended before being mixed in.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    result = _FNV_OFFSET
    for byte in data:
        if byte >= 0x80:
            byte |= 0xFFFFFFFFFFFFFF00
        result = ((result ^ byte) * _FNV_PRIME) & _MASK64
    return result


def rgba_to_mono(color: int) -> int:
    """Convert an RGBA colour to grayscale, keeping its alpha channel."""
    r = int(_f32(_R_WEIGHT * ((color >> 24) & 0xFF))) & 0xFF
    g = int(_f32(_G_WEIGHT * ((color >> 16) & 0xFF))) & 0xFF
    b = int(_f32(_B_WEIGHT * ((color >> 8) & 0xFF))) & 0xFF
    y = (r + g + b) & 0xFF
    return (y << 24) | (y << 16) | (y << 8) | (color & 0xFF)