"""PNG loading into RGBA textures."""

from __future__ import annotations

import os

from PIL import Image as PILImage

from fdfkit.errors import ErrorCode, MlxError
from fdfkit.images import BPP, Texture


def load_png(path: str | os.PathLike[str]) -> Texture:
    """Decode a PNG file into a 4-bytes-per-pixel RGBA texture."""
    try:
        with PILImage.open(path) as picture:
            if picture.format != "PNG":
                raise MlxError(ErrorCode.INVPNG, f"not a PNG file: {os.fspath(path)}")
            rgba = picture.convert("RGBA")
            width, height = rgba.size
            pixels = bytearray(rgba.tobytes())
    except MlxError:
        raise
    except (OSError, ValueError) as exc:
        raise MlxError(ErrorCode.INVPNG, str(exc)) from None
    return Texture(width, height, pixels, BPP)