from __future__ import annotations

import io
import struct
from pathlib import PurePath
from typing import Dict

from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError, EncodeError
from .buffer import PixelBuffer

SUPPORTED_FORMATS = ("PNG", "JPEG", "BMP", "GIF", "WEBP")

# camera JPEGs open as MPO
_DECODABLE_FORMATS = SUPPORTED_FORMATS + ("MPO",)

# alpha is dropped: JPEG has none, Pillow reads 32-bit BMP back as BGRX and
# GIF only keeps a single transparent index
_OPAQUE_FORMATS = ("JPEG", "BMP", "GIF")

_FORMAT_ALIASES = {"JPG": "JPEG"}

_EXTENSIONS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
    ".gif": "GIF",
    ".webp": "WEBP",
}

MIMETYPES: Dict[str, str] = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "BMP": "image/bmp",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}

IMAGE_EXTENSIONS = tuple(_EXTENSIONS)


def normalize_format(name: str) -> str:
    key = (name or "").strip().lstrip(".").upper()
    key = _FORMAT_ALIASES.get(key, key)
    if key not in SUPPORTED_FORMATS:
        raise EncodeError("Unsupported output format", {"format": name})
    return key


def format_for_filename(filename: str) -> str:
    suffix = PurePath(filename).suffix.lower()
    try:
        return _EXTENSIONS[suffix]
    except KeyError:
        raise EncodeError("Unsupported file extension", {"filename": filename}) from None


def decode(data: bytes) -> PixelBuffer:
    """Decode PNG/JPEG/BMP/GIF/WEBP bytes into an RGBA buffer.

    Only the first frame of animated inputs is used.
    """
    if not data:
        raise DecodeError("No image data")
    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.format not in _DECODABLE_FORMATS:
                raise DecodeError("Unsupported input format", {"format": img.format})
            img.load()
            rgba = img.convert("RGBA")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
        SyntaxError,
        EOFError,
        struct.error,
    ) as exc:
        raise DecodeError("Cannot decode image data", {"reason": str(exc)}) from exc
    if rgba.width == 0 or rgba.height == 0:
        raise DecodeError("Decoded image is empty")
    return PixelBuffer(rgba)


def encode(buffer: PixelBuffer, fmt: str = "png") -> bytes:
    target = normalize_format(fmt)
    if buffer.width <= 0 or buffer.height <= 0:
        raise EncodeError("Cannot encode an empty buffer", {"size": f"{buffer.width}x{buffer.height}"})

    img = buffer.image
    options: Dict[str, object] = {}
    if target in _OPAQUE_FORMATS:
        img = img.convert("RGB")
    if target == "JPEG":
        options["quality"] = 90
    elif target == "PNG":
        options["optimize"] = True
    elif target == "WEBP":
        options["lossless"] = True

    out = io.BytesIO()
    try:
        img.save(out, target, **options)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError("Cannot encode image", {"format": target, "reason": str(exc)}) from exc
    return out.getvalue()
