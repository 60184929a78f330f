from __future__ import annotations

from typing import List, Optional

from .buffer import PixelBuffer


def _clamp(value: float) -> float:
    return min(255.0, max(0.0, value))


def tone_lut(
    brightness: Optional[float] = None,
    contrast: Optional[float] = None,
    invert: bool = False,
) -> List[int]:
    """Build the per-channel lookup table: brightness, then contrast, then invert."""
    lut = []
    for value in range(256):
        level = float(value)
        if brightness is not None:
            level = _clamp(level + brightness * 255)
        if contrast is not None:
            level = _clamp((level - 128) * (1 + contrast) + 128)
        if invert:
            level = 255 - level
        lut.append(int(level + 0.5))
    return lut


def apply_tone(
    buffer: PixelBuffer,
    brightness: Optional[float] = None,
    contrast: Optional[float] = None,
    invert: bool = False,
) -> None:
    if brightness is None and contrast is None and not invert:
        return
    lut = tone_lut(brightness, contrast, invert)
    # alpha passes through unchanged
    buffer.replace(buffer.image.point(lut * 3 + list(range(256))))
