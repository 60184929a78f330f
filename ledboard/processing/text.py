from __future__ import annotations

import math
from typing import Optional, Tuple

from PIL import ImageDraw, ImageFont

from ..errors import EmptyTextError, InvalidFontSizeError, InvalidOptionsError
from .buffer import PixelBuffer, unpack_color

PADDING_X = 20
PADDING_Y = 10


def load_font(size: int, font_path: Optional[str] = None) -> ImageFont.FreeTypeFont:
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError as exc:
            raise InvalidOptionsError("Cannot load font", {"font_path": font_path, "reason": str(exc)}) from exc
    return ImageFont.load_default(size=size)


def measure_text(font: ImageFont.FreeTypeFont, text: str) -> Tuple[int, int]:
    """Return the advance width and line height of ``text``."""
    ascent, descent = font.getmetrics()
    return math.ceil(font.getlength(text)), ascent + descent


def rasterize_text(spec, font_path: Optional[str] = None) -> PixelBuffer:
    """Draw ``spec.text`` on a padded, background-filled buffer.

    The result is left at native resolution; callers that want the LED look
    must run it through :func:`~ledboard.processing.led.simulate_led`.
    """
    text = " ".join(spec.text.splitlines())
    if not text.strip():
        raise EmptyTextError("Text must not be empty")
    if spec.font_size < 1:
        raise InvalidFontSizeError("Font size must be at least 1", {"font_size": spec.font_size})

    font = load_font(spec.font_size, font_path)
    width, height = measure_text(font, text)

    buffer = PixelBuffer.new(width + 2 * PADDING_X, height + 2 * PADDING_Y, spec.background_color)
    draw = ImageDraw.Draw(buffer.image)
    draw.text((PADDING_X, PADDING_Y), text, font=font, fill=unpack_color(spec.color))
    return buffer
