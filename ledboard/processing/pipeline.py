from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidCellSizeError, InvalidOptionsError
from .codec import decode, encode, normalize_format
from .led import simulate_led
from .text import rasterize_text
from .tone import apply_tone

DEFAULT_CELL_SIZE = 10
DEFAULT_FONT_SIZE = 32
WHITE = 0xFFFFFFFF
BLACK = 0x000000FF


@dataclass(frozen=True)
class EffectOptions:
    brightness: Optional[float] = None
    contrast: Optional[float] = None
    invert: bool = False
    cell_size: int = DEFAULT_CELL_SIZE

    def __post_init__(self) -> None:
        for name in ("brightness", "contrast"):
            value = getattr(self, name)
            if value is not None and not -1.0 <= value <= 1.0:
                raise InvalidOptionsError(f"{name} must be within [-1, 1]", {name: value})
        if self.cell_size < 1:
            raise InvalidCellSizeError("Cell size must be at least 1", {"cell_size": self.cell_size})


@dataclass(frozen=True)
class TextSpec:
    text: str
    font_size: int = DEFAULT_FONT_SIZE
    color: int = WHITE
    background_color: int = BLACK


def render_led_effect(source_bytes: bytes, fmt: str = "png", options: Optional[EffectOptions] = None) -> bytes:
    """Decode, tone-adjust, pixelate into LED cells and re-encode an image."""
    options = options or EffectOptions()
    normalize_format(fmt)
    buffer = decode(source_bytes)
    apply_tone(buffer, options.brightness, options.contrast, options.invert)
    simulate_led(buffer, options.cell_size)
    return encode(buffer, fmt)


def render_text_image(spec: TextSpec, fmt: str = "png", font_path: Optional[str] = None) -> bytes:
    return encode(rasterize_text(spec, font_path=font_path), fmt)
