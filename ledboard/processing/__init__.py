"""Raster effects for the LED board: codec, tone, LED simulation and text."""

from .buffer import PixelBuffer, pack_color, unpack_color
from .codec import MIMETYPES, SUPPORTED_FORMATS, decode, encode, format_for_filename, normalize_format
from .led import simulate_led
from .pipeline import EffectOptions, TextSpec, render_led_effect, render_text_image
from .text import load_font, measure_text, rasterize_text
from .tone import apply_tone

__all__ = [
    "PixelBuffer",
    "pack_color",
    "unpack_color",
    "MIMETYPES",
    "SUPPORTED_FORMATS",
    "decode",
    "encode",
    "format_for_filename",
    "normalize_format",
    "simulate_led",
    "EffectOptions",
    "TextSpec",
    "render_led_effect",
    "render_text_image",
    "load_font",
    "measure_text",
    "rasterize_text",
    "apply_tone",
]
