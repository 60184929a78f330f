"""Coercion of loosely typed request payloads into core option types."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .errors import InvalidOptionsError
from .processing.buffer import pack_color
from .processing.pipeline import BLACK, WHITE, EffectOptions, TextSpec

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def parse_color(value: Any, default: int) -> int:
    """Accept a packed ``0xRRGGBBAA`` int or a ``#RGB``/``#RRGGBB``/``#RRGGBBAA`` string."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise InvalidOptionsError("Invalid color", {"color": value})
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise InvalidOptionsError("Color out of range", {"color": value})
        return value

    raw = str(value).strip()
    if raw.lower().startswith("0x"):
        raw = raw[2:]
    raw = raw.lstrip("#")
    if len(raw) == 3:
        raw = "".join(c * 2 for c in raw)
    if len(raw) == 6:
        raw += "ff"
    if len(raw) != 8:
        raise InvalidOptionsError("Invalid color", {"color": value})
    try:
        channels = [int(raw[i:i + 2], 16) for i in range(0, 8, 2)]
    except ValueError:
        raise InvalidOptionsError("Invalid color", {"color": value}) from None
    return pack_color(*channels)


def parse_optional_float(value: Any, name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidOptionsError(f"Expected a number for {name}", {name: value}) from None


def parse_int(value: Any, name: str, default: int) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise InvalidOptionsError(f"Expected an integer for {name}", {name: value})
    if isinstance(value, float) and not value.is_integer():
        raise InvalidOptionsError(f"Expected an integer for {name}", {name: value})
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidOptionsError(f"Expected an integer for {name}", {name: value}) from None


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    lowered = str(value).strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise InvalidOptionsError("Expected a boolean", {"value": value})


def effect_options_from(payload: Mapping[str, Any], default_cell_size: int) -> EffectOptions:
    return EffectOptions(
        brightness=parse_optional_float(payload.get("brightness"), "brightness"),
        contrast=parse_optional_float(payload.get("contrast"), "contrast"),
        invert=parse_bool(payload.get("invert")),
        cell_size=parse_int(payload.get("cellSize"), "cellSize", default_cell_size),
    )


def text_spec_from(payload: Mapping[str, Any], default_font_size: int) -> TextSpec:
    text = payload.get("text")
    return TextSpec(
        text="" if text is None else str(text),
        font_size=parse_int(payload.get("fontSize"), "fontSize", default_font_size),
        color=parse_color(payload.get("color"), WHITE),
        background_color=parse_color(payload.get("backgroundColor"), BLACK),
    )
