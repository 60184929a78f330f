from __future__ import annotations

from typing import Iterable, List, Tuple

from PIL import Image

RGBA = Tuple[int, int, int, int]


def pack_color(r: int, g: int, b: int, a: int = 255) -> int:
    for channel in (r, g, b, a):
        if not 0 <= channel <= 255:
            raise ValueError(f"Channel value out of range: {channel}")
    return (r << 24) | (g << 16) | (b << 8) | a


def unpack_color(color: int) -> RGBA:
    """Split a packed ``0xRRGGBBAA`` integer into its channels."""
    if not 0 <= color <= 0xFFFFFFFF:
        raise ValueError(f"Packed color out of range: {color:#x}")
    return (color >> 24) & 0xFF, (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _require_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}")


class PixelBuffer:
    """Row-major RGBA raster backed by a Pillow image.

    A buffer is owned by whichever pipeline stage is transforming it. Stages
    that change the dimensions hand a freshly allocated image to
    :meth:`replace`; per-pixel writes never resize.
    """

    def __init__(self, image: Image.Image) -> None:
        self._image = image if image.mode == "RGBA" else image.convert("RGBA")

    @classmethod
    def new(cls, width: int, height: int, color: int = 0x000000FF) -> "PixelBuffer":
        _require_size(width, height)
        return cls(Image.new("RGBA", (width, height), unpack_color(color)))

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        _require_size(*image.size)
        return cls(image)

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Iterable[RGBA]) -> "PixelBuffer":
        _require_size(width, height)
        flat = bytearray()
        count = 0
        for pixel in pixels:
            flat.extend(pixel)
            count += 1
        if count != width * height or len(flat) != count * 4:
            raise ValueError(
                f"Expected {width * height} RGBA pixels for {width}x{height}, got {count}"
            )
        return cls(Image.frombytes("RGBA", (width, height), bytes(flat)))

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def pixels(self) -> List[RGBA]:
        data = self._image.tobytes()
        return [tuple(data[i:i + 4]) for i in range(0, len(data), 4)]

    def get_pixel(self, x: int, y: int) -> RGBA:
        return self._image.getpixel((x, y))

    def set_pixel(self, x: int, y: int, rgba: RGBA) -> None:
        self._image.putpixel((x, y), tuple(rgba))

    def replace(self, image: Image.Image) -> None:
        """Swap in newly allocated storage, possibly of a different size."""
        self._image = image if image.mode == "RGBA" else image.convert("RGBA")

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._image.copy())

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
