from __future__ import annotations

from PIL import Image, ImageDraw

from ..errors import InvalidCellSizeError
from .buffer import PixelBuffer

GRID_COLOR = (0, 0, 0, 100)


def _overlay_grid(img: Image.Image, cell_size: int) -> Image.Image:
    """Alpha-composite translucent black seams on every cell boundary.

    Lines are drawn into a transparent layer first so crossings carry the
    grid alpha once instead of being darkened twice.
    """
    width, height = img.size
    grid = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(grid)
    for y in range(0, height, cell_size):
        draw.line([(0, y), (width - 1, y)], fill=GRID_COLOR)
    for x in range(0, width, cell_size):
        draw.line([(x, 0), (x, height - 1)], fill=GRID_COLOR)
    return Image.alpha_composite(img, grid)


def simulate_led(buffer: PixelBuffer, cell_size: int) -> None:
    if cell_size < 1:
        raise InvalidCellSizeError("Cell size must be at least 1", {"cell_size": cell_size})

    down_w = buffer.width // cell_size
    down_h = buffer.height // cell_size
    if down_w == 0 or down_h == 0:
        raise InvalidCellSizeError(
            "Image is smaller than one LED cell",
            {"cell_size": cell_size, "size": f"{buffer.width}x{buffer.height}"},
        )

    # Pixelate, then scale back up with hard block edges
    small = buffer.image.resize((down_w, down_h), Image.Resampling.BOX)
    blocky = small.resize((down_w * cell_size, down_h * cell_size), Image.Resampling.NEAREST)
    buffer.replace(_overlay_grid(blocky, cell_size))
