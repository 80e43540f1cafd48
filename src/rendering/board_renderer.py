"""Draw the empty board: an 8x8 grid of alternating light and dark squares."""

import logging

from PIL import Image, ImageDraw

from src.board.fen import BOARD_DIMENSIONS
from src.core.exceptions import RenderingUnavailableError

logger = logging.getLogger(__name__)

RGB = tuple[int, ...]


def hex_to_rgb(color: str) -> RGB:
    """
    Convert a hex string to RGB components.

    '#aabbcc' is split into 2-digit groups, the short form '#abc' into 1-digit groups that get doubled ('a' -> 'aa').
    """
    digits = color.lstrip("#")
    group = 2 if len(color) > 4 else 1
    return tuple(
        int(digits[i : i + group].ljust(2, digits[i]), 16)
        for i in range(0, len(digits), group)
    )


def square_size(size: int) -> int:
    """Edge length of a square. Whatever does not divide by 8 is left as a border at the bottom/right."""
    return size // BOARD_DIMENSIONS[0]


def create_canvas(size: int) -> Image.Image:
    """Black size x size RGB image to draw on."""
    try:
        return Image.new("RGB", (size, size))
    except (ValueError, MemoryError) as e:
        logger.error("Cannot create a %sx%s image: %s", size, size, e)
        raise RenderingUnavailableError(f"Cannot create a board image of size {size!r}") from e


def draw_board(canvas: Image.Image, dark_color: str, light_color: str) -> Image.Image:
    """Fill the squares on the canvas (in place). Square (row, col) is dark when row + col is odd."""
    edge = square_size(canvas.width)
    if edge == 0:
        return canvas
    dark = hex_to_rgb(dark_color)
    light = hex_to_rgb(light_color)
    num_files, num_ranks = BOARD_DIMENSIONS

    draw = ImageDraw.Draw(canvas)
    for row in range(num_ranks):
        for col in range(num_files):
            fill = dark if (row + col) % 2 == 1 else light
            x1 = col * edge
            y1 = row * edge
            draw.rectangle((x1, y1, x1 + edge - 1, y1 + edge - 1), fill=fill)
    return canvas
