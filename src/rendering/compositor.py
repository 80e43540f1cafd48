"""Put the piece sprites on top of the drawn board."""

from PIL import Image

from src.board.fen import BOARD_DIMENSIONS, Board
from src.rendering.board_renderer import square_size
from src.rendering.sprites import SpriteSet


def board_coordinates(index: int, reversed: bool) -> tuple[int, int]:
    """(col, row) on the image of the square with the given board index. Reversed boards are seen from black's side."""
    num_files, num_ranks = BOARD_DIMENSIONS
    col = index % num_files
    row = index // num_files
    if reversed:
        col = num_files - 1 - col
        row = num_ranks - 1 - row
    return col, row


def square_origin(index: int, reversed: bool, edge: int) -> tuple[int, int]:
    """Top-left pixel (x, y) of the square"""
    col, row = board_coordinates(index, reversed)
    return col * edge, row * edge


def place_pieces(
    canvas: Image.Image, board: Board, reversed: bool, sprites: SpriteSet
) -> Image.Image:
    """Scale each sprite to exactly fill its square and paste it (in place). Pieces without a sprite are skipped."""
    edge = square_size(canvas.width)
    if edge == 0:
        return canvas
    scaled: dict[int, Image.Image] = {}
    try:
        for index, piece in board.occupied():
            sprite = sprites.get(piece)
            if sprite is None:
                continue
            # same sprite -> same scaled version, only resample once per sprite
            key = id(sprite)
            if key not in scaled:
                scaled[key] = sprite.resize((edge, edge), Image.Resampling.LANCZOS)
            piece_image = scaled[key]
            canvas.paste(piece_image, square_origin(index, reversed, edge), piece_image)
    finally:
        for image in scaled.values():
            image.close()
    return canvas
