"""
Sprites: one small image per (color, piece type), ex. <sprite_root>/wq.png for the light queen.

A SpriteSet only loads what the board at hand needs and closes the images again when the render is done:

    with SpriteSet.load(board, sprite_root) as sprites:
        place_pieces(canvas, board, reversed, sprites)
"""

import logging
from pathlib import Path
from types import TracebackType
from typing import Optional, Self

from PIL import Image, UnidentifiedImageError

from src.board.fen import Board
from src.board.pieces import Piece

logger = logging.getLogger(__name__)


def sprite_path(piece: Piece, sprite_root: Path, extension: str = "png") -> Path:
    return Path(sprite_root) / f"{piece.sprite_name()}.{extension}"


class SpriteSet:
    """Decoded sprite per piece. Pieces whose sprite could not be loaded are simply absent."""

    def __init__(self, images: dict[Piece, Image.Image] | None = None) -> None:
        self._images: dict[Piece, Image.Image] = images or {}

    @classmethod
    def load(cls, board: Board, sprite_root: Path, extension: str = "png") -> Self:
        images: dict[Piece, Image.Image] = {}
        for piece in board.pieces():
            path = sprite_path(piece, sprite_root, extension)
            try:
                with Image.open(path) as sprite:
                    images[piece] = sprite.convert("RGBA")
            except (OSError, UnidentifiedImageError) as e:
                logger.warning("Sprite for %r not available, leaving it off the board: %s", piece.to_fen(), e)
        return cls(images)

    def get(self, piece: Piece) -> Optional[Image.Image]:
        return self._images.get(piece)

    def __contains__(self, piece: Piece) -> bool:
        return piece in self._images

    def __len__(self) -> int:
        return len(self._images)

    def close(self) -> None:
        for image in self._images.values():
            image.close()
        self._images.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
