"""Defines the types of chess pieces"""

from dataclasses import dataclass
from typing import Self

from src.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# all characters that denote a piece in the placement field of a FEN string
PIECE_CHARACTERS = "kqrnbpKQRNBP"

# prefix of the sprite file names
COLOR_TO_SPRITE_PREFIX: dict[Color, str] = {Color.LIGHT: "w", Color.DARK: "b"}


@dataclass(frozen=True)
class Piece:
    """Immutable (and hashable) so it can be used as a key when looking up the sprite to draw."""

    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: dark pieces, upper case: light pieces
        color = Color.LIGHT if character.isupper() else Color.DARK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.LIGHT
            else PIECE_TO_FEN[self.type].lower()
        )

    def sprite_name(self) -> str:
        """ex. the light queen is 'wq', the dark knight is 'bn'"""
        return f"{COLOR_TO_SPRITE_PREFIX[self.color]}{PIECE_TO_FEN[self.type]}"
