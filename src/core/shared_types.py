"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    """Side a piece belongs to. Uppercase FEN letters are light (white), lowercase are dark (black)."""

    LIGHT = "light"
    DARK = "dark"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class CacheBackend(StrEnum):
    FILE = "file"
    SQL = "sql"
