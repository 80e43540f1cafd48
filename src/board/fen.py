"""
Turn the piece placement part of a FEN string into a Board.

FEN, or Forsyth-Edwards Notation, describes a position as
<board position string><active color><castling rights><en passant square><# half move clock><number turns played>
ex) rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

Only the first part matters for drawing the board. Parsing is deliberately lenient: whatever the client sends,
we draw the best board we can make of it (possibly an empty one) instead of refusing the request.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.board.pieces import PIECE_CHARACTERS, Piece
from src.core.shared_types import Color

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
EMPTY_FEN = "8/8/8/8/8/8/8/8"

BOARD_DIMENSIONS = (8, 8)
NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]

# digits denoting a run of empty squares. 0 and 9 are not part of it on purpose.
EMPTY_RUN_DIGITS = "12345678"


def _empty_squares() -> list[Optional[Piece]]:
    return [None] * NUM_SQUARES


@dataclass
class Board:
    """
    64 squares, indexed row * 8 + col.

    Row 0 is the first rank written in the FEN string (the 8th rank, black's back rank in the starting position),
    col 0 is the a-file.
    """

    squares: list[Optional[Piece]] = field(default_factory=_empty_squares)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    def piece_at(self, row: int, col: int) -> Optional[Piece]:
        return self.squares[row * BOARD_DIMENSIONS[0] + col]

    def place(self, row: int, col: int, piece: Piece) -> None:
        self.squares[row * BOARD_DIMENSIONS[0] + col] = piece

    def occupied(self) -> Iterator[tuple[int, Piece]]:
        """(index, piece) of every square that holds a piece"""
        for index, piece in enumerate(self.squares):
            if piece is not None:
                yield index, piece

    def pieces(self) -> set[Piece]:
        """The distinct pieces on the board. Used to only load the sprites we actually need."""
        return {piece for _, piece in self.occupied()}

    def count(self, color: Optional[Color] = None) -> int:
        return sum(
            1 for _, piece in self.occupied() if color is None or piece.color == color
        )


def placement_field(fen: str) -> str:
    """The FEN is space separated, the board position is the first part"""
    return fen.split(" ")[0]


def parse_placement(fen: str) -> Board:
    """
    Parse the board position of a FEN string. Never raises.

    Scan left to right, keeping track of the row and column we are writing to:
    * '/' moves on to the next row.
    * A digit 1-8 skips that many (empty) squares. No clamping: overflowing the row is caught by the next character.
    * A piece letter places the piece and moves one column further.
    * Anything else is ignored.
    When the column ran past the last file, the row wraps before the character is looked at
    (so that character ends up on the next row). Everything after the 8th row is ignored.
    """
    board = Board.empty()
    num_files, num_ranks = BOARD_DIMENSIONS
    row = 0
    col = 0

    for character in placement_field(fen):
        if row >= num_ranks:
            break

        if character == "/":
            row += 1
            col = 0
            continue

        if col >= num_files:
            # wrap to the next row, then handle the character there
            row += 1
            col = 0
            if row >= num_ranks:
                break

        if character in EMPTY_RUN_DIGITS:
            col += int(character)
        elif character in PIECE_CHARACTERS:
            board.place(row, col, Piece.from_fen(character))
            col += 1

    return board
