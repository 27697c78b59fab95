"""Defines the chess pieces: their type, color, worth and the square they stand on"""

from dataclasses import dataclass
from typing import Self

from src.chess.enums import Color, PieceType
from src.chess.moves import can_reach
from src.chess.square import Square

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

# (white glyph, black glyph)
PIECE_SYMBOLS: dict[PieceType, tuple[str, str]] = {
    PieceType.PAWN: ("♙", "♟"),
    PieceType.KNIGHT: ("♘", "♞"),
    PieceType.BISHOP: ("♗", "♝"),
    PieceType.ROOK: ("♖", "♜"),
    PieceType.QUEEN: ("♕", "♛"),
    PieceType.KING: ("♔", "♚"),
}


@dataclass
class Piece:
    """
    A single piece on the board.

    `type` and `color` never change once the piece is created.
    `square` mirrors the cell of the board holding the piece and is only updated through `Board.relocate()`.
    """

    type: PieceType
    color: Color
    square: Square

    @classmethod
    def from_fen(cls, character: str, square: Square) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color, square)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    @property
    def points(self) -> int:
        # NOTE: The King's worth is undefined, so it does not count towards total points
        return PIECE_POINTS[self.type]

    @property
    def symbol(self) -> str:
        white_symbol, black_symbol = PIECE_SYMBOLS[self.type]
        return white_symbol if self.color == Color.WHITE else black_symbol

    @property
    def name(self) -> str:
        return self.type.name.lower()

    def can_move_to(self, target: Square) -> bool:
        """Movement rule of this piece type, evaluated from the square it is standing on (ignores all other pieces)."""
        return can_reach(self.type, self.color, self.square, target)

    def move_to(self, square: Square) -> None:
        """Only to be called by the Board, which keeps its grid in sync with this square."""
        self.square = square
