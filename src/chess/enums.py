"""
Enumerations of the chess domain

(kept apart from pieces.py so that the movement rules can import them without a circular import)
"""

from __future__ import annotations

from enum import Enum, auto


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    def opponent(self) -> Color:
        return Color.BLACK if self == Color.WHITE else Color.WHITE
