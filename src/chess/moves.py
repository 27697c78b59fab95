"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the movement rule of each piece type.

The rules only look at the origin and target squares. They never consult the board,
so sliding pieces are not blocked by pieces standing in between, and capturing an ally
is ruled out later by the Game.
"""

import re
from dataclasses import dataclass
from typing import Callable, Self

from src.chess.enums import Color, PieceType
from src.chess.square import Square

# "e2e4" or "e2 e4"
MOVE_PATTERN = re.compile(r"^\s*([a-h][1-8])\s*([a-h][1-8])\s*$", re.IGNORECASE)

PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g1f3": (knight) moves from g1 to f3
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    @classmethod
    def from_text(cls, text: str) -> Self | None:
        """Lenient parser for what a user types: 'e2e4', 'e2 e4', 'E2 E4'. None if it cannot be read."""
        match = MOVE_PATTERN.match(text)
        if match is None:
            return None
        return cls(
            Square.from_algebraic(match.group(1)),
            Square.from_algebraic(match.group(2)),
        )

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


def _deltas(origin: Square, target: Square) -> tuple[int, int]:
    """absolute (row, column) distance between the two squares"""
    return abs(target.row - origin.row), abs(target.col - origin.col)


# --- MOVEMENT RULES ---
def king_can_reach(origin: Square, target: Square, color: Color) -> bool:
    """The king moves a single square in any direction."""
    d_row, d_col = _deltas(origin, target)
    return d_row <= 1 and d_col <= 1


def rook_can_reach(origin: Square, target: Square, color: Color) -> bool:
    """Rooks move either horizontally or vertically"""
    return target.row == origin.row or target.col == origin.col


def bishop_can_reach(origin: Square, target: Square, color: Color) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    d_row, d_col = _deltas(origin, target)
    return d_row == d_col


def queen_can_reach(origin: Square, target: Square, color: Color) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_can_reach(origin, target, color) or bishop_can_reach(
        origin, target, color
    )


def knight_can_reach(origin: Square, target: Square, color: Color) -> bool:
    """Knights jump in an L-shape: two squares one way, one square the other"""
    return _deltas(origin, target) in {(2, 1), (1, 2)}


def pawn_can_reach(origin: Square, target: Square, color: Color) -> bool:
    """
    A pawn:
    - moves by a single square forward, staying on its column.
    - It can move by two in their first move (so when on their starting row)

    NOTE: there is no diagonal capture for pawns in this rule set.
    """
    if target.col != origin.col:
        return False

    direction = PAWN_DIRECTION[color]
    rows_moved = target.row - origin.row
    if rows_moved == direction:
        return True
    return origin.row == PAWN_START_ROW[color] and rows_moved == 2 * direction


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Square, Square, Color], bool]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.PAWN: pawn_can_reach,
    PieceType.KNIGHT: knight_can_reach,
    PieceType.BISHOP: bishop_can_reach,
    PieceType.ROOK: rook_can_reach,
    PieceType.QUEEN: queen_can_reach,
    PieceType.KING: king_can_reach,
}


def can_reach(
    piece_type: PieceType, color: Color, origin: Square, target: Square
) -> bool:
    """
    Is `target` a legal destination for a piece of this type and color standing on `origin`?
    ----

    Targets off the board and the square the piece is already standing on are never legal.
    """
    if not target.is_within_bounds() or target == origin:
        return False
    movement_rule = MOVEMENT_RULES[piece_type]
    return movement_rule(origin, target, color)
