"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    TERMINATED = "terminated"


# --- NOTE These mirror the domain enums in src/chess/enums.py by member name. The domain versions stay plain Enums,
# --- the API layer uses these string versions so they serialize to readable JSON.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class MoveResult(StrEnum):
    SUCCESS = "success"
    START_EMPTY = "start empty"
    WRONG_COLOR = "wrong color"
    INVALID_MOVE = "invalid move"
    OCCUPIED_BY_ALLY = "occupied by ally"
    PATH_BLOCKED = "path blocked"
