"""Requests and Response models"""

from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, MoveResult, PieceType, Status

# Text shown to a player for every possible outcome of a move attempt
MOVE_RESULT_MESSAGES: dict[MoveResult, str] = {
    MoveResult.SUCCESS: "Move played.",
    MoveResult.START_EMPTY: "There is no piece on that square.",
    MoveResult.WRONG_COLOR: "That is not your piece.",
    MoveResult.INVALID_MOVE: "This piece cannot move like that.",
    MoveResult.OCCUPIED_BY_ALLY: "One of your own pieces already occupies that square.",
    MoveResult.PATH_BLOCKED: "The path is blocked.",
}


def _is_algebraic_notation(value: str) -> bool:
    """'a1' up to 'h8'"""
    if len(value) != 2:
        return False

    file_character = value[0].lower()
    rank_character = value[1]
    return "a" <= file_character <= "h" and "1" <= rank_character <= "8"


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Nothing to choose (yet): every game starts from the standard position."""


class GetGameRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        value = value.strip()
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value.lower()


class ResetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    square: str
    type: PieceType
    color: Color
    symbol: str
    points: int


class GameResponse(BaseModel):
    game_id: UUID
    board_fen: str
    pieces: list[PieceResponse]
    color_to_move: Color
    move_count: int
    status: Status
    scores: dict[Color, int]


class MoveResponse(BaseModel):
    game_id: UUID
    result: MoveResult
    message: str
    game: GameResponse
