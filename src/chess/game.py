"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Self

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Color, Piece
from src.chess.square import Square
from src.core.exceptions import GameStateError
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class Status(Enum):
    IN_PROGRESS = auto()
    # NOTE: no end of game detection exists (yet), so nothing moves a game into this state.
    TERMINATED = auto()


class MoveResult(Enum):
    """Outcome of a move attempt. Anything but SUCCESS leaves the game untouched."""

    SUCCESS = auto()
    START_EMPTY = auto()
    WRONG_COLOR = auto()
    INVALID_MOVE = auto()
    OCCUPIED_BY_ALLY = auto()
    # Kept for completeness of the vocabulary: pieces are never blocked by pieces in between, so it is never returned.
    PATH_BLOCKED = auto()


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board = field(default_factory=Board.starting_position)
    color_to_move: Color = Color.WHITE
    move_count: int = 0
    status: Status = Status.IN_PROGRESS

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, white to move."""
        return cls(board=Board.starting_position())

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.name.lower() for status in Status])}"
            )
        color_name = model.color_to_move.upper()
        if color_name not in Color.__members__:
            raise GameStateError(
                f"Invalid color to move: {model.color_to_move!r}. \nPick one from {','.join([color.name.lower() for color in Color])}"
            )
        if model.move_count < 0:
            raise GameStateError(f"Move count cannot be negative: {model.move_count}")

        try:
            board = Board.from_fen(model.board_fen)
        except ValueError as exc:
            raise GameStateError(f"Invalid board position: {model.board_fen!r}. {exc}") from exc

        return cls(
            board=board,
            color_to_move=Color[color_name],
            move_count=model.move_count,
            status=Status[status_name],
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            board_fen=self.board.to_fen(),
            color_to_move=self.color_to_move.name.lower(),
            move_count=self.move_count,
            status=self.status.name.lower().replace("_", " "),
        )

    @property
    def is_terminated(self) -> bool:
        return self.status == Status.TERMINATED

    def reset(self) -> None:
        """Start over: starting position, white to move, no moves played."""
        self.board.initialize()
        self.color_to_move = Color.WHITE
        self.move_count = 0
        self.status = Status.IN_PROGRESS

    def score(self, color: Color) -> int:
        return self.board.score(color)

    def make_move(self, move_text: str) -> MoveResult:
        """
        Attempt a move written as text ("e2e4" or "e2 e4").

        NOTE: unreadable text counts as an invalid move.
        """
        move = Move.from_text(move_text)
        if move is None:
            logger.debug("Could not read move %r", move_text)
            return MoveResult.INVALID_MOVE
        return self.attempt_move(move.from_square, move.to_square)

    def attempt_move(self, from_square: Square, to_square: Square) -> MoveResult:
        """
        Attempt to make a move
        -----

        Checks are done in this order, the first one that fails decides the result:
        1. is there a piece on the starting square?
        2. does it belong to the player whose turn it is?
        3. does its movement rule allow going to the target square?
        4. is the target square free of your own pieces?

        Only when all pass:
        5. update the board (a piece on the target square is captured)
        6. update the move counter
        7. hand the turn to the opponent
        """
        piece = self.board.piece(from_square)
        result = self._check_move(piece, to_square)
        if result != MoveResult.SUCCESS:
            logger.debug(
                "Move %s -> %s rejected: %s",
                from_square,
                to_square,
                result.name,
            )
            return result

        # update the board
        self.board.relocate(from_square, to_square)

        # update the move counter
        self.move_count += 1

        # opponent's turn
        self.color_to_move = self.color_to_move.opponent()

        logger.debug(
            "Move %d played: %s -> %s, %s to move",
            self.move_count,
            from_square,
            to_square,
            self.color_to_move.name.lower(),
        )
        return MoveResult.SUCCESS

    # -- PRIVATE HELPERS ---
    def _check_move(self, piece: Piece | None, to_square: Square) -> MoveResult:
        """All read-only checks of a move attempt. Never changes the game."""
        if piece is None:
            return MoveResult.START_EMPTY

        if piece.color != self.color_to_move:
            return MoveResult.WRONG_COLOR

        if not piece.can_move_to(to_square):
            return MoveResult.INVALID_MOVE

        if self._is_occupied_by_ally(piece, to_square):
            return MoveResult.OCCUPIED_BY_ALLY

        return MoveResult.SUCCESS

    def _is_occupied_by_ally(self, piece: Piece, square: Square) -> bool:
        if not self.board.is_occupied(square):
            return False
        return self.board.piece(square).color == piece.color
