"""Orchestration of communication from API layer to business logic and storage layers (and the reverse direction)."""

import logging
import threading
from uuid import UUID

from src.api.models import (
    MOVE_RESULT_MESSAGES,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    MoveResponse,
    PieceResponse,
    ResetGameRequest,
)
from src.chess.game import Game
from src.chess.square import Square
from src.core.exceptions import GameNotFoundError
from src.core.models import GameModel
from src.core.shared_types import Color, MoveResult, PieceType, Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """
    Orchestration of layers for chess game.

    NOTE: Every request that changes a game runs fetch -> update -> store while holding that game's lock,
    so two requests for the same game can never interleave. Requests for different games do not wait on each other.
    """

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository
        self._game_locks: dict[UUID, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    # -- API logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """A player requested to create a new game."""

        # Create a new Game, and convert into GameModel
        new_game = Game.new_game()
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("Created game %s", game_id)

        # Return a GameResponse
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, Game.from_model(game_model))

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt."""

        from_square = Square.from_algebraic(request.from_square)
        to_square = Square.from_algebraic(request.to_square)

        with self._lock_for(request.game_id):
            # Retrieve stored GameModel from repository
            stored_model = self._fetch_game_or_forget_lock(request.game_id)

            # Create a new Game instance from the retrieved GameModel
            game = Game.from_model(stored_model)

            # Attempt the move
            result = game.attempt_move(from_square, to_square)
            move_result = MoveResult[result.name]

            # Only a successful move changes the game, so nothing to store otherwise
            if move_result == MoveResult.SUCCESS:
                self.repo.update_game(request.game_id, game.to_model())

        return MoveResponse(
            game_id=request.game_id,
            result=move_result,
            message=MOVE_RESULT_MESSAGES[move_result],
            game=self._create_game_response(request.game_id, game),
        )

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Start the game over from the starting position."""

        with self._lock_for(request.game_id):
            stored_model = self._fetch_game_or_forget_lock(request.game_id)
            game = Game.from_model(stored_model)
            game.reset()
            self.repo.update_game(request.game_id, game.to_model())

        logger.info("Reset game %s", request.game_id)
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self._lock_for(request.game_id):
            self.repo.delete_game(request.game_id)
        self._forget_lock(request.game_id)
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _lock_for(self, game_id: UUID) -> threading.Lock:
        """One lock per game, created on first use."""
        with self._registry_lock:
            return self._game_locks.setdefault(game_id, threading.Lock())

    def _forget_lock(self, game_id: UUID) -> None:
        with self._registry_lock:
            self._game_locks.pop(game_id, None)

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game to a GameResponse (for game with given ID.)"""
        pieces = [
            PieceResponse(
                square=piece.square.to_algebraic(),
                type=PieceType[piece.type.name],
                color=Color[piece.color.name],
                symbol=piece.symbol,
                points=piece.points,
            )
            for piece in game.board.pieces()
        ]
        return GameResponse(
            game_id=game_id,
            board_fen=game.board.to_fen(),
            pieces=pieces,
            color_to_move=Color[game.color_to_move.name],
            move_count=game.move_count,
            status=Status[game.status.name],
            scores={
                Color[color.name]: score
                for color, score in game.board.count_material().items()
            },
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model

    def _fetch_game_or_forget_lock(self, game_id: UUID) -> GameModel:
        """Same as `_fetch_game()`, for callers holding the game's lock: an unknown ID must not leave its lock behind."""
        try:
            return self._fetch_game(game_id)
        except GameNotFoundError:
            self._forget_lock(game_id)
            raise
