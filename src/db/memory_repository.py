"""Implementation of (Game)Repository that keeps the games in memory for as long as the process lives"""

import logging
import threading
from dataclasses import replace
from uuid import UUID, uuid4

from src.core.config import Config
from src.core.exceptions import RepositoryError
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class InMemoryGameRepository:
    """
    Games stored in a dictionary, keyed by game ID.
    Thread-safe: every access to the dictionary happens under the same lock.

    NOTE: Copies go in and out, so a caller can never change a stored record without calling `update_game()`.
    """

    def __init__(self, max_games: int | None = None) -> None:
        self._games: dict[UUID, GameModel] = {}
        self._lock = threading.RLock()
        self.max_games = Config.MAX_ACTIVE_GAMES if max_games is None else max_games
        if self.max_games < 1:
            raise ValueError(f"A repository must hold at least one game, got max_games={self.max_games}")

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self._lock:
            game = self._games.get(game_id)
            return replace(game) if game is not None else None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        with self._lock:
            if len(self._games) >= self.max_games:
                raise RepositoryError(
                    f"Cannot create a new game. Limit of {self.max_games} active games reached."
                )
            new_id = uuid4()
            self._games[new_id] = replace(game)
            logger.debug("Stored game %s. Games stored: %d", new_id, len(self._games))
            return replace(game), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        with self._lock:
            if game_id not in self._games:
                return None
            self._games[game_id] = replace(game)
            return replace(game)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        with self._lock:
            game = self._games.pop(game_id, None)
            if game is not None:
                logger.debug(
                    "Removed game %s. Games stored: %d", game_id, len(self._games)
                )
            return game

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
