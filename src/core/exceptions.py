"""
Custom exceptions raised at the boundaries of the domain layer.

NOTE: rejected moves are not exceptions. The Game reports them as a MoveResult.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while handling a game."""


class InvalidRequestError(GameError):
    """Data sent in by a client cannot be interpreted."""


class GameStateError(GameError):
    """A stored/transported game cannot be turned back into a consistent Game."""


class RepositoryError(GameError):
    """Storing or retrieving a game failed."""


class GameNotFoundError(RepositoryError):
    """No game is registered under the requested ID."""
