"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and the repository/domain layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the storage, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service, repository, and Game layers."""

    board_fen: str
    color_to_move: str
    move_count: int
    status: str
