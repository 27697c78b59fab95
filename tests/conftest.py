"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from src.chess.board import Board
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.db.memory_repository import InMemoryGameRepository


@pytest.fixture
def board_with_single_piece() -> Callable[[PieceType, Color, str], Board]:
    """Call the inner function that will be returned with the desired piece type, color, and square"""

    def _create_board(
        piece_type: PieceType,
        color: Color,
        square_name: str = "d4",
    ) -> Board:
        board = Board.empty()
        square = Square.from_algebraic(square_name)
        board.place_piece(Piece(piece_type, color, square), square)
        return board

    return _create_board


@pytest.fixture
def memory_repository() -> Generator[InMemoryGameRepository, None, None]:
    """Fresh, empty repository for every test."""
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo._games.clear()
