"""Unit tests for /src/chess/game.py"""

import logging
from copy import deepcopy
from unittest.mock import patch

import pytest

from src.chess.game import (
    Board,
    Color,
    Game,
    GameModel,
    MoveResult,
    Square,
    Status,
)
from src.chess.pieces import Piece, PieceType
from src.core.exceptions import GameStateError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * 8)


def _sq(name: str) -> Square:
    return Square.from_algebraic(name)


@pytest.fixture
def game() -> Game:
    return Game.new_game()


# -- CREATION LOGIC --
def test_new_game(game: Game) -> None:
    assert game.board.to_fen() == STARTING_POSITION
    assert game.color_to_move == Color.WHITE
    assert game.move_count == 0
    assert game.status == Status.IN_PROGRESS
    assert not game.is_terminated


def test_game_creation_from_model_roundtrip() -> None:
    """Create a Game from a GameModel and convert back into GameModel"""
    expected_model = GameModel(
        board_fen="rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR",
        color_to_move="white",
        move_count=2,
        status="in progress",
    )
    game = Game.from_model(expected_model)
    assert game.to_model() == expected_model


def test_game_from_model_builds_domain_objects() -> None:
    model = GameModel(
        board_fen=STARTING_POSITION,
        color_to_move="black",
        move_count=7,
        status="terminated",
    )
    game = Game.from_model(model)
    assert isinstance(game.board, Board)
    assert game.color_to_move == Color.BLACK
    assert game.move_count == 7
    assert game.status == Status.TERMINATED
    assert game.is_terminated


@pytest.mark.parametrize(
    "model",
    [
        GameModel(STARTING_POSITION, "white", 0, "checkmate"),
        GameModel(STARTING_POSITION, "green", 0, "in progress"),
        GameModel(STARTING_POSITION, "white", -1, "in progress"),
        GameModel("8/8/8", "white", 0, "in progress"),
        GameModel("8/8/8/8/8/8/8/8/K7", "white", 0, "in progress"),
        GameModel("9/8/8/8/8/8/8/8", "white", 0, "in progress"),
        GameModel("K8/8/8/8/8/8/8/8", "white", 0, "in progress"),
        GameModel("x7/8/8/8/8/8/8/8", "white", 0, "in progress"),
    ],
)
def test_game_from_invalid_model(model: GameModel) -> None:
    with pytest.raises(GameStateError):
        _ = Game.from_model(model)


# -- MOVE ATTEMPTS: SUCCESS --
def test_successful_move(game: Game) -> None:
    result = game.attempt_move(_sq("e2"), _sq("e4"))

    assert result == MoveResult.SUCCESS
    assert game.board.piece(_sq("e2")) is None
    assert game.board.piece(_sq("e4")) == Piece(PieceType.PAWN, Color.WHITE, _sq("e4"))
    assert game.move_count == 1
    assert game.color_to_move == Color.BLACK


def test_turns_alternate_on_success(game: Game) -> None:
    """Every successful move hands the turn over and adds exactly one to the counter"""
    moves = [("e2", "e4"), ("e7", "e5"), ("g1", "f3"), ("b8", "c6"), ("f1", "c4")]
    for count, (from_name, to_name) in enumerate(moves, start=1):
        player = game.color_to_move
        assert game.attempt_move(_sq(from_name), _sq(to_name)) == MoveResult.SUCCESS
        assert game.move_count == count
        assert game.color_to_move == player.opponent()


def test_capture(game: Game) -> None:
    """Taking an opponent's piece removes it from the board (and from the score)"""
    game.board = Board.from_fen("4k3/8/8/3q4/8/8/8/3RK3")
    result = game.attempt_move(_sq("d1"), _sq("d5"))

    assert result == MoveResult.SUCCESS
    assert game.board.piece(_sq("d5")) == Piece(PieceType.ROOK, Color.WHITE, _sq("d5"))
    assert game.score(Color.BLACK) == 0
    assert game.score(Color.WHITE) == 5


def test_sliding_pieces_are_not_blocked(game: Game) -> None:
    """
    No obstruction checks: the rook on a1 jumps over its own pawn on a2
    and the queen on d1 over the pawn on e2.
    """
    assert game.attempt_move(_sq("a1"), _sq("a4")) == MoveResult.SUCCESS
    assert game.attempt_move(_sq("h8"), _sq("h5")) == MoveResult.SUCCESS
    assert game.attempt_move(_sq("d1"), _sq("h5")) == MoveResult.SUCCESS
    assert game.score(Color.BLACK) == 34


def test_pawn_loses_double_step_after_moving(game: Game) -> None:
    """The pawn object itself is moved by the board, so its reach follows its new square"""
    pawn = game.board.piece(Square(1, 4))
    assert pawn is not None
    assert pawn.can_move_to(Square(2, 4))
    assert pawn.can_move_to(Square(3, 4))

    assert game.attempt_move(Square(1, 4), Square(2, 4)) == MoveResult.SUCCESS

    assert game.board.piece(Square(2, 4)) is pawn
    assert pawn.square == Square(2, 4)
    assert pawn.can_move_to(Square(3, 4))
    assert not pawn.can_move_to(Square(4, 4))

    game.attempt_move(_sq("e7"), _sq("e6"))
    assert game.attempt_move(Square(2, 4), Square(4, 4)) == MoveResult.INVALID_MOVE


def test_pawn_double_step_blocked_by_nothing(game: Game) -> None:
    """A piece in front of the pawn does not stop the double step"""
    assert game.attempt_move(_sq("g1"), _sq("f3")) == MoveResult.SUCCESS
    assert game.attempt_move(_sq("e7"), _sq("e5")) == MoveResult.SUCCESS
    assert game.attempt_move(_sq("f2"), _sq("f4")) == MoveResult.SUCCESS


# -- MOVE ATTEMPTS: REJECTED --
def test_start_square_empty(game: Game) -> None:
    before = deepcopy(game)
    assert game.attempt_move(Square(3, 3), Square(4, 3)) == MoveResult.START_EMPTY
    assert game == before


def test_start_square_off_the_board(game: Game) -> None:
    assert game.attempt_move(Square(-1, 0), Square(0, 0)) == MoveResult.START_EMPTY
    assert game.attempt_move(Square(0, 9), Square(0, 0)) == MoveResult.START_EMPTY


def test_wrong_color(game: Game) -> None:
    """Black may not move first"""
    before = deepcopy(game)
    assert game.attempt_move(_sq("e7"), _sq("e5")) == MoveResult.WRONG_COLOR
    assert game == before


def test_wrong_color_after_white_moved(game: Game) -> None:
    game.attempt_move(_sq("e2"), _sq("e4"))
    assert game.color_to_move == Color.BLACK
    assert game.attempt_move(_sq("d2"), _sq("d4")) == MoveResult.WRONG_COLOR
    assert game.color_to_move == Color.BLACK
    assert game.move_count == 1


@pytest.mark.parametrize(
    "from_name, to_name",
    [
        ("e2", "e5"),  # pawn three steps
        ("e2", "d3"),  # pawn diagonally (no captures for pawns)
        ("g1", "g3"),  # knight straight
        ("c1", "c3"),  # bishop straight
        ("e1", "e3"),  # king two steps
        ("a1", "b3"),  # rook like a knight
    ],
)
def test_invalid_move(game: Game, from_name: str, to_name: str) -> None:
    before = deepcopy(game)
    assert game.attempt_move(_sq(from_name), _sq(to_name)) == MoveResult.INVALID_MOVE
    assert game == before


def test_target_off_the_board_is_invalid(game: Game) -> None:
    """Out of range is an ordinary rejection, never an error"""
    assert game.attempt_move(_sq("a1"), Square(0, -1)) == MoveResult.INVALID_MOVE
    assert game.attempt_move(_sq("a1"), Square(8, 0)) == MoveResult.INVALID_MOVE
    assert game.move_count == 0


def test_moving_to_own_square_is_invalid(game: Game) -> None:
    assert game.attempt_move(_sq("d1"), _sq("d1")) == MoveResult.INVALID_MOVE


@pytest.mark.parametrize(
    "from_name, to_name",
    [
        ("a1", "a2"),  # rook onto own pawn
        ("d1", "e1"),  # queen onto own king
        ("c1", "d2"),  # bishop onto own pawn
        ("g1", "e2"),  # knight onto own pawn
    ],
)
def test_occupied_by_ally(game: Game, from_name: str, to_name: str) -> None:
    before = deepcopy(game)
    assert game.attempt_move(_sq(from_name), _sq(to_name)) == MoveResult.OCCUPIED_BY_ALLY
    assert game == before


def test_checks_happen_in_order(game: Game) -> None:
    """A black rook 'onto' its own pawn while white is to move: the color check comes first"""
    assert game.attempt_move(_sq("a8"), _sq("a7")) == MoveResult.WRONG_COLOR
    # illegal geometry is reported before the ally on the target square
    assert game.attempt_move(_sq("b1"), _sq("b2")) == MoveResult.INVALID_MOVE


def test_path_blocked_is_never_returned(game: Game) -> None:
    """Part of the vocabulary only"""
    results = {
        game.attempt_move(Square(row, col), Square(to_row, to_col))
        for row in range(2)
        for col in range(8)
        for to_row in range(8)
        for to_col in range(8)
    }
    assert MoveResult.PATH_BLOCKED not in results


def test_rejection_does_not_consult_board_relocate(game: Game) -> None:
    with patch.object(Board, "relocate") as mock_relocate:
        game.attempt_move(_sq("e7"), _sq("e5"))
        game.attempt_move(_sq("e2"), _sq("e5"))
        game.attempt_move(_sq("a1"), _sq("a2"))
        mock_relocate.assert_not_called()

        game.attempt_move(_sq("e2"), _sq("e4"))
        mock_relocate.assert_called_once_with(_sq("e2"), _sq("e4"))


# -- TEXT INPUT --
def test_make_move_from_text(game: Game) -> None:
    assert game.make_move("e2 e4") == MoveResult.SUCCESS
    assert game.make_move("e7e5") == MoveResult.SUCCESS
    assert game.move_count == 2


def test_make_move_unreadable_text(game: Game) -> None:
    assert game.make_move("castle!") == MoveResult.INVALID_MOVE
    assert game.move_count == 0
    assert game.color_to_move == Color.WHITE


# -- RESET --
def test_reset(game: Game) -> None:
    game.make_move("e2e4")
    game.make_move("d7d5")
    game.make_move("e4d5")  # not a legal pawn move, rejected
    game.make_move("d1h5")
    game.status = Status.TERMINATED

    game.reset()

    assert game.board.to_fen() == STARTING_POSITION
    assert game.color_to_move == Color.WHITE
    assert game.move_count == 0
    assert game.status == Status.IN_PROGRESS


def test_score(game: Game) -> None:
    assert game.score(Color.WHITE) == 39
    assert game.score(Color.BLACK) == 39


def test_game_on_empty_board() -> None:
    game = Game(board=Board.from_fen(EMPTY_FEN))
    assert game.attempt_move(_sq("e2"), _sq("e4")) == MoveResult.START_EMPTY


# -- LOGGING --
def test_rejected_move_is_logged(game: Game, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="src.chess.game"):
        game.attempt_move(_sq("e7"), _sq("e5"))
    assert "WRONG_COLOR" in caplog.text
