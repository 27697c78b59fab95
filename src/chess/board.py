"""The Game board holds the pieces: placement, look-ups and relocating pieces from one square to another"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.chess.pieces import FEN_TO_PIECE, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square

# Back rank, from the a-file to the h-file
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

HOME_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
PAWN_ROW: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}

Grid = list[list[Optional[Piece]]]


def _empty_grid() -> Grid:
    rows, cols = BOARD_DIMENSIONS
    return [[None] * cols for _ in range(rows)]


@dataclass
class Board:
    """
    8x8 grid of squares that are either empty (None) or hold a single piece.
    ----

    The board owns every piece on it. A captured piece is simply overwritten in its cell and
    disappears from the game.
    """

    grid: Grid = field(default_factory=_empty_grid)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def starting_position(cls) -> Self:
        board = cls()
        board.initialize()
        return board

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 7), starting with the rook on a8
        * pawns cover the 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (row 0) are the white pieces.

        Raises ValueError when the string does not describe exactly 8 rows of 8 squares with known piece letters.
        """
        rows, cols = BOARD_DIMENSIONS
        board = cls()
        fen_by_rows = fen_str.split("/")
        if len(fen_by_rows) != rows:
            raise ValueError(f"Expected {rows} ranks in {fen_str!r}, found {len(fen_by_rows)}.")

        for row_idx, fen_one_row in enumerate(fen_by_rows):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            row = rows - 1 - row_idx
            col = 0
            for character in fen_one_row:
                if character.lower() in FEN_TO_PIECE:
                    if col >= cols:
                        raise ValueError(f"Rank {fen_one_row!r} holds more than {cols} squares.")
                    square = Square(row, col)
                    board.place_piece(Piece.from_fen(character, square), square)
                    col += 1
                elif character in "12345678":
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                else:
                    raise ValueError(f"Unknown character {character!r} in rank {fen_one_row!r}.")
            if col != cols:
                raise ValueError(f"Rank {fen_one_row!r} holds {col} squares instead of {cols}.")
        return board

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string, top rank first."""
        return "/".join(
            self._row_to_fen(row) for row in range(BOARD_DIMENSIONS[0] - 1, -1, -1)
        )

    def _row_to_fen(self, row: int) -> str:
        """FEN string of a single row"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.grid[row][col]

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def initialize(self) -> None:
        """Clear the board, then set up the standard starting position. Calling it again resets the board."""
        self.grid = _empty_grid()
        for color in Color:
            home_row = HOME_ROW[color]
            for col, piece_type in enumerate(BACK_RANK):
                square = Square(home_row, col)
                self.place_piece(Piece(piece_type, color, square), square)

            pawn_row = PAWN_ROW[color]
            for col in range(BOARD_DIMENSIONS[1]):
                square = Square(pawn_row, col)
                self.place_piece(Piece(PieceType.PAWN, color, square), square)

    def piece(self, square: Square) -> Optional[Piece]:
        """The piece standing on the square. None for an empty square or a square off the board."""
        if not square.is_within_bounds():
            return None
        return self.grid[square.row][square.col]

    def is_occupied(self, square: Square) -> bool:
        return self.piece(square) is not None

    def place_piece(self, piece: Piece, square: Square) -> None:
        """Put a piece on the board while setting up a position (overwrites whatever was on that square)"""
        piece.move_to(square)
        self.grid[square.row][square.col] = piece

    def relocate(self, from_square: Square, to_square: Square) -> None:
        """
        Move whatever stands on `from_square` to `to_square`.
        ----

        NOTE: No rules are checked here (the Game does that). A piece on the target square is captured,
        i.e. overwritten. Nothing happens if the starting square is empty.
        """
        piece_that_moved = self.grid[from_square.row][from_square.col]
        if piece_that_moved is None:
            return
        self.grid[to_square.row][to_square.col] = piece_that_moved
        self.grid[from_square.row][from_square.col] = None
        piece_that_moved.move_to(to_square)

    def pieces(self, color: Optional[Color] = None) -> Iterator[Piece]:
        """All pieces on the board (optionally of a single color), row by row starting at a1."""
        for row in self.grid:
            for piece in row:
                if piece is None:
                    continue
                if color is None or piece.color == color:
                    yield piece

    def score(self, color: Color) -> int:
        """Tally the points of material for a specific player (recomputed on every call)"""
        return sum(piece.points for piece in self.pieces(color))

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {color: self.score(color) for color in Color}
