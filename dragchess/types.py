"""Core chess data types: colours, pieces, moves and the game state."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

Square = Tuple[int, int]
"""A board square as ``(x, y)``: column then row, origin at the top left."""

WHITE_KING_START: Square = (4, 7)
WHITE_QUEENSIDE_ROOK_START: Square = (0, 7)
WHITE_KINGSIDE_ROOK_START: Square = (7, 7)
BLACK_KING_START: Square = (4, 0)
BLACK_QUEENSIDE_ROOK_START: Square = (0, 0)
BLACK_KINGSIDE_ROOK_START: Square = (7, 0)


class Colour(Enum):
    """The side a piece belongs to."""

    WHITE = 0
    BLACK = 1

    def opponent(self) -> Colour:
        """Return the other side."""
        return Colour.BLACK if self is Colour.WHITE else Colour.WHITE


class PieceType(Enum):
    """The kind of a chess piece."""

    KING = 0
    QUEEN = 1
    ROOK = 2
    BISHOP = 3
    KNIGHT = 4
    PAWN = 5


class MoveType(Enum):
    """What a move did, used to pick a sound and to signal the end of the game."""

    NONE = 0
    MOVESELF = 1
    CAPTURE = 2
    CASTLE = 3
    PROMOTEPAWN = 4
    GAMEOVER = 5


class GameOverType(Enum):
    """How the game ended, or CONTINUE while it is still running."""

    CONTINUE = 0
    STALEMATE = 1
    TFRDRAW = 2
    FIFTYMOVEDRAW = 3
    WHITEWINBYCHECKMATE = 4
    BLACKWINBYCHECKMATE = 5
    WHITEWINBYRESIGN = 6
    BLACKWINBYRESIGN = 7


@dataclass(frozen=True)
class Piece:
    """A piece of a given kind and colour."""

    kind: PieceType
    colour: Colour


@dataclass(frozen=True)
class Move:
    """A move from one square to another."""

    start: Square
    end: Square

    @property
    def vector(self) -> Tuple[int, int]:
        """The displacement ``(dx, dy)`` from start to end."""
        return self.end[0] - self.start[0], self.end[1] - self.start[1]


def _empty_board() -> list:
    return [[None] * 8 for _ in range(8)]


@dataclass(eq=False)
class GameState:
    """A full snapshot of a game.

    The board is indexed ``board[row][column]``; squares are ``(x, y)``.
    Two states compare equal when their boards hold the same pieces.
    """

    board: list = field(default_factory=_empty_board)
    move_colour: Colour = Colour.WHITE
    selected_piece: Optional[Piece] = None
    selected_start: Optional[Square] = None
    full_move_counter: int = 0
    half_move_counter: int = 0
    half_moves_since_active: int = 0
    moves_since_en_passant: int = 0
    # [queenside, kingside]
    white_castle_rights: list = field(default_factory=lambda: [True, True])
    black_castle_rights: list = field(default_factory=lambda: [True, True])
    en_passant_square: Optional[Square] = None
    game_over: GameOverType = GameOverType.CONTINUE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return self.board == other.board

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> GameState:
        """Return an independent copy of this state."""
        return replace(
            self,
            board=[list(row) for row in self.board],
            white_castle_rights=list(self.white_castle_rights),
            black_castle_rights=list(self.black_castle_rights),
        )

    def piece_at(self, square: Square) -> Optional[Piece]:
        """Return the piece on ``square`` or None."""
        x, y = square
        return self.board[y][x]

    def set_piece(self, square: Square, piece: Optional[Piece]) -> None:
        """Put ``piece`` on ``square``; None clears it."""
        x, y = square
        self.board[y][x] = piece