"""FEN loading, piece selection and the game being played."""

from __future__ import annotations

from typing import List, Optional

from dragchess.movegen import is_king_in_check
from dragchess.moves import apply_move, is_move_legal, legal_moves, legal_moves_for_square
from dragchess.types import (
    Colour,
    GameOverType,
    GameState,
    Move,
    MoveType,
    Piece,
    PieceType,
    Square,
)

_PIECE_SYMBOLS = {
    "k": PieceType.KING,
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
    "p": PieceType.PAWN,
}

# castling letter -> (white side?, rights index)
_CASTLING_SYMBOLS = {
    "Q": (True, 0),
    "K": (True, 1),
    "q": (False, 0),
    "k": (False, 1),
}

_DIGITS = "0123456789"


def _parse_en_passant(text: str) -> Square:
    if len(text) != 2 or text[0] not in "abcdefgh" or text[1] not in "12345678":
        raise ValueError(f"invalid en passant square in fen string: {text!r}")
    return ord(text[0]) - ord("a"), 7 - (ord(text[1]) - ord("1"))


def parse_fen(fen: str) -> GameState:
    """Build a game state from a FEN string.

    Raises ValueError on characters the format does not allow, pieces placed
    off the board, or missing fields.
    """
    placement, separator, rest = fen.partition(" ")
    state = GameState()

    row = column = 0
    for char in placement:
        if char == "/":
            row += 1
            column = 0
        elif char in _DIGITS:
            column += int(char)
        elif char.lower() in _PIECE_SYMBOLS:
            if not (0 <= row < 8 and 0 <= column < 8):
                raise ValueError(f"fen string places a piece off the board: {fen!r}")
            colour = Colour.WHITE if char.isupper() else Colour.BLACK
            state.board[row][column] = Piece(_PIECE_SYMBOLS[char.lower()], colour)
            column += 1
        else:
            raise ValueError(f"fen string contains invalid character: {char!r}")

    fields = rest.split(" ")
    if not separator or len(fields) < 5:
        raise ValueError(f"fen string is missing game state fields: {fen!r}")
    colour_field, castling, en_passant, half_moves, full_moves = fields[:5]

    state.move_colour = Colour.WHITE if colour_field == "w" else Colour.BLACK

    state.white_castle_rights = [False, False]
    state.black_castle_rights = [False, False]
    if castling != "-":
        for char in castling:
            if char not in _CASTLING_SYMBOLS:
                raise ValueError(f"invalid character in castling section of fen string: {char!r}")
            is_white, index = _CASTLING_SYMBOLS[char]
            rights = state.white_castle_rights if is_white else state.black_castle_rights
            rights[index] = True

    if en_passant != "-":
        state.en_passant_square = _parse_en_passant(en_passant)

    state.half_move_counter = int(half_moves)
    state.full_move_counter = int(full_moves)
    return state


def select_piece(state: GameState, start: Square) -> bool:
    """Select the piece on ``start`` if it belongs to the side to move."""
    x, y = start
    if not (0 <= x < 8 and 0 <= y < 8):
        return False
    piece = state.piece_at(start)
    if piece is None or piece.colour is not state.move_colour:
        state.selected_start = None
        state.selected_piece = None
        return False
    state.selected_start = start
    state.selected_piece = piece
    return True


def place_selected_piece(
    state: GameState,
    end: Square,
    history: Optional[List[GameState]] = None,
    promotion: Optional[Piece] = None,
) -> MoveType:
    """Move the selected piece to ``end`` if legal, then check for mate or stalemate.

    The selection is cleared afterwards. Returns NONE when nothing moved.
    """
    start = state.selected_start
    if start is None or state.piece_at(start) is None:
        return MoveType.NONE

    move_type = MoveType.NONE
    move = Move(start, end)
    if is_move_legal(state, move):
        move_type = apply_move(state, move, history, promotion)

    if not legal_moves(state):
        move_type = MoveType.GAMEOVER
        if is_king_in_check(state, state.move_colour):
            state.game_over = (
                GameOverType.BLACKWINBYCHECKMATE
                if state.move_colour is Colour.WHITE
                else GameOverType.WHITEWINBYCHECKMATE
            )
        else:
            state.game_over = GameOverType.STALEMATE

    state.selected_start = None
    state.selected_piece = None
    return move_type


class Game:
    """The game in progress: its current state and the states that led to it."""

    def __init__(self) -> None:
        self.state = GameState()
        self.history: List[GameState] = []

    def load_fen(self, fen: str) -> None:
        """Replace the current state with the position in ``fen`` and record it."""
        self.state = parse_fen(fen)
        self.history.append(self.state.copy())

    def pick_up(self, start: Square) -> bool:
        """Select the piece on ``start`` for the side to move."""
        return select_piece(self.state, start)

    def place(self, end: Square, promotion: Optional[Piece] = None) -> MoveType:
        """Drop the selected piece on ``end``."""
        return place_selected_piece(self.state, end, self.history, promotion)

    def legal_moves_for_square(self, start: Square) -> List[Square]:
        """Squares the piece on ``start`` may legally move to."""
        return legal_moves_for_square(self.state, start)