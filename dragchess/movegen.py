"""Pseudo-legal move checks and attack detection."""

from __future__ import annotations

import logging

from dragchess.types import (
    BLACK_KING_START,
    WHITE_KING_START,
    Colour,
    GameState,
    Move,
    PieceType,
    Square,
)

_log = logging.getLogger(__name__)

_DIRECTIONS = ((1, 1), (-1, -1), (1, -1), (-1, 1), (1, 0), (0, 1), (-1, 0), (0, -1))
_KNIGHT_VECTORS = ((2, 1), (-2, -1), (2, -1), (-2, 1), (1, 2), (-1, -2), (1, -2), (-1, 2))


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _on_board(square: Square) -> bool:
    x, y = square
    return 0 <= x < 8 and 0 <= y < 8


def is_path_clear_for_sliders(state: GameState, move: Move) -> bool:
    """True if the move is straight or diagonal and no piece lies strictly between."""
    dx, dy = move.vector
    if dx != 0 and dy != 0 and abs(dx) != abs(dy):
        return False
    step_x, step_y = _sign(dx), _sign(dy)
    x, y = move.start[0] + step_x, move.start[1] + step_y
    if move.start == move.end:
        return True
    while (x, y) != move.end:
        if state.board[y][x] is not None:
            return False
        x += step_x
        y += step_y
    return True


def castle_rook_index(state: GameState, move: Move) -> int:
    """Which rook a castling move would bring along.

    0 means the move is no castle; 1 white queenside, 2 white kingside,
    3 black queenside, 4 black kingside.
    """
    is_white = state.move_colour is Colour.WHITE
    rights = state.white_castle_rights if is_white else state.black_castle_rights
    king_start = WHITE_KING_START if is_white else BLACK_KING_START
    row = 7 if is_white else 0
    if move.start != king_start:
        return 0
    options = (
        (0, (2, row), 1 if is_white else 3),
        (1, (6, row), 2 if is_white else 4),
    )
    for rights_index, king_target, rook_index in options:
        if rights[rights_index] and move.end == king_target and is_path_clear_for_sliders(state, move):
            return rook_index
    return 0


def is_move_valid_for_king(state: GameState, move: Move) -> bool:
    """A one-square step in any direction, or a castle."""
    dx, dy = move.vector
    if max(abs(dx), abs(dy)) == 1:
        return True
    return castle_rook_index(state, move) > 0


def is_pawn_double_push(state: GameState, move: Move) -> bool:
    """True if the move is a two-square pawn advance from the side to move's start row."""
    dx, dy = move.vector
    if state.move_colour is Colour.WHITE:
        forward, start_row = -1, 6
    else:
        forward, start_row = 1, 1
    return (
        dx == 0
        and dy == forward * 2
        and move.start[1] == start_row
        and state.piece_at(move.end) is None
        and is_path_clear_for_sliders(state, move)
    )


def is_en_passant_take(state: GameState, move: Move) -> bool:
    """True if the move captures the pawn that just double-pushed."""
    target = state.en_passant_square
    if target is None:
        return False
    enemy_forward = 1 if state.move_colour is Colour.WHITE else -1
    pawn_square = (target[0], target[1] + enemy_forward)
    if move.end != target or abs(move.start[0] - pawn_square[0]) != 1 or move.start[1] != pawn_square[1]:
        return False
    if not _on_board(pawn_square):
        return False
    piece = state.piece_at(pawn_square)
    return piece is not None and piece.kind is PieceType.PAWN and piece.colour is not state.move_colour


def is_move_valid_for_pawn(state: GameState, move: Move) -> bool:
    """Pawn pushes, double pushes, diagonal captures and en passant."""
    piece = state.piece_at(move.start)
    if piece is None:
        return False
    dx, dy = move.vector
    if dy == 0 or abs(dx) > 1 or abs(dy) > 2:
        return False
    forward = -1 if piece.colour is Colour.WHITE else 1
    enemy_on_end = state.piece_at(move.end) is not None

    if dx == 0 and dy == forward and not enemy_on_end:
        return True
    if is_pawn_double_push(state, move):
        return True
    if enemy_on_end and abs(dx) == 1 and dy == forward:
        return True
    return is_en_passant_take(state, move)


def is_move_valid(state: GameState, move: Move) -> bool:
    """Check a move against piece movement rules, ignoring checks."""
    piece = state.piece_at(move.start)
    if piece is None:
        return False
    if move.start == move.end or not _on_board(move.end):
        return False
    target = state.piece_at(move.end)
    if target is not None and target.colour is piece.colour:
        return False

    dx, dy = move.vector
    kind = piece.kind
    if kind is PieceType.QUEEN:
        return is_path_clear_for_sliders(state, move)
    if kind is PieceType.ROOK:
        return ((dx == 0) != (dy == 0)) and is_path_clear_for_sliders(state, move)
    if kind is PieceType.BISHOP:
        return abs(dx) == abs(dy) and is_path_clear_for_sliders(state, move)
    if kind is PieceType.KNIGHT:
        return (abs(dx), abs(dy)) in ((2, 1), (1, 2))
    if kind is PieceType.KING:
        return is_move_valid_for_king(state, move)
    return is_move_valid_for_pawn(state, move)


def is_square_attacked(state: GameState, square: Square, enemy: Colour) -> bool:
    """True if any piece of colour ``enemy`` attacks ``square``."""
    x, y = square

    forward = -1 if enemy is Colour.BLACK else 1
    for pawn_square in ((x + 1, y + forward), (x - 1, y + forward)):
        if _on_board(pawn_square):
            piece = state.piece_at(pawn_square)
            if piece is not None and piece.colour is enemy and piece.kind is PieceType.PAWN:
                return True

    for jumper, vectors in ((PieceType.KNIGHT, _KNIGHT_VECTORS), (PieceType.KING, _DIRECTIONS)):
        for vx, vy in vectors:
            candidate = (x + vx, y + vy)
            if not _on_board(candidate):
                continue
            piece = state.piece_at(candidate)
            if piece is not None and piece.colour is enemy and piece.kind is jumper:
                return True

    for vx, vy in _DIRECTIONS:
        straight = abs(vx) + abs(vy) == 1
        current = (x + vx, y + vy)
        while _on_board(current):
            piece = state.piece_at(current)
            if piece is not None:
                if piece.colour is enemy:
                    if piece.kind is PieceType.QUEEN:
                        return True
                    if piece.kind is PieceType.ROOK and straight:
                        return True
                    if piece.kind is PieceType.BISHOP and not straight:
                        return True
                break
            current = (current[0] + vx, current[1] + vy)
    return False


def is_king_in_check(state: GameState, colour: Colour) -> bool:
    """True if the king of ``colour`` is attacked; False if it has no king."""
    for row_index, row in enumerate(state.board):
        for column_index, piece in enumerate(row):
            if piece is not None and piece.colour is colour and piece.kind is PieceType.KING:
                return is_square_attacked(state, (column_index, row_index), colour.opponent())
    _log.warning("no %s king was found on the board", colour.name.lower())
    return False


def pawn_on_last_rank(state: GameState) -> bool:
    """True if a pawn of either colour stands on the first or last row."""
    return any(
        piece is not None and piece.kind is PieceType.PAWN
        for row in (state.board[0], state.board[7])
        for piece in row
    )