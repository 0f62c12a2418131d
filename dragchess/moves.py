"""Making, undoing and generating legal moves."""

from __future__ import annotations

from dataclasses import fields
from typing import List, Optional

from dragchess.movegen import (
    castle_rook_index,
    is_en_passant_take,
    is_king_in_check,
    is_move_valid,
    is_pawn_double_push,
    is_square_attacked,
    pawn_on_last_rank,
)
from dragchess.types import (
    BLACK_KINGSIDE_ROOK_START,
    BLACK_QUEENSIDE_ROOK_START,
    WHITE_KINGSIDE_ROOK_START,
    WHITE_QUEENSIDE_ROOK_START,
    Colour,
    GameOverType,
    GameState,
    Move,
    MoveType,
    Piece,
    PieceType,
    Square,
)

# Rook start square, rook end square and colour for castle rook indices 1 to 4.
_CASTLE_ROOK_MOVES = (
    ((0, 7), (3, 7), Colour.WHITE),
    ((7, 7), (5, 7), Colour.WHITE),
    ((0, 0), (3, 0), Colour.BLACK),
    ((7, 0), (5, 0), Colour.BLACK),
)

_FIFTY_MOVE_LIMIT = 50
_REPETITION_LIMIT = 3


def update_castling_rights(state: GameState, move: Move) -> None:
    """Withdraw castling rights lost by moving a king or rook, or by a rook being taken."""
    piece = state.piece_at(move.start)
    if piece is None:
        return
    end_has_piece = state.piece_at(move.end) is not None

    sides = (
        (state.white_castle_rights, WHITE_QUEENSIDE_ROOK_START, WHITE_KINGSIDE_ROOK_START, Colour.WHITE),
        (state.black_castle_rights, BLACK_QUEENSIDE_ROOK_START, BLACK_KINGSIDE_ROOK_START, Colour.BLACK),
    )
    for rights, queenside_rook, kingside_rook, colour in sides:
        if not any(rights):
            continue
        if piece.colour is colour:
            if piece.kind is PieceType.KING:
                rights[0] = rights[1] = False
            elif piece.kind is PieceType.ROOK:
                if move.start == queenside_rook:
                    rights[0] = False
                if move.start == kingside_rook:
                    rights[1] = False
        if end_has_piece:
            if move.end == queenside_rook:
                rights[0] = False
            if move.end == kingside_rook:
                rights[1] = False


def castle_rook(state: GameState, rook: int) -> None:
    """Move the rook for castle index ``rook`` (1 to 4) to its castled square."""
    if not 1 <= rook <= len(_CASTLE_ROOK_MOVES):
        raise ValueError(f"invalid castle rook index: {rook}")
    start, end, colour = _CASTLE_ROOK_MOVES[rook - 1]
    state.set_piece(start, None)
    state.set_piece(end, Piece(PieceType.ROOK, colour))


def apply_move(
    state: GameState,
    move: Move,
    history: Optional[List[GameState]] = None,
    promotion: Optional[Piece] = None,
) -> MoveType:
    """Play ``move`` on ``state`` and report what kind of move it was.

    When ``history`` is given, a copy of the state before the move is appended
    to it and threefold repetition is checked against it.
    """
    piece = state.piece_at(move.start)
    if piece is None:
        raise ValueError(f"no piece on square {move.start}")

    if history is not None:
        history.append(state.copy())

    move_type = MoveType.NONE

    if is_pawn_double_push(state, move):
        forward = -1 if piece.colour is Colour.WHITE else 1
        state.en_passant_square = (move.end[0], move.end[1] - forward)
        state.moves_since_en_passant = 0

    if is_en_passant_take(state, move):
        enemy_forward = 1 if state.move_colour is Colour.WHITE else -1
        ep_x, ep_y = state.en_passant_square
        state.set_piece((ep_x, ep_y + enemy_forward), None)
        move_type = MoveType.CAPTURE

    # en passant stays available for exactly one reply
    if state.en_passant_square is not None:
        if state.moves_since_en_passant == 0:
            state.moves_since_en_passant += 1
        else:
            state.en_passant_square = None
            state.moves_since_en_passant = 0

    rook_index = castle_rook_index(state, move)
    if rook_index > 0:
        castle_rook(state, rook_index)
        move_type = MoveType.CASTLE
    update_castling_rights(state, move)

    if move_type is MoveType.NONE:
        move_type = MoveType.CAPTURE if state.piece_at(move.end) is not None else MoveType.MOVESELF

    state.set_piece(move.start, None)
    state.set_piece(move.end, piece)
    state.move_colour = state.move_colour.opponent()
    state.half_move_counter += 1
    if state.half_move_counter % 2 == 0:
        state.full_move_counter += 1

    if promotion is not None and pawn_on_last_rank(state):
        state.set_piece(move.end, promotion)
        move_type = MoveType.PROMOTEPAWN

    if history is not None:
        if sum(1 for previous in history if previous == state) >= _REPETITION_LIMIT:
            move_type = MoveType.GAMEOVER
            state.game_over = GameOverType.TFRDRAW

    moved = state.piece_at(move.end)
    if move_type is MoveType.CAPTURE or moved.kind is PieceType.PAWN:
        state.half_moves_since_active = 0
    else:
        state.half_moves_since_active += 1
        if state.half_moves_since_active >= _FIFTY_MOVE_LIMIT:
            move_type = MoveType.GAMEOVER
            state.game_over = GameOverType.FIFTYMOVEDRAW

    return move_type


def undo_last_move(state: GameState, history: List[GameState]) -> None:
    """Restore ``state`` to the most recent entry of ``history`` and drop it."""
    if not history:
        raise IndexError("cannot undo: no history")
    previous = history.pop()
    for f in fields(GameState):
        setattr(state, f.name, getattr(previous, f.name))


def is_move_legal(state: GameState, move: Move) -> bool:
    """True if the move is valid and does not leave or pass the king through check."""
    if not is_move_valid(state, move):
        return False

    simulated = state.copy()
    apply_move(simulated, move)
    if is_king_in_check(simulated, state.move_colour):
        return False

    if castle_rook_index(state, move) > 0:
        step = -1 if move.end[0] - move.start[0] < 0 else 1
        enemy = state.move_colour.opponent()
        x, y = move.start
        while (x, y) != move.end:
            if is_square_attacked(state, (x, y), enemy):
                return False
            x += step
    return True


def legal_moves(state: GameState) -> List[Move]:
    """Every legal move for the side to move, ordered by start then end square."""
    candidates = [
        Move((start_x, start_y), (end_x, end_y))
        for start_y, row in enumerate(state.board)
        for start_x, piece in enumerate(row)
        if piece is not None and piece.colour is state.move_colour
        for end_y in range(8)
        for end_x in range(8)
        if is_move_valid(state, Move((start_x, start_y), (end_x, end_y)))
    ]
    return [move for move in candidates if is_move_legal(state, move)]


def legal_moves_for_square(state: GameState, start: Square) -> List[Square]:
    """Squares the piece on ``start`` may legally move to."""
    return [
        (x, y)
        for y in range(8)
        for x in range(8)
        if is_move_legal(state, Move(start, (x, y)))
    ]


def promotes_on_next_move(state: GameState, move: Move) -> bool:
    """True if playing ``move`` would promote a pawn; ``state`` is left untouched."""
    simulated = state.copy()
    choice = Piece(PieceType.QUEEN, state.move_colour)
    return apply_move(simulated, move, None, choice) is MoveType.PROMOTEPAWN