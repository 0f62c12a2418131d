import pytest

from dragchess.movegen import (
    castle_rook_index,
    is_en_passant_take,
    is_king_in_check,
    is_move_valid,
    is_move_valid_for_king,
    is_move_valid_for_pawn,
    is_path_clear_for_sliders,
    is_pawn_double_push,
    is_square_attacked,
    pawn_on_last_rank,
)
from dragchess.types import Colour, GameState, Move, Piece, PieceType

W, B = Colour.WHITE, Colour.BLACK


def piece(kind, colour):
    return Piece(kind, colour)


def make_state(pieces, colour=W, **kwargs):
    state = GameState(move_colour=colour, **kwargs)
    for square, p in pieces.items():
        state.set_piece(square, p)
    return state


def test_path_clear_on_empty_file():
    state = make_state({(0, 7): piece(PieceType.ROOK, W)})
    assert is_path_clear_for_sliders(state, Move((0, 7), (0, 0)))


def test_path_blocked_by_piece_between():
    state = make_state({(0, 7): piece(PieceType.ROOK, W), (0, 4): piece(PieceType.PAWN, B)})
    assert not is_path_clear_for_sliders(state, Move((0, 7), (0, 0)))
    # the blocker itself may be reached
    assert is_path_clear_for_sliders(state, Move((0, 7), (0, 4)))


def test_path_rejects_non_line_geometry():
    state = make_state({(3, 3): piece(PieceType.QUEEN, W)})
    assert not is_path_clear_for_sliders(state, Move((3, 3), (5, 4)))


@pytest.mark.parametrize(
    "end, expected",
    [((6, 6), True), ((3, 0), True), ((0, 3), True), ((5, 4), False)],
)
def test_queen_moves(end, expected):
    state = make_state({(3, 3): piece(PieceType.QUEEN, W)})
    assert is_move_valid(state, Move((3, 3), end)) is expected


def test_rook_cannot_move_diagonally():
    state = make_state({(3, 3): piece(PieceType.ROOK, W)})
    assert not is_move_valid(state, Move((3, 3), (4, 4)))
    assert is_move_valid(state, Move((3, 3), (3, 6)))


def test_bishop_only_diagonal():
    state = make_state({(2, 7): piece(PieceType.BISHOP, W)})
    assert is_move_valid(state, Move((2, 7), (5, 4)))
    assert not is_move_valid(state, Move((2, 7), (2, 5)))


@pytest.mark.parametrize(
    "end, expected",
    [((2, 5), True), ((0, 5), True), ((3, 6), True), ((1, 5), False), ((2, 6), False)],
)
def test_knight_moves(end, expected):
    state = make_state({(1, 7): piece(PieceType.KNIGHT, W)})
    assert is_move_valid(state, Move((1, 7), end)) is expected


def test_cannot_capture_own_piece():
    state = make_state({(3, 3): piece(PieceType.ROOK, W), (3, 5): piece(PieceType.PAWN, W)})
    assert not is_move_valid(state, Move((3, 3), (3, 5)))


def test_can_capture_enemy_piece():
    state = make_state({(3, 3): piece(PieceType.ROOK, W), (3, 5): piece(PieceType.PAWN, B)})
    assert is_move_valid(state, Move((3, 3), (3, 5)))


def test_empty_start_square_is_invalid():
    assert not is_move_valid(GameState(), Move((3, 3), (3, 4)))


@pytest.mark.parametrize("end", [(3, 3), (8, 3), (3, -1)])
def test_same_square_or_off_board_is_invalid(end):
    state = make_state({(3, 3): piece(PieceType.QUEEN, W)})
    assert not is_move_valid(state, Move((3, 3), end))


def test_pawn_single_and_double_push_from_start():
    state = make_state({(4, 6): piece(PieceType.PAWN, W)})
    assert is_move_valid(state, Move((4, 6), (4, 5)))
    assert is_move_valid(state, Move((4, 6), (4, 4)))
    assert is_pawn_double_push(state, Move((4, 6), (4, 4)))
    assert not is_move_valid(state, Move((4, 6), (4, 7)))


def test_pawn_double_push_only_from_start_row():
    state = make_state({(4, 5): piece(PieceType.PAWN, W)})
    assert not is_pawn_double_push(state, Move((4, 5), (4, 3)))
    assert not is_move_valid(state, Move((4, 5), (4, 3)))


def test_pawn_double_push_blocked():
    state = make_state({(4, 6): piece(PieceType.PAWN, W), (4, 5): piece(PieceType.KNIGHT, B)})
    assert not is_pawn_double_push(state, Move((4, 6), (4, 4)))
    assert not is_move_valid(state, Move((4, 6), (4, 5)))


def test_black_pawn_moves_down_the_board():
    state = make_state({(2, 1): piece(PieceType.PAWN, B)}, colour=B)
    assert is_move_valid(state, Move((2, 1), (2, 3)))
    assert is_move_valid(state, Move((2, 1), (2, 2)))
    assert not is_move_valid(state, Move((2, 1), (2, 0)))


def test_pawn_diagonal_needs_enemy():
    state = make_state({(4, 4): piece(PieceType.PAWN, W), (5, 3): piece(PieceType.PAWN, B)})
    assert is_move_valid_for_pawn(state, Move((4, 4), (5, 3)))
    assert not is_move_valid_for_pawn(state, Move((4, 4), (3, 3)))


def test_en_passant_take():
    state = make_state(
        {(4, 3): piece(PieceType.PAWN, W), (3, 3): piece(PieceType.PAWN, B)},
        en_passant_square=(3, 2),
    )
    move = Move((4, 3), (3, 2))
    assert is_en_passant_take(state, move)
    assert is_move_valid(state, move)


def test_en_passant_needs_square_and_enemy_pawn():
    pieces = {(4, 3): piece(PieceType.PAWN, W), (3, 3): piece(PieceType.KNIGHT, B)}
    without_square = make_state(pieces)
    assert not is_en_passant_take(without_square, Move((4, 3), (3, 2)))
    not_a_pawn = make_state(pieces, en_passant_square=(3, 2))
    assert not is_en_passant_take(not_a_pawn, Move((4, 3), (3, 2)))


def _castle_state(colour, extra=None):
    row = 7 if colour is W else 0
    pieces = {
        (4, row): piece(PieceType.KING, colour),
        (0, row): piece(PieceType.ROOK, colour),
        (7, row): piece(PieceType.ROOK, colour),
    }
    pieces.update(extra or {})
    return make_state(pieces, colour=colour)


def test_white_castle_indices():
    state = _castle_state(W)
    assert castle_rook_index(state, Move((4, 7), (2, 7))) == 1
    assert castle_rook_index(state, Move((4, 7), (6, 7))) == 2
    assert is_move_valid_for_king(state, Move((4, 7), (6, 7)))


def test_black_castle_indices():
    state = _castle_state(B)
    assert castle_rook_index(state, Move((4, 0), (2, 0))) == 3
    assert castle_rook_index(state, Move((4, 0), (6, 0))) == 4


def test_castle_blocked_or_without_rights():
    blocked = _castle_state(W, {(5, 7): piece(PieceType.BISHOP, W)})
    assert castle_rook_index(blocked, Move((4, 7), (6, 7))) == 0
    assert not is_move_valid(blocked, Move((4, 7), (6, 7)))
    no_rights = _castle_state(W)
    no_rights.white_castle_rights[1] = False
    assert castle_rook_index(no_rights, Move((4, 7), (6, 7))) == 0
    assert castle_rook_index(no_rights, Move((4, 7), (2, 7))) == 1


def test_king_moves_one_square():
    state = make_state({(3, 3): piece(PieceType.KING, W)})
    assert is_move_valid(state, Move((3, 3), (4, 4)))
    assert not is_move_valid(state, Move((3, 3), (3, 5)))


def test_rook_attack_and_block():
    state = make_state({(0, 0): piece(PieceType.ROOK, B)})
    assert is_square_attacked(state, (0, 6), B)
    assert not is_square_attacked(state, (0, 6), W)
    state.set_piece((0, 3), piece(PieceType.PAWN, W))
    assert not is_square_attacked(state, (0, 6), B)


def test_bishop_attacks_diagonally_only():
    state = make_state({(2, 2): piece(PieceType.BISHOP, B)})
    assert is_square_attacked(state, (5, 5), B)
    assert not is_square_attacked(state, (2, 5), B)


def test_white_pawn_attacks_forward_diagonals():
    state = make_state({(3, 6): piece(PieceType.PAWN, W)})
    assert is_square_attacked(state, (4, 5), W)
    assert is_square_attacked(state, (2, 5), W)
    assert not is_square_attacked(state, (3, 5), W)
    assert not is_square_attacked(state, (4, 7), W)


def test_black_pawn_attacks_downwards():
    state = make_state({(3, 1): piece(PieceType.PAWN, B)})
    assert is_square_attacked(state, (4, 2), B)
    assert not is_square_attacked(state, (4, 0), B)


def test_knight_and_king_attacks():
    state = make_state({(1, 0): piece(PieceType.KNIGHT, B), (6, 6): piece(PieceType.KING, B)})
    assert is_square_attacked(state, (2, 2), B)
    assert is_square_attacked(state, (7, 7), B)
    assert not is_square_attacked(state, (4, 4), B)


def test_king_in_check():
    state = make_state({(4, 7): piece(PieceType.KING, W), (4, 0): piece(PieceType.ROOK, B)})
    assert is_king_in_check(state, W)
    state.set_piece((4, 5), piece(PieceType.PAWN, W))
    assert not is_king_in_check(state, W)


def test_missing_king_is_not_in_check():
    state = make_state({(4, 0): piece(PieceType.ROOK, B)})
    assert is_king_in_check(state, W) is False


def test_pawn_on_last_rank():
    state = make_state({(3, 3): piece(PieceType.PAWN, W)})
    assert not pawn_on_last_rank(state)
    state.set_piece((3, 0), piece(PieceType.PAWN, W))
    assert pawn_on_last_rank(state)
    other = make_state({(5, 7): piece(PieceType.PAWN, B)})
    assert pawn_on_last_rank(other)
    rook_only = make_state({(5, 7): piece(PieceType.ROOK, B)})
    assert not pawn_on_last_rank(rook_only)