"""A material-counting alpha-beta search engine."""

from __future__ import annotations

import logging
from typing import List, Optional

from dragchess.game import Game
from dragchess.movegen import is_king_in_check
from dragchess.moves import apply_move, legal_moves, undo_last_move
from dragchess.types import Colour, GameState, Move, Piece, PieceType

_log = logging.getLogger(__name__)

PIECE_VALUES = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20000,
}

MINUS_INFINITY = -999999
INFINITY = 999999


class Engine:
    """Chooses moves by a fixed-depth negamax search with alpha-beta pruning."""

    def __init__(self, depth: int = 5) -> None:
        if depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth}")
        self.depth = depth
        self.best_move: Optional[Move] = None
        self.moves_searched = 0

    def generate_move(self, game: Game) -> Move:
        """Pick a move for the side to move in ``game`` without changing it."""
        state = game.state.copy()
        history: List[GameState] = [state.copy()]
        moves = legal_moves(state)
        if not moves:
            raise ValueError("no legal moves in this position")
        self.best_move = moves[0]
        self.search(state, history, MINUS_INFINITY, INFINITY, self.depth, self.depth)
        _log.info("moves searched: %d", self.moves_searched)
        return self.best_move

    def evaluate(self, state: GameState) -> int:
        """Material balance from the point of view of the side to move."""
        evaluation = self.count_material(state, Colour.WHITE) - self.count_material(state, Colour.BLACK)
        perspective = 1 if state.move_colour is Colour.WHITE else -1
        return evaluation * perspective

    def count_material(self, state: GameState, colour: Colour) -> int:
        """Sum of the values of every piece of ``colour`` on the board."""
        return sum(
            PIECE_VALUES[piece.kind]
            for row in state.board
            for piece in row
            if piece is not None and piece.colour is colour
        )

    def search(
        self,
        state: GameState,
        history: List[GameState],
        alpha: int,
        beta: int,
        depth_left: int,
        initial_depth: int,
    ) -> int:
        """Negamax score of ``state``; records the best root move in ``best_move``."""
        if depth_left == 0:
            return self.evaluate(state)

        moves = legal_moves(state)
        if not moves:
            if is_king_in_check(state, state.move_colour):
                return MINUS_INFINITY
            return 0

        for move in moves:
            # the engine always promotes to a queen
            promotion = Piece(PieceType.QUEEN, state.move_colour)
            apply_move(state, move, history, promotion)
            evaluation = -self.search(state, history, -beta, -alpha, depth_left - 1, initial_depth)
            undo_last_move(state, history)
            self.moves_searched += 1

            if evaluation >= beta:
                return beta
            if evaluation > alpha:
                alpha = evaluation
                if depth_left == initial_depth:
                    self.best_move = move
                    _log.debug("move %s -> %s evaluation %d", move.start, move.end, evaluation)
        return alpha