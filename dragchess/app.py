"""The windowed game: a human plays white by dragging pieces, the engine answers."""

from __future__ import annotations

import argparse
import logging
import threading
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import pygame

from dragchess.audio import Audio
from dragchess.boardview import PROMOTION_PIECES, BoardView
from dragchess.engine import Engine
from dragchess.game import Game
from dragchess.moves import legal_moves, promotes_on_next_move
from dragchess.types import Colour, GameOverType, Move, MoveType, Piece, PieceType, Square

_log = logging.getLogger(__name__)

SQUARE_SIZE = 150
WINDOW_SIZE = (SQUARE_SIZE * 8, SQUARE_SIZE * 8)
WINDOW_TITLE = "Chess"
START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w QKqk - 0 0"
FONT_FILE = "calibri.ttf"
FONT_SIZE = 120
FRAME_RATE = 60

_GAME_OVER_OVERLAY = (0, 0, 0, 150)
_GAME_OVER_TEXT = (255, 255, 255)
_WHITE_PROMOTION_OVERLAY = (0, 0, 0, 200)
_BLACK_PROMOTION_OVERLAY = (255, 255, 255, 140)

_GAME_OVER_MESSAGES = {
    GameOverType.STALEMATE: "STALEMATE",
    GameOverType.TFRDRAW: "DRAW BY THREEFOLD REPETITION",
    GameOverType.FIFTYMOVEDRAW: "DRAW BY 50 MOVE RULE",
    GameOverType.WHITEWINBYCHECKMATE: "WHITE WINS BY CHECKMATE",
    GameOverType.BLACKWINBYCHECKMATE: "BLACK WINS BY CHECKMATE",
    GameOverType.WHITEWINBYRESIGN: "WHITE WINS BY RESIGNATION",
    GameOverType.BLACKWINBYRESIGN: "BLACK WINS BY RESIGNATION",
}


def game_over_message(kind: GameOverType) -> Optional[str]:
    """The banner shown when the game ends in ``kind``; None while it continues."""
    return _GAME_OVER_MESSAGES.get(kind)


def _on_board(square: Square) -> bool:
    return 0 <= square[0] < 8 and 0 <= square[1] < 8


class ChessApp:
    """Holds the game, its view, the engine and the input state of the player."""

    def __init__(self, asset_dir: Union[str, Path] = "assets") -> None:
        self.asset_dir = Path(asset_dir)
        self.game = Game()
        self.game.load_fen(START_FEN)
        self.board_view = BoardView(self.asset_dir)
        self.engine = Engine()
        self.audio = Audio(self.asset_dir)
        self.surface = pygame.Surface(WINDOW_SIZE)
        self.running = True
        self.mouse_position: Tuple[int, int] = (0, 0)
        self.pawn_pending_promotion = False
        self.promotion_piece: Optional[Piece] = None
        self.promotion_square: Optional[Square] = None
        self.engine_turn = False
        self.engine_thinking = False
        self._engine_thread: Optional[threading.Thread] = None
        self._engine_lock = threading.Lock()
        self._pending_engine_move: Optional[Move] = None
        self._font: Optional[pygame.font.Font] = None
        self._window_open = False

    # ------------------------------------------------------------------ input

    def handle_event(self, event: pygame.event.Event) -> None:
        """React to one window event."""
        if event.type == pygame.QUIT:
            self.running = False
        if event.type == pygame.VIDEORESIZE and self._window_open:
            self.surface = pygame.display.set_mode(WINDOW_SIZE)

        if self.game.state.game_over is not GameOverType.CONTINUE or self.engine_turn:
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._press(tuple(event.pos))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._release(tuple(event.pos))
        elif event.type == pygame.MOUSEMOTION:
            self.mouse_position = tuple(event.pos)

    def _press(self, position: Tuple[int, int]) -> None:
        self.mouse_position = position
        square = self.board_view.square_at(*position)
        state = self.game.state

        if self.pawn_pending_promotion:
            direction = 1 if state.move_colour is Colour.WHITE else -1
            px, py = self.promotion_square
            for offset, kind in enumerate(PROMOTION_PIECES):
                if square == (px, py + direction * offset):
                    self.promotion_piece = Piece(kind, state.move_colour)
            return

        if self.game.pick_up(square):
            self.board_view.pick_up(square, self.game.legal_moves_for_square(square))

    def _release(self, position: Tuple[int, int]) -> None:
        self.mouse_position = position
        end = self.board_view.square_at(*position)
        state = self.game.state
        start = state.selected_start

        # a promoting move waits until the player has chosen the new piece
        if (
            start is not None
            and not self.pawn_pending_promotion
            and _on_board(end)
            and promotes_on_next_move(state, Move(start, end))
        ):
            self.promotion_square = end
            self.pawn_pending_promotion = True

        if self.pawn_pending_promotion and self.promotion_piece is None:
            return
        if self.pawn_pending_promotion:
            end = self.promotion_square

        move_type = self.game.place(end, self.promotion_piece)
        self.board_view.place(move_type is not MoveType.NONE, end)
        self.audio.play(move_type)

        if move_type is not MoveType.NONE:
            self.engine_turn = True

        self.pawn_pending_promotion = False
        self.promotion_piece = None
        self.promotion_square = None

    # ----------------------------------------------------------------- engine

    def _think(self) -> None:
        move = self.engine.generate_move(self.game)
        with self._engine_lock:
            self._pending_engine_move = move

    def process_engine_move(self) -> None:
        """Start the engine thinking, or play its move once it has one."""
        if self.game.state.game_over is not GameOverType.CONTINUE:
            return

        if not self.engine_thinking:
            if not legal_moves(self.game.state):
                _log.info("no legal moves left for engine")
                return
            self.engine_thinking = True
            self._engine_thread = threading.Thread(target=self._think, daemon=True)
            self._engine_thread.start()
            return

        with self._engine_lock:
            move = self._pending_engine_move
            self._pending_engine_move = None
        if move is None:
            return

        if self._engine_thread is not None:
            self._engine_thread.join()
            self._engine_thread = None
        self.engine_thinking = False

        self.game.pick_up(move.start)
        self.board_view.pick_up(move.start, self.game.legal_moves_for_square(move.start))
        # the engine always promotes to a queen
        promotion = Piece(PieceType.QUEEN, self.game.state.move_colour)
        move_type = self.game.place(move.end, promotion)
        self.board_view.place(move_type is not MoveType.NONE, move.end)
        self.audio.play(move_type)
        self.engine_turn = False

    # ---------------------------------------------------------------- drawing

    def _game_over_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            try:
                self._font = pygame.font.Font(str(self.asset_dir / FONT_FILE), FONT_SIZE)
            except (FileNotFoundError, OSError, pygame.error):
                _log.error("could not load %s", FONT_FILE)
                self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def draw(self) -> None:
        """Render the whole frame onto ``surface``."""
        surface = self.surface
        state = self.game.state
        surface.fill((0, 0, 0))

        self.board_view.draw_board(surface)
        self.board_view.draw_pieces(surface, state.board, state.selected_start)

        if state.selected_piece is not None and not self.pawn_pending_promotion:
            self.board_view.draw_selected_piece(surface, state.selected_piece, *self.mouse_position)

        if self.pawn_pending_promotion:
            if state.move_colour is Colour.WHITE:
                overlay_y, overlay_colour = 0, _WHITE_PROMOTION_OVERLAY
            else:
                overlay_y, overlay_colour = SQUARE_SIZE * 4, _BLACK_PROMOTION_OVERLAY
            overlay = pygame.Surface((SQUARE_SIZE, SQUARE_SIZE * 4), pygame.SRCALPHA)
            overlay.fill(overlay_colour)
            surface.blit(overlay, (self.promotion_square[0] * SQUARE_SIZE, overlay_y))
            self.board_view.draw_promotion_pieces(surface, state.move_colour, self.promotion_square)

        message = game_over_message(state.game_over)
        if message is not None:
            overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            overlay.fill(_GAME_OVER_OVERLAY)
            surface.blit(overlay, (0, 0))
            text = self._game_over_font().render(message, True, _GAME_OVER_TEXT)
            surface.blit(text, (SQUARE_SIZE * 2, SQUARE_SIZE * 3))

    # --------------------------------------------------------------- run loop

    def run(self) -> None:
        """Open the window and play until it is closed."""
        pygame.init()
        self.surface = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        self._window_open = True
        clock = pygame.time.Clock()
        try:
            while self.running:
                if self.engine_turn:
                    self.process_engine_move()
                for event in pygame.event.get():
                    self.handle_event(event)
                self.draw()
                pygame.display.flip()
                clock.tick(FRAME_RATE)
        finally:
            self._window_open = False
            pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start a game against the engine."""
    parser = argparse.ArgumentParser(prog="dragchess", description="Play chess against the engine.")
    parser.add_argument("--assets", default="assets", help="directory holding images, sounds and the font")
    parser.add_argument("--depth", type=int, default=5, help="engine search depth")
    args = parser.parse_args(argv)

    app = ChessApp(args.assets)
    app.engine = Engine(args.depth)
    app.run()
    return 0