"""Drawing the board, its highlights and the pieces onto a pygame surface."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pygame

from dragchess.types import Colour, Piece, PieceType, Square

_log = logging.getLogger(__name__)

SQUARE_SIZE = 150.0
PIECE_SCALE = 2.3
DRAGGED_PIECE_OFFSET = 75.0

DARK_SQUARE = (161, 111, 90)
LIGHT_SQUARE = (235, 210, 184)
START_MOVE_HIGHLIGHT = (202, 163, 97)
STOP_MOVE_HIGHLIGHT = (216, 199, 112)
VALID_MOVE_HIGHLIGHT = (176, 39, 48)
ALT_VALID_MOVE_HIGHLIGHT = (222, 61, 76)

PROMOTION_PIECES = (PieceType.QUEEN, PieceType.ROOK, PieceType.KNIGHT, PieceType.BISHOP)

_COLOUR_NAMES = {Colour.WHITE: "Light", Colour.BLACK: "Dark"}

RGB = Tuple[int, int, int]


class HighlightType(Enum):
    """Why a square is highlighted."""

    STARTMOVE = 0
    STOPMOVE = 1
    VALIDMOVE = 2
    VALIDMOVEALT = 3


_HIGHLIGHT_COLOURS: Dict[HighlightType, RGB] = {
    HighlightType.STARTMOVE: START_MOVE_HIGHLIGHT,
    HighlightType.STOPMOVE: STOP_MOVE_HIGHLIGHT,
    HighlightType.VALIDMOVE: VALID_MOVE_HIGHLIGHT,
    HighlightType.VALIDMOVEALT: ALT_VALID_MOVE_HIGHLIGHT,
}


@dataclass(frozen=True)
class HighlightedSquare:
    """A board square drawn in a highlight colour."""

    position: Square
    kind: HighlightType


def texture_file_name(piece: Piece) -> str:
    """The image file name for ``piece``, such as ``LightKing.png``."""
    return f"{_COLOUR_NAMES[piece.colour]}{piece.kind.name.capitalize()}.png"


class BoardView:
    """Renders the board and keeps track of which squares are highlighted."""

    def __init__(self, asset_dir: Union[str, Path] = "assets") -> None:
        self.asset_dir = Path(asset_dir)
        self.current_highlight: Optional[HighlightedSquare] = None
        self.previous_highlights: List[HighlightedSquare] = []
        self.valid_highlights: List[HighlightedSquare] = []
        self._textures: Dict[Piece, Optional[pygame.Surface]] = {}
        for colour in Colour:
            for kind in PieceType:
                piece = Piece(kind, colour)
                self._textures[piece] = self._load_texture(self.asset_dir / texture_file_name(piece))

    @staticmethod
    def _load_texture(path: Path) -> Optional[pygame.Surface]:
        try:
            image = pygame.image.load(str(path))
        except (pygame.error, FileNotFoundError, OSError):
            _log.error("failed to load %s", path)
            return None
        width, height = image.get_size()
        return pygame.transform.smoothscale(
            image, (round(width * PIECE_SCALE), round(height * PIECE_SCALE))
        )

    def texture_for(self, piece: Piece) -> Optional[pygame.Surface]:
        """The scaled image for ``piece``, or None if it could not be loaded."""
        return self._textures[piece]

    def _highlights(self) -> Iterable[HighlightedSquare]:
        if self.current_highlight is not None:
            yield self.current_highlight
        yield from self.previous_highlights
        yield from self.valid_highlights

    def square_colour(self, column: int, row: int) -> RGB:
        """The colour the square at ``(column, row)`` is drawn in; later highlights win."""
        colour: Optional[RGB] = None
        for highlight in self._highlights():
            if highlight.position == (column, row):
                colour = _HIGHLIGHT_COLOURS[highlight.kind]
        if colour is not None:
            return colour
        return LIGHT_SQUARE if (row + column) % 2 == 0 else DARK_SQUARE

    def draw_board(self, surface: pygame.Surface) -> None:
        """Fill the 64 squares, highlights included."""
        size = int(SQUARE_SIZE)
        for row in range(8):
            for column in range(8):
                rect = pygame.Rect(column * size, row * size, size, size)
                surface.fill(self.square_colour(column, row), rect)

    def _blit(self, surface: pygame.Surface, piece: Piece, position: Tuple[float, float]) -> None:
        texture = self._textures[piece]
        if texture is not None:
            surface.blit(texture, (round(position[0]), round(position[1])))

    def draw_pieces(
        self,
        surface: pygame.Surface,
        board: Sequence[Sequence[Optional[Piece]]],
        excluded: Optional[Square] = None,
    ) -> None:
        """Draw every piece on ``board`` except the one on ``excluded``."""
        for row, pieces in enumerate(board):
            for column, piece in enumerate(pieces):
                if piece is None or (column, row) == excluded:
                    continue
                self._blit(surface, piece, (column * SQUARE_SIZE, row * SQUARE_SIZE))

    def draw_selected_piece(self, surface: pygame.Surface, piece: Piece, mouse_x: int, mouse_y: int) -> None:
        """Draw the dragged piece centred under the mouse."""
        self._blit(surface, piece, (mouse_x - DRAGGED_PIECE_OFFSET, mouse_y - DRAGGED_PIECE_OFFSET))

    def draw_promotion_pieces(
        self, surface: pygame.Surface, colour: Colour, square: Tuple[float, float]
    ) -> None:
        """Draw the promotion choices in a column from ``square`` towards the board centre."""
        x, y = square
        step = 1 if colour is Colour.WHITE else -1
        for kind in PROMOTION_PIECES:
            self._blit(surface, Piece(kind, colour), (x * SQUARE_SIZE, y * SQUARE_SIZE))
            y += step

    def pick_up(self, start: Square, valid_squares: Iterable[Square]) -> None:
        """Highlight the start square and the squares the piece may move to.

        Runs of squares in line with the start alternate between two colours.
        """
        self.current_highlight = HighlightedSquare(start, HighlightType.STARTMOVE)
        for square in valid_squares:
            kind = HighlightType.VALIDMOVE
            if square[0] == start[0] or square[1] == start[1]:
                distance = abs(square[0] - start[0]) + abs(square[1] - start[1])
                if distance % 2 == 1:
                    kind = HighlightType.VALIDMOVEALT
            self.valid_highlights.append(HighlightedSquare(square, kind))

    def place(self, moved: bool, end: Square) -> None:
        """Drop the held piece; if it moved, highlight this move's squares instead of the last."""
        self.valid_highlights.clear()
        if moved:
            if self.current_highlight is None:
                raise RuntimeError("no piece has been picked up")
            self.previous_highlights = [
                self.current_highlight,
                HighlightedSquare(end, HighlightType.STOPMOVE),
            ]
        self.current_highlight = None

    def square_at(self, mouse_x: float, mouse_y: float) -> Square:
        """The board square under the given window position."""
        return int(mouse_x // SQUARE_SIZE), int(mouse_y // SQUARE_SIZE)