# dragchess

A chess game you play against the computer by dragging pieces with the mouse.
The game starts from the standard position with White to move. You make
White's moves and the engine answers for Black. The engine picks its moves
with an alpha-beta search that counts material.

## Features

- Full move rules. Castling is not allowed out of check or through attacked
  squares. En passant, double pawn pushes and pawn promotion are supported.
  When you promote, you choose a queen, rook, knight or bishop from a column
  drawn on the board.
- The game detects its end by checkmate or stalemate. It also ends in a draw
  when the same board position turns up for the third time, or after 50
  half-moves with no capture and no pawn move.
- The board highlights the square you picked a piece up from and the squares
  it may move to. Runs of squares in a straight line alternate between two
  shades. The last move played is highlighted too.
- Sounds play for ordinary moves, captures and castling.

## Installing

```
pip install .
```

The game looks for an `assets` directory holding these files:

- the piece images: `LightKing.png`, `LightQueen.png`, `LightRook.png`,
  `LightBishop.png`, `LightKnight.png`, `LightPawn.png` and the same six with
  `Dark` in place of `Light`;
- the sounds `move-self.mp3`, `capture.mp3` and `castle.mp3`;
- the font `calibri.ttf`, used for the game-over banner.

A missing file is logged as an error and the game carries on without it. A
missing piece image is simply not drawn. A missing font is replaced by pygame's
default font.

## Playing

```
dragchess
dragchess --assets path/to/assets --depth 3
```

- `--assets`: the directory holding the images, sounds and font. The default
  is `assets`.
- `--depth`: the engine's search depth in plies. The default is 5.

To move, press on one of your pieces, drag it to a highlighted square and
release it. When a pawn reaches the last rank, click the piece you want from
the column that appears. While it is the engine's turn, the board ignores your
input. The engine always promotes to a queen.

## Using the library

The rules are kept apart from the window, so you can use them without pygame
opening a display.

```python
from dragchess.game import Game
from dragchess.moves import legal_moves
from dragchess.engine import Engine

game = Game()
game.load_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0")
print(len(legal_moves(game.state)))   # 20

move = Engine(depth=3).generate_move(game)
game.pick_up(move.start)
print(game.place(move.end, None))     # a MoveType, e.g. MoveType.MOVESELF
```

Squares are `(x, y)` pairs with `(0, 0)` at the top-left corner of the board,
so White's pieces start on rows 6 and 7. Boards are indexed
`state.board[row][column]`.

The package is made up of these modules:

- `dragchess.types` holds the basic data types: `Colour`, `PieceType`,
  `Piece`, `Move`, `MoveType`, `GameOverType`, and `GameState` with its
  `copy`, `piece_at` and `set_piece` methods.
- `dragchess.movegen` checks moves against the piece movement rules and
  detects attacks:
  - `is_move_valid`
  - `is_square_attacked`
  - `is_king_in_check`
  - `castle_rook_index`
  - `is_en_passant_take`
  - and related helpers.
- `dragchess.moves` plays, undoes and lists moves:
  - `apply_move` plays a move. When given a history list, it records the
    state before the move in it.
  - `undo_last_move` restores the last recorded state. It raises
    `IndexError` when the history is empty.
  - `is_move_legal`
  - `legal_moves`
  - `legal_moves_for_square`
  - `promotes_on_next_move`
- `dragchess.game` covers positions and the game in play:
  - `parse_fen` turns a FEN string into a `GameState`. It raises `ValueError`
    on bad characters, pieces placed off the board or missing fields.
  - `select_piece` and `place_selected_piece` pick up and drop a piece.
  - `Game` keeps the current state and its history.
- `dragchess.engine` holds `Engine`, which offers `generate_move`, `evaluate`,
  `count_material` and `search`. `generate_move` raises `ValueError` when
  there is no legal move.
- `dragchess.boardview` holds `BoardView`, which draws the board, the pieces
  and the highlights onto a pygame surface.
- `dragchess.audio` holds `Audio`, which plays move sounds through the pygame
  mixer.
- `dragchess.app` holds `ChessApp`, the window and its event loop, and
  `main`, the command.

## What it does not do

- You always play White against the engine. There is no two-player mode and
  no way to play Black.
- There is no resign button, although `GameOverType` has values for a win by
  resignation.
- Games cannot be saved. Positions can be loaded from FEN but not written
  back out.
- Undo exists only in the library (`undo_last_move`), not in the window.

## Running the tests

```
pip install .[test]
pytest
```