# chessgame

A small chess library. It gives you:

- a complete move generator and rules engine that reads and writes FEN
  positions (`chessgame.position`, with the basic types in `chessgame.types`);
- a `Board` and `Game` that take moves in UCI notation such as `e2e4`,
  keep a history, report checkmate and stalemate, and save games as JSON
  (`chessgame.core`);
- analysis helpers: material evaluation, minimax best move, the moves
  from one square, automatic play and a debug report (`chessgame.analysis`);
- board geometry for drawing: camera projection, cell sprites, cursor to
  cell mapping and window layouts (`chessgame.projection`, `chessgame.layout`);
- an in-memory game store and a game service for multiplayer play
  (`chessgame.store`, `chessgame.rpc`, `chessgame.multiplayer`).

## Install

```
pip install .
```

## Games

```python
from chessgame.core import Board, Game, GameStatus

game = Game()
game.make_move("a2a4")
assert game.status() is GameStatus.CONTINUING
print(game.last_move())          # a2a4
game.board_print()

board = Board.default().make_move("a2a4")
print(board.to_fen())
# rnbqkbnr/pppppppp/8/8/P7/8/1PPPPPPP/RNBQKBNR b KQkq - 0 1

restored = Game.from_json(game.to_json())
path = game.save()               # saves/<unix time>.save
```

`Board.make_move` returns a new board, or `None` if the move is not legal;
`Game.make_move` returns `True` or `False` and leaves the game unchanged
on failure. `Board.from_fen` falls back to the starting position when the
FEN is malformed; `Position.from_fen` raises `FenError` instead.

## Analysis

```python
from chessgame.position import Position
from chessgame.analysis import evaluate, best_move, moves_from, autoplay, debug_report

position = Position.start()
print(evaluate(position))                      # positive favours white
print(best_move(position, 1).stringify())
print([m.stringify() for m in moves_from(position, 8)])
print([m.stringify() for m in autoplay(position, max_plies=4)])
print(debug_report(position))
```

Squares are numbered 0 (a1) to 63 (h8), rank by rank.

## Multiplayer service

`ChessService` in `chessgame.rpc` keeps games in a `GameStore`
(`MemoryStore` by default). Requests are plain mappings:

```python
from chessgame.rpc import ChessService

service = ChessService()
game_id = service.push_game_create({"player_id": "alice"})
service.push_game_accept({"game_id": game_id, "player_id": "bob"})
service.push_move({"game_id": game_id, "player_id": "alice", "move": "e2e4"})
print(service.pull_board_state(game_id))
service.push_msg({"game_id": game_id, "player_id": "bob", "text": "good luck"})
print(service.pull_game_state(game_id)["history"])   # ['e2e4']
```

Bad requests, unknown games and illegal moves raise `ValueError` or
`GameNotFoundError`.

## What this package does not do

- There is no command to play in the terminal; games are played through
  the `Game` and `Board` classes.
- `ChessService` is an in-process object: it does not listen on a network
  port, and games live only in memory.
- `chessgame.projection` and `chessgame.layout` compute coordinates, sizes
  and colours only; nothing is drawn on screen.

## Tests

```
pip install .[test]
pytest
```