"""Playing interface for a chess game: board, move history and persistence."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from .position import FenError, Position
from .types import Move, Player

SAVES_FOLDER_NAME = "saves"
SAVE_FILE_EXTENSION = ".save"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class Board:
    """A chess board; moves produce new boards and leave this one untouched."""

    position: Position = field(default_factory=Position.start)

    @classmethod
    def default(cls) -> Board:
        """A board with the starting position."""
        return cls(Position.start())

    @classmethod
    def from_fen(cls, fen: str) -> Board:
        """A board from FEN; a malformed FEN gives the starting position."""
        try:
            return cls(Position.from_fen(fen))
        except FenError:
            return cls.default()

    def make_move(self, uci_move: str) -> Board | None:
        """The board after a move in UCI notation, or None if it is not legal."""
        move = self.move_from_uci(uci_move)
        if move is None:
            return None
        position = self.position.copy()
        position.apply_move(move)
        return Board(position)

    def move_is_valid(self, uci_move: str) -> bool:
        """True when the UCI move is legal on this board."""
        move = self.move_from_uci(uci_move)
        return move is not None and self.position.is_legal(move)

    def move_from_uci(self, uci_move: str) -> Move | None:
        """The legal move written as the given UCI string, if there is one."""
        return next(
            (move for move in self.position.generate_moves() if move.stringify() == uci_move),
            None,
        )

    def score(self) -> int:
        """Score of the board for the side to move; always 0 for now."""
        return 0

    def is_checkmate(self) -> bool:
        """True when the side to move is checkmated."""
        return self.position.checkmate()

    def is_stalemate(self) -> bool:
        """True when the side to move is stalemated."""
        return self.position.stalemate()

    def current_turn(self) -> Player:
        """The player whose turn it is."""
        return self.position.turn

    def last_move(self) -> Move | None:
        """The last move played on this board, if any."""
        return self.position.last_move

    def to_pretty_string(self) -> str:
        """The board drawn as text, rank 8 at the top."""
        lines = []
        for rank in range(7, -1, -1):
            cells = (self.position.piece_at(rank * 8 + file) for file in range(8))
            row = "".join(
                (piece.character() if piece is not None else "-") + " " for piece in cells
            )
            lines.append(f"{rank + 1} | {row}\n")
        lines.append("  ------------------\n")
        lines.append("    a b c d e f g h")
        return "".join(lines)

    def to_fen(self) -> str:
        """The board as a FEN string."""
        return self.position.fen()


@dataclass(frozen=True)
class HistoryEntry:
    """A past move and the FEN of the board right after it."""

    fen: str
    last_move: Move

    def to_dict(self) -> dict[str, Any]:
        return {"fen": self.fen, "last_move": self.last_move.raw}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        try:
            return cls(str(data["fen"]), Move(int(data["last_move"])))
        except (KeyError, TypeError) as exc:
            raise ValueError(f"bad history entry: {data!r}") from exc


class GameStatus(Enum):
    """State of a game."""

    CONTINUING = "continuing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass
class Game:
    """A board together with the history of moves made on it."""

    board: Board = field(default_factory=Board.default)
    history: list[HistoryEntry] = field(default_factory=list)
    date: float = field(default_factory=time.time)

    def make_move(self, uci_move: str) -> bool:
        """Play a UCI move; return False and change nothing when it is illegal."""
        new_board = self.board.make_move(uci_move)
        if new_board is None:
            return False
        self.board = new_board
        last = new_board.last_move()
        assert last is not None
        self.history.append(HistoryEntry(new_board.to_fen(), last))
        return True

    def current_turn(self) -> Player:
        """The player whose turn it is."""
        return self.board.current_turn()

    def board_print(self) -> None:
        """Print the board to standard output."""
        print(self.board.to_pretty_string())

    def status(self) -> GameStatus:
        """Whether the game goes on or has ended in mate or stalemate."""
        if self.board.is_checkmate():
            return GameStatus.CHECKMATE
        if self.board.is_stalemate():
            return GameStatus.STALEMATE
        return GameStatus.CONTINUING

    def last_move(self) -> str | None:
        """The last move in UCI notation, or None before the first move."""
        return self.history[-1].last_move.stringify() if self.history else None

    def last_move_raw(self) -> Move | None:
        """The last move, or None before the first move."""
        return self.history[-1].last_move if self.history else None

    def to_dict(self) -> dict[str, Any]:
        """The game as plain data."""
        secs = int(self.date)
        nanos = min(round((self.date - secs) * 1_000_000_000), 999_999_999)
        return {
            "board": self.board.to_fen(),
            "history": [entry.to_dict() for entry in self.history],
            "date": {"secs_since_epoch": secs, "nanos_since_epoch": nanos},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Game:
        """Rebuild a game from plain data; raise ValueError when it is malformed."""
        try:
            board = Board.from_fen(str(data["board"]))
            history = [HistoryEntry.from_dict(entry) for entry in data["history"]]
            raw_date = data["date"]
            if isinstance(raw_date, dict):
                date = int(raw_date["secs_since_epoch"]) + int(raw_date["nanos_since_epoch"]) / 1e9
            else:
                date = float(raw_date)
        except (KeyError, TypeError) as exc:
            raise ValueError(f"bad game data: {exc}") from exc
        return cls(board=board, history=history, date=date)

    def to_json(self) -> str:
        """The game as compact JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> Game:
        """Rebuild a game from JSON."""
        return cls.from_dict(json.loads(text))

    def save(self, directory: str | Path = SAVES_FOLDER_NAME) -> str:
        """Write the game to '<directory>/<timestamp>.save' and return that path."""
        folder = Path(directory)
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / f"{get_unix_timestamp()}{SAVE_FILE_EXTENSION}"
        path.write_text(self.to_json(), encoding="utf-8")
        return str(path)


def get_unix_timestamp(start: datetime | float | None = None) -> int:
    """Whole seconds since the Unix epoch of a moment, now by default."""
    if start is None:
        seconds = time.time()
    elif isinstance(start, datetime):
        moment = start if start.tzinfo is not None else start.astimezone()
        seconds = (moment - _EPOCH).total_seconds()
    else:
        seconds = float(start)
    if seconds < 0:
        raise ValueError("time is before the Unix epoch")
    return int(seconds)