"""Game service answering the requests of multiplayer clients."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, replace
from typing import Any, Mapping

from .core import Game
from .multiplayer import MultiplayerGame, MultiplayerMessage, MultiplayerPlayer
from .store import GameStore, MemoryStore
from .types import Player

PLAYERS_PER_GAME = 2


def _field(request: Mapping[str, Any], name: str) -> str:
    try:
        value = request[name]
    except KeyError:
        raise ValueError(f"request lacks field {name!r}") from None
    if not isinstance(value, str) or not value:
        raise ValueError(f"field {name!r} must be a non-empty string")
    return value


class ChessService:
    """Creates games, lets players join and move, and keeps a chat per game."""

    def __init__(self, store: GameStore | None = None) -> None:
        self.store: GameStore = store if store is not None else MemoryStore()
        self._lock = threading.Lock()
        self._boards: dict[str, Game] = {}
        self._messages: dict[str, list[MultiplayerMessage]] = {}
        self._forfeits: dict[str, str] = {}

    def _player_ids(self, game_id: str) -> list[str]:
        return [player.id for player in self.store.get_game(game_id).players]

    def _require_member(self, game_id: str, player_id: str) -> list[str]:
        ids = self._player_ids(game_id)
        if player_id not in ids:
            raise ValueError(f"player {player_id!r} is not in game {game_id!r}")
        return ids

    def push_game_create(self, request: Mapping[str, Any]) -> str:
        """Create a game for the requesting player, who plays white; return its id."""
        player_id = _field(request, "player_id")
        name = request.get("player_name") or player_id
        game_id = uuid.uuid4().hex
        with self._lock:
            self.store.add_game(MultiplayerGame(game_id, [MultiplayerPlayer(player_id, name)]))
            self._boards[game_id] = Game()
            self._messages[game_id] = []
        return game_id

    def push_game_accept(self, request: Mapping[str, Any]) -> str:
        """Join an open game as black; return its id."""
        game_id = _field(request, "game_id")
        player_id = _field(request, "player_id")
        name = request.get("player_name") or player_id
        with self._lock:
            game = self.store.get_game(game_id)
            if any(player.id == player_id for player in game.players):
                raise ValueError(f"player {player_id!r} already in game {game_id!r}")
            if len(game.players) >= PLAYERS_PER_GAME:
                raise ValueError(f"game {game_id!r} is full")
            players = [*game.players, MultiplayerPlayer(player_id, name)]
            self.store.update_game(game_id, replace(game, players=players))
        return game_id

    def push_move(self, request: Mapping[str, Any]) -> str:
        """Play a UCI move for the requesting player; return the game id."""
        game_id = _field(request, "game_id")
        player_id = _field(request, "player_id")
        uci_move = _field(request, "move")
        with self._lock:
            ids = self._require_member(game_id, player_id)
            if len(ids) < PLAYERS_PER_GAME:
                raise ValueError(f"game {game_id!r} has not started")
            if game_id in self._forfeits:
                raise ValueError(f"game {game_id!r} is over")
            board = self._boards[game_id]
            to_move = ids[0] if board.current_turn() is Player.WHITE else ids[1]
            if player_id != to_move:
                raise ValueError(f"it is not the turn of player {player_id!r}")
            if not board.make_move(uci_move):
                raise ValueError(f"illegal move: {uci_move!r}")
        return game_id

    def pull_board_state(self, request: str) -> str:
        """The board of the game with the given id, as FEN."""
        with self._lock:
            self.store.get_game(request)
            return self._boards[request].board.to_fen()

    def pull_game_state(self, request: str) -> dict[str, Any]:
        """Board, players, move history and status of the game with the given id."""
        with self._lock:
            ids = self._player_ids(request)
            board = self._boards[request]
            return {
                "game_id": request,
                "players": ids,
                "board": board.board.to_fen(),
                "history": [entry.last_move.stringify() for entry in board.history],
                "status": board.status(),
                "forfeited_by": self._forfeits.get(request),
            }

    def pull_games_list(self) -> list[dict[str, Any]]:
        """Ids and players of all games."""
        with self._lock:
            return [
                {"game_id": game.id, "players": [player.id for player in game.players]}
                for game in self.store.get_games()
            ]

    def push_game_gg(self, request: Mapping[str, Any]) -> None:
        """The requesting player forfeits the game."""
        game_id = _field(request, "game_id")
        player_id = _field(request, "player_id")
        with self._lock:
            self._require_member(game_id, player_id)
            if game_id in self._forfeits:
                raise ValueError(f"game {game_id!r} is over")
            self._forfeits[game_id] = player_id

    def push_msg(self, request: Mapping[str, Any]) -> None:
        """Post a message to the chat of a game."""
        game_id = _field(request, "game_id")
        player_id = _field(request, "player_id")
        text = request.get("text")
        if not isinstance(text, str):
            raise ValueError("field 'text' must be a string")
        with self._lock:
            self._require_member(game_id, player_id)
            self._messages[game_id].append(MultiplayerMessage(player_id, text))

    def pull_msgs(self, request: str) -> list[MultiplayerMessage]:
        """Chat messages of the game with the given id, oldest first."""
        with self._lock:
            self.store.get_game(request)
            return list(self._messages[request])


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move request."""

    status: int
    message: str


class ChessStateManager:
    """Minimal move service that accepts every move."""

    def make_move(self, request: Any) -> MoveResult:
        """Acknowledge a move request."""
        return MoveResult(status=0, message="success")