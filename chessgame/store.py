"""Storage of multiplayer games on the server."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .multiplayer import MultiplayerGame


class GameNotFoundError(KeyError):
    """Raised when no stored game has the requested id."""

    def __str__(self) -> str:
        return f"no game with id {self.args[0]!r}"


class GameStore(ABC):
    """Operations every game storage provides."""

    @abstractmethod
    def add_game(self, game: MultiplayerGame) -> None:
        """Add a game to the storage."""

    @abstractmethod
    def get_game(self, game_id: str) -> MultiplayerGame:
        """The game with the given id."""

    @abstractmethod
    def get_games(self) -> list[MultiplayerGame]:
        """All stored games."""

    @abstractmethod
    def update_game(self, game_id: str, new_game: MultiplayerGame) -> None:
        """Replace the game with the given id."""


class MemoryStore(GameStore):
    """Keeps games in memory, in the order they were added."""

    def __init__(self) -> None:
        self._games: list[MultiplayerGame] = []

    def _index(self, game_id: str) -> int:
        for index, game in enumerate(self._games):
            if game.id == game_id:
                return index
        raise GameNotFoundError(game_id)

    def add_game(self, game: MultiplayerGame) -> None:
        """Add a game; raise ValueError if its id is already taken."""
        if any(stored.id == game.id for stored in self._games):
            raise ValueError(f"game {game.id!r} already stored")
        self._games.append(game)

    def get_game(self, game_id: str) -> MultiplayerGame:
        """The game with the given id, or GameNotFoundError."""
        return self._games[self._index(game_id)]

    def get_games(self) -> list[MultiplayerGame]:
        """A list of all stored games."""
        return list(self._games)

    def update_game(self, game_id: str, new_game: MultiplayerGame) -> None:
        """Replace the game with the given id, or raise GameNotFoundError."""
        index = self._index(game_id)
        if new_game.id != game_id and any(g.id == new_game.id for g in self._games):
            raise ValueError(f"game {new_game.id!r} already stored")
        self._games[index] = new_game