"""Data shared by the multiplayer client and server."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MultiplayerMessage:
    """A chat message sent by a player."""

    player_id: str
    text: str
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class MultiplayerPlayer:
    """A player taking part in online games."""

    id: str
    name: str


@dataclass(frozen=True)
class MultiplayerMove:
    """A move made by a player in a game."""

    player_id: str
    game_id: str


@dataclass
class MultiplayerGame:
    """An online game and the players in it."""

    id: str
    players: list[MultiplayerPlayer] = field(default_factory=list)