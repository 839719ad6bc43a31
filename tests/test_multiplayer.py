from datetime import datetime, timezone

import pytest

from chessgame.multiplayer import (
    MultiplayerGame,
    MultiplayerMessage,
    MultiplayerMove,
    MultiplayerPlayer,
)


def test_message_default_timestamp_is_now_utc():
    before = datetime.now(timezone.utc)
    message = MultiplayerMessage("p1", "hello")
    after = datetime.now(timezone.utc)
    assert before <= message.timestamp <= after
    assert message.timestamp.tzinfo is timezone.utc


def test_message_keeps_given_fields():
    moment = datetime(2022, 2, 4, tzinfo=timezone.utc)
    message = MultiplayerMessage("p1", "hi", moment)
    assert (message.player_id, message.text, message.timestamp) == ("p1", "hi", moment)


def test_player_equality_and_immutability():
    player = MultiplayerPlayer("p1", "Alice")
    assert player == MultiplayerPlayer("p1", "Alice")
    with pytest.raises(AttributeError):
        player.name = "Bob"


def test_move_fields():
    move = MultiplayerMove(player_id="p1", game_id="g1")
    assert move.player_id == "p1"
    assert move.game_id == "g1"


def test_games_do_not_share_player_lists():
    first = MultiplayerGame("g1")
    second = MultiplayerGame("g2")
    first.players.append(MultiplayerPlayer("p1", "Alice"))
    assert second.players == []
    assert len(first.players) == 1