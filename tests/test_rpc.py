import pytest

from chessgame.core import Board, GameStatus
from chessgame.rpc import ChessService, ChessStateManager, MoveResult
from chessgame.store import GameNotFoundError, MemoryStore


@pytest.fixture
def started():
    service = ChessService()
    game_id = service.push_game_create({"player_id": "alice", "player_name": "Alice"})
    service.push_game_accept({"game_id": game_id, "player_id": "bob"})
    return service, game_id


def test_create_registers_game():
    service = ChessService()
    game_id = service.push_game_create({"player_id": "alice"})
    assert service.pull_games_list() == [{"game_id": game_id, "players": ["alice"]}]
    assert service.pull_board_state(game_id) == Board.default().to_fen()


def test_uses_given_store():
    store = MemoryStore()
    service = ChessService(store)
    game_id = service.push_game_create({"player_id": "alice", "player_name": "Alice"})
    assert store.get_game(game_id).players[0].name == "Alice"


def test_create_requires_player():
    with pytest.raises(ValueError):
        ChessService().push_game_create({})


def test_accept_adds_second_player(started):
    service, game_id = started
    assert service.pull_game_state(game_id)["players"] == ["alice", "bob"]


def test_accept_full_or_duplicate(started):
    service, game_id = started
    with pytest.raises(ValueError):
        service.push_game_accept({"game_id": game_id, "player_id": "carol"})
    with pytest.raises(ValueError):
        service.push_game_accept({"game_id": game_id, "player_id": "bob"})


def test_accept_unknown_game():
    with pytest.raises(GameNotFoundError):
        ChessService().push_game_accept({"game_id": "nope", "player_id": "bob"})


def test_moves_follow_turns(started):
    service, game_id = started
    assert service.push_move({"game_id": game_id, "player_id": "alice", "move": "e2e4"}) == game_id
    expected = Board.default().make_move("e2e4").to_fen()
    assert service.pull_board_state(game_id) == expected
    with pytest.raises(ValueError):
        service.push_move({"game_id": game_id, "player_id": "alice", "move": "d2d4"})
    service.push_move({"game_id": game_id, "player_id": "bob", "move": "e7e5"})
    state = service.pull_game_state(game_id)
    assert state["history"] == ["e2e4", "e7e5"]
    assert state["status"] is GameStatus.CONTINUING


def test_illegal_move_changes_nothing(started):
    service, game_id = started
    with pytest.raises(ValueError):
        service.push_move({"game_id": game_id, "player_id": "alice", "move": "e2e5"})
    assert service.pull_board_state(game_id) == Board.default().to_fen()


def test_move_before_start_and_by_stranger():
    service = ChessService()
    game_id = service.push_game_create({"player_id": "alice"})
    with pytest.raises(ValueError):
        service.push_move({"game_id": game_id, "player_id": "alice", "move": "e2e4"})
    with pytest.raises(ValueError):
        service.push_move({"game_id": game_id, "player_id": "eve", "move": "e2e4"})


def test_checkmate_status(started):
    service, game_id = started
    for player, move in [("alice", "f2f3"), ("bob", "e7e5"), ("alice", "g2g4"), ("bob", "d8h4")]:
        service.push_move({"game_id": game_id, "player_id": player, "move": move})
    assert service.pull_game_state(game_id)["status"] is GameStatus.CHECKMATE


def test_forfeit_ends_game(started):
    service, game_id = started
    service.push_game_gg({"game_id": game_id, "player_id": "bob"})
    assert service.pull_game_state(game_id)["forfeited_by"] == "bob"
    with pytest.raises(ValueError):
        service.push_move({"game_id": game_id, "player_id": "alice", "move": "e2e4"})
    with pytest.raises(ValueError):
        service.push_game_gg({"game_id": game_id, "player_id": "alice"})


def test_chat(started):
    service, game_id = started
    service.push_msg({"game_id": game_id, "player_id": "alice", "text": "hi"})
    service.push_msg({"game_id": game_id, "player_id": "bob", "text": "hello"})
    messages = service.pull_msgs(game_id)
    assert [(m.player_id, m.text) for m in messages] == [("alice", "hi"), ("bob", "hello")]
    assert messages[0].timestamp <= messages[1].timestamp


def test_chat_rejects_stranger_and_bad_text(started):
    service, game_id = started
    with pytest.raises(ValueError):
        service.push_msg({"game_id": game_id, "player_id": "eve", "text": "hi"})
    with pytest.raises(ValueError):
        service.push_msg({"game_id": game_id, "player_id": "alice"})
    assert service.pull_msgs(game_id) == []


def test_pull_unknown_game():
    service = ChessService()
    with pytest.raises(GameNotFoundError):
        service.pull_board_state("nope")
    with pytest.raises(GameNotFoundError):
        service.pull_msgs("nope")


def test_state_manager_accepts_move():
    result = ChessStateManager().make_move({"figure_id": 2, "to": {"row": 3, "column": 2}})
    assert result == MoveResult(status=0, message="success")