import pytest

from chessgame.types import (
    Move,
    MoveFlag,
    Piece,
    PieceType,
    Player,
    parse_square,
    square_name,
)


def test_player_other_flips_and_round_trips():
    assert Player.WHITE.other() is Player.BLACK
    assert Player.BLACK.other() is Player.WHITE
    for player in Player:
        assert player.other().other() is player


def test_square_names_pinned():
    assert square_name(0) == "a1"
    assert parse_square("h8") == 63


def test_square_round_trip_for_every_square():
    names = [square_name(square) for square in range(64)]
    assert len(set(names)) == 64
    assert [parse_square(name) for name in names] == list(range(64))


@pytest.mark.parametrize("name", ["", "a", "i1", "a9", "a0", "e44", "E4"])
def test_parse_square_rejects_bad_names(name):
    with pytest.raises(ValueError):
        parse_square(name)


@pytest.mark.parametrize("square", [-1, 64, 100])
def test_square_name_rejects_out_of_range(square):
    with pytest.raises(ValueError):
        square_name(square)


@pytest.mark.parametrize("char", list("PNBRQKpnbrqk"))
def test_piece_character_round_trip(char):
    assert Piece.from_character(char).character() == char


def test_piece_from_character_sets_player_and_kind():
    piece = Piece.from_character("k")
    assert piece.player is Player.BLACK
    assert piece.kind is PieceType.KING
    assert Piece.from_character("N") == Piece(Player.WHITE, PieceType.KNIGHT)


@pytest.mark.parametrize("char", ["x", "", "KK", "1", "-"])
def test_piece_from_character_rejects_unknown(char):
    with pytest.raises(ValueError):
        Piece.from_character(char)


def test_double_pawn_push_bits():
    move = Move.make(parse_square("a2"), parse_square("a4"), MoveFlag.DOUBLE_PAWN)
    assert move.raw == 5640
    assert move.stringify() == "a2a4"
    assert str(move) == "a2a4"


def test_move_from_raw_bits():
    move = Move(5640)
    assert move.src == parse_square("a2")
    assert move.dest == parse_square("a4")
    assert move.flag is MoveFlag.DOUBLE_PAWN
    assert move.is_double_push
    assert not move.is_capture


def test_move_parts_round_trip():
    for flag in MoveFlag:
        move = Move.make(12, 28, flag)
        assert (move.src, move.dest, move.flag) == (12, 28, flag)
        assert Move(move.raw) == move


def test_castle_is_written_with_king_destination():
    move = Move.make(parse_square("e1"), parse_square("h1"), MoveFlag.KING_CASTLE)
    assert move.is_castle
    assert move.stringify() == "e1g1"


def test_promotion_properties():
    move = Move.make(parse_square("a7"), parse_square("a8"), MoveFlag.PROMO_QUEEN)
    assert move.is_promotion
    assert not move.is_capture
    assert move.promo_piece is PieceType.QUEEN
    text = move.stringify()
    assert text.startswith("a7a8")
    assert text[4:] == PieceType.QUEEN.char


def test_promotion_capture_is_capture():
    move = Move.make(parse_square("b7"), parse_square("a8"), MoveFlag.PROMO_CAPTURE_KNIGHT)
    assert move.is_capture and move.is_promotion
    assert move.promo_piece is PieceType.KNIGHT


def test_en_passant_is_capture():
    move = Move.make(parse_square("e5"), parse_square("d6"), MoveFlag.EN_PASSANT)
    assert move.is_en_passant and move.is_capture
    assert move.promo_piece is None


@pytest.mark.parametrize("src,dest", [(64, 0), (0, 64), (-1, 3)])
def test_move_make_rejects_bad_squares(src, dest):
    with pytest.raises(ValueError):
        Move.make(src, dest, MoveFlag.QUIET)


@pytest.mark.parametrize("raw", [-1, 0x10000])
def test_move_rejects_bad_raw(raw):
    with pytest.raises(ValueError):
        Move(raw)