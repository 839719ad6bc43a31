"""Basic chess vocabulary: players, pieces, squares and encoded moves."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

FILES = "abcdefgh"
RANKS = "12345678"


class Player(Enum):
    """Side of the board."""

    WHITE = 0
    BLACK = 1

    def other(self) -> Player:
        """Return the opposing side."""
        return Player.BLACK if self is Player.WHITE else Player.WHITE

    def __str__(self) -> str:
        return self.name.capitalize()


class PieceType(IntEnum):
    """Kind of a chess piece."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def char(self) -> str:
        """Lower-case letter used for this kind in FEN and UCI."""
        return _KIND_CHARS[self]


_KIND_CHARS = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_CHAR_KINDS = {char: kind for kind, char in _KIND_CHARS.items()}


@dataclass(frozen=True)
class Piece:
    """A piece of a given kind belonging to a player."""

    player: Player
    kind: PieceType

    def character(self) -> str:
        """FEN letter: upper case for white, lower case for black."""
        char = self.kind.char
        return char.upper() if self.player is Player.WHITE else char

    @classmethod
    def from_character(cls, char: str) -> Piece:
        """Build a piece from its FEN letter."""
        kind = _CHAR_KINDS.get(char.lower()) if len(char) == 1 else None
        if kind is None:
            raise ValueError(f"not a piece character: {char!r}")
        player = Player.WHITE if char.isupper() else Player.BLACK
        return cls(player, kind)

    def __str__(self) -> str:
        return self.character()


class MoveFlag(IntEnum):
    """Four-bit move kind stored in the upper bits of a move."""

    QUIET = 0b0000
    DOUBLE_PAWN = 0b0001
    KING_CASTLE = 0b0010
    QUEEN_CASTLE = 0b0011
    CAPTURE = 0b0100
    EN_PASSANT = 0b0101
    PROMO_KNIGHT = 0b1000
    PROMO_BISHOP = 0b1001
    PROMO_ROOK = 0b1010
    PROMO_QUEEN = 0b1011
    PROMO_CAPTURE_KNIGHT = 0b1100
    PROMO_CAPTURE_BISHOP = 0b1101
    PROMO_CAPTURE_ROOK = 0b1110
    PROMO_CAPTURE_QUEEN = 0b1111


_PROMO_KINDS = (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)

# Castling moves are stored as "king takes own rook"; UCI names the king's landing square.
_CASTLE_UCI_DEST = {7: 6, 0: 2, 63: 62, 56: 58}


def square_name(square: int) -> str:
    """Algebraic name of a square index, 0 being a1 and 63 being h8."""
    if not 0 <= square < 64:
        raise ValueError(f"square out of range: {square}")
    return FILES[square % 8] + RANKS[square // 8]


def parse_square(name: str) -> int:
    """Square index of an algebraic name such as 'e4'."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"not a square: {name!r}")
    return RANKS.index(name[1]) * 8 + FILES.index(name[0])


@dataclass(frozen=True, order=True)
class Move:
    """A move packed into 16 bits: source, destination and flag."""

    raw: int

    def __post_init__(self) -> None:
        if not 0 <= self.raw <= 0xFFFF:
            raise ValueError(f"move bits out of range: {self.raw}")

    @classmethod
    def make(cls, src: int, dest: int, flag: MoveFlag) -> Move:
        """Pack a move from its parts."""
        if not (0 <= src < 64 and 0 <= dest < 64):
            raise ValueError(f"square out of range: {src}, {dest}")
        return cls(src | (dest << 6) | (int(MoveFlag(flag)) << 12))

    @property
    def src(self) -> int:
        return self.raw & 0x3F

    @property
    def dest(self) -> int:
        return (self.raw >> 6) & 0x3F

    @property
    def flag(self) -> MoveFlag:
        return MoveFlag(self.raw >> 12)

    @property
    def is_capture(self) -> bool:
        return bool(self.flag & 0b0100)

    @property
    def is_promotion(self) -> bool:
        return bool(self.flag & 0b1000)

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.KING_CASTLE, MoveFlag.QUEEN_CASTLE)

    @property
    def is_en_passant(self) -> bool:
        return self.flag is MoveFlag.EN_PASSANT

    @property
    def is_double_push(self) -> bool:
        return self.flag is MoveFlag.DOUBLE_PAWN

    @property
    def promo_piece(self) -> PieceType | None:
        """Kind a pawn promotes to, or None for other moves."""
        if not self.is_promotion:
            return None
        return _PROMO_KINDS[self.flag & 0b0011]

    def stringify(self) -> str:
        """The move in UCI notation, e.g. 'e2e4' or 'a7a8q'."""
        dest = _CASTLE_UCI_DEST.get(self.dest, self.dest) if self.is_castle else self.dest
        text = square_name(self.src) + square_name(dest)
        promo = self.promo_piece
        if promo is not None:
            text += promo.char
        return text

    def __str__(self) -> str:
        return self.stringify()