"""Chess position with FEN support and legal move generation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator

from .types import (
    Move,
    MoveFlag,
    Piece,
    PieceType,
    Player,
    parse_square,
    square_name,
)

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_KNIGHT_STEPS = ((1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2))
_KING_STEPS = ((1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1))
_ROOK_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_SLIDER_DIRS = {
    PieceType.BISHOP: _BISHOP_DIRS,
    PieceType.ROOK: _ROOK_DIRS,
    PieceType.QUEEN: _ROOK_DIRS + _BISHOP_DIRS,
}
_PROMO_ORDER = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)
_PROMO_OFFSET = {PieceType.KNIGHT: 0, PieceType.BISHOP: 1, PieceType.ROOK: 2, PieceType.QUEEN: 3}

# right -> (king square, rook square, squares to be empty, squares not attacked, flag)
_CASTLES = {
    "K": (4, 7, (5, 6), (4, 5, 6), MoveFlag.KING_CASTLE),
    "Q": (4, 0, (1, 2, 3), (4, 3, 2), MoveFlag.QUEEN_CASTLE),
    "k": (60, 63, (61, 62), (60, 61, 62), MoveFlag.KING_CASTLE),
    "q": (60, 56, (57, 58, 59), (60, 59, 58), MoveFlag.QUEEN_CASTLE),
}
# rook square -> (king landing square, rook landing square)
_CASTLE_TARGETS = {7: (6, 5), 0: (2, 3), 63: (62, 61), 56: (58, 59)}
# rights lost when a piece leaves or is captured on these squares
_RIGHTS_LOST = {4: "KQ", 7: "K", 0: "Q", 60: "kq", 63: "k", 56: "q"}


class FenError(ValueError):
    """Raised for a malformed FEN string."""


def _offset(square: int, dfile: int, drank: int) -> int | None:
    file, rank = square % 8 + dfile, square // 8 + drank
    if 0 <= file < 8 and 0 <= rank < 8:
        return rank * 8 + file
    return None


def _ray(square: int, dfile: int, drank: int) -> Iterator[int]:
    while (square := _offset(square, dfile, drank)) is not None:
        yield square


def _forward(player: Player) -> int:
    return 1 if player is Player.WHITE else -1


@dataclass
class Position:
    """Full game state: placement, side to move, castling, en passant and clocks."""

    board: list = field(default_factory=lambda: [None] * 64)
    turn: Player = Player.WHITE
    castling: frozenset = frozenset()
    ep_square: int | None = None
    halfmove: int = 0
    fullmove: int = 1
    last_move: Move | None = None

    @classmethod
    def start(cls) -> Position:
        """The standard starting position."""
        return cls.from_fen(START_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> Position:
        """Parse a FEN string, raising FenError when it is malformed."""
        fields = fen.split()
        if len(fields) not in (4, 5, 6):
            raise FenError(f"expected 4 to 6 FEN fields, got {len(fields)}")
        placement, turn, castling, ep, *counters = fields

        board = cls._parse_placement(placement)

        if turn not in ("w", "b"):
            raise FenError(f"bad side to move: {turn!r}")

        if castling == "-":
            rights: frozenset = frozenset()
        else:
            if any(c not in "KQkq" for c in castling) or len(set(castling)) != len(castling):
                raise FenError(f"bad castling field: {castling!r}")
            rights = frozenset(castling)

        if ep == "-":
            ep_square = None
        else:
            try:
                ep_square = parse_square(ep)
            except ValueError as exc:
                raise FenError(f"bad en passant square: {ep!r}") from exc

        try:
            numbers = [int(value) for value in counters]
        except ValueError as exc:
            raise FenError(f"bad move counters: {counters!r}") from exc
        if any(number < 0 for number in numbers):
            raise FenError(f"negative move counter: {counters!r}")
        halfmove, fullmove = (numbers + [0, 1][len(numbers):])[:2]

        return cls(
            board=board,
            turn=Player.WHITE if turn == "w" else Player.BLACK,
            castling=rights,
            ep_square=ep_square,
            halfmove=halfmove,
            fullmove=fullmove,
        )

    @staticmethod
    def _parse_placement(placement: str) -> list:
        rows = placement.split("/")
        if len(rows) != 8:
            raise FenError(f"expected 8 ranks, got {len(rows)}")
        board: list = [None] * 64
        for rank, row in zip(range(7, -1, -1), rows):
            file = 0
            for char in row:
                if char in "12345678":
                    file += int(char)
                else:
                    if file >= 8:
                        raise FenError(f"rank too long: {row!r}")
                    try:
                        piece = Piece.from_character(char)
                    except ValueError as exc:
                        raise FenError(f"bad piece character: {char!r}") from exc
                    if piece.kind is PieceType.PAWN and rank in (0, 7):
                        raise FenError("pawn on first or last rank")
                    board[rank * 8 + file] = piece
                    file += 1
                if file > 8:
                    raise FenError(f"rank too long: {row!r}")
            if file != 8:
                raise FenError(f"rank too short: {row!r}")
        for player in Player:
            if board.count(Piece(player, PieceType.KING)) != 1:
                raise FenError(f"{player} must have exactly one king")
        return board

    def fen(self) -> str:
        """The position as a FEN string."""
        rows = []
        for rank in reversed(range(8)):
            row, empty = "", 0
            for piece in self.board[rank * 8: rank * 8 + 8]:
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece.character()
            if empty:
                row += str(empty)
            rows.append(row)
        castling = "".join(c for c in "KQkq" if c in self.castling) or "-"
        ep = "-" if self.ep_square is None else square_name(self.ep_square)
        turn = "w" if self.turn is Player.WHITE else "b"
        return f"{'/'.join(rows)} {turn} {castling} {ep} {self.halfmove} {self.fullmove}"

    def copy(self) -> Position:
        """An independent copy of this position."""
        return replace(self, board=list(self.board))

    def piece_at(self, square: int) -> Piece | None:
        """The piece on a square, or None when it is empty."""
        if not 0 <= square < 64:
            raise ValueError(f"square out of range: {square}")
        return self.board[square]

    def in_check(self) -> bool:
        """True when the side to move is in check."""
        return self._attacked(self._king_square(self.turn), self.turn.other())

    def generate_moves(self) -> list[Move]:
        """All legal moves for the side to move."""
        return [move for move in self._pseudo_moves() if self._leaves_king_safe(move)]

    def is_legal(self, move: Move) -> bool:
        """True when the move is legal in this position."""
        return move in self.generate_moves()

    def apply_move(self, move: Move) -> None:
        """Play a legal move in place; raise ValueError for an illegal one."""
        if not self.is_legal(move):
            raise ValueError(f"illegal move: {move}")
        self._play(move)

    def checkmate(self) -> bool:
        """True when the side to move is checkmated."""
        return self.in_check() and not self.generate_moves()

    def stalemate(self) -> bool:
        """True when the side to move has no legal move and is not in check."""
        return not self.in_check() and not self.generate_moves()

    # -- internals ---------------------------------------------------------

    def _king_square(self, player: Player) -> int:
        return self.board.index(Piece(player, PieceType.KING))

    def _attacked(self, square: int, by: Player) -> bool:
        board = self.board
        for dfile in (-1, 1):
            origin = _offset(square, dfile, -_forward(by))
            if origin is not None and board[origin] == Piece(by, PieceType.PAWN):
                return True
        for steps, kind in ((_KNIGHT_STEPS, PieceType.KNIGHT), (_KING_STEPS, PieceType.KING)):
            for dfile, drank in steps:
                origin = _offset(square, dfile, drank)
                if origin is not None and board[origin] == Piece(by, kind):
                    return True
        for dirs, kinds in (
            (_ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
            (_BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
        ):
            for dfile, drank in dirs:
                for origin in _ray(square, dfile, drank):
                    piece = board[origin]
                    if piece is None:
                        continue
                    if piece.player is by and piece.kind in kinds:
                        return True
                    break
        return False

    def _target_flag(self, dest: int) -> MoveFlag | None:
        target = self.board[dest]
        if target is None:
            return MoveFlag.QUIET
        if target.player is not self.turn:
            return MoveFlag.CAPTURE
        return None

    def _pseudo_moves(self) -> Iterator[Move]:
        for square, piece in enumerate(self.board):
            if piece is None or piece.player is not self.turn:
                continue
            if piece.kind is PieceType.PAWN:
                yield from self._pawn_moves(square)
            elif piece.kind is PieceType.KNIGHT:
                yield from self._step_moves(square, _KNIGHT_STEPS)
            elif piece.kind is PieceType.KING:
                yield from self._step_moves(square, _KING_STEPS)
                yield from self._castle_moves()
            else:
                yield from self._slider_moves(square, _SLIDER_DIRS[piece.kind])

    def _step_moves(self, square: int, steps) -> Iterator[Move]:
        for dfile, drank in steps:
            dest = _offset(square, dfile, drank)
            if dest is None:
                continue
            flag = self._target_flag(dest)
            if flag is not None:
                yield Move.make(square, dest, flag)

    def _slider_moves(self, square: int, dirs) -> Iterator[Move]:
        for dfile, drank in dirs:
            for dest in _ray(square, dfile, drank):
                flag = self._target_flag(dest)
                if flag is None:
                    break
                yield Move.make(square, dest, flag)
                if flag is MoveFlag.CAPTURE:
                    break

    @staticmethod
    def _promotions(src: int, dest: int, capture: bool) -> Iterator[Move]:
        base = 0b1100 if capture else 0b1000
        for kind in _PROMO_ORDER:
            yield Move.make(src, dest, MoveFlag(base + _PROMO_OFFSET[kind]))

    def _pawn_moves(self, square: int) -> Iterator[Move]:
        me = self.turn
        forward = _forward(me)
        start_rank = 1 if me is Player.WHITE else 6
        last_rank = 7 if me is Player.WHITE else 0

        one = _offset(square, 0, forward)
        if one is not None and self.board[one] is None:
            if one // 8 == last_rank:
                yield from self._promotions(square, one, capture=False)
            else:
                yield Move.make(square, one, MoveFlag.QUIET)
                two = one + 8 * forward
                if square // 8 == start_rank and self.board[two] is None:
                    yield Move.make(square, two, MoveFlag.DOUBLE_PAWN)

        for dfile in (-1, 1):
            dest = _offset(square, dfile, forward)
            if dest is None:
                continue
            victim = self.board[dest]
            if victim is not None and victim.player is not me:
                if dest // 8 == last_rank:
                    yield from self._promotions(square, dest, capture=True)
                else:
                    yield Move.make(square, dest, MoveFlag.CAPTURE)
            elif victim is None and dest == self.ep_square:
                victim_square = dest - 8 * forward
                if self.board[victim_square] == Piece(me.other(), PieceType.PAWN):
                    yield Move.make(square, dest, MoveFlag.EN_PASSANT)

    def _castle_moves(self) -> Iterator[Move]:
        me = self.turn
        enemy = me.other()
        rights = "KQ" if me is Player.WHITE else "kq"
        for right in rights:
            if right not in self.castling:
                continue
            king_sq, rook_sq, empty, safe, flag = _CASTLES[right]
            if self.board[king_sq] != Piece(me, PieceType.KING):
                continue
            if self.board[rook_sq] != Piece(me, PieceType.ROOK):
                continue
            if any(self.board[sq] is not None for sq in empty):
                continue
            if any(self._attacked(sq, enemy) for sq in safe):
                continue
            yield Move.make(king_sq, rook_sq, flag)

    def _leaves_king_safe(self, move: Move) -> bool:
        trial = self.copy()
        trial._play(move)
        return not trial._attacked(trial._king_square(self.turn), self.turn.other())

    def _play(self, move: Move) -> None:
        board = self.board
        me = self.turn
        enemy = me.other()
        src, dest = move.src, move.dest
        piece = board[src]
        if piece is None:
            raise ValueError(f"no piece on {square_name(src)}")
        captured = None

        if move.is_castle:
            king_to, rook_to = _CASTLE_TARGETS[dest]
            board[src] = None
            board[dest] = None
            board[king_to] = piece
            board[rook_to] = Piece(me, PieceType.ROOK)
        else:
            captured = board[dest]
            board[src] = None
            if move.is_en_passant:
                victim_square = dest - 8 * _forward(me)
                captured = board[victim_square]
                board[victim_square] = None
            if move.is_promotion:
                board[dest] = Piece(me, move.promo_piece)
            else:
                board[dest] = piece

        lost = _RIGHTS_LOST.get(src, "") + _RIGHTS_LOST.get(dest, "")
        if lost:
            self.castling = frozenset(c for c in self.castling if c not in lost)

        self.ep_square = None
        if move.is_double_push:
            enemy_pawn = Piece(enemy, PieceType.PAWN)
            neighbours = (_offset(dest, dfile, 0) for dfile in (-1, 1))
            if any(sq is not None and board[sq] == enemy_pawn for sq in neighbours):
                self.ep_square = (src + dest) // 2

        if piece.kind is PieceType.PAWN or captured is not None:
            self.halfmove = 0
        else:
            self.halfmove += 1
        if me is Player.BLACK:
            self.fullmove += 1
        self.turn = enemy
        self.last_move = move