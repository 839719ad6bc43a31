"""Position analysis: evaluation, move search, move queries and self-play."""

from __future__ import annotations

from typing import Iterator

from .position import Position
from .types import Move, PieceType, Player, square_name

PIECE_VALUES = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 300,
    PieceType.BISHOP: 300,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}

MATE_SCORE = 1_000_000


def evaluate(position: Position) -> int:
    """Material balance: positive favours white, negative favours black, zero is equal."""
    score = 0
    for piece in position.board:
        if piece is None:
            continue
        value = PIECE_VALUES[piece.kind]
        score += value if piece.player is Player.WHITE else -value
    return score


def _negamax(position: Position, depth: int, alpha: int, beta: int) -> int:
    moves = position.generate_moves()
    if not moves:
        # Mates found with more depth left are sooner and therefore worse for the loser.
        return -(MATE_SCORE + depth) if position.in_check() else 0
    if depth == 0:
        sign = 1 if position.turn is Player.WHITE else -1
        return sign * evaluate(position)
    best = -(MATE_SCORE * 2)
    for move in moves:
        child = position.copy()
        child.apply_move(move)
        score = -_negamax(child, depth - 1, -beta, -alpha)
        if score > best:
            best = score
        if best > alpha:
            alpha = best
        if alpha >= beta:
            break
    return best


def best_move(position: Position, depth: int) -> Move:
    """The best move for the side to move, searching the given number of plies."""
    if depth < 1:
        raise ValueError(f"search depth must be at least 1, got {depth}")
    moves = position.generate_moves()
    if not moves:
        raise ValueError("no legal moves in this position")
    alpha, beta = -(MATE_SCORE * 2), MATE_SCORE * 2
    chosen = moves[0]
    best = -(MATE_SCORE * 2)
    for move in moves:
        child = position.copy()
        child.apply_move(move)
        score = -_negamax(child, depth - 1, -beta, -alpha)
        if score > best:
            best, chosen = score, move
        alpha = max(alpha, best)
    return chosen


def moves_from(position: Position, square: int) -> list[Move]:
    """Legal moves of the side to move that start on the given square."""
    if not 0 <= square < 64:
        raise ValueError(f"square out of range: {square}")
    return [move for move in position.generate_moves() if move.src == square]


def move_is_valid(position: Position, move: Move) -> bool:
    """True when the move is legal in the position."""
    return position.is_legal(move)


def autoplay(position: Position, max_plies: int | None = None) -> Iterator[Move]:
    """Play the first legal move each turn on a copy, yielding every move played.

    Stops at checkmate or stalemate, or after max_plies moves when it is given.
    """
    if max_plies is not None and max_plies < 0:
        raise ValueError(f"max_plies must not be negative, got {max_plies}")
    board = position.copy()
    played = 0
    while max_plies is None or played < max_plies:
        moves = board.generate_moves()
        if not moves:
            return
        move = moves[0]
        board.apply_move(move)
        played += 1
        yield move


def debug_report(position: Position) -> str:
    """The board alongside state details: castling, clocks, en passant and checks."""
    rows = []
    for rank in range(7, -1, -1):
        cells = (position.piece_at(rank * 8 + file) for file in range(8))
        rows.append(" ".join(piece.character() if piece else "-" for piece in cells))
    castling_bits = "".join("1" if right in position.castling else "0" for right in "KQkq")
    ep = "-" if position.ep_square is None else square_name(position.ep_square)
    moves = position.generate_moves()
    in_check = position.in_check()
    if not moves:
        state = "checkmate" if in_check else "stalemate"
    else:
        state = "check" if in_check else "none"
    lines = [
        *rows,
        "",
        f"Castling bits: {castling_bits}, Rule 50: {position.halfmove}, ep_sq: {ep}",
        f"Total Moves: {position.fullmove}, side to move: {position.turn}",
        f"Legal moves: {len(moves)}, state: {state}",
        f"FEN: {position.fen()}",
    ]
    return "\n".join(lines)