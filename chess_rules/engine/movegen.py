"""Pseudo-legal move generation.

Each piece kind has its own generator yielding candidate moves for a piece
on a given square. Candidates never capture a friendly piece but may leave
the mover's own king in check; ``rules.legal_moves`` filters those out.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, Sequence

from .attacks import DIAGONALS, KING_OFFSETS, KNIGHT_OFFSETS, ORTHOGONALS
from .board import Board
from .castling import CastleSide, CastlingRights, can_castle, king_home
from .move import Move, Square
from .piece import PROMOTION_KINDS, Color, PieceKind
from .state import GameState


def pawn_moves(
    board: Board,
    from_sq: Square,
    color: Color,
    promotions: Sequence[PieceKind] = PROMOTION_KINDS,
) -> Iterator[Move]:
    step = color.pawn_direction
    last_rank = color.opponent.home_rank
    start_rank = color.home_rank + step

    def emit(to_sq: Square) -> Iterator[Move]:
        if to_sq.rank == last_rank:
            for promo in promotions:
                yield Move(from_sq, to_sq, promo)
        else:
            yield Move(from_sq, to_sq)

    one = from_sq.offset(0, step)
    if one is not None and board.piece_at(one) is None:
        yield from emit(one)
        if from_sq.rank == start_rank:
            two = from_sq.offset(0, 2 * step)
            if two is not None and board.piece_at(two) is None:
                yield Move(from_sq, two)

    for df in (-1, 1):
        cap = from_sq.offset(df, step)
        if cap is None:
            continue
        target = board.piece_at(cap)
        if target is not None and target.color is not color:
            yield from emit(cap)


def knight_moves(board: Board, from_sq: Square, color: Color) -> Iterator[Move]:
    return _step_moves(board, from_sq, color, KNIGHT_OFFSETS)


def bishop_moves(board: Board, from_sq: Square, color: Color) -> Iterator[Move]:
    return _slide_moves(board, from_sq, color, DIAGONALS)


def rook_moves(board: Board, from_sq: Square, color: Color) -> Iterator[Move]:
    return _slide_moves(board, from_sq, color, ORTHOGONALS)


def queen_moves(board: Board, from_sq: Square, color: Color) -> Iterator[Move]:
    return _slide_moves(board, from_sq, color, DIAGONALS + ORTHOGONALS)


def king_moves(
    board: Board, from_sq: Square, color: Color, rights: CastlingRights
) -> Iterator[Move]:
    yield from _step_moves(board, from_sq, color, KING_OFFSETS)
    if from_sq != king_home(color):
        return
    for cs in CastleSide:
        if can_castle(board, color, rights, cs):
            yield Move(from_sq, Square(cs.king_to_file, from_sq.rank))


def pseudo_legal_moves(
    state: GameState, promotions: Sequence[PieceKind] = PROMOTION_KINDS
) -> Iterator[Move]:
    """Yield candidate moves for every piece of the side to move.

    Args:
        state (GameState): Position to generate from.
        promotions (Sequence[PieceKind]): Kinds offered when a pawn reaches
            the last rank; defaults to all four.
    """
    board = state.board
    color = state.side_to_move
    generators: Dict[PieceKind, Callable[[Square], Iterable[Move]]] = {
        PieceKind.PAWN: lambda sq: pawn_moves(board, sq, color, promotions),
        PieceKind.KNIGHT: lambda sq: knight_moves(board, sq, color),
        PieceKind.BISHOP: lambda sq: bishop_moves(board, sq, color),
        PieceKind.ROOK: lambda sq: rook_moves(board, sq, color),
        PieceKind.QUEEN: lambda sq: queen_moves(board, sq, color),
        PieceKind.KING: lambda sq: king_moves(board, sq, color, state.castling),
    }
    for sq, piece in board.pieces(color):
        yield from generators[piece.kind](sq)


def _step_moves(board: Board, from_sq: Square, color: Color, offsets) -> Iterator[Move]:
    for df, dr in offsets:
        to_sq = from_sq.offset(df, dr)
        if to_sq is None:
            continue
        target = board.piece_at(to_sq)
        if target is None or target.color is not color:
            yield Move(from_sq, to_sq)


def _slide_moves(board: Board, from_sq: Square, color: Color, dirs) -> Iterator[Move]:
    for df, dr in dirs:
        to_sq = from_sq.offset(df, dr)
        while to_sq is not None:
            target = board.piece_at(to_sq)
            if target is not None:
                if target.color is not color:
                    yield Move(from_sq, to_sq)
                break
            yield Move(from_sq, to_sq)
            to_sq = to_sq.offset(df, dr)
