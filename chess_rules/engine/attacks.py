from __future__ import annotations

from .board import Board
from .move import Square
from .piece import Color, PieceKind


KNIGHT_OFFSETS = ((-1, 2), (1, 2), (-2, 1), (2, 1), (-2, -1), (2, -1), (-1, -2), (1, -2))
KING_OFFSETS = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
DIAGONALS = ((-1, -1), (1, -1), (-1, 1), (1, 1))
ORTHOGONALS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def is_attacked(board: Board, target: Square, by_color: Color) -> bool:
    """Return True if ``target`` is attacked by a piece of ``by_color``.

    Covers pawns (diagonal only), knights, king adjacency and slider rays for
    bishops, rooks and queens. Whose turn it is does not matter.
    """
    # Pawns sit one rank behind the target, seen from their own advance.
    behind = -by_color.pawn_direction
    for df in (-1, 1):
        o = target.offset(df, behind)
        if o is not None:
            p = board.piece_at(o)
            if p is not None and p.color is by_color and p.kind is PieceKind.PAWN:
                return True

    for df, dr in KNIGHT_OFFSETS:
        o = target.offset(df, dr)
        if o is not None:
            p = board.piece_at(o)
            if p is not None and p.color is by_color and p.kind is PieceKind.KNIGHT:
                return True

    for df, dr in KING_OFFSETS:
        o = target.offset(df, dr)
        if o is not None:
            p = board.piece_at(o)
            if p is not None and p.color is by_color and p.kind is PieceKind.KING:
                return True

    if _ray_hits(board, target, by_color, DIAGONALS, (PieceKind.BISHOP, PieceKind.QUEEN)):
        return True
    if _ray_hits(board, target, by_color, ORTHOGONALS, (PieceKind.ROOK, PieceKind.QUEEN)):
        return True
    return False


def king_attacked(board: Board, color: Color) -> bool:
    """Return True if the king of ``color`` is attacked (False when absent)."""
    ks = board.king_square(color)
    if ks is None:
        return False
    return is_attacked(board, ks, color.opponent)


def _ray_hits(board: Board, origin: Square, by_color: Color, dirs, kinds) -> bool:
    for df, dr in dirs:
        sq = origin.offset(df, dr)
        while sq is not None:
            p = board.piece_at(sq)
            if p is not None:
                # First occupant decides the ray, whatever its color.
                if p.color is by_color and p.kind in kinds:
                    return True
                break
            sq = sq.offset(df, dr)
    return False
