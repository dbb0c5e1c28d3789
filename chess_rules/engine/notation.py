from __future__ import annotations

from .board import Board
from .castling import CastleSide, castle_side_of
from .move import Move


def format_move(move: Move, board: Board) -> str:
    """Return a short display label for ``move`` played on ``board``.

    Castling king moves read ``O-O`` / ``O-O-O``; anything else reads
    ``e2-e4``, with ``=Q`` style suffix on promotion.
    """
    cs = castle_side_of(move, board)
    if cs is CastleSide.KINGSIDE:
        return "O-O"
    if cs is CastleSide.QUEENSIDE:
        return "O-O-O"
    label = f"{move.from_sq.name}-{move.to_sq.name}"
    if move.promotion is not None:
        label += "=" + move.promotion.value.upper()
    return label
