from __future__ import annotations

from typing import Dict

from .rules import legal_moves, make_move
from .state import GameState


def perft(state: GameState, depth: int) -> int:
    """Compute perft node count for ``state`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    En passant is not generated, so counts only match published tables for
    trees that contain no en passant capture.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1
    moves = legal_moves(state)
    if depth == 1:
        return len(moves)
    return sum(perft(make_move(state, m), depth - 1) for m in moves)


def perft_divide(state: GameState, depth: int) -> Dict[str, int]:
    """Return per-root-move perft counts keyed by UCI string."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    return {m.to_uci(): perft(make_move(state, m), depth - 1) for m in legal_moves(state)}
