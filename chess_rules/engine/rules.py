from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from .attacks import king_attacked
from .board import Board
from .castling import castle_side_of, update_castling_rights
from .move import Move, Square
from .movegen import pseudo_legal_moves
from .piece import PROMOTION_KINDS, Color, Piece, PieceKind
from .state import GameState


class IllegalMoveError(ValueError):
    """Raised when a move outside the legal move list is applied."""

    def __init__(self, move: Move, reason: str = "illegal move") -> None:
        super().__init__(f"{reason}: {move.to_uci()}")
        self.move = move


def apply_to_board(board: Board, move: Move) -> Board:
    """Return a new board with ``move`` played; ``board`` is left untouched.

    Handles captures (by overwrite), promotions and the rook hop of a
    castling king move. No legality checks are made.
    """
    piece = board.piece_at(move.from_sq)
    if piece is None:
        return board
    placed = piece
    if piece.kind is PieceKind.PAWN and move.promotion is not None:
        if move.to_sq.rank == piece.color.opponent.home_rank:
            placed = Piece(piece.color, move.promotion)
    cs = castle_side_of(move, board)
    new_board = board.relocate(move.from_sq, move.to_sq, placed)
    if cs is not None and move.from_sq.rank == piece.color.home_rank:
        rank = move.from_sq.rank
        new_board = new_board.relocate(Square(cs.rook_file, rank), Square(cs.rook_to_file, rank))
    return new_board


def legal_moves(
    state: GameState, promotions: Sequence[PieceKind] = PROMOTION_KINDS
) -> List[Move]:
    """Return the legal moves for the side to move.

    Each pseudo-legal candidate is played on a scratch board and kept only if
    the mover's king is not attacked afterwards. No ordering is guaranteed.
    """
    return [mv for mv in pseudo_legal_moves(state, promotions) if _is_legal(state, mv)]


def has_legal_moves(state: GameState) -> bool:
    return any(_is_legal(state, mv) for mv in pseudo_legal_moves(state))


def _is_legal(state: GameState, mv: Move) -> bool:
    return not king_attacked(apply_to_board(state.board, mv), state.side_to_move)


def make_move(state: GameState, move: Move) -> GameState:
    """Play ``move`` without checking it against the legal move list.

    The caller guarantees legality (perft and ``apply`` rely on this).

    Raises:
        IllegalMoveError: If the side to move has no piece on ``move.from_sq``.
    """
    piece = state.board.piece_at(move.from_sq)
    if piece is None or piece.color is not state.side_to_move:
        raise IllegalMoveError(move, "no piece to move from origin square")
    return replace(
        state,
        board=apply_to_board(state.board, move),
        side_to_move=state.side_to_move.opponent,
        castling=update_castling_rights(state.castling, state.board, move),
        ply=state.ply + 1,
    )


def apply(state: GameState, move: Move) -> GameState:
    """Return the state after ``move`` if it is legal in ``state``.

    Raises:
        IllegalMoveError: If ``move`` is not in ``legal_moves(state)``.
    """
    if move not in legal_moves(state):
        raise IllegalMoveError(move)
    return make_move(state, move)


def in_check(state: GameState, color: Optional[Color] = None) -> bool:
    """Return True if ``color`` (default: side to move) has its king attacked."""
    return king_attacked(state.board, state.side_to_move if color is None else color)
