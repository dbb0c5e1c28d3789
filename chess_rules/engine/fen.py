from __future__ import annotations

from typing import Dict, List

from .attacks import king_attacked
from .board import Board
from .castling import CastlingRights
from .move import Square, str_to_square
from .piece import Color, Piece, PieceKind
from .state import GameState


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def to_fen(state: GameState) -> str:
    """Serialize ``state`` into Forsyth-Edwards Notation.

    En passant is not modelled, so the target field is always ``-``; the
    halfmove clock is always ``0``; the fullmove number is ``ply // 2 + 1``.
    """
    return (
        f"{placement_to_fen(state.board)} {state.side_to_move.value} "
        f"{state.castling.to_fen()} - 0 {state.fullmove_number}"
    )


def placement_to_fen(board: Board) -> str:
    ranks_str: List[str] = []
    for rank_idx in range(7, -1, -1):  # 7..0 maps to ranks 8..1
        run = 0
        row = []
        for file_idx in range(8):
            piece = board.piece_at(Square(file_idx, rank_idx))
            if piece is None:
                run += 1
            else:
                if run > 0:
                    row.append(str(run))
                    run = 0
                row.append(piece.symbol)
        if run > 0:
            row.append(str(run))
        ranks_str.append("".join(row))
    return "/".join(ranks_str)


def from_fen(fen: str) -> GameState:
    """Create a game state from a FEN string.

    Args:
        fen (str): FEN string describing the position to load.

    Returns:
        GameState: State encoded in ``fen``.

    Raises:
        ValueError: If ``fen`` is empty, has the wrong number of fields, or
            contains invalid piece placement, castling rights, en passant
            square, or move counters, does not have exactly one king per color, or
            leaves the side not to move in check.

    Notes:
        The en passant target and the halfmove clock are validated but
        dropped, since neither is modelled. The ply count is rebuilt from the
        fullmove number and the side to move.
    """
    if not fen or not isinstance(fen, str):
        raise ValueError("FEN must be a non-empty string")
    parts = fen.strip().split()
    if len(parts) != 6:
        raise ValueError("FEN must have 6 fields")
    placement, stm, castling, ep, halfmove, fullmove = parts

    board = placement_from_fen(placement)

    if stm not in ("w", "b"):
        raise ValueError("side to move must be 'w' or 'b'")
    side = Color(stm)

    castling_rights = CastlingRights.from_fen(castling)

    if ep != "-":
        try:
            ep_square = str_to_square(ep)
        except ValueError as e:
            raise ValueError("invalid en passant square") from e
        if ep_square.rank not in (2, 5):
            raise ValueError("invalid en passant square rank")

    try:
        halfmove_clock = int(halfmove)
        fullmove_number = int(fullmove)
    except ValueError as e:
        raise ValueError("invalid move counters in FEN") from e
    if halfmove_clock < 0 or fullmove_number <= 0:
        raise ValueError("invalid move counters in FEN")

    # The side that just moved cannot have left its own king in check.
    if king_attacked(board, side.opponent):
        raise ValueError("side not to move is in check")

    ply = (fullmove_number - 1) * 2 + (1 if side is Color.BLACK else 0)
    return GameState(board=board, side_to_move=side, castling=castling_rights, ply=ply)


def placement_from_fen(placement: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError("FEN board must have 8 ranks")
    pieces: Dict[Square, Piece] = {}
    for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
        file_idx = 0
        for ch in rank:
            if ch.isdigit():
                n = int(ch)
                if n < 1 or n > 8:
                    raise ValueError("invalid empty count in FEN rank")
                file_idx += n
            else:
                try:
                    piece = Piece.from_symbol(ch)
                except ValueError:
                    raise ValueError(f"invalid piece in FEN: {ch!r}") from None
                if file_idx >= 8:
                    raise ValueError("too many squares in FEN rank")
                pieces[Square(file_idx, rank_idx)] = piece
                file_idx += 1
        if file_idx != 8:
            raise ValueError("rank does not sum to 8 squares in FEN")

    for color in Color:
        kings = sum(1 for p in pieces.values() if p.color is color and p.kind is PieceKind.KING)
        if kings != 1:
            raise ValueError(f"FEN must contain exactly one {color.name.lower()} king")
    return Board.from_pieces(pieces)
