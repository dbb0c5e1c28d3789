from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .attacks import is_attacked
from .board import Board
from .move import Move, Square
from .piece import Color, PieceKind


KING_HOME_FILE = 4


class CastleSide(Enum):
    KINGSIDE = "K"
    QUEENSIDE = "Q"

    @property
    def rook_file(self) -> int:
        return 7 if self is CastleSide.KINGSIDE else 0

    @property
    def king_to_file(self) -> int:
        return 6 if self is CastleSide.KINGSIDE else 2

    @property
    def rook_to_file(self) -> int:
        return 5 if self is CastleSide.KINGSIDE else 3

    @property
    def between_files(self) -> Tuple[int, ...]:
        """Files strictly between king and rook; all must be empty."""
        return (5, 6) if self is CastleSide.KINGSIDE else (1, 2, 3)

    @property
    def safe_files(self) -> Tuple[int, ...]:
        """Files the king crosses or lands on; none may be attacked."""
        return (5, 6) if self is CastleSide.KINGSIDE else (3, 2)


@dataclass(frozen=True)
class CastlingRights:
    """Four independent castling flags.

    Rights only ever go from True to False within a game.
    """

    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls(False, False, False, False)

    @classmethod
    def from_fen(cls, field: str) -> "CastlingRights":
        """Parse the FEN castling field (``"KQkq"`` subset or ``"-"``).

        Raises:
            ValueError: On unknown letters or an empty field.
        """
        if field == "-":
            return cls.none()
        if not field or any(ch not in "KQkq" for ch in field) or len(set(field)) != len(field):
            raise ValueError("invalid castling rights")
        return cls("K" in field, "Q" in field, "k" in field, "q" in field)

    def to_fen(self) -> str:
        out = ""
        if self.white_kingside:
            out += "K"
        if self.white_queenside:
            out += "Q"
        if self.black_kingside:
            out += "k"
        if self.black_queenside:
            out += "q"
        return out or "-"

    def has(self, color: Color, side: CastleSide) -> bool:
        return getattr(self, _field_name(color, side))

    def without(self, color: Color, side: Optional[CastleSide] = None) -> "CastlingRights":
        """Return rights with ``color``'s ``side`` cleared (both sides when omitted)."""
        sides = (side,) if side is not None else (CastleSide.KINGSIDE, CastleSide.QUEENSIDE)
        return replace(self, **{_field_name(color, s): False for s in sides})


def _field_name(color: Color, side: CastleSide) -> str:
    prefix = "white" if color is Color.WHITE else "black"
    suffix = "kingside" if side is CastleSide.KINGSIDE else "queenside"
    return f"{prefix}_{suffix}"


def king_home(color: Color) -> Square:
    return Square(KING_HOME_FILE, color.home_rank)


def rook_home(color: Color, side: CastleSide) -> Square:
    return Square(side.rook_file, color.home_rank)


def can_castle(board: Board, side: Color, rights: CastlingRights, castle_side: CastleSide) -> bool:
    """Return True if ``side`` may castle towards ``castle_side`` right now.

    Requires the right, king and rook on their home squares, empty squares
    between them, the king not in check, and no attacked square on the
    king's path (the b-file square on the queenside only needs to be empty).
    """
    if not rights.has(side, castle_side):
        return False
    rank = side.home_rank
    enemy = side.opponent

    king = board.piece_at(king_home(side))
    if king is None or king.color is not side or king.kind is not PieceKind.KING:
        return False
    rook = board.piece_at(rook_home(side, castle_side))
    if rook is None or rook.color is not side or rook.kind is not PieceKind.ROOK:
        return False
    if any(board.piece_at(Square(f, rank)) is not None for f in castle_side.between_files):
        return False
    # Cannot castle out of check
    if is_attacked(board, king_home(side), enemy):
        return False
    return not any(is_attacked(board, Square(f, rank), enemy) for f in castle_side.safe_files)


def castle_side_of(move: Move, board: Board) -> Optional[CastleSide]:
    """Return the castling direction if ``move`` is a castling king move on ``board``."""
    piece = board.piece_at(move.from_sq)
    if piece is None or piece.kind is not PieceKind.KING:
        return None
    if move.from_sq.rank != move.to_sq.rank or abs(move.to_sq.file - move.from_sq.file) != 2:
        return None
    return CastleSide.KINGSIDE if move.to_sq.file > move.from_sq.file else CastleSide.QUEENSIDE


def update_castling_rights(rights: CastlingRights, board: Board, move: Move) -> CastlingRights:
    """Return castling rights after ``move`` is played on ``board`` (pre-move board).

    Clears both rights on a king move, one right when a rook leaves its home
    corner, and the victim's right when a rook is captured on its home corner.
    """
    moving = board.piece_at(move.from_sq)
    captured = board.piece_at(move.to_sq)
    if moving is None:
        return rights

    if moving.kind is PieceKind.KING:
        rights = rights.without(moving.color)
    elif moving.kind is PieceKind.ROOK:
        for cs in CastleSide:
            if move.from_sq == rook_home(moving.color, cs):
                rights = rights.without(moving.color, cs)

    if captured is not None and captured.kind is PieceKind.ROOK:
        for cs in CastleSide:
            if move.to_sq == rook_home(captured.color, cs):
                rights = rights.without(captured.color, cs)
    return rights
