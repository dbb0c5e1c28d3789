from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Tuple

from .move import Square
from .piece import Color, Piece, PieceKind


BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


@dataclass(frozen=True)
class Board:
    """Immutable 8x8 occupancy grid.

    Notes:
    - ``cells`` holds 64 entries indexed by ``Square.index`` (a1=0 .. h8=63).
    - Every update returns a new Board; instances are safe to share.
    """

    cells: Tuple[Optional[Piece], ...]

    def __post_init__(self) -> None:
        if len(self.cells) != 64:
            raise ValueError("board must have 64 cells")

    @classmethod
    def empty(cls) -> "Board":
        return cls(cells=(None,) * 64)

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board with the standard chess starting setup."""
        cells: list[Optional[Piece]] = [None] * 64
        for f, kind in enumerate(BACK_RANK):
            cells[Square(f, 0).index] = Piece(Color.WHITE, kind)
            cells[Square(f, 1).index] = Piece(Color.WHITE, PieceKind.PAWN)
            cells[Square(f, 6).index] = Piece(Color.BLACK, PieceKind.PAWN)
            cells[Square(f, 7).index] = Piece(Color.BLACK, kind)
        return cls(cells=tuple(cells))

    @classmethod
    def from_pieces(cls, pieces: Mapping[Square, Piece]) -> "Board":
        """Create a board holding exactly ``pieces``."""
        cells: list[Optional[Piece]] = [None] * 64
        for sq, piece in pieces.items():
            cells[sq.index] = piece
        return cls(cells=tuple(cells))

    def piece_at(self, sq: Square) -> Optional[Piece]:
        return self.cells[sq.index]

    def relocate(self, from_sq: Square, to_sq: Square, piece: Optional[Piece] = None) -> "Board":
        """Return a new board with ``from_sq`` cleared and ``to_sq`` set.

        Args:
            from_sq (Square): Square to clear.
            to_sq (Square): Square to fill; any occupant is overwritten.
            piece (Optional[Piece]): Piece placed on ``to_sq``. Defaults to
                the piece found on ``from_sq``.
        """
        cells = list(self.cells)
        if piece is None:
            piece = cells[from_sq.index]
        cells[from_sq.index] = None
        cells[to_sq.index] = piece
        return Board(cells=tuple(cells))

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` pairs, a1 first, optionally for one color."""
        for idx, piece in enumerate(self.cells):
            if piece is None:
                continue
            if color is not None and piece.color is not color:
                continue
            yield Square.from_index(idx), piece

    def king_square(self, color: Color) -> Optional[Square]:
        for idx, piece in enumerate(self.cells):
            if piece is not None and piece.kind is PieceKind.KING and piece.color is color:
                return Square.from_index(idx)
        return None

    def __str__(self) -> str:
        rows = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                piece = self.cells[rank * 8 + file]
                row.append(piece.symbol if piece is not None else ".")
            rows.append(" ".join(row))
        return "\n".join(rows)
