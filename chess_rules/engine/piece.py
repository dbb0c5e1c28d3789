from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """Side of the board, valued by its FEN letter."""

    WHITE = "w"
    BLACK = "b"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def home_rank(self) -> int:
        """Rank index of the back rank (0 for White, 7 for Black)."""
        return 0 if self is Color.WHITE else 7

    @property
    def pawn_direction(self) -> int:
        return 1 if self is Color.WHITE else -1


class PieceKind(Enum):
    """Piece type, valued by its lowercase letter."""

    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


# Kinds a pawn may promote to, in the order they are generated.
PROMOTION_KINDS = (PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT)


@dataclass(frozen=True)
class Piece:
    color: Color
    kind: PieceKind

    @property
    def symbol(self) -> str:
        """FEN letter: uppercase for White, lowercase for Black."""
        letter = self.kind.value
        return letter.upper() if self.color is Color.WHITE else letter

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        """Build a piece from its FEN letter.

        Raises:
            ValueError: If ``ch`` is not one of ``PNBRQKpnbrqk``.
        """
        if len(ch) != 1:
            raise ValueError(f"invalid piece symbol: {ch!r}")
        try:
            kind = PieceKind(ch.lower())
        except ValueError:
            raise ValueError(f"invalid piece symbol: {ch!r}") from None
        color = Color.WHITE if ch.isupper() else Color.BLACK
        return cls(color, kind)

    def __str__(self) -> str:
        return self.symbol
