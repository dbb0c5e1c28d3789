from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .piece import PROMOTION_KINDS, PieceKind


FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True)
class Square:
    """A board square.

    Attributes:
        file (int): File index, 0 (a) .. 7 (h).
        rank (int): Rank index, 0 (rank 1) .. 7 (rank 8).
    """

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not (0 <= self.file < 8 and 0 <= self.rank < 8):
            raise ValueError(f"square out of range: file={self.file} rank={self.rank}")

    @classmethod
    def parse(cls, name: str) -> "Square":
        return str_to_square(name)

    @classmethod
    def from_index(cls, idx: int) -> "Square":
        if idx < 0 or idx > 63:
            raise ValueError(f"invalid square index: {idx}")
        return cls(idx % 8, idx // 8)

    @property
    def index(self) -> int:
        """Zero-based index, rank-major from White's side (a1=0 .. h8=63)."""
        return self.rank * 8 + self.file

    @property
    def name(self) -> str:
        return square_to_str(self)

    def offset(self, df: int, dr: int) -> Optional["Square"]:
        """Return the square ``df`` files and ``dr`` ranks away, or ``None`` off the board."""
        f = self.file + df
        r = self.rank + dr
        if 0 <= f < 8 and 0 <= r < 8:
            return Square(f, r)
        return None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Move:
    """A move request.

    A move is a plain value: it is legal only when it belongs to the legal
    move list of the position it is played in.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        promotion (Optional[PieceKind]): Promotion kind for a pawn reaching
            the last rank, one of knight, bishop, rook or queen.
    """

    from_sq: Square
    to_sq: Square
    promotion: Optional[PieceKind] = None

    def __post_init__(self) -> None:
        if self.promotion is not None and self.promotion not in PROMOTION_KINDS:
            raise ValueError(f"invalid promotion piece: {self.promotion.value!r}")

    def to_uci(self) -> str:
        """Serialize the move into long algebraic UCI form.

        Returns:
            str: Move encoded like ``"e2e4"`` or ``"e7e8q"``.
        """
        promo = self.promotion.value if self.promotion is not None else ""
        return self.from_sq.name + self.to_sq.name + promo

    def __str__(self) -> str:
        return self.to_uci()


def parse_uci(uci: str) -> Move:
    """Parse a UCI move string.

    Args:
        uci (str): Move encoded in long algebraic notation (e.g. ``"e2e4"``).

    Returns:
        Move: Parsed move.

    Raises:
        ValueError: If the string has an invalid length, squares, or promotion
            piece.
    """
    if not isinstance(uci, str) or len(uci) not in (4, 5):
        raise ValueError(f"invalid UCI move length: {uci!r}")
    from_sq = str_to_square(uci[0:2])
    to_sq = str_to_square(uci[2:4])
    promo: Optional[PieceKind] = None
    if len(uci) == 5:
        try:
            promo = PieceKind(uci[4].lower())
        except ValueError:
            raise ValueError(f"invalid promotion piece: {uci[4]!r}") from None
        if promo not in PROMOTION_KINDS:
            raise ValueError(f"invalid promotion piece: {uci[4]!r}")
    return Move(from_sq, to_sq, promo)


def decode_uci(uci: str) -> Optional[Move]:
    """Parse a UCI move string coming from an external engine.

    Returns ``None`` instead of raising, so a caller can treat a malformed
    reply (including ``"(none)"``) as "no usable move".
    """
    try:
        return parse_uci(uci)
    except ValueError:
        return None


def str_to_square(s: str) -> Square:
    """Convert algebraic notation into a square.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Square: The named square.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if not isinstance(s, str) or len(s) != 2 or s[0] not in FILES or s[1] not in RANKS:
        raise ValueError(f"invalid square: {s!r}")
    return Square(FILES.index(s[0]), RANKS.index(s[1]))


def square_to_str(sq: Square) -> str:
    return FILES[sq.file] + RANKS[sq.rank]
