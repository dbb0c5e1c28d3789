from __future__ import annotations

from dataclasses import dataclass, field

from .board import Board
from .castling import CastlingRights
from .piece import Color


@dataclass(frozen=True)
class GameState:
    """Position plus the bookkeeping needed to continue a game.

    Attributes:
        board (Board): Piece placement.
        side_to_move (Color): Color whose turn it is.
        castling (CastlingRights): Remaining castling rights.
        ply (int): Half-moves played since the start of the game.

    Instances are immutable; transitions in ``rules`` return new ones, so a
    caller may keep earlier states around for history or undo.
    """

    board: Board = field(default_factory=Board.startpos)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = field(default_factory=CastlingRights)
    ply: int = 0

    @classmethod
    def initial(cls) -> "GameState":
        """Standard starting position, all rights set, White to move."""
        return cls()

    @property
    def fullmove_number(self) -> int:
        return self.ply // 2 + 1


def initial_state() -> GameState:
    return GameState.initial()
