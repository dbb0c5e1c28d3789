from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .piece import Color
from .rules import has_legal_moves, in_check
from .state import GameState


class ResultKind(Enum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass(frozen=True)
class GameResult:
    """Outcome of a position; ``winner`` is set only for checkmate."""

    kind: ResultKind
    winner: Optional[Color] = None

    @classmethod
    def ongoing(cls) -> "GameResult":
        return cls(ResultKind.ONGOING)

    @classmethod
    def checkmate(cls, winner: Color) -> "GameResult":
        return cls(ResultKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> "GameResult":
        return cls(ResultKind.STALEMATE)

    @property
    def is_over(self) -> bool:
        return self.kind is not ResultKind.ONGOING


def game_result(state: GameState) -> GameResult:
    """Classify ``state`` as ongoing, checkmate or stalemate."""
    if has_legal_moves(state):
        return GameResult.ongoing()
    if in_check(state):
        return GameResult.checkmate(state.side_to_move.opponent)
    return GameResult.stalemate()
