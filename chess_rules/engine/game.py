from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .fen import from_fen, to_fen
from .move import Move
from .result import GameResult, game_result
from .rules import apply, in_check, legal_moves
from .state import GameState


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Game wrapper around a sequence of immutable states.

    Responsibility: track the current state, expose legal moves, apply moves,
    undo them. Every visited state is kept, so undo just drops the last one.
    """

    states: List[GameState] = field(default_factory=lambda: [GameState.initial()])
    move_stack: List[Move] = field(default_factory=list)

    @classmethod
    def new(cls) -> "Game":
        return cls()

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(states=[from_fen(fen)])

    @property
    def state(self) -> GameState:
        return self.states[-1]

    def to_fen(self) -> str:
        return to_fen(self.state)

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.state)

    def apply_move(self, move: Move) -> GameResult:
        """Play ``move`` and return the result of the new position.

        Raises:
            IllegalMoveError: If ``move`` is not legal in the current state.
        """
        new_state = apply(self.state, move)
        self.states.append(new_state)
        self.move_stack.append(move)
        logger.debug("move applied", extra={"move": move.to_uci(), "ply": new_state.ply})
        res = game_result(new_state)
        if res.is_over:
            logger.info(
                "game over",
                extra={
                    "result": res.kind.value,
                    "winner": res.winner.name.lower() if res.winner else None,
                    "ply": new_state.ply,
                },
            )
        return res

    def undo_move(self) -> Move:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        self.states.pop()
        last = self.move_stack.pop()
        logger.debug("move undone", extra={"move": last.to_uci()})
        return last

    def result(self) -> GameResult:
        return game_result(self.state)

    def in_check(self) -> bool:
        return in_check(self.state)

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]
