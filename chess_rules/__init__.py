"""Chess rules engine.

- engine: board model, legal move generation, move application, outcomes
- protocol.http: FastAPI game-session service around the engine
"""

from .engine.board import Board
from .engine.castling import CastleSide, CastlingRights, can_castle
from .engine.fen import STARTPOS_FEN, from_fen, to_fen
from .engine.game import Game
from .engine.move import Move, Square, decode_uci, parse_uci
from .engine.notation import format_move
from .engine.perft import perft, perft_divide
from .engine.piece import PROMOTION_KINDS, Color, Piece, PieceKind
from .engine.result import GameResult, ResultKind, game_result
from .engine.rules import IllegalMoveError, apply, in_check, legal_moves, make_move
from .engine.state import GameState, initial_state
from .engine.attacks import is_attacked

__all__ = [
    "Board", "CastleSide", "CastlingRights", "can_castle",
    "STARTPOS_FEN", "from_fen", "to_fen",
    "Game",
    "Move", "Square", "decode_uci", "parse_uci",
    "format_move",
    "perft", "perft_divide",
    "PROMOTION_KINDS", "Color", "Piece", "PieceKind",
    "GameResult", "ResultKind", "game_result",
    "IllegalMoveError", "apply", "in_check", "legal_moves", "make_move",
    "GameState", "initial_state",
    "is_attacked",
]
