from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    illegal_move_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...engine.fen import from_fen
from ...engine.game import Game
from ...engine.move import parse_uci
from ...engine.perft import perft as perft_nodes
from ...engine.rules import IllegalMoveError


logger = logging.getLogger(__name__)

DEFAULT_MAX_PERFT_DEPTH = 4


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="UCI move string, e.g., e2e4 or e7e8q")


class PerftRequest(BaseModel):
    fen: str = Field(..., description="FEN string")
    depth: int = Field(default=1, ge=0)


class PerftResponse(BaseModel):
    nodes: int


class StateResponse(BaseModel):
    game_id: str
    fen: str
    side_to_move: str
    legal_moves: List[str]
    in_check: bool
    result: str
    winner: Optional[str]
    last_move: Optional[str]
    move_history: List[str]


def create_app(
    *, log_level: str = "INFO", max_perft_depth: int = DEFAULT_MAX_PERFT_DEPTH
) -> FastAPI:
    app = FastAPI(title="Chess Rules API", version="0.1.0")

    logging.basicConfig(level=log_level.upper())

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(IllegalMoveError, illegal_move_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    app.state.sessions = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game_id = store.create(Game.new())
        game = _require_game(store, game_id)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=StateResponse)
    async def get_state(game_id: str) -> StateResponse:
        return _state_response(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/position", response_model=StateResponse)
    async def set_position(game_id: str, req: SetPositionRequest) -> StateResponse:
        _require_game(store, game_id)
        try:
            game = Game.from_fen(req.fen)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid FEN: {e}")
        store.set(game_id, game)
        return _state_response(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=StateResponse)
    async def play_move(game_id: str, req: MoveRequest) -> StateResponse:
        game = _require_game(store, game_id)
        try:
            move = parse_uci(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if game.result().is_over:
            raise HTTPException(status_code=409, detail="game is over")
        # IllegalMoveError is rendered by its own handler
        game.apply_move(move)
        return _state_response(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=StateResponse)
    async def undo(game_id: str) -> StateResponse:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state_response(game_id, game)

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    @app.post("/api/perft", response_model=PerftResponse)
    async def perft(req: PerftRequest) -> PerftResponse:
        if req.depth > max_perft_depth:
            raise HTTPException(
                status_code=400, detail=f"depth must be <= {max_perft_depth}"
            )
        try:
            state = from_fen(req.fen)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid FEN: {e}")
        return PerftResponse(nodes=perft_nodes(state, req.depth))

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _state_response(game_id: str, game: Game) -> StateResponse:
    history = game.move_history_uci()
    res = game.result()
    return StateResponse(
        game_id=game_id,
        fen=game.to_fen(),
        side_to_move=game.state.side_to_move.name.lower(),
        legal_moves=[m.to_uci() for m in game.legal_moves()],
        in_check=game.in_check(),
        result=res.kind.value,
        winner=res.winner.name.lower() if res.winner is not None else None,
        last_move=history[-1] if history else None,
        move_history=history,
    )
