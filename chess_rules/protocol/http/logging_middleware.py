from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Any, Awaitable, Callable, Dict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")
_GAME_PATH = re.compile(r"^/api/games/([^/]+)")


def resolve_request_id(request: Request) -> str:
    """Reuse a well-formed incoming request ID, otherwise mint a new one."""
    incoming = request.headers.get(REQUEST_ID_HEADER, "")
    if _SAFE_REQUEST_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ID and write one access line per request.

    The line carries the game ID when the path addresses a game session, so a
    whole game can be followed through the logs. Server errors are logged at
    WARNING; failures that escape the app are logged with their traceback and
    re-raised for the error handlers.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id

        path = request.url.path
        fields: Dict[str, Any] = {"request_id": request_id, "method": request.method, "path": path}
        game = _GAME_PATH.match(path)
        if game:
            fields["game_id"] = game.group(1)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            fields["duration_ms"] = _elapsed_ms(start)
            logger.exception("%s %s failed", request.method, path, extra=fields)
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        fields["status_code"] = response.status_code
        fields["duration_ms"] = _elapsed_ms(start)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level, "%s %s -> %d", request.method, path, response.status_code, extra=fields
        )
        return response


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
