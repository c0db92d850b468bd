"""ASGI middleware enforcing :class:`~swagger_explorer.auth.bearer.BearerTokenGate`."""

from __future__ import annotations

import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from swagger_explorer.auth.bearer import BearerTokenGate
from swagger_explorer.exceptions import AuthError

logger = logging.getLogger(__name__)

HEALTH_PATH = "/health"


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Reject unauthenticated requests with ``401 {"error": ...}``.

    Exempt paths (by default only the health check) always pass, as does
    every request when the gate has no token configured.
    """

    def __init__(
        self,
        app: ASGIApp,
        gate: BearerTokenGate,
        exempt_paths: Iterable[str] = (HEALTH_PATH,),
    ) -> None:
        super().__init__(app)
        self._gate = gate
        self._exempt = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path not in self._exempt:
            try:
                self._gate.authorize(request.headers.get("authorization"))
            except AuthError as exc:
                logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
                return JSONResponse({"error": exc.message}, status_code=exc.status_code)
        return await call_next(request)
