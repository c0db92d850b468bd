"""FastAPI application factory for the explorer HTTP API.

:func:`create_app` wires the routers, the bearer auth middleware and the
exception handlers that turn every failure into a ``{"error": message}``
JSON body: 400 for a :class:`ValidationError` or a malformed body, 401 for an
:class:`AuthError`, and 500 for every other :class:`ExplorerError`.

The browser engine is created by the caller and injected, so the
application never launches or closes it itself.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from swagger_explorer import __version__
from swagger_explorer.auth import BearerAuthMiddleware, BearerTokenGate
from swagger_explorer.browser.engine import BrowserEngine
from swagger_explorer.exceptions import ExplorerError
from swagger_explorer.models import ExplorerConfig
from swagger_explorer.server.routes import api_router, health_router

logger = logging.getLogger(__name__)


def create_app(config: ExplorerConfig, engine: BrowserEngine) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Effective configuration; ``base_url`` prefixes the API
            routes and ``auth_token`` enables the auth gate.
        engine: The running browser engine shared by all requests.

    Returns:
        The configured application.
    """
    app = FastAPI(
        title="Swagger Explorer",
        description="Discover and summarise Swagger/OpenAPI specs behind live web pages",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config
    app.state.engine = engine

    app.add_middleware(BearerAuthMiddleware, gate=BearerTokenGate(config.auth_token))

    app.include_router(health_router)
    app.include_router(api_router, prefix=config.base_url)

    app.add_exception_handler(ExplorerError, _explorer_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    return app


async def _explorer_error_handler(request: Request, exc: ExplorerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        message = err.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    detail = "; ".join(problems) or "malformed request"
    logger.info("%s %s rejected: %s", request.method, request.url.path, detail)
    return JSONResponse({"error": f"Invalid request body: {detail}"}, status_code=400)
