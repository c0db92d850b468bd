"""HTTP routes of the explorer API.

Two routers are exposed:

* :data:`health_router` -- ``GET /health``, always mounted at the root.
* :data:`api_router` -- ``POST /api/explore`` and
  ``POST /api/response-schemas``, mounted under the configured base URL.

Each API request borrows one page from the
:class:`~swagger_explorer.browser.engine.BrowserEngine` stored on
``app.state.engine``, runs discovery and the requested projection, and
gives the page back before the response is shaped by
:func:`~swagger_explorer.formatting.format_response`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Request

from swagger_explorer.browser.discovery import discover
from swagger_explorer.browser.engine import BrowserEngine
from swagger_explorer.exceptions import ExplorerError, UpstreamError, ValidationError
from swagger_explorer.formatting import format_response
from swagger_explorer.models import ExplorerConfig, ExploreRequest, ResponseSchemaRequest
from swagger_explorer.parser.projection import extract_responses, project

logger = logging.getLogger(__name__)

health_router = APIRouter()
api_router = APIRouter(prefix="/api")


@health_router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe; never requires authentication."""
    return {"status": "healthy"}


@api_router.post("/explore")
async def explore(request: Request, body: Optional[ExploreRequest] = None) -> Any:
    """Discover the spec behind ``body.url`` and list its paths and/or schemas."""
    if body is None or not body.url:
        raise ValidationError("URL is required")

    engine, config = _resources(request)
    try:
        async with engine.page() as page:
            document = await discover(body.url, page, timeout=config.discovery_timeout)
            result = project(document, body.options)
    except ExplorerError:
        raise
    except Exception as exc:
        logger.exception("Error exploring Swagger at %s", body.url)
        raise UpstreamError(str(exc)) from exc

    return format_response(result, body.format)


@api_router.post("/response-schemas")
async def response_schemas(
    request: Request, body: Optional[ResponseSchemaRequest] = None
) -> Any:
    """Discover the spec behind ``body.url`` and describe one operation's responses."""
    if body is None or not body.url or not body.path or not body.method:
        raise ValidationError("URL, path, and method are required")

    engine, config = _resources(request)
    try:
        async with engine.page() as page:
            document = await discover(body.url, page, timeout=config.discovery_timeout)
            responses = extract_responses(document, body.path, body.method)
    except ExplorerError:
        raise
    except Exception as exc:
        logger.exception("Error getting response schemas from %s", body.url)
        raise UpstreamError(str(exc)) from exc

    return format_response(responses, body.format)


def _resources(request: Request) -> tuple[BrowserEngine, ExplorerConfig]:
    """Return the engine and config injected by :func:`create_app`."""
    return request.app.state.engine, request.app.state.config
