"""Asynchronous HTTP client for a running explorer service.

:class:`ExplorerClient` wraps :class:`httpx.AsyncClient` and speaks the
explorer's JSON API: it injects the bearer token, serialises request
bodies, and maps error responses onto the
:class:`~swagger_explorer.exceptions.ExplorerError` hierarchy. The MCP
adapter in :mod:`swagger_explorer.mcp_server` is its main consumer.

Example::

    async with ExplorerClient("http://127.0.0.1:3000", auth_token="s3cret") as client:
        result = await client.explore(
            "https://petstore.swagger.io/", options={"paths": True}
        )
"""

from __future__ import annotations

from typing import Any, Optional, Union

import httpx

from swagger_explorer.auth.bearer import bearer_header
from swagger_explorer.config import normalize_base_url
from swagger_explorer.exceptions import AuthError, UpstreamError, ValidationError
from swagger_explorer.models import ExploreOptions

DEFAULT_TIMEOUT = 60.0


class ExplorerClient:
    """Async client for the ``/api/explore`` and ``/api/response-schemas`` routes.

    Must be used as an async context manager.

    Args:
        server_url: Scheme, host and port of the service,
            e.g. ``http://127.0.0.1:3000``.
        base_path: The service's ``BASE_URL`` prefix, if any.
        auth_token: Bearer token sent with every request when set.
        timeout: Per-request timeout in seconds. Discovery drives a real
            browser, so this should exceed the service's navigation timeout.
        transport: Optional custom transport (used by tests).
    """

    def __init__(
        self,
        server_url: str,
        base_path: str = "",
        auth_token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._server_url = server_url.rstrip("/")
        self._base_path = normalize_base_url(base_path)
        self._auth_token = auth_token
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> ExplorerClient:
        headers = {"Content-Type": "application/json"}
        if self._auth_token:
            headers.update(bearer_header(self._auth_token))
        self._client = httpx.AsyncClient(
            base_url=self._server_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def health(self) -> dict[str, Any]:
        """Return the service's health payload."""
        response = await self._send("GET", "/health")
        return response.json()

    async def explore(
        self,
        url: str,
        options: Union[ExploreOptions, dict[str, Any], None] = None,
        format: Optional[str] = None,
    ) -> Any:
        """List paths and/or schemas of the spec behind *url*.

        Args:
            url: The documentation page to explore.
            options: ``paths`` / ``schemas`` / ``methodFilter`` selection.
            format: ``"minimal"``, ``"detailed"``, or ``None`` for the bare
                result.

        Returns:
            The decoded JSON response.
        """
        payload: dict[str, Any] = {"url": url}
        if options is not None:
            if isinstance(options, dict):
                options = ExploreOptions.model_validate(options)
            payload["options"] = options.model_dump(by_alias=True, exclude_none=True)
        if format is not None:
            payload["format"] = format
        response = await self._send("POST", f"{self._base_path}/api/explore", payload)
        return response.json()

    async def response_schemas(
        self,
        url: str,
        path: str,
        method: str,
        format: Optional[str] = None,
    ) -> Any:
        """Describe the responses of one operation of the spec behind *url*.

        Returns:
            The decoded JSON response.
        """
        payload: dict[str, Any] = {"url": url, "path": path, "method": method}
        if format is not None:
            payload["format"] = format
        response = await self._send(
            "POST", f"{self._base_path}/api/response-schemas", payload
        )
        return response.json()

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _send(
        self, method: str, path: str, json_body: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        assert self._client is not None, "Client not initialised -- use as async context manager"
        try:
            response = await self._client.request(method, path, json=json_body)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Cannot reach explorer service: {exc}") from exc
        self._map_response_error(response)
        return response

    @staticmethod
    def _map_response_error(response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("error") or detail.get("message") or detail.get("detail") or ""
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""
        msg = str(msg) or f"HTTP {status}"

        if status == 400:
            raise ValidationError(msg)
        if status in (401, 403):
            raise AuthError(msg)
        raise UpstreamError(msg)
