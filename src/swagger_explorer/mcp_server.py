"""MCP adapter exposing a running explorer service as tools.

The adapter does not drive a browser itself: each tool call is forwarded
over HTTP to the explorer service through
:class:`~swagger_explorer.client.ExplorerClient`, so one browser engine can
serve several MCP sessions.

Tools:

* ``explore`` -- list paths (optionally filtered by method) and/or schema
  names of the spec behind a documentation page.
* ``get_response_schemas`` -- describe the responses of one path + method.

Run with ``swagger-explorer mcp --server-url http://127.0.0.1:3000``; the
stdio transport is used, so nothing else may write to stdout.
"""

import json
from typing import Any, Callable, Optional

from mcp.server.fastmcp import FastMCP

from swagger_explorer.client import ExplorerClient
from swagger_explorer.exceptions import ExplorerError, UpstreamError

ClientFactory = Callable[[], ExplorerClient]


class ExplorerTools:
    """Tool implementations, bound to a factory producing fresh clients.

    Args:
        client_factory: Zero-argument callable returning an unopened
            :class:`ExplorerClient`.
    """

    def __init__(self, client_factory: ClientFactory) -> None:
        self._client_factory = client_factory

    async def explore(
        self,
        url: str,
        paths: bool = False,
        schemas: bool = False,
        method_filter: Optional[list[str]] = None,
        format: Optional[str] = None,
    ) -> str:
        """Explore a Swagger/OpenAPI specification.

        Args:
            url: Documentation page hosting the spec (e.g. a Swagger UI page).
            paths: Include the path/method inventory.
            schemas: Include the schema name inventory.
            method_filter: Only keep paths offering one of these methods.
            format: "minimal" or "detailed" envelope; omit for the bare result.
        """
        options: dict[str, Any] = {"paths": paths, "schemas": schemas}
        if method_filter:
            options["methodFilter"] = method_filter
        try:
            async with self._client_factory() as client:
                result = await client.explore(url, options=options, format=format)
        except ExplorerError as exc:
            raise UpstreamError(f"Explore failed: {exc.message}") from exc
        return json.dumps(result, indent=2, ensure_ascii=False)

    async def get_response_schemas(
        self,
        url: str,
        path: str,
        method: str,
        format: Optional[str] = None,
    ) -> str:
        """Get response schemas for a specific path and method.

        Args:
            url: Documentation page hosting the spec.
            path: Path key exactly as declared, e.g. "/pets/{petId}".
            method: Method key as declared, e.g. "get".
            format: "minimal" or "detailed" envelope; omit for the bare result.
        """
        try:
            async with self._client_factory() as client:
                result = await client.response_schemas(url, path, method, format=format)
        except ExplorerError as exc:
            raise UpstreamError(f"Get response schemas failed: {exc.message}") from exc
        return json.dumps(result, indent=2, ensure_ascii=False)


def build_mcp_server(client_factory: ClientFactory) -> FastMCP:
    """Create a FastMCP server with the ``explore`` and ``get_response_schemas`` tools."""
    tools = ExplorerTools(client_factory)
    server = FastMCP("swagger-explorer")
    server.tool(name="explore")(tools.explore)
    server.tool(name="get_response_schemas")(tools.get_response_schemas)
    return server


def run_stdio(
    server_url: str,
    base_path: str = "",
    auth_token: Optional[str] = None,
) -> None:
    """Serve the tools over stdio until the client disconnects."""

    def _factory() -> ExplorerClient:
        return ExplorerClient(server_url, base_path=base_path, auth_token=auth_token)

    build_mcp_server(_factory).run(transport="stdio")
