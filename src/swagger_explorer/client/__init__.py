"""HTTP client module for swagger_explorer.

Provides :class:`ExplorerClient`, a non-blocking client backed by
:class:`httpx.AsyncClient` for talking to a running explorer service.

Example::

    from swagger_explorer.client import ExplorerClient

    async with ExplorerClient("http://127.0.0.1:3000") as client:
        schemas = await client.explore(url, options={"schemas": True})
"""

from swagger_explorer.client.async_client import ExplorerClient

__all__ = ["ExplorerClient"]
