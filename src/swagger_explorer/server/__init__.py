"""HTTP server -- FastAPI application, routes and service lifecycle.

Sub-modules:

* :mod:`~swagger_explorer.server.application` -- :func:`create_app`, the
  application factory with auth middleware and error handlers.
* :mod:`~swagger_explorer.server.routes` -- ``/health``, ``/api/explore``
  and ``/api/response-schemas``.
* :mod:`~swagger_explorer.server.runner` -- :class:`ExplorerService`, port
  selection and signal-driven shutdown.
"""

from swagger_explorer.server.application import create_app
from swagger_explorer.server.runner import ExplorerService, find_available_port, serve

__all__ = ["create_app", "ExplorerService", "find_available_port", "serve"]
