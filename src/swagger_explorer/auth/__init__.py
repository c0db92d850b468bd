"""Bearer-token authentication for the explorer HTTP API.

The main entry points are:

- :class:`BearerTokenGate` -- checks an ``Authorization`` header against the
  configured token and raises :class:`~swagger_explorer.exceptions.AuthError`
  on mismatch.
- :class:`BearerAuthMiddleware` -- ASGI middleware applying the gate to every
  request except the health check.

Typical usage::

    from swagger_explorer.auth import BearerAuthMiddleware, BearerTokenGate

    app.add_middleware(BearerAuthMiddleware, gate=BearerTokenGate("s3cret"))
"""

from swagger_explorer.auth.bearer import BEARER_PREFIX, BearerTokenGate, bearer_header
from swagger_explorer.auth.middleware import BearerAuthMiddleware

__all__ = ["BEARER_PREFIX", "BearerTokenGate", "BearerAuthMiddleware", "bearer_header"]
