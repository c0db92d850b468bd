"""Bearer token checks for incoming requests.

This module provides :class:`BearerTokenGate`, the server-side counterpart
of a bearer auth client: clients send ``Authorization: Bearer <token>`` and
the gate compares ``<token>`` with the configured secret. The comparison is
exact (no trimming, no case folding) and constant-time.

When no token is configured the gate is open and every request passes.
"""

from __future__ import annotations

import secrets
from typing import Optional

from swagger_explorer.exceptions import AuthError

BEARER_PREFIX = "Bearer "

MISSING_HEADER_MESSAGE = "Missing or invalid authorization header"
INVALID_TOKEN_MESSAGE = "Invalid token"


def bearer_header(token: str) -> dict[str, str]:
    """Return the ``Authorization`` header carrying *token*."""
    return {"Authorization": f"{BEARER_PREFIX}{token}"}


class BearerTokenGate:
    """Authorise requests by exact bearer token match.

    Args:
        token: The expected token, or ``None`` / ``""`` to disable the gate.

    Example::

        gate = BearerTokenGate("s3cret")
        gate.authorize("Bearer s3cret")   # passes
        gate.authorize("Bearer wrong")    # raises AuthError("Invalid token")
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token or None

    @property
    def enabled(self) -> bool:
        """Whether a token is configured."""
        return self._token is not None

    def authorize(self, authorization: Optional[str]) -> None:
        """Check an ``Authorization`` header value.

        Args:
            authorization: The raw header value, or ``None`` when absent.

        Raises:
            AuthError: With ``"Missing or invalid authorization header"`` when
                the header is absent or not a bearer credential, or
                ``"Invalid token"`` when the token does not match.
        """
        if self._token is None:
            return
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthError(MISSING_HEADER_MESSAGE)
        presented = authorization[len(BEARER_PREFIX):]
        if not secrets.compare_digest(presented.encode(), self._token.encode()):
            raise AuthError(INVALID_TOKEN_MESSAGE)
