"""Exception hierarchy for swagger_explorer.

All exceptions inherit from :class:`ExplorerError`, which carries two
mappings: an ``exit_code`` (a constant from
:mod:`swagger_explorer.exit_codes`) used by the CLI entry point, and a
``status_code`` used by the HTTP route boundary in
:mod:`swagger_explorer.server.application` to turn the error into a
``{"error": message}`` JSON response.

Subclass hierarchy::

    ExplorerError               (exit 1, HTTP 500)
    +-- ValidationError         (exit 2, HTTP 400)
    +-- AuthError               (exit 3, HTTP 401)
    +-- NotFoundError           (exit 4, HTTP 500)
    |   +-- DiscoveryError      (exit 4, HTTP 500)
    +-- UpstreamError           (exit 5, HTTP 500)
    |   +-- SpecParseError      (exit 7, HTTP 500)
    +-- BrowserLaunchError      (exit 6)
    +-- PortUnavailableError    (exit 8)
    +-- ConfigError             (exit 2)
"""

from swagger_explorer.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_BROWSER_LAUNCH_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_PORT_UNAVAILABLE,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_UPSTREAM_ERROR,
)

SPEC_NOT_FOUND_MESSAGE = "Could not find Swagger/OpenAPI specification"


class ExplorerError(Exception):
    """Base exception for all swagger_explorer errors.

    Every subclass sets a class-level ``exit_code`` and ``status_code``.
    The CLI entry point calls ``sys.exit(exc.exit_code)``; the HTTP
    exception handler responds with ``exc.status_code``.

    Args:
        message: Human-readable error description, returned verbatim in the
            ``error`` field of HTTP responses.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE
    status_code: int = 500

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class ValidationError(ExplorerError):
    """Raised when a request body is missing required fields or is malformed."""

    exit_code = EXIT_INVALID_USAGE
    status_code = 400


class AuthError(ExplorerError):
    """Raised when the bearer token is missing, malformed, or does not match."""

    exit_code = EXIT_AUTH_FAILURE
    status_code = 401


class NotFoundError(ExplorerError):
    """Raised when a requested resource cannot be located."""

    exit_code = EXIT_NOT_FOUND


class DiscoveryError(NotFoundError):
    """Raised when neither the network nor the page state yields a specification."""

    def __init__(self, message: str = SPEC_NOT_FOUND_MESSAGE, exit_code: int | None = None):
        super().__init__(message, exit_code)


class UpstreamError(ExplorerError):
    """Raised on failures while navigating the target page or calling a running service."""

    exit_code = EXIT_UPSTREAM_ERROR


class SpecParseError(UpstreamError):
    """Raised when a captured body cannot be parsed as JSON or YAML."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class BrowserLaunchError(ExplorerError):
    """Raised when the headless browser engine fails to start."""

    exit_code = EXIT_BROWSER_LAUNCH_FAILURE


class PortUnavailableError(ExplorerError):
    """Raised when no listening port can be bound within the retry budget."""

    exit_code = EXIT_PORT_UNAVAILABLE


class ConfigError(ExplorerError):
    """Raised for invalid configuration values (bad ``PORT``, negative timeouts)."""

    exit_code = EXIT_INVALID_USAGE
