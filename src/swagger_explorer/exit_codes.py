"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific failure category and is referenced by the
corresponding :class:`~swagger_explorer.exceptions.ExplorerError` subclass.
Process supervisors can inspect the exit code to tell a bad configuration
from a browser that would not start without parsing stderr.

Example::

    $ swagger-explorer serve --port 80
    $ echo $?
    8   # EXIT_PORT_UNAVAILABLE -- no port could be bound
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""Authentication or authorisation failed."""

EXIT_NOT_FOUND = 4
"""No Swagger/OpenAPI specification could be located."""

EXIT_UPSTREAM_ERROR = 5
"""The target page or a running explorer service failed."""

EXIT_BROWSER_LAUNCH_FAILURE = 6
"""The headless browser engine could not be started."""

EXIT_SPEC_PARSE_ERROR = 7
"""A discovered specification body could not be parsed."""

EXIT_PORT_UNAVAILABLE = 8
"""No listening port could be bound within the retry budget."""
