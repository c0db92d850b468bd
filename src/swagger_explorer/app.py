"""Typer application factory and CLI entry point for swagger_explorer.

This module wires together the top-level Typer application and its two
sub-commands:

* ``serve`` -- launch the browser engine and the HTTP API.
* ``mcp`` -- run the MCP stdio adapter against a running service.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. :class:`~swagger_explorer.exceptions.ExplorerError`
instances escaping a command are printed and turned into the error's
``exit_code``.

See Also:
    :mod:`swagger_explorer.config`: Flag and environment resolution.
    :mod:`swagger_explorer.output`: Diagnostics initialised in :func:`main_callback`.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

import typer

from swagger_explorer import __version__
from swagger_explorer.exit_codes import EXIT_GENERIC_FAILURE, EXIT_SUCCESS

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="swagger-explorer",
    help="Discover and summarise Swagger/OpenAPI specs behind live web pages.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Eager ``--version`` handler."""
    if value:
        typer.echo(f"swagger-explorer {__version__}")
        raise typer.Exit(code=EXIT_SUCCESS)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Print status lines without colour."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print warnings and errors."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug log lines, including discovery steps."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~swagger_explorer.output.OutputManager` and
    routes :mod:`logging` through it.
    """
    from swagger_explorer.output import OutputManager, configure_logging, set_output

    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(output)


@app.command("serve")
def serve_command(
    host: Optional[str] = typer.Option(
        None, "--host", help="Interface to listen on. (env: EXPLORER_HOST)"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Listen port; auto-selected from 3000 when omitted. (env: PORT)"
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Prefix for the /api routes. (env: BASE_URL)"
    ),
    auth_token: Optional[str] = typer.Option(
        None, "--auth-token", help="Require this bearer token. (env: AUTH_TOKEN)"
    ),
    discovery_timeout: Optional[float] = typer.Option(
        None,
        "--discovery-timeout",
        help="Seconds to wait for a spec response after page load. (env: EXPLORER_DISCOVERY_TIMEOUT)",
    ),
    navigation_timeout: Optional[float] = typer.Option(
        None,
        "--navigation-timeout",
        help="Seconds allowed for page navigation. (env: EXPLORER_NAVIGATION_TIMEOUT)",
    ),
    headed: bool = typer.Option(
        False, "--headed", help="Show the browser window instead of running headless."
    ),
) -> None:
    """Start the explorer HTTP API."""
    from swagger_explorer.config import resolve_config
    from swagger_explorer.server.runner import serve

    config = resolve_config(
        cli_host=host,
        cli_port=port,
        cli_base_url=base_url,
        cli_auth_token=auth_token,
        cli_discovery_timeout=discovery_timeout,
        cli_navigation_timeout=navigation_timeout,
        cli_headless=False if headed else None,
    )
    asyncio.run(serve(config))


@app.command("mcp")
def mcp_command(
    server_url: str = typer.Option(
        "http://127.0.0.1:3000",
        "--server-url",
        envvar="EXPLORER_SERVER_URL",
        help="Scheme, host and port of the running explorer service.",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", envvar="BASE_URL", help="The service's route prefix."
    ),
    auth_token: Optional[str] = typer.Option(
        None, "--auth-token", envvar="AUTH_TOKEN", help="Bearer token for the service."
    ),
) -> None:
    """Expose a running explorer service as MCP tools over stdio."""
    from swagger_explorer.mcp_server import run_stdio

    run_stdio(server_url, base_path=base_url or "", auth_token=auth_token)


def main() -> None:
    """CLI entry point invoked by the ``swagger-explorer`` console script.

    Unhandled :class:`~swagger_explorer.exceptions.ExplorerError` instances
    cause a clean exit with the error's ``exit_code``. Any other exception
    is logged with its traceback and exits with :data:`EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: On every path, carrying the exit code.
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from swagger_explorer.exceptions import ExplorerError
        from swagger_explorer.output import error

        if isinstance(exc, ExplorerError):
            error(str(exc))
            sys.exit(exc.exit_code)
        logger.exception("Unexpected error")
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
