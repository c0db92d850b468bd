"""Operator-facing status lines and logging setup, all on stderr.

The explorer's stdout belongs to the MCP stdio transport, so every line
meant for a human (the bound port, the base URL, whether auth is on,
shutdown notices, fatal errors) is written to stderr. Colour follows
`clig.dev <https://clig.dev/>`_: it is dropped when ``NO_COLOR`` is set,
when ``TERM=dumb``, or when ``--no-color`` is passed.

Three layers are exposed:

1. :class:`OutputManager` -- stderr console plus quiet/verbose flags, built
   in :func:`~swagger_explorer.app.main_callback` and installed with
   :func:`set_output`.
2. Module-level shortcuts (:func:`info`, :func:`error`, ...) that go
   through the installed manager.
3. :func:`configure_logging` -- points the root :mod:`logging` logger at the
   same console through a :class:`rich.logging.RichHandler`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


class OutputManager:
    """Writes status lines to stderr.

    ``info`` and ``success`` lines are dropped in quiet mode; warnings and
    errors never are. ``debug`` lines need verbose mode.

    Args:
        no_color: Force plain output even on a colour terminal.
        quiet: Only keep warnings and errors.
        verbose: Also show debug lines.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._console = Console(file=sys.stderr, stderr=True, no_color=self._no_color)

    @property
    def console(self) -> Console:
        """Console shared by these status lines and the log handler."""
        return self._console

    @property
    def no_color(self) -> bool:
        return self._no_color

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, style="green")

    def warning(self, message: str) -> None:
        self._emit(message, label="Warning:", style="yellow")

    def error(self, message: str) -> None:
        self._emit(message, label="Error:", style="bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit(f"[debug] {message}", style="dim")

    def _emit(self, message: str, label: str = "", style: str = "") -> None:
        """Write one line, styled with Rich unless colour is disabled.

        Plain mode bypasses Rich entirely, so messages containing square
        brackets are never read as markup.
        """
        if self._no_color:
            line = f"{label} {message}" if label else message
            print(line, file=sys.stderr, flush=True)
            return
        if label:
            self._console.print(f"[{style}]{label}[/{style}] {message}", markup=True)
        elif style:
            self._console.print(message, style=style, markup=False)
        else:
            self._console.print(message, markup=False)


def _should_disable_color() -> bool:
    """``True`` when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Installed manager
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, installing a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; tests call this between cases."""
    global _output
    _output = None


def configure_logging(output: Optional[OutputManager] = None) -> None:
    """Route the root logger through *output*'s console.

    The level is ``DEBUG`` when verbose, ``ERROR`` when quiet and ``INFO``
    otherwise. Any handlers already on the root logger are removed, so
    calling this twice does not print every record twice.
    """
    output = output or get_output()
    if output.is_verbose:
        level = logging.DEBUG
    elif output.is_quiet:
        level = logging.ERROR
    else:
        level = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(
        RichHandler(
            console=output.console,
            markup=False,
            show_path=output.is_verbose,
            rich_tracebacks=output.is_verbose,
        )
    )
    root.setLevel(level)


# ------------------------------------------------------------------ #
# Shortcuts through the installed manager
# ------------------------------------------------------------------ #


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)
