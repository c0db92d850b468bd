"""Service lifecycle: browser launch, port selection, serving and shutdown.

:class:`ExplorerService` owns every process-lifetime resource -- the
:class:`~swagger_explorer.browser.engine.BrowserEngine`, the listening
socket and the uvicorn server -- and is handed explicitly to
:func:`install_signal_handlers`, so shutdown never depends on module-level
state.

Port selection:

* With no configured port, ports are probed upward from
  ``port_range_start`` (3000) until one binds.
* When the configured port is taken, it is dropped and selection falls back
  to probing. Start attempts are bounded by ``max_port_retries``; running
  out raises :class:`~swagger_explorer.exceptions.PortUnavailableError`.

Shutdown order on SIGINT/SIGTERM: close the browser engine, then stop
uvicorn (which closes the listening socket), then return to the caller so
the process can exit.
"""

from __future__ import annotations

import asyncio
import errno
import signal
import socket
from contextlib import nullcontext
from typing import Optional

import uvicorn

from swagger_explorer.browser.engine import BrowserEngine
from swagger_explorer.exceptions import PortUnavailableError
from swagger_explorer.models import ExplorerConfig
from swagger_explorer.output import info, success
from swagger_explorer.server.application import create_app

MAX_PORT = 65535


def _socket_family(host: str) -> socket.AddressFamily:
    return socket.AF_INET6 if ":" in host else socket.AF_INET


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind a TCP socket to ``host:port``.

    Raises:
        OSError: If the address cannot be bound (``EADDRINUSE`` when taken).
    """
    sock = socket.socket(_socket_family(host), socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def is_port_available(host: str, port: int) -> bool:
    """Return ``True`` when ``host:port`` can currently be bound."""
    try:
        sock = bind_socket(host, port)
    except OSError as exc:
        if exc.errno == errno.EADDRINUSE:
            return False
        raise
    sock.close()
    return True


def find_available_port(host: str, start: int = 3000, end: int = MAX_PORT) -> int:
    """Probe ports ``start..end`` in order and return the first free one.

    Raises:
        PortUnavailableError: If every port in the range is taken.
    """
    for port in range(start, end + 1):
        if is_port_available(host, port):
            return port
    raise PortUnavailableError(f"No available ports found between {start} and {end}")


class _Server(uvicorn.Server):
    """uvicorn server whose signals are handled by :class:`ExplorerService`."""

    def install_signal_handlers(self) -> None:
        pass

    def capture_signals(self) -> nullcontext[None]:
        return nullcontext()


class ExplorerService:
    """Run the explorer HTTP API until asked to stop.

    Args:
        config: Effective configuration.
        engine: Browser engine to use; one is built from *config* when
            omitted.

    Example::

        service = ExplorerService(resolve_config())
        asyncio.run(service.run())
    """

    def __init__(self, config: ExplorerConfig, engine: Optional[BrowserEngine] = None) -> None:
        self.config = config
        self.engine = engine or BrowserEngine(
            headless=config.headless,
            navigation_timeout=config.navigation_timeout,
        )
        self.port: Optional[int] = None
        self._socket: Optional[socket.socket] = None
        self._server: Optional[_Server] = None
        self._shutdown_task: Optional[asyncio.Task[None]] = None
        self._stopping = False

    async def start(self) -> int:
        """Launch the browser, bind a port and prepare the HTTP server.

        Returns:
            The bound port.

        Raises:
            BrowserLaunchError: If Chromium cannot be started.
            PortUnavailableError: If no port can be bound.
        """
        await self.engine.start()
        try:
            self._socket, self.port = self._bind()
        except BaseException:
            await self.engine.close()
            raise

        app = create_app(self.config, self.engine)
        self._server = _Server(
            uvicorn.Config(
                app,
                host=self.config.host,
                port=self.port,
                log_config=None,
            )
        )
        self._announce()
        return self.port

    async def run(self) -> None:
        """Start, serve until shutdown, then release every resource."""
        await self.start()
        assert self._server is not None and self._socket is not None
        try:
            if not self._stopping:
                await self._server.serve(sockets=[self._socket])
        finally:
            await self.engine.close()
            self._socket.close()
            info("Swagger Explorer stopped")

    def request_shutdown(self, signum: Optional[int] = None) -> None:
        """Begin a graceful shutdown; repeated calls are ignored."""
        if self._shutdown_task is not None:
            return
        if signum is not None:
            info(
                f"Received {signal.Signals(signum).name}. Shutting down gracefully..."
            )
        self._shutdown_task = asyncio.ensure_future(self.shutdown())

    async def shutdown(self) -> None:
        """Close the browser engine, then stop accepting connections."""
        self._stopping = True
        await self.engine.close()
        if self._server is not None:
            self._server.should_exit = True

    def _bind(self) -> tuple[socket.socket, int]:
        """Bind the configured port, falling back to probing, within the retry budget."""
        host = self.config.host
        port = self.config.port
        attempts = max(1, self.config.max_port_retries)
        for _ in range(attempts):
            if port is None:
                port = find_available_port(host, self.config.port_range_start)
            try:
                return bind_socket(host, port), port
            except OSError as exc:
                if exc.errno != errno.EADDRINUSE:
                    raise PortUnavailableError(f"Cannot bind {host}:{port}: {exc}") from exc
                info(f"Port {port} in use, trying another port...")
                port = None
        raise PortUnavailableError(
            f"Could not bind a port on {host} after {attempts} attempts"
        )

    def _announce(self) -> None:
        success(f"Swagger Explorer running on port {self.port}")
        if self.config.base_url:
            info(f"Base URL: {self.config.base_url}")
        if self.config.auth_token:
            info("Authentication enabled")


def install_signal_handlers(
    service: ExplorerService, loop: Optional[asyncio.AbstractEventLoop] = None
) -> None:
    """Route SIGINT and SIGTERM to :meth:`ExplorerService.request_shutdown`."""
    loop = loop or asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, service.request_shutdown, signum)
        except NotImplementedError:
            # Windows event loops have no add_signal_handler.
            signal.signal(
                signum,
                lambda sig, frame: loop.call_soon_threadsafe(service.request_shutdown, sig),
            )


async def serve(config: ExplorerConfig) -> None:
    """Process entry point: build the service, wire signals, and run it."""
    service = ExplorerService(config)
    install_signal_handlers(service)
    await service.run()
