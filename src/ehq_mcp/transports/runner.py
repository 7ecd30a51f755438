"""ServerRunner: starts the configured transports and shuts them down together.

Shutdown is cooperative.  SIGINT/SIGTERM (or :meth:`ServerRunner.stop`)
stops every transport from taking new work and waits for exchanges in
flight to finish.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from collections.abc import Iterator
from typing import TYPE_CHECKING

import uvicorn

from ehq_mcp.transports.stdio import StdioTransport
from ehq_mcp.transports.web import create_app

if TYPE_CHECKING:
    from fastapi import FastAPI

    from ehq_mcp.config import TransportSettings
    from ehq_mcp.protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

_SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class _ManagedServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to :class:`ServerRunner`."""

    def install_signal_handlers(self) -> None:  # uvicorn < 0.29
        pass

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class ServerRunner:
    """Runs stdio, HTTP and WebSocket transports for one dispatcher.

    HTTP and WebSocket configured on the same port share one app.  When
    stdio is the only transport, end of stdin ends the run.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        settings: TransportSettings,
        *,
        log_level: str = "info",
    ) -> None:
        self._dispatcher = dispatcher
        self._settings = settings
        self._log_level = log_level
        self._stop: asyncio.Event | None = None

    @property
    def serves_stdio(self) -> bool:
        return self._settings.stdio or not self._settings.network_enabled

    def build_apps(self) -> dict[int, FastAPI]:
        """Return one ASGI app per configured port."""
        routes: dict[int, set[str]] = {}
        if self._settings.http_port is not None:
            routes.setdefault(self._settings.http_port, set()).add("http")
        if self._settings.ws_port is not None:
            routes.setdefault(self._settings.ws_port, set()).add("websocket")
        return {
            port: create_app(
                self._dispatcher,
                http="http" in kinds,
                websocket="websocket" in kinds,
            )
            for port, kinds in routes.items()
        }

    def stop(self) -> None:
        """Request a cooperative shutdown."""
        if self._stop is not None and not self._stop.is_set():
            logger.info("Shutting down gracefully...")
            self._stop.set()

    async def run(self) -> None:
        """Serve until stopped, or until stdin closes when stdio is the sole transport."""
        self._stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        self._install_signal_handlers(loop)

        servers: list[_ManagedServer] = []
        for port, app in self.build_apps().items():
            config = uvicorn.Config(
                app,
                host=self._settings.host,
                port=port,
                log_config=None,
                log_level=self._log_level,
            )
            servers.append(_ManagedServer(config))
            logger.info("Network transport on %s:%d", self._settings.host, port)

        server_tasks = [asyncio.create_task(server.serve()) for server in servers]
        stdio_task: asyncio.Task[None] | None = None
        if self.serves_stdio:
            stdio_task = asyncio.create_task(StdioTransport(self._dispatcher).serve(self._stop))

        stopped = asyncio.create_task(self._stop.wait())
        watched: set[asyncio.Future[object]] = {stopped, *server_tasks}
        if stdio_task is not None and not server_tasks:
            watched.add(stdio_task)

        try:
            await asyncio.wait(watched, return_when=asyncio.FIRST_COMPLETED)
        finally:
            self._stop.set()
            for server in servers:
                server.should_exit = True
            pending = [task for task in (*server_tasks, stdio_task) if task is not None]
            results = await asyncio.gather(*pending, return_exceptions=True)
            stopped.cancel()
            self._remove_signal_handlers(loop)

        for result in results:
            if isinstance(result, Exception):
                logger.error("Transport exited with error: %s", result)

    def _install_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        for sig in _SHUTDOWN_SIGNALS:
            try:
                loop.add_signal_handler(sig, self.stop)
            except (NotImplementedError, RuntimeError):
                logger.debug("Signal handlers unavailable for %s", sig.name)

    def _remove_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        for sig in _SHUTDOWN_SIGNALS:
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.remove_signal_handler(sig)
