"""Stdio transport: newline-delimited JSON envelopes on stdin/stdout.

One envelope per line in, one envelope per line out.  Logging never goes
to stdout; it belongs to the protocol.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
import sys
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, BinaryIO

if TYPE_CHECKING:
    from ehq_mcp.protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

_LINE_LIMIT = 16 * 1024 * 1024

Writer = asyncio.StreamWriter | BinaryIO
"""Where replies go: a stream writer is drained, a binary file is written off-loop."""


class StdioTransport:
    """Serves a :class:`Dispatcher` over a line-oriented byte stream.

    Reads block until a full line is available.  End of stream ends the
    loop.  Setting the stop event ends the loop between exchanges; a
    request already read is always answered first.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        reader: asyncio.StreamReader | None = None,
        writer: Writer | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._reader = reader
        self._writer = writer
        self._owns_writer = False
        self._readline: Callable[[], Awaitable[bytes]] | None = None

    async def connect(self) -> None:
        """Attach to the process's stdin/stdout unless streams were injected."""
        loop = asyncio.get_running_loop()
        if self._writer is None:
            self._writer = await _open_stdout(loop)
            self._owns_writer = isinstance(self._writer, asyncio.StreamWriter)
        if self._reader is not None:
            self._readline = self._reader.readline
            return

        reader = asyncio.StreamReader(limit=_LINE_LIMIT)
        try:
            await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
        except ValueError:
            # stdin redirected from a regular file: pipe transports refuse those.
            stdin = sys.stdin.buffer
            self._readline = lambda: asyncio.to_thread(stdin.readline)
            return
        self._reader = reader
        self._readline = reader.readline

    async def read_message(self) -> bytes | None:
        """Return the next line without its terminator, or ``None`` at end of stream."""
        if self._readline is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        line = await self._readline()
        if not line:
            return None
        message = line.rstrip(b"\r\n")
        logger.debug("Received: %s", message.decode(errors="replace"))
        return message

    async def write_message(self, data: bytes) -> None:
        """Write *data* as one line, waiting until it has left the process."""
        writer = self._writer
        if writer is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        line = data + b"\n"
        if isinstance(writer, asyncio.StreamWriter):
            writer.write(line)
            await writer.drain()
        else:
            await asyncio.to_thread(_write_blocking, writer, line)
        logger.debug("Sent: %s", data.decode(errors="replace"))

    async def serve(self, stop: asyncio.Event | None = None) -> None:
        """Answer requests until end of stream, a read/write fault, or *stop* is set."""
        if self._readline is None or self._writer is None:
            await self.connect()
        stop = stop if stop is not None else asyncio.Event()
        stopped = asyncio.ensure_future(stop.wait())
        logger.info("Listening on stdio")
        try:
            while True:
                read = asyncio.ensure_future(self.read_message())
                done, _ = await asyncio.wait({read, stopped}, return_when=asyncio.FIRST_COMPLETED)
                if read not in done:
                    read.cancel()
                    break

                try:
                    data = read.result()
                except (ValueError, OSError) as exc:
                    logger.error("Error reading message: %s", exc)
                    break
                if data is None:
                    logger.info("Client disconnected")
                    break
                if not data.strip():
                    continue

                response = await self._dispatcher.handle(data)
                try:
                    await self.write_message(response)
                except OSError as exc:
                    logger.error("Error writing response: %s", exc)
                    break
        finally:
            stopped.cancel()
            self.close()
        logger.info("Stdio transport stopped")

    def close(self) -> None:
        """Release the stdout pipe opened by :meth:`connect`; injected writers stay open."""
        if self._owns_writer and isinstance(self._writer, asyncio.StreamWriter):
            self._writer.close()
            self._writer = None
        self._owns_writer = False


async def _open_stdout(loop: asyncio.AbstractEventLoop) -> Writer:
    """Non-blocking writer when stdout is a pipe or socket, the raw buffer otherwise."""
    fd = sys.stdout.fileno()
    mode = os.fstat(fd).st_mode
    if not (stat.S_ISFIFO(mode) or stat.S_ISSOCK(mode)):
        # A terminal usually shares its file description with stderr; keep it blocking.
        return sys.stdout.buffer
    # A duplicate fd so closing the transport leaves sys.stdout usable.
    pipe = os.fdopen(os.dup(fd), "wb", buffering=0)
    transport, protocol = await loop.connect_write_pipe(asyncio.streams.FlowControlMixin, pipe)
    return asyncio.StreamWriter(transport, protocol, None, loop)


def _write_blocking(writer: BinaryIO, line: bytes) -> None:
    writer.write(line)
    writer.flush()
