"""Logging setup for the command line entry point.

Log records go to stderr through rich; stdout is reserved for the stdio
transport.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def configure_logging(*, debug: bool = False) -> None:
    """Install a stderr :class:`RichHandler` on the root logger."""
    level = logging.DEBUG if debug else logging.INFO
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=debug,
        rich_tracebacks=True,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
