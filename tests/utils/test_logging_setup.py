"""Tests for configure_logging."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler

from ehq_mcp.utils.logging import configure_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    names = ("httpx", "httpcore", "uvicorn.access")
    quiet = {name: logging.getLogger(name).level for name in names}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, lvl in quiet.items():
        logging.getLogger(name).setLevel(lvl)


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    def test_info_by_default(self) -> None:
        configure_logging()
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert any(isinstance(h, RichHandler) for h in root.handlers)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_debug(self) -> None:
        configure_logging(debug=True)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_handler_writes_to_stderr(self) -> None:
        configure_logging()
        handler = next(h for h in logging.getLogger().handlers if isinstance(h, RichHandler))
        assert handler.console.stderr
