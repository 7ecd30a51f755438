"""Shared fixtures."""

from __future__ import annotations

import pytest

from ehq_mcp.config import ServerSettings
from ehq_mcp.protocol.dispatcher import Dispatcher
from ehq_mcp.server import build_dispatcher


@pytest.fixture
def dispatcher() -> Dispatcher:
    """A dispatcher with the built-in catalog and no upstream credentials."""
    return build_dispatcher(ServerSettings())
