"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import ehq_mcp

    assert ehq_mcp.__version__ == "1.0.0"
    assert ehq_mcp.SERVER_NAME == "EHQ MCP Server"


def test_cli_entrypoint() -> None:
    from ehq_mcp.cli import main

    assert callable(main)


def test_package_imports() -> None:
    from ehq_mcp.protocol import Catalog, Dispatcher, Envelope, ServerState, decode, encode
    from ehq_mcp.transports import ServerRunner, StdioTransport, create_app
    from ehq_mcp.upstream import EHQClient

    assert Catalog is not None
    assert Dispatcher is not None
    assert Envelope is not None
    assert ServerState is not None
    assert decode is not None
    assert encode is not None
    assert ServerRunner is not None
    assert StdioTransport is not None
    assert create_app is not None
    assert EHQClient is not None


def test_build_dispatcher() -> None:
    from ehq_mcp.server import build_dispatcher

    dispatcher = build_dispatcher()
    assert dispatcher.state.catalog.tool_count == 4
    assert dispatcher.state.catalog.resource_count == 2
