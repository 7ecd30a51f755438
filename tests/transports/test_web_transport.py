"""Tests for the HTTP and WebSocket app."""

from __future__ import annotations

import json

from fastapi.testclient import TestClient

from ehq_mcp.protocol.dispatcher import Dispatcher
from ehq_mcp.transports.web import create_app

_ECHO = {
    "jsonrpc": "2.0",
    "id": 1,
    "method": "tools/call",
    "params": {"name": "echo", "arguments": {"message": "Test message"}},
}


class TestHttp:
    def test_health(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher))
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}

    def test_mcp_echo(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher))
        resp = client.post("/mcp", json=_ECHO)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/json"
        body = resp.json()
        assert body["id"] == 1
        assert body["result"]["content"][0]["text"] == "Echo: Test message"

    def test_parse_error_still_200(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher))
        resp = client.post("/mcp", content=b"{not json")
        assert resp.status_code == 200
        assert resp.json()["error"]["code"] == -32700

    def test_get_mcp_not_allowed(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher))
        assert client.get("/mcp").status_code == 405

    def test_http_disabled(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher, http=False))
        assert client.post("/mcp", json=_ECHO).status_code == 404
        assert client.get("/health").status_code == 404


class TestWebSocket:
    def test_exchanges_in_order(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher))
        with client.websocket_connect("/ws") as ws:
            ws.send_text(json.dumps(_ECHO))
            first = json.loads(ws.receive_text())
            ws.send_text('{"jsonrpc":"2.0","id":"two","method":"resources/read",'
                         '"params":{"uri":"hello://world"}}')
            second = json.loads(ws.receive_text())

        assert first["result"]["content"][0]["text"] == "Echo: Test message"
        assert second["id"] == "two"
        assert second["result"]["contents"][0]["uri"] == "hello://world"

    def test_binary_frame(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher))
        with client.websocket_connect("/ws") as ws:
            ws.send_bytes(b'{"jsonrpc":"2.0","id":5,"method":"tools/list"}')
            reply = json.loads(ws.receive_text())
        assert reply["id"] == 5

    def test_parse_error_keeps_connection(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher))
        with client.websocket_connect("/ws") as ws:
            ws.send_text("garbage")
            assert json.loads(ws.receive_text())["error"]["code"] == -32700
            ws.send_text('{"jsonrpc":"2.0","id":6,"method":"initialize"}')
            assert json.loads(ws.receive_text())["id"] == 6

    def test_independent_connections(self, dispatcher: Dispatcher) -> None:
        client = TestClient(create_app(dispatcher))
        with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
            a.send_text('{"jsonrpc":"2.0","id":"a","method":"tools/list"}')
            b.send_text('{"jsonrpc":"2.0","id":"b","method":"tools/list"}')
            assert json.loads(b.receive_text())["id"] == "b"
            assert json.loads(a.receive_text())["id"] == "a"
