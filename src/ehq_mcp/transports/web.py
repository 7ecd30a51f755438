"""HTTP and WebSocket transports, served by a FastAPI application.

``POST /mcp`` answers one envelope per request body.  ``GET /ws`` upgrades
to a WebSocket that carries one envelope per frame in each direction.
``GET /health`` is a static liveness check.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, Response, WebSocket, WebSocketDisconnect

if TYPE_CHECKING:
    from ehq_mcp.protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
MCP_PATH = "/mcp"
HEALTH_PATH = "/health"
WEBSOCKET_PATH = "/ws"


def create_app(
    dispatcher: Dispatcher,
    *,
    http: bool = True,
    websocket: bool = True,
) -> FastAPI:
    """Build the ASGI app exposing *dispatcher* over the selected transports."""
    state = dispatcher.state
    app = FastAPI(
        title=state.name,
        version=state.version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    if http:
        _add_http_routes(app, dispatcher)
    if websocket:
        _add_websocket_route(app, dispatcher)
    return app


def _add_http_routes(app: FastAPI, dispatcher: Dispatcher) -> None:
    @app.post(MCP_PATH)
    async def mcp_endpoint(request: Request) -> Response:
        """Handle one envelope.  Protocol errors still answer 200."""
        body = await request.body()
        logger.debug("HTTP request: %s", body.decode(errors="replace"))
        reply = await dispatcher.handle(body)
        return Response(content=reply, media_type=JSON_CONTENT_TYPE)

    @app.get(HEALTH_PATH)
    async def health() -> dict[str, str]:
        return {"status": "healthy"}


def _add_websocket_route(app: FastAPI, dispatcher: Dispatcher) -> None:
    @app.websocket(WEBSOCKET_PATH)
    async def mcp_socket(websocket: WebSocket) -> None:
        """Serve one peer: read a frame, answer it, repeat until disconnect."""
        await websocket.accept()
        peer = (
            f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "unknown"
        )
        logger.info("WebSocket client connected: %s", peer)
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                data = message.get("text")
                if data is None:
                    data = message.get("bytes")
                if data is None:
                    continue

                logger.debug("WebSocket received from %s: %s", peer, data)
                reply = await dispatcher.handle(data)
                try:
                    await websocket.send_text(reply.decode())
                except (WebSocketDisconnect, RuntimeError, OSError) as exc:
                    logger.error("WebSocket write error for %s: %s", peer, exc)
                    break
        except WebSocketDisconnect as exc:
            logger.debug("WebSocket %s closed with code %s", peer, exc.code)
        finally:
            logger.info("WebSocket client disconnected: %s", peer)
