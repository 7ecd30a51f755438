"""Dispatcher: decodes an envelope, routes it to a method handler, encodes the reply.

Transport-agnostic.  Each exchange is independent of every other one; the
only shared input is the :class:`~ehq_mcp.protocol.state.ServerState`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from ehq_mcp.protocol.codec import DecodeFailure, decode, encode
from ehq_mcp.protocol.errors import (
    ErrorCode,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
    ResourceNotFoundError,
    ToolNotFoundError,
)
from ehq_mcp.protocol.models import (
    Envelope,
    InitializeResult,
    ResourceContents,
    ResourcesListResult,
    ResourcesReadParams,
    ResourcesReadResult,
    TextContent,
    ToolsCallParams,
    ToolsCallResult,
    ToolsListResult,
)
from ehq_mcp.utils.telemetry import (
    dispatch_span,
    record_error_code,
    record_tool_failure,
    resource_span,
    tool_span,
)

if TYPE_CHECKING:
    from ehq_mcp.protocol.state import ServerState

logger = logging.getLogger(__name__)

MethodHandler = Callable[[Envelope], Awaitable[Any]]
"""Receives the request envelope and returns the ``result`` payload."""

_P = TypeVar("_P", bound=BaseModel)


class Method(str, Enum):
    """Built-in protocol methods."""

    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    RESOURCES_LIST = "resources/list"
    RESOURCES_READ = "resources/read"


class Dispatcher:
    """Routes envelopes to method handlers and turns every outcome into a reply.

    The five built-in methods are bound at construction; further methods can
    be added with :meth:`register_method`.

    Usage::

        dispatcher = Dispatcher(state)
        reply = await dispatcher.handle(b'{"jsonrpc":"2.0","id":1,"method":"tools/list"}')
    """

    def __init__(self, state: ServerState) -> None:
        self._state = state
        builtins: dict[Method, MethodHandler] = {
            Method.INITIALIZE: self._initialize,
            Method.TOOLS_LIST: self._tools_list,
            Method.TOOLS_CALL: self._tools_call,
            Method.RESOURCES_LIST: self._resources_list,
            Method.RESOURCES_READ: self._resources_read,
        }
        self._handlers: dict[str, MethodHandler] = {m.value: h for m, h in builtins.items()}

    @property
    def state(self) -> ServerState:
        return self._state

    def register_method(self, name: str, handler: MethodHandler) -> None:
        """Bind *handler* to *name*, replacing any existing binding."""
        self._handlers[name] = handler
        logger.info("Registered method: %s", name)

    def methods(self) -> list[str]:
        return sorted(self._handlers)

    async def handle(self, data: bytes | str) -> bytes:
        """Run one full exchange: decode, dispatch, encode."""
        decoded = decode(data)
        if isinstance(decoded, DecodeFailure):
            logger.error("Failed to parse message: %s", decoded.detail)
            return encode(decoded.to_envelope())

        response = await self.dispatch(decoded)
        try:
            return encode(response)
        except (TypeError, ValueError, RecursionError) as exc:
            # The result (or an echoed id) is not representable as JSON.
            logger.exception("Error encoding response: %s", decoded.method)
            return encode(Envelope.failure(response.id, ErrorCode.INTERNAL_ERROR, str(exc)))

    async def dispatch(self, envelope: Envelope) -> Envelope:
        """Route a decoded envelope and return the response envelope."""
        method = envelope.method or ""
        with dispatch_span(method, envelope.id) as span:
            response = await self._route(method, envelope)
            record_error_code(span, response)
            return response

    async def _route(self, method: str, envelope: Envelope) -> Envelope:
        logger.debug("Received message: %s", method)
        try:
            handler = self._handlers.get(method)
            if handler is None:
                raise MethodNotFoundError(method)
            result = await handler(envelope)
        except ProtocolError as exc:
            logger.info("%s failed: %s", method or "<no method>", exc.message)
            return Envelope.failure(envelope.id, exc.code, exc.message, exc.data)
        except Exception as exc:
            logger.exception("Error processing message: %s", method)
            return Envelope.failure(
                envelope.id, ErrorCode.INTERNAL_ERROR, str(exc) or type(exc).__name__
            )
        return Envelope.response(envelope.id, result if result is not None else {})

    # -- built-in handlers ---------------------------------------------------

    async def _initialize(self, envelope: Envelope) -> dict[str, Any]:
        # The client's protocolVersion and capabilities are accepted as-is.
        logger.info("Handling initialize request")
        result = InitializeResult(
            capabilities=self._state.capabilities,
            server_info=self._state.info,
        )
        return result.to_wire()

    async def _tools_list(self, envelope: Envelope) -> dict[str, Any]:
        logger.info("Handling tools/list request")
        return ToolsListResult(tools=self._state.catalog.list_tools()).to_wire()

    async def _tools_call(self, envelope: Envelope) -> dict[str, Any]:
        logger.info("Handling tools/call request")
        params = _parse_params(ToolsCallParams, envelope.params)

        entry = self._state.catalog.get_tool(params.name)
        if entry is None:
            raise ToolNotFoundError(params.name)

        logger.info("Executing tool: %s", entry.name)
        is_error: bool | None = None
        with tool_span(entry.name) as span:
            try:
                text = await entry.handler(params.arguments or {})
            except Exception as exc:
                # Tools have no declared error contract; failures travel as text.
                logger.exception("Tool %s failed", entry.name)
                text = f"Error: {exc}"
                is_error = True
                record_tool_failure(span)

        return ToolsCallResult(content=[TextContent(text=text)], is_error=is_error).to_wire()

    async def _resources_list(self, envelope: Envelope) -> dict[str, Any]:
        logger.info("Handling resources/list request")
        return ResourcesListResult(resources=self._state.catalog.list_resources()).to_wire()

    async def _resources_read(self, envelope: Envelope) -> dict[str, Any]:
        logger.info("Handling resources/read request")
        params = _parse_params(ResourcesReadParams, envelope.params)

        entry = self._state.catalog.get_resource(params.uri)
        if entry is None:
            raise ResourceNotFoundError(params.uri)

        logger.info("Reading resource: %s", entry.uri)
        with resource_span(entry.uri):
            text = entry.reader()

        contents = ResourceContents(uri=entry.uri, mime_type=entry.descriptor.mime_type, text=text)
        return ResourcesReadResult(contents=[contents]).to_wire()


def _parse_params(model: type[_P], params: Any) -> _P:
    """Validate *params* into *model*, raising :class:`InvalidParamsError` on mismatch."""
    try:
        return model.model_validate(params if params is not None else {})
    except ValidationError as exc:
        problems = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        raise InvalidParamsError("Invalid parameters", data=problems) from exc
