"""JSON-RPC error codes and the exceptions handlers raise to produce them."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Error codes that are part of the wire contract."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


ERROR_MESSAGES: dict[int, str] = {
    ErrorCode.PARSE_ERROR: "Parse error",
    ErrorCode.INVALID_REQUEST: "Invalid Request",
    ErrorCode.METHOD_NOT_FOUND: "Method not found",
    ErrorCode.INVALID_PARAMS: "Invalid params",
    ErrorCode.INTERNAL_ERROR: "Internal error",
}


def default_message(code: int) -> str:
    """Return the canonical message for *code*."""
    return ERROR_MESSAGES.get(code, f"Unknown error ({code})")


class ProtocolError(Exception):
    """Base error for failures that become a JSON-RPC error envelope."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str = "", data: Any = None) -> None:
        self.message = message or default_message(self.code)
        self.data = data
        super().__init__(self.message)


class InvalidRequestError(ProtocolError):
    """The envelope is valid JSON but not a well-formed request."""

    code = ErrorCode.INVALID_REQUEST


class InvalidParamsError(ProtocolError):
    """Method parameters do not have the expected shape."""

    code = ErrorCode.INVALID_PARAMS


class MethodNotFoundError(ProtocolError):
    """No handler is registered for the requested method."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class ToolNotFoundError(MethodNotFoundError):
    """Requested tool does not exist in the catalog.

    Reported with the method-not-found code; the taxonomy does not
    distinguish tool lookups from method lookups.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        ProtocolError.__init__(self, f"Tool not found: {name}")


class ResourceNotFoundError(MethodNotFoundError):
    """Requested resource URI does not exist in the catalog."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        ProtocolError.__init__(self, f"Resource not found: {uri}")
