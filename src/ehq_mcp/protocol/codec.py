"""Envelope codec: raw bytes to :class:`Envelope` and back.

Pure functions with no state.  Decoding never raises; malformed input is
reported as a :class:`DecodeFailure` so the caller can answer with an error
envelope whose id is absent.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ValidationError

from ehq_mcp.protocol.errors import ErrorCode, default_message
from ehq_mcp.protocol.models import Envelope


class DecodeFailure(BaseModel):
    """Raw input that could not be turned into an envelope."""

    code: ErrorCode
    message: str
    detail: str = ""

    def to_envelope(self) -> Envelope:
        """Build the error response; the id is unrecoverable and left absent."""
        return Envelope.failure(None, self.code, self.message)


def decode(data: bytes | str) -> Envelope | DecodeFailure:
    """Parse one complete serialized envelope."""
    try:
        raw: Any = json.loads(data, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        # RecursionError: nesting deeper than the interpreter stack.
        return DecodeFailure(
            code=ErrorCode.PARSE_ERROR,
            message=default_message(ErrorCode.PARSE_ERROR),
            detail=str(exc),
        )

    if not isinstance(raw, dict):
        return DecodeFailure(
            code=ErrorCode.INVALID_REQUEST,
            message=default_message(ErrorCode.INVALID_REQUEST),
            detail=f"expected a JSON object, got {type(raw).__name__}",
        )

    try:
        return Envelope.model_validate(raw)
    except ValidationError as exc:
        return DecodeFailure(
            code=ErrorCode.INVALID_REQUEST,
            message=default_message(ErrorCode.INVALID_REQUEST),
            detail=str(exc),
        )


def _reject_constant(name: str) -> Any:
    msg = f"{name} is not valid JSON"
    raise ValueError(msg)


def to_payload(envelope: Envelope) -> dict[str, Any]:
    """Return the wire mapping for *envelope*, omitting absent fields."""
    payload: dict[str, Any] = {"jsonrpc": envelope.jsonrpc}
    if envelope.id is not None:
        payload["id"] = envelope.id
    if envelope.method is not None:
        payload["method"] = envelope.method
    if envelope.params is not None:
        payload["params"] = envelope.params
    if envelope.result is not None:
        payload["result"] = envelope.result
    if envelope.error is not None:
        error: dict[str, Any] = {
            "code": int(envelope.error.code),
            "message": envelope.error.message,
        }
        if envelope.error.data is not None:
            error["data"] = envelope.error.data
        payload["error"] = error
    return payload


def encode(envelope: Envelope) -> bytes:
    """Serialize *envelope* to compact UTF-8 JSON.

    Raises :class:`TypeError` or :class:`ValueError` when the payload holds a
    value JSON has no representation for, such as a set or NaN.
    """
    payload = to_payload(envelope)
    return json.dumps(payload, ensure_ascii=False, allow_nan=False, separators=(",", ":")).encode()
