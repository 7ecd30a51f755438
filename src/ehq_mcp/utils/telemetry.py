"""OpenTelemetry spans for MCP exchanges.

Every request runs inside an ``mcp.dispatch`` span; tool executions and
resource reads nest ``mcp.tool`` and ``mcp.resource`` spans beneath it.
Without a configured SDK the OpenTelemetry API hands back no-op spans, so
the helpers here cost next to nothing by default.

Usage::

    from ehq_mcp.utils.telemetry import dispatch_span, record_error_code

    with dispatch_span("tools/list", request_id) as span:
        response = ...
        record_error_code(span, response)

To export spans, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install ehq-mcp-server[otel]``).
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from ehq_mcp.config import TelemetrySettings
    from ehq_mcp.protocol.models import Envelope

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_METHOD = "mcp.method"
ATTR_REQUEST_ID = "mcp.request_id"
ATTR_ERROR_CODE = "mcp.error_code"
ATTR_TOOL_NAME = "mcp.tool.name"
ATTR_TOOL_FAILED = "mcp.tool.failed"
ATTR_RESOURCE_URI = "mcp.resource.uri"

SPAN_DISPATCH = "mcp.dispatch"
SPAN_TOOL = "mcp.tool"
SPAN_RESOURCE = "mcp.resource"

_INSTRUMENTATION_NAME = "ehq_mcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


@contextmanager
def dispatch_span(method: str, request_id: Any = None) -> Iterator[trace.Span]:
    """Span covering one request from routing to reply.

    The id is recorded as its JSON text so ``1`` and ``"1"`` stay distinct.
    """
    with get_tracer().start_as_current_span(SPAN_DISPATCH) as span:
        span.set_attribute(ATTR_METHOD, method)
        if request_id is not None:
            span.set_attribute(ATTR_REQUEST_ID, _id_text(request_id))
        yield span


@contextmanager
def tool_span(name: str) -> Iterator[trace.Span]:
    with get_tracer().start_as_current_span(SPAN_TOOL) as span:
        span.set_attribute(ATTR_TOOL_NAME, name)
        yield span


@contextmanager
def resource_span(uri: str) -> Iterator[trace.Span]:
    with get_tracer().start_as_current_span(SPAN_RESOURCE) as span:
        span.set_attribute(ATTR_RESOURCE_URI, uri)
        yield span


def record_error_code(span: trace.Span, response: Envelope) -> None:
    """Tag *span* with the reply's error code; success replies leave it untouched."""
    if response.error is not None:
        span.set_attribute(ATTR_ERROR_CODE, response.error.code)


def record_tool_failure(span: trace.Span) -> None:
    span.set_attribute(ATTR_TOOL_FAILED, True)


def _id_text(request_id: Any) -> str:
    try:
        return json.dumps(request_id, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return repr(request_id)


def configure_telemetry(settings: TelemetrySettings, *, export_to_console: bool = False) -> None:
    """Install an SDK tracer provider built from *settings* (requires ``ehq-mcp-server[otel]``).

    Parameters
    ----------
    settings:
        Supplies ``service.name`` and the optional OTLP/gRPC endpoint.
    export_to_console:
        If ``True``, also print finished spans as JSON to stderr.  Never
        stdout: it carries the stdio transport.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package (or, when an endpoint is set,
        ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install ehq-mcp-server[otel]"
        )
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": settings.service_name}))

    if settings.otlp_endpoint:
        exporter = _otlp_exporter(settings.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))

    if export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))

    trace.set_tracer_provider(provider)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install ehq-mcp-server[otel]"
        )
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
