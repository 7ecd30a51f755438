"""Self-contained demo tools: ``hello_world``, ``echo`` and ``get_time``."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from ehq_mcp.protocol.models import ToolDescriptor

HELLO_WORLD = ToolDescriptor(
    name="hello_world",
    description="Returns a friendly hello world message",
    input_schema={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Name to greet (optional)"},
        },
    },
)

ECHO = ToolDescriptor(
    name="echo",
    description="Echoes back the provided message",
    input_schema={
        "type": "object",
        "properties": {
            "message": {"type": "string", "description": "Message to echo back"},
        },
        "required": ["message"],
    },
)

TIME_FORMATS = ("RFC3339", "Unix", "Kitchen")

GET_TIME = ToolDescriptor(
    name="get_time",
    description="Returns the current date and time",
    input_schema={
        "type": "object",
        "properties": {
            "format": {
                "type": "string",
                "description": "Time format (optional, defaults to RFC3339)",
                "enum": list(TIME_FORMATS),
            },
        },
    },
)


async def hello_world(arguments: dict[str, Any]) -> str:
    name = arguments.get("name")
    if not isinstance(name, str) or not name:
        name = "World"
    now = datetime.now()
    return (
        f"Hello, {name}! 🌍\n"
        "Welcome to the EHQ MCP Server!\n"
        f"Current time: {now:%Y-%m-%d %H:%M:%S}"
    )


async def echo(arguments: dict[str, Any]) -> str:
    message = arguments.get("message")
    if not isinstance(message, str):
        return "Error: message parameter is required"
    return f"Echo: {message}"


async def get_time(arguments: dict[str, Any]) -> str:
    """Current time as RFC 3339, a Unix timestamp or a kitchen clock.

    Unknown formats fall back to RFC 3339.
    """
    fmt = arguments.get("format")
    now = datetime.now().astimezone()

    if fmt == "Unix":
        return f"Unix timestamp: {int(now.timestamp())}"
    if fmt == "Kitchen":
        meridiem = "AM" if now.hour < 12 else "PM"
        return f"Time: {now.hour % 12 or 12}:{now:%M}{meridiem}"
    return f"Time: {rfc3339(now)}"


def rfc3339(moment: datetime) -> str:
    """Render an aware datetime to the second, writing a zero offset as ``Z``."""
    text = moment.isoformat(timespec="seconds")
    if moment.utcoffset() == timedelta(0):
        return text.removesuffix("+00:00") + "Z"
    return text
