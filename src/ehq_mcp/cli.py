"""ehq-mcp CLI entrypoint."""

from __future__ import annotations

import click

from ehq_mcp import SERVER_NAME, __version__
from ehq_mcp.protocol.models import PROTOCOL_VERSION


@click.group()
@click.version_option(
    version=__version__,
    prog_name=SERVER_NAME,
    message=f"%(prog)s v%(version)s\nProtocol Version: {PROTOCOL_VERSION}",
)
def main() -> None:
    """EHQ MCP Server: Model Context Protocol server for EngagementHQ."""


# Register subcommands
from ehq_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
