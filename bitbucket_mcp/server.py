"""
Bitbucket MCP Server - Main Entry Point

FastMCP server over stdio, SSE or streamable HTTP. Transport, host and
port come from MCPSettings; command line flags override them.
"""

import argparse
import logging
from typing import List, Optional

from fastmcp import FastMCP

from bitbucket_mcp.config import MCPSettings, get_settings
from bitbucket_mcp.tools import (
    search,
    workspaces,
    repositories,
    pullrequests,
)
from bitbucket_mcp.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

TRANSPORTS = ["stdio", "sse", "streamable-http"]


def create_app() -> FastMCP:
    """Create and configure the MCP application."""
    mcp = FastMCP(
        name="bitbucket-mcp",
        instructions=(
            "Search and browse Bitbucket Cloud workspaces, repositories "
            "and pull requests"
        ),
    )

    search.register(mcp)
    workspaces.register(mcp)
    repositories.register(mcp)
    pullrequests.register(mcp)

    return mcp


def resolve_mcp_settings(
    settings: MCPSettings,
    argv: Optional[List[str]] = None,
) -> MCPSettings:
    """Apply --transport/--host/--port over the configured MCP settings."""
    parser = argparse.ArgumentParser(
        prog="bitbucket-mcp-server",
        description="Bitbucket MCP Server",
    )
    parser.add_argument("--transport", choices=TRANSPORTS, help="Overrides MCP_TRANSPORT")
    parser.add_argument("--host", help="Overrides MCP_HOST (network transports only)")
    parser.add_argument("--port", type=int, help="Overrides MCP_PORT (network transports only)")
    args = parser.parse_args(argv)

    overrides = {
        name: value
        for name, value in vars(args).items()
        if value is not None
    }
    return settings.model_copy(update=overrides)


def run(mcp: FastMCP, settings: MCPSettings) -> None:
    """Run the server on the selected transport."""
    if settings.transport == "stdio":
        mcp.run(transport="stdio")
        return

    logger.info(f"Serving {settings.transport} on {settings.host}:{settings.port}")
    mcp.run(transport=settings.transport, host=settings.host, port=settings.port)


def main(argv: Optional[List[str]] = None) -> None:
    """Server entry point."""
    settings = get_settings()
    mcp_settings = resolve_mcp_settings(settings.mcp, argv)
    configure_logging(settings)
    run(create_app(), mcp_settings)


if __name__ == "__main__":
    main()
