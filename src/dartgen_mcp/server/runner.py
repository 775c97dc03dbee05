"""MCP server entry point."""

from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from dartgen_mcp.core.config import parse_args_and_get_config
from dartgen_mcp.core.sentry import init_sentry
from dartgen_mcp.server.registry import register_all_tools

# Create FastMCP instance
mcp = FastMCP("dartgen")


def run_mcp_server(argv: Optional[List[str]] = None) -> None:
    """Run the MCP server.

    This function:
    1. Parses command-line arguments and loads configuration
    2. Initializes Sentry error tracking (if configured)
    3. Registers all MCP tools
    4. Starts the MCP server with stdio transport
    """
    parse_args_and_get_config(argv)  # Sets CONFIG_PATH global
    init_sentry()  # No-op unless SENTRY_DSN is set
    register_all_tools(mcp)
    mcp.run(transport="stdio")
