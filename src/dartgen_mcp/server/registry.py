"""Central tool registration for MCP server."""

from mcp.server.fastmcp import FastMCP

from dartgen_mcp.features.model_gen.tools import register_model_gen_tools


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools from all features.

    Tools registered:
    1. Model generation (2 tools: generate_dart_model, inspect_dart_base_class)
    """
    register_model_gen_tools(mcp)
