"""dartgen MCP Server - Entry point.

Run with `python main.py` (or the `dartgen-mcp` console script) to serve the
model generation tools over stdio. The interactive terminal command lives in
`dartgen_mcp.cli` and is installed as `dartgen-model`.
"""

from dartgen_mcp.server.runner import run_mcp_server

if __name__ == "__main__":
    run_mcp_server()
