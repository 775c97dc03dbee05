"""Feature modules for dartgen-mcp."""
