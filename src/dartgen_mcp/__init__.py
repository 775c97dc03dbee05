"""dartgen-mcp: json_serializable Dart model generation from existing base classes."""

__version__ = "0.1.0"
