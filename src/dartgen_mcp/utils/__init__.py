"""Utilities module for dartgen-mcp."""

from .console_logger import ConsoleLogger, console

__all__ = [
    "ConsoleLogger",
    "console",
]
