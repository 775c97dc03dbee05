"""Console output for the interactive command.

Structured logs go to stderr through structlog; this module is what the
person at the terminal reads.

Usage:
    from dartgen_mcp.utils.console_logger import console

    console.log("Searching for base class...")
    console.error("Base class not found")
"""

import sys
from typing import Any

from dartgen_mcp.constants import FormattingDefaults


class ConsoleLogger:
    """Simple console logger for the terminal host and CLI."""

    def log(self, message: str = "", **kwargs: Any) -> None:
        """Output a normal message to stdout."""
        print(message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Output an error message to stderr."""
        print(f"ERROR: {message}", file=sys.stderr, **kwargs)

    def separator(self, char: str = "=", length: int = FormattingDefaults.SEPARATOR_LENGTH, **kwargs: Any) -> None:
        print(char * length, **kwargs)


# Global console logger instance
console = ConsoleLogger()
