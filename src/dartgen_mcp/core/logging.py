"""Logging configuration for dartgen-mcp."""
import atexit
import os
import sys
from typing import Any, Dict, List, Optional, TextIO

import structlog

# Open log files by absolute path, shared across reconfigurations
_log_files: Dict[str, TextIO] = {}


def _open_log_file(log_file: str) -> TextIO:
    path = os.path.abspath(log_file)
    handle = _log_files.get(path)
    if handle is None or handle.closed:
        handle = open(path, "a", encoding="utf-8")
        _log_files[path] = handle
    return handle


@atexit.register
def close_log_files() -> None:
    """Close every log file opened by configure_logging."""
    for handle in _log_files.values():
        handle.close()
    _log_files.clear()


def configure_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure structured logging with JSON output.

    Loggers are cached on first use, so a log file stays open until
    process exit (or close_log_files) even after reconfiguration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging (stderr by default)
    """
    level_mapping = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
    }
    numeric_level = level_mapping.get(log_level.upper(), 20)

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ]

    output = sys.stderr if log_file is None else _open_log_file(log_file)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically module or tool name)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
