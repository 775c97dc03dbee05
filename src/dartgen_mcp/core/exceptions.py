"""Exception hierarchy for dartgen-mcp."""
from typing import List, Optional


class DartGenError(Exception):
    """Base class for all dartgen errors."""


class ConfigurationError(DartGenError):
    """Raised when a dartgen.yaml file is missing or invalid."""

    def __init__(self, config_path: str, reason: str) -> None:
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Invalid configuration file '{config_path}': {reason}")


class BaseClassSearchError(DartGenError):
    """Raised when a candidate source file cannot be read during the search.

    Distinct from a base class simply not being found, which is a normal
    result of the search.
    """

    def __init__(self, file_path: str, reason: str) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Failed to read '{file_path}': {reason}")


class MalformedFieldError(DartGenError):
    """Raised when a field declaration is not of the form `final <type> <name>;`."""

    def __init__(self, declaration: str) -> None:
        self.declaration = declaration
        super().__init__(f"Malformed field declaration: {declaration!r}")


class BuildCommandError(DartGenError):
    """Raised when the build command cannot be started."""

    def __init__(self, command: List[str], reason: Optional[str] = None) -> None:
        self.command = command
        self.reason = reason
        message = f"Build command '{' '.join(command)}' could not be started"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
