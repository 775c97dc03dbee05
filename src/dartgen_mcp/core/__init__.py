"""Core infrastructure for dartgen-mcp."""

from dartgen_mcp.core.config import (
    CONFIG_PATH,
    load_config,
    parse_args_and_get_config,
    resolve_config_path,
    validate_config_file,
)
from dartgen_mcp.core.exceptions import (
    BaseClassSearchError,
    BuildCommandError,
    ConfigurationError,
    DartGenError,
    MalformedFieldError,
)
from dartgen_mcp.core.executor import (
    BuildHandle,
    BuildTracker,
    launch_build,
)
from dartgen_mcp.core.logging import (
    configure_logging,
    get_logger,
)
from dartgen_mcp.core.sentry import (
    init_sentry,
)

__all__ = [
    # Exceptions
    "DartGenError",
    "ConfigurationError",
    "BaseClassSearchError",
    "MalformedFieldError",
    "BuildCommandError",
    # Logging
    "configure_logging",
    "get_logger",
    # Config
    "CONFIG_PATH",
    "load_config",
    "resolve_config_path",
    "validate_config_file",
    "parse_args_and_get_config",
    # Sentry
    "init_sentry",
    # Executor
    "BuildHandle",
    "BuildTracker",
    "launch_build",
]
