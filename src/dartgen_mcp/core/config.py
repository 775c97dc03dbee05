"""Configuration management for dartgen-mcp."""

import argparse
import os
import sys
from typing import List, Optional

import yaml

from dartgen_mcp.constants import DartDefaults, LoggingDefaults
from dartgen_mcp.core.exceptions import ConfigurationError
from dartgen_mcp.core.logging import configure_logging, get_logger
from dartgen_mcp.models.config import DartGenConfig

# Global variable for config path (will be set by parse_args_and_get_config)
CONFIG_PATH: Optional[str] = None


def validate_config_file(config_path: str) -> DartGenConfig:
    """Validate dartgen.yaml file structure.

    Args:
        config_path: Path to dartgen.yaml file

    Returns:
        Validated DartGenConfig model

    Raises:
        ConfigurationError: If config file is invalid
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(config_path, "File does not exist")

    if not os.path.isfile(config_path):
        raise ConfigurationError(config_path, "Path is not a file")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(config_path, f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(config_path, f"Failed to read file: {e}") from e

    # An empty file means "use the defaults"
    if config_data is None:
        return DartGenConfig()

    if not isinstance(config_data, dict):
        raise ConfigurationError(config_path, "Config must be a YAML dictionary")

    try:
        return DartGenConfig(**config_data)
    except Exception as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e


def resolve_config_path(explicit_path: Optional[str] = None, workspace_root: Optional[str] = None) -> Optional[str]:
    """Resolve which config file applies.

    Precedence: explicit path > DARTGEN_CONFIG env > <workspace>/dartgen.yaml > None

    Args:
        explicit_path: Path given on the command line
        workspace_root: Workspace to look for a dartgen.yaml in

    Returns:
        Path to the config file or None if no config applies.
    """
    if explicit_path:
        return explicit_path

    env_config = os.environ.get("DARTGEN_CONFIG")
    if env_config:
        return env_config

    if workspace_root:
        candidate = os.path.join(workspace_root, DartDefaults.CONFIG_FILE_NAME)
        if os.path.isfile(candidate):
            return candidate

    return None


def load_config(config_path: Optional[str] = None, workspace_root: Optional[str] = None) -> DartGenConfig:
    """Load configuration, falling back to defaults when no file applies.

    Raises:
        ConfigurationError: If the resolved config file is invalid
    """
    logger = get_logger("config")
    path = resolve_config_path(config_path, workspace_root)
    if path is None:
        logger.debug("config_defaults_used")
        return DartGenConfig()

    config = validate_config_file(path)
    logger.info("config_loaded", config_path=path, build_command=config.build_command, run_build=config.run_build)
    return config


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the MCP server argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    prog = None
    if sys.argv[0].endswith("main.py"):
        prog = "python main.py"

    parser = argparse.ArgumentParser(
        prog=prog,
        description="dartgen MCP Server - Generates json_serializable Dart models from existing base classes",
        epilog="""
environment variables:
  DARTGEN_CONFIG     Path to dartgen.yaml file (overridden by --config flag)
  LOG_LEVEL          Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
  LOG_FILE           Path to log file (logs to stderr by default)
  SENTRY_DSN         Enables Sentry error tracking when set
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_common_arguments(parser)
    return parser


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the --config, --log-level and --log-file flags to a parser."""
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to dartgen.yaml file (build command, source extension, excluded directories)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        metavar="LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also be set via LOG_LEVEL env var. Default: INFO",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to log file (logs to stderr by default). Can also be set via LOG_FILE env var.",
    )


def configure_logging_from_args(args: argparse.Namespace, default_level: str = LoggingDefaults.DEFAULT_LEVEL) -> None:
    """Configure logging based on command-line arguments and environment.

    Precedence: --log-level/--log-file flags > env vars > defaults

    Args:
        args: Parsed command-line arguments.
    """
    log_level = args.log_level or os.environ.get("LOG_LEVEL", default_level)
    log_file = args.log_file or os.environ.get("LOG_FILE")
    configure_logging(log_level=log_level, log_file=log_file)


def _resolve_and_validate_config_path(args: argparse.Namespace) -> Optional[str]:
    """Resolve and validate config file path from args or environment.

    Note:
        Calls sys.exit(1) if validation fails.
    """
    config_path = resolve_config_path(args.config)
    if config_path is None:
        return None

    try:
        validate_config_file(config_path)
    except ConfigurationError as e:
        logger = get_logger("config")
        logger.error("config_validation_failed", config_path=config_path, error=str(e))
        sys.exit(1)

    return config_path


def parse_args_and_get_config(argv: Optional[List[str]] = None) -> None:
    """Parse command-line arguments and determine config path."""
    global CONFIG_PATH

    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging_from_args(args)
    CONFIG_PATH = _resolve_and_validate_config_path(args)
