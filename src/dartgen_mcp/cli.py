"""Interactive console command: `dartgen-model`.

Prompts for the model name, base class name and output directory, writes
the model, prints it, and waits for build_runner before exiting so its
outcome is visible.
"""

import argparse
import os
import sys
from typing import List, Optional

from dartgen_mcp.core.config import add_common_arguments, configure_logging_from_args, load_config
from dartgen_mcp.core.exceptions import ConfigurationError
from dartgen_mcp.core.sentry import init_sentry
from dartgen_mcp.features.model_gen.host import TerminalHost
from dartgen_mcp.features.model_gen.orchestrator import generate_model_command
from dartgen_mcp.utils.console_logger import console


def _create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dartgen-model",
        description="Generate a json_serializable Dart model extending an existing base class",
    )
    parser.add_argument(
        "--workspace",
        type=str,
        metavar="PATH",
        default=os.getcwd(),
        help="Project root searched for the base class; build_runner runs here (default: current directory)",
    )
    parser.add_argument(
        "--no-build",
        action="store_true",
        help="Do not run build_runner after writing the model",
    )
    add_common_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the interactive command and return the process exit code."""
    args = _create_argument_parser().parse_args(argv)
    configure_logging_from_args(args, default_level="WARNING")
    init_sentry()

    try:
        config = load_config(args.config, args.workspace)
    except ConfigurationError as e:
        console.error(str(e))
        return 1

    if args.no_build:
        config = config.model_copy(update={"run_build": False})

    result = generate_model_command(TerminalHost(args.workspace), config)
    if result.build is not None:
        result.build.wait()

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
