"""MCP tool definitions for Dart model generation.

This module registers MCP tools for:
- generate_dart_model: Generate a json_serializable model extending a base class
- inspect_dart_base_class: Locate a base class and list the fields it would forward
"""
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from dartgen_mcp.core import config as config_module
from dartgen_mcp.core.exceptions import DartGenError
from dartgen_mcp.core.logging import get_logger
from dartgen_mcp.features.model_gen.extractor import extract_fields_from_file, parse_fields
from dartgen_mcp.features.model_gen.host import RecordingHost
from dartgen_mcp.features.model_gen.locator import find_base_class_file
from dartgen_mcp.features.model_gen.orchestrator import generate_model_command
from dartgen_mcp.models.config import DartGenConfig
from dartgen_mcp.models.model_gen import GenerationResult


def _load_tool_config(workspace_root: str, run_build: bool) -> DartGenConfig:
    config = config_module.load_config(config_module.CONFIG_PATH, workspace_root)
    if not run_build:
        config = config.model_copy(update={"run_build": False})
    return config


def _format_generation_result(result: GenerationResult, host: RecordingHost) -> Dict[str, Any]:
    """Format a GenerationResult plus the host's recorded output."""
    model = result.model
    response: Dict[str, Any] = {
        "success": result.success,
        "output_path": result.output_path,
        "file_name": model.file_name if model else None,
        "import_path": model.import_path if model else None,
        "fields": model.fields if model else [],
        "build_started": result.build_started,
        "error": result.error,
    }
    response.update(host.snapshot())
    return response


def generate_dart_model_impl(
    workspace_root: str,
    model_name: Optional[str],
    base_class_name: Optional[str],
    output_dir: Optional[str],
    run_build: bool = True,
) -> Dict[str, Any]:
    """Run the generate-model command with pre-supplied inputs."""
    logger = get_logger("tool.generate_dart_model")
    host = RecordingHost(workspace_root, model_name, base_class_name, output_dir)

    try:
        config = _load_tool_config(workspace_root, run_build)
    except DartGenError as e:
        logger.error("tool_config_failed", workspace_root=workspace_root, error=str(e))
        host.show_error(str(e))
        return _format_generation_result(GenerationResult(success=False, error=str(e)), host)

    result = generate_model_command(host, config)
    return _format_generation_result(result, host)


def inspect_dart_base_class_impl(workspace_root: str, base_class_name: str) -> Dict[str, Any]:
    """Locate a base class and describe the fields found in its file.

    Configuration, lookup and field parsing failures are returned in
    `error`; `found` and `file_path` reflect how far the lookup got.
    """
    logger = get_logger("tool.inspect_dart_base_class")
    response: Dict[str, Any] = {
        "found": False,
        "base_class": base_class_name,
        "file_path": None,
        "fields": [],
        "error": None,
    }

    try:
        config = config_module.load_config(config_module.CONFIG_PATH, workspace_root)
        reference = find_base_class_file(
            base_class_name,
            workspace_root,
            extension=config.source_extension,
            exclude_dirs=config.exclude_dirs,
        )
        if reference is None:
            return response

        response["found"] = True
        response["file_path"] = reference.file_path
        declarations = extract_fields_from_file(reference.file_path, base_class_name)
        response["fields"] = [
            {"type": f.field_type, "name": f.name, "declaration": f.declaration}
            for f in parse_fields(declarations)
        ]
    except DartGenError as e:
        logger.error("inspect_failed", base_class=base_class_name, error=str(e), error_type=type(e).__name__)
        response["error"] = str(e)

    return response


def register_model_gen_tools(mcp: FastMCP) -> None:
    """Register model generation MCP tools.

    Args:
        mcp: FastMCP instance to register tools with
    """

    @mcp.tool()
    def generate_dart_model(
        workspace_root: str = Field(description="The absolute path to the Dart/Flutter project root"),
        model_name: str = Field(description="Name of the model class to generate (e.g., UserModel)"),
        base_class_name: str = Field(description="Name of the existing class to extend (e.g., UserEntity)"),
        output_dir: str = Field(
            description="Directory to write the model into (absolute, or relative to workspace_root)"
        ),
        run_build: bool = Field(
            default=True,
            description="Run build_runner afterwards to produce the .g.dart file (default: true)"
        ),
    ) -> Dict[str, Any]:
        """
        Generate a json_serializable Dart model that extends an existing base class.

        The base class is found by searching every .dart file in the workspace for
        `class <base_class_name>`. Its `final` fields become `required super.<name>`
        constructor parameters, and fromMap/toMap delegate to the generated
        `_$<Model>FromJson` / `_$<Model>ToJson` functions.

        The file is written to `<output_dir>/<model_name in snake case>.dart`,
        overwriting any existing file. build_runner is launched in the background;
        its outcome is logged and not included in this response.

        Returns:
        - success: Whether the model file was written
        - output_path / file_name / import_path: Where it went and how it imports the base class
        - fields: Forwarded field declarations in source order
        - build_started: Whether build_runner was launched
        - messages: Messages the command showed (level + message)
        - error: Failure message, if any
        """
        return generate_dart_model_impl(workspace_root, model_name, base_class_name, output_dir, run_build)

    @mcp.tool()
    def inspect_dart_base_class(
        workspace_root: str = Field(description="The absolute path to the Dart/Flutter project root"),
        base_class_name: str = Field(description="Name of the class to look up"),
    ) -> Dict[str, Any]:
        """
        Find the file declaring a Dart class and list the `final` fields a generated
        model would forward. Nothing is written.

        Returns:
        - found: Whether a file containing `class <base_class_name>` exists
        - file_path: First matching file
        - fields: type, name and canonical declaration of each field, in source order
        - error: Configuration, read or field parsing failure, if any
        """
        return inspect_dart_base_class_impl(workspace_root, base_class_name)
