"""Dart model generation feature.

This module provides:
- Base class lookup across a workspace
- Regex-based extraction of `final` fields
- Rendering of json_serializable model classes
- The generate-model command and its MCP tools
"""

from .extractor import extract_fields, extract_fields_from_file, normalize_generics, parse_fields
from .generator import (
    compute_import_path,
    constructor_parameter_name,
    derive_base_name,
    generate_dart_model,
    render_dart_model,
)
from .host import HostContext, HostMessage, RecordingHost, TerminalHost
from .locator import find_base_class_file, iter_source_files
from .orchestrator import generate_model_command, start_build, write_model_file
from .tools import register_model_gen_tools

__all__ = [
    # Extraction
    "extract_fields",
    "extract_fields_from_file",
    "normalize_generics",
    "parse_fields",
    # Generation
    "compute_import_path",
    "constructor_parameter_name",
    "derive_base_name",
    "generate_dart_model",
    "render_dart_model",
    # Hosts
    "HostContext",
    "HostMessage",
    "RecordingHost",
    "TerminalHost",
    # Lookup
    "find_base_class_file",
    "iter_source_files",
    # Command
    "generate_model_command",
    "start_build",
    "write_model_file",
    # Registration
    "register_model_gen_tools",
]
