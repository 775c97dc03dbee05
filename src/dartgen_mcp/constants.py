"""Shared constants across the dartgen-mcp codebase.

This module centralizes file patterns, the build command and the
user-facing messages so the hosts and the orchestrator stay in sync.
"""


class DartDefaults:
    """Defaults for Dart source discovery and model generation."""

    SOURCE_EXTENSION = ".dart"
    FIELD_KEYWORD = "final"
    BUILD_COMMAND = "dart run build_runner build"
    CONFIG_FILE_NAME = "dartgen.yaml"
    JSON_ANNOTATION_IMPORT = "package:json_annotation/json_annotation.dart"
    MODEL_SUFFIX = "model"

    # Directories never searched for base classes
    EXCLUDE_DIRS = [
        ".dart_tool",
        ".git",
        ".idea",
        "build",
        "node_modules",
    ]


class HostMessages:
    """User-facing prompts and messages shown through the host."""

    MODEL_NAME_PROMPT = "Enter the model class name (e.g., UserModel)"
    BASE_CLASS_PROMPT = "Enter the base class name to extend (e.g., UserEntity)"
    OUTPUT_DIR_PROMPT = "Select folder to save the generated model file"

    MODEL_NAME_REQUIRED = "Model class name is required."
    BASE_CLASS_REQUIRED = "Base class name is required."
    NO_TARGET_DIR = "No target directory selected."
    BASE_CLASS_NOT_FOUND = 'Base class "{name}" not found.'
    NO_FIELDS_FOUND = 'No fields found in base class "{name}".'
    GENERATION_FAILED = "Failed to generate Dart model: {error}"

    BUILD_STARTED = "Running build_runner to generate .g.dart file..."
    BUILD_SUCCEEDED = "Successfully generated .g.dart file."
    BUILD_FAILED = "Error running build_runner: {stderr}"


class FormattingDefaults:
    """Console formatting defaults."""

    SEPARATOR_LENGTH = 60


class LoggingDefaults:
    """Logging configuration defaults."""

    DEFAULT_LEVEL = "INFO"
    MAX_BREADCRUMBS = 50  # Maximum Sentry breadcrumbs to keep
    STDERR_LOG_LIMIT = 200  # Truncate stderr in logs
