"""The generate-model command.

Runs the whole pipeline once: prompt, locate, extract, generate, write,
open, then launch the build in the background. Expected aborts (missing
input, unknown base class, no fields) are reported through the host and
returned as unsuccessful results; anything else is caught once at the top
and reported as a generic failure. Nothing written before a failure is
rolled back.
"""

import os
from typing import Optional

import sentry_sdk

from dartgen_mcp.constants import HostMessages
from dartgen_mcp.core.exceptions import BuildCommandError
from dartgen_mcp.core.executor import BuildHandle, BuildTracker, launch_build
from dartgen_mcp.core.logging import get_logger
from dartgen_mcp.features.model_gen.extractor import extract_fields_from_file
from dartgen_mcp.features.model_gen.generator import generate_dart_model
from dartgen_mcp.features.model_gen.host import HostContext
from dartgen_mcp.features.model_gen.locator import find_base_class_file
from dartgen_mcp.models.config import DartGenConfig
from dartgen_mcp.models.model_gen import BuildResult, GeneratedModel, GenerationResult


def _abort(host: HostContext, message: str) -> GenerationResult:
    host.show_error(message)
    return GenerationResult(success=False, error=message)


def write_model_file(model: GeneratedModel, target_dir: str) -> str:
    """Write a rendered model into `target_dir`, creating directories as needed.

    Existing files are overwritten.

    Returns:
        Path of the written file
    """
    file_path = os.path.join(target_dir, model.file_name)
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(model.content)
    return file_path


def start_build(
    host: HostContext, config: DartGenConfig, tracker: Optional[BuildTracker] = None
) -> Optional[BuildHandle]:
    """Launch the build in the workspace root and report its outcome via the host.

    A build that cannot even be started is reported like a failed build and
    does not fail the command.

    Returns:
        Handle of the running build, or None if it could not be started
    """

    def _report(result: BuildResult) -> None:
        if result.success:
            host.show_info(HostMessages.BUILD_SUCCEEDED)
        else:
            host.show_error(HostMessages.BUILD_FAILED.format(stderr=result.stderr))

    host.show_info(HostMessages.BUILD_STARTED)
    try:
        return launch_build(config.build_command, host.workspace_root, on_complete=_report, tracker=tracker)
    except BuildCommandError as e:
        host.show_error(HostMessages.BUILD_FAILED.format(stderr=e))
        return None


def _run(host: HostContext, config: DartGenConfig, tracker: Optional[BuildTracker]) -> GenerationResult:
    logger = get_logger("model_gen.command")

    model_name = host.prompt_text(HostMessages.MODEL_NAME_PROMPT)
    if not model_name:
        return _abort(host, HostMessages.MODEL_NAME_REQUIRED)

    base_class_name = host.prompt_text(HostMessages.BASE_CLASS_PROMPT)
    if not base_class_name:
        return _abort(host, HostMessages.BASE_CLASS_REQUIRED)

    reference = find_base_class_file(
        base_class_name,
        host.workspace_root,
        extension=config.source_extension,
        exclude_dirs=config.exclude_dirs,
    )
    if reference is None:
        return _abort(host, HostMessages.BASE_CLASS_NOT_FOUND.format(name=base_class_name))

    fields = extract_fields_from_file(reference.file_path, base_class_name)
    if not fields:
        return _abort(host, HostMessages.NO_FIELDS_FOUND.format(name=base_class_name))

    target_dir = host.pick_directory(HostMessages.OUTPUT_DIR_PROMPT)
    if not target_dir:
        return _abort(host, HostMessages.NO_TARGET_DIR)

    model = generate_dart_model(model_name, base_class_name, fields, reference.file_path, target_dir)
    file_path = write_model_file(model, target_dir)
    logger.info("model_written", model=model_name, base_class=base_class_name, file=file_path, field_count=len(fields))

    host.open_document(file_path)

    result = GenerationResult(success=True, output_path=file_path, model=model)
    if config.run_build:
        result.build = start_build(host, config, tracker)
        result.build_started = result.build is not None
    return result


def generate_model_command(
    host: HostContext,
    config: Optional[DartGenConfig] = None,
    build_tracker: Optional[BuildTracker] = None,
) -> GenerationResult:
    """Run the generate-model command once inside `host`.

    Args:
        host: Host environment supplying inputs and displaying output
        config: Build command and search settings (defaults if omitted)
        build_tracker: Tracker for overlapping builds (process-wide if omitted)

    Returns:
        Outcome of the invocation. A successful result may still be followed
        by a build failure reported later through the host.
    """
    logger = get_logger("model_gen.command")
    config = config or DartGenConfig()

    try:
        with sentry_sdk.start_span(op="model_gen.command", name="Generate Dart model"):
            return _run(host, config, build_tracker)
    except Exception as e:
        logger.error("model_generation_failed", error=str(e), error_type=type(e).__name__)
        sentry_sdk.capture_exception(e)
        return _abort(host, HostMessages.GENERATION_FAILED.format(error=e))
