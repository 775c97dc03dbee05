"""Build command execution for dartgen-mcp.

The build runs in the background: `launch_build` starts the process, hands
it to a watcher thread and returns immediately. The watcher invokes the
completion callback once the process exits.
"""

import os
import shlex
import subprocess
import threading
import time
from typing import Callable, Dict, List, Optional, Union

import sentry_sdk

from dartgen_mcp.constants import LoggingDefaults
from dartgen_mcp.core.exceptions import BuildCommandError
from dartgen_mcp.core.logging import get_logger
from dartgen_mcp.models.model_gen import BuildResult

BuildCallback = Callable[[BuildResult], None]


class BuildTracker:
    """Tracks running build processes per working directory.

    Overlapping builds are allowed; the tracker only makes them visible.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active: Dict[str, int] = {}

    def start(self, cwd: str) -> int:
        """Register a build for `cwd` and return how many were already running."""
        key = os.path.abspath(cwd)
        with self._lock:
            running = self._active.get(key, 0)
            self._active[key] = running + 1
        return running

    def finish(self, cwd: str) -> None:
        key = os.path.abspath(cwd)
        with self._lock:
            remaining = self._active.get(key, 0) - 1
            if remaining > 0:
                self._active[key] = remaining
            else:
                self._active.pop(key, None)

    def active_count(self, cwd: Optional[str] = None) -> int:
        """Number of running builds, for one directory or overall."""
        with self._lock:
            if cwd is None:
                return sum(self._active.values())
            return self._active.get(os.path.abspath(cwd), 0)


_build_tracker = BuildTracker()


class BuildHandle:
    """Handle to a launched build.

    Attributes:
        command: Command arguments
        cwd: Working directory of the build
        overlapping: Number of builds already running in `cwd` at launch
    """

    def __init__(self, command: List[str], cwd: str, overlapping: int = 0) -> None:
        self.command = command
        self.cwd = cwd
        self.overlapping = overlapping
        self.result: Optional[BuildResult] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def done(self) -> bool:
        return self._thread is None or not self._thread.is_alive()

    def wait(self, timeout: Optional[float] = None) -> Optional[BuildResult]:
        """Block until the build finished (or the timeout expired)."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self.result


def _command_line(command: Union[str, List[str]]) -> str:
    if isinstance(command, str):
        return command
    return shlex.join(command)


def _watch_build(
    process: "subprocess.Popen[str]",
    handle: BuildHandle,
    start_time: float,
    tracker: BuildTracker,
    on_complete: Optional[BuildCallback],
) -> None:
    """Wait for the build process and report its outcome."""
    logger = get_logger("build")
    try:
        stdout, stderr = process.communicate()
        returncode = process.returncode
    except Exception as e:
        logger.error("build_output_unreadable", cwd=handle.cwd, error=str(e), error_type=type(e).__name__)
        sentry_sdk.capture_exception(e)
        process.kill()
        process.wait()
        stdout, stderr = "", str(e)
        returncode = process.returncode if process.returncode else -1
    finally:
        tracker.finish(handle.cwd)

    execution_time = time.time() - start_time
    result = BuildResult(
        command=handle.command,
        cwd=handle.cwd,
        returncode=returncode,
        stdout=stdout or "",
        stderr=(stderr or "").strip(),
        execution_time_seconds=round(execution_time, 3),
    )
    handle.result = result

    if result.success:
        logger.info(
            "build_completed",
            command=handle.command[0],
            cwd=handle.cwd,
            execution_time_seconds=result.execution_time_seconds,
        )
    else:
        logger.error(
            "build_failed",
            command=handle.command[0],
            cwd=handle.cwd,
            returncode=result.returncode,
            execution_time_seconds=result.execution_time_seconds,
            stderr=result.stderr[:LoggingDefaults.STDERR_LOG_LIMIT],
        )
        sentry_sdk.capture_message(
            f"Build command failed: {' '.join(handle.command)}",
            level="error",
        )

    if on_complete is not None:
        on_complete(result)


def launch_build(
    command: Union[str, List[str]],
    cwd: str,
    on_complete: Optional[BuildCallback] = None,
    tracker: Optional[BuildTracker] = None,
) -> BuildHandle:
    """Start the build command through the shell without waiting for it.

    Args:
        command: Command line, or an argument list joined with shlex
        cwd: Directory to run the command in
        on_complete: Called from the watcher thread with the BuildResult
        tracker: Tracker used to detect overlapping builds

    Returns:
        Handle to the running build

    Raises:
        BuildCommandError: If the process cannot be started at all
    """
    logger = get_logger("build")
    command_line = _command_line(command)
    args = shlex.split(command_line) if isinstance(command, str) else list(command)
    tracker = tracker or _build_tracker

    overlapping = tracker.start(cwd)
    if overlapping:
        logger.warning("build_overlap_detected", cwd=cwd, running=overlapping)

    logger.info("build_started", command=command_line, cwd=cwd)
    start_time = time.time()

    try:
        with sentry_sdk.start_span(op="subprocess.popen", name=f"Launching {args[0]}") as span:
            span.set_data("command", command_line)
            span.set_data("cwd", cwd)
            # Shell resolves wrapper scripts such as flutter.bat on Windows
            process = subprocess.Popen(
                command_line,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                shell=True,
            )
    except OSError as e:
        tracker.finish(cwd)
        logger.error("build_command_not_started", command=command_line, cwd=cwd, error=str(e))
        error = BuildCommandError(args, str(e))
        sentry_sdk.capture_exception(error, extras={"command": command_line, "cwd": cwd})
        raise error from e

    handle = BuildHandle(args, cwd, overlapping)
    thread = threading.Thread(
        target=_watch_build,
        args=(process, handle, start_time, tracker, on_complete),
        name=f"build-{process.pid}",
        daemon=True,
    )
    handle._thread = thread
    thread.start()
    return handle
