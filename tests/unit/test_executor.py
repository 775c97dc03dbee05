"""Unit tests for background build execution."""

import sys
import threading
from unittest.mock import MagicMock, patch

import pytest

from dartgen_mcp.core.exceptions import BuildCommandError
from dartgen_mcp.core.executor import BuildHandle, BuildTracker, launch_build


def _mock_process(returncode: int = 0, stdout: str = "", stderr: str = "", release: threading.Event = None):
    """Create a Popen stand-in whose communicate() optionally blocks."""
    process = MagicMock()
    process.pid = 4242
    process.returncode = returncode

    def _communicate():
        if release is not None:
            release.wait(5)
        return stdout, stderr

    process.communicate.side_effect = _communicate
    return process


class TestBuildTracker:
    """Tests for BuildTracker."""

    def test_start_reports_running_builds(self, temp_dir):
        """Test start returns how many builds were already running."""
        tracker = BuildTracker()
        assert tracker.start(temp_dir) == 0
        assert tracker.start(temp_dir) == 1
        assert tracker.active_count(temp_dir) == 2

    def test_finish_decrements(self, temp_dir):
        """Test finish removes a build."""
        tracker = BuildTracker()
        tracker.start(temp_dir)
        tracker.start(temp_dir)
        tracker.finish(temp_dir)
        assert tracker.active_count(temp_dir) == 1
        tracker.finish(temp_dir)
        assert tracker.active_count(temp_dir) == 0
        assert tracker.active_count() == 0

    def test_directories_tracked_separately(self, temp_dir):
        """Test counts are per working directory."""
        tracker = BuildTracker()
        tracker.start(temp_dir)
        tracker.start("/other")
        assert tracker.active_count(temp_dir) == 1
        assert tracker.active_count() == 2


class TestLaunchBuild:
    """Tests for launch_build."""

    @patch("dartgen_mcp.core.executor.subprocess.Popen")
    def test_successful_build_calls_back(self, mock_popen, temp_dir):
        """Test the callback receives a successful result."""
        mock_popen.return_value = _mock_process(returncode=0, stdout="Succeeded")
        results = []

        handle = launch_build("dart run build_runner build", temp_dir, on_complete=results.append, tracker=BuildTracker())
        result = handle.wait(5)

        assert result is not None and result.success
        assert results == [result]
        args, kwargs = mock_popen.call_args
        assert args[0] == "dart run build_runner build"
        assert kwargs["shell"] is True
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"
        assert kwargs["cwd"] == temp_dir

    @patch("dartgen_mcp.core.executor.subprocess.Popen")
    def test_failed_build_carries_stderr(self, mock_popen, temp_dir):
        """Test stderr is captured for failed builds."""
        mock_popen.return_value = _mock_process(returncode=1, stderr="Could not find package build_runner\n")
        results = []

        handle = launch_build(["dart", "run", "build_runner", "build"], temp_dir, on_complete=results.append, tracker=BuildTracker())
        handle.wait(5)

        assert len(results) == 1
        assert not results[0].success
        assert results[0].stderr == "Could not find package build_runner"

    @patch("dartgen_mcp.core.executor.subprocess.Popen")
    def test_launch_does_not_wait(self, mock_popen, temp_dir):
        """Test launch_build returns while the process is still running."""
        release = threading.Event()
        mock_popen.return_value = _mock_process(release=release)
        tracker = BuildTracker()

        handle = launch_build("dart run build_runner build", temp_dir, tracker=tracker)
        try:
            assert not handle.done
            assert tracker.active_count(temp_dir) == 1
        finally:
            release.set()
        handle.wait(5)
        assert handle.done
        assert tracker.active_count(temp_dir) == 0

    @patch("dartgen_mcp.core.executor.subprocess.Popen")
    def test_overlapping_builds_detected(self, mock_popen, temp_dir):
        """Test a second build in the same directory is flagged but still launched."""
        release = threading.Event()
        mock_popen.side_effect = [_mock_process(release=release), _mock_process(release=release)]
        tracker = BuildTracker()

        first = launch_build("dart run build_runner build", temp_dir, tracker=tracker)
        second = launch_build("dart run build_runner build", temp_dir, tracker=tracker)
        try:
            assert first.overlapping == 0
            assert second.overlapping == 1
            assert tracker.active_count(temp_dir) == 2
        finally:
            release.set()
        first.wait(5)
        second.wait(5)
        assert mock_popen.call_count == 2

    @patch("dartgen_mcp.core.executor.subprocess.Popen", side_effect=FileNotFoundError("dart"))
    def test_spawn_failure_raises(self, mock_popen, temp_dir):
        """Test a process that cannot be spawned raises BuildCommandError and is not tracked."""
        tracker = BuildTracker()
        with pytest.raises(BuildCommandError):
            launch_build("dart run build_runner build", temp_dir, tracker=tracker)
        assert tracker.active_count(temp_dir) == 0

    @patch("dartgen_mcp.core.executor.subprocess.Popen", side_effect=OSError(24, "Too many open files"))
    def test_any_os_error_releases_tracker(self, mock_popen, temp_dir):
        """Test every OSError from Popen is reported and untracked."""
        tracker = BuildTracker()
        with pytest.raises(BuildCommandError, match="Too many open files"):
            launch_build("dart run build_runner build", temp_dir, tracker=tracker)
        assert tracker.active_count(temp_dir) == 0

    @patch("dartgen_mcp.core.executor.subprocess.Popen")
    def test_unreadable_output_still_reports_failure(self, mock_popen, temp_dir):
        """Test a failure while collecting output produces a failed result."""
        process = _mock_process(returncode=None)
        process.communicate.side_effect = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        mock_popen.return_value = process
        results = []
        tracker = BuildTracker()

        handle = launch_build("dart run build_runner build", temp_dir, on_complete=results.append, tracker=tracker)
        result = handle.wait(5)

        assert results == [result]
        assert not result.success
        assert "invalid start byte" in result.stderr
        process.kill.assert_called_once_with()
        assert tracker.active_count(temp_dir) == 0


@pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell quoting")
class TestLaunchBuildProcess:
    """Tests for launch_build against real processes."""

    def test_invalid_utf8_stderr_reported(self, temp_dir):
        """Test non UTF-8 error output is decoded with replacement characters."""
        script = "import sys; sys.stderr.buffer.write(b'\\xff\\xfe bad'); sys.exit(1)"
        results = []

        handle = launch_build([sys.executable, "-c", script], temp_dir, on_complete=results.append, tracker=BuildTracker())
        result = handle.wait(30)

        assert results == [result]
        assert result.returncode == 1
        assert result.stderr == "\ufffd\ufffd bad"

    def test_command_string_runs_through_shell(self, temp_dir):
        """Test the command line is interpreted by the shell."""
        handle = launch_build("echo built && exit 3", temp_dir, tracker=BuildTracker())
        result = handle.wait(30)
        assert result.stdout.strip() == "built"
        assert result.returncode == 3

    def test_missing_tool_reported_as_failed_build(self, temp_dir):
        """Test an unknown build tool completes as a failed build."""
        results = []
        handle = launch_build("dartgen-no-such-tool build", temp_dir, on_complete=results.append, tracker=BuildTracker())
        handle.wait(30)
        assert len(results) == 1
        assert not results[0].success
        assert results[0].stderr


class TestBuildHandle:
    """Tests for BuildHandle without a watcher thread."""

    def test_unstarted_handle_is_done(self):
        """Test a handle with no thread reports done and no result."""
        handle = BuildHandle(["dart"], "/tmp")
        assert handle.done
        assert handle.wait() is None
