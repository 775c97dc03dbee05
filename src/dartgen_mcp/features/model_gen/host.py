"""Host environments the generate-model command runs inside.

The orchestrator never touches a UI directly. Everything that would belong
to an editor (prompts, directory picker, messages, opening a document, the
workspace root) goes through a `HostContext` passed in explicitly.
"""

import os
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from dartgen_mcp.core.logging import get_logger
from dartgen_mcp.utils.console_logger import ConsoleLogger, console


@dataclass
class HostMessage:
    """A message shown to the user."""
    level: str
    message: str


class HostContext(ABC):
    """Interface between the command and the environment hosting it."""

    def __init__(self, workspace_root: str) -> None:
        self.workspace_root = os.path.abspath(workspace_root)

    @abstractmethod
    def prompt_text(self, prompt: str) -> Optional[str]:
        """Ask for a free-text value; None or "" means the user gave nothing."""

    @abstractmethod
    def pick_directory(self, prompt: str) -> Optional[str]:
        """Ask for a target directory; None means nothing was selected."""

    @abstractmethod
    def show_info(self, message: str) -> None:
        ...

    @abstractmethod
    def show_error(self, message: str) -> None:
        ...

    @abstractmethod
    def open_document(self, file_path: str) -> None:
        """Display a written file to the user."""


class RecordingHost(HostContext):
    """Host for tool invocations where every input is supplied up front.

    Messages and opened documents are recorded so they can be returned to
    the caller. Build completion messages may arrive from another thread
    after the command has returned.
    """

    def __init__(
        self,
        workspace_root: str,
        model_name: Optional[str] = None,
        base_class_name: Optional[str] = None,
        output_dir: Optional[str] = None,
    ) -> None:
        super().__init__(workspace_root)
        self._answers: List[Optional[str]] = [model_name, base_class_name]
        self._output_dir = output_dir
        self._lock = threading.Lock()
        self.messages: List[HostMessage] = []
        self.opened_documents: List[str] = []

    def prompt_text(self, prompt: str) -> Optional[str]:
        if not self._answers:
            return None
        return self._answers.pop(0)

    def pick_directory(self, prompt: str) -> Optional[str]:
        if not self._output_dir:
            return None
        if os.path.isabs(self._output_dir):
            return self._output_dir
        return os.path.join(self.workspace_root, self._output_dir)

    def _record(self, level: str, message: str) -> None:
        with self._lock:
            self.messages.append(HostMessage(level=level, message=message))

    def show_info(self, message: str) -> None:
        self._record("info", message)

    def show_error(self, message: str) -> None:
        self._record("error", message)

    def open_document(self, file_path: str) -> None:
        with self._lock:
            self.opened_documents.append(file_path)

    def snapshot(self) -> Dict[str, Any]:
        """Messages and documents recorded so far."""
        with self._lock:
            return {
                "messages": [{"level": m.level, "message": m.message} for m in self.messages],
                "opened_documents": list(self.opened_documents),
            }


class TerminalHost(HostContext):
    """Interactive console host: prompts on stdin, prints to the console."""

    def __init__(
        self,
        workspace_root: str,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[ConsoleLogger] = None,
    ) -> None:
        super().__init__(workspace_root)
        self._input = input_func
        self._console = output or console
        self._logger = get_logger("host.terminal")

    def prompt_text(self, prompt: str) -> Optional[str]:
        try:
            read = self._input or input
            answer = read(f"{prompt}: ")
        except EOFError:
            return None
        return answer.strip() or None

    def pick_directory(self, prompt: str) -> Optional[str]:
        answer = self.prompt_text(prompt)
        if answer is None:
            return None
        path = os.path.expanduser(answer)
        if not os.path.isabs(path):
            path = os.path.join(self.workspace_root, path)
        return path

    def show_info(self, message: str) -> None:
        self._console.log(message)

    def show_error(self, message: str) -> None:
        self._console.error(message)

    def open_document(self, file_path: str) -> None:
        self._logger.debug("document_opened", file=file_path)
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
        self._console.separator()
        self._console.log(file_path)
        self._console.separator()
        self._console.log(content)
