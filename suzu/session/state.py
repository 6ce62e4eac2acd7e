from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from suzu.errors import SuzuError


@dataclass
class AppState:
    """Shared front-end state for one interactive run.

    pending_command:
        Line typed by the operator, set by the input layer and consumed exactly once
        by the dispatcher (see :meth:`take_command`). Never retried.
    error:
        Last operator-facing error. Stays until the next keystroke dismisses it.
    message:
        Informational text produced by a command (help table, chart list, about).
    """

    pending_command: Optional[str] = None
    error: Optional[SuzuError] = None
    message: Optional[str] = None

    running: bool = True
    show_help: bool = False
    show_about: bool = False

    def submit(self, line: str) -> None:
        self.pending_command = line

    def take_command(self) -> Optional[str]:
        cmd = self.pending_command
        self.pending_command = None
        return cmd

    def set_error(self, error: Optional[SuzuError]) -> None:
        self.error = error

    def dismiss_error(self) -> Optional[SuzuError]:
        err = self.error
        self.error = None
        return err

    def quit(self) -> None:
        self.running = False
