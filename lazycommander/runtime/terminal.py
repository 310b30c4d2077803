"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching, plus the cooked-mode
pause shown after a shell command returns.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty


class TerminalController:
    """Manage terminal mode transitions for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state; raises ``termios.error`` when stdin is not a terminal."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Restore the main screen, cursor, and saved tty attributes."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the controlling terminal."""
        term = shutil.get_terminal_size((80, 24))
        return term.columns, term.lines

    def wait_for_enter(self, prompt: str) -> None:
        """Print ``prompt`` and block until a newline (or EOF) arrives on stdin."""
        os.write(self.stdout_fd, prompt.encode("utf-8", errors="replace"))
        while True:
            chunk = os.read(self.stdin_fd, 1)
            if not chunk or chunk in {b"\n", b"\r"}:
                return

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
