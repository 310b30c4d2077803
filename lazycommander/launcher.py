"""External program launching for editor, opener, and shell commands.

Two capabilities are kept apart: ``run_blocking`` leaves TUI mode, runs a
child on the foreground terminal, and waits for it; ``spawn_detached``
starts a child in its own session with all standard streams pointed at
``/dev/null`` and never waits for it. Both return an error message string
instead of raising so callers can show it on the status line.
"""

from __future__ import annotations

import contextlib
import logging
import shlex
import signal
import subprocess
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class TuiSuspender(Protocol):
    def disable_tui_mode(self) -> None: ...

    def enable_tui_mode(self) -> None: ...

    def wait_for_enter(self, prompt: str) -> None: ...


def split_command(command: str) -> list[str]:
    try:
        return shlex.split(command)
    except ValueError:
        return []


@contextlib.contextmanager
def _sigint_deferred_to_child():
    """Ignore Ctrl+C in this process while a foreground child owns the terminal.

    A Python-level handler (unlike ``SIG_IGN``) is reset on ``exec``, so the
    child still receives SIGINT normally.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, lambda _signum, _frame: None)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def run_blocking(
    argv: Sequence[str],
    terminal: TuiSuspender | None,
    cwd: Path | None = None,
    pause_prompt: str | None = None,
) -> str | None:
    """Run ``argv`` in the foreground with TUI mode suspended; wait for exit.

    The child's exit status is logged but never treated as an error. Only a
    failure to start the program is reported back.
    """
    if terminal is not None:
        terminal.disable_tui_mode()
    try:
        try:
            with _sigint_deferred_to_child():
                proc = subprocess.run(list(argv), cwd=cwd, check=False)
        except OSError as exc:
            logger.warning("failed to launch %s: %s", argv[0], exc)
            return f"Failed to launch {argv[0]}: {exc.strerror or exc}"
        if proc.returncode != 0:
            logger.info("%s exited with status %s", argv[0], proc.returncode)
        if terminal is not None and pause_prompt is not None:
            terminal.wait_for_enter(pause_prompt.format(status=proc.returncode))
    finally:
        if terminal is not None:
            terminal.enable_tui_mode()
    return None


def spawn_detached(argv: Sequence[str], cwd: Path | None = None) -> str | None:
    """Start ``argv`` without waiting and without sharing the terminal."""
    try:
        subprocess.Popen(
            list(argv),
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            close_fds=True,
            start_new_session=True,
        )
    except OSError as exc:
        logger.warning("failed to spawn %s: %s", argv[0], exc)
        return f"Failed to launch {argv[0]}: {exc.strerror or exc}"
    logger.debug("spawned %s", argv)
    return None


@dataclass
class Launcher:
    """Configured editor/opener/shell commands bound to one terminal."""

    editor: str
    opener: str
    shell: str
    terminal: TuiSuspender | None = None
    pause_after_command: bool = True

    def edit(self, target: Path) -> str | None:
        cmd = split_command(self.editor)
        if not cmd:
            return "Cannot edit: no editor configured"
        return run_blocking([*cmd, str(target)], self.terminal, cwd=target.parent)

    def open_detached(self, target: Path) -> str | None:
        cmd = split_command(self.opener)
        if not cmd:
            return "Cannot open: no opener configured"
        return spawn_detached([*cmd, str(target)], cwd=target.parent)

    def run_command(self, command: str, cwd: Path) -> str | None:
        shell = split_command(self.shell)
        if not shell:
            return "Cannot run command: no shell configured"
        pause_prompt = "\r\n[exit {status}] Press Enter to continue" if self.pause_after_command else None
        return run_blocking([*shell, "-c", command], self.terminal, cwd=cwd, pause_prompt=pause_prompt)
