"""Application bootstrap: build panels, terminal, launcher, and run the loop."""

from __future__ import annotations

import logging
import os
import sys
import termios
from pathlib import Path

from ..launcher import Launcher
from ..panel import Panel, describe_os_error
from ..ui_theme import UITheme
from .config import AppConfig
from .controller import DualPaneController
from .events import EventQueue
from .loop import RuntimeLoopDeps, make_draw, run_main_loop
from .resize import ResizeCoordinator
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def open_panel(path: Path, config: AppConfig) -> Panel:
    try:
        return Panel(path, extensions=config.extensions)
    except OSError as exc:
        raise SystemExit(f"Cannot open {path}: {describe_os_error(exc)}") from exc


def run_commander(left_path: Path, right_path: Path, config: AppConfig, theme: UITheme) -> None:
    """Run the interactive two-pane browser until the user quits.

    Exits with a non-zero status when the terminal cannot be acquired.
    """
    left = open_panel(left_path, config)
    right = open_panel(right_path, config)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise SystemExit("lazycommander needs an interactive terminal (stdin and stdout must be a TTY).")
    try:
        terminal = TerminalController(stdin_fd, stdout_fd)
    except termios.error as exc:
        raise SystemExit(f"Cannot initialize terminal: {exc}") from exc

    launcher = Launcher(
        editor=config.editor,
        opener=config.opener,
        shell=config.shell,
        terminal=terminal,
        pause_after_command=config.pause_after_command,
    )
    controller = DualPaneController(left, right, launcher, status_seconds=config.status_seconds)
    deps = RuntimeLoopDeps(
        controller=controller,
        coordinator=ResizeCoordinator(controller),
        events=EventQueue(stdin_fd, terminal.size),
        draw=make_draw(stdout_fd),
        theme=theme,
    )
    logger.info("starting in %s | %s", left.current_path, right.current_path)
    run_main_loop(deps, terminal.raw_mode)
