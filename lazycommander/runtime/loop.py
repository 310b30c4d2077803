"""Main interactive event loop for the terminal UI.

One event is taken from the queue and fully applied before the next one is
read. Filesystem work and blocking child processes run inline, so a slow
filesystem or a long-running editor/command stalls the whole UI until it
returns; there is no cancellation and no timeout.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..render import build_frame, render_frame
from ..ui_theme import DEFAULT_THEME, UITheme
from .controller import DualPaneController
from .events import EventQueue, ResizeEvent
from .resize import ResizeCoordinator

logger = logging.getLogger(__name__)

POLL_TIMEOUT_MS = 120


@dataclass
class RuntimeLoopDeps:
    """Collaborators used by ``run_main_loop``."""

    controller: DualPaneController
    coordinator: ResizeCoordinator
    events: EventQueue
    draw: Callable[[list[str]], None]
    theme: UITheme = DEFAULT_THEME


def process_event(deps: RuntimeLoopDeps, event: str | ResizeEvent) -> bool:
    """Apply one event; return ``True`` when the app should quit."""
    if isinstance(event, ResizeEvent):
        deps.coordinator.on_geometry_change(event.columns, event.rows)
        return False
    if event == "CTRL_C":
        return False
    if deps.coordinator.too_small:
        return deps.controller.handle_key_while_blocked(event)
    return deps.controller.handle_key(event)


def redraw(deps: RuntimeLoopDeps) -> None:
    layout = deps.coordinator.layout
    if layout is None:
        return
    deps.draw(build_frame(deps.controller, layout, deps.coordinator.too_small, deps.theme))


def run_main_loop(deps: RuntimeLoopDeps, raw_mode: Callable[[], object]) -> None:
    """Run until a quit key is pressed.

    ``raw_mode`` is a context-manager factory bracketing the TUI session.
    """
    with raw_mode(), deps.events.sigwinch_installed():
        dirty = True
        while True:
            if deps.controller.expire_status():
                dirty = True
            if dirty:
                redraw(deps)
                dirty = False
            try:
                event = deps.events.next_event(timeout_ms=POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if event is None:
                continue
            if process_event(deps, event):
                logger.info("quit requested")
                break
            dirty = True


def make_draw(stdout_fd: int) -> Callable[[list[str]], None]:
    return lambda rows: render_frame(rows, stdout_fd)
