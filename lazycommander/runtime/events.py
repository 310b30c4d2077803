"""Single-consumer event queue merging key tokens and geometry changes.

SIGWINCH and size polling both post ``ResizeEvent`` objects into the same
queue that key tokens are read through, so the loop sees every change in
order and one at a time.
"""

from __future__ import annotations

import contextlib
import signal
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key


@dataclass(frozen=True)
class ResizeEvent:
    columns: int
    rows: int


Event = str | ResizeEvent


class EventQueue:
    """Produce events from a key reader and a terminal-size probe."""

    def __init__(
        self,
        stdin_fd: int,
        terminal_size: Callable[[], tuple[int, int]],
        key_reader: Callable[..., str] = read_key,
    ) -> None:
        self.stdin_fd = stdin_fd
        self._terminal_size = terminal_size
        self._key_reader = key_reader
        self._pending: deque[Event] = deque()
        self._last_size: tuple[int, int] | None = None
        self._skip_next_lf = False

    def post(self, event: Event) -> None:
        self._pending.append(event)

    def poll_geometry(self) -> None:
        """Post a ``ResizeEvent`` if the terminal size differs from the last seen one."""
        size = self._terminal_size()
        if size == self._last_size:
            return
        self._last_size = size
        self.post(ResizeEvent(columns=size[0], rows=size[1]))

    def _on_sigwinch(self, _signum, _frame) -> None:
        self.poll_geometry()

    @contextlib.contextmanager
    def sigwinch_installed(self):
        """Route SIGWINCH into the queue for the duration of the block."""
        if not hasattr(signal, "SIGWINCH"):
            yield
            return
        previous = signal.signal(signal.SIGWINCH, self._on_sigwinch)
        try:
            yield
        finally:
            signal.signal(signal.SIGWINCH, previous)

    def _normalize_enter(self, key: str) -> str | None:
        # Terminals send CR, LF, or CRLF for Enter; report one ENTER per press.
        if key == "ENTER_LF" and self._skip_next_lf:
            self._skip_next_lf = False
            return None
        self._skip_next_lf = key == "ENTER_CR"
        if key in {"ENTER_CR", "ENTER_LF"}:
            return "ENTER"
        return key

    def next_event(self, timeout_ms: int | None = None) -> Event | None:
        """Return the next queued event or key token, ``None`` on timeout."""
        self.poll_geometry()
        if self._pending:
            return self._pending.popleft()
        key = self._key_reader(self.stdin_fd, timeout_ms=timeout_ms)
        if self._pending:
            # A resize arrived while waiting; deliver it before the key.
            if key:
                normalized = self._normalize_enter(key)
                if normalized is not None:
                    self._pending.append(normalized)
            return self._pending.popleft()
        if not key:
            return None
        return self._normalize_enter(key)
