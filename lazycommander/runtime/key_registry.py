"""Key-token to action dispatch tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens bound to a single action callback."""

    keys: tuple[str, ...]
    handler: Callable[[], None]


class KeyRegistry:
    """Exact-match key dispatch; later bindings overwrite earlier ones."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], None]] = {}

    def register(self, *bindings: KeyBinding) -> KeyRegistry:
        for binding in bindings:
            for key in binding.keys:
                self._handlers[key] = binding.handler
        return self

    def dispatch(self, key: str) -> bool:
        """Run the handler bound to ``key``; return whether one existed."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True
