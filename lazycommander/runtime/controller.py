"""Two-pane controller: focus, clipboard, rename and command-line buffers.

All input is applied here one key token at a time. The controller routes
navigation to the focused panel, owns the cross-pane state, and re-scans
panels after anything that can change directory contents.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Protocol

from ..file_model import EntryKind
from ..fileops import NAME_MAX, FileOperationError, copy_into, delete_path, rename_entry
from ..panel import Panel
from .key_registry import KeyBinding, KeyRegistry

logger = logging.getLogger(__name__)

COMMAND_BUFFER_LIMIT = 511
RENAME_BUFFER_LIMIT = NAME_MAX
QUIT_KEYS = frozenset({"F10", "CTRL_Q"})
BLOCKED_QUIT_KEYS = QUIT_KEYS | {"q"}


class Focus(Enum):
    LEFT = "left"
    RIGHT = "right"


class Mode(Enum):
    BROWSE = "browse"
    RENAME = "rename"


class ProgramLauncher(Protocol):
    def edit(self, target: Path) -> str | None: ...

    def open_detached(self, target: Path) -> str | None: ...

    def run_command(self, command: str, cwd: Path) -> str | None: ...


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character token."""
    return len(key) == 1 and key.isprintable()


class DualPaneController:
    """Owns both panels and applies the browse/rename command protocol."""

    def __init__(
        self,
        left: Panel,
        right: Panel,
        launcher: ProgramLauncher,
        *,
        status_seconds: float = 1.5,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.left = left
        self.right = right
        self.launcher = launcher
        self.status_seconds = status_seconds
        self._monotonic = monotonic
        self.focus = Focus.LEFT
        self.clipboard_path: Path | None = None
        self.rename_buffer: str | None = None
        self._rename_target: tuple[Panel, str] | None = None
        self.command_buffer = ""
        self.status_message = ""
        self.status_message_until = 0.0
        self.browse_keys = KeyRegistry().register(
            KeyBinding(("TAB",), self.switch_focus),
            KeyBinding(("UP",), lambda: self.move_selection(-1)),
            KeyBinding(("DOWN",), lambda: self.move_selection(1)),
            KeyBinding(("PAGE_UP",), lambda: self.move_selection(-self.focused_panel.viewport_rows)),
            KeyBinding(("PAGE_DOWN",), lambda: self.move_selection(self.focused_panel.viewport_rows)),
            KeyBinding(("HOME",), lambda: self.focused_panel.select_index(0)),
            KeyBinding(("END",), lambda: self.focused_panel.select_index(self.focused_panel.count - 1)),
            KeyBinding(("ENTER",), self.activate),
            KeyBinding(("F1",), self.copy_selection),
            KeyBinding(("F2",), self.paste),
            KeyBinding(("F3",), self.begin_rename),
            KeyBinding(("F5",), self.delete_selection),
            KeyBinding(("CTRL_R",), self.refresh_all),
            KeyBinding(("BACKSPACE",), self._command_backspace),
            KeyBinding(("ESC", "CTRL_U"), self._clear_command_buffer),
        )
        self.rename_keys = KeyRegistry().register(
            KeyBinding(("ENTER",), self.commit_rename),
            KeyBinding(("F3", "ESC"), self.cancel_rename),
            KeyBinding(("BACKSPACE",), self._rename_backspace),
        )

    @property
    def mode(self) -> Mode:
        return Mode.BROWSE if self.rename_buffer is None else Mode.RENAME

    @property
    def focused_panel(self) -> Panel:
        return self.left if self.focus is Focus.LEFT else self.right

    @property
    def other_panel(self) -> Panel:
        return self.right if self.focus is Focus.LEFT else self.left

    @property
    def panels(self) -> tuple[Panel, Panel]:
        return (self.left, self.right)

    def set_status(self, message: str) -> None:
        self.status_message = message
        self.status_message_until = self._monotonic() + self.status_seconds

    def expire_status(self) -> bool:
        """Clear an elapsed status message; return whether anything changed."""
        if not self.status_message or self._monotonic() < self.status_message_until:
            return False
        self.status_message = ""
        self.status_message_until = 0.0
        return True

    def _report(self, error: str | None) -> None:
        if error is not None:
            self.set_status(error)

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return ``True`` when the app should quit."""
        if key in QUIT_KEYS:
            return True
        if self.mode is Mode.RENAME:
            if not self.rename_keys.dispatch(key) and is_text_key(key):
                self._rename_append(key)
            return False
        if key == "q" and not self.command_buffer:
            return True
        if not self.browse_keys.dispatch(key) and is_text_key(key):
            self._command_append(key)
        return False

    def handle_key_while_blocked(self, key: str) -> bool:
        """Key handling for the too-small display: only quit is accepted."""
        return key in BLOCKED_QUIT_KEYS

    def switch_focus(self) -> None:
        self.focus = Focus.RIGHT if self.focus is Focus.LEFT else Focus.LEFT

    def move_selection(self, delta: int) -> None:
        self.focused_panel.move_selection(delta)

    def activate(self) -> None:
        if self.command_buffer:
            self.run_command()
        else:
            self.open_entry(self.focused_panel)

    def open_entry(self, panel: Panel) -> None:
        """Open the panel's selected entry according to its kind.

        Folders (and ``..``) are entered; text files go to the editor, which
        blocks until it exits; anything else is handed to the detached
        opener. Every successful open leaves the selection at the top.
        """
        entry = panel.selected_entry
        if entry is None:
            return
        if entry.is_folder:
            self._report(panel.navigate_into(entry))
            return
        target = panel.entry_path(entry)
        if entry.kind is EntryKind.TEXT:
            self._report(self.launcher.edit(target))
        else:
            self._report(self.launcher.open_detached(target))
        self._report(panel.refresh())
        panel.reset_selection()

    def run_command(self) -> None:
        command = self.command_buffer
        self.command_buffer = ""
        cwd = self.focused_panel.current_path
        logger.info("running command in %s: %s", cwd, command)
        self._report(self.launcher.run_command(command, cwd))
        self.refresh_all()

    def refresh_all(self) -> None:
        for panel in self.panels:
            self._report(panel.refresh())

    def _refresh_after_mutation(self, panel: Panel, removed: Path | None = None) -> None:
        """Re-scan ``panel`` and, when affected, the other panel.

        ``removed`` is a path that may no longer exist; a panel showing it or
        anything below it moves up to the nearest directory that still lists.
        """
        self._report(panel.refresh())
        other = self.right if panel is self.left else self.left
        if removed is not None and other.current_path.is_relative_to(removed):
            self._report(other.refresh_or_ascend())
        elif other.current_path == panel.current_path:
            self._report(other.refresh())

    def copy_selection(self) -> None:
        path = self.focused_panel.selected_path()
        if path is None:
            self.set_status("Nothing to copy")
            return
        self.clipboard_path = path
        self.set_status(f"Copied {path.name}")

    def paste(self) -> None:
        if self.clipboard_path is None:
            self.set_status("Clipboard is empty")
            return
        panel = self.focused_panel
        try:
            target = copy_into(self.clipboard_path, panel.current_path)
        except FileOperationError as exc:
            self.set_status(str(exc))
        else:
            self.set_status(f"Pasted {target.name}")
        self._refresh_after_mutation(panel)

    def delete_selection(self) -> None:
        panel = self.focused_panel
        path = panel.selected_path()
        if path is None:
            self.set_status("Cannot delete ..")
            return
        try:
            delete_path(path)
        except FileOperationError as exc:
            self.set_status(str(exc))
        else:
            self.set_status(f"Deleted {path.name}")
        self._refresh_after_mutation(panel, removed=path)

    def begin_rename(self) -> None:
        panel = self.focused_panel
        entry = panel.selected_entry
        if entry is None or entry.is_parent:
            self.set_status("Cannot rename ..")
            return
        self.rename_buffer = ""
        self._rename_target = (panel, entry.name)

    def cancel_rename(self) -> None:
        self.rename_buffer = None
        self._rename_target = None

    def commit_rename(self) -> None:
        new_name = self.rename_buffer or ""
        target = self._rename_target
        self.cancel_rename()
        if target is None:
            return
        panel, old_name = target
        old_path = panel.current_path / old_name
        try:
            rename_entry(panel.current_path, old_name, new_name)
        except FileOperationError as exc:
            self.set_status(str(exc))
            self._refresh_after_mutation(panel)
            return
        self.set_status(f"Renamed {old_name} -> {new_name}")
        self._refresh_after_mutation(panel, removed=old_path)
        panel.select_name(new_name)

    def _rename_append(self, text: str) -> None:
        if self.rename_buffer is not None and len(self.rename_buffer) < RENAME_BUFFER_LIMIT:
            self.rename_buffer += text

    def _rename_backspace(self) -> None:
        if self.rename_buffer:
            self.rename_buffer = self.rename_buffer[:-1]

    def _command_append(self, text: str) -> None:
        if len(self.command_buffer) < COMMAND_BUFFER_LIMIT:
            self.command_buffer += text

    def _command_backspace(self) -> None:
        self.command_buffer = self.command_buffer[:-1]

    def _clear_command_buffer(self) -> None:
        self.command_buffer = ""
