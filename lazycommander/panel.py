"""One directory pane: listing plus selection, scroll, and viewport state.

Every mutation ends by re-deriving ``scroll_offset`` from ``selected_index``
and ``viewport_rows`` so the selected row is always inside the visible
window and the window never extends past the listing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .file_model import DEFAULT_EXTENSIONS, Entry, ExtensionTable, scan_directory

logger = logging.getLogger(__name__)

Scanner = Callable[[Path, ExtensionTable], tuple[list[Entry], OSError | None]]


def describe_os_error(exc: OSError) -> str:
    """Short human text for an ``OSError`` suitable for the status line."""
    return exc.strerror or str(exc) or exc.__class__.__name__


def clamp_scroll_offset(scroll_offset: int, selected_index: int, count: int, viewport_rows: int) -> int:
    """Return the scroll offset closest to ``scroll_offset`` that shows ``selected_index``."""
    rows = max(1, viewport_rows)
    if selected_index < scroll_offset:
        scroll_offset = selected_index
    elif selected_index >= scroll_offset + rows:
        scroll_offset = selected_index - rows + 1
    return max(0, min(scroll_offset, max(0, count - rows)))


class Panel:
    """Navigation state bound to one directory."""

    def __init__(
        self,
        path: Path,
        *,
        extensions: ExtensionTable = DEFAULT_EXTENSIONS,
        viewport_rows: int = 1,
        scanner: Scanner = scan_directory,
    ) -> None:
        """Scan ``path`` and bind the panel to it.

        Raises the scan ``OSError`` when the initial directory cannot be listed,
        since a panel never exists without a successfully scanned directory.
        """
        self.extensions = extensions
        self._scanner = scanner
        self.viewport_rows = max(1, viewport_rows)
        target = Path(path).expanduser().resolve()
        listing, scan_error = self._scanner(target, self.extensions)
        if scan_error is not None:
            raise scan_error
        self.current_path: Path = target
        self.listing: list[Entry] = listing
        self.selected_index = 0
        self.scroll_offset = 0

    @property
    def count(self) -> int:
        return len(self.listing)

    @property
    def selected_entry(self) -> Entry | None:
        if not self.listing:
            return None
        return self.listing[self.selected_index]

    def entry_path(self, entry: Entry) -> Path:
        if entry.is_parent:
            return self.current_path.parent
        return self.current_path / entry.name

    def selected_path(self) -> Path | None:
        """Absolute path of the selected entry, ``None`` for ``..`` or empty listings."""
        entry = self.selected_entry
        if entry is None or entry.is_parent:
            return None
        return self.entry_path(entry)

    def visible_entries(self) -> list[Entry]:
        return self.listing[self.scroll_offset : self.scroll_offset + self.viewport_rows]

    def _sync_scroll(self) -> None:
        if not self.listing:
            self.selected_index = 0
        else:
            self.selected_index = max(0, min(self.selected_index, len(self.listing) - 1))
        self.scroll_offset = clamp_scroll_offset(
            self.scroll_offset,
            self.selected_index,
            len(self.listing),
            self.viewport_rows,
        )

    def select_index(self, index: int) -> bool:
        """Move selection to ``index`` clamped into the listing; return whether it moved."""
        previous = self.selected_index
        self.selected_index = index
        self._sync_scroll()
        return self.selected_index != previous

    def move_selection(self, delta: int) -> bool:
        """Move selection by ``delta`` rows without wrapping around."""
        return self.select_index(self.selected_index + delta)

    def select_name(self, name: str) -> bool:
        """Select the entry called ``name`` if present; return whether it was found."""
        for index, entry in enumerate(self.listing):
            if entry.name == name:
                self.select_index(index)
                return True
        return False

    def reset_selection(self) -> None:
        self.selected_index = 0
        self.scroll_offset = 0
        self._sync_scroll()

    def resize_viewport(self, rows: int) -> None:
        """Apply a new visible row count, keeping the selected index."""
        self.viewport_rows = max(1, rows)
        self._sync_scroll()

    def navigate_into(self, entry: Entry) -> str | None:
        """Enter folder ``entry`` (``..`` goes to the parent).

        Returns an error message and leaves the panel untouched when the
        target cannot be listed or ``entry`` is not a folder.
        """
        if not entry.is_folder:
            return f"Not a directory: {entry.name}"
        target = self.entry_path(entry)
        try:
            target = target.resolve()
        except OSError as exc:
            return f"Cannot open {entry.name}: {describe_os_error(exc)}"
        listing, scan_error = self._scanner(target, self.extensions)
        if scan_error is not None:
            return f"Cannot open {target}: {describe_os_error(scan_error)}"
        logger.debug("panel %s -> %s", self.current_path, target)
        self.current_path = target
        self.listing = listing
        self.reset_selection()
        return None

    def refresh_or_ascend(self) -> str | None:
        """Refresh, or move to the nearest ancestor that can still be listed.

        Used after a mutation may have removed or renamed away the directory
        this panel shows.
        """
        if self.refresh() is None:
            return None
        target = self.current_path.parent
        while True:
            listing, scan_error = self._scanner(target, self.extensions)
            if scan_error is None:
                break
            if target.parent == target:
                return f"Cannot list {self.current_path}: {describe_os_error(scan_error)}"
            target = target.parent
        logger.info("panel %s is gone, moved to %s", self.current_path, target)
        self.current_path = target
        self.listing = listing
        self.reset_selection()
        return None

    def refresh(self) -> str | None:
        """Re-scan ``current_path``, keeping the selected name when it still exists.

        If the name is gone the numeric index is clamped instead. A failed
        scan leaves the previous listing in place and returns a message.
        """
        listing, scan_error = self._scanner(self.current_path, self.extensions)
        if scan_error is not None:
            return f"Cannot list {self.current_path}: {describe_os_error(scan_error)}"
        previous = self.selected_entry
        self.listing = listing
        if previous is None or not self.select_name(previous.name):
            self._sync_scroll()
        return None
