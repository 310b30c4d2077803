"""Directory scanning into sorted entry listings."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .classify import DEFAULT_EXTENSIONS, ExtensionTable, classify_mode
from .types import PARENT_ENTRY, Entry, EntryKind

logger = logging.getLogger(__name__)


def entry_sort_key(entry: Entry) -> tuple[bool, str]:
    """Folders first, then plain lexicographic order by name."""
    return (entry.kind is not EntryKind.FOLDER, entry.name)


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    return sorted(entries, key=entry_sort_key)


def is_filesystem_root(path: Path) -> bool:
    return path.parent == path


def classify_child(directory: Path, name: str, extensions: ExtensionTable = DEFAULT_EXTENSIONS) -> EntryKind:
    """Stat ``directory / name`` (following links) and classify it.

    A child that cannot be stat'ed (dangling link, raced deletion, no
    permission) is reported as ``OTHER`` instead of failing the scan.
    """
    try:
        st = os.stat(directory / name)
    except OSError as exc:
        logger.debug("stat failed for %s: %s", directory / name, exc)
        return EntryKind.OTHER
    return classify_mode(name, st.st_mode, extensions)


def scan_directory(
    directory: Path,
    extensions: ExtensionTable = DEFAULT_EXTENSIONS,
) -> tuple[list[Entry], OSError | None]:
    """List ``directory`` as sorted entries.

    Returns ``(entries, scan_error)``. When the directory itself cannot be
    read, ``entries`` is empty and ``scan_error`` holds the failure; callers
    must keep their previous listing in that case. The synthetic ``..``
    entry is included except at the filesystem root.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                entries.append(Entry(name=child.name, kind=classify_child(directory, child.name, extensions)))
    except OSError as exc:
        logger.info("cannot list %s: %s", directory, exc)
        return [], exc

    if not is_filesystem_root(directory):
        entries.append(PARENT_ENTRY)
    return sort_entries(entries), None
