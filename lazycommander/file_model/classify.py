"""Entry classification from file mode and name.

Priority is directory, then the owner-executable bit, then the configured
extension tables, then (optionally) any extension Pygments maps to a lexer,
which counts as text. The result for a regular file depends only on its
extension and executable bit. Everything else is ``OTHER``.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from functools import lru_cache

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from .types import EntryKind

DEFAULT_TEXT_EXTENSIONS: tuple[str, ...] = (".txt", ".md")
DEFAULT_IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg")
DEFAULT_VIDEO_EXTENSIONS: tuple[str, ...] = (".mp4", ".mkv")


def normalize_extension(value: str) -> str | None:
    """Return ``value`` as a lowercase ``.ext`` token, or ``None`` if unusable."""
    stripped = value.strip().lower()
    if not stripped:
        return None
    if not stripped.startswith("."):
        stripped = "." + stripped
    if stripped == "." or "/" in stripped:
        return None
    return stripped


def name_extension(name: str) -> str | None:
    """Lowercase text from the last ``.`` of ``name`` on, ``None`` without one.

    A leading dot counts, so a file named ``.md`` has extension ``.md``.
    """
    _, dot, tail = name.rpartition(".")
    if not dot or not tail:
        return None
    return "." + tail.lower()


@dataclass(frozen=True)
class ExtensionTable:
    """Extension sets used to classify regular files."""

    text: frozenset[str] = frozenset(DEFAULT_TEXT_EXTENSIONS)
    image: frozenset[str] = frozenset(DEFAULT_IMAGE_EXTENSIONS)
    video: frozenset[str] = frozenset(DEFAULT_VIDEO_EXTENSIONS)
    detect_source_files: bool = True

    def kind_for_name(self, name: str) -> EntryKind:
        suffix = name_extension(name)
        if suffix is None:
            return EntryKind.OTHER
        if suffix in self.text:
            return EntryKind.TEXT
        if suffix in self.image:
            return EntryKind.IMAGE
        if suffix in self.video:
            return EntryKind.VIDEO
        if self.detect_source_files and has_source_lexer(suffix):
            return EntryKind.TEXT
        return EntryKind.OTHER


DEFAULT_EXTENSIONS = ExtensionTable()


@lru_cache(maxsize=1024)
def has_source_lexer(suffix: str) -> bool:
    """Return whether Pygments maps files ending in ``suffix`` to a lexer."""
    try:
        get_lexer_for_filename("x" + suffix)
    except ClassNotFound:
        return False
    return True


def classify_mode(name: str, st_mode: int, extensions: ExtensionTable = DEFAULT_EXTENSIONS) -> EntryKind:
    """Classify one entry from its ``st_mode`` and basename."""
    if stat.S_ISDIR(st_mode):
        return EntryKind.FOLDER
    if st_mode & stat.S_IXUSR:
        return EntryKind.EXECUTABLE
    return extensions.kind_for_name(name)
