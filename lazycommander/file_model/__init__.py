"""Directory entry model: types, classification, and scanning."""

from .classify import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IMAGE_EXTENSIONS,
    DEFAULT_TEXT_EXTENSIONS,
    DEFAULT_VIDEO_EXTENSIONS,
    ExtensionTable,
    classify_mode,
    name_extension,
    normalize_extension,
)
from .fs import classify_child, entry_sort_key, is_filesystem_root, scan_directory, sort_entries
from .types import PARENT_ENTRY, PARENT_NAME, Entry, EntryKind

__all__ = [
    "DEFAULT_EXTENSIONS",
    "DEFAULT_IMAGE_EXTENSIONS",
    "DEFAULT_TEXT_EXTENSIONS",
    "DEFAULT_VIDEO_EXTENSIONS",
    "ExtensionTable",
    "classify_mode",
    "name_extension",
    "normalize_extension",
    "classify_child",
    "entry_sort_key",
    "is_filesystem_root",
    "scan_directory",
    "sort_entries",
    "PARENT_ENTRY",
    "PARENT_NAME",
    "Entry",
    "EntryKind",
]
