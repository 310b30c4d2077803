"""Domain datatypes for directory listings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PARENT_NAME = ".."


class EntryKind(Enum):
    """Classification of one directory child, fixed at scan time."""

    FOLDER = "folder"
    TEXT = "text"
    EXECUTABLE = "executable"
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    """One child of a listed directory.

    ``name`` is the bare basename; the synthetic parent reference is named
    ``..`` and is always classified as a folder.
    """

    name: str
    kind: EntryKind

    @property
    def is_folder(self) -> bool:
        return self.kind is EntryKind.FOLDER

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_NAME


PARENT_ENTRY = Entry(name=PARENT_NAME, kind=EntryKind.FOLDER)


__all__ = [
    "PARENT_NAME",
    "PARENT_ENTRY",
    "EntryKind",
    "Entry",
]
