"""Native recursive copy, recursive delete, and rename primitives.

Failures are raised as ``FileOperationError`` carrying a status-line message.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

NAME_MAX = 255


class FileOperationError(Exception):
    """A filesystem mutation failed; ``str(exc)`` is shown to the user."""


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def unique_target(directory: Path, name: str) -> Path:
    """Return ``directory / name`` or the first free ``name1``, ``name2``, ... variant."""
    candidate = directory / name
    suffix = 1
    while os.path.lexists(candidate):
        candidate = directory / f"{name}{suffix}"
        suffix += 1
    return candidate


def validate_new_name(name: str) -> str | None:
    """Return why ``name`` cannot be used as a directory entry name, or ``None``."""
    if not name:
        return "Name is empty"
    if name in {".", ".."}:
        return f"Invalid name: {name}"
    if "/" in name or "\0" in name:
        return f"Invalid name: {name}"
    if len(name.encode("utf-8", errors="surrogateescape")) > NAME_MAX:
        return "Name too long"
    return None


def copy_into(source: Path, directory: Path) -> Path:
    """Recursively copy ``source`` into ``directory`` under a non-colliding name.

    Symlinks are copied as links, not followed. Returns the created path.
    """
    if not os.path.lexists(source):
        raise FileOperationError(f"Cannot paste {source.name}: no longer exists")
    target = unique_target(directory, source.name)
    is_tree = source.is_dir() and not source.is_symlink()
    if is_tree:
        try:
            inside_source = target.resolve().is_relative_to(source.resolve())
        except OSError:
            inside_source = False
        if inside_source:
            raise FileOperationError(f"Cannot copy {source.name} into itself")
    try:
        if source.is_symlink():
            os.symlink(os.readlink(source), target)
        elif is_tree:
            shutil.copytree(source, target, symlinks=True)
        else:
            shutil.copy2(source, target)
    except shutil.Error as exc:
        logger.warning("partial copy %s -> %s: %s", source, target, exc)
        raise FileOperationError(f"Copied {source.name} with errors") from exc
    except OSError as exc:
        logger.warning("copy %s -> %s failed: %s", source, target, exc)
        raise FileOperationError(f"Cannot paste {source.name}: {_reason(exc)}") from exc
    logger.info("copied %s -> %s", source, target)
    return target


def delete_path(path: Path) -> None:
    """Remove ``path``; directories are removed recursively, links are unlinked."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            os.unlink(path)
    except OSError as exc:
        logger.warning("delete %s failed: %s", path, exc)
        raise FileOperationError(f"Cannot delete {path.name}: {_reason(exc)}") from exc
    logger.info("deleted %s", path)


def rename_entry(directory: Path, old_name: str, new_name: str) -> Path:
    """Rename ``directory / old_name`` to ``new_name`` in the same directory.

    An existing target is never overwritten.
    """
    problem = validate_new_name(new_name)
    if problem is not None:
        raise FileOperationError(problem)
    source = directory / old_name
    target = directory / new_name
    if new_name == old_name:
        return target
    if os.path.lexists(target):
        raise FileOperationError(f"Cannot rename: {new_name} already exists")
    try:
        os.rename(source, target)
    except OSError as exc:
        logger.warning("rename %s -> %s failed: %s", source, target, exc)
        raise FileOperationError(f"Cannot rename {old_name}: {_reason(exc)}") from exc
    logger.info("renamed %s -> %s", source, target)
    return target
