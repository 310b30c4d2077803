"""Tests for directory scanning, ordering, and failure reporting."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from lazycommander.file_model import (
    PARENT_NAME,
    Entry,
    EntryKind,
    ExtensionTable,
    scan_directory,
    sort_entries,
)

PLAIN = ExtensionTable(detect_source_files=False)


class ScanDirectoryTests(unittest.TestCase):
    def test_scenario_folder_first_then_lexicographic(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("hi\n", encoding="utf-8")
            (root / "B").mkdir()
            script = root / "c.sh"
            script.write_text("#!/bin/sh\n", encoding="utf-8")
            script.chmod(0o755)

            entries, error = scan_directory(root, PLAIN)

        self.assertIsNone(error)
        self.assertEqual([entry.name for entry in entries], ["..", "B", "a.txt", "c.sh"])
        self.assertEqual(
            [entry.kind for entry in entries],
            [EntryKind.FOLDER, EntryKind.FOLDER, EntryKind.TEXT, EntryKind.EXECUTABLE],
        )

    def test_names_match_children_plus_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            names = {"one", "two.md", ".hidden", "dir1", "dir2"}
            for name in names:
                if name.startswith("dir"):
                    (root / name).mkdir()
                else:
                    (root / name).write_text("", encoding="utf-8")

            entries, error = scan_directory(root, PLAIN)

        self.assertIsNone(error)
        self.assertEqual({entry.name for entry in entries}, names | {PARENT_NAME})
        self.assertNotIn(".", {entry.name for entry in entries})

    def test_filesystem_root_has_no_parent_entry(self) -> None:
        entries, error = scan_directory(Path("/"), PLAIN)
        self.assertIsNone(error)
        self.assertNotIn(PARENT_NAME, [entry.name for entry in entries])

    def test_dangling_symlink_is_classified_other(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            os.symlink(root / "missing-target", root / "dangling")

            entries, error = scan_directory(root, PLAIN)

        self.assertIsNone(error)
        by_name = {entry.name: entry for entry in entries}
        self.assertEqual(by_name["dangling"].kind, EntryKind.OTHER)

    def test_symlink_to_directory_is_a_folder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "real").mkdir()
            os.symlink(root / "real", root / "link")

            entries, _error = scan_directory(root, PLAIN)

        by_name = {entry.name: entry for entry in entries}
        self.assertEqual(by_name["link"].kind, EntryKind.FOLDER)

    def test_missing_directory_reports_error_without_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entries, error = scan_directory(Path(tmp) / "nope", PLAIN)

        self.assertEqual(entries, [])
        self.assertIsInstance(error, FileNotFoundError)

    def test_file_path_reports_not_a_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x", encoding="utf-8")
            entries, error = scan_directory(target, PLAIN)

        self.assertEqual(entries, [])
        self.assertIsInstance(error, NotADirectoryError)


class DefaultExtensionScanTests(unittest.TestCase):
    def test_default_table_classifies_by_extension_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("Makefile", "Notmakefile", "main.py", ".md", "photo.JPG", "blob.unknownext"):
                (root / name).write_text("", encoding="utf-8")

            entries, error = scan_directory(root, ExtensionTable())

        self.assertIsNone(error)
        kinds = {entry.name: entry.kind for entry in entries}
        self.assertEqual(kinds["Makefile"], EntryKind.OTHER)
        self.assertEqual(kinds["Notmakefile"], EntryKind.OTHER)
        self.assertEqual(kinds["main.py"], EntryKind.TEXT)
        self.assertEqual(kinds[".md"], EntryKind.TEXT)
        self.assertEqual(kinds["photo.JPG"], EntryKind.IMAGE)
        self.assertEqual(kinds["blob.unknownext"], EntryKind.OTHER)


class SortEntriesTests(unittest.TestCase):
    def test_sort_is_idempotent_and_folders_lead(self) -> None:
        entries = [
            Entry("zeta", EntryKind.OTHER),
            Entry("Alpha", EntryKind.FOLDER),
            Entry("beta.txt", EntryKind.TEXT),
            Entry("..", EntryKind.FOLDER),
            Entry("gamma", EntryKind.FOLDER),
            Entry("Zed.png", EntryKind.IMAGE),
        ]

        once = sort_entries(entries)
        twice = sort_entries(once)

        self.assertEqual(once, twice)
        self.assertEqual(
            [entry.name for entry in once],
            ["..", "Alpha", "gamma", "Zed.png", "beta.txt", "zeta"],
        )
        kinds = [entry.kind is EntryKind.FOLDER for entry in once]
        self.assertEqual(kinds, sorted(kinds, reverse=True))


if __name__ == "__main__":
    unittest.main()
