"""End-to-end key sessions against real directories.

Drives the controller through ``process_event`` exactly as the main loop
does, with a fake launcher standing in for external programs.
"""

from __future__ import annotations

import os
import stat
import tempfile
import unittest
from pathlib import Path

from lazycommander.file_model import ExtensionTable
from lazycommander.panel import Panel
from lazycommander.runtime.controller import DualPaneController, Mode
from lazycommander.runtime.events import ResizeEvent
from lazycommander.runtime.loop import RuntimeLoopDeps, process_event
from lazycommander.runtime.resize import ResizeCoordinator

DEFAULTS = ExtensionTable()


class _FakeLauncher:
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def edit(self, target):
        self.calls.append(("edit", target))
        return None

    def open_detached(self, target):
        self.calls.append(("open", target))
        return None

    def run_command(self, command, cwd):
        self.calls.append(("run", (command, cwd)))
        if command.startswith("mkdir "):
            os.mkdir(cwd / command.split(" ", 1)[1])
        return None


class CommanderSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.work = self.root / "work"
        self.backup = self.root / "backup"
        self.work.mkdir()
        self.backup.mkdir()
        (self.work / "B").mkdir()
        (self.work / "B" / "nested.txt").write_text("nested", encoding="utf-8")
        (self.work / "a.txt").write_text("alpha", encoding="utf-8")
        script = self.work / "c.sh"
        script.write_text("#!/bin/sh\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR)

        self.launcher = _FakeLauncher()
        left = Panel(self.work, extensions=DEFAULTS)
        right = Panel(self.backup, extensions=DEFAULTS)
        self.controller = DualPaneController(left, right, self.launcher)
        self.deps = RuntimeLoopDeps(
            controller=self.controller,
            coordinator=ResizeCoordinator(self.controller),
            events=None,
            draw=lambda rows: None,
        )
        self.send(ResizeEvent(80, 24))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def send(self, *events) -> bool:
        quit_requested = False
        for event in events:
            quit_requested = process_event(self.deps, event)
        return quit_requested

    def names(self, panel: Panel) -> list[str]:
        return [entry.name for entry in panel.listing]

    def test_initial_listing_is_sorted_folders_first(self) -> None:
        self.assertEqual(self.names(self.controller.left), ["..", "B", "a.txt", "c.sh"])

    def test_copy_folder_to_other_pane_twice(self) -> None:
        self.send("DOWN", "F1", "TAB", "F2", "F2")

        self.assertEqual(self.names(self.controller.right), ["..", "B", "B1"])
        self.assertEqual((self.backup / "B1" / "nested.txt").read_text(encoding="utf-8"), "nested")

    def test_enter_folder_then_edit_text_file(self) -> None:
        self.send("DOWN", "ENTER")
        self.assertEqual(self.controller.left.current_path, self.work / "B")

        self.send("DOWN", "ENTER")

        self.assertEqual(self.launcher.calls, [("edit", self.work / "B" / "nested.txt")])
        self.assertEqual(self.controller.left.selected_index, 0)

    def test_executable_goes_to_opener(self) -> None:
        self.send("END", "ENTER")
        self.assertEqual(self.launcher.calls, [("open", self.work / "c.sh")])

    def test_rename_then_cancelled_rename(self) -> None:
        self.send("DOWN", "DOWN", "F3", *"b.txt", "ENTER")
        self.assertTrue((self.work / "b.txt").exists())
        self.assertEqual(self.controller.left.selected_entry.name, "b.txt")

        self.send("F3", *"zzz", "ESC")
        self.assertIs(self.controller.mode, Mode.BROWSE)
        self.assertEqual(sorted(os.listdir(self.work)), ["B", "b.txt", "c.sh"])

    def test_shell_command_output_appears_after_refresh(self) -> None:
        self.send("TAB", *"mkdir fresh", "ENTER")

        self.assertEqual(self.launcher.calls, [("run", ("mkdir fresh", self.backup))])
        self.assertIn("fresh", self.names(self.controller.right))

    def test_delete_then_quit(self) -> None:
        self.send("DOWN", "F5")
        self.assertFalse((self.work / "B").exists())
        self.assertEqual(self.names(self.controller.left), ["..", "a.txt", "c.sh"])

        self.assertTrue(self.send("q"))

    def test_too_small_window_blocks_until_recovery(self) -> None:
        self.send(ResizeEvent(40, 8), "DOWN", "F5")
        self.assertTrue((self.work / "B").exists())
        self.assertEqual(self.controller.left.selected_index, 0)

        self.send(ResizeEvent(100, 30), "DOWN")
        self.assertEqual(self.controller.left.selected_entry.name, "B")


if __name__ == "__main__":
    unittest.main()
