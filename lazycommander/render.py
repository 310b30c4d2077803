"""Frame rendering for the two panes and the command box.

Frames are built as lists of styled rows (pure, testable) and written to
the terminal in a single ``os.write`` call.
"""

from __future__ import annotations

import os

from .ansi import clip, display_width, fit, sanitize
from .file_model import Entry, EntryKind
from .panel import Panel
from .runtime.controller import DualPaneController, Focus, Mode
from .runtime.resize import COMMAND_BOX_ROWS, Layout
from .ui_theme import DEFAULT_THEME, UITheme

KIND_TAGS: dict[EntryKind, str] = {
    EntryKind.FOLDER: "[DIR]",
    EntryKind.TEXT: "[TXT]",
    EntryKind.EXECUTABLE: "[EXE]",
    EntryKind.IMAGE: "[IMG]",
    EntryKind.VIDEO: "[VID]",
    EntryKind.OTHER: "[OTH]",
}

COMMAND_BOX_TITLE = "[ Terminal | F1: Copy | F2: Paste | F3: Rename | F5: Delete | q: Quit ]"
TOO_SMALL_MESSAGE = "Window too small! Resize to continue."


def format_entry(entry: Entry) -> str:
    """Plain row text: kind tag, then the name (folders prefixed with ``/``)."""
    prefix = "/" if entry.kind is EntryKind.FOLDER else ""
    return f"{KIND_TAGS[entry.kind]:<6} {prefix}{sanitize(entry.name)}"


def _shorten_path(text: str, max_cols: int) -> str:
    if display_width(text) <= max_cols:
        return text
    if max_cols <= 1:
        return clip(text, max_cols)
    tail: list[str] = []
    width = 0
    for ch in reversed(text):
        ch_width = display_width(ch)
        if width + ch_width > max_cols - 1:
            break
        tail.append(ch)
        width += ch_width
    return "…" + "".join(reversed(tail))


def _top_border(width: int, title: str, style: str, title_style: str, reset: str) -> str:
    inner = max(0, width - 2)
    label = clip(title, max(0, inner - 1))
    fill = "─" * max(0, inner - 1 - display_width(label))
    if title_style and label:
        label = f"{title_style}{label}{reset}{style}"
    return f"{style}┌─{label}{fill}┐{reset}" if inner >= 1 else f"{style}{'┌┐'[:width]}{reset}"


def build_panel_rows(panel: Panel, width: int, height: int, focused: bool, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Render one boxed pane as ``height`` rows of ``width`` columns."""
    if height <= 0 or width <= 0:
        return []
    border = theme.border_focused if focused else theme.border
    inner = max(0, width - 2)
    title = f"[ {_shorten_path(sanitize(str(panel.current_path)), max(1, inner - 5))} ]"
    rows = [_top_border(width, title, border, theme.title, theme.reset)]
    visible = panel.visible_entries()
    for row in range(max(0, height - 2)):
        index = panel.scroll_offset + row
        text = ""
        style = ""
        if row < len(visible):
            entry = visible[row]
            text = format_entry(entry)
            style = theme.kind_style(entry.kind)
            if index == panel.selected_index:
                style = theme.reverse + (theme.bold if focused else "")
        cell = fit(text, inner)
        if style:
            cell = f"{style}{cell}{theme.reset}"
        rows.append(f"{border}│{theme.reset}{cell}{border}│{theme.reset}")
    if height >= 2:
        rows.append(f"{border}└{'─' * inner}┘{theme.reset}")
    return rows[:height]


def build_command_box(controller: DualPaneController, width: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Render the 3-row command box: title, input line, status over the bottom border."""
    inner = max(0, width - 2)
    rows = [_top_border(width, COMMAND_BOX_TITLE, theme.border, theme.title, theme.reset)]
    if controller.mode is Mode.RENAME:
        line = f"Rename to: {sanitize(controller.rename_buffer or '')}"
    else:
        line = f"> {sanitize(controller.command_buffer)}"
    rows.append(f"{theme.border}│{theme.reset}{theme.command_prompt}{fit(line, inner)}{theme.reset}{theme.border}│{theme.reset}")
    if controller.status_message:
        status = fit(sanitize(controller.status_message), inner)
        rows.append(f"{theme.border}└{theme.reset}{theme.status}{status}{theme.reset}{theme.border}┘{theme.reset}")
    else:
        rows.append(f"{theme.border}└{'─' * inner}┘{theme.reset}")
    return rows


def build_too_small_rows(layout: Layout, theme: UITheme = DEFAULT_THEME) -> list[str]:
    rows = [""] * max(1, layout.rows)
    message = clip(TOO_SMALL_MESSAGE, layout.columns)
    pad = max(0, (layout.columns - display_width(message)) // 2)
    rows[min(len(rows) - 1, layout.rows // 2)] = f"{' ' * pad}{theme.warning}{message}{theme.reset}"
    return rows


def build_frame(
    controller: DualPaneController,
    layout: Layout,
    too_small: bool = False,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Return every screen row for the current controller state."""
    if too_small:
        return build_too_small_rows(layout, theme)
    pane_height = max(0, layout.rows - COMMAND_BOX_ROWS)
    left_rows = build_panel_rows(
        controller.left, layout.left_width, pane_height, controller.focus is Focus.LEFT, theme
    )
    right_rows = build_panel_rows(
        controller.right, layout.right_width, pane_height, controller.focus is Focus.RIGHT, theme
    )
    rows = [left + right for left, right in zip(left_rows, right_rows)]
    rows.extend(build_command_box(controller, layout.columns, theme))
    return rows


def render_frame(rows: list[str], stdout_fd: int) -> None:
    out = "\033[H\033[J" + "\r\n".join(rows)
    os.write(stdout_fd, out.encode("utf-8", errors="replace"))
