"""UI theme definitions and selection helpers."""

from __future__ import annotations

from dataclasses import dataclass

from .file_model import EntryKind


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    reverse: str
    bold: str
    border: str
    border_focused: str
    title: str
    status: str
    command_prompt: str
    warning: str
    folder: str
    text: str
    executable: str
    image: str
    video: str
    other: str

    def kind_style(self, kind: EntryKind) -> str:
        return {
            EntryKind.FOLDER: self.folder,
            EntryKind.TEXT: self.text,
            EntryKind.EXECUTABLE: self.executable,
            EntryKind.IMAGE: self.image,
            EntryKind.VIDEO: self.video,
            EntryKind.OTHER: self.other,
        }[kind]


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    bold="\033[1m",
    border="\033[2m",
    border_focused="\033[38;5;81m",
    title="\033[1;38;5;229m",
    status="\033[38;5;214m",
    command_prompt="\033[1;38;5;42m",
    warning="\033[1;38;5;203m",
    folder="\033[1;34m",
    text="\033[38;5;252m",
    executable="\033[38;5;42m",
    image="\033[38;5;176m",
    video="\033[38;5;141m",
    other="\033[38;5;245m",
)

MONO_THEME = UITheme(
    name="mono",
    reset="\033[0m",
    reverse="\033[7m",
    bold="\033[1m",
    border="",
    border_focused="",
    title="",
    status="",
    command_prompt="",
    warning="",
    folder="",
    text="",
    executable="",
    image="",
    video="",
    other="",
)

THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, MONO_THEME)}


def available_theme_names() -> list[str]:
    return sorted(THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the named theme; ``no_color`` always wins, unknown names fall back."""
    if no_color:
        return MONO_THEME
    if name is None:
        return DEFAULT_THEME
    return THEMES.get(name.strip().lower(), DEFAULT_THEME)
