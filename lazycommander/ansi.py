"""Display-width measurement and clipping for plain terminal text."""

from __future__ import annotations

import unicodedata


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, East Asian wide/fullwidth characters
    consume two, and control characters are rendered as one replacement cell.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def sanitize(text: str) -> str:
    """Replace control characters so names cannot inject escape sequences."""
    return "".join(ch if ch.isprintable() else "?" for ch in text)


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def clip(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        width = char_display_width(ch)
        if col + width > max_cols:
            break
        out.append(ch)
        col += width
    return "".join(out)


def fit(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad the rest with spaces."""
    clipped = clip(text, width)
    return clipped + " " * max(0, width - display_width(clipped))
