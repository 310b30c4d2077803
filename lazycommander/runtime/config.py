"""JSON config loading and external-program resolution.

The config file is read once at startup and never written by the app.
A missing or malformed file, or any single invalid key, falls back to the
built-in default.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from ..file_model import (
    DEFAULT_IMAGE_EXTENSIONS,
    DEFAULT_TEXT_EXTENSIONS,
    DEFAULT_VIDEO_EXTENSIONS,
    ExtensionTable,
    normalize_extension,
)

logger = logging.getLogger(__name__)

APP_NAME = "lazycommander"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = f"{APP_NAME}.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME

DEFAULT_STATUS_SECONDS = 1.5
LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    """Effective settings after merging config file, environment, and defaults."""

    editor: str
    opener: str
    shell: str
    pause_after_command: bool = True
    status_seconds: float = DEFAULT_STATUS_SECONDS
    extensions: ExtensionTable = field(default_factory=ExtensionTable)
    log_level: str = "WARNING"
    theme: str | None = None


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _string_value(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _bool_value(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _positive_float(data: dict[str, object], key: str, default: float) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if value > 0 else default


def _extension_set(data: dict[str, object], key: str, default: tuple[str, ...]) -> frozenset[str]:
    value = data.get(key)
    if not isinstance(value, list):
        return frozenset(default)
    normalized = {ext for ext in (normalize_extension(item) for item in value if isinstance(item, str)) if ext}
    return frozenset(normalized)


def default_editor(environ: dict[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    for name in ("VISUAL", "EDITOR"):
        value = env.get(name, "").strip()
        if value:
            return value
    return "nano"


def default_opener() -> str:
    if sys.platform == "darwin":
        return "open"
    return "xdg-open"


def default_shell(environ: dict[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    value = env.get("SHELL", "").strip()
    return value or "/bin/sh"


def build_app_config(
    data: dict[str, object],
    *,
    editor: str | None = None,
    opener: str | None = None,
    shell: str | None = None,
    log_level: str | None = None,
    environ: dict[str, str] | None = None,
) -> AppConfig:
    """Merge explicit overrides, config ``data``, environment, and defaults."""
    level = (log_level or _string_value(data, "log_level") or "WARNING").upper()
    if level not in LOG_LEVEL_NAMES:
        level = "WARNING"
    return AppConfig(
        editor=editor or _string_value(data, "editor") or default_editor(environ),
        opener=opener or _string_value(data, "opener") or default_opener(),
        shell=shell or _string_value(data, "shell") or default_shell(environ),
        pause_after_command=_bool_value(data, "pause_after_command", True),
        status_seconds=_positive_float(data, "status_seconds", DEFAULT_STATUS_SECONDS),
        extensions=ExtensionTable(
            text=_extension_set(data, "text_extensions", DEFAULT_TEXT_EXTENSIONS),
            image=_extension_set(data, "image_extensions", DEFAULT_IMAGE_EXTENSIONS),
            video=_extension_set(data, "video_extensions", DEFAULT_VIDEO_EXTENSIONS),
            detect_source_files=_bool_value(data, "detect_source_files", True),
        ),
        log_level=level,
        theme=_string_value(data, "theme"),
    )
