"""Command-line front door for lazycommander.

Parses CLI options, merges them with the config file, sets up file logging,
then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .runtime.app import run_commander
from .runtime.config import LOG_LEVEL_NAMES, build_app_config, load_config
from .runtime.logging_setup import configure_logging
from .ui_theme import available_theme_names, resolve_theme


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazycommander",
        description="Two-pane terminal file browser.",
    )
    parser.add_argument("left", nargs="?", default=None, help="Left pane directory. Defaults to current directory.")
    parser.add_argument("right", nargs="?", default="/", help="Right pane directory. Defaults to /.")
    parser.add_argument("--editor", default=None, help="Editor command for text files (default: $VISUAL, $EDITOR, nano).")
    parser.add_argument("--opener", default=None, help="Command that opens other files (default: xdg-open).")
    parser.add_argument("--shell", default=None, help="Shell used for typed commands (default: $SHELL).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--config", type=Path, default=None, help="Path to an alternate JSON config file.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVEL_NAMES,
        default=None,
        help="Logging level (default: WARNING).",
    )
    return parser


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the two-pane browser.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used for the left pane.
    """
    args = build_parser().parse_args(argv)

    config = build_app_config(
        load_config(args.config),
        editor=args.editor,
        opener=args.opener,
        shell=args.shell,
        log_level=args.log_level,
    )
    configure_logging(config.log_level, args.log_file)

    if default_path is None:
        default_path = Path.cwd()
    left = Path(args.left) if args.left is not None else default_path
    right = Path(args.right)
    for path in (left, right):
        if not path.is_dir():
            raise SystemExit(f"Not a directory: {path}")

    theme = resolve_theme(args.theme or config.theme, no_color=args.no_color)
    run_commander(left, right, config, theme)
