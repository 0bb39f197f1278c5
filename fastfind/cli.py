"""Command-line front door for fastfind.

Parses CLI options, resolves the item source, and merges persisted settings.
Then dispatches into the interactive finder and prints the selection.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import termios

from . import __version__
from .runtime import DisplayConfig, run_tui
from .runtime.config import load_finder_settings, load_show_help_text, load_theme_name, save_theme_name
from .sources import ItemSourceError, resolve_items
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme

LOG_FILE_ENV_VAR = "FASTFIND_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _percentage(value: str) -> float:
    """argparse type for a percentage in ``(0, 100]``."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if not 0 < parsed <= 100:
        raise argparse.ArgumentTypeError("value must be in (0, 100]")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ff",
        description="Interactively fuzzy-find items from a file, a directory, stdin, or arguments.",
    )
    parser.add_argument(
        "items",
        nargs="*",
        metavar="SOURCE|ITEMS",
        help="File path, directory (or dir:PATH), or the items themselves. Reads stdin when omitted.",
    )
    parser.add_argument("-m", "--multi-select", action="store_true", help="Allow selecting several items.")
    size_group = parser.add_mutually_exclusive_group()
    size_group.add_argument(
        "--height",
        type=_positive_int,
        default=None,
        help="Render inline using N terminal rows instead of fullscreen.",
    )
    size_group.add_argument(
        "--height-percentage",
        type=_percentage,
        default=None,
        help="Render inline using P percent of the terminal height.",
    )
    parser.add_argument("-q", "--query", default="", help="Start with this query.")
    parser.add_argument("--prompt", default="> ", help="Prompt shown before the query.")
    parser.add_argument("--no-help", action="store_true", help="Hide the key help line.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-file",
        default=None,
        help=f"Write debug logs to this file (also ${LOG_FILE_ENV_VAR}).",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(log_file: str | None) -> logging.Handler | None:
    """Attach a debug file handler to the package logger when a path is given."""
    if not log_file:
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("fastfind")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler


def build_display_config(args: argparse.Namespace) -> DisplayConfig:
    if args.height is not None:
        display = DisplayConfig.with_height(args.height)
    elif args.height_percentage is not None:
        display = DisplayConfig.with_height_percentage(args.height_percentage)
    else:
        display = DisplayConfig.full_screen()
    show_help = load_show_help_text() and not args.no_help
    return display.with_options(show_help_text=show_help, prompt=args.prompt)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, run the finder, and print selected items.

    Errors exit with a message instead of a traceback. Leaving the finder
    without a selection prints nothing.
    """
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    try:
        configure_logging(args.log_file or os.environ.get(LOG_FILE_ENV_VAR))
    except OSError as exc:
        raise SystemExit(f"Error: cannot open log file: {exc}") from exc

    try:
        items = resolve_items(args.items, sys.stdin)
    except ItemSourceError as exc:
        raise SystemExit(f"Error: {exc}") from exc
    logger.debug("resolved %d items", len(items))

    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))
    if args.theme:
        save_theme_name(normalize_theme_name(args.theme))
    theme = resolve_theme(args.theme or load_theme_name(), no_color=no_color)

    try:
        selected = run_tui(
            items,
            multi_select=args.multi_select,
            display=build_display_config(args),
            settings=load_finder_settings(),
            theme=theme,
            initial_query=args.query,
        )
    except (termios.error, OSError) as exc:
        logger.debug("terminal setup failed", exc_info=True)
        raise SystemExit(f"Error: interactive selection requires a terminal ({exc})") from exc

    for item in selected:
        sys.stdout.write(item + "\n")
    sys.stdout.flush()


if __name__ == "__main__":
    main()
