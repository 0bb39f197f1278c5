"""Item sources: direct arguments, file lines, directory entries, and streams."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

DIR_PREFIX = "dir:"


class ItemSourceError(ValueError):
    """Raised when items cannot be produced from the requested source."""


def items_from_text(text: str) -> list[str]:
    """Split ``text`` into trimmed, non-empty lines."""
    return [stripped for stripped in (line.strip() for line in text.splitlines()) if stripped]


def looks_like_file_path(value: str) -> bool:
    return "/" in value or "\\" in value or "." in value


def read_items_from_file(path: str | Path) -> list[str]:
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ItemSourceError(f"Failed to read file: {path}: {exc.strerror or exc}") from exc
    return items_from_text(text)


def list_directory(path: str | Path) -> list[str]:
    """Return entry names of ``path`` sorted by name."""
    try:
        names = os.listdir(path)
    except OSError as exc:
        raise ItemSourceError(f"Failed to read directory: {path}: {exc.strerror or exc}") from exc
    return sorted(names)


def read_items_from_stream(stream: TextIO) -> list[str]:
    return items_from_text(stream.read())


def _stream_is_tty(stream: TextIO | None) -> bool:
    if stream is None:
        return True
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def resolve_items(args: Sequence[str], stdin: TextIO | None = None) -> list[str]:
    """Turn CLI positionals (or piped stdin) into the item list.

    A single argument names a source: ``dir:PATH`` or an existing directory
    lists its entries, anything that looks like a file path is read line by
    line. Several arguments, or one plain word, are the items themselves.
    Without arguments, a piped ``stdin`` is read.
    """
    if not args:
        if _stream_is_tty(stdin):
            raise ItemSourceError("Missing required argument: input source or items")
        logger.debug("reading items from stdin")
        items = read_items_from_stream(stdin)
    elif len(args) == 1:
        source = args[0]
        if source.startswith(DIR_PREFIX):
            logger.debug("listing directory %s", source[len(DIR_PREFIX) :])
            items = list_directory(source[len(DIR_PREFIX) :])
        elif os.path.isdir(source):
            logger.debug("listing directory %s", source)
            items = list_directory(source)
        elif looks_like_file_path(source):
            logger.debug("reading items from file %s", source)
            items = read_items_from_file(source)
        else:
            items = [source]
    else:
        items = list(args)

    if not items:
        raise ItemSourceError("No items to search through")
    return items
