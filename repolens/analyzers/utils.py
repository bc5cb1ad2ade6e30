"""Shared helper utilities for analyzer implementations."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional

from ..logging import get_logger

_logger = get_logger("analyzers")


def read_text(path: Path) -> Optional[str]:
    """Return the file contents, or None when it cannot be read as UTF-8."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _logger.debug("Unable to read %s: %s", path, exc)
        return None


def load_json(path: Path) -> Optional[Any]:
    """Return the parsed JSON document at ``path`` or None on any failure."""
    text = read_text(path)
    if text is None:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        _logger.debug("Invalid JSON in %s: %s", path, exc)
        return None


def iter_stripped_lines(paths: Iterable[Path]) -> Iterator[str]:
    """Yield trimmed lines of each readable file, in the given order."""
    for path in paths:
        text = read_text(path)
        if text is None:
            continue
        # split on "\n" only; str.splitlines also breaks on form feeds and U+2028
        for line in text.split("\n"):
            yield line.strip()


def first_or_empty(paths: Iterable[Path]) -> List[Path]:
    """Return a list holding only the first path, or an empty list."""
    for path in paths:
        return [path]
    return []


def add_unique(items: List[Any], item: Any) -> None:
    if item not in items:
        items.append(item)
