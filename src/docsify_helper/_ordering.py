"""Ordering of scanned entries: depth, then type, then the configured key."""

from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING

from docsify_helper._config import SortBy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docsify_helper._models import Entry


def name_sort_key(name: str) -> tuple[str, str]:
    """Locale-style collation key: accent/case-insensitive first, lowercase before uppercase on ties."""
    folded = unicodedata.normalize("NFKD", name).casefold()
    return folded, name.swapcase()


def _tertiary(entry: Entry, sort_by: SortBy) -> tuple[int, float]:
    # (0, -value) for entries carrying the metric, (1, 0) for those that fall through to name order.
    if sort_by is SortBy.DATE and entry.modified_at is not None:
        return 0, -entry.modified_at.timestamp()
    if sort_by is SortBy.SIZE and entry.size is not None:
        return 0, -float(entry.size)
    return 1, 0.0


def entry_sort_key(entry: Entry, sort_by: SortBy = SortBy.NAME) -> tuple[object, ...]:
    return (
        entry.depth,
        0 if entry.is_dir else 1,
        _tertiary(entry, sort_by),
        name_sort_key(entry.name),
        str(entry.relative_path),
    )


def sort_entries(entries: Iterable[Entry], sort_by: SortBy = SortBy.NAME) -> list[Entry]:
    """Return a new list in deterministic sidebar order.

    Shallower entries come first, directories precede files at the same depth,
    and ``sort_by`` picks the key within each group. ``DATE`` and ``SIZE`` sort
    descending; entries without the metric follow by name.
    """
    return sorted(entries, key=lambda e: entry_sort_key(e, sort_by))
