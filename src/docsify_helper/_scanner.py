"""Directory walk producing the ordered list of sidebar entries."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from docsify_helper._config import SidebarConfig
from docsify_helper._errors import ScanError
from docsify_helper._exclude import ExclusionSet
from docsify_helper._models import Entry
from docsify_helper._ordering import sort_entries
from docsify_helper._path import DocPath

if TYPE_CHECKING:
    from docsify_helper._types import PathLike

log = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def is_markdown(name: str) -> bool:
    return name.lower().endswith(MARKDOWN_SUFFIX)


def scan_tree(root: PathLike, sidebar: SidebarConfig | None = None) -> list[Entry]:
    """Scan ``root`` and return its included entries in sidebar order.

    Directories matching an exclusion rule are pruned before recursion, so
    nothing beneath them is listed. Only ``.md`` files are kept; symbolic
    links are skipped.

    :param root: Documentation root.
    :param sidebar: Sidebar policy; defaults apply when omitted.
    :raises ScanError: If ``root`` or any directory below it cannot be read.
    """
    sidebar = sidebar or SidebarConfig()
    root_path = Path(root)
    try:
        root_path = root_path.resolve()
    except OSError as exc:
        raise ScanError(f"Cannot resolve docs directory: {exc}", path=str(root)) from exc
    if not root_path.exists():
        raise ScanError(f"Docs directory not found: {root}", path=str(root))
    if not root_path.is_dir():
        raise ScanError(f"Docs path is not a directory: {root}", path=str(root))

    rules = ExclusionSet(sidebar.exclude)
    entries: list[Entry] = []
    _walk(root_path, (), rules, sidebar, entries)
    log.debug("Scanned %s: %d entries before ordering", root_path, len(entries))
    return sort_entries(entries, sidebar.sort_by)


def _walk(
    directory: Path,
    prefix: tuple[str, ...],
    rules: ExclusionSet,
    sidebar: SidebarConfig,
    out: list[Entry],
) -> None:
    try:
        with os.scandir(directory) as it:
            children = list(it)
    except FileNotFoundError:
        raise ScanError(f"Directory not found: {directory}", path=str(directory)) from None
    except PermissionError:
        raise ScanError(f"Permission denied: {directory}", path=str(directory)) from None
    except OSError as exc:
        raise ScanError(f"Cannot read directory: {exc}", path=str(directory)) from exc

    for child in children:
        parts = (*prefix, child.name)
        rel = DocPath.from_parts(parts)
        if rules.excludes(str(rel), child.name):
            log.debug("Excluded %s", rel)
            continue
        try:
            if child.is_dir(follow_symlinks=False):
                if sidebar.show_folders:
                    out.append(Entry(name=child.name, path=Path(child.path), relative_path=rel, is_dir=True))
                if sidebar.recursive:
                    _walk(Path(child.path), parts, rules, sidebar, out)
            elif child.is_file(follow_symlinks=False) and is_markdown(child.name):
                st = child.stat(follow_symlinks=False)
                out.append(
                    Entry(
                        name=child.name,
                        path=Path(child.path),
                        relative_path=rel,
                        is_dir=False,
                        modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                        size=st.st_size,
                    )
                )
        except OSError as exc:
            raise ScanError(f"Cannot stat entry: {exc}", path=child.path) from exc
