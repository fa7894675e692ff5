"""Sidebar generation: scan, order, structure, render, write."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from docsify_helper._errors import WriteError
from docsify_helper._models import GenerateResult
from docsify_helper._render import render_sidebar
from docsify_helper._scanner import scan_tree
from docsify_helper._structure import build_structure

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsify_helper._config import HelperConfig
    from docsify_helper._models import Entry
    from docsify_helper._types import PathLike

log = logging.getLogger(__name__)

SIDEBAR_FILENAME = "_sidebar.md"


def generate_sidebar(config: HelperConfig, *, now: datetime | None = None) -> GenerateResult:
    """Generate ``_sidebar.md`` for ``config.docs_dir`` into ``config.output_dir``.

    :param config: Validated configuration.
    :param now: Timestamp written into the header; defaults to local time.
    :raises ScanError: If the docs directory cannot be scanned.
    :raises WriteError: If the output cannot be written. Nothing is left behind.
    """
    log.info("Scanning %s", config.docs_dir)
    entries = scan_tree(config.docs_dir, config.sidebar)
    _log_scan_results(config, entries)

    content = render_sidebar(build_structure(entries), now or datetime.now())
    output_path = Path(config.output_dir) / SIDEBAR_FILENAME
    write_atomic(output_path, content)

    file_count = sum(1 for e in entries if not e.is_dir)
    folder_count = len(entries) - file_count
    log.info("Wrote %s (%d files, %d folders)", output_path, file_count, folder_count)
    return GenerateResult(output_path=output_path, file_count=file_count, folder_count=folder_count)


def write_atomic(path: PathLike, content: str) -> None:
    """Write UTF-8 text via a temp file in the same directory, then rename.

    :raises WriteError: If the directory cannot be created or the write fails.
    """
    full = Path(path)
    try:
        full.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(f"Cannot create output directory: {exc}", path=str(full.parent)) from exc
    try:
        fd, tmp_path = tempfile.mkstemp(dir=str(full.parent), prefix=f".{full.name}.", suffix=".tmp")
    except OSError as exc:
        raise WriteError(f"Cannot write output file: {exc}", path=str(full)) from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        # mkstemp creates 0600; keep the existing file's mode or use a readable default.
        os.chmod(tmp_path, full.stat().st_mode & 0o777 if full.exists() else 0o644)
        os.replace(tmp_path, str(full))
    except BaseException as exc:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        if isinstance(exc, OSError):
            raise WriteError(f"Cannot write output file: {exc}", path=str(full)) from exc
        raise


def _log_scan_results(config: HelperConfig, entries: Sequence[Entry]) -> None:
    folders = [e for e in entries if e.is_dir]
    files = [e for e in entries if not e.is_dir]
    log.info("Found %d folders and %d Markdown files", len(folders), len(files))
    if log.isEnabledFor(logging.DEBUG):
        for folder in folders:
            log.debug("%sfolder %s", "  " * folder.depth, folder.relative_path)
        for f in files:
            size_kb = (f.size or 0) / 1024
            mtime = f.modified_at.astimezone().strftime("%Y-%m-%d %H:%M") if f.modified_at else "-"
            log.debug("%sfile %s (%.1fKB, modified %s)", "  " * f.depth, f.relative_path, size_kb, mtime)
    if config.sidebar.exclude:
        log.debug("Exclusion rules: %s", ", ".join(config.sidebar.exclude))
    log.debug(
        "docsDir=%s outputDir=%s showFolders=%s recursive=%s sortBy=%s",
        config.docs_dir,
        config.output_dir,
        config.sidebar.show_folders,
        config.sidebar.recursive,
        config.sidebar.sort_by.value,
    )
