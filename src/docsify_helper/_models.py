"""Scan entries, sidebar tree nodes and result records."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from docsify_helper._path import DocPath


@dataclasses.dataclass(frozen=True, eq=False)
class Entry:
    """Immutable snapshot of one scanned file or directory.

    :param name: Base name of the file or directory.
    :param path: Absolute filesystem path.
    :param relative_path: Normalized path relative to the scan root.
    :param is_dir: ``True`` for directories.
    :param modified_at: Last modification time (files only).
    :param size: Size in bytes (files only).
    """

    name: str
    path: Path
    relative_path: DocPath
    is_dir: bool
    modified_at: datetime | None = None
    size: int | None = None

    @property
    def depth(self) -> int:
        """Segment count of ``relative_path`` minus one."""
        return self.relative_path.depth

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entry):
            return self.relative_path == other.relative_path and self.is_dir == other.is_dir
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.relative_path, self.is_dir))


@dataclasses.dataclass(eq=False)
class SidebarNode:
    """A directory in the sidebar hierarchy.

    Files are kept in ``files`` of the node they live in; they never become
    nodes themselves. The root node has no ``relative_path``.
    """

    name: str
    relative_path: DocPath | None = None
    children: dict[str, SidebarNode] = dataclasses.field(default_factory=dict)
    files: list[Entry] = dataclasses.field(default_factory=list)

    @property
    def is_dir(self) -> bool:
        return True

    def file_count(self) -> int:
        """Number of file leaves in this subtree."""
        return len(self.files) + sum(child.file_count() for child in self.children.values())

    def structure(self) -> tuple[object, ...]:
        """Comparable snapshot of the subtree, independent of child insertion order."""
        return (
            self.name,
            str(self.relative_path) if self.relative_path is not None else None,
            tuple(str(f.relative_path) for f in self.files),
            tuple(self.children[k].structure() for k in sorted(self.children)),
        )


@dataclasses.dataclass(frozen=True)
class GenerateResult:
    """Outcome of one sidebar generation.

    :param output_path: Path of the written ``_sidebar.md``.
    :param file_count: Number of Markdown files listed.
    :param folder_count: Number of folder entries listed.
    """

    output_path: Path
    file_count: int
    folder_count: int
