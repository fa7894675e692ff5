"""Fold the flat, ordered entry list into a SidebarNode tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docsify_helper._models import SidebarNode
from docsify_helper._path import DocPath

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docsify_helper._models import Entry


def build_structure(entries: Iterable[Entry]) -> SidebarNode:
    """Build the directory tree for ``entries``.

    Directory entries create (or reuse) the node at their own path; file
    entries are appended to the node of their parent path. Intermediate
    directories that were never listed, e.g. with ``showFolders`` off, are
    created on demand. Files keep the order in which they appear in
    ``entries``.
    """
    root = SidebarNode(name="")
    for entry in entries:
        parts = entry.relative_path.parts
        if entry.is_dir:
            _ensure_node(root, parts)
        else:
            _ensure_node(root, parts[:-1]).files.append(entry)
    return root


def _ensure_node(root: SidebarNode, parts: tuple[str, ...]) -> SidebarNode:
    node = root
    for i, segment in enumerate(parts):
        child = node.children.get(segment)
        if child is None:
            child = SidebarNode(name=segment, relative_path=DocPath.from_parts(parts[: i + 1]))
            node.children[segment] = child
        node = child
    return node
