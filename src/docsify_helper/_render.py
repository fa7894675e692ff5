"""Markdown rendering of the sidebar tree."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from docsify_helper._ordering import name_sort_key

if TYPE_CHECKING:
    from datetime import datetime

    from docsify_helper._models import SidebarNode

GENERATED_MARKER = "<!-- This file is generated by docsify-helper. Do not edit it by hand. -->"
TIMESTAMP_PREFIX = "<!-- Generated at: "
HOME_LINK = "[HOME](/)"
INDENT = "  "

_ORDINAL_PREFIX = re.compile(r"^\d+\s*[.-]\s*")
_MD_SUFFIX = re.compile(r"\.md$", re.IGNORECASE)
_SEPARATORS = re.compile(r"[_-]")


def format_title(name: str, *, strip_suffix: bool = True) -> str:
    """Turn a file or folder name into a sidebar label.

    ``"01-getting_started.md"`` becomes ``"Getting started"``.
    """
    if strip_suffix:
        name = _MD_SUFFIX.sub("", name)
    name = _ORDINAL_PREFIX.sub("", name)
    name = _SEPARATORS.sub(" ", name)
    name = name[:1].upper() + name[1:]
    return name.strip()


def render_header(now: datetime) -> list[str]:
    return [
        GENERATED_MARKER,
        f"{TIMESTAMP_PREFIX}{now.strftime('%Y-%m-%d %H:%M:%S')} -->",
        "",
        HOME_LINK,
        "",
    ]


def render_tree(node: SidebarNode, level: int = 0) -> list[str]:
    """Render ``node`` depth-first: files, then sorted child folders."""
    indent = INDENT * level
    lines = [f"{indent}- [{format_title(f.name)}]({f.relative_path.to_url()})" for f in node.files]
    for child in sorted(node.children.values(), key=lambda c: name_sort_key(c.name)):
        lines.append(f"{indent}- **{format_title(child.name, strip_suffix=False)}**")
        lines.extend(render_tree(child, level + 1))
    return lines


def render_sidebar(tree: SidebarNode, now: datetime) -> str:
    """Render the complete ``_sidebar.md`` document."""
    return "\n".join([*render_header(now), *render_tree(tree)]) + "\n"
