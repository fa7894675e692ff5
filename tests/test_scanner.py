"""Tests for the directory scanner."""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

import pytest

from docsify_helper._config import SidebarConfig, SortBy
from docsify_helper._errors import ScanError
from docsify_helper._render import render_tree
from docsify_helper._scanner import is_markdown, scan_tree
from docsify_helper._structure import build_structure

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from docsify_helper._models import Entry


def _rels(entries: list[Entry]) -> list[str]:
    return [str(e.relative_path) for e in entries]


class TestMarkdownFilter:
    @pytest.mark.parametrize("name", ["a.md", "B.MD", "c.Md"])
    def test_markdown(self, name: str) -> None:
        assert is_markdown(name)

    @pytest.mark.parametrize("name", ["a.txt", "md", "a.markdown", "a.md.bak"])
    def test_not_markdown(self, name: str) -> None:
        assert not is_markdown(name)

    def test_non_markdown_files_skipped(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["a.md", "b.txt", "img.png", "C.MD"])
        assert _rels(scan_tree(root, SidebarConfig(exclude=()))) == ["a.md", "C.MD"]


class TestEntries:
    def test_file_metadata(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["guide/intro.md"])
        entries = scan_tree(root, SidebarConfig(exclude=()))
        folder, f = entries
        assert folder.is_dir and folder.name == "guide"
        assert folder.modified_at is None and folder.size is None
        assert f.name == "intro.md"
        assert f.depth == 1
        assert f.size == len("# guide/intro.md\n")
        assert f.modified_at is not None and f.modified_at.tzinfo is not None
        assert f.path == root.resolve() / "guide" / "intro.md"

    def test_depth_matches_segments(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["a.md", "x/b.md", "x/y/c.md"])
        for e in scan_tree(root, SidebarConfig(exclude=())):
            assert e.depth == len(e.relative_path.parts) - 1

    def test_relative_paths_unique(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["a.md", "x/a.md", "x/y/a.md", "y/"])
        rels = _rels(scan_tree(root, SidebarConfig(exclude=())))
        assert len(rels) == len(set(rels))

    @pytest.mark.skipif(sys.platform == "win32", reason="backslash is a separator on Windows")
    def test_backslash_in_file_name(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["a\\b.md", "a/b.md"])
        entries = scan_tree(root, SidebarConfig(exclude=()))
        assert _rels(entries) == ["a", "a\\b.md", "a/b.md"]
        odd = entries[1]
        assert odd.depth == 0
        assert odd.relative_path.parts == ("a\\b.md",)
        assert odd.relative_path.to_url() == "a%5Cb.md"
        lines = render_tree(build_structure(entries))
        assert lines == ["- [A\\b](a%5Cb.md)", "- **A**", "  - [B](a/b.md)"]


class TestPolicies:
    def test_recursive_with_folders(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["intro.md", "api/endpoints.md", "api/v2/auth.md"])
        entries = scan_tree(root, SidebarConfig(exclude=()))
        assert _rels(entries) == ["api", "intro.md", "api/v2", "api/endpoints.md", "api/v2/auth.md"]

    def test_hide_folders_keeps_nested_files(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["intro.md", "api/endpoints.md", "api/v2/auth.md"])
        entries = scan_tree(root, SidebarConfig(exclude=(), show_folders=False))
        assert _rels(entries) == ["intro.md", "api/endpoints.md", "api/v2/auth.md"]
        assert not any(e.is_dir for e in entries)

    def test_non_recursive_lists_direct_children_only(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["intro.md", "api/endpoints.md"])
        entries = scan_tree(root, SidebarConfig(exclude=(), recursive=False))
        assert _rels(entries) == ["api", "intro.md"]

    def test_non_recursive_without_folders(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["intro.md", "api/endpoints.md"])
        entries = scan_tree(root, SidebarConfig(exclude=(), recursive=False, show_folders=False))
        assert _rels(entries) == ["intro.md"]

    def test_empty_directory_listed(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["empty/"])
        assert _rels(scan_tree(root, SidebarConfig(exclude=()))) == ["empty"]

    def test_sort_by_size(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs([])
        (root / "small.md").write_text("x", encoding="utf-8")
        (root / "big.md").write_text("x" * 100, encoding="utf-8")
        entries = scan_tree(root, SidebarConfig(exclude=(), sort_by=SortBy.SIZE))
        assert _rels(entries) == ["big.md", "small.md"]

    def test_sort_by_date(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["old.md", "new.md"])
        os.utime(root / "old.md", (1_000_000, 1_000_000))
        os.utime(root / "new.md", (2_000_000, 2_000_000))
        entries = scan_tree(root, SidebarConfig(exclude=(), sort_by=SortBy.DATE))
        assert _rels(entries) == ["new.md", "old.md"]

    def test_defaults_used_when_config_omitted(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["README.md", "_sidebar.md", "intro.md"])
        assert _rels(scan_tree(root)) == ["intro.md"]


class TestExclusion:
    @pytest.mark.parametrize("show_folders", [True, False])
    @pytest.mark.parametrize("recursive", [True, False])
    def test_excluded_directory_prunes_subtree(
        self, make_docs: Callable[..., Path], show_folders: bool, recursive: bool
    ) -> None:
        root = make_docs(["keep.md", "private/secret.md", "private/deeper/more.md"])
        config = SidebarConfig(exclude=("private",), show_folders=show_folders, recursive=recursive)
        rels = _rels(scan_tree(root, config))
        assert "keep.md" in rels
        assert not any(r.startswith("private") for r in rels)

    def test_exclusion_by_name_at_depth(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["a/README.md", "a/intro.md"])
        assert _rels(scan_tree(root, SidebarConfig(exclude=("README.md",)))) == ["a", "a/intro.md"]

    def test_wildcard_exclusion(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["draft-1.md", "draft-2.md", "final.md"])
        assert _rels(scan_tree(root, SidebarConfig(exclude=("DRAFT-*",)))) == ["final.md"]

    def test_substring_over_excludes(self, make_docs: Callable[..., Path]) -> None:
        """A literal rule also hits paths that merely contain it."""
        root = make_docs(["api/x.md", "rapid.md", "other.md"])
        assert _rels(scan_tree(root, SidebarConfig(exclude=("api",)))) == ["other.md"]

    def test_path_rule(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["guide/old/a.md", "guide/new/b.md"])
        rels = _rels(scan_tree(root, SidebarConfig(exclude=("guide/old",))))
        assert rels == ["guide", "guide/new", "guide/new/b.md"]


class TestErrors:
    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(ScanError) as excinfo:
            scan_tree(tmp_path / "nope")
        assert excinfo.value.path == str(tmp_path / "nope")

    def test_root_is_file(self, tmp_path: Path) -> None:
        f = tmp_path / "file.md"
        f.write_text("x", encoding="utf-8")
        with pytest.raises(ScanError, match="not a directory"):
            scan_tree(f)

    @pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_unreadable_subdirectory(self, make_docs: Callable[..., Path]) -> None:
        root = make_docs(["ok.md", "locked/x.md"])
        (root / "locked").chmod(0o000)
        try:
            with pytest.raises(ScanError, match="Permission denied"):
                scan_tree(root, SidebarConfig(exclude=()))
        finally:
            (root / "locked").chmod(0o755)


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_symlinks_skipped(make_docs: Callable[..., Path]) -> None:
    root = make_docs(["real/a.md", "b.md"])
    (root / "link").symlink_to(root / "real", target_is_directory=True)
    (root / "c.md").symlink_to(root / "b.md")
    assert _rels(scan_tree(root, SidebarConfig(exclude=()))) == ["real", "b.md", "real/a.md"]


def test_scan_is_deterministic(make_docs: Callable[..., Path]) -> None:
    root = make_docs(["b.md", "a.md", "z/x.md", "y/w.md", "y/v/u.md"])
    config = SidebarConfig(exclude=())
    assert _rels(scan_tree(root, config)) == _rels(scan_tree(root, config))
