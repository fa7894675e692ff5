"""Tests for folding entries into the sidebar tree."""

from __future__ import annotations

from pathlib import Path

from docsify_helper._models import Entry
from docsify_helper._path import DocPath
from docsify_helper._structure import build_structure


def _file(rel: str) -> Entry:
    p = DocPath(rel)
    return Entry(name=p.name, path=Path("/docs") / rel, relative_path=p, is_dir=False, size=1)


def _dir(rel: str) -> Entry:
    p = DocPath(rel)
    return Entry(name=p.name, path=Path("/docs") / rel, relative_path=p, is_dir=True)


class TestBuildStructure:
    def test_root_files(self) -> None:
        tree = build_structure([_file("a.md"), _file("b.md")])
        assert [f.name for f in tree.files] == ["a.md", "b.md"]
        assert tree.children == {}
        assert tree.relative_path is None

    def test_directory_creates_node(self) -> None:
        tree = build_structure([_dir("api")])
        node = tree.children["api"]
        assert node.relative_path == DocPath("api")
        assert node.files == [] and node.children == {}

    def test_file_goes_to_parent(self) -> None:
        tree = build_structure([_dir("api"), _file("api/endpoints.md")])
        assert [f.name for f in tree.children["api"].files] == ["endpoints.md"]
        assert tree.files == []

    def test_intermediate_nodes_synthesized(self) -> None:
        """Deep files get their folders even when no directory entries exist."""
        tree = build_structure([_file("a/b/c/deep.md")])
        c = tree.children["a"].children["b"].children["c"]
        assert c.relative_path == DocPath("a/b/c")
        assert tree.children["a"].children["b"].relative_path == DocPath("a/b")
        assert [f.name for f in c.files] == ["deep.md"]

    def test_directory_reused(self) -> None:
        tree = build_structure([_file("a/x.md"), _dir("a"), _file("a/y.md")])
        assert list(tree.children) == ["a"]
        assert [f.name for f in tree.children["a"].files] == ["x.md", "y.md"]

    def test_file_order_preserved(self) -> None:
        tree = build_structure([_file("z.md"), _file("a.md")])
        assert [f.name for f in tree.files] == ["z.md", "a.md"]

    def test_no_entry_lost(self) -> None:
        entries = [_dir("a"), _dir("a/b"), _file("r.md"), _file("a/x.md"), _file("a/b/y.md"), _file("c/d/z.md")]
        tree = build_structure(entries)
        assert tree.file_count() == sum(1 for e in entries if not e.is_dir)

    def test_same_input_same_structure(self) -> None:
        entries = [_dir("a"), _file("a/x.md"), _file("b/c/y.md"), _file("r.md")]
        assert build_structure(entries).structure() == build_structure(list(entries)).structure()

    def test_empty(self) -> None:
        tree = build_structure([])
        assert tree.file_count() == 0
        assert tree.is_dir
