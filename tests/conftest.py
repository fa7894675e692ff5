"""Shared test fixtures and marker registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: requires external executables (git)")


@pytest.fixture
def make_docs(tmp_path: Path) -> Callable[..., Path]:
    """Create a docs tree under ``tmp_path/docs``.

    Paths ending in ``/`` become empty directories, everything else a file
    whose content is its own relative path.
    """

    def _make(paths: Iterable[str], root_name: str = "docs") -> Path:
        root = tmp_path / root_name
        root.mkdir(parents=True, exist_ok=True)
        for rel in paths:
            target = root / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(f"# {rel}\n", encoding="utf-8")
        return root

    return _make
