"""Quickstart — generate a _sidebar.md for a small docs tree.

Demonstrates:
- Building a HelperConfig in code
- Running generate_sidebar and reading the result
- Hiding folders while keeping nested files grouped
"""

from __future__ import annotations

import dataclasses
import tempfile
from pathlib import Path

from docsify_helper import HelperConfig, SidebarConfig, generate_sidebar

if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        docs = Path(tmp) / "docs"
        for rel in ["README.md", "01-intro.md", "guide/getting_started.md", "guide/api/endpoints.md"]:
            target = docs / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"# {rel}\n", encoding="utf-8")

        config = HelperConfig(docs_dir=docs, output_dir=docs)
        result = generate_sidebar(config)
        print(f"Wrote {result.output_path} ({result.file_count} files, {result.folder_count} folders)")
        print(result.output_path.read_text(encoding="utf-8"))

        # Same tree without folder entries: headings are still synthesized.
        flat = dataclasses.replace(config, sidebar=SidebarConfig(show_folders=False))
        result = generate_sidebar(flat)
        print(result.output_path.read_text(encoding="utf-8"))
