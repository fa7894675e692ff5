"""Error handling — catching ScanError, ConfigError, DeploymentError.

Demonstrates the error hierarchy and the ``path`` attribute carried by
every docsify_helper error.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from docsify_helper import (
    ConfigError,
    DocsifyHelperError,
    HelperConfig,
    ScanError,
    generate_sidebar,
    get_deployer,
    load_config,
)

if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)

        # --- ScanError: the docs directory does not exist ---
        try:
            generate_sidebar(HelperConfig(docs_dir=root / "missing", output_dir=root))
        except ScanError as exc:
            print(f"ScanError: {exc}")
            print(f"  path={exc.path}")

        # --- ConfigError: invalid sortBy in config.yaml ---
        config_path = root / "config.yaml"
        config_path.write_text("sidebar:\n  sortBy: random\n", encoding="utf-8")
        try:
            load_config(config_path)
        except ConfigError as exc:
            print(f"\nConfigError: {exc}")

        # --- Catch anything with the base class ---
        config_path.write_text("deployment:\n  type: cloudflare\n", encoding="utf-8")
        try:
            get_deployer(load_config(config_path)).check_environment()
        except DocsifyHelperError as exc:
            print(f"\nDocsifyHelperError ({type(exc).__name__}): {exc}")
