"""Reading and writing ``config.yaml``."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from docsify_helper._config import HelperConfig
from docsify_helper._errors import ConfigError, WriteError
from docsify_helper._generator import write_atomic

if TYPE_CHECKING:
    from docsify_helper._types import PathLike

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "config.yaml"


def load_config(
    path: PathLike = DEFAULT_CONFIG_NAME,
    *,
    docs_dir: PathLike | None = None,
    output_dir: PathLike | None = None,
    deployment_type: str | None = None,
) -> HelperConfig:
    """Load a configuration file, merge defaults and apply overrides.

    Relative ``docsDir``/``outputDir`` values in the file are resolved against
    the file's directory; overrides are taken as given.

    :raises ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}", path=str(config_path))
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}", path=str(config_path)) from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}", path=str(config_path)) from exc

    config = HelperConfig.from_dict(data)
    base = config_path.parent
    config = dataclasses.replace(
        config,
        docs_dir=Path(docs_dir) if docs_dir is not None else base / config.docs_dir,
        output_dir=Path(output_dir) if output_dir is not None else base / config.output_dir,
    )
    if docs_dir is not None and output_dir is None and not _declares(data, "outputDir"):
        config = dataclasses.replace(config, output_dir=Path(docs_dir))
    if deployment_type is not None:
        config = dataclasses.replace(
            config, deployment=dataclasses.replace(config.deployment, type=deployment_type)
        )
    config.validate()
    log.debug("Loaded configuration from %s", config_path)
    return config


def _declares(data: object, key: str) -> bool:
    return isinstance(data, dict) and bool(data.get(key))


def default_config(docs_dir: PathLike | None = None) -> HelperConfig:
    """Defaults for a docs directory; output goes next to the docs."""
    if docs_dir is None:
        return HelperConfig()
    return HelperConfig(docs_dir=Path(docs_dir), output_dir=Path(docs_dir))


def dump_config(config: HelperConfig) -> str:
    """Serialize ``config`` to YAML text."""
    return yaml.safe_dump(config.to_dict(), sort_keys=False, allow_unicode=True, indent=2, width=1000)


def save_config(config: HelperConfig, path: PathLike = DEFAULT_CONFIG_NAME) -> Path:
    """Write ``config`` as YAML with a header comment.

    :raises ConfigError: If the file cannot be written.
    """
    config_path = Path(path)
    stamp = datetime.now(timezone.utc).isoformat()
    content = f"# docsify-helper configuration\n# Generated at: {stamp}\n\n{dump_config(config)}"
    try:
        write_atomic(config_path, content)
    except WriteError as exc:
        raise ConfigError(f"Cannot save config file: {exc}", path=str(config_path)) from exc
    log.info("Saved configuration to %s", config_path)
    return config_path


def init_config(
    path: PathLike = DEFAULT_CONFIG_NAME,
    *,
    docs_dir: PathLike | None = None,
    overwrite: bool = False,
) -> HelperConfig:
    """Write the default configuration to ``path``.

    :raises ConfigError: If the file exists and ``overwrite`` is ``False``.
    """
    config_path = Path(path)
    if config_path.exists() and not overwrite:
        raise ConfigError("Config file already exists", path=str(config_path))
    config = default_config(docs_dir)
    save_config(config, config_path)
    return config
