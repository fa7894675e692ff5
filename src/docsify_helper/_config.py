"""Configuration model — immutable data containers for sidebar and deployment settings."""

from __future__ import annotations

import dataclasses
import enum
from pathlib import Path
from typing import Any

from docsify_helper._errors import ConfigError

DEFAULT_DOCS_DIR = "./docs"

DEFAULT_EXCLUDE: tuple[str, ...] = (
    "_sidebar.md",
    "README.md",
    ".DS_Store",
    "Thumbs.db",
    ".git",
    "node_modules",
    ".obsidian",
    ".vscode",
)

DEFAULT_COMMIT_MESSAGE = "docs: update documentation {{date}}"


class SortBy(enum.Enum):
    """Tertiary ordering key applied after depth and entry type."""

    NAME = "name"
    DATE = "date"
    SIZE = "size"

    @classmethod
    def parse(cls, value: object) -> SortBy:
        """Parse a config value; ``None`` selects the default.

        :raises ConfigError: If the value is not a known sort key.
        """
        if value is None:
            return cls.NAME
        if isinstance(value, SortBy):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            allowed = [s.value for s in cls]
            raise ConfigError(f"Unknown sortBy {value!r}. Expected one of {allowed}") from None


@dataclasses.dataclass(frozen=True)
class SidebarConfig:
    """Sidebar generation policy.

    :param exclude: Exclusion patterns (literal, substring, or ``*``/``?`` wildcard).
    :param show_folders: Emit directories as bold headings.
    :param recursive: Descend into subdirectories.
    :param sort_by: Tertiary ordering key.
    """

    exclude: tuple[str, ...] = DEFAULT_EXCLUDE
    show_folders: bool = True
    recursive: bool = True
    sort_by: SortBy = SortBy.NAME

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> SidebarConfig:
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("Expected 'sidebar' to be a mapping")
        exclude = data.get("exclude", DEFAULT_EXCLUDE)
        if exclude is None:
            exclude = ()
        if not isinstance(exclude, (list, tuple)) or not all(isinstance(p, str) for p in exclude):
            raise ConfigError("Expected 'sidebar.exclude' to be a list of strings")
        return cls(
            exclude=tuple(exclude),
            show_folders=_bool(data, "showFolders", True),
            recursive=_bool(data, "recursive", True),
            sort_by=SortBy.parse(data.get("sortBy")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "exclude": list(self.exclude),
            "showFolders": self.show_folders,
            "recursive": self.recursive,
            "sortBy": self.sort_by.value,
        }


@dataclasses.dataclass(frozen=True)
class GitConfig:
    """Settings for deploying through ``git``.

    :param executable_path: Path to the git binary; empty means ``git`` on PATH.
    :param remote_url: Push to ``origin`` only when set.
    :param branch: Branch pushed to ``origin``.
    :param commit_message: Template with ``{{date}}``-style placeholders.
    """

    executable_path: str = ""
    remote_url: str = ""
    branch: str = "main"
    commit_message: str = DEFAULT_COMMIT_MESSAGE

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> GitConfig:
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("Expected 'deployment.git' to be a mapping")
        return cls(
            executable_path=str(data.get("executablePath") or ""),
            remote_url=str(data.get("remoteUrl") or ""),
            branch=str(data.get("branch") or "main"),
            commit_message=str(data.get("commitMessage") or DEFAULT_COMMIT_MESSAGE),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "executablePath": self.executable_path,
            "remoteUrl": self.remote_url,
            "branch": self.branch,
            "commitMessage": self.commit_message,
        }


@dataclasses.dataclass(frozen=True)
class CloudflareConfig:
    """Settings for deploying to Cloudflare Pages through ``wrangler``."""

    wrangler_path: str = ""
    project_name: str = ""
    account_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> CloudflareConfig:
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("Expected 'deployment.cloudflare' to be a mapping")
        return cls(
            wrangler_path=str(data.get("wranglerPath") or ""),
            # Both spellings are accepted in existing config files.
            project_name=str(data.get("projectName") or data.get("project_name") or ""),
            account_id=str(data.get("accountId") or ""),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "wranglerPath": self.wrangler_path,
            "projectName": self.project_name,
            "accountId": self.account_id,
        }


@dataclasses.dataclass(frozen=True)
class DeploymentConfig:
    """Deployment target selection.

    :param type: Deployer type name (``"git"`` or ``"cloudflare"``).
    """

    type: str = "git"
    git: GitConfig = dataclasses.field(default_factory=GitConfig)
    cloudflare: CloudflareConfig = dataclasses.field(default_factory=CloudflareConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> DeploymentConfig:
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("Expected 'deployment' to be a mapping")
        return cls(
            type=str(data.get("type") or "git"),
            git=GitConfig.from_dict(data.get("git")),
            cloudflare=CloudflareConfig.from_dict(data.get("cloudflare")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "git": self.git.to_dict(),
            "cloudflare": self.cloudflare.to_dict(),
        }


@dataclasses.dataclass(frozen=True)
class HelperConfig:
    """Top-level configuration container.

    :param docs_dir: Documentation root to scan.
    :param output_dir: Directory receiving ``_sidebar.md``.
    :param sidebar: Sidebar generation policy.
    :param deployment: Deployment settings.
    """

    docs_dir: Path = Path(DEFAULT_DOCS_DIR)
    output_dir: Path = Path(DEFAULT_DOCS_DIR)
    sidebar: SidebarConfig = dataclasses.field(default_factory=SidebarConfig)
    deployment: DeploymentConfig = dataclasses.field(default_factory=DeploymentConfig)

    def validate(self) -> None:
        """Check required fields and the deployment type.

        :raises ConfigError: Listing every problem found.
        """
        from docsify_helper._deploy import registered_deployers

        errors: list[str] = []
        if not str(self.docs_dir).strip():
            errors.append("docsDir must not be empty")
        if not str(self.output_dir).strip():
            errors.append("outputDir must not be empty")
        types = registered_deployers()
        if self.deployment.type not in types:
            errors.append(f"deployment.type must be one of {types}, got {self.deployment.type!r}")
        if errors:
            raise ConfigError("Invalid configuration: " + "; ".join(errors))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> HelperConfig:
        """Construct from a plain dict (e.g. parsed YAML), filling in defaults.

        :param data: Mapping with camelCase keys as found in ``config.yaml``.
        :raises ConfigError: If a section has the wrong shape.
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("Expected the configuration document to be a mapping")
        docs_dir = str(data.get("docsDir") or DEFAULT_DOCS_DIR)
        output_dir = str(data.get("outputDir") or docs_dir)
        return cls(
            docs_dir=Path(docs_dir),
            output_dir=Path(output_dir),
            sidebar=SidebarConfig.from_dict(data.get("sidebar")),
            deployment=DeploymentConfig.from_dict(data.get("deployment")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "docsDir": str(self.docs_dir),
            "outputDir": str(self.output_dir),
            "sidebar": self.sidebar.to_dict(),
            "deployment": self.deployment.to_dict(),
        }


def _bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"Expected 'sidebar.{key}' to be a boolean, got {value!r}")
    return value
