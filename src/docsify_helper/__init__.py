"""Docsify sidebar generation and deployment."""

from docsify_helper._config import (
    CloudflareConfig,
    DeploymentConfig,
    GitConfig,
    HelperConfig,
    SidebarConfig,
    SortBy,
)
from docsify_helper._config_file import default_config, dump_config, init_config, load_config, save_config
from docsify_helper._deploy import (
    CloudflareDeployer,
    Deployer,
    DeployResult,
    GitDeployer,
    get_deployer,
    register_deployer,
)
from docsify_helper._errors import (
    ConfigError,
    DeploymentError,
    DocsifyHelperError,
    InvalidPath,
    ScanError,
    WriteError,
)
from docsify_helper._exclude import ExclusionRule, ExclusionSet, compile_rule
from docsify_helper._generator import SIDEBAR_FILENAME, generate_sidebar
from docsify_helper._models import Entry, GenerateResult, SidebarNode
from docsify_helper._ordering import sort_entries
from docsify_helper._path import DocPath
from docsify_helper._render import format_title, render_sidebar
from docsify_helper._scanner import scan_tree
from docsify_helper._structure import build_structure

__version__ = "1.0.0"

__all__ = [
    # Pipeline
    "generate_sidebar",
    "scan_tree",
    "sort_entries",
    "build_structure",
    "render_sidebar",
    "format_title",
    "SIDEBAR_FILENAME",
    # Models
    "DocPath",
    "Entry",
    "SidebarNode",
    "GenerateResult",
    "ExclusionRule",
    "ExclusionSet",
    "compile_rule",
    # Config
    "HelperConfig",
    "SidebarConfig",
    "DeploymentConfig",
    "GitConfig",
    "CloudflareConfig",
    "SortBy",
    "load_config",
    "save_config",
    "init_config",
    "default_config",
    "dump_config",
    # Deployment
    "Deployer",
    "DeployResult",
    "GitDeployer",
    "CloudflareDeployer",
    "get_deployer",
    "register_deployer",
    # Errors
    "DocsifyHelperError",
    "ScanError",
    "WriteError",
    "ConfigError",
    "InvalidPath",
    "DeploymentError",
    # Version
    "__version__",
]
