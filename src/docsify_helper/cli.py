"""Command-line interface: ``docsify-helper generate|check|deploy|config``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from docsify_helper import __version__
from docsify_helper._config_file import DEFAULT_CONFIG_NAME, dump_config, init_config, load_config
from docsify_helper._deploy import get_deployer
from docsify_helper._errors import DocsifyHelperError
from docsify_helper._generator import generate_sidebar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsify_helper._config import HelperConfig

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsify-helper",
        description="Generate a Docsify _sidebar.md and deploy the documentation site.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", default=DEFAULT_CONFIG_NAME, help="config file path (default: %(default)s)")
    parser.add_argument("-d", "--docs", help="docs directory, overrides docsDir")
    parser.add_argument("-o", "--output", help="output directory, overrides outputDir")
    parser.add_argument("--deployment-type", choices=["git", "cloudflare"], help="overrides deployment.type")
    parser.add_argument("-v", "--verbose", action="store_true", help="log scan details")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.add_parser("generate", help="generate _sidebar.md")
    sub.add_parser("check", help="check the deployment environment")
    deploy = sub.add_parser("deploy", help="generate _sidebar.md, then deploy")
    deploy.add_argument("--skip-generate", action="store_true", help="deploy without regenerating _sidebar.md")
    config = sub.add_parser("config", help="show or initialize the configuration")
    group = config.add_mutually_exclusive_group()
    group.add_argument("--show", action="store_true", help="print the merged configuration")
    group.add_argument("--init", action="store_true", help="write a default config file")
    config.add_argument("--force", action="store_true", help="overwrite an existing file with --init")
    return parser


def _load(args: argparse.Namespace) -> HelperConfig:
    return load_config(
        args.config,
        docs_dir=args.docs,
        output_dir=args.output,
        deployment_type=args.deployment_type,
    )


def cmd_generate(args: argparse.Namespace) -> int:
    result = generate_sidebar(_load(args))
    print(f"Generated {result.output_path}")
    print(f"  files:   {result.file_count}")
    print(f"  folders: {result.folder_count}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    result = get_deployer(_load(args)).check_environment()
    print(result.message)
    return 0


def cmd_deploy(args: argparse.Namespace) -> int:
    config = _load(args)
    if not args.skip_generate:
        result = generate_sidebar(config)
        print(f"Generated {result.output_path}")
    deployer = get_deployer(config)
    print(f"Deploying with {deployer.name}...")
    outcome = deployer.deploy()
    print(outcome.message)
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    if args.init:
        init_config(args.config, docs_dir=args.docs, overwrite=args.force)
        print(f"Wrote default configuration to {args.config}")
        return 0
    if args.show:
        print(dump_config(_load(args)), end="")
        return 0
    print("Use --show to print the configuration or --init to create one.")
    return 0


_COMMANDS = {
    "generate": cmd_generate,
    "check": cmd_check,
    "deploy": cmd_deploy,
    "config": cmd_config,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        return 0
    try:
        return _COMMANDS[args.command](args)
    except DocsifyHelperError as exc:
        log.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
