"""Deployers — hand the generated site to git or Cloudflare Pages."""

from __future__ import annotations

import abc
import dataclasses
import logging
import os
import subprocess
from datetime import datetime
from typing import TYPE_CHECKING

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from docsify_helper._errors import ConfigError, DeploymentError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from tenacity.wait import wait_base

    from docsify_helper._config import HelperConfig

log = logging.getLogger(__name__)

_PUSH_ATTEMPTS = 3


@dataclasses.dataclass(frozen=True)
class DeployResult:
    """Outcome of an environment check or a deployment.

    :param status: Always ``"success"``; failures raise :class:`DeploymentError`.
    :param message: Human-readable summary.
    :param details: Tool-specific extras (executable, commit message, output).
    """

    status: str
    message: str
    details: dict[str, object] = dataclasses.field(default_factory=dict)


class Deployer(abc.ABC):
    """Base class for deployment targets.

    Tool failures never leak as ``subprocess`` or ``OSError`` exceptions;
    they surface as :class:`DeploymentError`.

    :param config: The full configuration; ``output_dir`` is what gets deployed.
    """

    def __init__(self, config: HelperConfig) -> None:
        self._config = config

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Deployment type identifier (e.g. ``'git'``)."""

    @abc.abstractmethod
    def check_environment(self) -> DeployResult:
        """Verify the external tool is installed and usable.

        :raises DeploymentError: If the tool is missing or not ready.
        """

    @abc.abstractmethod
    def deploy(self) -> DeployResult:
        """Check the environment, then publish ``output_dir``.

        :raises DeploymentError: If any step fails.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(output_dir={str(self._config.output_dir)!r})"

    def _run(
        self,
        command: Sequence[str],
        *,
        cwd: os.PathLike[str] | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> subprocess.CompletedProcess[str]:
        log.debug("Running %s", " ".join(command))
        try:
            return subprocess.run(
                list(command),
                cwd=cwd,
                env=dict(env) if env is not None else None,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            raise DeploymentError(f"Executable not found: {command[0]}", command=command) from None
        except OSError as exc:
            raise DeploymentError(f"Cannot execute {command[0]}: {exc}", command=command) from exc

    def _run_checked(
        self,
        command: Sequence[str],
        *,
        cwd: os.PathLike[str] | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> subprocess.CompletedProcess[str]:
        proc = self._run(command, cwd=cwd, env=env)
        if proc.returncode != 0:
            output = (proc.stderr or proc.stdout or "").strip()
            raise DeploymentError(
                f"Command failed with exit code {proc.returncode}: {output}",
                command=command,
            )
        return proc


def render_commit_message(template: str, now: datetime) -> str:
    """Fill ``{{date}}``, ``{{dateShort}}``, ``{{time}}`` and ``{{timestamp}}``."""
    replacements = {
        "{{date}}": now.strftime("%Y-%m-%d %H:%M:%S"),
        "{{dateShort}}": now.strftime("%Y-%m-%d"),
        "{{time}}": now.strftime("%H:%M:%S"),
        "{{timestamp}}": str(int(now.timestamp() * 1000)),
    }
    for placeholder, value in replacements.items():
        template = template.replace(placeholder, value)
    return template


class GitDeployer(Deployer):
    """Commit the output directory and push it to ``origin``.

    :param config: Full configuration.
    :param push_wait: Wait strategy between push attempts.
    """

    def __init__(self, config: HelperConfig, *, push_wait: wait_base | None = None) -> None:
        super().__init__(config)
        self._git = config.deployment.git
        self._push_wait = push_wait or wait_exponential(multiplier=1, min=2, max=10)

    @property
    def name(self) -> str:
        return "git"

    @property
    def executable(self) -> str:
        return self._git.executable_path or "git"

    def check_environment(self) -> DeployResult:
        try:
            self._run_checked([self.executable, "--version"])
        except DeploymentError as exc:
            if not self._git.executable_path:
                raise DeploymentError(
                    "git is not installed or not on PATH; install it or set deployment.git.executablePath",
                    command=exc.command,
                ) from exc
            raise DeploymentError(f"Cannot run git at {self.executable}", command=exc.command) from exc
        try:
            self._run_checked([self.executable, "status"], cwd=self._config.output_dir)
        except DeploymentError as exc:
            raise DeploymentError(
                "Output directory is not a git repository; run 'git init' first",
                path=str(self._config.output_dir),
                command=exc.command,
            ) from exc
        return DeployResult("success", "git environment OK", {"executable": self.executable})

    def deploy(self, *, now: datetime | None = None) -> DeployResult:
        self.check_environment()
        git = self.executable
        work_dir = self._config.output_dir
        self._run_checked([git, "add", "."], cwd=work_dir)

        message = render_commit_message(self._git.commit_message, now or datetime.now())
        proc = self._run([git, "commit", "-m", message], cwd=work_dir)
        if proc.returncode != 0:
            output = f"{proc.stdout}\n{proc.stderr}"
            if "nothing to commit" in output:
                log.info("No changes to commit in %s", work_dir)
                return DeployResult(
                    "success",
                    "No file changes detected, commit skipped",
                    {"commit_message": message, "committed": False, "pushed": False},
                )
            raise DeploymentError(
                f"git commit failed: {output.strip()}",
                path=str(work_dir),
                command=[git, "commit", "-m", message],
            )

        pushed = False
        if self._git.remote_url:
            self._push(git, self._git.branch or "main")
            pushed = True
        return DeployResult(
            "success",
            "git deployment complete",
            {"commit_message": message, "committed": True, "pushed": pushed},
        )

    def _push(self, git: str, branch: str) -> None:
        retrying = Retrying(
            retry=retry_if_exception_type(DeploymentError),
            stop=stop_after_attempt(_PUSH_ATTEMPTS),
            wait=self._push_wait,
            before_sleep=before_sleep_log(log, logging.WARNING),  # type: ignore[arg-type,unused-ignore]
            reraise=True,
        )
        log.info("Pushing to origin/%s", branch)
        retrying(self._run_checked, [git, "push", "origin", branch], cwd=self._config.output_dir)


class CloudflareDeployer(Deployer):
    """Publish the output directory with ``wrangler pages deploy``."""

    def __init__(self, config: HelperConfig) -> None:
        super().__init__(config)
        self._cf = config.deployment.cloudflare

    @property
    def name(self) -> str:
        return "cloudflare"

    @property
    def executable(self) -> str:
        return self._cf.wrangler_path or "wrangler"

    def _env(self) -> dict[str, str] | None:
        if not self._cf.account_id:
            return None
        return {**os.environ, "CLOUDFLARE_ACCOUNT_ID": self._cf.account_id}

    def check_environment(self) -> DeployResult:
        if not self._cf.project_name:
            raise ConfigError("Cloudflare Pages deployment requires deployment.cloudflare.projectName")
        try:
            self._run_checked([self.executable, "--version"])
        except DeploymentError as exc:
            if not self._cf.wrangler_path:
                raise DeploymentError(
                    "wrangler is not installed; run 'npm install -g wrangler'",
                    command=exc.command,
                ) from exc
            raise DeploymentError(f"Cannot run wrangler at {self.executable}", command=exc.command) from exc
        try:
            self._run_checked([self.executable, "whoami"], env=self._env())
        except DeploymentError as exc:
            raise DeploymentError(
                "Not logged in to Cloudflare; run 'wrangler login'", command=exc.command
            ) from exc
        return DeployResult("success", "Cloudflare environment OK", {"executable": self.executable})

    def deploy(self) -> DeployResult:
        self.check_environment()
        command = [
            self.executable,
            "pages",
            "deploy",
            str(self._config.output_dir),
            "--project-name",
            self._cf.project_name,
        ]
        try:
            proc = self._run_checked(command, env=self._env())
        except DeploymentError as exc:
            raise DeploymentError(f"Cloudflare Pages deployment failed: {exc}", command=command) from exc
        return DeployResult(
            "success",
            "Cloudflare Pages deployment complete",
            {"output": proc.stdout, "errors": proc.stderr},
        )


# Maps deployment.type strings to deployer classes.
_DEPLOYER_FACTORIES: dict[str, type[Deployer]] = {}


def register_deployer(type_name: str, cls: type[Deployer]) -> None:
    """Register a deployer class for a ``deployment.type`` value."""
    _DEPLOYER_FACTORIES[type_name] = cls


def registered_deployers() -> list[str]:
    return sorted(_DEPLOYER_FACTORIES)


def get_deployer(config: HelperConfig) -> Deployer:
    """Instantiate the deployer selected by ``config.deployment.type``.

    :raises ConfigError: If the type is not registered.
    """
    kind = config.deployment.type
    if kind not in _DEPLOYER_FACTORIES:
        raise ConfigError(f"Unsupported deployment type {kind!r}. Registered types: {registered_deployers()}")
    return _DEPLOYER_FACTORIES[kind](config)


register_deployer("git", GitDeployer)
register_deployer("cloudflare", CloudflareDeployer)
