"""Error hierarchy for docsify_helper."""

from __future__ import annotations

from typing import Optional, Sequence


class DocsifyHelperError(Exception):
    """Base class for all docsify_helper errors.

    :param message: Human-readable error description.
    :param path: The filesystem or document path involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.path is not None:
            return f"{base} | path={self.path!r}"
        return base

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__())]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        return f"{cls}({', '.join(args)})"


class ScanError(DocsifyHelperError):
    """Raised when the documentation root cannot be scanned."""


class WriteError(DocsifyHelperError):
    """Raised when the generated sidebar cannot be written."""


class ConfigError(DocsifyHelperError):
    """Raised for a missing, unreadable, or invalid configuration."""


class InvalidPath(DocsifyHelperError):
    """Raised for malformed or unsafe relative paths."""


class DeploymentError(DocsifyHelperError):
    """Raised when an external deployment tool is missing or fails.

    :param command: The command line that failed, if any.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        command: Optional[Sequence[str]] = None,
    ) -> None:
        self.command = tuple(command) if command is not None else None
        super().__init__(message, path=path)

    def __str__(self) -> str:
        base = super().__str__()
        if self.command:
            return f"{base} | command={' '.join(self.command)!r}"
        return base
