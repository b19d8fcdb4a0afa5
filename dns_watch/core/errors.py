"""Error kinds raised across the resolve, render, write and notify stages."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class DnsWatchError(Exception):
    """Base class for failures of a single tick."""


class ConfigurationError(DnsWatchError, ValueError):
    """Raised when the supplied bindings, constants or options are invalid."""


class ResolutionError(DnsWatchError):
    """Raised when a hostname cannot be resolved."""

    def __init__(self, hostname: str, cause: str) -> None:
        self.hostname = hostname
        self.cause = cause
        super().__init__(f"could not resolve {hostname}: {cause}")


class TemplateError(DnsWatchError):
    """Raised when a template cannot be loaded or rendered."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"template failed to render: {description}")


class OutputWriteError(DnsWatchError):
    """Raised when the rendered output cannot be written to its destination."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"couldn't write {path}: {cause}")


class LaunchError(DnsWatchError):
    """Raised when the notify command cannot start or exits non-zero."""

    def __init__(
        self,
        argv: Sequence[str],
        *,
        exit_status: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.argv = tuple(argv)
        self.exit_status = exit_status
        self.cause = cause
        command = " ".join(self.argv)
        if cause is not None:
            message = f"couldn't launch notify command {command!r}: {cause}"
        else:
            message = f"notify command {command!r} exited with status {exit_status}"
        super().__init__(message)
