"""Run the notify command after the output changes."""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol

from ..core.errors import LaunchError
from ..core.models import NotifyCommand

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, command: NotifyCommand) -> int:
        """Run ``command`` to completion and return its exit status.

        Raises LaunchError when the command cannot start or exits non-zero.
        """
        ...


class SubprocessNotifier:
    """Runs the command synchronously; no timeout is imposed."""

    def __init__(self, *, quiet: bool = False) -> None:
        self.quiet = quiet

    def notify(self, command: NotifyCommand) -> int:
        output = subprocess.DEVNULL if self.quiet else None
        logger.debug(f"Running notify command: {command}")
        try:
            result = subprocess.run(
                list(command.argv),
                stdin=subprocess.DEVNULL,
                stdout=output,
                stderr=output,
                check=False,
            )
        except OSError as exc:
            raise LaunchError(command.argv, cause=exc) from exc

        logger.debug(f"Notify command {command} terminated with {result.returncode}")
        if result.returncode != 0:
            raise LaunchError(command.argv, exit_status=result.returncode)
        return result.returncode


class RecordingNotifier:
    """Records invocations instead of spawning processes."""

    def __init__(self, exit_status: int = 0) -> None:
        self.exit_status = exit_status
        self.calls: list[NotifyCommand] = []

    def notify(self, command: NotifyCommand) -> int:
        self.calls.append(command)
        if self.exit_status != 0:
            raise LaunchError(command.argv, exit_status=self.exit_status)
        return self.exit_status
