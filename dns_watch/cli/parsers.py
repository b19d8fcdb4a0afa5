"""CLI argument parsers and validators."""

from __future__ import annotations

import shlex
from pathlib import Path

import typer

from ..core.models import NotifyCommand, VariableBinding

TEMPLATE_SUFFIX = ".j2"


def parse_var(value: str) -> VariableBinding:
    """Parse a variable in format NAME[:HOST]; HOST defaults to NAME."""
    name, sep, host = value.partition(":")
    if not name:
        raise typer.BadParameter(f"Must be NAME[:HOST], got: {value!r}")
    if sep and not host:
        raise typer.BadParameter(f"Missing HOST after ':' in {value!r}")
    return VariableBinding(name=name, hostname=host or name)


def parse_const(value: str) -> tuple[str, str]:
    """Parse a constant in format NAME=VALUE."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be NAME=VALUE, got: {value!r}")
    name, val = value.split("=", 1)
    if not name:
        raise typer.BadParameter(f"Missing NAME in {value!r}")
    return name, val


def parse_command(value: str) -> NotifyCommand:
    """Split a shell-style command line into program and arguments."""
    try:
        argv = shlex.split(value)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid command {value!r}: {e}") from e
    if not argv:
        raise typer.BadParameter("Command must not be empty")
    return NotifyCommand(argv=tuple(argv))


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def infer_output(template: Path) -> str:
    """Derive the output name: strip a trailing .j2, otherwise append .out."""
    name = str(template)
    if name.endswith(TEMPLATE_SUFFIX) and len(name) > len(TEMPLATE_SUFFIX):
        return name[: -len(TEMPLATE_SUFFIX)]
    return name + ".out"
