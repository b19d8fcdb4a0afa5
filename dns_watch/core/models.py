"""Domain models for bindings, watch configuration and per-tick state."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import ConfigurationError

# Destination value meaning "write to standard output".
STDOUT = "-"


class VariableBinding(BaseModel):
    """A template variable bound to the addresses of a hostname."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Template variable name")
    hostname: str = Field(..., min_length=1, description="Hostname to resolve")


class NotifyCommand(BaseModel):
    """External command run after the output file changes."""

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...] = Field(..., min_length=1, description="Program and args")

    def __str__(self) -> str:
        return " ".join(self.argv)


class WriteResult(BaseModel):
    """Outcome of handing rendered text to the output writer."""

    model_config = ConfigDict(frozen=True)

    changed: bool
    path: Optional[Path] = None


class WatchState(BaseModel):
    """State carried from one tick to the next.

    ``previous_output`` is the text of the last successful write, or ``None``
    before the first one. Instances are immutable; each tick returns a new one.
    """

    model_config = ConfigDict(frozen=True)

    previous_output: Optional[str] = None
    last_tick_ok: Optional[bool] = None
    ticks: int = 0

    @property
    def first_write_pending(self) -> bool:
        return self.previous_output is None


class TickOutcome(BaseModel):
    """Result of one resolve, render, write and notify cycle."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: WatchState
    ok: bool
    changed: bool = False
    notified: bool = False
    exit_status: Optional[int] = None
    error: Optional[Exception] = None


class WatchConfig(BaseModel):
    """Configuration for the resolve-render cycle."""

    bindings: list[VariableBinding] = Field(default_factory=list)
    constants: dict[str, str] = Field(default_factory=dict)
    template_path: Path = Field(..., description="Jinja2 template file")
    output: str = Field(..., min_length=1, description="Output path or '-'")
    notify_command: Optional[NotifyCommand] = None
    watch: bool = False
    interval: float = Field(default=1.0, gt=0, description="Seconds between ticks")
    dns_timeout: float = Field(default=1.0, gt=0, description="DNS lookup timeout")
    notify_on_first: bool = True
    quiet_command: bool = False
    file_mode: int = Field(default=0o644, description="File permissions (octal)")

    @model_validator(mode="after")
    def _check_consistency(self) -> "WatchConfig":
        seen: set[str] = set()
        for binding in self.bindings:
            if binding.name in seen:
                raise ConfigurationError(
                    f"variable {binding.name!r} is bound more than once"
                )
            seen.add(binding.name)
        clashes = sorted(seen & set(self.constants))
        if clashes:
            raise ConfigurationError(
                f"names used both as variable and constant: {', '.join(clashes)}"
            )
        if self.watch and self.writes_to_stdout:
            raise ConfigurationError("cannot watch with output to standard out")
        return self

    @property
    def writes_to_stdout(self) -> bool:
        return self.output == STDOUT

    @property
    def output_path(self) -> Path:
        return Path(self.output)
