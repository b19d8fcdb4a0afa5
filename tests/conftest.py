from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from dns_watch.core.models import NotifyCommand, VariableBinding, WatchConfig

from .helpers import HAPROXY_TEMPLATE


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    path = tmp_path / "haproxy.cfg.j2"
    path.write_text(HAPROXY_TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def make_config(tmp_path: Path, template_file: Path) -> Callable[..., WatchConfig]:
    def _make(**overrides: object) -> WatchConfig:
        values: dict[str, object] = {
            "bindings": [
                VariableBinding(name="frontend", hostname="frontend-service"),
                VariableBinding(name="backend", hostname="backend-service"),
            ],
            "template_path": template_file,
            "output": str(tmp_path / "haproxy.cfg"),
            "notify_command": NotifyCommand(argv=("reload-haproxy",)),
        }
        values.update(overrides)
        return WatchConfig(**values)

    return _make
