"""File I/O operations for rendered output."""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional, TextIO

from ..core.errors import OutputWriteError
from ..core.models import WriteResult

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def write_output(
    path: Path, new_output: str, previous_output: Optional[str], mode: int = 0o644
) -> WriteResult:
    """Write ``new_output`` only when it differs from the last written text.

    With no previous output the file is always written. The comparison is
    against ``previous_output`` in memory, the destination is never re-read.

    Raises:
        OutputWriteError: if the destination cannot be written
    """
    if previous_output is not None and new_output == previous_output:
        logger.debug(f"{path} unchanged")
        return WriteResult(changed=False, path=path)

    try:
        atomic_write_text(path, new_output, mode=mode)
    except OSError as exc:
        raise OutputWriteError(path, exc) from exc

    logger.info(f"{path} updated")
    return WriteResult(changed=True, path=path)


def write_stdout(text: str, stream: TextIO | None = None) -> WriteResult:
    """Send rendered text to standard output."""
    out = stream if stream is not None else sys.stdout
    try:
        out.write(text)
        out.flush()
    except OSError as exc:
        raise OutputWriteError(Path("<stdout>"), exc) from exc
    return WriteResult(changed=True)
