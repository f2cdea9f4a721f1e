"""
L4 Execution — Placing files into the destination prefix.

Every file is written under a temp name in its final directory and
then renamed over the target, so the prefix never holds a
half-written executable.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from toli_formula.core.services.formula.data.destinations import (
    BIN_DIR,
    COMPLETION_DESTINATIONS,
    COMPLETION_MODE,
    EXECUTABLE_MODE,
)
from toli_formula.core.services.formula.errors import PlacementError

logger = logging.getLogger(__name__)


def executable_destination(prefix: Path, binary_name: str) -> Path:
    """``<prefix>/bin/<binary>``."""
    return Path(prefix) / BIN_DIR / binary_name


def completion_destination(prefix: Path, shell: str, binary_name: str) -> Path:
    """Shell-specific completion path under ``prefix``.

    Raises:
        KeyError: Unknown shell.
    """
    directory, filename = COMPLETION_DESTINATIONS[shell]
    return Path(prefix) / directory / filename.format(name=binary_name)


def place_file(src: Path, dest: Path, *, mode: int) -> Path:
    """Atomically copy ``src`` to ``dest`` with permissions ``mode``.

    Raises:
        PlacementError: Directory creation, copy, chmod, or rename failed.
    """
    tmp_path: str | None = None
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=dest.parent, prefix=f".{dest.name}.", suffix=".tmp",
        )
        with os.fdopen(fd, "wb") as out, open(src, "rb") as inp:
            shutil.copyfileobj(inp, out)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, dest)
    except OSError as e:
        if tmp_path is not None:
            Path(tmp_path).unlink(missing_ok=True)
        raise PlacementError(f"Cannot install {dest}: {e}") from e

    logger.debug("Placed %s → %s", src.name, dest)
    return dest


def place_executable(src: Path, prefix: Path, binary_name: str) -> Path:
    return place_file(
        src, executable_destination(prefix, binary_name), mode=EXECUTABLE_MODE,
    )


def place_completion(src: Path, prefix: Path, shell: str, binary_name: str) -> Path:
    return place_file(
        src, completion_destination(prefix, shell, binary_name), mode=COMPLETION_MODE,
    )
