"""
L4 Execution — Archive extraction.

Unpacks a verified release archive into a scoped temp directory and
finds the executable plus its shell completions.

Expected archive layout::

    ./<binary>
    ./completions/<binary>.bash
    ./completions/<binary>.zsh
    ./completions/<binary>.fish

A single wrapping directory (``<binary>-<version>/...``) is tolerated.
"""

from __future__ import annotations

import logging
import tarfile
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

from toli_formula.core.models.layout import SHELLS
from toli_formula.core.services.formula.errors import MalformedArchiveError

logger = logging.getLogger(__name__)


@dataclass
class ExtractedRelease:
    """Files found in an unpacked archive."""

    root: Path
    executable: Path
    completions: dict[str, Path] = field(default_factory=dict)


def unpack(archive: Path, dest: Path) -> None:
    """Unpack a tar (any compression) or zip archive into ``dest``.

    Raises:
        MalformedArchiveError: Not a readable archive, or it tries to
            write outside ``dest``.
    """
    dest.mkdir(parents=True, exist_ok=True)
    try:
        if zipfile.is_zipfile(archive):
            with zipfile.ZipFile(archive, "r") as zf:
                zf.extractall(dest)
        elif tarfile.is_tarfile(archive):
            with tarfile.open(archive, "r:*") as tf:
                tf.extractall(dest, filter="data")
        else:
            raise MalformedArchiveError(f"{archive.name} is not a tar or zip archive")
    except MalformedArchiveError:
        raise
    except (tarfile.TarError, zipfile.BadZipFile, EOFError, OSError) as e:
        raise MalformedArchiveError(f"Cannot extract {archive.name}: {e}") from e


def _find_root(extract_dir: Path, binary_name: str) -> Path | None:
    """Directory that holds the binary: the top level, or a lone subdirectory."""
    if (extract_dir / binary_name).is_file():
        return extract_dir

    entries = list(extract_dir.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        nested = entries[0]
        if (nested / binary_name).is_file():
            return nested
    return None


def extract_release(archive: Path, dest: Path, binary_name: str) -> ExtractedRelease:
    """Unpack ``archive`` and locate the release files.

    Args:
        archive: Verified archive file.
        dest: Scoped temp directory to unpack into.
        binary_name: Executable name expected at the archive root.

    Returns:
        ``ExtractedRelease`` with the executable and whichever
        completion scripts were shipped.

    Raises:
        MalformedArchiveError: Unreadable archive or no executable.
    """
    unpack(archive, dest)

    root = _find_root(dest, binary_name)
    if root is None:
        available = sorted(
            str(p.relative_to(dest)) for p in dest.rglob("*") if p.is_file()
        )
        raise MalformedArchiveError(
            f"Executable '{binary_name}' not found in {archive.name}"
            + (f" (contains: {', '.join(available[:10])})" if available else " (empty)")
        )

    completions: dict[str, Path] = {}
    comp_dir = root / "completions"
    for shell in SHELLS:
        script = comp_dir / f"{binary_name}.{shell}"
        if script.is_file():
            completions[shell] = script
        else:
            logger.warning("No %s completion in archive, skipping", shell)

    logger.info(
        "Extracted %s (completions: %s)",
        binary_name, ", ".join(completions) or "none",
    )
    return ExtractedRelease(root=root, executable=root / binary_name, completions=completions)
