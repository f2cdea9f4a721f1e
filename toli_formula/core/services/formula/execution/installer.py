"""
L4 Execution — Fetch, verify, extract, place.

The four steps run in order inside one scoped temp directory; each
one is a hard precondition for the next.  Nothing is written under
the prefix until the archive has been verified and unpacked.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from toli_formula.core.models.layout import InstalledLayout
from toli_formula.core.models.release import PlatformArtifact
from toli_formula.core.services.formula.domain.checksum import is_sha256_hex
from toli_formula.core.services.formula.errors import IntegrityError
from toli_formula.core.services.formula.execution.archive import extract_release
from toli_formula.core.services.formula.execution.download import (
    fetch_artifact,
    verify_checksum,
)
from toli_formula.core.services.formula.execution.placement import (
    place_completion,
    place_executable,
)

logger = logging.getLogger(__name__)


def install(
    artifact: PlatformArtifact,
    prefix: Path,
    *,
    binary_name: str,
    timeout: int = 60,
) -> InstalledLayout:
    """Install one artifact under ``prefix``.

    Args:
        artifact: Located artifact (URL + expected digest).
        prefix: Destination root, e.g. ``/usr/local``.
        binary_name: Executable name inside the archive.
        timeout: Fetch timeout in seconds.

    Returns:
        The layout written. Only returned once every file is in place.

    Raises:
        DownloadError, IntegrityError, MalformedArchiveError, PlacementError
    """
    prefix = Path(prefix)

    if not is_sha256_hex(artifact.sha256):
        raise IntegrityError(
            f"Checksum for {artifact.platform} is not a SHA-256 digest: {artifact.sha256!r}"
        )

    with tempfile.TemporaryDirectory(prefix=f"{binary_name}-install-") as tmp:
        tmp_dir = Path(tmp)
        archive = tmp_dir / (artifact.filename or "artifact")

        fetch_artifact(artifact.url, archive, timeout=timeout)
        verify_checksum(archive, artifact)
        extracted = extract_release(archive, tmp_dir / "extracted", binary_name)

        logger.info("Installing into %s", prefix)
        executable = place_executable(extracted.executable, prefix, binary_name)
        completions = {
            shell: place_completion(script, prefix, shell, binary_name)
            for shell, script in extracted.completions.items()
        }

    layout = InstalledLayout(prefix=prefix, executable=executable, completions=completions)
    logger.info("Installed %d file(s) under %s", len(layout.files), prefix)
    return layout
