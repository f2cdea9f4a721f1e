"""
L5 Orchestration — End-to-end install.

Resolve → locate → install → report → verify, strictly in sequence.
Errors from every step propagate unchanged; only the smoke test
degrades to a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from toli_formula.core.models.layout import InstalledLayout
from toli_formula.core.models.release import PlatformArtifact, Release
from toli_formula.core.services.formula.detection.host import detect_host
from toli_formula.core.services.formula.detection.tool_version import verify
from toli_formula.core.services.formula.domain.caveats import report
from toli_formula.core.services.formula.execution.installer import install
from toli_formula.core.services.formula.resolver.artifact_location import locate
from toli_formula.core.services.formula.resolver.platform_resolution import resolve

logger = logging.getLogger(__name__)


@dataclass
class InstallReport:
    """Outcome of one completed install run."""

    release: Release
    platform: str
    artifact: PlatformArtifact
    layout: InstalledLayout
    caveats: str
    verified: bool | None = None

    def to_dict(self) -> dict:
        return {
            "ok": True,
            "name": self.release.name,
            "version": self.release.version,
            "platform": self.platform,
            "url": self.artifact.url,
            "sha256": self.artifact.sha256,
            "layout": self.layout.to_dict(),
            "verified": self.verified,
            "caveats": self.caveats,
        }


def run_install(
    release: Release,
    prefix: Path,
    *,
    host_os: str | None = None,
    host_arch: str | None = None,
    version: str | None = None,
    timeout: int = 60,
    smoke_test: bool = True,
) -> InstallReport:
    """Install ``release`` for the host platform under ``prefix``.

    Args:
        release: Release descriptor.
        prefix: Destination root.
        host_os: Override the detected OS (``Darwin``, ``linux``, ...).
        host_arch: Override the detected machine (``x86_64``, ``arm64``, ...).
        version: Version to fetch (default: ``release.version``).
        timeout: Fetch timeout in seconds.
        smoke_test: Run ``<binary> --version`` after install.

    Returns:
        ``InstallReport``.  ``verified`` is None when the smoke test
        was skipped.

    Raises:
        FormulaError: Any fatal step failure.
    """
    if host_os is None or host_arch is None:
        detected_os, detected_arch = detect_host()
        host_os = host_os or detected_os
        host_arch = host_arch or detected_arch

    version = version or release.version
    binary_name = release.binary_name

    platform_key = resolve(host_os, host_arch, supported=release.platforms)
    logger.info("Platform: %s", platform_key)

    artifact = locate(release, platform_key, version)
    logger.info("Artifact: %s", artifact.url)

    layout = install(artifact, Path(prefix), binary_name=binary_name, timeout=timeout)
    caveats = report(layout, binary_name, release.aliases)

    verified: bool | None = None
    if smoke_test:
        verified = verify(Path(prefix), binary_name, version)
        if not verified:
            logger.warning(
                "%s was installed but `%s --version` did not report %s",
                binary_name, binary_name, version,
            )

    return InstallReport(
        release=release,
        platform=platform_key,
        artifact=artifact,
        layout=layout,
        caveats=caveats,
        verified=verified,
    )
