"""
L2 Resolver — PlatformKey → downloadable artifact.

Pure lookup.  The checksum is copied from the release table, never
computed here; only its format is checked so that a placeholder
descriptor fails before anything is fetched.
"""

from __future__ import annotations

import logging
from typing import Any

from toli_formula.core.models.release import PlatformArtifact, Release
from toli_formula.core.services.formula.data.platforms import PLATFORMS
from toli_formula.core.services.formula.domain.checksum import is_sha256_hex
from toli_formula.core.services.formula.errors import ArtifactNotFoundError, IntegrityError

logger = logging.getLogger(__name__)


def artifact_url(release: Release, platform_key: str, version: str | None = None) -> str:
    """Build the download URL for one platform.

    A per-platform ``url`` in the release table wins over the template.

    Raises:
        ArtifactNotFoundError: Unknown platform or unpublished key.
    """
    asset = release.get_asset(platform_key)
    if asset is None:
        raise ArtifactNotFoundError(
            f"Release {release.name} {release.version} has no artifact for {platform_key}"
        )

    target = PLATFORMS.get(platform_key)
    if target is None:
        raise ArtifactNotFoundError(f"No target triple known for {platform_key}")

    template = asset.url or release.url_template
    try:
        return template.format(
            name=release.name,
            version=version or release.version,
            target=target.triple,
        )
    except (KeyError, IndexError) as e:
        raise ArtifactNotFoundError(
            f"Invalid URL template {template!r}: unknown placeholder {e}"
        ) from e


def asset_name(release: Release, platform_key: str, version: str | None = None) -> str:
    """Expected archive file name for a platform, e.g. ``toli-0.1.0-x86_64-apple-darwin.tar.gz``."""
    return artifact_url(release, platform_key, version).rstrip("/").rsplit("/", 1)[-1]


def locate(
    release: Release,
    platform_key: str,
    version: str | None = None,
) -> PlatformArtifact:
    """Select the artifact for ``platform_key``.

    Args:
        release: Release descriptor.
        platform_key: Key from ``resolve()``.
        version: Version to substitute into the URL (default: the release's).

    Returns:
        Frozen ``PlatformArtifact``; identical on every call.

    Raises:
        ArtifactNotFoundError: The release publishes nothing for the key.
        IntegrityError: The published checksum is not a 64-char hex digest.
    """
    url = artifact_url(release, platform_key, version)
    sha256 = release.platforms[platform_key].sha256

    if not is_sha256_hex(sha256):
        raise IntegrityError(
            f"Checksum for {platform_key} is not a SHA-256 digest: {sha256!r}"
        )

    logger.debug("Located %s → %s", platform_key, url)
    return PlatformArtifact(platform=platform_key, url=url, sha256=sha256.lower())


def locate_all(release: Release) -> list[dict[str, Any]]:
    """Locate every published platform, reporting failures per entry.

    Returns:
        ``[{"platform": "...", "ok": True, "url": "...", "sha256": "..."}]``
        or ``{"ok": False, "error": "..."}`` entries for bad rows.
    """
    results: list[dict[str, Any]] = []
    for key in release.platform_keys():
        try:
            artifact = locate(release, key)
        except (ArtifactNotFoundError, IntegrityError) as e:
            results.append({"platform": key, "ok": False, "step": e.step, "error": str(e)})
            continue
        results.append({
            "platform": key,
            "ok": True,
            "url": artifact.url,
            "sha256": artifact.sha256,
        })
    return results
