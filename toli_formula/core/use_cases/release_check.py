"""
Release check use case — validate a release descriptor before publishing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from toli_formula.core.config.loader import ConfigError, builtin_release, find_release_file, load_release
from toli_formula.core.models.release import Release
from toli_formula.core.services.formula.data.platforms import PLATFORMS
from toli_formula.core.services.formula.domain.checksum import is_sha256_hex
from toli_formula.core.services.formula.errors import ArtifactNotFoundError
from toli_formula.core.services.formula.resolver.artifact_location import artifact_url


@dataclass
class ReleaseCheckResult:
    """Result of release descriptor validation."""

    valid: bool = False
    release: Release | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    urls: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "name": self.release.name if self.release else None,
            "version": self.release.version if self.release else None,
            "platforms": self.release.platform_keys() if self.release else [],
            "urls": self.urls,
        }


def check_release(config_path: Path | None = None) -> ReleaseCheckResult:
    """Validate a release descriptor and report issues.

    Args:
        config_path: Optional explicit path to release.yml.  Without one,
            release.yml is searched upward, then the built-in release
            is checked.

    Returns:
        ReleaseCheckResult with validation status and any issues.
    """
    result = ReleaseCheckResult()

    if config_path is None:
        config_path = find_release_file()
    result.config_path = config_path

    try:
        release = load_release(config_path) if config_path else builtin_release()
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.release = release

    if not release.platforms:
        result.errors.append("No platforms published. Nothing can be installed.")

    for key in release.platform_keys():
        if key not in PLATFORMS:
            result.errors.append(
                f"Unknown platform '{key}'. Known: {', '.join(sorted(PLATFORMS))}"
            )
            continue

        sha256 = release.platforms[key].sha256
        if not is_sha256_hex(sha256):
            result.errors.append(
                f"{key}: checksum {sha256!r} is not a SHA-256 digest "
                "(replace it with the archive's real checksum)"
            )

        try:
            result.urls[key] = artifact_url(release, key)
        except ArtifactNotFoundError as e:
            result.errors.append(f"{key}: {e}")

    template = release.url_template
    if "{version}" not in template:
        result.warnings.append("url_template has no {version} placeholder.")
    if "{target}" not in template:
        result.warnings.append(
            "url_template has no {target} placeholder; every platform gets the same URL."
        )

    if not release.aliases:
        result.warnings.append("No aliases defined. Caveats will be empty.")

    result.valid = len(result.errors) == 0
    return result
