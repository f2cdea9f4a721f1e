"""
Release model — the published, versioned set of platform archives.

Loaded from release.yml (or the built-in descriptor), a Release is the
canonical truth about where each platform's archive lives and what it
must hash to.  Releases are frozen: once published they never change.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_URL_TEMPLATE = (
    "https://github.com/siaf/toli/releases/download/"
    "v{version}/{name}-{version}-{target}.tar.gz"
)


class ReleaseAsset(BaseModel):
    """One platform's entry in the release checksum table.

    ``sha256`` is kept verbatim: a placeholder such as
    ``REPLACE_WITH_ACTUAL_SHA256_AFTER_RELEASE`` still loads, so that
    ``release check`` can point at it.  It is rejected at locate time.
    """

    model_config = ConfigDict(frozen=True)

    sha256: str
    url: str = ""


class Release(BaseModel):
    """A named, versioned, immutable set of platform archives."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    description: str = ""
    homepage: str = ""
    binary: str = ""
    url_template: str = DEFAULT_URL_TEMPLATE
    platforms: dict[str, ReleaseAsset] = Field(default_factory=dict)
    aliases: dict[str, str] = Field(default_factory=dict)

    @property
    def binary_name(self) -> str:
        """Executable name inside the archive (defaults to the release name)."""
        return self.binary or self.name

    def get_asset(self, platform_key: str) -> ReleaseAsset | None:
        """Look up a platform's asset entry."""
        return self.platforms.get(platform_key)

    def platform_keys(self) -> list[str]:
        """Published platform keys, sorted."""
        return sorted(self.platforms)


class PlatformArtifact(BaseModel):
    """A downloadable archive plus its expected SHA-256 digest."""

    model_config = ConfigDict(frozen=True)

    platform: str
    url: str
    sha256: str

    @property
    def filename(self) -> str:
        """Last path segment of the URL (used to pick an extractor)."""
        return self.url.rstrip("/").rsplit("/", 1)[-1]
