"""
L0 Data — Platform table and host-name normalization.

Pure data. No logic. No imports beyond stdlib.

Adding a platform is a data change: append a row to ``PLATFORMS`` and
publish a checksum for the new key in the release descriptor.
"""

from __future__ import annotations

from typing import NamedTuple


class PlatformTarget(NamedTuple):
    key: str
    os: str
    arch: str
    triple: str


PLATFORMS: dict[str, PlatformTarget] = {
    t.key: t
    for t in (
        PlatformTarget("macos-x86_64", "macos", "x86_64", "x86_64-apple-darwin"),
        PlatformTarget("macos-arm64", "macos", "arm64", "aarch64-apple-darwin"),
        PlatformTarget("linux-x86_64", "linux", "x86_64", "x86_64-unknown-linux-gnu"),
        PlatformTarget("linux-arm64", "linux", "arm64", "aarch64-unknown-linux-gnu"),
    )
}

# OS name normalization: platform.system() and common spellings.
_OS_MAP: dict[str, str] = {
    "darwin": "macos",
    "macos": "macos",
    "mac": "macos",
    "osx": "macos",
    "linux": "linux",
}

# Architecture name normalization.  Rust target triples use the raw
# ``uname -m`` spelling, so the canonical names follow that, not Go-style.
_ARCH_MAP: dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",     # Windows / WSL2 report AMD64
    "x64": "x86_64",
    "aarch64": "arm64",
    "arm64": "arm64",      # macOS (Darwin reports arm64)
}
