"""
L0 Data — Built-in release descriptor.

Used when no release.yml is found.  Mirrors the published toli 0.1.0
release; both archives were uploaded from the same tag.
"""

from __future__ import annotations

from typing import Any

TOLI_RELEASE: dict[str, Any] = {
    "name": "toli",
    "description": (
        "Terminal Intelligence & Learning Operator - "
        "Natural language interface for shell commands"
    ),
    "homepage": "https://github.com/siaf/toli",
    "version": "0.1.0",
    "url_template": (
        "https://github.com/siaf/toli/releases/download/"
        "v{version}/{name}-{version}-{target}.tar.gz"
    ),
    "platforms": {
        "macos-x86_64": {
            "sha256": "3a00d2280fdf9e5fe7af42978a737569e45edb123b4b352ace02d302a4633039",
        },
        "linux-x86_64": {
            "sha256": "3a00d2280fdf9e5fe7af42978a737569e45edb123b4b352ace02d302a4633039",
        },
    },
    "aliases": {
        "howto": "--how",
        "do": "--do",
        "explain": "--explain",
    },
}

# Checksum value shipped in descriptors before the release is built.
PLACEHOLDER_SHA256 = "REPLACE_WITH_ACTUAL_SHA256_AFTER_RELEASE"
