"""
L1 Domain — Checksum format rules (pure).

Only the shape of a digest is checked here.  Hashing bytes reads
files, so it lives in L4 (execution/download.py).
"""

from __future__ import annotations

import re

_SHA256_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def is_sha256_hex(value: str) -> bool:
    """True if ``value`` is exactly 64 hex characters (either case)."""
    return bool(_SHA256_RE.match(value or ""))


def digests_match(actual: str, expected: str) -> bool:
    """Case-insensitive comparison of two hex digests."""
    return actual.lower() == expected.lower()
