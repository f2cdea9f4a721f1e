"""
L3 Detection — Host OS / architecture probe.

Read-only.  Kept separate from the resolver so the resolver stays pure
and tests can pass any host pair.
"""

from __future__ import annotations

import platform


def detect_host() -> tuple[str, str]:
    """Return ``(system, machine)`` as reported by the interpreter."""
    return platform.system(), platform.machine()
