"""
L2 Resolver — Host platform → PlatformKey.

Pure: callers pass the host names in.  Use ``detection.host.detect_host``
to read them from the running interpreter.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from toli_formula.core.services.formula.data.platforms import _ARCH_MAP, _OS_MAP, PLATFORMS
from toli_formula.core.services.formula.errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)


def resolve(
    host_os: str,
    host_arch: str,
    *,
    supported: Iterable[str] | None = None,
) -> str:
    """Map a host OS/architecture pair to a platform key.

    Args:
        host_os: OS name as reported by ``platform.system()`` (``Darwin``,
            ``Linux``) or a normalized name (``macos``, ``linux``).
        host_arch: Machine name as reported by ``platform.machine()``.
        supported: Platform keys the release publishes.  When given,
            a key outside this set is also unsupported.

    Returns:
        Platform key such as ``"linux-x86_64"``.

    Raises:
        UnsupportedPlatformError: No known (or published) key matches.
    """
    os_name = _OS_MAP.get((host_os or "").strip().lower())
    arch = _ARCH_MAP.get((host_arch or "").strip().lower())

    if os_name is None or arch is None:
        raise UnsupportedPlatformError(
            f"Unsupported platform: {host_os or '?'}/{host_arch or '?'}"
        )

    key = f"{os_name}-{arch}"
    if key not in PLATFORMS:
        raise UnsupportedPlatformError(f"Unsupported platform: {key}")

    if supported is not None:
        published = set(supported)
        if key not in published:
            raise UnsupportedPlatformError(
                f"No release published for {key} "
                f"(available: {', '.join(sorted(published)) or 'none'})"
            )

    logger.debug("Resolved %s/%s → %s", host_os, host_arch, key)
    return key
