"""
L3 Detection — Installed product version check.

Runs ``<prefix>/bin/<name> --version`` and inspects the output.  This
is advisory smoke-testing: every failure is reported as ``False``,
never raised.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"v?(\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?)")


def get_installed_version(
    prefix: Path,
    product_name: str,
    *,
    timeout: int = 10,
) -> str | None:
    """Get the semver string the installed executable reports.

    Returns:
        Version such as ``"0.1.0"`` or ``None`` if the binary is missing,
        fails, or prints nothing version-like.
    """
    output = _run_version(prefix, product_name, timeout=timeout)
    if output is None:
        return None
    match = _VERSION_RE.search(output)
    return match.group(1) if match else None


def verify(
    prefix: Path,
    product_name: str,
    expected_version: str,
    *,
    timeout: int = 10,
) -> bool:
    """Smoke-test the installed executable.

    Args:
        prefix: Destination prefix the product was installed under.
        product_name: Executable name in ``<prefix>/bin``.
        expected_version: Version string the ``--version`` output must contain.
        timeout: Seconds before the invocation is abandoned.

    Returns:
        True if the command exits 0 and its output contains
        ``expected_version``.
    """
    output = _run_version(prefix, product_name, timeout=timeout)
    if output is None:
        return False

    if expected_version not in output:
        logger.warning(
            "Version check: expected %s, %s reported %r",
            expected_version, product_name, output.strip(),
        )
        return False

    logger.info("Version check passed: %s", output.strip())
    return True


def _run_version(prefix: Path, product_name: str, *, timeout: int) -> str | None:
    """Run ``--version``; return combined output on exit 0, else None."""
    exe = Path(prefix) / "bin" / product_name
    if not exe.is_file():
        logger.warning("Version check: %s does not exist", exe)
        return None

    try:
        result = subprocess.run(
            [str(exe), "--version"],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Version check: %s --version timed out after %ds", exe, timeout)
        return None
    except OSError as e:
        logger.warning("Version check: cannot run %s: %s", exe, e)
        return None

    if result.returncode != 0:
        logger.warning(
            "Version check: %s --version exited %d", exe, result.returncode,
        )
        return None

    # Some tools print their version on stderr
    return (result.stdout or "") + (result.stderr or "")
