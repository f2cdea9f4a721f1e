"""
L4 Execution — Download and checksum verification.

Streams an artifact into a scoped temp location and checks its
SHA-256 before anything else looks at it.
"""

from __future__ import annotations

import hashlib
import http.client
import logging
import urllib.error
import urllib.request
from pathlib import Path

from toli_formula import __version__
from toli_formula.core.models.release import PlatformArtifact
from toli_formula.core.services.formula.domain.checksum import digests_match
from toli_formula.core.services.formula.errors import DownloadError, IntegrityError

logger = logging.getLogger(__name__)

_CHUNK = 8192
_USER_AGENT = f"toli-formula/{__version__}"


def _fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def fetch_artifact(url: str, dest: Path, *, timeout: int = 60) -> int:
    """Download ``url`` into ``dest``.

    ``dest`` must be inside a scoped temp directory.  On failure the
    partial file is removed, never left for a later step.

    Args:
        url: ``http(s)://`` or ``file://`` URL.
        dest: File to write.
        timeout: Socket timeout in seconds.

    Returns:
        Number of bytes written.

    Raises:
        DownloadError: Network failure, non-2xx status, malformed
            response, or timeout.
    """
    logger.info("Fetching %s", url)
    downloaded = 0
    try:
        req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            # file:// responses carry no status code
            status = getattr(resp, "status", None)
            if status is not None and not 200 <= status < 300:
                raise DownloadError(f"HTTP {status} fetching {url}")

            total = int(resp.headers.get("Content-Length") or 0)
            with open(dest, "wb") as f:
                last_progress = -1
                while True:
                    chunk = resp.read(_CHUNK)
                    if not chunk:
                        break
                    f.write(chunk)
                    downloaded += len(chunk)

                    if total > 0:
                        pct = int(downloaded * 100 / total)
                        if pct >= last_progress + 25:
                            last_progress = pct
                            logger.debug(
                                "Download progress: %d%% (%s / %s)",
                                pct, _fmt_size(downloaded), _fmt_size(total),
                            )
    except DownloadError:
        dest.unlink(missing_ok=True)
        raise
    except urllib.error.HTTPError as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"HTTP {e.code} fetching {url}: {e.reason}") from e
    except urllib.error.URLError as e:
        dest.unlink(missing_ok=True)
        if isinstance(e.reason, TimeoutError):
            raise DownloadError(f"Timed out after {timeout}s fetching {url}") from e
        raise DownloadError(f"Failed to fetch {url}: {e.reason}") from e
    except TimeoutError as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Timed out after {timeout}s fetching {url}") from e
    except http.client.HTTPException as e:
        # truncated bodies, malformed status lines
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Bad response fetching {url}: {e!r}") from e
    except (OSError, ValueError) as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Failed to fetch {url}: {e}") from e

    logger.info("Downloaded %s", _fmt_size(downloaded))
    return downloaded


def compute_sha256(path: Path) -> str:
    """Hex SHA-256 of a file, read in chunks."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK), b""):
            h.update(chunk)
    return h.hexdigest()


def verify_checksum(path: Path, artifact: PlatformArtifact) -> str:
    """Check ``path`` against the artifact's published digest.

    On mismatch the file is deleted before raising.

    Returns:
        The computed digest.

    Raises:
        IntegrityError: Digest does not match ``artifact.sha256``.
    """
    actual = compute_sha256(path)
    if not digests_match(actual, artifact.sha256):
        path.unlink(missing_ok=True)
        raise IntegrityError(
            f"Checksum mismatch for {artifact.filename}: "
            f"expected {artifact.sha256}, got {actual}"
        )
    logger.info("Checksum verified: sha256:%s", actual)
    return actual
