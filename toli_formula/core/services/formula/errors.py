"""
Install errors — one class per workflow step.

Every step is fail-fast: these propagate to the CLI boundary, which
prints ``[<step>] <message>`` and exits non-zero.  Nothing retries.
"""

from __future__ import annotations


class FormulaError(Exception):
    """Base class for all install workflow failures."""

    step = "install"


class UnsupportedPlatformError(FormulaError):
    """The host OS/arch matches no published platform."""

    step = "resolve"


class ArtifactNotFoundError(FormulaError):
    """The release has no artifact for a resolved platform key."""

    step = "locate"


class DownloadError(FormulaError):
    """Network failure, non-2xx response, or timeout while fetching."""

    step = "fetch"


class IntegrityError(FormulaError):
    """Checksum is malformed or does not match the fetched bytes."""

    step = "verify"


class MalformedArchiveError(FormulaError):
    """Archive is unreadable or lacks the executable."""

    step = "extract"


class PlacementError(FormulaError):
    """A file could not be written into the destination prefix."""

    step = "place"
