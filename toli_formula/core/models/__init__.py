"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from toli_formula.core.models import Release, PlatformArtifact, InstalledLayout
"""

from toli_formula.core.models.layout import SHELLS, InstalledLayout
from toli_formula.core.models.release import (
    DEFAULT_URL_TEMPLATE,
    PlatformArtifact,
    Release,
    ReleaseAsset,
)

__all__ = [
    "DEFAULT_URL_TEMPLATE",
    # layout.py
    "InstalledLayout",
    # release.py
    "PlatformArtifact",
    "Release",
    "ReleaseAsset",
    "SHELLS",
]
