"""
Configuration loader — reads release.yml into a Release model.

It reads YAML, validates against the Pydantic schema, and returns a
typed Release.  When no descriptor is found the built-in toli release
is used.  Runtime settings (prefix, timeout) come from environment
variables.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from toli_formula.core.models.release import Release
from toli_formula.core.services.formula.data.releases import TOLI_RELEASE

logger = logging.getLogger(__name__)

# Default descriptor filename
RELEASE_CONFIG_FILE = "release.yml"

DEFAULT_PREFIX = "/usr/local"
DEFAULT_TIMEOUT = 60


class ConfigError(Exception):
    """Raised when the release descriptor or settings are invalid."""

    step = "config"


def find_release_file(start_dir: Path | None = None) -> Path | None:
    """Search for release.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to release.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / RELEASE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_release(path: Path) -> Release:
    """Load and validate a release descriptor.

    Args:
        path: Path to a release.yml file.

    Returns:
        Validated Release model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Release descriptor not found: {path}")

    logger.debug("Loading release descriptor from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "release" key or be flat
    release_data = data["release"] if isinstance(data.get("release"), dict) else data

    # YAML reads bare versions like 1.0 as floats
    if isinstance(release_data.get("version"), (int, float)):
        release_data["version"] = str(release_data["version"])

    try:
        release = Release.model_validate(release_data)
    except Exception as e:
        raise ConfigError(f"Invalid release descriptor: {e}") from e

    logger.info(
        "Loaded release '%s' %s with %d platform(s)",
        release.name, release.version, len(release.platforms),
    )
    return release


def builtin_release() -> Release:
    """The release descriptor shipped with the package."""
    return Release.model_validate(TOLI_RELEASE)


def resolve_release(path: Path | None = None) -> Release:
    """Explicit path → release.yml found upward → built-in descriptor."""
    if path is not None:
        return load_release(path)

    found = find_release_file()
    if found is not None:
        return load_release(found)

    logger.debug("No %s found, using built-in release", RELEASE_CONFIG_FILE)
    return builtin_release()


def default_prefix() -> Path:
    """Destination prefix: TOLI_FORMULA_PREFIX > HOMEBREW_PREFIX > /usr/local."""
    value = os.environ.get("TOLI_FORMULA_PREFIX") or os.environ.get("HOMEBREW_PREFIX")
    return Path(value or DEFAULT_PREFIX).expanduser()


def default_timeout() -> int:
    """Fetch timeout from TOLI_FORMULA_TIMEOUT (seconds)."""
    raw = os.environ.get("TOLI_FORMULA_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"TOLI_FORMULA_TIMEOUT must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"TOLI_FORMULA_TIMEOUT must be positive, got {value}")
    return value
