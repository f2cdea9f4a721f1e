"""
Shared test fixtures and configuration.

Release archives are built on the fly and served through ``file://``
URLs, so the full fetch → verify → extract → place path runs without
network access.
"""

from __future__ import annotations

import hashlib
import io
import tarfile
import textwrap
import zipfile
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from toli_formula.core.models.release import PlatformArtifact, Release, ReleaseAsset

LINUX_TRIPLE = "x86_64-unknown-linux-gnu"


def fake_binary(name: str = "toli", version: str = "0.1.0") -> bytes:
    """A POSIX shell script that answers ``--version`` like the real product."""
    return textwrap.dedent(f"""\
        #!/bin/sh
        if [ "$1" = "--version" ]; then
          echo "{name} {version}"
          exit 0
        fi
        echo "usage: {name} <query>"
    """).encode()


def sha256_of(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


def snapshot(root: Path) -> dict[str, bytes]:
    """Relative path → content for every file under ``root``."""
    if not root.exists():
        return {}
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def dist_dir(tmp_path: Path) -> Path:
    """Directory playing the role of the release download host."""
    d = tmp_path / "dist"
    d.mkdir()
    return d


@pytest.fixture
def prefix(tmp_path: Path) -> Path:
    """Destination prefix (not created until something is installed)."""
    return tmp_path / "prefix"


@pytest.fixture
def make_archive(dist_dir: Path) -> Callable[..., Path]:
    """Factory that builds a release archive in ``dist_dir``.

    Args:
        name: Executable name.
        version: Release version (used in the archive name).
        shells: Completion scripts to include.
        include_binary: Whether the executable is in the archive.
        wrap_dir: Optional single top-level directory to nest files in.
        fmt: ``"tar.gz"`` or ``"zip"``.
        reports: Version the binary prints (default: ``version``).
    """

    def _make(
        *,
        name: str = "toli",
        version: str = "0.1.0",
        shells: Iterable[str] = ("bash", "zsh", "fish"),
        include_binary: bool = True,
        wrap_dir: str | None = None,
        fmt: str = "tar.gz",
        reports: str | None = None,
    ) -> Path:
        members: dict[str, tuple[bytes, int]] = {}
        if include_binary:
            members[name] = (fake_binary(name, reports or version), 0o755)
        for shell in shells:
            members[f"completions/{name}.{shell}"] = (
                f"# {shell} completion for {name}\n".encode(), 0o644,
            )
        if wrap_dir:
            members = {f"{wrap_dir}/{k}": v for k, v in members.items()}

        archive = dist_dir / f"{name}-{version}-{LINUX_TRIPLE}.{fmt}"
        if fmt == "zip":
            with zipfile.ZipFile(archive, "w") as zf:
                for arcname, (data, _mode) in members.items():
                    zf.writestr(arcname, data)
        else:
            with tarfile.open(archive, "w:gz") as tf:
                for arcname, (data, mode) in members.items():
                    info = tarfile.TarInfo(arcname)
                    info.size = len(data)
                    info.mode = mode
                    tf.addfile(info, io.BytesIO(data))
        return archive

    return _make


@pytest.fixture
def artifact_for() -> Callable[..., PlatformArtifact]:
    """Build a PlatformArtifact pointing at a local archive."""

    def _artifact(archive: Path, sha256: str | None = None) -> PlatformArtifact:
        return PlatformArtifact(
            platform="linux-x86_64",
            url=archive.as_uri(),
            sha256=sha256 if sha256 is not None else sha256_of(archive),
        )

    return _artifact


@pytest.fixture
def release_for(dist_dir: Path) -> Callable[..., Release]:
    """Build a Release whose URL template points at ``dist_dir``."""

    def _release(sha256: str, *, version: str = "0.1.0") -> Release:
        return Release(
            name="toli",
            version=version,
            url_template=dist_dir.as_uri() + "/{name}-{version}-{target}.tar.gz",
            platforms={"linux-x86_64": ReleaseAsset(sha256=sha256)},
            aliases={"howto": "--how", "do": "--do", "explain": "--explain"},
        )

    return _release


@pytest.fixture
def take_snapshot() -> Callable[[Path], dict[str, bytes]]:
    return snapshot


@pytest.fixture
def sha256_for() -> Callable[[Path], str]:
    return sha256_of
