"""
Tests for the installer — fetch, verify, extract, place.
"""

from __future__ import annotations

import http.client
import logging
import os
import stat
import urllib.error
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from toli_formula.core.services.formula import (
    DownloadError,
    IntegrityError,
    MalformedArchiveError,
    PlacementError,
    compute_sha256,
    install,
)
from toli_formula.core.services.formula.data.releases import PLACEHOLDER_SHA256
from toli_formula.core.services.formula.execution.download import fetch_artifact
from toli_formula.core.services.formula.execution.placement import (
    completion_destination,
    place_file,
)

WRONG_SHA = "0" * 64


class TestInstallLayout:
    """A well-formed archive lands at the documented paths."""

    def test_full_archive_installs_four_files(self, make_archive, artifact_for, prefix, take_snapshot):
        layout = install(artifact_for(make_archive()), prefix, binary_name="toli")

        assert layout.executable == prefix / "bin" / "toli"
        assert layout.completions == {
            "bash": prefix / "etc" / "bash_completion.d" / "toli",
            "zsh": prefix / "share" / "zsh" / "site-functions" / "_toli",
            "fish": prefix / "share" / "fish" / "vendor_completions.d" / "toli.fish",
        }
        assert len(layout.files) == 4
        assert sorted(take_snapshot(prefix)) == sorted(
            str(p.relative_to(prefix)) for p in layout.files
        )

    def test_executable_mode(self, make_archive, artifact_for, prefix):
        layout = install(artifact_for(make_archive()), prefix, binary_name="toli")
        mode = stat.S_IMODE(layout.executable.stat().st_mode)
        assert mode == 0o755
        assert os.access(layout.executable, os.X_OK)

    def test_completion_contents_copied(self, make_archive, artifact_for, prefix):
        layout = install(artifact_for(make_archive()), prefix, binary_name="toli")
        assert layout.completions["zsh"].read_text() == "# zsh completion for toli\n"
        assert stat.S_IMODE(layout.completions["fish"].stat().st_mode) == 0o644

    def test_missing_completions_dir(self, make_archive, artifact_for, prefix, take_snapshot):
        layout = install(artifact_for(make_archive(shells=())), prefix, binary_name="toli")
        assert layout.completions == {}
        assert layout.files == [prefix / "bin" / "toli"]
        assert list(take_snapshot(prefix)) == ["bin/toli"]

    def test_partial_completions_warn(self, make_archive, artifact_for, prefix, caplog):
        with caplog.at_level(logging.WARNING):
            layout = install(
                artifact_for(make_archive(shells=("bash",))), prefix, binary_name="toli",
            )
        assert layout.shells == ["bash"]
        assert "No zsh completion" in caplog.text
        assert "No fish completion" in caplog.text

    def test_wrapped_archive(self, make_archive, artifact_for, prefix):
        archive = make_archive(wrap_dir="toli-0.1.0")
        layout = install(artifact_for(archive), prefix, binary_name="toli")
        assert layout.executable.is_file()
        assert len(layout.files) == 4

    def test_zip_archive(self, make_archive, artifact_for, prefix):
        layout = install(artifact_for(make_archive(fmt="zip")), prefix, binary_name="toli")
        assert len(layout.files) == 4
        assert os.access(layout.executable, os.X_OK)

    def test_idempotent(self, make_archive, artifact_for, prefix, take_snapshot):
        artifact = artifact_for(make_archive())
        install(artifact, prefix, binary_name="toli")
        first = take_snapshot(prefix)
        install(artifact, prefix, binary_name="toli")
        assert take_snapshot(prefix) == first

    def test_overwrites_previous_binary(self, make_archive, artifact_for, prefix):
        (prefix / "bin").mkdir(parents=True)
        (prefix / "bin" / "toli").write_text("old")
        layout = install(artifact_for(make_archive()), prefix, binary_name="toli")
        assert layout.executable.read_text() != "old"

    def test_no_temp_files_left_in_prefix(self, make_archive, artifact_for, prefix):
        install(artifact_for(make_archive()), prefix, binary_name="toli")
        assert not [p for p in prefix.rglob("*.tmp")]


class TestIntegrity:
    """A digest mismatch never touches the prefix."""

    def test_mismatch_raises(self, make_archive, artifact_for, prefix):
        with pytest.raises(IntegrityError, match="Checksum mismatch"):
            install(artifact_for(make_archive(), WRONG_SHA), prefix, binary_name="toli")

    def test_mismatch_leaves_prefix_untouched(self, make_archive, artifact_for, prefix, take_snapshot):
        (prefix / "bin").mkdir(parents=True)
        (prefix / "bin" / "toli").write_bytes(b"previous install")
        before = take_snapshot(prefix)

        with pytest.raises(IntegrityError):
            install(artifact_for(make_archive(), WRONG_SHA), prefix, binary_name="toli")

        assert take_snapshot(prefix) == before

    def test_mismatch_on_empty_prefix_creates_nothing(self, make_archive, artifact_for, prefix):
        with pytest.raises(IntegrityError):
            install(artifact_for(make_archive(), WRONG_SHA), prefix, binary_name="toli")
        assert not prefix.exists()

    def test_uppercase_digest_accepted(self, make_archive, artifact_for, prefix):
        archive = make_archive()
        artifact = artifact_for(archive, compute_sha256(archive).upper())
        layout = install(artifact, prefix, binary_name="toli")
        assert layout.executable.is_file()

    def test_placeholder_digest_rejected_before_fetch(self, make_archive, artifact_for, prefix):
        artifact = artifact_for(make_archive(), PLACEHOLDER_SHA256)
        with patch(
            "toli_formula.core.services.formula.execution.installer.fetch_artifact",
        ) as fetch:
            with pytest.raises(IntegrityError, match="not a SHA-256 digest"):
                install(artifact, prefix, binary_name="toli")
        fetch.assert_not_called()
        assert not prefix.exists()


def _response(read_error: Exception) -> MagicMock:
    resp = MagicMock()
    resp.__enter__.return_value = resp
    resp.status = 200
    resp.headers = {}
    resp.read.side_effect = read_error
    return resp


class TestFetch:
    def test_missing_file_url(self, dist_dir, tmp_path):
        url = (dist_dir / "missing.tar.gz").as_uri()
        dest = tmp_path / "out.tar.gz"
        with pytest.raises(DownloadError, match="Failed to fetch"):
            fetch_artifact(url, dest)
        assert not dest.exists()

    def test_http_error(self, tmp_path):
        err = urllib.error.HTTPError("https://x/y.tar.gz", 404, "Not Found", {}, None)
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(DownloadError, match="HTTP 404"):
                fetch_artifact("https://x/y.tar.gz", tmp_path / "y.tar.gz")

    def test_timeout(self, tmp_path):
        with patch("urllib.request.urlopen", side_effect=TimeoutError("timed out")):
            with pytest.raises(DownloadError, match="Timed out after 5s"):
                fetch_artifact("https://x/y.tar.gz", tmp_path / "y.tar.gz", timeout=5)

    def test_truncated_body(self, tmp_path):
        dest = tmp_path / "y.tar.gz"
        resp = _response(http.client.IncompleteRead(b""))
        with patch("urllib.request.urlopen", return_value=resp):
            with pytest.raises(DownloadError, match="Bad response") as exc:
                fetch_artifact("https://x/y.tar.gz", dest)
        assert exc.value.step == "fetch"
        assert not dest.exists()

    def test_bad_status_line(self, tmp_path):
        err = http.client.BadStatusLine("garbage")
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(DownloadError, match="Bad response"):
                fetch_artifact("https://x/y.tar.gz", tmp_path / "y.tar.gz")

    def test_unknown_scheme(self, tmp_path):
        with pytest.raises(DownloadError):
            fetch_artifact("notaurl", tmp_path / "y.tar.gz")

    def test_download_error_leaves_prefix_untouched(self, dist_dir, artifact_for, prefix, make_archive):
        archive = make_archive()
        artifact = artifact_for(archive)
        archive.unlink()
        with pytest.raises(DownloadError):
            install(artifact, prefix, binary_name="toli")
        assert not prefix.exists()

    def test_error_names_step(self, tmp_path):
        with patch("urllib.request.urlopen", side_effect=TimeoutError()):
            with pytest.raises(DownloadError) as exc:
                fetch_artifact("https://x/y", tmp_path / "y")
        assert exc.value.step == "fetch"


class TestMalformedArchive:
    def test_missing_executable(self, make_archive, artifact_for, prefix):
        archive = make_archive(include_binary=False)
        with pytest.raises(MalformedArchiveError, match="Executable 'toli' not found"):
            install(artifact_for(archive), prefix, binary_name="toli")
        assert not prefix.exists()

    def test_not_an_archive(self, dist_dir, artifact_for, prefix):
        bogus = dist_dir / "toli-0.1.0-x86_64-unknown-linux-gnu.tar.gz"
        bogus.write_bytes(b"this is not a tarball")
        with pytest.raises(MalformedArchiveError, match="not a tar or zip archive"):
            install(artifact_for(bogus), prefix, binary_name="toli")

    def test_wrong_binary_name(self, make_archive, artifact_for, prefix):
        with pytest.raises(MalformedArchiveError):
            install(artifact_for(make_archive()), prefix, binary_name="other")


class TestPlacement:
    def test_bin_is_a_file(self, make_archive, artifact_for, prefix):
        prefix.mkdir()
        (prefix / "bin").write_text("not a directory")
        with pytest.raises(PlacementError) as exc:
            install(artifact_for(make_archive()), prefix, binary_name="toli")
        assert exc.value.step == "place"

    def test_destination_is_a_directory(self, tmp_path):
        src = tmp_path / "src"
        src.write_text("data")
        dest = tmp_path / "out" / "toli"
        dest.mkdir(parents=True)
        with pytest.raises(PlacementError, match="Cannot install"):
            place_file(src, dest, mode=0o755)
        assert [p.name for p in dest.parent.iterdir()] == ["toli"]

    def test_completion_destinations(self, tmp_path: Path):
        assert completion_destination(tmp_path, "bash", "toli") == tmp_path / "etc/bash_completion.d/toli"
        assert completion_destination(tmp_path, "zsh", "toli") == tmp_path / "share/zsh/site-functions/_toli"
        assert completion_destination(tmp_path, "fish", "toli") == (
            tmp_path / "share/fish/vendor_completions.d/toli.fish"
        )
