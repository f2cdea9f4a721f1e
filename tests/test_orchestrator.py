"""
Tests for the end-to-end install — resolve → locate → install → verify.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from toli_formula.core.services.formula import (
    IntegrityError,
    UnsupportedPlatformError,
    run_install,
)
from toli_formula.core.services.formula.data.releases import PLACEHOLDER_SHA256


class TestRunInstall:
    def test_linux_end_to_end(self, make_archive, release_for, prefix, sha256_for):
        archive = make_archive()
        release = release_for(sha256_for(archive))

        result = run_install(release, prefix, host_os="Linux", host_arch="x86_64")

        assert result.platform == "linux-x86_64"
        assert result.artifact.url == archive.as_uri()
        assert len(result.layout.files) == 4
        assert result.verified is True
        assert "alias howto='toli --how'" in result.caveats

    def test_smoke_test_skipped(self, make_archive, release_for, prefix, sha256_for):
        release = release_for(sha256_for(make_archive()))
        result = run_install(
            release, prefix, host_os="Linux", host_arch="x86_64", smoke_test=False,
        )
        assert result.verified is None

    def test_failed_smoke_test_is_not_fatal(self, make_archive, release_for, prefix, sha256_for):
        """Binary reports a different version; install still succeeds."""
        release = release_for(sha256_for(make_archive(reports="0.0.9")))
        result = run_install(
            release, prefix, host_os="Linux", host_arch="x86_64", version="0.1.0",
        )
        assert result.layout.executable.is_file()
        assert result.verified is False

    def test_detects_host_when_not_given(self, make_archive, release_for, prefix, sha256_for):
        release = release_for(sha256_for(make_archive()))
        target = "toli_formula.core.services.formula.orchestration.orchestrator.detect_host"
        with patch(target, return_value=("Linux", "x86_64")):
            result = run_install(release, prefix)
        assert result.platform == "linux-x86_64"

    def test_unpublished_platform(self, release_for, prefix):
        release = release_for("a" * 64)
        with pytest.raises(UnsupportedPlatformError):
            run_install(release, prefix, host_os="Darwin", host_arch="x86_64")
        assert not prefix.exists()

    def test_placeholder_checksum_fails_before_fetch(self, make_archive, release_for, prefix):
        make_archive()
        release = release_for(PLACEHOLDER_SHA256)
        target = "toli_formula.core.services.formula.execution.installer.fetch_artifact"
        with patch(target) as fetch:
            with pytest.raises(IntegrityError, match="not a SHA-256 digest"):
                run_install(release, prefix, host_os="Linux", host_arch="x86_64")
        fetch.assert_not_called()
        assert not prefix.exists()

    def test_to_dict(self, make_archive, release_for, prefix, sha256_for):
        release = release_for(sha256_for(make_archive()))
        data = run_install(release, prefix, host_os="Linux", host_arch="x86_64").to_dict()
        assert data["ok"] is True
        assert data["version"] == "0.1.0"
        assert data["layout"]["executable"] == str(prefix / "bin" / "toli")
        assert set(data["layout"]["completions"]) == {"bash", "zsh", "fish"}
