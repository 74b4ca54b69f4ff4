"""Tests for manifest source resolution (core/source_resolver.py).

The existence probe is injected — no filesystem access.
"""

from __future__ import annotations

import pytest

from arch_provision.core.models import ManifestSource
from arch_provision.core.source_resolver import is_url, resolve_manifest_source
from arch_provision.exceptions import SourceUnavailableError

DEFAULT_URL = "https://example.org/apps.txt"


def _exists(*present: str):  # type: ignore[no-untyped-def]
    return lambda path: path in present


class TestIsUrl:
    @pytest.mark.parametrize("location", ["https://x.org/a.txt", "http://x.org/a.txt"])
    def test_urls(self, location: str) -> None:
        assert is_url(location)

    @pytest.mark.parametrize(
        "location", ["apps.txt", "/home/me/apps.txt", "ftp://x.org/a", "HTTPS-notes.txt"]
    )
    def test_non_urls(self, location: str) -> None:
        assert not is_url(location)


class TestResolveManifestSource:
    def test_no_argument_no_local_file_uses_default_url(self) -> None:
        source = resolve_manifest_source(
            None, local_filename="apps.txt", default_url=DEFAULT_URL, file_exists=_exists()
        )
        assert source == ManifestSource(location=DEFAULT_URL, is_remote=True)

    def test_no_argument_local_file_wins_over_default_url(self) -> None:
        source = resolve_manifest_source(
            None,
            local_filename="apps.txt",
            default_url=DEFAULT_URL,
            file_exists=_exists("apps.txt"),
        )
        assert source == ManifestSource(location="apps.txt", is_remote=False)

    def test_explicit_path_wins(self) -> None:
        source = resolve_manifest_source(
            "custom.txt",
            local_filename="apps.txt",
            default_url=DEFAULT_URL,
            file_exists=_exists("apps.txt"),
        )
        assert source == ManifestSource(location="custom.txt", is_remote=False)

    def test_explicit_path_is_not_probed(self) -> None:
        """A missing explicit path is a read-time failure, not a fallback."""
        source = resolve_manifest_source(
            "missing.txt",
            local_filename="apps.txt",
            default_url=DEFAULT_URL,
            file_exists=_exists(),
        )
        assert source.location == "missing.txt"

    def test_explicit_url_is_remote(self) -> None:
        source = resolve_manifest_source(
            "https://gist.example/raw/apps.txt",
            local_filename="apps.txt",
            default_url=DEFAULT_URL,
            file_exists=_exists(),
        )
        assert source.is_remote

    def test_empty_explicit_argument_is_ignored(self) -> None:
        source = resolve_manifest_source(
            "", local_filename="apps.txt", default_url=DEFAULT_URL, file_exists=_exists()
        )
        assert source.location == DEFAULT_URL

    @pytest.mark.parametrize("default_url", [None, ""])
    def test_disabled_fallback_raises(self, default_url: str | None) -> None:
        with pytest.raises(SourceUnavailableError) as exc_info:
            resolve_manifest_source(
                None, local_filename="apps.txt", default_url=default_url, file_exists=_exists()
            )
        assert exc_info.value.hint is not None
        assert "apps.txt" in exc_info.value.hint
