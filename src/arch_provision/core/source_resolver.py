"""Manifest source resolution.

Decides *where* the manifest comes from without reading it.  Priority:

1. the explicit CLI argument, when given;
2. the conventional local file (e.g. ``apps.txt``), when it exists;
3. the configured default URL.

The existence probe is injected so this module stays free of
filesystem access.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from arch_provision.core.models import ManifestSource
from arch_provision.exceptions import SourceUnavailableError

_URL_RE = re.compile(r"^https?://")


def is_url(location: str) -> bool:
    """Return ``True`` when *location* should be fetched over HTTP(S)."""
    return _URL_RE.match(location) is not None


def resolve_manifest_source(
    explicit: str | None,
    *,
    local_filename: str,
    default_url: str | None,
    file_exists: Callable[[str], bool],
) -> ManifestSource:
    """Pick the manifest source.

    Parameters
    ----------
    explicit:
        Path or URL given on the command line, or ``None``.
    local_filename:
        Conventional manifest file looked up in the working directory.
    default_url:
        Remote fallback.  ``None`` or ``""`` disables the fallback.
    file_exists:
        Predicate used to probe *local_filename*.

    Raises
    ------
    SourceUnavailableError
        Only when the remote fallback is disabled and neither an explicit
        argument nor the conventional file is available.
    """
    if explicit:
        return ManifestSource(location=explicit, is_remote=is_url(explicit))

    if file_exists(local_filename):
        return ManifestSource(location=local_filename, is_remote=False)

    if default_url:
        return ManifestSource(location=default_url, is_remote=is_url(default_url))

    raise SourceUnavailableError(
        f"No manifest given and {local_filename} not found.",
        hint=(
            f"Create {local_filename} in the current directory, pass a "
            "manifest path, or set ARCH_PROVISION_MANIFEST_URL."
        ),
    )
