"""Infrastructure: read manifest text from disk or over HTTP(S).

Both paths decode strict UTF-8 and drop a leading byte-order mark.
All ``OSError``/``urllib`` exceptions are caught here and re-raised as
:class:`~arch_provision.exceptions.ManifestError` subclasses.  No
authentication, caching or conditional requests.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from pathlib import Path

from arch_provision.core.models import ManifestSource
from arch_provision.exceptions import ManifestNotFoundError, RetrievalFailedError
from arch_provision.version import __version__

logger = logging.getLogger(__name__)

USER_AGENT = f"arch-provision/{__version__}"


class ManifestReader:
    """Fetch the full text of a :class:`ManifestSource`.

    Parameters
    ----------
    local_filename:
        Conventional manifest name, quoted in the not-found hint.
    timeout:
        Socket timeout in seconds for remote fetches.  ``None`` blocks
        until the server answers.
    """

    def __init__(self, *, local_filename: str = "apps.txt", timeout: float | None = None) -> None:
        self._local_filename = local_filename
        self._timeout = timeout

    def read_text(self, source: ManifestSource) -> str:
        if source.is_remote:
            return self._fetch(source.location)
        return self._read_local(source.location)

    # ------------------------------------------------------------------
    # Remote
    # ------------------------------------------------------------------

    def _fetch(self, url: str) -> str:
        logger.info("Downloading manifest from %s", url)
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT}, method="GET")
        # Without a configured timeout urlopen keeps the global socket default.
        kwargs = {} if self._timeout is None else {"timeout": self._timeout}
        try:
            with urllib.request.urlopen(req, **kwargs) as resp:
                body: bytes = resp.read()
        except urllib.error.HTTPError as exc:
            raise RetrievalFailedError(
                f"Failed to download manifest from {url} (HTTP {exc.code})",
                hint="Check the URL or pass a local manifest path.",
            ) from exc
        except (urllib.error.URLError, OSError) as exc:
            raise RetrievalFailedError(
                f"Failed to download manifest from {url}: {exc}",
                hint="Check your network connection or pass a local manifest path.",
            ) from exc

        try:
            text = body.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise RetrievalFailedError(
                f"Manifest downloaded from {url} is not valid UTF-8",
                hint="Save the manifest as UTF-8 text.",
            ) from exc
        if not text.strip():
            raise RetrievalFailedError(
                f"Manifest downloaded from {url} is empty",
                hint="Pass a local manifest path instead.",
            )
        return text

    # ------------------------------------------------------------------
    # Local
    # ------------------------------------------------------------------

    def _read_local(self, location: str) -> str:
        path = Path(location)
        if not path.is_file():
            raise ManifestNotFoundError(
                f"Manifest file not found: {location}",
                hint="\n".join(
                    (
                        "Options:",
                        f"  - Create a {self._local_filename} file in the current directory",
                        "  - Specify a custom file: arch-provision /path/to/manifest.txt",
                        "  - Run without arguments to use the default online list",
                    )
                ),
            )
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestNotFoundError(
                f"Cannot read manifest file {location}: {exc}",
            ) from exc
        logger.info("Loaded manifest from %s", path)
        return text
