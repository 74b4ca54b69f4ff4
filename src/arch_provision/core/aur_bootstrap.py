"""AUR helper bootstrap — make sure ``yay``/``paru`` is on PATH.

When the helper is missing it is built from its own AUR recipe:

1. install ``git`` and ``base-devel`` through pacman;
2. clone ``<aur>/<helper>.git`` into a scratch directory;
3. run ``makepkg -si --noconfirm`` inside the clone.

The scratch directory is always removed afterwards.  A failed clone or
build propagates; whatever ``makepkg`` already installed is left as is.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from contextlib import AbstractContextManager
from pathlib import Path

from arch_provision.core.models import BootstrapResult
from arch_provision.core.protocols import CommandRunner, NativePackageManager, SystemProbe

logger = logging.getLogger(__name__)

DEFAULT_AUR_BASE_URL = "https://aur.archlinux.org"
BUILD_PREREQUISITES: tuple[str, ...] = ("git", "base-devel")

ScratchDirFactory = Callable[[], AbstractContextManager[str]]


class AurHelperBootstrap:
    """Idempotently install an AUR helper.

    Parameters
    ----------
    runner:
        Executes ``git`` and ``makepkg``.
    probe:
        Used for the ``which`` lookup.
    native:
        Installs the build prerequisites.
    helper:
        Helper executable and AUR package name (``yay``, ``paru``).
    aur_base_url:
        Base URL of the AUR git endpoints.
    scratch_dir:
        Factory returning a context manager that yields a temporary
        directory path and deletes it on exit.
    """

    def __init__(
        self,
        runner: CommandRunner,
        probe: SystemProbe,
        native: NativePackageManager,
        *,
        helper: str = "yay",
        aur_base_url: str = DEFAULT_AUR_BASE_URL,
        scratch_dir: ScratchDirFactory = tempfile.TemporaryDirectory,
    ) -> None:
        self._runner = runner
        self._probe = probe
        self._native = native
        self.helper = helper
        self._aur_base_url = aur_base_url.rstrip("/")
        self._scratch_dir = scratch_dir

    @property
    def clone_url(self) -> str:
        return f"{self._aur_base_url}/{self.helper}.git"

    def is_installed(self) -> bool:
        return self._probe.which(self.helper) is not None

    def ensure(self) -> BootstrapResult:
        """Install the helper unless it is already present."""
        if self.is_installed():
            logger.info("%s already installed", self.helper)
            return BootstrapResult(helper=self.helper, already_installed=True)

        logger.info("Bootstrapping %s from %s", self.helper, self.clone_url)
        self._native.install(BUILD_PREREQUISITES)

        with self._scratch_dir() as scratch:
            clone_dir = Path(scratch) / self.helper
            self._runner.run(["git", "clone", self.clone_url, str(clone_dir)])
            self._runner.run(["makepkg", "-si", "--noconfirm"], cwd=str(clone_dir))

        return BootstrapResult(helper=self.helper, already_installed=False)
