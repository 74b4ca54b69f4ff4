"""pacman and AUR-helper backed package managers.

Both are thin argv builders over a
:class:`~arch_provision.core.protocols.CommandRunner`.  Installs are
always batched into one invocation, so a single unknown package name
fails the whole call.
"""

from __future__ import annotations

from collections.abc import Sequence

from arch_provision.core.protocols import CommandRunner

SUPPORTED_AUR_HELPERS: tuple[str, ...] = ("yay", "paru")

_INSTALL_FLAGS: tuple[str, ...] = ("-S", "--needed", "--noconfirm")


class PacmanPackageManager:
    """Concrete :class:`NativePackageManager`; every call goes through sudo."""

    def __init__(self, runner: CommandRunner, *, sudo: str = "sudo") -> None:
        self._runner = runner
        self._sudo = sudo

    def sync_system(self) -> None:
        self._runner.run([self._sudo, "pacman", "-Syu", "--noconfirm"])

    def install(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        self._runner.run([self._sudo, "pacman", *_INSTALL_FLAGS, *packages])


class AurHelperPackageManager:
    """Concrete :class:`AurPackageManager`.

    The helper is run as the invoking user; it escalates with sudo
    itself for the final install step.
    """

    def __init__(self, runner: CommandRunner, *, helper: str = "yay") -> None:
        self._runner = runner
        self.helper = helper

    def install(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        self._runner.run([self.helper, *_INSTALL_FLAGS, *packages])
