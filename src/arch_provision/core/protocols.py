"""Protocols (interfaces) consumed by the core layer.

These define the system-mutation contracts that infrastructure adapters
must satisfy.  Core code depends ONLY on these protocols — never on
concrete implementations — so every stage can be exercised in tests
without touching the host.

The contract shared by every mutating call is the same: return normally
on a zero exit status, raise
:class:`~arch_provision.exceptions.ExternalCommandFailedError` otherwise.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

ShellEvaluator = Callable[[str], None]
"""Executes one opaque manifest command.

Implementations run the string through a real shell with no sandboxing,
escaping or validation.  Whoever writes the manifest can run anything
the invoking user can.
"""


class CommandRunner(Protocol):
    """Blocking execution of an external program."""

    def run(self, argv: Sequence[str], *, cwd: str | None = None) -> None:
        """Run *argv* to completion.

        Raises
        ------
        ExternalCommandFailedError
            When the program exits non-zero or cannot be started.
        """
        ...  # pragma: no cover


class NativePackageManager(Protocol):
    """Official-repository package manager (pacman)."""

    def sync_system(self) -> None:
        """Full, non-interactive system upgrade."""
        ...  # pragma: no cover

    def install(self, packages: Sequence[str]) -> None:
        """Install *packages* in one batched, install-if-needed call."""
        ...  # pragma: no cover


class AurPackageManager(Protocol):
    """AUR helper (yay, paru)."""

    def install(self, packages: Sequence[str]) -> None:
        """Build and install *packages* in one batched call."""
        ...  # pragma: no cover


class SystemProbe(Protocol):
    """Read-only queries about the running system."""

    def is_superuser(self) -> bool:
        ...  # pragma: no cover

    def which(self, name: str) -> str | None:
        """Return the path of executable *name*, or ``None``."""
        ...  # pragma: no cover


class StageReporter(Protocol):
    """Operator-facing progress output.

    Purely cosmetic: banners and confirmation lines, not a log sink.
    """

    def banner(self, title: str) -> None:
        ...  # pragma: no cover

    def item(self, text: str) -> None:
        ...  # pragma: no cover

    def info(self, text: str) -> None:
        ...  # pragma: no cover

    def success(self, text: str) -> None:
        ...  # pragma: no cover
