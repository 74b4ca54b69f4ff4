"""Infrastructure: host queries and the final reboot.

Detection via :func:`os.geteuid` and :func:`shutil.which` only — no
subprocess for read-only probes.
"""

from __future__ import annotations

import os
import shutil

from arch_provision.core.protocols import CommandRunner


class HostSystemProbe:
    """Concrete :class:`~arch_provision.core.protocols.SystemProbe`."""

    def is_superuser(self) -> bool:
        return os.geteuid() == 0

    def which(self, name: str) -> str | None:
        return shutil.which(name)


def reboot(runner: CommandRunner) -> None:
    """Reboot the machine through sudo."""
    runner.run(["sudo", "reboot"])
