"""Infrastructure: blocking subprocess execution.

This module is the **only** place that spawns processes.  Output is not
captured — pacman, makepkg and custom commands write straight to the
operator's terminal, and may prompt for a sudo password.

Rules
-----
* Every command is logged before it runs.
* Non-zero exit and spawn failures become
  :class:`~arch_provision.exceptions.ExternalCommandFailedError`.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from arch_provision.core.protocols import CommandRunner
from arch_provision.exceptions import ExternalCommandFailedError, format_argv

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/bash"

# POSIX shell statuses for a missing and a non-executable command.
_NOT_FOUND = 127
_NOT_EXECUTABLE = 126


class SubprocessRunner:
    """Concrete :class:`~arch_provision.core.protocols.CommandRunner`."""

    def run(self, argv: Sequence[str], *, cwd: str | None = None) -> None:
        argv_list = list(argv)
        logger.info("CMD %s", format_argv(argv_list))
        try:
            completed = subprocess.run(argv_list, cwd=cwd, check=False)
        except FileNotFoundError as exc:
            raise ExternalCommandFailedError(
                argv_list,
                _NOT_FOUND,
                hint=f"{argv_list[0]} is not installed or not on PATH.",
            ) from exc
        except PermissionError as exc:
            raise ExternalCommandFailedError(
                argv_list,
                _NOT_EXECUTABLE,
                hint=f"{argv_list[0]} is not executable.",
            ) from exc
        except OSError as exc:
            raise ExternalCommandFailedError(
                argv_list, _NOT_EXECUTABLE, hint=str(exc)
            ) from exc

        if completed.returncode != 0:
            logger.debug("Exit %s from %s", completed.returncode, argv_list[0])
            raise ExternalCommandFailedError(argv_list, completed.returncode)


class ShellCommandEvaluator:
    """Run manifest ``[cmd]`` lines through a real shell.

    The command string is passed unmodified to ``<shell> -c``.  This is
    deliberately equivalent to ``eval``: pipes, globbing, ``&&`` and
    variable expansion all work, and so does anything else the manifest
    author writes.  Only use manifests you trust.
    """

    def __init__(self, runner: CommandRunner, *, shell: str = DEFAULT_SHELL) -> None:
        self._runner = runner
        self._shell = shell

    def __call__(self, command: str) -> None:
        self._runner.run([self._shell, "-c", command])
