"""Process exit statuses for ``arch-provision``.

Every :class:`~arch_provision.exceptions.ProvisionError` ends the run
with :data:`GENERAL_ERROR`, whichever stage raised it.  The status of a
failed pacman, makepkg or shell command is reported in the message and
never becomes the process status.
"""

from __future__ import annotations

from arch_provision.exceptions import ProvisionError

SUCCESS = 0
"""Run finished.  Declining the reboot prompt still counts as success."""

GENERAL_ERROR = 1
UNEXPECTED_ERROR = 2

KEYBOARD_INTERRUPT = 130
"""128 + SIGINT."""


def for_exception(exc: BaseException) -> int:
    """Map an exception that reached the CLI boundary to an exit status."""
    if isinstance(exc, KeyboardInterrupt):
        return KEYBOARD_INTERRUPT
    if isinstance(exc, ProvisionError):
        return GENERAL_ERROR
    return UNEXPECTED_ERROR
