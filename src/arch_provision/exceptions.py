"""Custom exception hierarchy for arch-provision.

All exceptions that cross layer boundaries must inherit from
:class:`ProvisionError`.  Raw OS, subprocess and network exceptions
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
ProvisionError
├── InvalidPrivilegeLevelError
├── ManifestError
│   ├── SourceUnavailableError
│   ├── ManifestNotFoundError
│   └── RetrievalFailedError
├── ExternalCommandFailedError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence


class ProvisionError(Exception):
    """Base exception for all arch-provision errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Pre-flight -------------------------------------------------------------

class InvalidPrivilegeLevelError(ProvisionError):
    """Raised when the tool is invoked as root instead of a sudo-capable user."""


# --- Manifest sourcing -------------------------------------------------------

class ManifestError(ProvisionError):
    """Base class for failures obtaining the manifest text."""


class SourceUnavailableError(ManifestError):
    """Raised when no manifest source can be resolved at all."""


class ManifestNotFoundError(ManifestError):
    """Raised when a local manifest path does not exist or cannot be read."""


class RetrievalFailedError(ManifestError):
    """Raised when a remote manifest cannot be fetched or is empty."""


# --- External commands -------------------------------------------------------

class ExternalCommandFailedError(ProvisionError):
    """Raised when a package manager, AUR helper, build tool or custom
    shell command exits non-zero (or cannot be started at all).

    No distinction is made between transient and permanent failures.
    """

    def __init__(
        self,
        argv: Sequence[str],
        returncode: int,
        *,
        hint: str | None = None,
    ) -> None:
        self.argv: tuple[str, ...] = tuple(argv)
        self.returncode: int = returncode
        super().__init__(
            f"Command failed ({returncode}): {format_argv(self.argv)}",
            hint=hint,
        )


# --- Configuration / tooling ---------------------------------------------------

class ConfigurationError(ProvisionError):
    """Raised when a CLI option or environment variable has an invalid value."""


class EnvironmentError(ProvisionError):
    """Raised when a required runtime dependency is not available."""


def format_argv(argv: Sequence[str]) -> str:
    """Render *argv* as a copy-pasteable shell string."""
    return " ".join(shlex.quote(a) for a in argv)
