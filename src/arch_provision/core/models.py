"""Domain models for arch-provision.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and trivial aggregation.  They carry zero
I/O and zero dependencies on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

from arch_provision.exceptions import ProvisionError


# ---------------------------------------------------------------------------
# Manifest source
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ManifestSource:
    """Where the manifest text comes from."""

    location: str
    """Local filesystem path or HTTP(S) URL."""

    is_remote: bool
    """``True`` when :attr:`location` is a URL to fetch."""


# ---------------------------------------------------------------------------
# Directives (one per meaningful manifest line)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NativePackage:
    """A package installed from the official repositories via pacman."""

    name: str


@dataclass(frozen=True, slots=True)
class AurPackage:
    """A package built from the AUR via the AUR helper."""

    name: str


@dataclass(frozen=True, slots=True)
class Command:
    """An opaque shell command, executed verbatim.

    The text is never parsed, escaped or validated.
    """

    shell: str


Directive = Union[NativePackage, AurPackage, Command]


# ---------------------------------------------------------------------------
# Install plan
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InstallPlan:
    """The parsed manifest: three ordered, immutable collections."""

    native_packages: tuple[str, ...] = ()
    aur_packages: tuple[str, ...] = ()
    commands: tuple[str, ...] = ()

    @classmethod
    def from_directives(cls, directives: Iterable[Directive]) -> InstallPlan:
        """Aggregate *directives*, preserving order within each collection."""
        native: list[str] = []
        aur: list[str] = []
        commands: list[str] = []
        for directive in directives:
            if isinstance(directive, Command):
                commands.append(directive.shell)
            elif isinstance(directive, AurPackage):
                aur.append(directive.name)
            else:
                native.append(directive.name)
        return cls(
            native_packages=tuple(native),
            aur_packages=tuple(aur),
            commands=tuple(commands),
        )

    @property
    def counts(self) -> tuple[int, int, int]:
        """``(native, aur, commands)`` cardinalities."""
        return len(self.native_packages), len(self.aur_packages), len(self.commands)

    @property
    def is_empty(self) -> bool:
        return not (self.native_packages or self.aur_packages or self.commands)


# ---------------------------------------------------------------------------
# Pipeline bookkeeping
# ---------------------------------------------------------------------------

class Stage(enum.Enum):
    """Installer stages, declared in execution order."""

    PRIVILEGE_CHECK = "privilege_check"
    LOAD_MANIFEST = "load_manifest"
    SYSTEM_UPDATE = "system_update"
    ENSURE_AUR_HELPER = "ensure_aur_helper"
    INSTALL_NATIVE = "install_native"
    INSTALL_AUR = "install_aur"
    RUN_CUSTOM_COMMANDS = "run_custom_commands"


class StageStatus(enum.Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    """Input collection was empty; the external mechanism was not invoked."""
    SATISFIED = "satisfied"
    """Nothing to do (e.g. the AUR helper was already installed)."""
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class StageResult:
    """Outcome of a single installer stage."""

    stage: Stage
    status: StageStatus
    detail: str = ""
    error: ProvisionError | None = None

    @property
    def ok(self) -> bool:
        return self.status is not StageStatus.FAILED


@dataclass(frozen=True, slots=True)
class RunReport:
    """Ordered stage results of one installer run.

    The pipeline stops at the first failure, so a failed report always
    ends with exactly one ``FAILED`` result.
    """

    results: tuple[StageResult, ...]
    plan: InstallPlan | None = field(default=None)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failure(self) -> StageResult | None:
        for result in self.results:
            if not result.ok:
                return result
        return None

    @property
    def stages_run(self) -> tuple[Stage, ...]:
        return tuple(r.stage for r in self.results)

    def raise_for_failure(self) -> None:
        """Re-raise the error captured by the failed stage, if any."""
        failure = self.failure
        if failure is not None and failure.error is not None:
            raise failure.error


@dataclass(frozen=True, slots=True)
class BootstrapResult:
    """Outcome of :meth:`AurHelperBootstrap.ensure`."""

    helper: str
    already_installed: bool
