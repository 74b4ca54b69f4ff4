"""Installer orchestrator — runs an :class:`InstallPlan` against the system.

Stage order is fixed::

    PrivilegeCheck -> LoadManifest -> SystemUpdate -> EnsureAurHelper
        -> InstallNative -> InstallAur -> RunCustomCommands

Every stage produces a :class:`StageResult`.  The first stage that
raises a :class:`~arch_provision.exceptions.ProvisionError` is recorded
as ``FAILED`` and no later stage runs.  Other exceptions are bugs and
propagate untouched.

Custom commands are the one trust boundary of the system: each string
from the manifest is handed verbatim to the injected shell evaluator.
Nothing here sandboxes, escapes or validates it.

Guarantees
----------
* Pure orchestration — no ``print()``, no subprocess, no filesystem.
* Empty collections never reach the corresponding backend.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from arch_provision.core.aur_bootstrap import AurHelperBootstrap
from arch_provision.core.models import (
    InstallPlan,
    RunReport,
    Stage,
    StageResult,
    StageStatus,
)
from arch_provision.core.protocols import (
    AurPackageManager,
    NativePackageManager,
    ShellEvaluator,
    StageReporter,
    SystemProbe,
)
from arch_provision.exceptions import InvalidPrivilegeLevelError, ProvisionError

logger = logging.getLogger(__name__)

PlanLoader = Callable[[], InstallPlan]

STAGE_TITLES: dict[Stage, str] = {
    Stage.PRIVILEGE_CHECK: "Checking user privileges",
    Stage.LOAD_MANIFEST: "Loading manifest",
    Stage.SYSTEM_UPDATE: "Updating system",
    Stage.ENSURE_AUR_HELPER: "Installing AUR helper",
    Stage.INSTALL_NATIVE: "Installing packages via pacman",
    Stage.INSTALL_AUR: "Installing packages via AUR",
    Stage.RUN_CUSTOM_COMMANDS: "Running custom commands",
}


class Installer:
    """Drive the installation pipeline.

    Parameters
    ----------
    probe:
        Privilege query.
    native:
        pacman backend (system update and native installs).
    aur:
        AUR helper backend.
    bootstrap:
        Ensures the AUR helper exists before the AUR pass.
    evaluate_shell:
        Runs one custom command string.  Unsandboxed by contract.
    reporter:
        Renders banners and confirmation lines.
    """

    def __init__(
        self,
        *,
        probe: SystemProbe,
        native: NativePackageManager,
        aur: AurPackageManager,
        bootstrap: AurHelperBootstrap,
        evaluate_shell: ShellEvaluator,
        reporter: StageReporter,
    ) -> None:
        self._probe = probe
        self._native = native
        self._aur = aur
        self._bootstrap = bootstrap
        self._evaluate_shell = evaluate_shell
        self._reporter = reporter

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, load_plan: PlanLoader) -> RunReport:
        """Run every stage in order, stopping at the first failure.

        *load_plan* is called exactly once, after the privilege check,
        so a root invocation never touches the manifest.
        """
        results: list[StageResult] = []
        plan = InstallPlan()

        def attempt(stage: Stage, action: Callable[[], StageResult]) -> bool:
            self._reporter.banner(STAGE_TITLES[stage])
            try:
                result = action()
            except ProvisionError as exc:
                logger.info("Stage %s failed: %s", stage.value, exc)
                results.append(
                    StageResult(stage, StageStatus.FAILED, detail=str(exc), error=exc)
                )
                return False
            logger.info("Stage %s %s", stage.value, result.status.value)
            results.append(result)
            return True

        if not attempt(Stage.PRIVILEGE_CHECK, self._check_privileges):
            return RunReport(results=tuple(results))

        def load() -> StageResult:
            nonlocal plan
            plan = load_plan()
            return self._summarise(plan)

        if not attempt(Stage.LOAD_MANIFEST, load):
            return RunReport(results=tuple(results))
        loaded = plan

        stages: tuple[tuple[Stage, Callable[[], StageResult]], ...] = (
            (Stage.SYSTEM_UPDATE, self._update_system),
            (Stage.ENSURE_AUR_HELPER, self._ensure_aur_helper),
            (Stage.INSTALL_NATIVE, lambda: self._install_native(loaded)),
            (Stage.INSTALL_AUR, lambda: self._install_aur(loaded)),
            (Stage.RUN_CUSTOM_COMMANDS, lambda: self._run_commands(loaded)),
        )
        for stage, action in stages:
            if not attempt(stage, action):
                break

        return RunReport(results=tuple(results), plan=loaded)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _check_privileges(self) -> StageResult:
        if self._probe.is_superuser():
            raise InvalidPrivilegeLevelError(
                "Do not run this tool as root.",
                hint="Run it as a normal user; sudo is used when needed.",
            )
        self._reporter.success("Running as a regular user")
        return StageResult(Stage.PRIVILEGE_CHECK, StageStatus.COMPLETED)

    def _summarise(self, plan: InstallPlan) -> StageResult:
        native, aur, commands = plan.counts
        self._reporter.success(f"Loaded {native} pacman packages")
        self._reporter.success(f"Loaded {aur} AUR packages")
        self._reporter.success(f"Loaded {commands} custom commands")
        return StageResult(
            Stage.LOAD_MANIFEST,
            StageStatus.COMPLETED,
            detail=f"{native} pacman, {aur} AUR, {commands} commands",
        )

    def _update_system(self) -> StageResult:
        self._native.sync_system()
        self._reporter.success("System up to date")
        return StageResult(Stage.SYSTEM_UPDATE, StageStatus.COMPLETED)

    def _ensure_aur_helper(self) -> StageResult:
        outcome = self._bootstrap.ensure()
        if outcome.already_installed:
            self._reporter.success(f"{outcome.helper} already installed")
            return StageResult(
                Stage.ENSURE_AUR_HELPER, StageStatus.SATISFIED, detail=outcome.helper
            )
        self._reporter.success(f"{outcome.helper} installed")
        return StageResult(
            Stage.ENSURE_AUR_HELPER, StageStatus.COMPLETED, detail=outcome.helper
        )

    def _install_native(self, plan: InstallPlan) -> StageResult:
        if not plan.native_packages:
            self._reporter.info("No pacman packages to install")
            return StageResult(Stage.INSTALL_NATIVE, StageStatus.SKIPPED)
        for name in plan.native_packages:
            self._reporter.item(name)
        self._native.install(plan.native_packages)
        self._reporter.success("Pacman packages installed")
        return StageResult(
            Stage.INSTALL_NATIVE,
            StageStatus.COMPLETED,
            detail=f"{len(plan.native_packages)} packages",
        )

    def _install_aur(self, plan: InstallPlan) -> StageResult:
        if not plan.aur_packages:
            self._reporter.info("No AUR packages to install")
            return StageResult(Stage.INSTALL_AUR, StageStatus.SKIPPED)
        for name in plan.aur_packages:
            self._reporter.item(name)
        self._aur.install(plan.aur_packages)
        self._reporter.success("AUR packages installed")
        return StageResult(
            Stage.INSTALL_AUR,
            StageStatus.COMPLETED,
            detail=f"{len(plan.aur_packages)} packages",
        )

    def _run_commands(self, plan: InstallPlan) -> StageResult:
        if not plan.commands:
            self._reporter.info("No custom commands to run")
            return StageResult(Stage.RUN_CUSTOM_COMMANDS, StageStatus.SKIPPED)
        for command in plan.commands:
            self._reporter.item(f"Running: {command}")
            self._evaluate_shell(command)
        self._reporter.success("Custom commands executed")
        return StageResult(
            Stage.RUN_CUSTOM_COMMANDS,
            StageStatus.COMPLETED,
            detail=f"{len(plan.commands)} commands",
        )
