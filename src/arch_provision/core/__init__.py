"""Core / service layer — manifest handling and installer orchestration.

Rules
-----
* No ``print()`` calls.
* No subprocess, filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Every external effect goes through a protocol from
  :mod:`arch_provision.core.protocols`.
"""

from arch_provision.core.aur_bootstrap import AurHelperBootstrap
from arch_provision.core.installer import Installer
from arch_provision.core.manifest_parser import classify_line, parse_manifest
from arch_provision.core.models import (
    AurPackage,
    Command,
    InstallPlan,
    ManifestSource,
    NativePackage,
    RunReport,
    Stage,
    StageResult,
    StageStatus,
)
from arch_provision.core.protocols import (
    AurPackageManager,
    CommandRunner,
    NativePackageManager,
    StageReporter,
    SystemProbe,
)
from arch_provision.core.source_resolver import resolve_manifest_source

__all__: list[str] = [
    "AurHelperBootstrap",
    "AurPackage",
    "AurPackageManager",
    "Command",
    "CommandRunner",
    "InstallPlan",
    "Installer",
    "ManifestSource",
    "NativePackage",
    "NativePackageManager",
    "RunReport",
    "Stage",
    "StageReporter",
    "StageResult",
    "StageStatus",
    "SystemProbe",
    "classify_line",
    "parse_manifest",
    "resolve_manifest_source",
]
