"""Infrastructure layer — external system integration.

This layer wraps all interaction with subprocesses, pacman, the AUR
helper, the shell, the filesystem and the network.  Every raw OS or
network exception must be caught here and re-raised as a
:class:`~arch_provision.exceptions.ProvisionError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from arch_provision.infra.manifest_reader import ManifestReader
from arch_provision.infra.package_managers import (
    SUPPORTED_AUR_HELPERS,
    AurHelperPackageManager,
    PacmanPackageManager,
)
from arch_provision.infra.runner import ShellCommandEvaluator, SubprocessRunner
from arch_provision.infra.system import HostSystemProbe, reboot

__all__: list[str] = [
    "SUPPORTED_AUR_HELPERS",
    "AurHelperPackageManager",
    "HostSystemProbe",
    "ManifestReader",
    "PacmanPackageManager",
    "ShellCommandEvaluator",
    "SubprocessRunner",
    "reboot",
]
