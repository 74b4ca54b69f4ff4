"""Shared pytest fixtures and configuration for the arch-provision test suite.

Guidelines
----------
* No internet access in any test.
* No real subprocesses: pacman, git, makepkg and the shell are mocked at
  the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo ``configure_logging`` between tests that run ``main``."""
    yield
    logger = logging.getLogger("arch_provision")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    if hasattr(logger, "_arch_provision_configured"):
        delattr(logger, "_arch_provision_configured")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ARCH_PROVISION_AUR_HELPER",
        "ARCH_PROVISION_MANIFEST_URL",
        "ARCH_PROVISION_AUR_URL",
        "ARCH_PROVISION_FETCH_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
