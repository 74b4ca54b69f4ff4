"""Runtime settings — CLI options, environment variables and profile defaults.

Priority chain (highest to lowest):
  1. CLI options       — ``--aur-helper``
  2. Env vars          — ``ARCH_PROVISION_*`` prefix
  3. Profile defaults  — baked into :data:`PROFILES`

Two profiles mirror the two post-install stages: ``packages`` (system
configuration, ``packages.txt``) and ``apps`` (applications,
``apps.txt``).  They differ only in manifest name, default URL and title.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from arch_provision.core.aur_bootstrap import DEFAULT_AUR_BASE_URL
from arch_provision.exceptions import ConfigurationError
from arch_provision.infra.package_managers import SUPPORTED_AUR_HELPERS

ENV_PREFIX = "ARCH_PROVISION_"

DEFAULT_MANIFEST_BASE_URL = "https://moutonjeremy.github.io/archinstall"


@dataclass(frozen=True, slots=True)
class Profile:
    """Per-stage defaults."""

    name: str
    manifest_filename: str
    default_url: str
    title: str


PROFILES: dict[str, Profile] = {
    "apps": Profile(
        name="apps",
        manifest_filename="apps.txt",
        default_url=f"{DEFAULT_MANIFEST_BASE_URL}/apps.txt",
        title="Arch Linux Application Installation",
    ),
    "packages": Profile(
        name="packages",
        manifest_filename="packages.txt",
        default_url=f"{DEFAULT_MANIFEST_BASE_URL}/packages.txt",
        title="Arch Linux Post-Installation Configuration",
    ),
}

DEFAULT_PROFILE = "apps"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved, immutable settings for one run."""

    profile: Profile
    aur_helper: str = "yay"
    manifest_url: str = ""
    """Remote fallback; empty disables it."""
    aur_base_url: str = DEFAULT_AUR_BASE_URL
    fetch_timeout: float | None = None


def _env(env: Mapping[str, str], name: str) -> str | None:
    return env.get(ENV_PREFIX + name)


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid {ENV_PREFIX}FETCH_TIMEOUT: {raw!r}",
            hint="Use a finite, positive number of seconds, or unset it.",
        ) from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(
            f"Invalid {ENV_PREFIX}FETCH_TIMEOUT: {raw!r}",
            hint="Use a finite, positive number of seconds, or unset it.",
        )
    return value


def load_settings(
    profile: str = DEFAULT_PROFILE,
    *,
    aur_helper: str | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Merge CLI options, environment and profile defaults.

    Raises
    ------
    ConfigurationError
        For an unknown profile, unsupported AUR helper or bad timeout.
    """
    env = os.environ if env is None else env

    try:
        selected = PROFILES[profile]
    except KeyError as exc:
        raise ConfigurationError(
            f"Unknown profile: {profile}",
            hint=f"Choose one of: {', '.join(sorted(PROFILES))}",
        ) from exc

    helper = aur_helper or _env(env, "AUR_HELPER") or "yay"
    if helper not in SUPPORTED_AUR_HELPERS:
        raise ConfigurationError(
            f"Unsupported AUR helper: {helper}",
            hint=f"Choose one of: {', '.join(SUPPORTED_AUR_HELPERS)}",
        )

    # An explicitly empty variable disables the remote fallback.
    url_override = _env(env, "MANIFEST_URL")
    manifest_url = selected.default_url if url_override is None else url_override.strip()

    return Settings(
        profile=selected,
        aur_helper=helper,
        manifest_url=manifest_url,
        aur_base_url=_env(env, "AUR_URL") or DEFAULT_AUR_BASE_URL,
        fetch_timeout=_parse_timeout(_env(env, "FETCH_TIMEOUT")),
    )
