"""CLI application entry point and command routing for arch-provision.

This module is the **sole error boundary** for the entire application.
It catches :class:`~arch_provision.exceptions.ProvisionError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; the console proxy is
  used exclusively.
* This module is the only place that wires concrete infra adapters into
  the core and translates between the domain world and the OS process
  exit code.
"""

from __future__ import annotations

import argparse
import os
import sys

from arch_provision.cli import exit_codes
from arch_provision.cli.console import console, escape
from arch_provision.cli.logging_setup import configure_logging
from arch_provision.config import DEFAULT_PROFILE, PROFILES, Settings, load_settings
from arch_provision.exceptions import ProvisionError
from arch_provision.infra.package_managers import SUPPORTED_AUR_HELPERS
from arch_provision.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands are not used; the CLI supports:
    * ``arch-provision [manifest]`` — install from a manifest path or URL
    * ``arch-provision doctor``     — environment diagnostics
    * ``arch-provision --version``
    """
    parser = argparse.ArgumentParser(
        prog="arch-provision",
        description="Install pacman packages, AUR packages and custom commands from a manifest.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help=(
            "Manifest path or URL, or 'doctor' to run diagnostics. Defaults to "
            "the profile's local file, then its online list."
        ),
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=DEFAULT_PROFILE,
        help="Manifest defaults to use (default: %(default)s).",
    )
    parser.add_argument(
        "--aur-helper",
        choices=SUPPORTED_AUR_HELPERS,
        default=None,
        help="AUR helper to bootstrap and use (default: yay).",
    )
    parser.add_argument(
        "--no-reboot-prompt",
        dest="reboot_prompt",
        action="store_false",
        help="Do not offer to reboot when finished.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging, including every executed command.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_install(manifest: str | None, settings: Settings, *, reboot_prompt: bool) -> int:
    """Dispatch a full installation run.

    Flow:
    1. Instantiate infra adapters + core services.
    2. Run the installer; the manifest is resolved, read and parsed
       inside the pipeline, after the privilege check.
    3. Offer a reboot.
    """
    from arch_provision.cli.prompt import confirm_reboot
    from arch_provision.cli.reporter import ConsoleReporter, print_banner
    from arch_provision.core.aur_bootstrap import AurHelperBootstrap
    from arch_provision.core.installer import Installer
    from arch_provision.core.manifest_parser import parse_manifest
    from arch_provision.core.models import InstallPlan
    from arch_provision.core.source_resolver import resolve_manifest_source
    from arch_provision.infra.manifest_reader import ManifestReader
    from arch_provision.infra.package_managers import (
        AurHelperPackageManager,
        PacmanPackageManager,
    )
    from arch_provision.infra.runner import ShellCommandEvaluator, SubprocessRunner
    from arch_provision.infra.system import HostSystemProbe, reboot

    profile = settings.profile
    runner = SubprocessRunner()
    probe = HostSystemProbe()
    native = PacmanPackageManager(runner)
    reporter = ConsoleReporter()
    reader = ManifestReader(
        local_filename=profile.manifest_filename,
        timeout=settings.fetch_timeout,
    )

    def load_plan() -> InstallPlan:
        source = resolve_manifest_source(
            manifest,
            local_filename=profile.manifest_filename,
            default_url=settings.manifest_url,
            file_exists=os.path.isfile,
        )
        reporter.info(f"Source: {source.location}")
        text = reader.read_text(source)
        reporter.success(
            f"Downloaded from {source.location}" if source.is_remote else "Loaded from local file"
        )
        return parse_manifest(text)

    installer = Installer(
        probe=probe,
        native=native,
        aur=AurHelperPackageManager(runner, helper=settings.aur_helper),
        bootstrap=AurHelperBootstrap(
            runner,
            probe,
            native,
            helper=settings.aur_helper,
            aur_base_url=settings.aur_base_url,
        ),
        evaluate_shell=ShellCommandEvaluator(runner),
        reporter=reporter,
    )

    console.print(f"[bold]{escape(profile.title)}[/bold]")
    report = installer.run(load_plan)
    report.raise_for_failure()

    print_banner("Finalizing")
    console.print("[bold green]Installation complete![/bold green]")

    if reboot_prompt and confirm_reboot():
        reboot(runner)
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from arch_provision.cli.doctor import run_doctor

    return run_doctor(aur_helper=settings.aur_helper)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the arch-provision CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)
    settings = load_settings(args.profile, aur_helper=args.aur_helper)

    target: str | None = args.target
    if target is not None and target.lower() == "doctor":
        return _handle_doctor(settings)

    return _handle_install(target, settings, reboot_prompt=args.reboot_prompt)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ProvisionError as exc:
        console.error(str(exc), exc.hint)
        sys.exit(exit_codes.for_exception(exc))
    except KeyboardInterrupt as exc:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.for_exception(exc))
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.for_exception(exc))
