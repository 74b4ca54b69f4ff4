"""``arch-provision doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the host can run an installation.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from arch_provision.cli import exit_codes
from arch_provision.cli.console import console
from arch_provision.core.protocols import SystemProbe
from arch_provision.infra.system import HostSystemProbe
from arch_provision.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _version_check() -> Check:
    """Return (label, value, status) for the arch-provision version row."""
    return "arch-provision", __version__, OK


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _os_check() -> Check:
    """Return (label, value, status) for the distribution row.

    Anything other than Arch (or an Arch derivative) is a warning.
    """
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        return "OS", f"{platform.system()} {platform.release()}", WARN

    name = release.get("PRETTY_NAME") or release.get("NAME", "unknown")
    ids = {release.get("ID", "")} | set(release.get("ID_LIKE", "").split())
    return "OS", name, OK if "arch" in ids else WARN


def _user_check(probe: SystemProbe) -> Check:
    """Return (label, value, status) for the invoking identity row."""
    if probe.is_superuser():
        return "User", "root", "[red]FAIL (run as a regular user)[/red]"
    return "User", "regular user", OK


def _tool_check(probe: SystemProbe, name: str, *, required: bool) -> Check:
    """Return (label, value, status) for an executable on PATH.

    Missing required tools fail; missing optional ones only warn because
    the AUR bootstrap installs them.
    """
    path = probe.which(name)
    if path is not None:
        return name, path, OK
    return name, "not found", FAIL if required else WARN


def collect_checks(probe: SystemProbe, *, aur_helper: str = "yay") -> list[Check]:
    return [
        _version_check(),
        _python_version_check(),
        _os_check(),
        _user_check(probe),
        _tool_check(probe, "pacman", required=True),
        _tool_check(probe, "sudo", required=True),
        _tool_check(probe, "git", required=False),
        _tool_check(probe, "makepkg", required=False),
        _tool_check(probe, aur_helper, required=False),
    ]


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\narch-provision doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(probe: SystemProbe | None = None, *, aur_helper: str = "yay") -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings never fail.
    """
    checks = collect_checks(probe or HostSystemProbe(), aur_helper=aur_helper)
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="arch-provision doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
