"""Console rendering of installer progress.

Implements :class:`~arch_provision.core.protocols.StageReporter` on top
of the console proxy.  Everything here is cosmetic framing for the
operator.
"""

from __future__ import annotations

from arch_provision.cli.console import console, escape

RULE = "=" * 41


def print_banner(title: str) -> None:
    """Three-line stage banner preceded by a blank line."""
    console.print()
    console.print(f"[cyan]{RULE}[/cyan]")
    console.print(f"[bold cyan]>>> {escape(title)}[/bold cyan]")
    console.print(f"[cyan]{RULE}[/cyan]")


class ConsoleReporter:
    """Concrete :class:`StageReporter` writing to stderr."""

    def banner(self, title: str) -> None:
        print_banner(title)

    def item(self, text: str) -> None:
        console.print(f"  - {escape(text)}")

    def info(self, text: str) -> None:
        console.print(escape(text))

    def success(self, text: str) -> None:
        console.print(f"[green]✓[/green] {escape(text)}")
