"""Allow ``python -m arch_provision`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m arch_provision`` behaves identically to the
``arch-provision`` console script.
"""

from __future__ import annotations

from arch_provision.cli.app import cli

if __name__ == "__main__":
    cli()
