"""arch-provision — declarative Arch Linux package provisioning.

Reads a line-oriented manifest of pacman packages, AUR packages and
custom shell commands, then installs them in a fixed, stop-on-first-error
order.
"""

from arch_provision.version import __version__

__all__: list[str] = ["__version__"]
