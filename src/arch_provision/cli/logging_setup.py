"""Logging configuration for the CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers;
handlers are attached here, once, by the entry point.  Console banners
are not logging — they go through :mod:`arch_provision.cli.console`.
"""

from __future__ import annotations

import logging

_CONFIGURED_ATTR = "_arch_provision_configured"


def configure_logging(*, verbose: bool = False) -> None:
    """Attach a stderr handler to the ``arch_provision`` logger.

    Uses :class:`rich.logging.RichHandler` when Rich is installed and a
    plain :class:`logging.StreamHandler` otherwise.  WARNING and above
    by default; DEBUG with *verbose*.
    """
    logger = logging.getLogger("arch_provision")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Avoid duplicate handlers if configure_logging() is called twice.
    if getattr(logger, _CONFIGURED_ATTR, False):
        return

    handler: logging.Handler
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    else:
        from arch_provision.cli.console import get_rich_console

        handler = RichHandler(console=get_rich_console(), show_path=False)

    logger.addHandler(handler)
    logger.propagate = False
    setattr(logger, _CONFIGURED_ATTR, True)
