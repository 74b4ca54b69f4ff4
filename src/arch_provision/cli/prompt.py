"""Interactive yes/no confirmations for the CLI layer."""

from __future__ import annotations

from typing import Any

from arch_provision.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question.

    Returns ``False`` when the operator declines or cancels
    (Esc / Ctrl+C makes questionary return ``None``).
    """
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(message, default=default).ask()
    return bool(answer)


def confirm_reboot() -> bool:
    return confirm("Reboot now?", default=False)
