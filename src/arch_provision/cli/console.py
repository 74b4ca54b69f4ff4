"""stderr output for the CLI: Rich when installed, plain text otherwise.

Rich is imported on first use only, so ``--help``, ``--version`` and
``doctor`` keep working without it.  Manifest-derived text (package
names, ``[aur]``/``[cmd]`` lines, shell commands) must go through
:func:`escape` before it is embedded in markup.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from arch_provision.exceptions import EnvironmentError

# Only the style tags this package writes itself.
_STYLE_TAG_RE = re.compile(r"\[/?(?:bold|red|green|yellow|cyan|dim)(?: [a-z]+)*\]")


def get_rich_console() -> Any:
	"""Return a Rich console bound to stderr."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console(stderr=True)


def escape(text: str) -> str:
	"""Escape Rich markup in manifest-derived text."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


def strip_styles(text: str) -> str:
	"""Drop our own style tags for plain-text output."""
	return _STYLE_TAG_RE.sub("", text)


class _ConsoleProxy:
	"""``print``-like writer that degrades to plain stderr without Rich."""

	def print(self, *objects: object) -> None:
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*(strip_styles(o) if isinstance(o, str) else o for o in objects), file=sys.stderr)
			return
		rich_console.print(*objects)

	def error(self, message: str, hint: str | None = None) -> None:
		"""Render a fatal error and its optional hint."""
		self.print(f"[bold red]✗ Error:[/bold red] {escape(message)}")
		if hint:
			self.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


console = _ConsoleProxy()
