"""Manifest parsing — raw text to :class:`InstallPlan`.

Manifest format (one directive per line)::

    # comments and blank lines are ignored
    firefox                       -> pacman package
    [aur] visual-studio-code-bin  -> AUR package
    [cmd] systemctl enable sshd   -> shell command, run verbatim

Rules
-----
* A line is a comment only when its first non-whitespace character is
  ``#``.  A ``#`` later in the line is content.
* Only the line edges are trimmed; internal whitespace is preserved.
* ``[cmd]`` is checked before ``[aur]``; everything else is a native
  package name, taken whole.
* A bare marker yields an empty-string entry.  It is passed through to
  the installer unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from arch_provision.core.models import (
    AurPackage,
    Command,
    Directive,
    InstallPlan,
    NativePackage,
)

CMD_MARKER = "[cmd]"
AUR_MARKER = "[aur]"

_COMMENT_RE = re.compile(r"^\s*#")


def _is_skipped(line: str) -> bool:
    return not line.strip() or _COMMENT_RE.match(line) is not None


def classify_line(line: str) -> Directive | None:
    """Map a single manifest line to a directive.

    Returns ``None`` for blank and comment lines.
    """
    if _is_skipped(line):
        return None

    text = line.strip()
    if text.startswith(CMD_MARKER):
        return Command(text[len(CMD_MARKER):].strip())
    if text.startswith(AUR_MARKER):
        return AurPackage(text[len(AUR_MARKER):].strip())
    return NativePackage(text)


def iter_directives(lines: Iterable[str]) -> Iterator[Directive]:
    """Yield a directive for every non-skipped line, in order."""
    for line in lines:
        directive = classify_line(line)
        if directive is not None:
            yield directive


def parse_manifest(text: str) -> InstallPlan:
    """Parse full manifest *text* into an :class:`InstallPlan`."""
    return InstallPlan.from_directives(iter_directives(text.splitlines()))
