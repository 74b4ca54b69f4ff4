"""Tests for manifest parsing (core/manifest_parser.py).

Pure tests — no I/O.

Coverage:
* Blank and comment lines contribute nothing.
* ``[cmd]`` / ``[aur]`` classification and marker precedence.
* Payload trimming, internal whitespace preservation.
* Empty payloads pass through.
* Order preservation within each collection.
"""

from __future__ import annotations

import pytest

from arch_provision.core.manifest_parser import (
    classify_line,
    iter_directives,
    parse_manifest,
)
from arch_provision.core.models import AurPackage, Command, InstallPlan, NativePackage


# ---------------------------------------------------------------------------
# classify_line
# ---------------------------------------------------------------------------

class TestSkippedLines:
    @pytest.mark.parametrize(
        "line",
        ["", "   ", "\t", "# comment", "   # indented comment", "\t#tab", "#[aur] yay"],
    )
    def test_blank_and_comment_lines_are_skipped(self, line: str) -> None:
        assert classify_line(line) is None


class TestClassification:
    def test_bare_name_is_native(self) -> None:
        assert classify_line("firefox") == NativePackage("firefox")

    def test_aur_marker(self) -> None:
        assert classify_line("[aur] visual-studio-code-bin") == AurPackage(
            "visual-studio-code-bin"
        )

    def test_cmd_marker(self) -> None:
        assert classify_line("[cmd] echo done") == Command("echo done")

    @pytest.mark.parametrize(
        "line",
        ["[aur]yay", "[aur] yay", "[aur]    yay", "  [aur]\tyay  ", "[aur] yay\r"],
    )
    def test_aur_payload_is_trimmed(self, line: str) -> None:
        assert classify_line(line) == AurPackage("yay")

    def test_cmd_payload_keeps_hash(self) -> None:
        line = "[cmd] echo 'a # b'  # trailing"
        assert classify_line(line) == Command("echo 'a # b'  # trailing")

    def test_cmd_payload_keeps_internal_whitespace(self) -> None:
        assert classify_line("[cmd]  printf '%s   %s' a b  ") == Command(
            "printf '%s   %s' a b"
        )

    def test_cmd_checked_before_aur(self) -> None:
        assert classify_line("[cmd] [aur] thing") == Command("[aur] thing")

    def test_aur_payload_starting_with_cmd_stays_aur(self) -> None:
        assert classify_line("[aur] [cmd] thing") == AurPackage("[cmd] thing")

    def test_native_line_is_not_split(self) -> None:
        assert classify_line("  base-devel   git ") == NativePackage("base-devel   git")

    def test_marker_must_be_at_start(self) -> None:
        assert classify_line("foo [aur] bar") == NativePackage("foo [aur] bar")

    def test_markers_are_case_sensitive(self) -> None:
        assert classify_line("[AUR] yay") == NativePackage("[AUR] yay")

    @pytest.mark.parametrize(
        ("line", "expected"),
        [("[aur]", AurPackage("")), ("[cmd]   ", Command(""))],
    )
    def test_empty_payload_is_preserved(self, line: str, expected: object) -> None:
        assert classify_line(line) == expected


# ---------------------------------------------------------------------------
# parse_manifest
# ---------------------------------------------------------------------------

class TestParseManifest:
    def test_mixed_manifest(self) -> None:
        text = "firefox\n# comment\n\n[aur]  visual-studio-code-bin\n[cmd] echo done"
        plan = parse_manifest(text)
        assert plan == InstallPlan(
            native_packages=("firefox",),
            aur_packages=("visual-studio-code-bin",),
            commands=("echo done",),
        )

    def test_only_comments_and_blanks_gives_empty_plan(self) -> None:
        plan = parse_manifest("# header\n\n   \n  # another\n")
        assert plan.is_empty
        assert plan.counts == (0, 0, 0)

    def test_empty_text(self) -> None:
        assert parse_manifest("") == InstallPlan()

    def test_order_within_collections_is_preserved(self) -> None:
        text = "\n".join(
            [
                "[cmd] first",
                "vim",
                "[aur] paru-bin",
                "git",
                "[cmd] second",
                "[aur] spotify",
                "htop",
            ]
        )
        plan = parse_manifest(text)
        assert plan.native_packages == ("vim", "git", "htop")
        assert plan.aur_packages == ("paru-bin", "spotify")
        assert plan.commands == ("first", "second")

    def test_every_kept_line_lands_in_exactly_one_collection(self) -> None:
        lines = ["a", "[aur] b", "# c", "[cmd] d", "", "e", "[aur]", "[cmd]"]
        plan = parse_manifest("\n".join(lines))
        kept = [line for line in lines if line.strip() and not line.lstrip().startswith("#")]
        assert sum(plan.counts) == len(kept)

    def test_crlf_line_endings(self) -> None:
        plan = parse_manifest("firefox\r\n[aur] yay-bin\r\n")
        assert plan.native_packages == ("firefox",)
        assert plan.aur_packages == ("yay-bin",)

    def test_duplicates_are_kept(self) -> None:
        plan = parse_manifest("git\ngit\n")
        assert plan.native_packages == ("git", "git")


class TestIterDirectives:
    def test_yields_in_order_and_skips_comments(self) -> None:
        directives = list(iter_directives(["# x", "a", "[aur] b", "[cmd] c"]))
        assert directives == [NativePackage("a"), AurPackage("b"), Command("c")]
