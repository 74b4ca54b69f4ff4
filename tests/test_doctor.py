"""Tests for the ``arch-provision doctor`` command (cli/doctor.py).

The system probe is a fake — no dependency on the host's PATH or uid.

Coverage:
* Individual check functions return correct tuples.
* Root identity and missing pacman/sudo fail; missing git/makepkg/helper warn.
* Plain output when Rich is unavailable.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from arch_provision.cli import exit_codes
from arch_provision.cli.doctor import (
    _os_check,
    _tool_check,
    _user_check,
    _version_check,
    collect_checks,
    run_doctor,
)
from arch_provision.version import __version__

ALL_TOOLS = {
    "pacman": "/usr/bin/pacman",
    "sudo": "/usr/bin/sudo",
    "git": "/usr/bin/git",
    "makepkg": "/usr/bin/makepkg",
    "yay": "/usr/bin/yay",
}


def _probe(*, root: bool = False, tools: dict[str, str] | None = None) -> MagicMock:
    available = ALL_TOOLS if tools is None else tools
    probe = MagicMock()
    probe.is_superuser.return_value = root
    probe.which.side_effect = available.get
    return probe


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestChecks:
    def test_version(self) -> None:
        assert _version_check() == ("arch-provision", __version__, "[green]OK[/green]")

    def test_regular_user(self) -> None:
        label, value, status = _user_check(_probe())
        assert label == "User"
        assert "OK" in status

    def test_root_user_fails(self) -> None:
        _label, value, status = _user_check(_probe(root=True))
        assert value == "root"
        assert "FAIL" in status

    def test_required_tool_missing_fails(self) -> None:
        label, value, status = _tool_check(_probe(tools={}), "pacman", required=True)
        assert (label, value) == ("pacman", "not found")
        assert "FAIL" in status

    def test_optional_tool_missing_warns(self) -> None:
        _label, _value, status = _tool_check(_probe(tools={}), "git", required=False)
        assert "WARN" in status

    def test_tool_found_shows_path(self) -> None:
        _label, value, status = _tool_check(_probe(), "git", required=False)
        assert value == "/usr/bin/git"
        assert "OK" in status

    def test_helper_row_follows_configuration(self) -> None:
        labels = [label for label, _, _ in collect_checks(_probe(), aur_helper="paru")]
        assert "paru" in labels
        assert "yay" not in labels


class TestOsCheck:
    @patch("arch_provision.cli.doctor.platform.freedesktop_os_release")
    def test_arch(self, mock_release: MagicMock) -> None:
        mock_release.return_value = {"ID": "arch", "PRETTY_NAME": "Arch Linux"}
        assert _os_check() == ("OS", "Arch Linux", "[green]OK[/green]")

    @patch("arch_provision.cli.doctor.platform.freedesktop_os_release")
    def test_arch_derivative(self, mock_release: MagicMock) -> None:
        mock_release.return_value = {"ID": "endeavouros", "ID_LIKE": "arch", "NAME": "EndeavourOS"}
        _label, value, status = _os_check()
        assert value == "EndeavourOS"
        assert "OK" in status

    @patch("arch_provision.cli.doctor.platform.freedesktop_os_release")
    def test_other_distribution_warns(self, mock_release: MagicMock) -> None:
        mock_release.return_value = {"ID": "debian", "PRETTY_NAME": "Debian GNU/Linux 12"}
        assert "WARN" in _os_check()[2]

    @patch("arch_provision.cli.doctor.platform.freedesktop_os_release", side_effect=OSError)
    def test_no_os_release_warns(self, _mock: MagicMock) -> None:
        assert "WARN" in _os_check()[2]


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    def test_all_pass_returns_success(self) -> None:
        assert run_doctor(_probe()) == exit_codes.SUCCESS

    def test_root_returns_error(self) -> None:
        assert run_doctor(_probe(root=True)) == exit_codes.GENERAL_ERROR

    def test_missing_pacman_returns_error(self) -> None:
        tools = {k: v for k, v in ALL_TOOLS.items() if k != "pacman"}
        assert run_doctor(_probe(tools=tools)) == exit_codes.GENERAL_ERROR

    def test_missing_helper_still_succeeds(self) -> None:
        """The helper is bootstrapped on demand — WARN, not FAIL."""
        tools = {k: v for k, v in ALL_TOOLS.items() if k not in ("yay", "git", "makepkg")}
        assert run_doctor(_probe(tools=tools)) == exit_codes.SUCCESS

    @patch.dict("sys.modules", {"rich": None, "rich.table": None})
    def test_plain_output_without_rich(self, capsys: pytest.CaptureFixture[str]) -> None:
        tools = {k: v for k, v in ALL_TOOLS.items() if k != "sudo"}
        code = run_doctor(_probe(tools=tools))

        captured = capsys.readouterr()
        assert code == exit_codes.GENERAL_ERROR
        assert "arch-provision doctor" in captured.err
        assert "sudo" in captured.err
        assert "Some checks failed." in captured.err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("arch_provision.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from arch_provision.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.SUCCESS
        mock_run.assert_called_once_with(aur_helper="yay")

    @patch("arch_provision.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, _mock_run: MagicMock) -> None:
        from arch_provision.cli.app import main

        assert main(["doctor", "--aur-helper", "paru"]) == exit_codes.GENERAL_ERROR
        _mock_run.assert_called_once_with(aur_helper="paru")
