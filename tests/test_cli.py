"""Tests for the tfvc-bridge command line."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tfvcbridge.cli import create_parser, run_cli
from tests.utils import write_fake_tool


class TestParser:
    """Tests for argument parsing."""

    def test_checkin(self) -> None:
        parsed = create_parser().parse_args(
            ["checkin", "a.txt", "b.txt", "-m", "fix build", "--associate", "12", "34"]
        )
        assert parsed.command == "checkin"
        assert parsed.paths == ["a.txt", "b.txt"]
        assert parsed.comment == "fix build"
        assert parsed.associate == [12, 34]

    def test_global_options(self) -> None:
        parsed = create_parser().parse_args(
            ["-vv", "--root", "/ws", "--location", "/opt/tf", "--restrict-workspace", "status"]
        )
        assert parsed.verbose == 2
        assert parsed.root == "/ws"
        assert parsed.location == "/opt/tf"
        assert parsed.restrict_workspace is True
        assert parsed.include_folders is False

    def test_defaults(self) -> None:
        parsed = create_parser().parse_args(["get"])
        assert parsed.verbose is None
        assert parsed.restrict_workspace is None
        assert parsed.paths == []
        assert parsed.recursive is False

    def test_resolve_requires_known_choice(self) -> None:
        parser = create_parser()
        assert parser.parse_args(["resolve", "a.txt", "--auto", "TakeTheirs"]).auto == "TakeTheirs"
        with pytest.raises(SystemExit):
            parser.parse_args(["resolve", "a.txt", "--auto", "Whatever"])

    def test_print_version_spec(self) -> None:
        parsed = create_parser().parse_args(["print", "a.txt", "--at", "C42"])
        assert parsed.path == "a.txt"
        assert parsed.version_spec == "C42"


class TestRun:
    """Tests for running commands."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli([]) == 1
        assert "tfvc-bridge" in capsys.readouterr().out

    def test_location_missing(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(["--root", str(tmp_path), "status"]) == 1
        assert "TfvcLocationMissing" in capsys.readouterr().err

    @pytest.mark.skipif(sys.platform == "win32", reason="fake tool is a POSIX script")
    def test_version(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("FAKE_TF_VERSION", "14.0.4.201611041441")
        tool = write_fake_tool(tmp_path)
        assert run_cli(["--root", str(tmp_path), "--location", str(tool), "version"]) == 0
        assert "14.0.4.201611041441" in capsys.readouterr().out

    @pytest.mark.skipif(sys.platform == "win32", reason="fake tool is a POSIX script")
    def test_tool_error_reported(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        tool = write_fake_tool(tmp_path)
        assert run_cli(["--root", str(tmp_path), "--location", str(tool), "version"]) == 1
        assert "TfvcMinVersionWarning" in capsys.readouterr().err

    @pytest.mark.skipif(sys.platform == "win32", reason="fake tool is a POSIX script")
    def test_location_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        tool = write_fake_tool(tmp_path, "tf.exe")
        monkeypatch.setenv("TFVC_LOCATION", str(tool))
        assert run_cli(["--root", str(tmp_path), "version"]) == 0
        assert "14.102.25619.0" in capsys.readouterr().out
