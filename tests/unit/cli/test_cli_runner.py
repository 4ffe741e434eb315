"""Tests for the platid CLI runner."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from platid.bootstrap.host import HostContext
from platid.bootstrap.paths import PLATID_HOME_ENV
from platid.cli import main
from platid.cli.commands import CurrentCommand
from platid.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_ISSUES_FOUND, EXIT_SUCCESS
from platid.cli.runner import CLIRunner, get_version


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch):
    """Run every test in an empty directory with an empty platid home."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(PLATID_HOME_ENV, str(tmp_path / "home"))
    logger = logging.getLogger("platid")
    level = logger.level
    yield tmp_path
    logger.setLevel(level)


class TestGetVersion:
    """Tests for get_version."""

    def test_get_version_from_metadata(self) -> None:
        with patch("platid.cli.runner.version", return_value="1.2.3"):
            assert get_version() == "1.2.3"

    def test_get_version_fallback(self) -> None:
        from importlib.metadata import PackageNotFoundError

        from platid import __version__

        with patch(
            "platid.cli.runner.version",
            side_effect=PackageNotFoundError("not found"),
        ):
            assert get_version() == __version__


class TestCLIRunner:
    """Tests for global options and dispatch."""

    def test_initialization(self) -> None:
        runner = CLIRunner()
        assert runner.parser is not None
        assert set(runner.commands) == {"classify", "current", "decode", "list", "validate"}

    def test_run_help(self, capsys) -> None:
        assert CLIRunner().run(["--help"]) == EXIT_SUCCESS
        assert "usage:" in capsys.readouterr().out.lower()

    def test_run_version(self, capsys) -> None:
        with patch("platid.cli.runner.version", return_value="9.9.9"):
            runner = CLIRunner()
        assert runner.run(["--version"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "9.9.9"

    def test_no_command_shows_help(self, capsys) -> None:
        assert CLIRunner().run([]) == EXIT_SUCCESS
        assert "commands" in capsys.readouterr().out

    def test_unknown_command_is_invalid_usage(self) -> None:
        assert CLIRunner().run(["frobnicate"]) == EXIT_INVALID_USAGE

    def test_missing_argument_is_invalid_usage(self) -> None:
        assert CLIRunner().run(["classify"]) == EXIT_INVALID_USAGE

    def test_bad_timeout_is_invalid_usage(self) -> None:
        assert CLIRunner().run(["current", "--timeout", "-1"]) == EXIT_INVALID_USAGE

    def test_main_entry_point(self, capsys) -> None:
        assert main(["decode", "linux-x86-64"]) == EXIT_SUCCESS
        assert "linux" in capsys.readouterr().out


class TestClassifyCommand:
    """Tests for 'platid classify'."""

    def test_text_output(self, capsys) -> None:
        result = CLIRunner().run(["classify", "x86_64-unknown-linux-gnu"])
        assert result == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "x86_64-unknown-linux-gnu\tlinux-x86-64\tglibc"

    def test_json_output(self, capsys) -> None:
        result = CLIRunner().run([
            "classify", "--format", "json",
            "armv7-linux-androideabi", "aarch64-apple-darwin",
        ])
        assert result == EXIT_SUCCESS
        records = json.loads(capsys.readouterr().out)
        assert records[0] == {
            "input": "armv7-linux-androideabi",
            "id": "android-arm-32",
            "os": "android",
            "arch": "arm-32",
            "env": "bionic",
        }
        assert records[1]["env"] == "bsdlibc"

    def test_lenient_keeps_unknown(self, capsys) -> None:
        assert CLIRunner().run(["classify", ""]) == EXIT_SUCCESS
        assert "unknown-unknown-unknown" in capsys.readouterr().out

    def test_strict_rejects_unknown(self, capsys, caplog) -> None:
        result = CLIRunner().run(["classify", "--strict", "nvptx64-nvidia-cuda", "x86_64-linux"])
        assert result == EXIT_ISSUES_FOUND
        out = capsys.readouterr().out
        assert "nvptx64" not in out
        assert "linux-x86-64" in out
        assert "Unknown platform: 'nvptx64-nvidia-cuda'" in caplog.text

    def test_strict_from_config(self, isolated_cwd: Path) -> None:
        (isolated_cwd / ".platid.yml").write_text("strict: true\n", encoding="utf-8")
        assert CLIRunner().run(["classify", "TempleOS"]) == EXIT_ISSUES_FOUND

    def test_probe_env(self, capsys) -> None:
        with patch(
            "platid.cli.commands.classify.probe_libc_version",
            return_value="musl libc (x86_64)",
        ):
            result = CLIRunner().run(["classify", "--probe-env", "x86_64-unknown-linux-gnu"])
        assert result == EXIT_SUCCESS
        assert capsys.readouterr().out.strip().endswith("\tmusl")

    def test_broken_config_is_reported(self, isolated_cwd: Path, caplog) -> None:
        (isolated_cwd / ".platid.yml").write_text("probe: [oops\n", encoding="utf-8")
        assert CLIRunner().run(["classify", "linux"]) == EXIT_ISSUES_FOUND
        assert "Invalid YAML" in caplog.text

    def test_undecodable_config_is_reported(self, isolated_cwd: Path, caplog) -> None:
        (isolated_cwd / ".platid.yml").write_bytes(b"strict: \xff\xfe\n")
        assert CLIRunner().run(["current"]) == EXIT_ISSUES_FOUND
        assert "Cannot read" in caplog.text


class TestCurrentCommand:
    """Tests for 'platid current'."""

    def _runner(self, **ctx) -> CLIRunner:
        return CLIRunner(current_cmd=CurrentCommand(context=HostContext(**ctx)))

    def test_linux_musl(self, capsys) -> None:
        runner = self._runner(os_name="Linux", machine="x86_64", vm_name="CPython")
        with patch(
            "platid.bootstrap.host.probe_libc_version",
            return_value="musl libc (x86_64)",
        ) as mock_probe:
            result = runner.run(["current", "--ldd", "/sbin/ldd", "--timeout", "0.5"])
        assert result == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "linux-x86-64\tmusl"
        mock_probe.assert_called_once_with("/sbin/ldd", 0.5)

    def test_json(self, capsys) -> None:
        runner = self._runner(os_name="Darwin", machine="arm64")
        assert runner.run(["current", "--format", "json"]) == EXIT_SUCCESS
        record = json.loads(capsys.readouterr().out)[0]
        assert record == {"id": "darwin-arm-64", "os": "darwin", "arch": "arm-64", "env": "bsdlibc"}

    def test_strict_unknown_machine(self, capsys) -> None:
        runner = self._runner(os_name="Linux", machine="loongarch", bitness_hint=64)
        assert runner.run(["current", "--strict"]) == EXIT_ISSUES_FOUND
        assert capsys.readouterr().out == ""

    def test_lenient_unknown_machine(self, capsys) -> None:
        runner = self._runner(os_name="Darwin", machine="loongarch", bitness_hint=64)
        assert runner.run(["current"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "darwin-unknown-64\tbsdlibc"

    def test_host_override_from_config(self, isolated_cwd: Path, capsys) -> None:
        (isolated_cwd / ".platid.yml").write_text(
            "host:\n  os_name: Windows\n  machine: ARM64\n", encoding="utf-8"
        )
        runner = self._runner(os_name="Linux", machine="x86_64")
        assert runner.run(["current"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "windows-arm-64\tmsvc"


class TestDecodeCommand:
    """Tests for 'platid decode'."""

    def test_canonical(self, capsys) -> None:
        assert CLIRunner().run(["decode", "linux-arm-32-be"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "linux-arm-32-be\tlinux\tarm-32-be\t32\tbe"

    def test_rejects_non_canonical(self, capsys) -> None:
        assert CLIRunner().run(["decode", "linux-x86"]) == EXIT_ISSUES_FOUND
        assert capsys.readouterr().out == ""

    def test_lenient(self, capsys) -> None:
        assert CLIRunner().run(["decode", "--lenient", "linux-x86"]) == EXIT_SUCCESS
        assert "\tx86-32\t" in capsys.readouterr().out

    def test_json(self, capsys) -> None:
        assert CLIRunner().run(["decode", "--format", "json", "unknown-unknown-unknown"]) == 0
        record = json.loads(capsys.readouterr().out)[0]
        assert record["bitness"] is None
        assert record["family"] == "unknown"


class TestListCommand:
    """Tests for 'platid list'."""

    def test_list_os(self, capsys) -> None:
        assert CLIRunner().run(["list", "os"]) == EXIT_SUCCESS
        lines = capsys.readouterr().out.split()
        assert "linux" in lines
        assert "unknown" not in lines

    def test_list_arch_all(self, capsys) -> None:
        assert CLIRunner().run(["list", "arch", "--all"]) == EXIT_SUCCESS
        assert "unknown-64" in capsys.readouterr().out.split()

    def test_list_platforms_default(self, capsys) -> None:
        assert CLIRunner().run(["list"]) == EXIT_SUCCESS
        lines = capsys.readouterr().out.split()
        assert "linux-x86-64" in lines
        assert lines == sorted(lines)

    def test_invalid_kind(self) -> None:
        assert CLIRunner().run(["list", "cpus"]) == EXIT_INVALID_USAGE


class TestValidateCommand:
    """Tests for 'platid validate'."""

    def test_no_config(self, capsys) -> None:
        assert CLIRunner().run(["validate"]) == EXIT_INVALID_USAGE
        assert "No configuration file found" in capsys.readouterr().out

    def test_valid(self, isolated_cwd: Path, capsys) -> None:
        (isolated_cwd / ".platid.yml").write_text("strict: true\n", encoding="utf-8")
        assert CLIRunner().run(["validate"]) == EXIT_SUCCESS
        assert "Configuration is valid." in capsys.readouterr().out

    def test_warning_with_suggestion(self, isolated_cwd: Path, capsys) -> None:
        path = isolated_cwd / "custom.yml"
        path.write_text("strct: true\n", encoding="utf-8")
        assert CLIRunner().run(["validate", "--config", str(path)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Did you mean 'strict'?" in out
        assert "1 warning(s)" in out

    def test_errors(self, isolated_cwd: Path, capsys) -> None:
        (isolated_cwd / ".platid.yml").write_text("probe:\n  timeout: -1\n", encoding="utf-8")
        assert CLIRunner().run(["validate"]) == EXIT_ISSUES_FOUND
        assert "Configuration is invalid" in capsys.readouterr().out

    def test_directory_as_config(self, isolated_cwd: Path, capsys) -> None:
        config_dir = isolated_cwd / "conf.yml"
        config_dir.mkdir()
        assert CLIRunner().run(["validate", "--config", str(config_dir)]) == EXIT_ISSUES_FOUND
        assert "Cannot read" in capsys.readouterr().out

    def test_missing_file(self, isolated_cwd: Path) -> None:
        assert CLIRunner().run(["validate", "--config", str(isolated_cwd / "x.yml")]) == (
            EXIT_INVALID_USAGE
        )
