"""Tests for the root CLI group."""

from __future__ import annotations

from click.testing import CliRunner

from pimctl import __version__
from pimctl.cli import cli


class TestRootGroup:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for group in ("config", "profile", "access"):
            assert group in result.output

    def test_no_args_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_global_flags_listed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        for flag in ("--json", "--quiet", "--profile", "--config-dir", "--log-json"):
            assert flag in result.output

    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calendars"])
        assert result.exit_code == 2

    def test_verbose_logs_to_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "--log-json", "--json", "config", "show"])
        assert result.exit_code == 0
        assert '"config_root"' in result.stderr
        assert result.stdout.lstrip().startswith("{")
