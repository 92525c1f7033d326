"""Tests for the command line entry point."""

import json
from pathlib import Path

from typer.testing import CliRunner

from nzdeploy.cli import app

runner = CliRunner()


class TestParseCommand:
    def test_file_to_json(self, tmp_path: Path):
        """
        Given a .env file with a commented declaration
        When `nzdeploy parse FILE` runs
        Then the submission map is printed as JSON
        """
        env_file = tmp_path / ".env"
        env_file.write_text('A=1\n# B: "two"\n')

        result = runner.invoke(app, ["parse", str(env_file)])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"A": "1", "B": "two"}

    def test_stdin_to_env(self):
        """
        Given env text on stdin with a duplicated key
        When `nzdeploy parse --format env` runs
        Then the folded map is printed as KEY=value lines
        """
        result = runner.invoke(app, ["parse", "--format", "env"], input="A=1\nB 2\nA=3\n")

        assert result.exit_code == 0
        lines = [line for line in result.stdout.splitlines() if not line.startswith("warning:")]
        assert lines == ["A=3", "B=2"]
        assert "A is set more than once" in result.output

    def test_duplicate_warnings_follow_first_appearance(self):
        """
        Given stdin where A appears first but B is repeated first
        When `nzdeploy parse` runs
        Then one warning per repeated key is written, A before B
        """
        result = runner.invoke(app, ["parse"], input="A=1\nB=1\nB=2\nC=1\nA=2\n")

        assert result.exit_code == 0
        warnings = [line for line in result.output.splitlines() if line.startswith("warning:")]
        assert warnings == [
            "warning: A is set more than once; the last value wins",
            "warning: B is set more than once; the last value wins",
        ]

    def test_missing_file_fails(self, tmp_path: Path):
        """
        Given a path that does not exist
        When `nzdeploy parse` runs
        Then it exits with status 1
        """
        result = runner.invoke(app, ["parse", str(tmp_path / "nope.env")])
        assert result.exit_code == 1

    def test_empty_input_prints_empty_object(self):
        """
        Given empty stdin
        When `nzdeploy parse` runs
        Then an empty JSON object is printed
        """
        result = runner.invoke(app, ["parse"], input="")
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {}

    def test_invalid_log_level_fails(self, monkeypatch):
        """
        Given NZDEPLOY_LOG_LEVEL is not a real level
        When `nzdeploy parse` runs
        Then it exits with status 1
        """
        monkeypatch.setenv("NZDEPLOY_LOG_LEVEL", "LOUD")
        result = runner.invoke(app, ["parse"], input="A=1")
        assert result.exit_code == 1


class TestRunCommand:
    def test_invalid_config_fails_before_launch(self, isolated_config: Path):
        """
        Given a malformed config.json
        When `nzdeploy run` runs without --mock
        Then it exits with status 1 instead of starting the TUI
        """
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.json").write_text("{broken")

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
