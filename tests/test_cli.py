"""Tests for CLI interface."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from casefile.cli import app
from casefile.errors import Cancelled

runner = CliRunner()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "casefile version" in result.stdout

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert "casefile version" in result.stdout


class TestHelp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "analyze" in result.stdout
        assert "config" in result.stdout

    def test_analyze_help(self):
        result = runner.invoke(app, ["analyze", "--help"])
        assert result.exit_code == 0
        assert "--json" in result.stdout


class TestAnalyze:
    def test_json_output(self, tmp_path):
        (tmp_path / "report.txt").write_text("abc")
        (tmp_path / "report (1).txt").write_text("abcd")

        result = runner.invoke(app, ["analyze", str(tmp_path), "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["total_files"] == 2
        assert data["total_size"] == 7
        assert data["duplicate_patterns"][0]["pattern"] == "report"

    def test_top_option(self, tmp_path):
        for i in range(5):
            (tmp_path / f"f{i}.bin").write_bytes(b"x" * i)

        result = runner.invoke(app, ["analyze", str(tmp_path), "--json", "--top", "2"])
        assert result.exit_code == 0
        assert [f["size"] for f in json.loads(result.stdout)["largest_files"]] == [4, 3]

    def test_rich_output(self, tmp_path):
        (tmp_path / "notes.txt").write_text("hello")

        result = runner.invoke(app, ["analyze", str(tmp_path)])
        assert result.exit_code == 0
        assert "notes.txt" in result.stdout
        assert "Case Notes" in result.stdout

    def test_missing_folder(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "does not exist" in " ".join(result.stdout.split())

    def test_cancelled(self, tmp_path):
        with patch("casefile.cli.FolderAnalyzer.run", side_effect=Cancelled(str(tmp_path))):
            result = runner.invoke(app, ["analyze", str(tmp_path)])
        assert result.exit_code == 130
        assert "Cancelled" in result.stdout


    def test_undecodable_name(self, tmp_path, undecodable_file):
        as_json = runner.invoke(app, ["analyze", str(tmp_path), "--json"])
        assert as_json.exit_code == 0
        assert json.loads(as_json.stdout)["total_files"] == 1

        report = runner.invoke(app, ["analyze", str(tmp_path)])
        assert report.exit_code == 0
        assert "bad\ufffd.txt" in report.stdout


class TestConfig:
    def test_show(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "top_files" in result.stdout

    def test_update(self, isolated_config):
        result = runner.invoke(app, ["config", "--top", "15", "--no-follow-symlinks"])
        assert result.exit_code == 0
        assert "Settings saved" in result.stdout

        saved = json.loads(isolated_config.read_text())
        assert saved["top_files"] == 15
        assert saved["follow_symlinks"] is False
