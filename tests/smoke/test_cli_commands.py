"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import json
import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dailybias.cli.main import app
from dailybias.core.models import BiasProgress
from dailybias.daily import get_daily_bias

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent

NOW = "2024-01-15T12:00:00+00:00"

runner = CliRunner()


def run_cli_command(command: str, timeout: int = 30) -> tuple[int, str, str]:
    """
    Run a CLI command in a subprocess and return exit code, stdout, stderr.

    Args:
        command: The command to run (after 'python -m dailybias')
        timeout: Maximum time to wait
    """
    result = subprocess.run(
        f"{sys.executable} -m dailybias {command}",
        shell=True,
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        timeout=timeout,
    )
    return result.returncode, result.stdout, result.stderr


@pytest.fixture
def catalog_file(tmp_path, quiz_catalog):
    path = tmp_path / "biases.json"
    path.write_text(json.dumps([b.to_dict() for b in quiz_catalog]), encoding="utf-8")
    return path


@pytest.fixture
def progress_file(tmp_path, now):
    records = [
        BiasProgress("anchoring", viewed_at=now, view_count=1).to_dict(),
        # Legacy camelCase record, viewed the day before
        {"biasId": "hindsight", "viewedAt": 1705233600000, "viewCount": 2, "mastered": False},
    ]
    path = tmp_path / "progress.json"
    path.write_text(json.dumps({"progress": records}), encoding="utf-8")
    return path


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self):
        """Main help should display without errors."""
        code, stdout, stderr = run_cli_command("--help")

        assert code == 0, f"Help failed: {stderr}"
        assert "Commands" in stdout
        assert "today" in stdout

    @pytest.mark.parametrize("command", ["today", "recommend", "review-queue", "review-stats", "quiz-preview"])
    def test_command_help(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0
        assert "--catalog" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "dailybias" in result.output


class TestTodayCommand:
    """Test the bias-of-the-day command."""

    def test_plain_rotation(self, catalog_file, quiz_catalog):
        result = runner.invoke(app, ["today", "-c", str(catalog_file), "--date", "2024-01-15", "--plain"])

        assert result.exit_code == 0, result.output
        assert get_daily_bias(quiz_catalog, "2024-01-15").title in result.output
        assert "2024-01-15" in result.output

    def test_personalized_skips_viewed(self, catalog_file, progress_file):
        result = runner.invoke(
            app, ["today", "-c", str(catalog_file), "-p", str(progress_file), "--now", NOW]
        )

        assert result.exit_code == 0, result.output
        assert "Bias anchoring" not in result.output
        assert "Bias hindsight" not in result.output

    def test_invalid_now(self, catalog_file):
        result = runner.invoke(app, ["today", "-c", str(catalog_file), "--now", "yesterday"])
        assert result.exit_code == 1

    def test_unknown_timezone(self, catalog_file):
        result = runner.invoke(app, ["today", "-c", str(catalog_file), "--tz", "Mars/Olympus"])
        assert result.exit_code == 1
        assert "Unknown timezone" in result.output

    def test_empty_catalog(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")
        result = runner.invoke(app, ["today", "-c", str(path)])
        assert result.exit_code == 1
        assert "No biases available" in result.output


class TestInputValidation:
    """Test bad input files."""

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["today", "-c", str(tmp_path / "missing.json")])
        assert result.exit_code != 0

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["today", "-c", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_invalid_category(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"id": "a", "title": "A", "category": "astrology"}]), encoding="utf-8")
        result = runner.invoke(app, ["today", "-c", str(path)])
        assert result.exit_code == 1
        assert "Invalid input file" in result.output

    def test_duplicate_ids(self, tmp_path):
        path = tmp_path / "dupes.json"
        record = {"id": "a", "title": "A", "category": "memory"}
        path.write_text(json.dumps([record, record]), encoding="utf-8")
        result = runner.invoke(app, ["today", "-c", str(path)])
        assert result.exit_code == 1
        assert "Duplicate" in result.output


class TestOtherCommands:
    """Test recommend, review and quiz commands."""

    def test_recommend(self, catalog_file, progress_file):
        result = runner.invoke(app, ["recommend", "-c", str(catalog_file), "-p", str(progress_file)])
        assert result.exit_code == 0, result.output
        assert "Category Coverage" in result.output
        assert "Recommended next" in result.output

    def test_review_queue(self, catalog_file, progress_file):
        result = runner.invoke(
            app, ["review-queue", "-c", str(catalog_file), "-p", str(progress_file), "--now", NOW]
        )
        assert result.exit_code == 0, result.output
        assert "Due for review" in result.output
        assert "Upcoming" in result.output

    def test_review_queue_without_progress(self, catalog_file):
        result = runner.invoke(app, ["review-queue", "-c", str(catalog_file), "--now", NOW])
        assert result.exit_code == 0
        assert "Nothing to review" in result.output

    def test_review_stats(self, catalog_file, progress_file):
        result = runner.invoke(
            app, ["review-stats", "-c", str(catalog_file), "-p", str(progress_file), "--now", NOW]
        )
        assert result.exit_code == 0, result.output
        assert "Review Statistics" in result.output
        assert "Due now" in result.output

    def test_quiz_preview_reproducible(self, catalog_file):
        args = ["quiz-preview", "-c", str(catalog_file), "--count", "3", "--seed", "42", "--now", NOW]
        first = runner.invoke(app, args)
        second = runner.invoke(app, args)
        assert first.exit_code == 0, first.output
        assert first.output == second.output
        assert "3 questions" in first.output

    def test_quiz_preview_too_small_catalog(self, tmp_path, small_catalog):
        path = tmp_path / "small.json"
        path.write_text(json.dumps([b.to_dict() for b in small_catalog]), encoding="utf-8")
        result = runner.invoke(app, ["quiz-preview", "-c", str(path)])
        assert result.exit_code == 1


class TestProgressValidation:
    """Test bad progress files."""

    def _write(self, tmp_path, records):
        path = tmp_path / "progress.json"
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    @pytest.mark.parametrize(
        "record",
        [
            {"bias_id": "anchoring", "viewed_at": "yesterday"},
            {"bias_id": "anchoring", "view_count": "x"},
        ],
    )
    def test_malformed_field(self, tmp_path, catalog_file, record):
        path = self._write(tmp_path, [record])
        result = runner.invoke(app, ["today", "-c", str(catalog_file), "-p", str(path)])
        assert result.exit_code == 1
        assert "Invalid progress record" in result.output

    @pytest.mark.parametrize("command", ["today", "recommend", "review-queue", "review-stats", "quiz-preview"])
    def test_duplicate_progress_ids(self, tmp_path, catalog_file, now, command):
        record = BiasProgress("anchoring", viewed_at=now, view_count=1).to_dict()
        path = self._write(tmp_path, [record, record])
        result = runner.invoke(app, [command, "-c", str(catalog_file), "-p", str(path)])
        assert result.exit_code == 1
        assert "Duplicate progress id" in result.output


class TestModuleEntryPoint:
    """Test ``python -m dailybias`` wiring."""

    def test_import_does_not_run_cli(self):
        result = subprocess.run(
            [sys.executable, "-c", "import dailybias.__main__"],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            timeout=30,
        )
        assert result.returncode == 0, result.stderr
        assert result.stdout == ""
