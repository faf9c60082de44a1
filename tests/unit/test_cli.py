"""
Integration tests for CLI commands.

Tests the basic functionality of CLI commands and error handling.
"""

import os

import pytest
from rich.console import Console
from typer.testing import CliRunner

from codedigest.cli import app
from codedigest.cli.progress import ConsoleProgressReporter

runner = CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A small project used as the working directory."""
    files = {
        "src/app.ts": "const a = 1; // note\n",
        "src/sub/util.py": "# header\nx = 2\n",
        "node_modules/dep.js": "var d;\n",
    }
    for rel, content in files.items():
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("CODEDIGEST_"):
            monkeypatch.delenv(key)
    return tmp_path


class TestCLIHelp:
    """Test CLI help and usage information."""

    def test_main_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "summary" in result.stdout
        assert "tree" in result.stdout
        assert "config" in result.stdout

    def test_summary_help(self):
        result = runner.invoke(app, ["summary", "--help"])

        assert result.exit_code == 0
        assert "--ignore-mode" in result.stdout
        assert "--keep-whitespace" in result.stdout

    def test_tree_help(self):
        result = runner.invoke(app, ["tree", "--help"])

        assert result.exit_code == 0
        assert "--depth" in result.stdout
        assert "--full" in result.stdout


class TestSummaryCommand:
    def test_writes_summary(self, project):
        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0, result.stdout
        document = (project / "ScriptOutput" / "CodeSummary.md").read_text(encoding="utf-8")
        assert "```typescript\nconsta=1;\n```" in document
        assert "```python\nx=2\n```" in document
        assert "dep.js" not in document
        assert "Total files to process: 2" in result.stdout

    def test_targets_and_output_dir(self, project):
        result = runner.invoke(app, ["summary", "src/sub", "--output-dir", "out"])

        assert result.exit_code == 0, result.stdout
        document = (project / "out" / "CodeSummary.md").read_text(encoding="utf-8")
        assert "util.py" in document
        assert "app.ts" not in document

    def test_keep_comments(self, project):
        result = runner.invoke(app, ["summary", "--keep-comments", "--keep-whitespace"])

        assert result.exit_code == 0, result.stdout
        document = (project / "ScriptOutput" / "CodeSummary.md").read_text(encoding="utf-8")
        assert "const a = 1; // note" in document

    def test_invalid_ignore_mode(self, project):
        result = runner.invoke(app, ["summary", "--ignore-mode", "regex"])

        assert result.exit_code == 1
        assert "Invalid ignore mode" in result.stdout
        assert not (project / "ScriptOutput").exists()

    def test_missing_config_file(self, project):
        result = runner.invoke(app, ["summary", "--config", "nope.yaml"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_config_file_applies(self, project):
        (project / "codedigest.yaml").write_text(
            "summary:\n  ignore_patterns: [sub]\noutput:\n  directory: docs\n", encoding="utf-8"
        )

        result = runner.invoke(app, ["summary", "--config", "codedigest.yaml"])

        assert result.exit_code == 0, result.stdout
        document = (project / "docs" / "CodeSummary.md").read_text(encoding="utf-8")
        assert "app.ts" in document
        assert "dep.js" in document
        assert "util.py" not in document


class TestTreeCommand:
    def test_default_depth(self, project):
        result = runner.invoke(app, ["tree"])

        assert result.exit_code == 0, result.stdout
        document = (project / "ScriptOutput" / "FileAndFolderSummary.md").read_text(encoding="utf-8")
        assert document == "```\n└── src/\n    ├── app.ts\n    └── sub/\n```"

    def test_full_depth(self, project):
        result = runner.invoke(app, ["tree", "--full"])

        assert result.exit_code == 0, result.stdout
        document = (project / "ScriptOutput" / "FileAndFolderSummary.md").read_text(encoding="utf-8")
        assert "util.py" in document

    def test_depth_option(self, project):
        result = runner.invoke(app, ["tree", "--depth", "1"])

        assert result.exit_code == 0, result.stdout
        document = (project / "ScriptOutput" / "FileAndFolderSummary.md").read_text(encoding="utf-8")
        assert document == "```\n└── src/\n```"

    def test_negative_depth_rejected(self, project):
        result = runner.invoke(app, ["tree", "--depth", "-1"])

        assert result.exit_code != 0


class TestConfigCommand:
    def test_prints_effective_config(self, project, monkeypatch):
        monkeypatch.setenv("CODEDIGEST_TREE_MAX_DEPTH", "7")

        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "summary:" in result.stdout
        assert "max_depth: 7" in result.stdout


class TestConsoleProgressReporter:
    def test_prints_status_lines(self):
        console = Console(record=True, width=120, force_terminal=False)

        with ConsoleProgressReporter(console) as reporter:
            reporter(0, 0, "Starting scan...")
            reporter(0, 2, "Total files to process: 2")
            reporter(1, 2, "Processing: src/[a].py")

        text = console.export_text()
        assert "Starting scan..." in text
        assert "Total files to process: 2" in text
        assert "Processing: src/[a].py" in text

    @pytest.mark.parametrize(
        "current,total,percent",
        [(1, 8, 13), (1, 3, 33), (2, 3, 67), (5, 8, 63), (8, 8, 100)],
    )
    def test_percentage_rounds_half_up(self, current, total, percent):
        console = Console(record=True, width=120, force_terminal=False)

        with ConsoleProgressReporter(console) as reporter:
            reporter(0, total, f"Total files to process: {total}")
            reporter(current, total, "Processing: a.py")

            assert reporter.percent == percent

    def test_percentage_untouched_before_total_known(self):
        console = Console(record=True, width=120, force_terminal=False)

        with ConsoleProgressReporter(console) as reporter:
            reporter(0, 0, "Starting scan...")

            assert reporter.percent == 0
