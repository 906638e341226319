"""Tests for the CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from gag.cli import _setup_logging, app, main, normalize_args


runner = CliRunner()


def _invoke(args, **kwargs):
    return runner.invoke(app, normalize_args(args), **kwargs)


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_debug(self) -> None:
        with patch("gag.cli.logging.basicConfig") as mock_config:
            _setup_logging(debug=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        with patch("gag.cli.logging.basicConfig") as mock_config:
            _setup_logging(debug=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.WARNING


class TestNormalizeArgs:
    """Tests for positional query rewriting."""

    def test_positional_becomes_query(self) -> None:
        assert normalize_args(["bar", "-v"]) == ["--query", "bar", "-v"]

    def test_flags_first_untouched(self) -> None:
        assert normalize_args(["-v", "--query", "bar"]) == ["-v", "--query", "bar"]

    def test_empty(self) -> None:
        assert normalize_args([]) == []

    def test_input_not_mutated(self) -> None:
        argv = ["bar"]
        normalize_args(argv)
        assert argv == ["bar"]


class TestRunCommand:
    """Tests for the search command."""

    def test_no_arguments_prints_usage(self) -> None:
        result = _invoke([])
        assert result.exit_code == 0
        assert "Usage" in result.stdout

    def test_compact_output(self, pattern: str) -> None:
        result = _invoke(["bar", "--glob", pattern])
        assert result.exit_code == 0
        assert result.stdout == "01.foo.md\n02.foo.md\n03.bar.md\n"

    def test_verbose_output(self, pattern: str, bar_report: str) -> None:
        result = _invoke(["bar", "--glob", pattern, "--verbose"])
        assert result.exit_code == 0
        assert result.stdout == bar_report

    def test_pipe_overrides_verbose(self, pattern: str) -> None:
        result = _invoke(["bar", "--glob", pattern, "-v", "--pipe"])
        assert result.stdout == "01.foo.md\n02.foo.md\n03.bar.md\n"

    def test_and_query(self, pattern: str) -> None:
        result = _invoke(["foo+bar", "--glob", pattern])
        assert result.stdout == "01.foo.md\n"

    def test_or_query(self, pattern: str) -> None:
        result = _invoke(["foo,qux", "--glob", pattern])
        assert result.stdout == "01.foo.md\n04.baz.md\n05.qux.md\n"

    def test_named_query(self, pattern: str) -> None:
        result = _invoke(["--glob", pattern, "-q", "foo"])
        assert result.stdout == "01.foo.md\n"

    def test_grep_diff(self, pattern: str) -> None:
        result = _invoke(["science", "--glob", pattern, "--grep", "--diff"])
        assert result.stdout == "06.none.md\n"

    def test_find(self, pattern: str) -> None:
        result = _invoke(["foo", "--glob", pattern, "--find"])
        assert result.stdout == "01.foo.md\n02.foo.md\n"

    def test_invert(self, pattern: str) -> None:
        result = _invoke(["bar", "--glob", pattern, "--invert"])
        assert result.stdout == "04.baz.md\n05.qux.md\n06.none.md\n"

    def test_date(self, pattern: str) -> None:
        result = _invoke(["bar", "--glob", pattern, "--date", "2024.09.25-2024.09.25"])
        assert result.stdout == "01.foo.md\n"

    def test_unknown_tag_empty_output(self, pattern: str) -> None:
        result = _invoke(["qaz", "--glob", pattern])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_glob_from_environment(self, pattern: str) -> None:
        result = _invoke(["foo"], env={"GAG_GLOB": pattern})
        assert result.stdout == "01.foo.md\n"

    def test_sources_from_stdin(self, pattern: str) -> None:
        first = str(Path(pattern).parent / "01.foo.md")
        third = str(Path(pattern).parent / "03.bar.md")

        result = _invoke(["bar", "--glob", "/nonexistent/*.md"], input=f"{first}\n{third}\n")

        assert result.exit_code == 0
        assert result.stdout == "01.foo.md\n03.bar.md\n"

    def test_unreadable_source_is_fatal(self, tmp_path: Path) -> None:
        result = _invoke(["bar"], input=f"{tmp_path / 'missing.md'}\n")
        assert result.exit_code == 1
        assert "Failed to read" in result.output

    def test_no_documents(self, tmp_path: Path) -> None:
        result = _invoke(["bar", "--glob", str(tmp_path / "*.md")])
        assert result.exit_code == 0
        assert all("No documents found" in line for line in result.stdout.splitlines())


class TestTagSummary:
    """Tests for the --tags summary."""

    def test_lists_every_tag(self, pattern: str) -> None:
        result = _invoke(["--tags", "--glob", pattern])
        assert result.exit_code == 0
        for tag in ("bar", "foo", "qux", "science"):
            assert tag in result.stdout

    def test_respects_date(self, pattern: str) -> None:
        result = _invoke(["--tags", "--glob", pattern, "--date", "2024.10.02"])
        assert "qux" in result.stdout
        assert "science" not in result.stdout

    def test_no_tags(self, tmp_path: Path) -> None:
        result = _invoke(["--tags", "--glob", str(tmp_path / "*.md")])
        assert result.exit_code == 0
        assert "No tags found" in result.stdout


class TestMain:
    """Tests for the console script entry point."""

    def test_main_normalizes_arguments(self, pattern: str) -> None:
        with patch("gag.cli.app") as mock_app:
            main(["bar", "--glob", pattern])
        mock_app.assert_called_once_with(args=["--query", "bar", "--glob", pattern], prog_name="gag")

    def test_main_reads_sys_argv(self) -> None:
        with patch("gag.cli.app") as mock_app, patch("gag.cli.sys.argv", ["gag", "foo"]):
            main()
        mock_app.assert_called_once_with(args=["--query", "foo"], prog_name="gag")
