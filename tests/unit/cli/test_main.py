"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import json
import logging
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from adf_convert import __version__
from adf_convert.cli.main import _configure_logging, app
from adf_convert.cli.models import ExitCode
from tests.fixtures.adf_fixtures import (
    MIXED_CONTENT_DOC,
    create_adf_doc,
    create_bullet_list,
    create_list_item,
    create_paragraph,
)


runner = CliRunner()

SIMPLE_DOC = create_adf_doc([create_paragraph("Hello *world*")])


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every CLI test in an empty directory so no stray config is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize("verbosity,level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_sets_level(self, verbosity, level):
        """Verbosity maps to WARNING, INFO and DEBUG."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(verbosity)

            mock_get_logger.assert_called_with("adf_convert")
            mock_app_logger.setLevel.assert_called_with(level)

    def test_configures_only_app_logger(self):
        """The root logger is left untouched."""
        root_handlers = list(logging.getLogger().handlers)

        _configure_logging(1)

        app_logger = logging.getLogger("adf_convert")
        assert len(app_logger.handlers) == 1
        assert isinstance(app_logger.handlers[0], logging.StreamHandler)
        assert logging.getLogger().handlers == root_handlers

    def test_repeated_calls_do_not_stack_handlers(self):
        _configure_logging(0)
        _configure_logging(0)

        assert len(logging.getLogger("adf_convert").handlers) == 1

    def test_logdir_creates_log_file(self, tmp_path):
        """--logdir adds a timestamped file handler."""
        log_dir = tmp_path / "logs"

        _configure_logging(1, str(log_dir))

        log_files = list(log_dir.glob("adf-convert_*.log"))
        assert len(log_files) == 1
        handlers = logging.getLogger("adf_convert").handlers
        assert any(isinstance(h, logging.FileHandler) for h in handlers)


class TestConvertCommand:
    """Test cases for the conversion command."""

    def test_converts_file_to_markdown(self, tmp_path):
        input_path = write_json(tmp_path / "page.json", SIMPLE_DOC)

        result = runner.invoke(app, [input_path])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.stdout == "Hello \\*world\\*\n\n"

    def test_reads_stdin_when_no_input(self):
        result = runner.invoke(app, [], input=json.dumps(SIMPLE_DOC))

        assert result.exit_code == ExitCode.SUCCESS
        assert result.stdout == "Hello \\*world\\*\n\n"

    def test_reads_stdin_for_dash(self):
        result = runner.invoke(app, ["-", "--format", "text"], input=json.dumps(SIMPLE_DOC))

        assert result.exit_code == ExitCode.SUCCESS
        assert result.stdout == "Hello *world*\n"

    @pytest.mark.parametrize("fmt,expected", [
        ("text", "Hello *world*\n"),
        ("html", "<p>Hello *world*</p>\n"),
        ("markdown", "Hello \\*world\\*\n\n"),
    ])
    def test_format_option(self, tmp_path, fmt, expected):
        input_path = write_json(tmp_path / "page.json", SIMPLE_DOC)

        result = runner.invoke(app, [input_path, "-f", fmt])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.stdout == expected

    def test_output_option_writes_file(self, tmp_path):
        input_path = write_json(tmp_path / "page.json", MIXED_CONTENT_DOC)
        output_path = tmp_path / "page.md"

        result = runner.invoke(app, [input_path, "--output", str(output_path)])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.stdout == ""
        assert output_path.read_text(encoding="utf-8").startswith("## Release notes\n\n")

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == ExitCode.SUCCESS
        assert f"adf-convert version {__version__}" in result.stdout

    def test_verbose_prints_success_message(self, tmp_path):
        input_path = write_json(tmp_path / "page.json", SIMPLE_DOC)

        result = runner.invoke(app, [input_path, "-v", "1", "--no-color"])

        assert result.exit_code == ExitCode.SUCCESS
        assert "Converted" in result.output
        assert "Reading ADF document from" in result.output
        assert "No diagnostics reported" in result.output


class TestErrorHandling:
    """Test cases for exit codes on failure."""

    def test_invalid_json_exits_invalid_document(self, tmp_path):
        input_path = tmp_path / "page.json"
        input_path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, [str(input_path)])

        assert result.exit_code == ExitCode.INVALID_DOCUMENT
        assert "not valid JSON" in result.output

    def test_untyped_root_exits_invalid_document(self, tmp_path):
        input_path = write_json(tmp_path / "page.json", {"content": []})

        result = runner.invoke(app, [input_path])

        assert result.exit_code == ExitCode.INVALID_DOCUMENT

    def test_missing_input_exits_general_error(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "missing.json")])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "File not found" in result.output

    def test_unknown_format_exits_general_error(self, tmp_path):
        input_path = write_json(tmp_path / "page.json", SIMPLE_DOC)

        result = runner.invoke(app, [input_path, "--format", "rtf"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "Unknown formatter 'rtf'" in result.output

    def test_missing_explicit_config_exits_general_error(self, tmp_path):
        input_path = write_json(tmp_path / "page.json", SIMPLE_DOC)

        result = runner.invoke(app, [input_path, "--config", "nope.yaml"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "Configuration file not found" in result.output

    def test_invalid_formatter_option_exits_general_error(self, tmp_path):
        """A rejected formatter option is reported as a normal error."""
        input_path = write_json(tmp_path / "page.json", SIMPLE_DOC)

        with patch(
            'adf_convert.cli.main.get_formatter',
            side_effect=ValueError("bullet_marker must be one of *, -, +"),
        ):
            result = runner.invoke(app, [input_path])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "bullet_marker must be one of" in result.output
        assert "Unexpected error" not in result.output

    def test_unexpected_error_exits_general_error(self, tmp_path):
        input_path = write_json(tmp_path / "page.json", SIMPLE_DOC)

        with patch('adf_convert.cli.main.run', side_effect=RuntimeError("boom")):
            result = runner.invoke(app, [input_path])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "Unexpected error: boom" in result.output


class TestStrictMode:
    """Test cases for --strict."""

    def test_warning_without_strict_succeeds(self, tmp_path):
        """A non-doc root is wrapped and converted."""
        input_path = write_json(tmp_path / "para.json", create_paragraph("Just text"))

        result = runner.invoke(app, [input_path])

        assert result.exit_code == ExitCode.SUCCESS
        assert "Just text\n\n" in result.stdout
        assert "1 warning(s) reported (use --strict" in result.output

    def test_warning_with_strict_exits_diagnostics_reported(self, tmp_path):
        """Output is still written when strict mode fails the run."""
        input_path = write_json(tmp_path / "para.json", create_paragraph("Just text"))
        output_path = tmp_path / "out.md"

        result = runner.invoke(app, [input_path, "--strict", "-o", str(output_path)])

        assert result.exit_code == ExitCode.DIAGNOSTICS_REPORTED
        assert output_path.read_text(encoding="utf-8") == "Just text\n\n"
        assert "warning(s) reported in strict mode" in result.output

    def test_debug_diagnostics_do_not_fail_strict(self, tmp_path):
        """Unknown node types are DEBUG notices, not warnings."""
        doc = create_adf_doc([{"type": "futureNode", "content": [create_paragraph("x")]}])
        input_path = write_json(tmp_path / "page.json", doc)

        result = runner.invoke(app, [input_path, "--strict"])

        assert result.exit_code == ExitCode.SUCCESS


class TestConfigFile:
    """Test cases for configuration file handling."""

    def test_default_config_file_is_used(self, isolated_cwd):
        config_dir = isolated_cwd / ".adf-convert"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text(
            'format: markdown\nmarkdown:\n  bullet_marker: "-"\n', encoding="utf-8"
        )
        doc = create_adf_doc([create_bullet_list(create_list_item(create_paragraph("a")))])

        result = runner.invoke(app, [], input=json.dumps(doc))

        assert result.exit_code == ExitCode.SUCCESS
        assert result.stdout == "- a\n\n"

    def test_format_flag_overrides_config(self, isolated_cwd):
        config_path = isolated_cwd / "custom.yaml"
        config_path.write_text("format: html\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["--config", str(config_path), "--format", "text"],
            input=json.dumps(SIMPLE_DOC),
        )

        assert result.exit_code == ExitCode.SUCCESS
        assert result.stdout == "Hello *world*\n"

    def test_strict_from_config(self, isolated_cwd):
        config_path = isolated_cwd / "custom.yaml"
        config_path.write_text("strict: true\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["--config", str(config_path)],
            input=json.dumps(create_paragraph("x")),
        )

        assert result.exit_code == ExitCode.DIAGNOSTICS_REPORTED

    def test_invalid_config_exits_general_error(self, isolated_cwd):
        config_path = isolated_cwd / "custom.yaml"
        config_path.write_text("format: pdf\n", encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config_path)], input="{}")

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "Configuration error in field 'format'" in result.output
