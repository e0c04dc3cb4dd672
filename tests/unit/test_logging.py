"""Unit tests for logging setup."""

import json

import structlog

from surface_formatter import format_string
from surface_formatter.utils.logging import configure_logging, get_logger


class TestDefaultLogging:
    """Test logging when surface_formatter is used as a library."""

    def test_get_logger_configures_structlog(self):
        """Test an unconfigured structlog gets the library defaults."""
        structlog.reset_defaults()

        get_logger("surface_formatter.tests")

        assert structlog.is_configured()

    def test_formatting_keeps_stdout_clean(self, capsys):
        """Test formatting prints nothing to stdout."""
        structlog.reset_defaults()
        get_logger("surface_formatter.tests")

        format_string("<p>x</p>")

        assert capsys.readouterr().out == ""

    def test_only_warnings_reach_stderr(self, capsys):
        """Test debug events are filtered and warnings go to stderr."""
        structlog.reset_defaults()
        logger = get_logger("surface_formatter.tests")

        logger.debug("quiet_event")
        logger.warning("loud_event")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "loud_event" in captured.err
        assert "quiet_event" not in captured.err


class TestConfigureLogging:
    """Test CLI logging to a JSON log file."""

    def test_writes_json_lines(self, tmp_path, monkeypatch):
        """Test events are appended as JSON to the log directory."""
        monkeypatch.setenv("SURFACE_FORMATTER_LOG_DIR", str(tmp_path / "logs"))

        configure_logging()
        get_logger("surface_formatter.tests").info("file_reformatted", path="card.sface")

        lines = (tmp_path / "logs" / "surface-formatter.log").read_text().splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "file_reformatted"
        assert record["path"] == "card.sface"
        assert record["level"] == "info"

    def test_invalid_level_falls_back_to_info(self, tmp_path, monkeypatch):
        """Test an unknown SURFACE_FORMATTER_LOG_LEVEL still logs at INFO."""
        monkeypatch.setenv("SURFACE_FORMATTER_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("SURFACE_FORMATTER_LOG_LEVEL", "LOUD")

        configure_logging()
        logger = get_logger("surface_formatter.tests")
        logger.debug("hidden_event")
        logger.info("shown_event")

        text = (tmp_path / "logs" / "surface-formatter.log").read_text()
        assert "shown_event" in text
        assert "hidden_event" not in text
