"""
Tests for logging utilities and configuration.
"""

import json
import logging
import time

import pytest

from cartoproj.core.config import settings
from cartoproj.core.logging_config import (
    ColoredFormatter,
    JSONFormatter,
    LogContext,
    get_log_level,
    setup_logging,
)
from cartoproj.utils.logging import PerformanceTimer, log_performance


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_log_level(self):
        """Test log level name conversion."""
        assert get_log_level("DEBUG") == logging.DEBUG
        assert get_log_level("INFO") == logging.INFO
        assert get_log_level("WARNING") == logging.WARNING
        assert get_log_level("ERROR") == logging.ERROR
        assert get_log_level("CRITICAL") == logging.CRITICAL
        assert get_log_level("invalid") == logging.INFO  # Default

    def test_get_log_level_case_insensitive(self):
        """Test log level is case insensitive."""
        assert get_log_level("debug") == logging.DEBUG
        assert get_log_level("DeBuG") == logging.DEBUG

    def test_setup_logging_console_only(self):
        """Test logging setup with console handler only."""
        setup_logging(log_level="DEBUG", enable_console=True)

        logger = logging.getLogger()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) >= 1
        assert logging.getLogger("pyproj").level == logging.WARNING

    def test_setup_logging_json_file(self, tmp_path):
        """Test logging setup with a JSON log file."""
        log_file = tmp_path / "logs" / "cartoproj.log"
        setup_logging(log_level="INFO", log_file=log_file, json_logs=True, enable_console=False)

        logging.getLogger("cartoproj.test").warning("Point projects into infinity")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        records = [json.loads(line) for line in lines]
        assert records[-1]["message"] == "Point projects into infinity"
        assert records[-1]["level"] == "WARNING"

    def test_setup_logging_from_settings(self, tmp_path, monkeypatch):
        """Test that the file handler options default to the settings."""
        log_file = tmp_path / "engine.log"
        monkeypatch.setattr(settings, "log_level", "WARNING")
        monkeypatch.setattr(settings, "log_file", log_file)
        monkeypatch.setattr(settings, "json_logs", True)
        setup_logging(enable_console=False)

        assert logging.getLogger().level == logging.WARNING
        logging.getLogger("cartoproj.test").error("Illegal UTM zone number 61")
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert record["message"] == "Illegal UTM zone number 61"

    def test_log_context(self):
        """Test LogContext context manager."""
        old_factory = logging.getLogRecordFactory()

        with LogContext(layer="basins", projection="UTM"):
            factory = logging.getLogRecordFactory()
            record = factory(
                name="test",
                level=logging.INFO,
                pathname="",
                lineno=0,
                msg="test",
                args=(),
                exc_info=None,
                func=None,
                sinfo=None,
            )
            assert record.layer == "basins"
            assert record.projection == "UTM"

        assert logging.getLogRecordFactory() == old_factory

    def test_log_context_restored_on_error(self):
        """Test that the record factory is restored when the block raises."""
        old_factory = logging.getLogRecordFactory()
        with pytest.raises(ValueError):
            with LogContext(layer="basins"):
                raise ValueError("boom")
        assert logging.getLogRecordFactory() == old_factory


class TestFormatters:
    """Tests for log formatters."""

    def _record(self, msg="Test message"):
        return logging.LogRecord(
            name="test.module",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg=msg,
            args=(),
            exc_info=None,
        )

    def test_json_formatter_basic(self):
        """Test JSON formatter with basic record."""
        data = json.loads(JSONFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.module"
        assert data["message"] == "Test message"
        assert data["line"] == 42

    def test_json_formatter_with_extra_fields(self):
        """Test JSON formatter with extra fields."""
        record = self._record()
        record.projection = "UTM"
        record.duration_ms = 45.67

        data = json.loads(JSONFormatter().format(record))

        assert data["projection"] == "UTM"
        assert data["duration_ms"] == 45.67

    def test_colored_formatter(self):
        """Test that colors do not leak into the record."""
        record = self._record()
        formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "\033[32m" in formatted
        assert record.levelname == "INFO"


class TestPerformanceTimer:
    """Tests for PerformanceTimer."""

    def test_timer_logs(self, caplog):
        """Test that the timer logs the duration."""
        with caplog.at_level(logging.DEBUG, logger="cartoproj"):
            with PerformanceTimer("project layer") as timer:
                time.sleep(0.01)

        assert timer.duration_ms is not None
        assert timer.duration_ms >= 10
        assert "project layer completed in" in caplog.text

    def test_timer_threshold(self, caplog):
        """Test that fast operations under the threshold are not logged."""
        with caplog.at_level(logging.DEBUG, logger="cartoproj"):
            with PerformanceTimer("fast", threshold_ms=10000):
                pass

        assert "fast completed" not in caplog.text

    def test_log_performance_decorator(self, caplog):
        """Test the timing decorator."""

        @log_performance(log_level=logging.INFO)
        def reproject():
            return 42

        with caplog.at_level(logging.INFO, logger="cartoproj"):
            assert reproject() == 42

        assert "reproject completed in" in caplog.text

    @pytest.mark.unit
    def test_timer_propagates_errors(self):
        """Test that exceptions pass through the timer."""
        with pytest.raises(ValueError):
            with PerformanceTimer("failing"):
                raise ValueError("boom")
