"""
Utility Tests for calmap.

Tests cover:
- Fixed-decimal formatting and half-up rounding
- Log formatters and logging setup
- Execution time decorator
"""

import json
import logging

import pytest

from calmap.utils.helpers import format_fixed, round_half_up
from calmap.utils.logging_config import (
    ColoredFormatter,
    JSONFormatter,
    get_log_level,
    log_execution_time,
    setup_logging,
)


def _record(message: str = "hello %s", args=("world",)) -> logging.LogRecord:
    return logging.LogRecord(
        "calmap.test", logging.INFO, __file__, 42, message, args, None, func="do_work"
    )


# =============================================================================
# Number formatting
# =============================================================================

class TestFormatFixed:
    """Test fixed-decimal formatting."""

    @pytest.mark.parametrize(
        "value, decimals, expected",
        [
            (5, 2, "5.00"),
            (20.0, 1, "20.0"),
            (0.125, 2, "0.13"),
            (2.5, 0, "3"),
            (-2.5, 0, "-3"),
            (1.005, 2, "1.00"),
            (-0.001, 2, "-0.00"),
            (1234567.891, 1, "1234567.9"),
        ],
    )
    def test_formatting(self, value, decimals, expected):
        """Test ties round away from zero on the exact binary value."""
        assert format_fixed(value, decimals) == expected

    def test_negative_decimals_rejected(self):
        """Test negative decimal counts raise ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            format_fixed(1.0, -1)

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rejected(self, value):
        """Test non-finite values raise ValueError."""
        with pytest.raises(ValueError, match="non-finite"):
            format_fixed(value, 2)


class TestRoundHalfUp:
    """Test half-up rounding."""

    @pytest.mark.parametrize(
        "value, expected",
        [(127.5, 128), (127.49, 127), (0.5, 1), (0.49999999999999994, 0), (255.0, 255)],
    )
    def test_rounding(self, value, expected):
        """Test rounding to the nearest integer."""
        assert round_half_up(value) == expected


# =============================================================================
# Logging
# =============================================================================

class TestFormatters:
    """Test log formatters."""

    def test_json_formatter(self):
        """Test records are rendered as JSON objects."""
        data = json.loads(JSONFormatter().format(_record()))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "calmap.test"
        assert data["function"] == "do_work"
        assert data["line"] == 42
        assert "timestamp" in data

    def test_json_formatter_extra_fields(self):
        """Test extra fields are merged into the output."""
        record = _record()
        record.extra_fields = {"rows": 3}
        assert json.loads(JSONFormatter().format(record))["rows"] == 3

    def test_colored_formatter_leaves_record_intact(self):
        """Test coloring does not leak into the shared record."""
        record = _record()
        output = ColoredFormatter("%(levelname)s %(message)s").format(record)
        assert output.startswith("\033[32mINFO\033[0m")
        assert output.endswith("hello world")
        assert record.levelname == "INFO"

    @pytest.mark.parametrize(
        "name, level",
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("bogus", logging.INFO)],
    )
    def test_get_log_level(self, name, level):
        """Test level names map to logging constants."""
        assert get_log_level(name) == level


class TestSetupLogging:
    """Test logging setup."""

    @pytest.fixture(autouse=True)
    def _clear_env(self, monkeypatch):
        for name in ("LOG_LEVEL", "LOG_FILE", "LOG_FORMAT", "LOG_ROTATION",
                     "LOG_MAX_SIZE_MB", "LOG_BACKUP_COUNT"):
            monkeypatch.delenv(name, raising=False)

    def test_console_only(self, restore_root_logger):
        """Test a single console handler at the requested level."""
        root = setup_logging(log_level="WARNING")
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_json_file_logging(self, tmp_path, restore_root_logger):
        """Test JSON lines are written to a rotating log file."""
        log_file = tmp_path / "logs" / "calmap.log"
        root = setup_logging(log_level="DEBUG", log_file=str(log_file), log_format="json")
        try:
            assert len(root.handlers) == 2
            logging.getLogger("calmap.test").info("grid loaded")
            for handler in root.handlers:
                handler.flush()
            lines = log_file.read_text(encoding="utf-8").splitlines()
            assert json.loads(lines[-1])["message"] == "grid loaded"
        finally:
            for handler in root.handlers:
                handler.close()


class TestLogExecutionTime:
    """Test the execution time decorator."""

    def test_result_and_log(self, caplog):
        """Test the wrapped result is returned and timing is logged."""
        logger = logging.getLogger("calmap.test.timing")

        @log_execution_time(logger)
        def double(x):
            return x * 2

        with caplog.at_level(logging.DEBUG, logger="calmap.test.timing"):
            assert double(21) == 42

        assert double.__name__ == "double"
        assert any("double executed in" in message for message in caplog.messages)
