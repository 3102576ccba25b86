"""Tests for JSON logger module."""

import json
import logging
import sys

from src.shared.logger import JSONFormatter, get_logger


def _record(msg: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=None,
        exc_info=None,
    )


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_basic_message(self) -> None:
        """Test basic log record formatting as JSON."""
        result = json.loads(JSONFormatter().format(_record()))

        assert result["level"] == "INFO"
        assert result["message"] == "Test message"
        assert result["logger"] == "test"
        assert "timestamp" in result

    def test_format_merges_extra_fields(self) -> None:
        """Fields passed through `extra=` appear at the top level."""
        record = _record("Fetching AAPL")
        record.symbol = "AAPL"  # type: ignore[attr-defined]
        record.interval = "1d"  # type: ignore[attr-defined]

        result = json.loads(JSONFormatter().format(record))

        assert result["symbol"] == "AAPL"
        assert result["interval"] == "1d"
        assert "pathname" not in result

    def test_format_non_serializable_extra(self) -> None:
        """Values json cannot encode are stringified."""
        record = _record()
        record.periods = {9, 20}  # type: ignore[attr-defined]

        result = json.loads(JSONFormatter().format(record))

        assert "9" in result["periods"]

    def test_format_exception(self) -> None:
        """Exception info is rendered into the payload."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        result = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in result["exception"]


class TestGetLogger:
    """Tests for get_logger factory."""

    def test_get_logger_skips_handler_when_already_exists(self) -> None:
        """Test get_logger does not add duplicate handlers."""
        logger_name = "test.duplicate_handler_check"
        logging.getLogger(logger_name).handlers.clear()

        first = get_logger(logger_name)
        handler_count = len(first.handlers)
        second = get_logger(logger_name)

        assert len(second.handlers) == handler_count == 1

    def test_get_logger_accepts_level_name(self) -> None:
        """Level may be given by name."""
        logger = get_logger("test.level_name", level="DEBUG")
        assert logger.level == logging.DEBUG
