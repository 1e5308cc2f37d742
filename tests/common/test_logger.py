# tests/common/test_logger.py
"""
Unit тесты для модуля логирования (src/common/logger.py).
"""

import json
import logging
import sys
from unittest.mock import MagicMock, patch

import pytest

from src.common.logger import (
    ColoredFormatter,
    JsonFormatter,
    SizeRotatingFileHandler,
    _get_caller_info,
    _loggers,
    _read_logging_settings,
    get_logger,
    log_debug,
    log_error,
    log_info,
    log_warning,
)
from src.common.constants import TypeMsg


def _record(level: int = logging.INFO, msg: str = "Test message", exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


class TestJsonFormatter:
    """Тесты для JsonFormatter."""

    def test_format_basic_record(self) -> None:
        result = json.loads(JsonFormatter().format(_record()))

        assert result["level"] == "INFO"
        assert result["message"] == "Test message"
        assert result["module"] == "test_module"
        assert result["function"] == "test_function"
        assert result["line"] == 10
        assert result["timestamp"].endswith("Z")

    def test_format_with_extra_data(self) -> None:
        record = _record(logging.WARNING)
        record.extra_data = {"requester_id": "client-a", "keyword": "bomb"}

        result = json.loads(JsonFormatter().format(record))

        assert result["extra"] == {"requester_id": "client-a", "keyword": "bomb"}

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("Test exception")
        except ValueError:
            exc_info = sys.exc_info()

        result = json.loads(JsonFormatter().format(_record(logging.ERROR, exc_info=exc_info)))

        assert "ValueError" in result["exception"]
        assert "Test exception" in result["exception"]


class TestColoredFormatter:
    """Тесты для ColoredFormatter."""

    def test_format_basic_record(self) -> None:
        result = ColoredFormatter().format(_record())

        assert "INFO" in result
        assert "Test message" in result
        assert "\033[" in result

    def test_format_with_caller_info(self) -> None:
        record = _record(logging.DEBUG)
        record.extra_data = {
            "caller_function": "create",
            "caller_module": "service",
            "caller_file": "service.py",
            "caller_line": 42,
        }

        result = ColoredFormatter().format(record)

        assert "service.create()" in result
        assert "service.py:42" in result


class TestReadLoggingSettings:
    """Тесты для _read_logging_settings."""

    def test_returns_defaults_for_mocked_settings(self) -> None:
        with patch("src.config.settings", MagicMock()):
            conf = _read_logging_settings()

        assert conf["level"] == "DEBUG"
        assert conf["format"] == "colored"
        assert conf["to_file"] is False
        assert conf["max_bytes"] == 10485760


class TestGetLogger:
    """Тесты для get_logger."""

    def test_logger_is_cached(self) -> None:
        first = get_logger("test_cached_logger")
        second = get_logger("test_cached_logger")

        assert first is second
        assert "test_cached_logger" in _loggers
        assert first.propagate is False
        assert len(first.handlers) == 1


class TestSizeRotatingFileHandler:
    """Тесты для SizeRotatingFileHandler."""

    def test_rollover_archives_file(self, tmp_path) -> None:
        handler = SizeRotatingFileHandler(log_dir=str(tmp_path), max_bytes=10, logger_name="app")
        handler.setFormatter(logging.Formatter("%(message)s"))
        try:
            handler.emit(_record(msg="first message that is long"))
            handler.emit(_record(msg="second message that is long"))
        finally:
            handler.close()

        archives = [p for p in tmp_path.iterdir() if p.name.startswith("app_")]
        assert (tmp_path / "app.log").exists()
        assert archives


class TestCallerInfo:
    """Тесты для _get_caller_info."""

    def test_reports_caller_two_frames_up(self) -> None:
        def log_wrapper():
            return _get_caller_info()

        info = log_wrapper()

        assert info["caller_function"] == "test_reports_caller_two_frames_up"
        assert info["caller_file"] == "test_logger.py"


class TestAsyncLogFunctions:
    """Тесты асинхронных функций логирования."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("type_msg,method", [
        (TypeMsg.DEBUG, "debug"),
        (TypeMsg.INFO, "info"),
        (TypeMsg.WARNING, "warning"),
        (TypeMsg.ERROR, "error"),
        (TypeMsg.CRITICAL, "critical"),
    ])
    async def test_log_info_dispatches_by_type(self, type_msg: TypeMsg, method: str) -> None:
        mock_logger = MagicMock()
        with patch("src.common.logger.get_logger", return_value=mock_logger):
            await log_info("hello", type_msg=type_msg, extra={"shipment_id": "s-1"})

        getattr(mock_logger, method).assert_called_once()
        kwargs = getattr(mock_logger, method).call_args.kwargs
        assert kwargs["extra"]["extra_data"]["shipment_id"] == "s-1"
        assert kwargs["extra"]["extra_data"]["caller_function"] == "test_log_info_dispatches_by_type"

    @pytest.mark.asyncio
    async def test_log_debug_and_warning(self) -> None:
        mock_logger = MagicMock()
        with patch("src.common.logger.get_logger", return_value=mock_logger):
            await log_debug("dbg")
            await log_warning("warn")

        mock_logger.debug.assert_called_once()
        mock_logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_log_error_passes_exc_info(self) -> None:
        mock_logger = MagicMock()
        with patch("src.common.logger.get_logger", return_value=mock_logger):
            await log_error("boom", exc_info=True)

        assert mock_logger.error.call_args.kwargs["exc_info"] is True
