"""
Tests for the logging module.
"""

import logging
import os
from unittest.mock import patch

import pytest

from google_maps_mcp.errors import Result
from google_maps_mcp.logger import (
    MCPFormatter,
    ToolCallLogger,
    get_log_level,
    get_logger,
)


class TestGetLogLevel:
    """Tests for get_log_level function."""

    def test_default_log_level(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_log_level() == logging.INFO

    @pytest.mark.parametrize(
        "name, level",
        [
            ("DEBUG", logging.DEBUG),
            ("warn", logging.WARNING),
            ("Error", logging.ERROR),
            ("nonsense", logging.INFO),
        ],
    )
    def test_level_from_environment(self, name, level):
        with patch.dict(os.environ, {"LOG_LEVEL": name}):
            assert get_log_level() == level


class TestGetLogger:
    """Tests for get_logger function."""

    def test_logs_to_stderr_with_formatter(self):
        """stdout is reserved for the stdio transport."""
        with patch("google_maps_mcp.logger.sys") as mock_sys:
            logger = get_logger("stderr_test_module")
        assert logger.handlers
        for handler in logger.handlers:
            assert isinstance(handler.formatter, MCPFormatter)
            assert handler.stream is mock_sys.stderr

    def test_does_not_propagate(self):
        assert get_logger("propagate_test").propagate is False

    def test_cached_logger(self):
        assert get_logger("cached_test") is get_logger("cached_test")


class TestMCPFormatter:
    """Tests for MCPFormatter class."""

    def test_extra_fields(self):
        formatter = MCPFormatter()
        record = logging.LogRecord(
            name="google_maps_mcp.tools.places",
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg="Tool 'search_nearby' completed",
            args=(),
            exc_info=None,
        )
        record.tool = "search_nearby"
        record.elapsed_ms = "12.50"

        formatted = formatter.format(record)

        assert "INFO" in formatted
        assert "Tool 'search_nearby' completed" in formatted
        assert "tool=search_nearby" in formatted
        assert "elapsed_ms=12.50" in formatted


class TestToolCallLogger:
    """Tests for ToolCallLogger context manager."""

    def test_success_logged_as_info(self):
        logger = get_logger("tool_call_success_test")
        with patch.object(logger, "info") as info, patch.object(logger, "warning") as warning:
            with ToolCallLogger(logger, "get_geocode", address="Tokyo") as log:
                log.set_result(Result.ok({"latitude": 1}))

        assert info.call_count == 2
        assert info.call_args.kwargs["extra"]["result"] == "ok, dict with 1 keys"
        warning.assert_not_called()

    def test_failure_logged_as_warning(self):
        logger = get_logger("tool_call_failure_test")
        with patch.object(logger, "warning") as warning:
            with ToolCallLogger(logger, "get_geocode") as log:
                log.set_result(Result.failure("UPSTREAM_EMPTY: No results"))

        warning.assert_called_once()
        assert warning.call_args.kwargs["extra"]["result"] == "error: UPSTREAM_EMPTY: No results"

    def test_string_results_are_not_echoed(self):
        """Static map URLs carry the API key."""
        log = ToolCallLogger(get_logger("summary_test"), "generate_static_map")
        summary = log._summarize_result(Result.ok("https://maps.example/?key=secret"))
        assert "secret" not in summary
        assert summary.startswith("ok, str(")

    def test_list_summary(self):
        log = ToolCallLogger(get_logger("summary_test"), "search_nearby")
        assert log._summarize_result([1, 2, 3]) == "list with 3 items"
        assert log._summarize_result(None) == "None"

    def test_exception_reraised(self):
        logger = get_logger("exception_test")
        with pytest.raises(ValueError):
            with ToolCallLogger(logger, "failing_tool"):
                raise ValueError("Test error")
