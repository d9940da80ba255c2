"""
Logging configuration for the Google Maps MCP Server.

Provides structured logging with configurable log levels
and formatted output for debugging and monitoring.

Logs go to stderr: stdout belongs to the stdio transport.

Usage:
    from google_maps_mcp.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Tool called", extra={"tool": "get_geocode"})
"""

import logging
import os
import sys
import time
from functools import lru_cache
from typing import Any

from google_maps_mcp.errors import Result


class MCPFormatter(logging.Formatter):
    """
    Custom formatter for MCP server logs.

    Formats logs with timestamp, level, logger name, and message.
    Includes extra fields if provided.
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        base_message = super().format(record)

        # Extra fields are whatever is not a standard LogRecord attribute
        standard_attrs = {
            'name', 'msg', 'args', 'created', 'filename', 'funcName',
            'levelname', 'levelno', 'lineno', 'module', 'msecs',
            'pathname', 'process', 'processName', 'relativeCreated',
            'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
            'taskName', 'message', 'asctime',
        }

        extra_fields = {
            k: v for k, v in record.__dict__.items()
            if k not in standard_attrs and not k.startswith('_')
        }

        if extra_fields:
            extra_str = " | " + " ".join(f"{k}={v}" for k, v in extra_fields.items())
            return base_message + extra_str

        return base_message


class ToolCallLogger:
    """
    Context manager for logging adapter calls with timing and result tracking.

    Usage:
        async def get_geocode(client, address: str) -> Result:
            with ToolCallLogger(logger, "get_geocode", address=address) as log:
                result = await process(address)
                log.set_result(result)
                return result
    """

    def __init__(
        self,
        logger: logging.Logger,
        tool_name: str,
        **params: Any,
    ):
        self.logger = logger
        self.tool_name = tool_name
        self.params = params
        self.result: Any = None
        self._start_time: float = 0

    def __enter__(self) -> "ToolCallLogger":
        self._start_time = time.time()

        self.logger.info(
            f"Tool '{self.tool_name}' called",
            extra={"tool": self.tool_name, "params": str(self.params)},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        elapsed_ms = (time.time() - self._start_time) * 1000

        if exc_val is not None:
            self.logger.error(
                f"Tool '{self.tool_name}' failed: {exc_val}",
                extra={
                    "tool": self.tool_name,
                    "elapsed_ms": f"{elapsed_ms:.2f}",
                    "error": str(exc_val),
                },
                exc_info=True,
            )
            return False  # Re-raise exception

        result_summary = self._summarize_result(self.result)
        if isinstance(self.result, Result) and not self.result.success:
            self.logger.warning(
                f"Tool '{self.tool_name}' returned an error",
                extra={
                    "tool": self.tool_name,
                    "elapsed_ms": f"{elapsed_ms:.2f}",
                    "result": result_summary,
                },
            )
            return False

        self.logger.info(
            f"Tool '{self.tool_name}' completed",
            extra={
                "tool": self.tool_name,
                "elapsed_ms": f"{elapsed_ms:.2f}",
                "result": result_summary,
            },
        )
        return False

    def set_result(self, result: Any) -> None:
        """Set the result for logging."""
        self.result = result

    def _summarize_result(self, result: Any) -> str:
        """Create a brief summary of the result for logging.

        String payloads are never echoed: static map URLs embed the API key.
        """
        if result is None:
            return "None"

        if isinstance(result, Result):
            if not result.success:
                return f"error: {result.error}"
            return f"ok, {self._summarize_result(result.data)}"

        if isinstance(result, dict):
            return f"dict with {len(result)} keys"

        if isinstance(result, list):
            return f"list with {len(result)} items"

        if isinstance(result, str):
            return f"str({len(result)} chars)"

        return str(type(result).__name__)


def get_log_level() -> int:
    """
    Get log level from environment variable.

    Supports: DEBUG, INFO, WARNING, ERROR, CRITICAL
    Default: INFO
    """
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    return level_map.get(level_name, logging.INFO)


@lru_cache(maxsize=None)
def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Loggers are cached to avoid duplicate handlers.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured logging.Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(get_log_level())

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(get_log_level())
        handler.setFormatter(MCPFormatter())

        logger.addHandler(handler)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

    return logger
