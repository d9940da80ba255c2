"""
Custom exceptions, the result envelope and error conversion for the
Google Maps MCP Server.

This module provides:
- Custom exception classes for each failure kind
- The two-outcome ``Result`` envelope returned by every tool
- ``handle_error`` which turns any exception into ``Result.failure``

Usage:
    from google_maps_mcp.errors import (
        InvalidArgumentError,
        Result,
        handle_error,
    )

    try:
        location = await lookup(address)
        return Result.ok(location)
    except Exception as e:
        return handle_error(e)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Standardized error codes for tool failures."""

    # Local validation
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Upstream provider
    UPSTREAM_EMPTY = "UPSTREAM_EMPTY"
    UPSTREAM_FAULT = "UPSTREAM_FAULT"
    MALFORMED_UPSTREAM_PAYLOAD = "MALFORMED_UPSTREAM_PAYLOAD"
    TIMEOUT = "TIMEOUT"

    # Dispatch
    UNKNOWN_TOOL = "UNKNOWN_TOOL"

    # Generic errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class MapsError(Exception):
    """Base exception for Google Maps MCP Server errors.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        code: ErrorCode for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class InvalidArgumentError(MapsError):
    """Raised when input validation fails.

    Never reaches upstream. Examples:
        - Latitude out of range
        - Empty required string
        - Waypoint without an address
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_ARGUMENT,
            details=details,
        )
        self.field = field


class UpstreamEmptyError(MapsError):
    """Raised when the provider answered successfully but with no usable result."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, code=ErrorCode.UPSTREAM_EMPTY, details=details)


class UpstreamFaultError(MapsError):
    """Raised when the provider reports a failure or cannot be reached.

    Attributes:
        status: Provider status string (e.g. ``REQUEST_DENIED``), if any
        status_code: HTTP status code, if any
        is_timeout: Whether the request timed out
    """

    def __init__(
        self,
        message: str,
        status: str | None = None,
        status_code: int | None = None,
        is_timeout: bool = False,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if status:
            details["status"] = status
        if status_code:
            details["status_code"] = status_code
        code = ErrorCode.TIMEOUT if is_timeout else ErrorCode.UPSTREAM_FAULT
        super().__init__(message=message, code=code, details=details)
        self.status = status
        self.status_code = status_code
        self.is_timeout = is_timeout


class MalformedUpstreamPayloadError(MapsError):
    """Raised when a successful provider payload lacks required fields."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.MALFORMED_UPSTREAM_PAYLOAD,
            details=details,
        )


class UnknownToolError(MapsError):
    """Raised when a tool name has no registered handler."""

    def __init__(self, tool_name: str):
        super().__init__(
            message=f"Unknown tool: {tool_name}",
            code=ErrorCode.UNKNOWN_TOOL,
            details={"tool": tool_name},
        )
        self.tool_name = tool_name


@dataclass(frozen=True)
class Result(Generic[T]):
    """Two-outcome envelope: ``{success: true, data}`` or ``{success: false, error}``."""

    success: bool
    data: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("a successful Result cannot carry an error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("a failed Result must carry an error and no data")

    @classmethod
    def ok(cls, data: T) -> "Result[T]":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, message: str) -> "Result[T]":
        return cls(success=False, error=message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON-ready envelope."""
        if self.success:
            return {"success": True, "data": _to_jsonable(self.data)}
        return {"success": False, "error": self.error}


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, Enum):
        return value.value
    return value


def format_error(code: ErrorCode | str, message: str) -> str:
    """Prefix a message with its error code, e.g. ``INVALID_ARGUMENT: ...``."""
    code_value = code.value if isinstance(code, ErrorCode) else code
    return f"{code_value}: {message}"


def handle_error(e: Exception) -> Result[Any]:
    """Convert an exception to ``Result.failure``.

    This is the only place a native exception is turned into the
    client-visible envelope. Our own exceptions keep their message;
    anything else is reported as an unexpected error.

    Examples:
        try:
            payload = await client.geocode(address=address)
        except Exception as e:
            return handle_error(e)
    """
    if isinstance(e, MapsError):
        return Result.failure(format_error(e.code, e.message))

    return Result.failure(
        format_error(
            ErrorCode.UNKNOWN_ERROR,
            f"Unexpected error: {type(e).__name__}: {str(e)}",
        )
    )
