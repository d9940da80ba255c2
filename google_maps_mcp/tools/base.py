"""
Helpers shared by the tool adapters.

``tool_adapter`` wraps an adapter coroutine so that it always returns a
``Result``: the return value becomes ``Result.ok`` and any exception becomes
``Result.failure`` via ``handle_error``. Nothing raised inside an adapter
escapes past it.
"""

import functools
import inspect
import logging
from decimal import Decimal
from typing import Any, Awaitable, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from google_maps_mcp.errors import (
    InvalidArgumentError,
    MalformedUpstreamPayloadError,
    MapsError,
    Result,
    UpstreamFaultError,
    handle_error,
)
from google_maps_mcp.logger import ToolCallLogger
from google_maps_mcp.models import TravelMode
from google_maps_mcp.validators import describe_validation_error, validate_coordinate_pair

M = TypeVar("M", bound=BaseModel)

# Injected dependencies are not logged as call parameters
_INJECTED = {"client", "config"}


def tool_adapter(
    logger: logging.Logger,
    tool_name: str,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Result[Any]]]]:
    """
    Decorator factory turning an adapter coroutine into a Result-returning one.

    Usage:
        @tool_adapter(logger, "get_geocode")
        async def geocode(client, address: str) -> Location:
            ...
    """
    def decorator(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Result[Any]:
            try:
                bound = signature.bind(*args, **kwargs)
                params = {k: v for k, v in bound.arguments.items() if k not in _INJECTED}
            except TypeError:
                params = {}

            with ToolCallLogger(logger, tool_name, **params) as log:
                try:
                    result = Result.ok(await func(*args, **kwargs))
                except ValidationError as e:
                    # Inputs are validated before the adapter runs, so a model
                    # that fails to build here was fed by the upstream payload
                    result = handle_error(
                        MalformedUpstreamPayloadError(
                            f"Upstream payload is missing required data: {describe_validation_error(e)}"
                        )
                    )
                except MapsError as e:
                    result = handle_error(e)
                except Exception as e:
                    logger.error(
                        f"Unexpected error in {tool_name}: {type(e).__name__}: {e}",
                        exc_info=True,
                    )
                    result = handle_error(e)
                log.set_result(result)
                return result

        return wrapper

    return decorator


def ensure_status(
    payload: dict[str, Any],
    service: str,
    allow_zero_results: bool = True,
) -> str:
    """
    Check the provider ``status`` field before the payload is read.

    Returns:
        The status string: "OK", or "ZERO_RESULTS" when allowed

    Raises:
        UpstreamFaultError: for any other status
        MalformedUpstreamPayloadError: when the payload carries no status
    """
    status = payload.get("status")
    if not status:
        raise MalformedUpstreamPayloadError(f"{service} response has no status")

    if status == "OK" or (allow_zero_results and status == "ZERO_RESULTS"):
        return status

    error_message = payload.get("error_message") or "Unknown error"
    raise UpstreamFaultError(f"{service} error: {status} - {error_message}", status=status)


def parse_travel_mode(mode: TravelMode | str | None) -> TravelMode:
    """Default to driving; reject anything outside the four known modes."""
    if mode is None:
        return TravelMode.DRIVING
    try:
        return TravelMode(mode)
    except ValueError:
        allowed = ", ".join(m.value for m in TravelMode)
        raise InvalidArgumentError(
            f"mode must be one of: {allowed} (got {mode!r})",
            field="mode",
        ) from None


def coerce_model(model_cls: type[M], value: M | dict[str, Any] | None, field_name: str) -> M:
    """Accept a model instance or a plain dict, raising InvalidArgumentError on bad input."""
    if isinstance(value, model_cls):
        return value
    if value is None:
        raise InvalidArgumentError(f"{field_name} is required", field=field_name)
    try:
        return model_cls.model_validate(value)
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Invalid {field_name}: {describe_validation_error(e)}",
            field=field_name,
        ) from None


def read_lat_lng(item: dict[str, Any], service: str) -> tuple[float, float]:
    """Extract ``geometry.location`` from a provider result."""
    location = (item.get("geometry") or {}).get("location") or {}
    lat = location.get("lat")
    lng = location.get("lng")
    if lat is None or lng is None:
        raise MalformedUpstreamPayloadError(f"{service} result has no geometry.location")
    return float(lat), float(lng)


def format_number(value: float | int) -> str:
    """Render 1.0 as "1", 35.6812 as "35.6812" and 1e-05 as "0.00001"."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    # Shortest round-trip digits, never scientific notation
    return format(Decimal(repr(number)), "f")


def format_lat_lng(lat: float, lng: float) -> str:
    return f"{format_number(lat)},{format_number(lng)}"


def checked_lat_lng(lat: Any, lng: Any, field_name: str | None = None) -> str:
    """Validate a pair and render it as "lat,lng"."""
    lat, lng = validate_coordinate_pair(lat, lng, field_name)
    return format_lat_lng(lat, lng)
