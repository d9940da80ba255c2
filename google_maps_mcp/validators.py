"""
Input validation utilities for the Google Maps MCP Server.

Provides validation functions for common input types including:
- Coordinate validation (latitude, longitude)
- Required string validation
- Numeric range validation (radius, zoom, image size)

All validators return a ValidationResult. Adapters call ``unwrap()`` on it,
which returns the parsed value or raises InvalidArgumentError.

Presence checks are explicit ``is None`` tests: a latitude of 0 or a
longitude of 0 is a value, not a missing field.
"""

import math
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from google_maps_mcp.errors import ErrorCode, InvalidArgumentError


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    error: str | None = None
    code: str | None = None
    value: Any = None  # Parsed/normalized value
    field: str | None = None

    def unwrap(self) -> Any:
        """Return the parsed value or raise InvalidArgumentError."""
        if not self.valid:
            raise InvalidArgumentError(self.error or "Invalid argument", field=self.field)
        return self.value


def _invalid(field_name: str, error: str) -> ValidationResult:
    return ValidationResult(
        valid=False,
        error=error,
        code=ErrorCode.INVALID_ARGUMENT.value,
        field=field_name,
    )


def _as_number(value: Any) -> float | None:
    """Convert to float; bools and non-finite values are not numbers here."""
    if isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(num):
        return None
    return num


# ============================================================
# Coordinate Validation
# ============================================================

def validate_latitude(value: float | str | None, field_name: str = "latitude") -> ValidationResult:
    """
    Validate latitude value (-90 to 90, inclusive).

    Args:
        value: Latitude value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with float value if valid
    """
    if value is None:
        return _invalid(field_name, f"{field_name} is required")

    lat = _as_number(value)
    if lat is None:
        return _invalid(field_name, f"{field_name} must be a number (got {value!r})")

    if not -90 <= lat <= 90:
        return _invalid(field_name, f"{field_name} must be between -90 and 90 (got {lat})")

    return ValidationResult(valid=True, value=lat, field=field_name)


def validate_longitude(value: float | str | None, field_name: str = "longitude") -> ValidationResult:
    """
    Validate longitude value (-180 to 180, inclusive).

    Args:
        value: Longitude value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with float value if valid
    """
    if value is None:
        return _invalid(field_name, f"{field_name} is required")

    lng = _as_number(value)
    if lng is None:
        return _invalid(field_name, f"{field_name} must be a number (got {value!r})")

    if not -180 <= lng <= 180:
        return _invalid(field_name, f"{field_name} must be between -180 and 180 (got {lng})")

    return ValidationResult(valid=True, value=lng, field=field_name)


def validate_coordinates(
    lat: float | str | None,
    lng: float | str | None,
    field_name: str | None = None,
) -> ValidationResult:
    """
    Validate a coordinate pair (latitude, longitude).

    Args:
        lat: Latitude value
        lng: Longitude value
        field_name: Prefix for error messages, e.g. "origin" gives "origin.lat"

    Returns:
        ValidationResult with tuple (lat, lng) if valid
    """
    lat_name = f"{field_name}.lat" if field_name else "latitude"
    lng_name = f"{field_name}.lng" if field_name else "longitude"

    lat_result = validate_latitude(lat, lat_name)
    if not lat_result.valid:
        return lat_result

    lng_result = validate_longitude(lng, lng_name)
    if not lng_result.valid:
        return lng_result

    return ValidationResult(
        valid=True,
        value=(lat_result.value, lng_result.value),
        field=field_name,
    )


def validate_coordinate_pair(
    lat: float | str | None,
    lng: float | str | None,
    field_name: str | None = None,
) -> tuple[float, float]:
    """Range-check a coordinate pair, raising InvalidArgumentError on failure."""
    return validate_coordinates(lat, lng, field_name).unwrap()


# ============================================================
# String Validation
# ============================================================

def validate_non_empty_string(
    value: str | None,
    field_name: str,
    max_length: int | None = None,
) -> ValidationResult:
    """
    Validate a non-empty string with optional constraints.

    Args:
        value: String to validate
        field_name: Name of the field for error messages
        max_length: Maximum allowed length

    Returns:
        ValidationResult with the stripped string if valid
    """
    if value is None:
        return _invalid(field_name, f"{field_name} is required and cannot be empty")

    if not isinstance(value, str):
        return _invalid(field_name, f"{field_name} must be a string")

    value = value.strip()
    if not value:
        return _invalid(field_name, f"{field_name} is required and cannot be empty")

    if max_length and len(value) > max_length:
        return _invalid(
            field_name,
            f"{field_name} must be at most {max_length} characters (got {len(value)})",
        )

    return ValidationResult(valid=True, value=value, field=field_name)


def validate_string_list(
    values: list[str] | None,
    field_name: str,
) -> ValidationResult:
    """
    Validate a non-empty list of non-empty strings.

    Returns:
        ValidationResult with the list of stripped strings if valid
    """
    if values is None or not isinstance(values, (list, tuple)) or len(values) == 0:
        return _invalid(field_name, f"{field_name} must contain at least one entry")

    cleaned = []
    for i, item in enumerate(values):
        item_result = validate_non_empty_string(item, f"{field_name}[{i}]")
        if not item_result.valid:
            return item_result
        cleaned.append(item_result.value)

    return ValidationResult(valid=True, value=cleaned, field=field_name)


# ============================================================
# Numeric Range Validation
# ============================================================

def validate_range(
    value: float | int | str | None,
    field_name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> ValidationResult:
    """
    Validate a number is within a range.

    Args:
        value: Number to validate
        field_name: Name of the field for error messages
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive)

    Returns:
        ValidationResult with float value if valid
    """
    if value is None:
        return _invalid(field_name, f"{field_name} is required")

    num = _as_number(value)
    if num is None:
        return _invalid(field_name, f"{field_name} must be a number")

    if min_value is not None and num < min_value:
        return _invalid(field_name, f"{field_name} must be at least {min_value} (got {num})")

    if max_value is not None and num > max_value:
        return _invalid(field_name, f"{field_name} must be at most {max_value} (got {num})")

    return ValidationResult(valid=True, value=num, field=field_name)


def validate_positive_int(
    value: int | str | None,
    field_name: str,
    max_value: int | None = None,
) -> ValidationResult:
    """
    Validate a strictly positive integer (e.g. an image dimension).

    Returns:
        ValidationResult with int value if valid
    """
    if value is None:
        return _invalid(field_name, f"{field_name} is required")

    num = _as_number(value)
    if num is None or not num.is_integer():
        return _invalid(field_name, f"{field_name} must be an integer")

    number = int(num)
    if number <= 0:
        return _invalid(field_name, f"{field_name} must be positive (got {number})")

    if max_value is not None and number > max_value:
        return _invalid(field_name, f"{field_name} must be at most {max_value} (got {number})")

    return ValidationResult(valid=True, value=number, field=field_name)


def validate_zoom(
    value: int | str | None,
    min_zoom: int = 0,
    max_zoom: int = 21,
    field_name: str = "zoom",
) -> ValidationResult:
    """
    Validate a map zoom level.

    Args:
        value: Zoom level to validate
        min_zoom: Minimum allowed zoom (default: 0)
        max_zoom: Maximum allowed zoom (default: 21)
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with int value if valid
    """
    if value is None:
        return _invalid(field_name, f"{field_name} is required")

    num = _as_number(value)
    if num is None or not num.is_integer():
        return _invalid(field_name, f"{field_name} must be an integer")

    zoom = int(num)
    if not min_zoom <= zoom <= max_zoom:
        return _invalid(
            field_name,
            f"{field_name} must be between {min_zoom} and {max_zoom} (got {zoom})",
        )

    return ValidationResult(valid=True, value=zoom, field=field_name)


# ============================================================
# Schema Errors
# ============================================================

def describe_validation_error(exc: ValidationError) -> str:
    """
    Flatten a pydantic ValidationError into "field: problem; ..." text.

    Field paths use the names the caller sent, e.g. "origin.lat" or
    "center.value".
    """
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(problems)
