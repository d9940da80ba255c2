"""
Location normalization.

Turns a ``LocationInput`` into a ``Location``: "lat,lng" strings are parsed
locally, free text is geocoded to its best match.
"""

from typing import Any

from google_maps_mcp.errors import InvalidArgumentError
from google_maps_mcp.maps_client import MapsBackend
from google_maps_mcp.models import Location, LocationInput
from google_maps_mcp.tools.base import coerce_model
from google_maps_mcp.tools.geocoding import resolve_address
from google_maps_mcp.validators import validate_coordinate_pair


def parse_coordinates(value: str, field_name: str = "center") -> Location:
    """
    Parse a "lat,lng" string into a Location without an address.

    Raises:
        InvalidArgumentError: not exactly two numbers, or out of range
    """
    parts = [part.strip() for part in str(value).split(",")]
    if len(parts) != 2:
        raise InvalidArgumentError(
            f"{field_name} must be in 'lat,lng' format (got {value!r})",
            field=field_name,
        )

    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError:
        raise InvalidArgumentError(
            f"{field_name} must contain two numbers in 'lat,lng' format (got {value!r})",
            field=field_name,
        ) from None

    lat, lng = validate_coordinate_pair(lat, lng, field_name)
    return Location(latitude=lat, longitude=lng)


async def parse_location_input(
    client: MapsBackend,
    location_input: LocationInput | dict[str, Any],
    field_name: str = "center",
) -> Location:
    """
    Normalize a LocationInput.

    Coordinates never reach the provider; free text costs one geocode call.
    """
    location_input = coerce_model(LocationInput, location_input, field_name)

    if location_input.is_coordinates:
        return parse_coordinates(location_input.value, field_name)

    return await resolve_address(client, location_input.value)
