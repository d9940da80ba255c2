"""
Elevation tool for the Google Maps MCP Server.
"""

from typing import Any

from google_maps_mcp.errors import InvalidArgumentError
from google_maps_mcp.logger import get_logger
from google_maps_mcp.maps_client import MapsBackend
from google_maps_mcp.models import Coordinates, ElevationResult, Location
from google_maps_mcp.tools.base import (
    coerce_model,
    ensure_status,
    format_lat_lng,
    tool_adapter,
)
from google_maps_mcp.validators import validate_latitude, validate_longitude

logger = get_logger(__name__)

ELEVATION_SERVICE = "Google Elevation API"


def _checked_locations(locations: list[Coordinates | dict[str, Any]]) -> list[tuple[float, float]]:
    """Validate every pair up front; one bad pair fails the whole batch."""
    if not locations:
        raise InvalidArgumentError("locations must contain at least one entry", field="locations")

    checked = []
    for i, raw in enumerate(locations):
        point = coerce_model(Coordinates, raw, f"locations[{i}]")
        lat = validate_latitude(point.latitude, f"locations[{i}].latitude").unwrap()
        lng = validate_longitude(point.longitude, f"locations[{i}].longitude").unwrap()
        checked.append((lat, lng))
    return checked


@tool_adapter(logger, "get_elevation")
async def get_elevation(
    client: MapsBackend,
    locations: list[Coordinates | dict[str, Any]],
) -> list[ElevationResult]:
    """
    Get elevation for a batch of locations.

    Args:
        client: Upstream backend
        locations: Points as {latitude, longitude}

    Returns:
        Result wrapping one ElevationResult per returned sample
    """
    points = _checked_locations(locations)

    payload = await client.elevation(
        locations="|".join(format_lat_lng(lat, lng) for lat, lng in points),
    )
    ensure_status(payload, ELEVATION_SERVICE)

    results = []
    for item in payload.get("results") or []:
        location = item.get("location") or {}
        results.append(
            ElevationResult(
                elevation=item.get("elevation"),
                location=Location(latitude=location.get("lat"), longitude=location.get("lng")),
                resolution=item.get("resolution"),
            )
        )
    return results
