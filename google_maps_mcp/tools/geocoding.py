"""
Geocoding tools for the Google Maps MCP Server.

Uses the Google Geocoding API for geocoding and reverse geocoding.

Features:
- Forward geocoding (address/place name to coordinates), best match only
- Reverse geocoding (coordinates to address), echoing the input coordinates
- Input validation with clear error messages
- Language and region preference forwarded from configuration
"""

from google_maps_mcp.errors import UpstreamEmptyError
from google_maps_mcp.logger import get_logger
from google_maps_mcp.maps_client import MapsBackend
from google_maps_mcp.models import Location
from google_maps_mcp.tools.base import (
    ensure_status,
    format_lat_lng,
    read_lat_lng,
    tool_adapter,
)
from google_maps_mcp.validators import validate_coordinate_pair, validate_non_empty_string

logger = get_logger(__name__)

GEOCODING_SERVICE = "Google Geocoding API"


async def resolve_address(client: MapsBackend, address: str) -> Location:
    """
    Geocode free text to its best match, raising on failure.

    Shared by ``geocode`` and the location normalizer.

    Raises:
        InvalidArgumentError: empty address
        UpstreamEmptyError: the provider found nothing
        UpstreamFaultError: the provider reported an error
    """
    address = validate_non_empty_string(address, "address").unwrap()

    logger.debug(f"Geocoding address: '{address}'")

    payload = await client.geocode(
        address=address,
        language=client.config.default_language,
        region=client.config.default_region,
    )

    status = ensure_status(payload, GEOCODING_SERVICE)
    results = payload.get("results") or []
    if status == "ZERO_RESULTS" or not results:
        raise UpstreamEmptyError("No results found for the given address")

    best = results[0]
    lat, lng = read_lat_lng(best, GEOCODING_SERVICE)

    return Location(
        latitude=lat,
        longitude=lng,
        address=best.get("formatted_address"),
        place_id=best.get("place_id"),
    )


@tool_adapter(logger, "get_geocode")
async def geocode(client: MapsBackend, address: str) -> Location:
    """
    Convert an address or place name to coordinates.

    Args:
        client: Upstream backend
        address: Address or place name, e.g. "Sydney Opera House"

    Returns:
        Result wrapping the best matching Location
    """
    return await resolve_address(client, address)


@tool_adapter(logger, "get_reverse_geocode")
async def reverse_geocode(client: MapsBackend, latitude: float, longitude: float) -> Location:
    """
    Convert coordinates to an address.

    The returned Location carries the input coordinates, not the
    (snapped) coordinates of the matched address.

    Args:
        client: Upstream backend
        latitude: Latitude in decimal degrees (WGS84)
        longitude: Longitude in decimal degrees (WGS84)

    Returns:
        Result wrapping a Location with address and place id
    """
    lat, lng = validate_coordinate_pair(latitude, longitude)

    payload = await client.reverse_geocode(
        latlng=format_lat_lng(lat, lng),
        language=client.config.default_language,
    )

    status = ensure_status(payload, GEOCODING_SERVICE)
    results = payload.get("results") or []
    if status == "ZERO_RESULTS" or not results:
        raise UpstreamEmptyError("No results found for the given coordinates")

    best = results[0]
    return Location(
        latitude=lat,
        longitude=lng,
        address=best.get("formatted_address"),
        place_id=best.get("place_id"),
    )
