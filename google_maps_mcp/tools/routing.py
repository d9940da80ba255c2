"""
Routing tools for the Google Maps MCP Server.

Distance/duration values keep the provider's dual representation: a
display string plus metres or seconds.
"""

from typing import Any

from google_maps_mcp.errors import UpstreamEmptyError
from google_maps_mcp.logger import get_logger
from google_maps_mcp.maps_client import MapsBackend
from google_maps_mcp.models import (
    DirectionsLeg,
    DirectionsResult,
    DirectionsRoute,
    DirectionsStep,
    DistanceMatrixElement,
    DistanceMatrixResult,
    DistanceMatrixRow,
    TextValue,
    TravelMode,
)
from google_maps_mcp.tools.base import ensure_status, parse_travel_mode, tool_adapter
from google_maps_mcp.validators import validate_non_empty_string, validate_string_list

logger = get_logger(__name__)

DISTANCE_MATRIX_SERVICE = "Google Distance Matrix API"
DIRECTIONS_SERVICE = "Google Directions API"


def _text_value(raw: dict[str, Any] | None) -> TextValue | None:
    if raw is None:
        return None
    return TextValue(text=raw.get("text"), value=raw.get("value"))


@tool_adapter(logger, "get_distance_matrix")
async def distance_matrix(
    client: MapsBackend,
    origins: list[str],
    destinations: list[str],
    mode: TravelMode | str | None = TravelMode.DRIVING,
) -> DistanceMatrixResult:
    """
    Calculate travel distance and time for every origin/destination pair.

    An empty matrix is returned as-is; cells the provider could not route
    keep their own status (e.g. "ZERO_RESULTS").

    Args:
        client: Upstream backend
        origins: Origin addresses or "lat,lng" strings
        destinations: Destination addresses or "lat,lng" strings
        mode: driving (default), walking, bicycling or transit

    Returns:
        Result wrapping a DistanceMatrixResult
    """
    origins = validate_string_list(origins, "origins").unwrap()
    destinations = validate_string_list(destinations, "destinations").unwrap()
    travel_mode = parse_travel_mode(mode)

    payload = await client.distance_matrix(
        origins="|".join(origins),
        destinations="|".join(destinations),
        mode=travel_mode.value,
        language=client.config.default_language,
    )
    ensure_status(payload, DISTANCE_MATRIX_SERVICE)

    return DistanceMatrixResult(
        origin_addresses=payload.get("origin_addresses") or [],
        destination_addresses=payload.get("destination_addresses") or [],
        rows=[
            DistanceMatrixRow(
                elements=[
                    DistanceMatrixElement(
                        status=element.get("status"),
                        duration=_text_value(element.get("duration")),
                        distance=_text_value(element.get("distance")),
                    )
                    for element in row.get("elements") or []
                ]
            )
            for row in payload.get("rows") or []
        ],
    )


@tool_adapter(logger, "get_directions")
async def directions(
    client: MapsBackend,
    origin: str,
    destination: str,
    mode: TravelMode | str | None = TravelMode.DRIVING,
) -> DirectionsResult:
    """
    Get directions between two locations.

    Args:
        client: Upstream backend
        origin: Starting address or "lat,lng"
        destination: Destination address or "lat,lng"
        mode: driving (default), walking, bicycling or transit

    Returns:
        Result wrapping a DirectionsResult with routes, legs and steps
    """
    origin = validate_non_empty_string(origin, "origin").unwrap()
    destination = validate_non_empty_string(destination, "destination").unwrap()
    travel_mode = parse_travel_mode(mode)

    payload = await client.directions(
        origin=origin,
        destination=destination,
        mode=travel_mode.value,
        language=client.config.default_language,
    )
    status = ensure_status(payload, DIRECTIONS_SERVICE)

    routes = payload.get("routes") or []
    if status == "ZERO_RESULTS" or not routes:
        raise UpstreamEmptyError("No route found")

    return DirectionsResult(
        routes=[
            DirectionsRoute(
                summary=route.get("summary"),
                legs=[
                    DirectionsLeg(
                        distance=_text_value(leg.get("distance")),
                        duration=_text_value(leg.get("duration")),
                        start_address=leg.get("start_address"),
                        end_address=leg.get("end_address"),
                        steps=[
                            DirectionsStep(
                                distance=_text_value(step.get("distance")),
                                duration=_text_value(step.get("duration")),
                                instructions=step.get("html_instructions"),
                                travel_mode=step.get("travel_mode"),
                            )
                            for step in leg.get("steps") or []
                        ],
                    )
                    for leg in route.get("legs") or []
                ],
            )
            for route in routes
        ]
    )
