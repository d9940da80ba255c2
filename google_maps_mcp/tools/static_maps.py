"""
Map URL tools for the Google Maps MCP Server.

These tools never call the provider: they validate their input and assemble
URLs. The same input always yields the same URL.

The static image URLs embed the API key. Hand them to a trusted renderer
only; do not relay them to third parties.
"""

from typing import Any
from urllib.parse import urlencode

from google_maps_mcp.config import MapsConfig
from google_maps_mcp.errors import InvalidArgumentError
from google_maps_mcp.logger import get_logger
from google_maps_mcp.models import (
    ImageSize,
    MapDirectionsParams,
    MapDirectionsResponse,
    MapDirectionsSummary,
    MapType,
    RouteStop,
    StaticMapOptions,
)
from google_maps_mcp.tools.base import (
    checked_lat_lng,
    coerce_model,
    parse_travel_mode,
    tool_adapter,
)
from google_maps_mcp.validators import (
    validate_non_empty_string,
    validate_positive_int,
    validate_zoom,
)

logger = get_logger(__name__)

STATIC_MAP_URL = "https://maps.googleapis.com/maps/api/staticmap"
GOOGLE_MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"

DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
DEFAULT_SCALE = 2
ROUTE_COLOR = "0x4285F4"
ROUTE_WEIGHT = 4

# Stops are labelled A..Z: origin, up to 24 waypoints, destination
MAX_WAYPOINTS = 24


def _encode(params: list[tuple[str, str]]) -> str:
    """Query string with ":" and "," left readable, "|" percent-encoded."""
    return urlencode(params, safe=":,")


def _checked_size(size: ImageSize | None, field_name: str = "size") -> str:
    if size is None:
        return f"{DEFAULT_WIDTH}x{DEFAULT_HEIGHT}"
    width = validate_positive_int(size.width, f"{field_name}.width").unwrap()
    height = validate_positive_int(size.height, f"{field_name}.height").unwrap()
    return f"{width}x{height}"


def _checked_label(label: str | None, field_name: str) -> str | None:
    if label is None:
        return None
    label = label.strip().upper()
    if len(label) != 1 or not label.isalnum() or not label.isascii():
        raise InvalidArgumentError(
            f"{field_name} must be a single character A-Z or 0-9 (got {label!r})",
            field=field_name,
        )
    return label


def _checked_stop(stop: RouteStop | dict[str, Any] | None, field_name: str) -> RouteStop:
    """A stop needs all of address, lat and lng; 0 is a valid coordinate."""
    stop = coerce_model(RouteStop, stop, field_name)
    address = validate_non_empty_string(stop.address, f"{field_name}.address").unwrap()
    checked_lat_lng(stop.lat, stop.lng, field_name)
    return RouteStop(address=address, lat=stop.lat, lng=stop.lng)


def _stop_point(stop: RouteStop) -> str:
    return checked_lat_lng(stop.lat, stop.lng)


@tool_adapter(logger, "generate_static_map")
async def generate_static_map(
    config: MapsConfig,
    options: StaticMapOptions | dict[str, Any],
) -> str:
    """
    Build a static map image URL.

    Args:
        config: Credential and language preference
        options: Center, zoom, size, optional markers and path, map type

    Returns:
        Result wrapping the image URL (secret-bearing)
    """
    options = coerce_model(StaticMapOptions, options, "options")

    center = checked_lat_lng(options.center.lat, options.center.lng, "center")
    zoom = validate_zoom(options.zoom).unwrap()
    size = _checked_size(options.size)
    map_type = MapType(options.map_type or MapType.ROADMAP)

    params = [
        ("key", config.api_key.get_secret_value()),
        ("center", center),
        ("zoom", str(zoom)),
        ("size", size),
        ("maptype", map_type.value),
        ("scale", str(DEFAULT_SCALE)),
        ("language", config.default_language),
    ]

    for i, marker in enumerate(options.markers or []):
        parts = []
        if marker.color:
            parts.append(f"color:{marker.color}")
        label = _checked_label(marker.label, f"markers[{i}].label")
        if label:
            parts.append(f"label:{label}")
        parts.append(checked_lat_lng(marker.location.lat, marker.location.lng, f"markers[{i}]"))
        params.append(("markers", "|".join(parts)))

    if options.path and options.path.points:
        parts = []
        if options.path.color:
            parts.append(f"color:{options.path.color}")
        if options.path.weight is not None:
            weight = validate_positive_int(options.path.weight, "path.weight").unwrap()
            parts.append(f"weight:{weight}")
        for i, point in enumerate(options.path.points):
            parts.append(checked_lat_lng(point.lat, point.lng, f"path.points[{i}]"))
        params.append(("path", "|".join(parts)))

    return f"{STATIC_MAP_URL}?{_encode(params)}"


@tool_adapter(logger, "get_map_with_directions")
async def get_map_with_directions(
    config: MapsConfig,
    params: MapDirectionsParams | dict[str, Any],
) -> MapDirectionsResponse:
    """
    Build an interactive directions link and a static route image URL.

    Markers: origin green "A", waypoints blue "B", "C", ..., destination
    red with the next letter. A blue path joins all stops in order.

    Args:
        config: Credential
        params: Origin, destination and waypoints (each with address, lat,
            lng), travel mode and rendering options

    Returns:
        Result wrapping googleMapsUrl, staticMapUrl and a summary
    """
    params = coerce_model(MapDirectionsParams, params, "params")

    origin = _checked_stop(params.origin, "origin")
    destination = _checked_stop(params.destination, "destination")
    waypoints = [
        _checked_stop(stop, f"waypoints[{i}]")
        for i, stop in enumerate(params.waypoints or [])
    ]
    if len(waypoints) > MAX_WAYPOINTS:
        raise InvalidArgumentError(
            f"waypoints supports at most {MAX_WAYPOINTS} stops (got {len(waypoints)})",
            field="waypoints",
        )

    mode = parse_travel_mode(params.mode)
    size = _checked_size(params.size)
    scale = DEFAULT_SCALE if params.scale is None else params.scale
    if scale not in (1, 2):
        raise InvalidArgumentError(f"scale must be 1 or 2 (got {scale})", field="scale")
    map_type = MapType(params.map_type or MapType.ROADMAP)

    link_params = [
        ("api", "1"),
        ("origin", origin.address),
        ("destination", destination.address),
        ("travelmode", mode.value),
    ]
    if waypoints:
        link_params.append(("waypoints", "|".join(stop.address for stop in waypoints)))
    google_maps_url = f"{GOOGLE_MAPS_DIRECTIONS_URL}?{urlencode(link_params)}"

    stops = [origin, *waypoints, destination]
    image_params = [
        ("key", config.api_key.get_secret_value()),
        ("size", size),
        ("scale", str(scale)),
        ("maptype", map_type.value),
        ("markers", f"size:mid|color:green|label:A|{_stop_point(origin)}"),
        ("markers", f"size:mid|color:red|label:{chr(65 + len(stops) - 1)}|{_stop_point(destination)}"),
    ]
    for i, stop in enumerate(waypoints):
        image_params.append(("markers", f"size:mid|color:blue|label:{chr(66 + i)}|{_stop_point(stop)}"))
    image_params.append(
        (
            "path",
            f"color:{ROUTE_COLOR}|weight:{ROUTE_WEIGHT}|"
            + "|".join(_stop_point(stop) for stop in stops),
        )
    )
    static_map_url = f"{STATIC_MAP_URL}?{_encode(image_params)}"

    return MapDirectionsResponse(
        google_maps_url=google_maps_url,
        static_map_url=static_map_url,
        summary=MapDirectionsSummary(
            origin=origin.address,
            destination=destination.address,
            waypoints=[stop.address for stop in waypoints] or None,
            mode=mode,
        ),
    )
