"""
Place tools for the Google Maps MCP Server.

Provides nearby search and place details through the Google Places API.
"""

from typing import Any

from google_maps_mcp.errors import MalformedUpstreamPayloadError
from google_maps_mcp.logger import get_logger
from google_maps_mcp.maps_client import MapsBackend
from google_maps_mcp.models import (
    Location,
    LocationInput,
    OpeningHours,
    OpeningPeriod,
    OpeningTime,
    PlaceDetails,
    PlacePhoto,
)
from google_maps_mcp.tools.base import (
    ensure_status,
    format_lat_lng,
    format_number,
    read_lat_lng,
    tool_adapter,
)
from google_maps_mcp.tools.locations import parse_location_input
from google_maps_mcp.validators import validate_non_empty_string, validate_range

logger = get_logger(__name__)

PLACES_SERVICE = "Google Places API"

DEFAULT_RADIUS = 1000
MAX_RADIUS = 50000

# Fields requested from place details; anything else is never fetched
PLACE_DETAILS_FIELDS = (
    "place_id",
    "name",
    "formatted_address",
    "geometry",
    "rating",
    "user_ratings_total",
    "opening_hours",
    "photos",
    "price_level",
    "types",
    "website",
    "formatted_phone_number",
)


def _opening_time(raw: dict[str, Any] | None) -> OpeningTime | None:
    if not raw:
        return None
    return OpeningTime(day=raw.get("day"), time=raw.get("time"))


def _opening_hours(raw: dict[str, Any] | None) -> OpeningHours | None:
    if raw is None:
        return None

    periods = None
    if raw.get("periods") is not None:
        periods = [
            OpeningPeriod(
                open=_opening_time(period.get("open")),
                close=_opening_time(period.get("close")),
            )
            for period in raw["periods"]
        ]

    return OpeningHours(open_now=raw.get("open_now"), periods=periods)


def _photos(raw: list[dict[str, Any]] | None) -> list[PlacePhoto] | None:
    if raw is None:
        return None
    return [
        PlacePhoto(
            photo_reference=photo.get("photo_reference"),
            height=photo.get("height"),
            width=photo.get("width"),
        )
        for photo in raw
    ]


@tool_adapter(logger, "search_nearby")
async def search_nearby(
    client: MapsBackend,
    center: LocationInput | dict[str, Any],
    keyword: str | None = None,
    radius: float = DEFAULT_RADIUS,
    open_now: bool = False,
    min_rating: float | None = None,
) -> list[PlaceDetails]:
    """
    Search for places near a location.

    Args:
        client: Upstream backend
        center: Search center, free text or "lat,lng"
        keyword: Search keyword (e.g. "restaurant", "coffee")
        radius: Search radius in meters (default: 1000)
        open_now: Only places open right now
        min_rating: Keep only places rated at least this (0-5)

    Returns:
        Result wrapping a list of PlaceDetails (identity, location,
        rating, types, vicinity)
    """
    radius = validate_range(
        DEFAULT_RADIUS if radius is None else radius,
        "radius",
        min_value=1,
        max_value=MAX_RADIUS,
    ).unwrap()
    if min_rating is not None:
        min_rating = validate_range(min_rating, "minRating", min_value=0, max_value=5).unwrap()
    if keyword is not None:
        keyword = keyword.strip() or None

    location = await parse_location_input(client, center)

    payload = await client.places_nearby(
        location=format_lat_lng(location.latitude, location.longitude),
        radius=format_number(radius),
        keyword=keyword,
        opennow="true" if open_now else None,
        language=client.config.default_language,
    )
    ensure_status(payload, PLACES_SERVICE)

    places = []
    for item in payload.get("results") or []:
        if not item.get("geometry") or not item.get("place_id") or not item.get("name"):
            raise MalformedUpstreamPayloadError(
                "Required place data is missing - "
                f"place_id: {item.get('place_id') or 'undefined'}, "
                f"name: {item.get('name') or 'undefined'}"
            )
        lat, lng = read_lat_lng(item, PLACES_SERVICE)
        places.append(
            PlaceDetails(
                place_id=item["place_id"],
                name=item["name"],
                location=Location(latitude=lat, longitude=lng),
                rating=item.get("rating"),
                user_ratings_total=item.get("user_ratings_total"),
                types=item.get("types"),
                vicinity=item.get("vicinity"),
            )
        )

    # The provider has no rating filter; unrated places count as 0
    if min_rating is not None:
        places = [place for place in places if (place.rating or 0) >= min_rating]

    logger.debug(f"Nearby search returned {len(places)} places")
    return places


@tool_adapter(logger, "get_place_details")
async def get_place_details(client: MapsBackend, place_id: str) -> PlaceDetails:
    """
    Get detailed information about a place.

    The upstream status is checked before the payload is inspected, so a
    successful response without the required fields reports exactly which
    one is missing.

    Args:
        client: Upstream backend
        place_id: Google Maps place id

    Returns:
        Result wrapping PlaceDetails
    """
    place_id = validate_non_empty_string(place_id, "placeId").unwrap()

    payload = await client.place_details(
        place_id=place_id,
        fields=",".join(PLACE_DETAILS_FIELDS),
        language=client.config.default_language,
    )
    ensure_status(payload, PLACES_SERVICE, allow_zero_results=False)

    place = payload.get("result")
    if not place:
        raise MalformedUpstreamPayloadError("No place data returned from Google Places API")

    if not place.get("place_id") or not place.get("name"):
        raise MalformedUpstreamPayloadError(
            "Missing required place data - "
            f"place_id: {place.get('place_id') or 'undefined'}, "
            f"name: {place.get('name') or 'undefined'}, "
            f"API status: {payload.get('status')}"
        )

    location = None
    if place.get("geometry"):
        lat, lng = read_lat_lng(place, PLACES_SERVICE)
        location = Location(latitude=lat, longitude=lng)

    return PlaceDetails(
        place_id=place["place_id"],
        name=place["name"],
        formatted_address=place.get("formatted_address"),
        location=location,
        rating=place.get("rating"),
        user_ratings_total=place.get("user_ratings_total"),
        opening_hours=_opening_hours(place.get("opening_hours")),
        photos=_photos(place.get("photos")),
        price_level=place.get("price_level"),
        types=place.get("types"),
        website=place.get("website"),
        phone_number=place.get("formatted_phone_number"),
    )
