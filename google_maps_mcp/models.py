"""
Pydantic models for tool requests and normalized results.

Every model serializes with camelCase keys (``placeId``, ``formattedAddress``)
and accepts either camelCase or snake_case on input. Optional result fields
are ``None`` when the provider omitted them and are dropped on serialization.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TravelMode(str, Enum):
    """Travel modes understood by the directions and distance matrix services."""

    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"


class MapType(str, Enum):
    """Static map base layers."""

    ROADMAP = "roadmap"
    SATELLITE = "satellite"
    HYBRID = "hybrid"
    TERRAIN = "terrain"


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# Locations
# ============================================================

class Location(CamelModel):
    """A validated point, optionally with the address and place it came from."""
    latitude: float
    longitude: float
    address: Optional[str] = None
    place_id: Optional[str] = None


class LocationInput(CamelModel):
    """Free text or a "lat,lng" string, as flagged by ``is_coordinates``."""
    value: str = Field(..., description="Address, place name or coordinates (format: lat,lng)")
    is_coordinates: bool = Field(False, description="Whether the value is coordinates")


class Coordinates(CamelModel):
    latitude: float
    longitude: float


class LatLng(CamelModel):
    lat: float
    lng: float


# ============================================================
# Places
# ============================================================

class OpeningTime(CamelModel):
    day: int
    time: Optional[str] = None


class OpeningPeriod(CamelModel):
    open: OpeningTime
    close: Optional[OpeningTime] = None


class OpeningHours(CamelModel):
    open_now: Optional[bool] = None
    periods: Optional[List[OpeningPeriod]] = None


class PlacePhoto(CamelModel):
    """Opaque photo reference; the photo itself is never fetched."""
    photo_reference: str
    height: int
    width: int


class PlaceDetails(CamelModel):
    """Normalized place record."""
    place_id: str
    name: str
    formatted_address: Optional[str] = None
    location: Optional[Location] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    opening_hours: Optional[OpeningHours] = None
    photos: Optional[List[PlacePhoto]] = None
    price_level: Optional[int] = None
    types: Optional[List[str]] = None
    website: Optional[str] = None
    phone_number: Optional[str] = None
    vicinity: Optional[str] = None


# ============================================================
# Routing
# ============================================================

class TextValue(CamelModel):
    """Distance or duration: display text plus metres/seconds."""
    text: str
    value: int | float


class DirectionsStep(CamelModel):
    distance: TextValue
    duration: TextValue
    instructions: Optional[str] = None
    travel_mode: Optional[str] = None


class DirectionsLeg(CamelModel):
    distance: TextValue
    duration: TextValue
    start_address: Optional[str] = None
    end_address: Optional[str] = None
    steps: List[DirectionsStep] = Field(default_factory=list)


class DirectionsRoute(CamelModel):
    summary: Optional[str] = None
    legs: List[DirectionsLeg] = Field(default_factory=list)


class DirectionsResult(CamelModel):
    routes: List[DirectionsRoute]


class DistanceMatrixElement(CamelModel):
    status: str
    duration: Optional[TextValue] = None
    distance: Optional[TextValue] = None


class DistanceMatrixRow(CamelModel):
    elements: List[DistanceMatrixElement] = Field(default_factory=list)


class DistanceMatrixResult(CamelModel):
    origin_addresses: List[str] = Field(default_factory=list)
    destination_addresses: List[str] = Field(default_factory=list)
    rows: List[DistanceMatrixRow] = Field(default_factory=list)


class ElevationResult(CamelModel):
    elevation: float
    location: Location
    resolution: Optional[float] = None


# ============================================================
# Map rendering requests
# ============================================================

class ImageSize(CamelModel):
    width: int = Field(..., description="Width in pixels (max 640 for free tier)")
    height: int = Field(..., description="Height in pixels (max 640 for free tier)")


class RouteStop(CamelModel):
    """A stop on a rendered route; all three fields are required."""
    address: str = Field(..., description="Human-readable address")
    lat: float = Field(..., description="Latitude coordinate")
    lng: float = Field(..., description="Longitude coordinate")


class MapDirectionsParams(CamelModel):
    origin: RouteStop
    destination: RouteStop
    waypoints: Optional[List[RouteStop]] = None
    mode: TravelMode = TravelMode.DRIVING
    size: Optional[ImageSize] = None
    scale: Optional[Literal[1, 2]] = None
    map_type: Optional[MapType] = None


class MapDirectionsSummary(CamelModel):
    origin: str
    destination: str
    waypoints: Optional[List[str]] = None
    mode: TravelMode


class MapDirectionsResponse(CamelModel):
    """Both URLs embed the API key and must not be relayed to third parties."""
    google_maps_url: str
    static_map_url: str
    summary: MapDirectionsSummary


class StaticMapMarker(CamelModel):
    location: LatLng
    color: Optional[str] = None
    label: Optional[str] = None


class StaticMapPath(CamelModel):
    points: List[LatLng]
    color: Optional[str] = None
    weight: Optional[int] = None


class StaticMapOptions(CamelModel):
    center: LatLng
    zoom: int
    size: ImageSize
    markers: Optional[List[StaticMapMarker]] = None
    path: Optional[StaticMapPath] = None
    map_type: MapType = MapType.ROADMAP
