"""
Argument schemas for the registered tools.

The dispatcher validates each incoming argument bag against the tool's model
before any adapter runs. Schemas check shape and types only; value ranges
(coordinates, radius, zoom) are checked by the adapters so their messages
name the offending field the same way for every caller.

``get_map_with_directions`` and ``generate_static_map`` reuse
``MapDirectionsParams`` and ``StaticMapOptions`` from ``models``.
"""

from typing import List, Optional

from pydantic import Field

from google_maps_mcp.models import CamelModel, Coordinates, LocationInput, TravelMode


class SearchNearbyArgs(CamelModel):
    center: LocationInput = Field(..., description="Search center point")
    keyword: Optional[str] = Field(None, description="Search keyword (e.g. restaurant, cafe)")
    radius: float = Field(1000, description="Search radius in meters (default: 1000)")
    open_now: bool = Field(False, description="Only show places that are currently open")
    min_rating: Optional[float] = Field(None, description="Minimum rating requirement (0-5)")


class PlaceDetailsArgs(CamelModel):
    place_id: str = Field(..., description="Google Maps place ID")


class GeocodeArgs(CamelModel):
    address: str = Field(..., description="Address or place name to convert")


class ReverseGeocodeArgs(CamelModel):
    latitude: float = Field(..., description="Latitude coordinate")
    longitude: float = Field(..., description="Longitude coordinate")


class DistanceMatrixArgs(CamelModel):
    origins: List[str] = Field(..., description="List of origin addresses or coordinates")
    destinations: List[str] = Field(..., description="List of destination addresses or coordinates")
    mode: TravelMode = Field(TravelMode.DRIVING, description="Travel mode")


class DirectionsArgs(CamelModel):
    origin: str = Field(..., description="Starting point address or coordinates")
    destination: str = Field(..., description="Destination address or coordinates")
    mode: TravelMode = Field(TravelMode.DRIVING, description="Travel mode")


class ElevationArgs(CamelModel):
    locations: List[Coordinates] = Field(..., description="Locations to get elevation for")
