"""
MCP Tools for Google Maps.

Each adapter takes its upstream client (or configuration) plus validated
arguments and returns a ``Result``.

Modules:
    places: Nearby search and place details
    geocoding: Address/coordinate conversion
    routing: Distance matrix and directions
    elevation: Elevation sampling
    static_maps: Directions link and static map URLs
    locations: LocationInput normalization
"""

from google_maps_mcp.tools.places import (
    search_nearby,
    get_place_details,
)

from google_maps_mcp.tools.geocoding import (
    geocode,
    reverse_geocode,
)

from google_maps_mcp.tools.routing import (
    distance_matrix,
    directions,
)

from google_maps_mcp.tools.elevation import (
    get_elevation,
)

from google_maps_mcp.tools.static_maps import (
    generate_static_map,
    get_map_with_directions,
)

__all__ = [
    # Places
    "search_nearby",
    "get_place_details",
    # Geocoding
    "geocode",
    "reverse_geocode",
    # Routing
    "distance_matrix",
    "directions",
    # Elevation
    "get_elevation",
    # Static maps
    "generate_static_map",
    "get_map_with_directions",
]
