"""
Google Maps MCP Server

MCP Server exposing Google Maps Platform lookups as tools.
Every tool forwards its arguments to the tool registry, which validates
them, calls the adapter and answers with a ``{success, data|error}``
envelope.

Supports both stdio (local) and HTTP/SSE (remote) transports.
"""

import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool

from google_maps_mcp.config import Settings, get_settings
from google_maps_mcp.dispatcher import ToolRegistry, build_registry
from google_maps_mcp.logger import get_logger
from google_maps_mcp.maps_client import GoogleMapsClient, MapsBackend

logger = get_logger(__name__)

TRANSPORTS = ("stdio", "sse", "streamable-http")


def _arguments(**kwargs: Any) -> dict[str, Any]:
    """Drop unset optionals so the schema defaults apply."""
    return {k: v for k, v in kwargs.items() if v is not None}


async def invoke(registry: ToolRegistry, name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
    """
    Dispatch one call and adapt the response to FastMCP.

    A failed envelope is raised as ToolError carrying the serialized
    envelope, so the transport sets ``isError`` while the text still reads
    ``success: false``.
    """
    response = await registry.dispatch(name, arguments)
    if response.is_error:
        raise ToolError(response.text)
    return response.payload


def create_server(
    settings: Settings | None = None,
    client: MapsBackend | None = None,
) -> FastMCP:
    """
    Build the FastMCP server and register every tool.

    A GoogleMapsClient created here is closed when the server shuts down.
    An injected client stays open; its owner closes it.

    Args:
        settings: Server settings (default: environment)
        client: Upstream backend (default: a GoogleMapsClient)
    """
    settings = settings or get_settings()
    config = settings.maps_config()
    owned_client = None
    if client is None:
        client = owned_client = GoogleMapsClient(config, timeout=settings.http_timeout)
    registry = build_registry(client, config)

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[dict]:
        """Manage the Google Maps client lifecycle."""
        try:
            yield {}
        finally:
            if owned_client is not None:
                await owned_client.aclose()
                logger.debug("Google Maps client closed")

    mcp = FastMCP(
        name=settings.server_name,
        version=settings.server_version,
        lifespan=lifespan,
    )

    # Parameter names below are the wire names (camelCase). They accept
    # anything; the registry validates the arguments and reports problems
    # in the envelope.

    # ============================================================
    # Place Tools
    # ============================================================

    async def tool_search_nearby(
        center: Any = None,
        keyword: Any = None,
        radius: Any = None,
        openNow: Any = None,
        minRating: Any = None,
    ) -> dict:
        """
        Search for places near a specific location.

        Args:
            center: {"value": address, place name or "lat,lng",
                     "isCoordinates": true when value is "lat,lng"}
            keyword: Search keyword (e.g. "restaurant", "cafe")
            radius: Search radius in meters (default: 1000, max: 50000)
            openNow: Only show places that are currently open
            minRating: Minimum rating requirement (0-5)

        Returns:
            {"success": true, "data": [places]} with place id, name,
            location, rating, types and vicinity
        """
        return await invoke(
            registry,
            "search_nearby",
            _arguments(
                center=center,
                keyword=keyword,
                radius=radius,
                openNow=openNow,
                minRating=minRating,
            ),
        )

    async def tool_get_place_details(placeId: Any = None) -> dict:
        """
        Get detailed information about a specific place.

        Args:
            placeId: Google Maps place ID

        Returns:
            {"success": true, "data": place} with address, location, rating,
            opening hours, photos, price level, website and phone number
        """
        return await invoke(registry, "get_place_details", _arguments(placeId=placeId))

    # ============================================================
    # Geocoding Tools
    # ============================================================

    async def tool_get_geocode(address: Any = None) -> dict:
        """
        Convert an address or place name to coordinates.

        Args:
            address: Address or place name, e.g. "Tokyo Tower"

        Returns:
            {"success": true, "data": {latitude, longitude, address, placeId}}
        """
        return await invoke(registry, "get_geocode", _arguments(address=address))

    async def tool_get_reverse_geocode(latitude: Any = None, longitude: Any = None) -> dict:
        """
        Convert coordinates to an address.

        Args:
            latitude: Latitude in decimal degrees (WGS84)
            longitude: Longitude in decimal degrees (WGS84)

        Returns:
            {"success": true, "data": {latitude, longitude, address, placeId}}
        """
        return await invoke(
            registry,
            "get_reverse_geocode",
            _arguments(latitude=latitude, longitude=longitude),
        )

    # ============================================================
    # Routing Tools
    # ============================================================

    async def tool_get_distance_matrix(
        origins: Any = None,
        destinations: Any = None,
        mode: Any = None,
    ) -> dict:
        """
        Calculate distances and travel times between multiple origins and destinations.

        Args:
            origins: Origin addresses or "lat,lng" strings
            destinations: Destination addresses or "lat,lng" strings
            mode: driving (default), walking, bicycling or transit

        Returns:
            {"success": true, "data": {originAddresses, destinationAddresses, rows}}
        """
        return await invoke(
            registry,
            "get_distance_matrix",
            _arguments(origins=origins, destinations=destinations, mode=mode),
        )

    async def tool_get_directions(
        origin: Any = None,
        destination: Any = None,
        mode: Any = None,
    ) -> dict:
        """
        Get step-by-step directions between two locations.

        Args:
            origin: Starting point address or "lat,lng"
            destination: Destination address or "lat,lng"
            mode: driving (default), walking, bicycling or transit

        Returns:
            {"success": true, "data": {routes}} with legs and steps
        """
        return await invoke(
            registry,
            "get_directions",
            _arguments(origin=origin, destination=destination, mode=mode),
        )

    async def tool_get_elevation(locations: Any = None) -> dict:
        """
        Get elevation data for one or more locations.

        Args:
            locations: Points as [{"latitude": 35.36, "longitude": 138.73}, ...]

        Returns:
            {"success": true, "data": [{elevation, location, resolution}]}
        """
        return await invoke(registry, "get_elevation", _arguments(locations=locations))

    # ============================================================
    # Map URL Tools
    # ============================================================

    async def tool_get_map_with_directions(
        origin: Any = None,
        destination: Any = None,
        waypoints: Any = None,
        mode: Any = None,
        size: Any = None,
        scale: Any = None,
        mapType: Any = None,
    ) -> dict:
        """
        Build a Google Maps directions link and a static route image URL.

        Every stop must carry address, lat and lng (geocode it first).
        The image URL contains the API key; do not share it.

        Args:
            origin: {"address": ..., "lat": ..., "lng": ...}
            destination: {"address": ..., "lat": ..., "lng": ...}
            waypoints: Intermediate stops in the same shape (max 24)
            mode: driving (default), walking, bicycling or transit
            size: {"width": 640, "height": 480} image size in pixels
            scale: 1 or 2 (default: 2)
            mapType: roadmap (default), satellite, hybrid or terrain

        Returns:
            {"success": true, "data": {googleMapsUrl, staticMapUrl, summary}}
        """
        return await invoke(
            registry,
            "get_map_with_directions",
            _arguments(
                origin=origin,
                destination=destination,
                waypoints=waypoints,
                mode=mode,
                size=size,
                scale=scale,
                mapType=mapType,
            ),
        )

    async def tool_generate_static_map(
        center: Any = None,
        zoom: Any = None,
        size: Any = None,
        markers: Any = None,
        path: Any = None,
        mapType: Any = None,
    ) -> dict:
        """
        Build a static map image URL.

        The URL contains the API key; do not share it.

        Args:
            center: {"lat": ..., "lng": ...}
            zoom: Zoom level (0-21)
            size: {"width": ..., "height": ...} in pixels
            markers: [{"location": {"lat", "lng"}, "color": "red", "label": "A"}]
            path: {"points": [{"lat", "lng"}, ...], "color": "0x0000ff", "weight": 5}
            mapType: roadmap (default), satellite, hybrid or terrain

        Returns:
            {"success": true, "data": url}
        """
        return await invoke(
            registry,
            "generate_static_map",
            _arguments(
                center=center,
                zoom=zoom,
                size=size,
                markers=markers,
                path=path,
                mapType=mapType,
            ),
        )

    wrappers = {
        "search_nearby": tool_search_nearby,
        "get_place_details": tool_get_place_details,
        "get_geocode": tool_get_geocode,
        "get_reverse_geocode": tool_get_reverse_geocode,
        "get_distance_matrix": tool_get_distance_matrix,
        "get_directions": tool_get_directions,
        "get_elevation": tool_get_elevation,
        "get_map_with_directions": tool_get_map_with_directions,
        "generate_static_map": tool_generate_static_map,
    }

    # Advertise the registry's argument schemas, not the wrapper signatures
    for listed in registry.list_tools():
        tool = Tool.from_function(
            wrappers[listed["name"]],
            name=listed["name"],
            title=listed["title"],
        )
        mcp.add_tool(tool.model_copy(update={"parameters": listed["inputSchema"]}))

    logger.debug(f"Registered tools: {', '.join(registry.names())}")
    return mcp


def main() -> None:
    """Console entry point: validate configuration and run the selected transport."""
    settings = get_settings()

    if not settings.google_maps_api_key.get_secret_value():
        logger.error("GOOGLE_MAPS_API_KEY environment variable is required")
        sys.exit(1)

    transport = settings.mcp_transport
    if transport not in TRANSPORTS:
        logger.error(f"Unknown transport: {transport} (valid options: {', '.join(TRANSPORTS)})")
        sys.exit(1)

    # Log startup information
    logger.info(
        f"Starting {settings.server_name} v{settings.server_version}",
        extra={
            "environment": settings.environment,
            "log_level": settings.log_level,
            "language": settings.default_language,
            "region": settings.default_region,
        },
    )
    logger.info(f"Using transport: {transport}")

    mcp = create_server(settings)

    if transport == "stdio":
        # Default for local desktop clients
        mcp.run()
    else:
        logger.info(f"Starting {transport} server on {settings.mcp_host}:{settings.mcp_port}")
        mcp.run(transport=transport, host=settings.mcp_host, port=settings.mcp_port)


if __name__ == "__main__":
    main()
