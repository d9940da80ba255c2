"""
Tool registry and dispatcher.

Maps a tool name to its argument schema and handler. ``dispatch`` takes a
``(name, arguments)`` pair from the transport and always answers with a
``ToolResponse``; it never raises.

Usage:
    registry = build_registry(client, config)
    response = await registry.dispatch("get_geocode", {"address": "Tokyo"})
    response.content   # [{"type": "text", "text": "{...}"}]
    response.is_error  # False
"""

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from google_maps_mcp.config import MapsConfig
from google_maps_mcp.errors import (
    InvalidArgumentError,
    Result,
    UnknownToolError,
    handle_error,
)
from google_maps_mcp.logger import get_logger
from google_maps_mcp.maps_client import MapsBackend
from google_maps_mcp.models import MapDirectionsParams, StaticMapOptions
from google_maps_mcp.schemas import (
    DirectionsArgs,
    DistanceMatrixArgs,
    ElevationArgs,
    GeocodeArgs,
    PlaceDetailsArgs,
    ReverseGeocodeArgs,
    SearchNearbyArgs,
)
from google_maps_mcp.tools import (
    directions,
    distance_matrix,
    generate_static_map,
    geocode,
    get_elevation,
    get_map_with_directions,
    get_place_details,
    reverse_geocode,
    search_nearby,
)
from google_maps_mcp.validators import describe_validation_error

logger = get_logger(__name__)

Handler = Callable[[Any], Awaitable[Result[Any]]]


@dataclass(frozen=True)
class ToolSpec:
    """A registered tool: its schema and the handler that receives validated arguments."""

    name: str
    title: str
    description: str
    arguments: type[BaseModel]
    handler: Handler


@dataclass(frozen=True)
class ToolResponse:
    """
    Envelope plus the out-of-band error flag.

    ``payload`` is ``{success, data|error}``; ``is_error`` mirrors
    ``not payload["success"]`` for transports that only read the flag.
    """

    payload: dict[str, Any]
    is_error: bool

    @classmethod
    def from_result(cls, result: Result[Any]) -> "ToolResponse":
        return cls(payload=result.to_dict(), is_error=not result.success)

    @property
    def text(self) -> str:
        return json.dumps(self.payload, indent=2, ensure_ascii=False)

    @property
    def content(self) -> list[dict[str, str]]:
        return [{"type": "text", "text": self.text}]

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "isError": self.is_error}


class ToolRegistry:
    """Registry of tool name to ToolSpec."""

    def __init__(self):
        self._tools: dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        """Name, title, description and JSON schema of every tool, in registration order."""
        return [
            {
                "name": spec.name,
                "title": spec.title,
                "description": spec.description,
                "inputSchema": spec.arguments.model_json_schema(by_alias=True),
            }
            for spec in self._tools.values()
        ]

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> ToolResponse:
        """
        Validate ``arguments`` against the tool's schema and invoke its handler.

        Unknown tools, missing arguments and schema mismatches are answered
        with a failure envelope without calling any handler.
        """
        spec = self._tools.get(name)
        if spec is None:
            logger.warning(f"Unknown tool requested: {name}")
            return ToolResponse.from_result(handle_error(UnknownToolError(name)))

        if arguments is None:
            return ToolResponse.from_result(
                handle_error(InvalidArgumentError("No parameters provided"))
            )

        try:
            args = spec.arguments.model_validate(arguments)
        except ValidationError as e:
            logger.info(f"Rejected arguments for {name}")
            return ToolResponse.from_result(
                handle_error(
                    InvalidArgumentError(
                        f"Invalid arguments for {name}: {describe_validation_error(e)}"
                    )
                )
            )

        try:
            result = await spec.handler(args)
        except Exception as e:
            # Adapters already convert their own failures; this covers handler glue
            logger.error(f"Handler for {name} raised: {type(e).__name__}: {e}", exc_info=True)
            result = handle_error(e)

        return ToolResponse.from_result(result)


def build_registry(client: MapsBackend, config: MapsConfig) -> ToolRegistry:
    """Register the Google Maps tools against one upstream client."""
    registry = ToolRegistry()

    async def _search_nearby(args: SearchNearbyArgs) -> Result[Any]:
        return await search_nearby(
            client,
            center=args.center,
            keyword=args.keyword,
            radius=args.radius,
            open_now=args.open_now,
            min_rating=args.min_rating,
        )

    async def _get_place_details(args: PlaceDetailsArgs) -> Result[Any]:
        return await get_place_details(client, args.place_id)

    async def _get_geocode(args: GeocodeArgs) -> Result[Any]:
        return await geocode(client, args.address)

    async def _get_reverse_geocode(args: ReverseGeocodeArgs) -> Result[Any]:
        return await reverse_geocode(client, args.latitude, args.longitude)

    async def _get_distance_matrix(args: DistanceMatrixArgs) -> Result[Any]:
        return await distance_matrix(client, args.origins, args.destinations, args.mode)

    async def _get_directions(args: DirectionsArgs) -> Result[Any]:
        return await directions(client, args.origin, args.destination, args.mode)

    async def _get_elevation(args: ElevationArgs) -> Result[Any]:
        return await get_elevation(client, args.locations)

    async def _get_map_with_directions(args: MapDirectionsParams) -> Result[Any]:
        return await get_map_with_directions(config, args)

    async def _generate_static_map(args: StaticMapOptions) -> Result[Any]:
        return await generate_static_map(config, args)

    specs = [
        ToolSpec(
            name="search_nearby",
            title="Search Nearby Places",
            description="Search for places near a specific location",
            arguments=SearchNearbyArgs,
            handler=_search_nearby,
        ),
        ToolSpec(
            name="get_place_details",
            title="Get Place Details",
            description="Get detailed information about a specific place",
            arguments=PlaceDetailsArgs,
            handler=_get_place_details,
        ),
        ToolSpec(
            name="get_geocode",
            title="Geocode Address",
            description="Convert an address or place name to coordinates",
            arguments=GeocodeArgs,
            handler=_get_geocode,
        ),
        ToolSpec(
            name="get_reverse_geocode",
            title="Reverse Geocode",
            description="Convert coordinates to an address",
            arguments=ReverseGeocodeArgs,
            handler=_get_reverse_geocode,
        ),
        ToolSpec(
            name="get_distance_matrix",
            title="Distance Matrix",
            description="Calculate distances and travel times between multiple origins and destinations",
            arguments=DistanceMatrixArgs,
            handler=_get_distance_matrix,
        ),
        ToolSpec(
            name="get_directions",
            title="Get Directions",
            description="Get step-by-step directions between two locations",
            arguments=DirectionsArgs,
            handler=_get_directions,
        ),
        ToolSpec(
            name="get_elevation",
            title="Get Elevation",
            description="Get elevation data for one or more locations",
            arguments=ElevationArgs,
            handler=_get_elevation,
        ),
        ToolSpec(
            name="get_map_with_directions",
            title="Map With Directions",
            description=(
                "Build a Google Maps directions link and a static route image URL "
                "for stops that already carry an address and coordinates"
            ),
            arguments=MapDirectionsParams,
            handler=_get_map_with_directions,
        ),
        ToolSpec(
            name="generate_static_map",
            title="Generate Static Map",
            description="Build a static map image URL with optional markers and a path",
            arguments=StaticMapOptions,
            handler=_generate_static_map,
        ),
    ]
    for spec in specs:
        registry.register(spec)

    return registry
