"""
HTTP client for the Google Maps Platform web services.

``GoogleMapsClient`` is the only object that talks to the network. It is
created once per server and handed to every adapter; tests hand adapters a
fake that satisfies ``MapsBackend`` instead.

The client adds the API key, performs one GET per call and returns the
decoded JSON payload untouched. Interpreting the provider ``status`` field is
left to the adapters. Transport failures are raised as UpstreamFaultError
with the API key redacted; there is no retry.
"""

from typing import Any, Protocol

import httpx

from google_maps_mcp.config import MapsConfig
from google_maps_mcp.errors import MalformedUpstreamPayloadError, UpstreamFaultError
from google_maps_mcp.logger import get_logger

logger = get_logger(__name__)

GOOGLE_MAPS_API_URL = "https://maps.googleapis.com/maps/api"

# Default timeout for upstream requests
DEFAULT_TIMEOUT = 30.0


class MapsBackend(Protocol):
    """Upstream operations the adapters depend on."""

    config: MapsConfig

    async def places_nearby(self, **params: Any) -> dict[str, Any]: ...

    async def place_details(self, **params: Any) -> dict[str, Any]: ...

    async def geocode(self, **params: Any) -> dict[str, Any]: ...

    async def reverse_geocode(self, **params: Any) -> dict[str, Any]: ...

    async def distance_matrix(self, **params: Any) -> dict[str, Any]: ...

    async def directions(self, **params: Any) -> dict[str, Any]: ...

    async def elevation(self, **params: Any) -> dict[str, Any]: ...


class GoogleMapsClient:
    """Async client for the Google Maps JSON web services.

    Args:
        config: Credential and language/region preference
        timeout: Request timeout in seconds
        http_client: Pre-built httpx client (tests pass one with a MockTransport)
    """

    def __init__(
        self,
        config: MapsConfig,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "GoogleMapsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._http.aclose()

    def _redact(self, text: str) -> str:
        api_key = self.config.api_key.get_secret_value()
        if api_key:
            return text.replace(api_key, "***")
        return text

    async def _get(self, path: str, service: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET ``{GOOGLE_MAPS_API_URL}/{path}`` and decode the JSON body."""
        query = {k: v for k, v in params.items() if v is not None}
        query["key"] = self.config.api_key.get_secret_value()

        logger.debug(
            f"Calling {service}",
            extra={"path": path, "params": sorted(k for k in query if k != "key")},
        )

        try:
            response = await self._http.get(f"{GOOGLE_MAPS_API_URL}/{path}", params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                f"{service} returned HTTP {status_code}",
                extra={"status_code": status_code},
            )
            raise UpstreamFaultError(
                f"{service} request failed with HTTP {status_code}",
                status_code=status_code,
            ) from None
        except httpx.TimeoutException:
            logger.warning(f"{service} request timed out")
            raise UpstreamFaultError(
                f"{service} request timed out",
                is_timeout=True,
            ) from None
        except httpx.HTTPError as e:
            message = self._redact(str(e)) or type(e).__name__
            logger.error(f"Network error calling {service}: {message}")
            raise UpstreamFaultError(
                f"Network error calling {service}: {message}",
            ) from None

        try:
            payload = response.json()
        except ValueError:
            raise MalformedUpstreamPayloadError(
                f"{service} returned a response that is not valid JSON"
            ) from None

        if not isinstance(payload, dict):
            raise MalformedUpstreamPayloadError(
                f"{service} returned an unexpected payload type: {type(payload).__name__}"
            )

        return payload

    async def places_nearby(self, **params: Any) -> dict[str, Any]:
        return await self._get("place/nearbysearch/json", "Google Places API", params)

    async def place_details(self, **params: Any) -> dict[str, Any]:
        return await self._get("place/details/json", "Google Places API", params)

    async def geocode(self, **params: Any) -> dict[str, Any]:
        return await self._get("geocode/json", "Google Geocoding API", params)

    async def reverse_geocode(self, **params: Any) -> dict[str, Any]:
        return await self._get("geocode/json", "Google Geocoding API", params)

    async def distance_matrix(self, **params: Any) -> dict[str, Any]:
        return await self._get("distancematrix/json", "Google Distance Matrix API", params)

    async def directions(self, **params: Any) -> dict[str, Any]:
        return await self._get("directions/json", "Google Directions API", params)

    async def elevation(self, **params: Any) -> dict[str, Any]:
        return await self._get("elevation/json", "Google Elevation API", params)
