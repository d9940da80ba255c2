"""
Tests for the Google Maps HTTP client.

Requests are served by httpx.MockTransport; nothing reaches the network.

Uses standard asyncio approach (not pytest-asyncio).
"""

import asyncio

import httpx
import pytest

from google_maps_mcp.errors import (
    ErrorCode,
    MalformedUpstreamPayloadError,
    UpstreamFaultError,
)
from google_maps_mcp.maps_client import GOOGLE_MAPS_API_URL, GoogleMapsClient
from google_maps_mcp.tools.geocoding import geocode


def _client(maps_config, handler):
    return GoogleMapsClient(
        maps_config,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestGoogleMapsClient:
    """Tests for GoogleMapsClient."""

    def test_adds_key_and_drops_none(self, maps_config):
        async def run_test():
            seen = []

            def handler(request):
                seen.append(request)
                return httpx.Response(200, json={"status": "OK", "results": []})

            async with _client(maps_config, handler) as client:
                payload = await client.places_nearby(location="1,2", radius="500", keyword=None)

            assert payload == {"status": "OK", "results": []}
            request = seen[0]
            assert str(request.url).startswith(f"{GOOGLE_MAPS_API_URL}/place/nearbysearch/json")
            assert request.url.params["key"] == "test-api-key"
            assert request.url.params["location"] == "1,2"
            assert "keyword" not in request.url.params

        asyncio.run(run_test())

    @pytest.mark.parametrize(
        "method, path",
        [
            ("place_details", "place/details/json"),
            ("geocode", "geocode/json"),
            ("reverse_geocode", "geocode/json"),
            ("distance_matrix", "distancematrix/json"),
            ("directions", "directions/json"),
            ("elevation", "elevation/json"),
        ],
    )
    def test_endpoints(self, maps_config, method, path):
        async def run_test():
            seen = []

            def handler(request):
                seen.append(request.url.path)
                return httpx.Response(200, json={"status": "OK"})

            async with _client(maps_config, handler) as client:
                await getattr(client, method)()

            assert seen == [f"/maps/api/{path}"]

        asyncio.run(run_test())

    def test_http_error_status(self, maps_config):
        async def run_test():
            def handler(request):
                return httpx.Response(503, text="unavailable")

            async with _client(maps_config, handler) as client:
                with pytest.raises(UpstreamFaultError) as exc_info:
                    await client.directions(origin="A", destination="B")

            assert exc_info.value.status_code == 503
            assert exc_info.value.message == "Google Directions API request failed with HTTP 503"

        asyncio.run(run_test())

    def test_timeout(self, maps_config):
        async def run_test():
            def handler(request):
                raise httpx.ReadTimeout("timed out", request=request)

            async with _client(maps_config, handler) as client:
                with pytest.raises(UpstreamFaultError) as exc_info:
                    await client.elevation(locations="0,0")

            assert exc_info.value.code == ErrorCode.TIMEOUT

        asyncio.run(run_test())

    def test_network_error_redacts_key(self, maps_config):
        async def run_test():
            def handler(request):
                raise httpx.ConnectError(f"cannot connect to {request.url}", request=request)

            async with _client(maps_config, handler) as client:
                with pytest.raises(UpstreamFaultError) as exc_info:
                    await client.geocode(address="Tokyo")

            assert "test-api-key" not in exc_info.value.message
            assert "***" in exc_info.value.message
            assert exc_info.value.code == ErrorCode.UPSTREAM_FAULT

        asyncio.run(run_test())

    def test_invalid_json(self, maps_config):
        async def run_test():
            def handler(request):
                return httpx.Response(200, text="<html>oops</html>")

            async with _client(maps_config, handler) as client:
                with pytest.raises(MalformedUpstreamPayloadError):
                    await client.geocode(address="Tokyo")

        asyncio.run(run_test())

    def test_non_object_payload(self, maps_config):
        async def run_test():
            def handler(request):
                return httpx.Response(200, json=["not", "an", "object"])

            async with _client(maps_config, handler) as client:
                with pytest.raises(MalformedUpstreamPayloadError):
                    await client.geocode(address="Tokyo")

        asyncio.run(run_test())

    def test_adapter_over_real_client(self, maps_config):
        """Transport failures surface as a failure envelope, never an exception."""
        async def run_test():
            def handler(request):
                return httpx.Response(500)

            async with _client(maps_config, handler) as client:
                result = await geocode(client, "Tokyo")

            assert result.success is False
            assert result.error == "UPSTREAM_FAULT: Google Geocoding API request failed with HTTP 500"

        asyncio.run(run_test())
