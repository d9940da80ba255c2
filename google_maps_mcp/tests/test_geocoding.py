"""
Tests for geocoding tools.

This module tests:
- geocode (address to coordinates)
- reverse_geocode (coordinates to address)

Uses standard asyncio approach (not pytest-asyncio).
"""

import asyncio

import pytest

from google_maps_mcp.errors import UpstreamFaultError
from google_maps_mcp.tools.geocoding import geocode, reverse_geocode


TOKYO_TOWER = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "4 Chome-2-8 Shibakoen, Minato City, Tokyo 105-0011, Japan",
            "place_id": "ChIJCewJkL2LGGAR3Qmk0vCTGkg",
            "geometry": {"location": {"lat": 35.6585805, "lng": 139.7454329}},
        }
    ],
}


class TestGeocode:
    """Tests for geocode function."""

    def test_geocode_tokyo_tower(self, fake_client):
        async def run_test():
            fake_client.responses["geocode"] = TOKYO_TOWER
            result = await geocode(fake_client, "Tokyo Tower")

            assert result.success is True
            assert result.to_dict() == {
                "success": True,
                "data": {
                    "latitude": 35.6585805,
                    "longitude": 139.7454329,
                    "address": "4 Chome-2-8 Shibakoen, Minato City, Tokyo 105-0011, Japan",
                    "placeId": "ChIJCewJkL2LGGAR3Qmk0vCTGkg",
                },
            }

        asyncio.run(run_test())

    def test_geocode_zero_results(self, fake_client):
        """Zero results is a failure, never success with empty data."""
        async def run_test():
            fake_client.responses["geocode"] = {"status": "ZERO_RESULTS", "results": []}
            result = await geocode(fake_client, "Nowhere At All")

            assert result.success is False
            assert result.data is None
            assert result.error == "UPSTREAM_EMPTY: No results found for the given address"
            assert "data" not in result.to_dict()

        asyncio.run(run_test())

    def test_geocode_ok_with_empty_list(self, fake_client):
        async def run_test():
            fake_client.responses["geocode"] = {"status": "OK", "results": []}
            result = await geocode(fake_client, "Nowhere")
            assert result.error.startswith("UPSTREAM_EMPTY:")

        asyncio.run(run_test())

    def test_geocode_empty_query(self, fake_client):
        async def run_test():
            result = await geocode(fake_client, "")
            assert result.success is False
            assert result.error == "INVALID_ARGUMENT: address is required and cannot be empty"
            assert fake_client.calls == []

        asyncio.run(run_test())

    def test_geocode_over_query_limit(self, fake_client):
        async def run_test():
            fake_client.responses["geocode"] = {"status": "OVER_QUERY_LIMIT"}
            result = await geocode(fake_client, "Tokyo")
            assert result.error == (
                "UPSTREAM_FAULT: Google Geocoding API error: OVER_QUERY_LIMIT - Unknown error"
            )

        asyncio.run(run_test())

    def test_geocode_missing_geometry(self, fake_client):
        async def run_test():
            fake_client.responses["geocode"] = {"status": "OK", "results": [{"place_id": "x"}]}
            result = await geocode(fake_client, "Tokyo")
            assert result.error.startswith("MALFORMED_UPSTREAM_PAYLOAD:")

        asyncio.run(run_test())

    def test_geocode_transport_failure(self, fake_client):
        async def run_test():
            fake_client.responses["geocode"] = UpstreamFaultError(
                "Google Geocoding API request timed out", is_timeout=True
            )
            result = await geocode(fake_client, "Tokyo")
            assert result.error == "TIMEOUT: Google Geocoding API request timed out"

        asyncio.run(run_test())

    def test_geocode_unexpected_exception(self, fake_client):
        async def run_test():
            fake_client.responses["geocode"] = RuntimeError("socket exploded")
            result = await geocode(fake_client, "Tokyo")
            assert result.error == "UNKNOWN_ERROR: Unexpected error: RuntimeError: socket exploded"

        asyncio.run(run_test())


class TestReverseGeocode:
    """Tests for reverse_geocode function."""

    def test_echoes_input_coordinates(self, fake_client):
        async def run_test():
            fake_client.responses["reverse_geocode"] = TOKYO_TOWER
            result = await reverse_geocode(fake_client, 35.6586, 139.7454)

            assert result.success is True
            assert result.data.latitude == 35.6586
            assert result.data.longitude == 139.7454
            assert result.data.place_id == "ChIJCewJkL2LGGAR3Qmk0vCTGkg"

            _, params = fake_client.calls[0]
            assert params == {"latlng": "35.6586,139.7454", "language": "en"}

        asyncio.run(run_test())

    def test_null_island_is_valid(self, fake_client):
        async def run_test():
            fake_client.responses["reverse_geocode"] = {
                "status": "OK",
                "results": [{"formatted_address": "Gulf of Guinea", "place_id": "g"}],
            }
            result = await reverse_geocode(fake_client, 0, 0)
            assert result.success is True
            assert fake_client.calls[0][1]["latlng"] == "0,0"

        asyncio.run(run_test())

    def test_small_coordinates_in_fixed_point(self, fake_client):
        async def run_test():
            fake_client.responses["reverse_geocode"] = TOKYO_TOWER
            result = await reverse_geocode(fake_client, 0.00001, -0.00005)
            assert result.success is True
            assert fake_client.calls[0][1]["latlng"] == "0.00001,-0.00005"

        asyncio.run(run_test())

    @pytest.mark.parametrize("lat, lng", [(90.1, 0), (-91, 0), (0, 180.1), (0, -181)])
    def test_out_of_range(self, fake_client, lat, lng):
        async def run_test():
            result = await reverse_geocode(fake_client, lat, lng)
            assert result.success is False
            assert result.error.startswith("INVALID_ARGUMENT:")
            assert fake_client.calls == []

        asyncio.run(run_test())

    def test_zero_results(self, fake_client):
        async def run_test():
            fake_client.responses["reverse_geocode"] = {"status": "ZERO_RESULTS", "results": []}
            result = await reverse_geocode(fake_client, 10, 10)
            assert result.error == "UPSTREAM_EMPTY: No results found for the given coordinates"

        asyncio.run(run_test())
