"""
Tests for the elevation tool.

Uses standard asyncio approach (not pytest-asyncio).
"""

import asyncio

from google_maps_mcp.models import Coordinates
from google_maps_mcp.tools.elevation import get_elevation


class TestGetElevation:
    """Tests for get_elevation."""

    def test_batch_request(self, fake_client):
        async def run_test():
            fake_client.responses["elevation"] = {
                "status": "OK",
                "results": [
                    {"elevation": 3775.9, "location": {"lat": 35.3606, "lng": 138.7274}, "resolution": 152.7},
                    {"elevation": -1.5, "location": {"lat": 0, "lng": 0}},
                ],
            }
            result = await get_elevation(
                fake_client,
                [
                    {"latitude": 35.3606, "longitude": 138.7274},
                    Coordinates(latitude=0, longitude=0),
                ],
            )

            assert result.success is True
            assert result.to_dict()["data"] == [
                {
                    "elevation": 3775.9,
                    "location": {"latitude": 35.3606, "longitude": 138.7274},
                    "resolution": 152.7,
                },
                {"elevation": -1.5, "location": {"latitude": 0.0, "longitude": 0.0}},
            ]
            assert fake_client.calls == [("elevation", {"locations": "35.3606,138.7274|0,0"})]

        asyncio.run(run_test())

    def test_one_bad_pair_fails_batch(self, fake_client):
        async def run_test():
            result = await get_elevation(
                fake_client,
                [
                    {"latitude": 10, "longitude": 10},
                    {"latitude": 10, "longitude": 200},
                ],
            )
            assert result.success is False
            assert "locations[1].longitude" in result.error
            assert fake_client.calls == []

        asyncio.run(run_test())

    def test_missing_longitude(self, fake_client):
        async def run_test():
            result = await get_elevation(fake_client, [{"latitude": 10}])
            assert result.error.startswith("INVALID_ARGUMENT: Invalid locations[0]")
            assert fake_client.calls == []

        asyncio.run(run_test())

    def test_empty_batch(self, fake_client):
        async def run_test():
            result = await get_elevation(fake_client, [])
            assert result.error == "INVALID_ARGUMENT: locations must contain at least one entry"

        asyncio.run(run_test())

    def test_upstream_error(self, fake_client):
        async def run_test():
            fake_client.responses["elevation"] = {"status": "INVALID_REQUEST", "error_message": "bad"}
            result = await get_elevation(fake_client, [{"latitude": 1, "longitude": 1}])
            assert result.error == "UPSTREAM_FAULT: Google Elevation API error: INVALID_REQUEST - bad"

        asyncio.run(run_test())
