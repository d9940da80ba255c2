"""
Tests for LocationInput normalization.

Uses standard asyncio approach (not pytest-asyncio).
"""

import asyncio

import pytest

from google_maps_mcp.errors import InvalidArgumentError, UpstreamEmptyError
from google_maps_mcp.models import LocationInput
from google_maps_mcp.tools.locations import parse_coordinates, parse_location_input


TOKYO_STATION = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "1 Chome Marunouchi, Chiyoda City, Tokyo",
            "place_id": "ChIJC3Cf2PuLGGAROO00ukl8JwA",
            "geometry": {"location": {"lat": 35.6812, "lng": 139.7671}},
        },
        {
            "formatted_address": "Somewhere else",
            "place_id": "second",
            "geometry": {"location": {"lat": 1, "lng": 1}},
        },
    ],
}


class TestParseCoordinates:
    """Tests for parse_coordinates."""

    def test_parses_pair(self):
        location = parse_coordinates("1,2")
        assert location.latitude == 1.0
        assert location.longitude == 2.0
        assert location.address is None

    def test_allows_whitespace_and_zero(self):
        location = parse_coordinates(" 0 , 0 ")
        assert (location.latitude, location.longitude) == (0.0, 0.0)

    @pytest.mark.parametrize("value", ["not,numbers", "1", "1,2,3", "", "1,nan"])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidArgumentError):
            parse_coordinates(value)

    def test_rejects_out_of_range(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_coordinates("91,0")
        assert "center.lat" in exc_info.value.message


class TestParseLocationInput:
    """Tests for parse_location_input."""

    def test_coordinates_skip_upstream(self, fake_client):
        async def run_test():
            location = await parse_location_input(
                fake_client, {"value": "35.6812,139.7671", "isCoordinates": True}
            )
            assert location.latitude == 35.6812
            assert location.longitude == 139.7671
            assert fake_client.calls == []

        asyncio.run(run_test())

    def test_free_text_uses_first_geocode_candidate(self, fake_client):
        async def run_test():
            fake_client.responses["geocode"] = TOKYO_STATION
            location = await parse_location_input(fake_client, LocationInput(value="Tokyo Station"))

            assert location.place_id == "ChIJC3Cf2PuLGGAROO00ukl8JwA"
            assert location.address == "1 Chome Marunouchi, Chiyoda City, Tokyo"
            assert fake_client.operations() == ["geocode"]
            _, params = fake_client.calls[0]
            assert params["address"] == "Tokyo Station"
            assert params["language"] == "en"
            assert params["region"] == "US"

        asyncio.run(run_test())

    def test_free_text_without_match(self, fake_client):
        async def run_test():
            fake_client.responses["geocode"] = {"status": "ZERO_RESULTS", "results": []}
            with pytest.raises(UpstreamEmptyError):
                await parse_location_input(fake_client, {"value": "Atlantis"})

        asyncio.run(run_test())

    def test_missing_value(self, fake_client):
        async def run_test():
            with pytest.raises(InvalidArgumentError):
                await parse_location_input(fake_client, {"isCoordinates": True})

        asyncio.run(run_test())
