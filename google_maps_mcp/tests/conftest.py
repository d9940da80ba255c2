"""
pytest configuration for Google Maps MCP tests.
"""

import os
import sys
from pathlib import Path
from typing import Any

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

# Set test environment variables
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-api-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from google_maps_mcp.config import MapsConfig  # noqa: E402

TEST_API_KEY = "test-api-key"


class FakeMapsClient:
    """
    In-memory MapsBackend.

    ``responses`` maps an operation name to the payload it returns, or to an
    exception it raises. Every call is recorded in ``calls`` as
    ``(operation, params)``.
    """

    def __init__(self, responses: dict[str, Any] | None = None, config: MapsConfig | None = None):
        self.config = config or MapsConfig(api_key=TEST_API_KEY)
        self.responses = responses or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def _respond(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((operation, params))
        response = self.responses.get(operation, {"status": "ZERO_RESULTS", "results": []})
        if isinstance(response, Exception):
            raise response
        return response

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    async def places_nearby(self, **params: Any) -> dict[str, Any]:
        return await self._respond("places_nearby", params)

    async def place_details(self, **params: Any) -> dict[str, Any]:
        return await self._respond("place_details", params)

    async def geocode(self, **params: Any) -> dict[str, Any]:
        return await self._respond("geocode", params)

    async def reverse_geocode(self, **params: Any) -> dict[str, Any]:
        return await self._respond("reverse_geocode", params)

    async def distance_matrix(self, **params: Any) -> dict[str, Any]:
        return await self._respond("distance_matrix", params)

    async def directions(self, **params: Any) -> dict[str, Any]:
        return await self._respond("directions", params)

    async def elevation(self, **params: Any) -> dict[str, Any]:
        return await self._respond("elevation", params)


@pytest.fixture
def maps_config() -> MapsConfig:
    return MapsConfig(api_key=TEST_API_KEY, default_language="en", default_region="US")


@pytest.fixture
def fake_client(maps_config) -> FakeMapsClient:
    return FakeMapsClient(config=maps_config)


def pytest_configure(config):
    """Configure pytest."""
    print("\n" + "=" * 60)
    print("Google Maps MCP Server Tests")
    print(f"Log Level: {os.environ.get('LOG_LEVEL')}")
    print("=" * 60)
