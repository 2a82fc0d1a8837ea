"""
Test helper functions and factory methods for the Generation Roster service.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx


API_BASE_URL = "https://pokeapi.test/api/v2"

_STAT_NAMES = ["hp", "attack", "defense", "special-attack", "special-defense", "speed"]


class TestDataFactory:
    """Factory for creating upstream-shaped test data."""

    @staticmethod
    def create_raw_pokemon(
        pokemon_id: int,
        name: str,
        types: Optional[List[str]] = None,
        abilities: Optional[List[str]] = None,
        base_stats: Optional[Dict[str, int]] = None,
    ) -> Dict[str, Any]:
        """Create a detail record the way the paginated API returns it."""
        types = types or ["normal"]
        abilities = abilities or ["run-away"]
        if base_stats is None:
            base_stats = {stat: 40 + index for index, stat in enumerate(_STAT_NAMES)}

        return {
            "id": pokemon_id,
            "name": name,
            "base_experience": 64,
            "height": 7,
            "weight": 69,
            "types": [
                {"slot": slot, "type": {"name": type_name, "url": f"{API_BASE_URL}/type/{type_name}/"}}
                for slot, type_name in enumerate(types, start=1)
            ],
            "abilities": [
                {
                    "ability": {"name": ability, "url": f"{API_BASE_URL}/ability/{ability}/"},
                    "is_hidden": index > 0,
                    "slot": index + 1,
                }
                for index, ability in enumerate(abilities)
            ],
            "stats": [
                {"base_stat": value, "effort": 0, "stat": {"name": stat, "url": f"{API_BASE_URL}/stat/{stat}/"}}
                for stat, value in base_stats.items()
            ],
        }

    @staticmethod
    def create_kanto_starters() -> List[Dict[str, Any]]:
        """Create the three Kanto starters."""
        return [
            TestDataFactory.create_raw_pokemon(
                1, "bulbasaur", ["grass", "poison"], ["overgrow", "chlorophyll"],
                {"hp": 45, "attack": 49, "defense": 49, "special-attack": 65, "special-defense": 65, "speed": 45},
            ),
            TestDataFactory.create_raw_pokemon(
                4, "charmander", ["fire"], ["blaze", "solar-power"],
                {"hp": 39, "attack": 52, "defense": 43, "special-attack": 60, "special-defense": 50, "speed": 65},
            ),
            TestDataFactory.create_raw_pokemon(
                7, "squirtle", ["water"], ["torrent", "rain-dish"],
                {"hp": 44, "attack": 48, "defense": 65, "special-attack": 50, "special-defense": 64, "speed": 43},
            ),
        ]

    @staticmethod
    def create_listing(records: List[Dict[str, Any]], base_url: str = API_BASE_URL) -> Dict[str, Any]:
        """Create a listing page referencing the given detail records."""
        return {
            "count": 1302,
            "next": None,
            "previous": None,
            "results": [
                {"name": record["name"], "url": detail_url(record["name"], base_url)}
                for record in records
            ],
        }


def detail_url(name: str, base_url: str = API_BASE_URL) -> str:
    """Detail location used by generated listings."""
    return f"{base_url}/pokemon/{name}/"


def create_mock_api(
    records: List[Dict[str, Any]],
    failing: Optional[Dict[str, int]] = None,
    listing_status: int = 200,
    base_url: str = API_BASE_URL,
    calls: Optional[List[httpx.Request]] = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Build an `httpx.MockTransport` handler serving a listing and its details.

    `failing` maps item names to the status code their detail request returns.
    Every handled request is appended to `calls` when given.
    """
    failing = failing or {}
    by_url = {detail_url(record["name"], base_url): record for record in records}
    listing = TestDataFactory.create_listing(records, base_url)

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)

        url = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        if url == f"{base_url}/pokemon":
            if listing_status != 200:
                return httpx.Response(listing_status, text="unavailable")
            return httpx.Response(200, content=json.dumps(listing))

        record = by_url.get(url)
        if record is None:
            return httpx.Response(404, text="Not Found")
        if record["name"] in failing:
            return httpx.Response(failing[record["name"]], text="error")
        return httpx.Response(200, content=json.dumps(record))

    return handler
