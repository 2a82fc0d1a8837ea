"""
Unit tests for the paginated and static data sources.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock

from service_roster.app.adapters.transport import HttpTransport, TransportResponse
from service_roster.app.generations import resolve
from service_roster.app.models import GenerationResult, ItemReference
from service_roster.app.sources import (
    PaginatedApiSource,
    StaticAggregateSource,
    build_data_source,
)
from shared.config import BaseConfig
from shared.errors import UpstreamUnavailable
from shared.test_helpers import API_BASE_URL, TestDataFactory, create_mock_api, detail_url


def _ok(payload) -> TransportResponse:
    return TransportResponse(success=True, status=200, body=json.dumps(payload).encode())


class TestPaginatedApiSource:
    """Test cases for PaginatedApiSource."""

    @pytest.fixture
    def records(self):
        return TestDataFactory.create_kanto_starters()

    @pytest.fixture
    def transport(self):
        transport = AsyncMock(spec=HttpTransport)
        return transport

    @pytest.fixture
    def source(self, transport):
        return PaginatedApiSource(transport, API_BASE_URL + "/")

    @pytest.mark.asyncio
    async def test_fetch_listing_uses_config_paging(self, source, transport, records):
        """Test listing request carries limit/offset from the generation config."""
        transport.request.return_value = _ok(TestDataFactory.create_listing(records))

        references = await source.fetch_listing(resolve("johto"))

        transport.request.assert_awaited_once_with(
            f"{API_BASE_URL}/pokemon", params={"limit": 100, "offset": 151}
        )
        assert [ref.name for ref in references] == ["bulbasaur", "charmander", "squirtle"]
        assert references[0].url == detail_url("bulbasaur")

    @pytest.mark.asyncio
    async def test_fetch_listing_error_status(self, source, transport):
        """Test a failed listing raises UpstreamUnavailable."""
        transport.request.return_value = TransportResponse(success=False, status=500, body=b"")

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await source.fetch_listing(resolve("kanto"))

        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_fetch_listing_network_error(self, source, transport):
        """Test a transport-level failure raises UpstreamUnavailable."""
        transport.request.return_value = TransportResponse(success=False, status=0, error="timed out")

        with pytest.raises(UpstreamUnavailable):
            await source.fetch_listing(resolve("kanto"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"not json", b"{}", b'{"results": 5}', b'{"results": [{"name": "x"}]}'])
    async def test_fetch_listing_bad_body(self, source, transport, body):
        """Test undecodable listings raise UpstreamUnavailable."""
        transport.request.return_value = TransportResponse(success=True, status=200, body=body)

        with pytest.raises(UpstreamUnavailable):
            await source.fetch_listing(resolve("kanto"))

    @pytest.mark.asyncio
    async def test_fetch_detail_success(self, source, transport, records):
        """Test a detail record is fetched and normalized."""
        transport.request.return_value = _ok(records[1])
        reference = ItemReference(name="charmander", url=detail_url("charmander"))

        item = await source.fetch_detail(reference)

        transport.request.assert_awaited_once_with(detail_url("charmander"))
        assert item.id == 4
        assert item.types == ("fire",)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            TransportResponse(success=False, status=404, body=b"Not Found"),
            TransportResponse(success=False, status=0, error="connection reset"),
            TransportResponse(success=True, status=200, body=b"{broken"),
            TransportResponse(success=True, status=200, body=b'{"id": 1, "name": "x"}'),
        ],
    )
    async def test_fetch_detail_failure_returns_none(self, source, transport, response):
        """Test any detail failure yields None instead of raising."""
        transport.request.return_value = response
        reference = ItemReference(name="missingno", url=detail_url("missingno"))

        assert await source.fetch_detail(reference) is None

    @pytest.mark.asyncio
    async def test_against_mock_api(self, records):
        """Test the source end to end over an httpx mock transport."""
        handler = create_mock_api(records, failing={"squirtle": 500})
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        source = PaginatedApiSource(HttpTransport(client=client), API_BASE_URL)

        references = await source.fetch_listing(resolve("kanto"))
        items = [await source.fetch_detail(ref) for ref in references]

        assert [item.name if item else None for item in items] == ["bulbasaur", "charmander", None]
        await client.aclose()


class TestStaticAggregateSource:
    """Test cases for StaticAggregateSource."""

    @pytest.fixture
    def aggregate(self):
        return {
            "title": "Pokémon LeafGreen",
            "items": [
                {
                    "id": 25,
                    "name": "pikachu",
                    "types": ["electric"],
                    "abilities": ["static"],
                    "stats": {"hp": 35, "atk": 55, "def": 40, "spa": 50, "spd": 50, "spe": 90},
                    "locations": ["viridian-forest"],
                    "evolvesTo": None,
                    "evoMethod": None,
                }
            ],
        }

    @pytest.mark.asyncio
    async def test_load_from_directory(self, tmp_path, aggregate):
        """Test loading a pre-built file from disk."""
        (tmp_path / "leafgreen-data.json").write_text(json.dumps(aggregate), encoding="utf-8")
        source = StaticAggregateSource(tmp_path)

        result = await source.load(resolve("kanto"))

        assert isinstance(result, GenerationResult)
        assert result.title == "Pokémon LeafGreen"
        assert result.items[0].stats.def_ == 40
        assert result.items[0].locations == ("viridian-forest",)

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        """Test a missing file raises UpstreamUnavailable."""
        source = StaticAggregateSource(tmp_path)

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await source.load(resolve("johto"))

        assert "crystal-data.json" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_file(self, tmp_path):
        """Test a malformed file raises UpstreamUnavailable."""
        (tmp_path / "emerald-data.json").write_text('{"items": []}', encoding="utf-8")
        source = StaticAggregateSource(tmp_path)

        with pytest.raises(UpstreamUnavailable):
            await source.load(resolve("hoenn"))

    @pytest.mark.asyncio
    async def test_load_from_base_url(self, aggregate):
        """Test loading a pre-built file over HTTP."""
        transport = AsyncMock(spec=HttpTransport)
        transport.request.return_value = _ok(aggregate)
        source = StaticAggregateSource("https://cdn.test/data/", transport)

        result = await source.load(resolve("kanto"))

        transport.request.assert_awaited_once_with("https://cdn.test/data/leafgreen-data.json")
        assert result.items[0].name == "pikachu"

    @pytest.mark.asyncio
    async def test_remote_not_found(self):
        """Test a remote 404 raises UpstreamUnavailable."""
        transport = AsyncMock(spec=HttpTransport)
        transport.request.return_value = TransportResponse(success=False, status=404)
        source = StaticAggregateSource("https://cdn.test/data", transport)

        with pytest.raises(UpstreamUnavailable):
            await source.load(resolve("kanto"))


def test_build_data_source_selects_variant():
    """Test the configured data source variant is built."""
    api = build_data_source(BaseConfig(data_source="api", pokeapi_url=API_BASE_URL))
    static = build_data_source(BaseConfig(data_source="static", static_data_root="/srv/data"))

    assert isinstance(api, PaginatedApiSource)
    assert api.base_url == API_BASE_URL
    assert isinstance(static, StaticAggregateSource)
    assert static.root == "/srv/data"
