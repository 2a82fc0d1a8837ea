"""
Paginated listing API source (PokeAPI style).
"""

from typing import List, Optional

from shared.errors import ItemFetchFailed, UpstreamUnavailable
from shared.logging import get_logger

from ..adapters.transport import HttpTransport
from ..generations import GenerationConfig
from ..models import ItemReference, NormalizedItem
from ..normalize import normalize_item


class PaginatedApiSource:
    """Listing endpoint plus one detail request per item."""

    kind = "api"

    def __init__(self, transport: HttpTransport, base_url: str):
        self.transport = transport
        self.base_url = base_url.rstrip('/')
        self.logger = get_logger("roster.sources.api")

    def listing_url(self, config: GenerationConfig) -> str:
        return f"{self.base_url}/{config.endpoint.strip('/')}"

    async def fetch_listing(self, config: GenerationConfig) -> List[ItemReference]:
        """Fetch the item references for a generation.

        Any failure here is fatal for the whole generation request.
        """
        url = self.listing_url(config)
        params = {"limit": config.item_count, "offset": config.item_offset}
        response = await self.transport.request(url, params=params)

        if not response.success:
            raise UpstreamUnavailable(
                service_name(url),
                f"Listing request failed with status {response.status}",
                details={"url": url, "params": params, "status_code": response.status, "error": response.error}
            )

        try:
            results = response.json()["results"]
            references = [ItemReference.model_validate(entry) for entry in results]
        except (ValueError, KeyError, TypeError) as exc:
            # pydantic's ValidationError is a ValueError
            raise UpstreamUnavailable(
                service_name(url),
                "Listing body could not be decoded",
                details={"url": url, "error": str(exc)}
            ) from exc

        self.logger.info(
            "Listing fetched",
            generation=config.key,
            url=url,
            references=len(references)
        )
        return references

    async def fetch_detail(self, reference: ItemReference) -> Optional[NormalizedItem]:
        """Fetch and normalize one item; `None` when the item failed."""
        try:
            return await self._fetch_detail(reference)
        except ItemFetchFailed as exc:
            self.logger.warning(
                "Dropping item",
                item=reference.name,
                url=reference.url,
                reason=exc.message,
                details=exc.details
            )
            return None

    async def _fetch_detail(self, reference: ItemReference) -> NormalizedItem:
        response = await self.transport.request(reference.url)
        if not response.success:
            raise ItemFetchFailed(
                reference.name,
                f"Detail request failed with status {response.status}",
                details={"status_code": response.status, "error": response.error}
            )

        try:
            raw = response.json()
        except ValueError as exc:
            raise ItemFetchFailed(reference.name, "Detail body could not be decoded", {"error": str(exc)}) from exc

        try:
            return normalize_item(raw)
        except (KeyError, TypeError, ValueError) as exc:
            raise ItemFetchFailed(reference.name, "Detail record is missing expected fields", {"error": repr(exc)}) from exc


def service_name(url: str) -> str:
    """Short upstream name for error messages."""
    return url.split("//", 1)[-1].split("/", 1)[0] or "upstream"
