"""
HTTP transport for upstream roster data.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import json

import httpx

from shared.logging import get_logger


@dataclass(frozen=True)
class TransportResponse:
    """Outcome of one upstream request."""

    success: bool
    status: int
    body: bytes = b""
    error: Optional[str] = None

    def json(self) -> Any:
        """Decode the body as JSON. Raises ValueError on malformed bodies."""
        return json.loads(self.body)


class HttpTransport:
    """Request primitive that reports upstream failure instead of raising."""

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self.logger = get_logger("roster.transport")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def request(self, url: str, params: Optional[Dict[str, Any]] = None) -> TransportResponse:
        """GET a URL. Network errors and timeouts surface as `success=False, status=0`."""
        try:
            response = await self._client.get(url, params=params, timeout=self.timeout)
        except httpx.HTTPError as exc:
            self.logger.warning("Upstream request failed", url=url, params=params, error=str(exc))
            return TransportResponse(success=False, status=0, error=str(exc))

        if response.is_success:
            self.logger.debug("Upstream request completed", url=url, status_code=response.status_code)
        else:
            self.logger.warning("Upstream returned error status", url=url, status_code=response.status_code)

        return TransportResponse(
            success=response.is_success,
            status=response.status_code,
            body=response.content
        )

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
