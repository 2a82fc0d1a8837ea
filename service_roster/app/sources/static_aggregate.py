"""
Pre-built aggregate file source.

Deployments that ship pre-computed rosters point `root` at a directory or an
http(s) base URL holding one JSON file per generation. The file already has
the `GenerationResult` shape, so listing and detail fetch collapse into a
single load.
"""

import asyncio
from pathlib import Path
from typing import Optional, Union

from shared.errors import UpstreamUnavailable
from shared.logging import get_logger

from ..adapters.transport import HttpTransport
from ..generations import GenerationConfig
from ..models import GenerationResult


class StaticAggregateSource:
    """Loads a complete `GenerationResult` from one static file."""

    kind = "static"

    def __init__(self, root: Union[str, Path], transport: Optional[HttpTransport] = None):
        self.root = str(root)
        self.transport = transport
        self.logger = get_logger("roster.sources.static")

    @property
    def is_remote(self) -> bool:
        return self.root.startswith(("http://", "https://"))

    def location(self, config: GenerationConfig) -> str:
        if self.is_remote:
            return f"{self.root.rstrip('/')}/{config.static_file}"
        return str(Path(self.root) / config.static_file)

    async def load(self, config: GenerationConfig) -> GenerationResult:
        """Load and validate the aggregate file for a generation."""
        location = self.location(config)
        self.logger.info("Loading pre-built data", generation=config.key, location=location)

        payload = await self._read(location)
        try:
            result = GenerationResult.from_json_bytes(payload)
        except ValueError as exc:
            raise UpstreamUnavailable(
                "static_data",
                f"Could not decode the data file: {config.static_file}",
                details={"location": location, "error": str(exc)}
            ) from exc

        self.logger.info("Pre-built data loaded", generation=config.key, items=len(result.items))
        return result

    async def _read(self, location: str) -> bytes:
        if self.is_remote:
            if self.transport is None:
                raise UpstreamUnavailable("static_data", "No transport configured for remote data files")
            response = await self.transport.request(location)
            if not response.success:
                raise UpstreamUnavailable(
                    "static_data",
                    f"Could not find the data file: {location}",
                    details={"location": location, "status_code": response.status, "error": response.error}
                )
            return response.body

        try:
            return await asyncio.to_thread(Path(location).read_bytes)
        except OSError as exc:
            raise UpstreamUnavailable(
                "static_data",
                f"Could not find the data file: {location}",
                details={"location": location, "error": str(exc)}
            ) from exc
