"""
Roster service for generation creature data.
"""

from typing import Dict, Optional

from fastapi.responses import JSONResponse

from shared.base_service import BaseService

from .cache import RedisStore
from .fetcher import GenerationDataFetcher, build_fetcher
from .generations import GENERATIONS


class RosterService(BaseService):
    """Roster service implementation."""

    def __init__(self, fetcher: Optional[GenerationDataFetcher] = None):
        super().__init__("roster", 8020)

        self.fetcher = fetcher or build_fetcher(self.config, metrics=self.metrics)

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.fetcher.aclose()

        self._setup_roster_routes()

    def _setup_roster_routes(self):
        """Set up roster-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "roster",
                "message": "Generation Roster Service",
                "version": "1.0.0",
                "data_source": self.fetcher.source.kind,
                "capabilities": ["generation_roster", "caching"]
            }

        @self.app.get("/generations")
        async def list_generations():
            """List configured generations."""
            return {
                "generations": [
                    {"key": config.key, "title": config.title, "item_count": config.item_count}
                    for config in GENERATIONS.values()
                ]
            }

        @self.app.get("/generations/{key}")
        async def get_generation(key: str):
            """Return the normalized roster for a generation."""
            result = await self.fetcher.fetch_generation_data(key)
            return JSONResponse(content=result.model_dump(mode="json", by_alias=True))

    async def _check_dependencies(self) -> Dict[str, str]:
        """Check the cache backend."""
        store = self.fetcher.cache.store
        if isinstance(store, RedisStore):
            return {"redis": "ok" if store.ping() else "error"}
        return {"cache": "memory"}


def create_app():
    """Create FastAPI application."""
    service = RosterService()
    return service.app


if __name__ == "__main__":
    service = RosterService()
    service.run()
