"""
Generation data fetcher.

Resolves a generation key to a cached `GenerationResult` or runs the
fetch-normalize-cache pipeline for it:

    key -> cache hit
        -> resolve -> listing -> parallel detail fetches -> drop failures
           -> assemble {title, items} -> cache write -> result

Only whole-generation failures (`InvalidGenerationKey`,
`UpstreamUnavailable`) reach the caller. Nothing is retried.
"""

import asyncio
import time
from typing import Dict, List, Optional, Sequence

from shared.config import BaseConfig
from shared.logging import get_logger
from shared.metrics import MetricsCollector

from .cache import GenerationCache, build_cache
from .generations import GENERATIONS, GenerationConfig, resolve
from .models import GenerationResult, ItemReference, NormalizedItem
from .sources import DataSource, StaticAggregateSource, build_data_source


class GenerationDataFetcher:
    """Cache gate plus fetch-and-normalize pipeline."""

    def __init__(
        self,
        cache: GenerationCache,
        source: DataSource,
        *,
        detail_concurrency: Optional[int] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.cache = cache
        self.source = source
        self.metrics = metrics
        self.logger = get_logger("roster.fetcher")
        self._detail_semaphore = asyncio.Semaphore(detail_concurrency) if detail_concurrency else None
        # Concurrent callers for the same key share one pipeline
        self._inflight: Dict[str, "asyncio.Task[GenerationResult]"] = {}

    async def fetch_generation_data(self, key: str) -> GenerationResult:
        """Return the roster for a generation key."""
        cached = self.cache.get(key)
        if cached is not None:
            self._record_lookup(key, hit=True)
            self.logger.debug("Generation cache hit", generation=key)
            return cached

        config = resolve(key)
        self._record_lookup(config.key, hit=False)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._fetch_and_cache(config))
            self._inflight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            self.logger.debug("Joining in-flight generation fetch", generation=key)

        # An abandoned caller must not cancel fetches already in flight
        return await asyncio.shield(task)

    async def aclose(self) -> None:
        """Release the source transport and the cache connection."""
        transport = getattr(self.source, "transport", None)
        if transport is not None:
            await transport.aclose()
        self.cache.close()

    def _record_lookup(self, key: str, hit: bool) -> None:
        # Only configured keys become label values
        if self.metrics and key in GENERATIONS:
            self.metrics.record_cache_lookup(key, hit=hit)

    def _forget(self, key: str, task: "asyncio.Task[GenerationResult]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if not task.cancelled() and task.exception() is not None:
            self.logger.info("Generation fetch failed", generation=key, error=str(task.exception()))

    async def _fetch_and_cache(self, config: GenerationConfig) -> GenerationResult:
        start = time.perf_counter()

        if isinstance(self.source, StaticAggregateSource):
            result = await self.source.load(config)
        else:
            references = await self.source.fetch_listing(config)
            items = await self._fetch_items(config, references)
            result = GenerationResult(title=config.title, items=tuple(items))

        self.cache.put(config.key, result)

        duration = time.perf_counter() - start
        if self.metrics:
            self.metrics.observe_fetch_duration(config.key, self.source.kind, duration)

        self.logger.info(
            "Generation fetched",
            generation=config.key,
            source=self.source.kind,
            items=len(result.items),
            duration_ms=round(duration * 1000, 2)
        )
        return result

    async def _fetch_items(
        self,
        config: GenerationConfig,
        references: Sequence[ItemReference],
    ) -> List[NormalizedItem]:
        """Fetch every detail concurrently; wait for all, keep listing order."""
        outcomes = await asyncio.gather(
            *(self._fetch_detail(reference) for reference in references),
            return_exceptions=True
        )

        items: List[NormalizedItem] = []
        for reference, outcome in zip(references, outcomes):
            if isinstance(outcome, BaseException):
                self.logger.error(
                    "Detail fetch raised",
                    generation=config.key,
                    item=reference.name,
                    error=repr(outcome)
                )
            elif outcome is not None:
                items.append(outcome)

        dropped = len(references) - len(items)
        if dropped:
            self.logger.warning(
                "Items dropped from generation",
                generation=config.key,
                dropped=dropped,
                total=len(references)
            )
            if self.metrics:
                self.metrics.record_item_failures(config.key, dropped)

        return items

    async def _fetch_detail(self, reference: ItemReference) -> Optional[NormalizedItem]:
        if self._detail_semaphore is None:
            return await self.source.fetch_detail(reference)
        async with self._detail_semaphore:
            return await self.source.fetch_detail(reference)


def build_fetcher(config: BaseConfig, metrics: Optional[MetricsCollector] = None) -> GenerationDataFetcher:
    """Build a fetcher from settings."""
    return GenerationDataFetcher(
        build_cache(config),
        build_data_source(config),
        detail_concurrency=config.detail_concurrency,
        metrics=metrics,
    )


_default_fetcher: Optional[GenerationDataFetcher] = None


def get_default_fetcher() -> GenerationDataFetcher:
    """Process-wide fetcher built from environment settings on first use."""
    global _default_fetcher
    if _default_fetcher is None:
        _default_fetcher = build_fetcher(BaseConfig())
    return _default_fetcher


async def fetch_generation_data(key: str) -> GenerationResult:
    """Fetch the roster for a generation key using the default fetcher."""
    return await get_default_fetcher().fetch_generation_data(key)
