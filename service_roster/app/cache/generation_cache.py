"""
Cache gate for generation results.
"""

from typing import Optional

from shared.config import BaseConfig
from shared.logging import get_logger

from ..models import GenerationResult
from .stores import KeyValueStore, MemoryStore, RedisStore


class GenerationCache:
    """Generation key -> serialized `GenerationResult`.

    Entries are never expired or invalidated. Every hit returns a freshly
    decoded copy, so no caller holds a reference to the stored value.
    """

    def __init__(self, store: KeyValueStore, prefix: str = "roster:generation"):
        self.store = store
        self.prefix = prefix
        self.logger = get_logger("roster.cache")

    def cache_key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: str) -> Optional[GenerationResult]:
        """Return the cached result for a generation, or None on a miss."""
        cache_key = self.cache_key(key)
        payload = self.store.read(cache_key)
        if payload is None:
            return None

        try:
            return GenerationResult.from_json_bytes(payload)
        except ValueError as e:
            self.logger.warning("Failed to deserialize cached generation", key=cache_key, error=str(e))
            return None

    def put(self, key: str, result: GenerationResult) -> bool:
        """Store a result. Returns False when the backing store rejected the write."""
        cache_key = self.cache_key(key)
        stored = self.store.write(cache_key, result.to_json_bytes())
        if stored:
            self.logger.debug("Cached generation", key=cache_key, items=len(result.items))
        else:
            self.logger.warning("Generation not cached", key=cache_key)
        return stored

    def close(self) -> None:
        """Close the backing connection when there is one."""
        if isinstance(self.store, RedisStore):
            self.store.close()


def build_cache(config: BaseConfig) -> GenerationCache:
    """Build the cache selected by `config.cache_backend`."""
    if config.cache_backend == "redis":
        store: KeyValueStore = RedisStore(config.redis_url)
    else:
        store = MemoryStore()
    return GenerationCache(store, prefix=config.cache_prefix)
