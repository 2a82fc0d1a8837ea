"""
Cache package for the Roster Service.

Stores normalized generation results behind a synchronous key-value
capability: an in-memory store for process lifetime or Redis for a
shared session. Entries have no TTL.
"""

from .generation_cache import GenerationCache, build_cache
from .stores import KeyValueStore, MemoryStore, RedisStore

__all__ = [
    "GenerationCache",
    "KeyValueStore",
    "MemoryStore",
    "RedisStore",
    "build_cache",
]
