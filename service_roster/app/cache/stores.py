"""
Key-value stores backing the generation cache.
"""

from typing import Dict, Optional, Protocol

import redis

from shared.logging import get_logger


class KeyValueStore(Protocol):
    """Synchronous byte store. Entries never expire."""

    def read(self, key: str) -> Optional[bytes]:
        ...

    def write(self, key: str, value: bytes) -> bool:
        ...


class MemoryStore:
    """Process-lifetime store."""

    def __init__(self):
        self._data: Dict[str, bytes] = {}

    def read(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def write(self, key: str, value: bytes) -> bool:
        self._data[key] = bytes(value)
        return True

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class RedisStore:
    """Session-lifetime store on Redis. Values are written without a TTL."""

    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None):
        self.redis_url = redis_url
        self.logger = get_logger("roster.cache.redis")
        self.redis = client or redis.Redis.from_url(
            redis_url,
            socket_connect_timeout=5,
            socket_timeout=5,
            health_check_interval=30
        )

    def read(self, key: str) -> Optional[bytes]:
        """Read an entry; an unreachable Redis reads as a miss."""
        try:
            value = self.redis.get(key)
        except redis.RedisError as e:
            self.logger.error("Cache get error", key=key, error=str(e))
            return None

        if value is None:
            return None
        return value if isinstance(value, bytes) else str(value).encode("utf-8")

    def write(self, key: str, value: bytes) -> bool:
        try:
            self.redis.set(key, value)
        except redis.RedisError as e:
            self.logger.error("Cache set error", key=key, error=str(e))
            return False

        self.logger.debug("Stored cache entry", key=key, size=len(value))
        return True

    def ping(self) -> bool:
        return bool(self.redis.ping())

    def close(self) -> None:
        self.redis.close()
