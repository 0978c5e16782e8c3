"""Redis implementation of KeyValueStore.

Keeps the result cache's snapshots across process restarts. Values are
stored as plain strings under the cache's own keys (``cache_planets``, ...);
expiry is enforced by the cache itself, not by Redis TTLs.
"""

import logging

import redis

from challenge_solver.config import get_redis_client

logger = logging.getLogger(__name__)


class RedisKeyValueStore:
    """Redis-backed key-value store.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis store.

        Args:
            redis_client: Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls) -> "RedisKeyValueStore":
        """Factory method to create RedisKeyValueStore from settings."""
        return cls()

    def get(self, key: str) -> str | None:
        value = self._client.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._client.set(key, value)

    def delete(self, key: str) -> bool:
        result: int = self._client.delete(key)  # type: ignore[assignment]
        return result > 0

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
