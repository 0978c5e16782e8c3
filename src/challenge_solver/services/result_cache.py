"""TTL and version-bounded cache for the reference datasets.

Each dataset is stored under a well-known key as a serialized
``{"data", "timestamp", "version"}`` snapshot in a KeyValueStore. Entries that
are corrupt, stale or written by another schema version are deleted on read.
"""

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from challenge_solver.config import settings
from challenge_solver.entities import CacheEntryEntity
from challenge_solver.protocols import KeyValueStore

logger = logging.getLogger(__name__)

CREATURE_REDUCED_FIELDS = ("name", "base_experience", "height", "weight")


class CacheKey(str, Enum):
    PLANETS = "planets"
    PEOPLE = "people"
    POKEMON = "pokemon"

    @property
    def storage_key(self) -> str:
        return f"cache_{self.value}"


@dataclass(frozen=True)
class CacheConfig:
    """Per-key cache policy.

    Attributes:
        ttl: Maximum entry age in seconds
        max_size: Maximum serialized size in bytes, or None for no limit
        reducer: Lossy transform tried once when the payload is too large
    """

    ttl: float
    max_size: int | None = None
    reducer: Callable[[Any], Any] | None = None


def reduce_pokemon_payload(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep only identity and a small numeric subset of each creature."""
    return [{field: record.get(field) for field in CREATURE_REDUCED_FIELDS} for record in records]


def default_configs() -> dict[CacheKey, CacheConfig]:
    """Cache policies configured through environment variables."""
    return {
        CacheKey.PLANETS: CacheConfig(ttl=settings.cache_ttl, max_size=settings.cache_max_size_planets),
        CacheKey.PEOPLE: CacheConfig(ttl=settings.cache_ttl, max_size=settings.cache_max_size_people),
        CacheKey.POKEMON: CacheConfig(
            ttl=settings.cache_ttl,
            max_size=settings.cache_max_size_pokemon,
            reducer=reduce_pokemon_payload,
        ),
    }


class ResultCache:
    """Versioned, TTL-bounded snapshot cache over a KeyValueStore.

    Example:
        ```python
        cache = ResultCache(store=InMemoryKeyValueStore())
        cache.put(CacheKey.PLANETS, [{"name": "Tatooine", ...}])
        planets = cache.get(CacheKey.PLANETS)
        ```
    """

    def __init__(
        self,
        store: KeyValueStore,
        configs: dict[CacheKey, CacheConfig] | None = None,
        version: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the result cache.

        Args:
            store: Durable key-value storage (required).
            configs: Per-key policies. Defaults to settings.
            version: Current schema version. Defaults to settings.cache_version.
            clock: Returns the current Unix time in seconds.
        """
        self._store = store
        self._configs = configs or default_configs()
        self._version = settings.cache_version if version is None else version
        self._clock = clock

    @classmethod
    def create(cls, store: KeyValueStore | None = None) -> "ResultCache":
        """Factory method picking the store configured by CACHE_BACKEND.

        Args:
            store: Explicit store. If None, Redis or in-memory per settings.

        Returns:
            Configured ResultCache
        """
        if store is None:
            from challenge_solver.repositories import InMemoryKeyValueStore, RedisKeyValueStore

            store = RedisKeyValueStore.create() if settings.uses_redis else InMemoryKeyValueStore()
        return cls(store=store)

    @property
    def version(self) -> int:
        return self._version

    def get(self, key: CacheKey) -> Any | None:
        """Return the cached payload for ``key``, or None on a miss.

        Corrupt, expired and outdated entries are deleted and reported as
        misses. A failing store also reads as a miss.
        """
        storage_key = key.storage_key
        try:
            raw = self._store.get(storage_key)
        except Exception:
            logger.exception("Error reading cache for %s", key.value)
            return None

        if raw is None:
            logger.debug("No cached data found for %s", key.value)
            return None

        try:
            entry = CacheEntryEntity.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Invalid cached data for %s: %s", key.value, e)
            self._store.delete(storage_key)
            return None

        if entry.version != self._version:
            logger.info("Cache version outdated for %s (%s != %s)", key.value, entry.version, self._version)
            self._store.delete(storage_key)
            return None

        if entry.age(self._clock()) > self._configs[key].ttl:
            logger.info("Cache expired for %s", key.value)
            self._store.delete(storage_key)
            return None

        logger.info("Retrieved cached data for %s", key.value)
        return entry.data

    def _serialize(self, payload: Any) -> str:
        entry = CacheEntryEntity(data=payload, timestamp=self._clock(), version=self._version)
        return json.dumps(entry.to_dict(), ensure_ascii=False)

    def _fits(self, serialized: str, config: CacheConfig) -> bool:
        return config.max_size is None or len(serialized.encode("utf-8")) <= config.max_size

    def put(self, key: CacheKey, payload: Any) -> bool:
        """Persist ``payload`` under ``key``.

        When the snapshot exceeds the key's size ceiling, the reducer (if any)
        is applied once; if it is still too large the write is abandoned.

        Returns:
            True if the snapshot was written, False otherwise
        """
        if payload is None:
            logger.error("Attempted to cache empty data for %s", key.value)
            return False

        config = self._configs[key]
        serialized = self._serialize(payload)

        if not self._fits(serialized, config):
            if config.reducer is None:
                logger.warning("Data exceeds max size for %s, not cached", key.value)
                return False
            logger.warning("Data exceeds max size for %s, attempting to reduce", key.value)
            serialized = self._serialize(config.reducer(payload))
            if not self._fits(serialized, config):
                logger.warning("Data still too large after reduction for %s, not cached", key.value)
                return False

        try:
            self._store.set(key.storage_key, serialized)
        except Exception:
            logger.exception("Error saving cache for %s", key.value)
            return False

        logger.info("Cached data for %s", key.value)
        return True

    def invalidate(self, key: CacheKey) -> bool:
        """Delete the entry for ``key``.

        Returns:
            True if an entry was deleted
        """
        return self._store.delete(key.storage_key)

    def clear(self) -> int:
        """Delete every known entry.

        Returns:
            Number of entries deleted
        """
        return sum(1 for key in CacheKey if self.invalidate(key))
