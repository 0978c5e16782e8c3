"""
Tests for the TTL/version-bounded result cache.
"""

import json

import pytest

from challenge_solver.repositories import InMemoryKeyValueStore, RedisKeyValueStore
from challenge_solver.services import CacheConfig, CacheKey, ResultCache, reduce_pokemon_payload

PLANETS = [{"name": "Tatooine", "diameter": 10465, "population": 200000}]


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


def make_cache(store, clock, ttl=100.0, max_size=None, reducer=None, version=1):
    configs = {key: CacheConfig(ttl=ttl, max_size=max_size) for key in CacheKey}
    configs[CacheKey.POKEMON] = CacheConfig(ttl=ttl, max_size=max_size, reducer=reducer)
    return ResultCache(store=store, configs=configs, version=version, clock=clock)


def test_put_then_get_round_trip(store, fake_clock):
    """Test that a fresh entry comes back unchanged."""
    cache = make_cache(store, fake_clock)

    assert cache.put(CacheKey.PLANETS, PLANETS) is True
    assert cache.get(CacheKey.PLANETS) == PLANETS


def test_storage_layout(store, fake_clock):
    """Test the persisted key and snapshot shape."""
    fake_clock.now = 1234.0
    cache = make_cache(store, fake_clock)
    cache.put(CacheKey.PEOPLE, [{"name": "Luke"}])

    raw = json.loads(store.get("cache_people"))
    assert raw == {"data": [{"name": "Luke"}], "timestamp": 1234.0, "version": 1}


def test_missing_key_is_a_miss(store, fake_clock):
    assert make_cache(store, fake_clock).get(CacheKey.POKEMON) is None


def test_expired_entry_is_deleted(store, fake_clock):
    """Test that entries older than the TTL read as absent and are removed."""
    cache = make_cache(store, fake_clock, ttl=100.0)
    cache.put(CacheKey.PLANETS, PLANETS)

    fake_clock.now = 100.5
    assert cache.get(CacheKey.PLANETS) is None
    assert store.get("cache_planets") is None


def test_entry_at_exact_ttl_is_still_valid(store, fake_clock):
    cache = make_cache(store, fake_clock, ttl=100.0)
    cache.put(CacheKey.PLANETS, PLANETS)

    fake_clock.now = 100.0
    assert cache.get(CacheKey.PLANETS) == PLANETS


def test_version_mismatch_is_deleted(store, fake_clock):
    """Test that a snapshot written by another schema version is discarded."""
    make_cache(store, fake_clock, version=1).put(CacheKey.PLANETS, PLANETS)

    newer = make_cache(store, fake_clock, version=2)
    assert newer.get(CacheKey.PLANETS) is None
    assert store.get("cache_planets") is None


@pytest.mark.parametrize("raw", ["not json", '{"data": []}', '"just a string"', '{"data": 1, "timestamp": "x", "version": 1}'])
def test_corrupt_entry_fails_open(store, fake_clock, raw):
    """Test that undecodable entries read as absent and are removed."""
    store.set("cache_planets", raw)
    cache = make_cache(store, fake_clock)

    assert cache.get(CacheKey.PLANETS) is None
    assert store.get("cache_planets") is None


def test_oversized_payload_is_reduced(store, fake_clock):
    """Test that the reducer is applied once when the snapshot is too large."""
    creatures = [
        {"name": f"mon{i}", "base_experience": 100, "height": 4, "weight": 6, "sprites": "x" * 200}
        for i in range(5)
    ]
    cache = make_cache(store, fake_clock, max_size=400, reducer=reduce_pokemon_payload)

    assert cache.put(CacheKey.POKEMON, creatures) is True
    cached = cache.get(CacheKey.POKEMON)
    assert cached[0] == {"name": "mon0", "base_experience": 100, "height": 4, "weight": 6}
    assert len(cached) == 5


def test_still_oversized_after_reduction_is_not_written(store, fake_clock):
    creatures = [{"name": "x" * 500, "height": 1, "weight": 1}]
    cache = make_cache(store, fake_clock, max_size=100, reducer=reduce_pokemon_payload)

    assert cache.put(CacheKey.POKEMON, creatures) is False
    assert store.get("cache_pokemon") is None


def test_oversized_without_reducer_is_not_written(store, fake_clock):
    cache = make_cache(store, fake_clock, max_size=10)

    assert cache.put(CacheKey.PLANETS, PLANETS) is False
    assert store.keys() == []


def test_none_payload_is_refused(store, fake_clock):
    assert make_cache(store, fake_clock).put(CacheKey.PLANETS, None) is False


def test_clear_removes_every_entry(store, fake_clock):
    cache = make_cache(store, fake_clock)
    cache.put(CacheKey.PLANETS, PLANETS)
    cache.put(CacheKey.PEOPLE, [])

    assert cache.clear() == 2
    assert store.keys() == []


class FakeRedis:
    """Just enough of redis.Redis for the store."""

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value.encode("utf-8") if isinstance(value, str) else value

    def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

    def ping(self):
        return True


def test_cache_over_redis_store(fake_clock):
    """Test the round trip through the Redis-backed store (bytes decoded)."""
    store = RedisKeyValueStore(redis_client=FakeRedis())
    cache = make_cache(store, fake_clock)

    cache.put(CacheKey.PLANETS, [{"name": "Hoth"}])
    assert cache.get(CacheKey.PLANETS) == [{"name": "Hoth"}]
    assert store.health_check() is True
    assert store.delete("cache_planets") is True
    assert store.delete("cache_planets") is False
