from __future__ import annotations

import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from bpcache import CacheItem, RedisCacheItemPool


def _redis_url() -> str | None:
    return os.getenv("BPCACHE_TEST_REDIS_URL")


@pytest.fixture
def client():
    if _redis_url() is None:
        pytest.skip("BPCACHE_TEST_REDIS_URL is not set")
    redis = pytest.importorskip("redis")
    conn = redis.Redis.from_url(_redis_url())
    yield conn
    conn.close()


def test_round_trip_and_clear_with_real_redis(client):
    prefix = f"itest:bpcache:{uuid.uuid4().hex}:"
    other_prefix = f"itest:bpcache:{uuid.uuid4().hex}:"
    pool = RedisCacheItemPool(client, prefix=prefix)
    other = RedisCacheItemPool(client, prefix=other_prefix)

    assert pool.save(CacheItem("a-key", ["test", "foo", "bar"])) is True
    expires = datetime.now(timezone.utc) + timedelta(seconds=500)
    assert pool.save(CacheItem("foo", ["test"]).expires_at(expires)) is True
    assert other.save(CacheItem("keep", 1)) is True

    plain = pool.get_item("a-key")
    assert plain.is_hit() is True
    assert plain.get() == ["test", "foo", "bar"]
    assert plain.expires() is None

    timed = pool.get_item("foo")
    assert timed.get() == ["test"]
    assert abs((timed.expires() - expires).total_seconds()) <= 2

    assert pool.has_item("a-key") is True
    assert pool.delete_items(["a-key", "foo"]) is True
    assert pool.has_item("a-key") is False

    pool.save_deferred(CacheItem("x", 1))
    pool.save_deferred(CacheItem("y", 2))
    assert pool.commit() is True
    assert pool.clear() is True
    assert client.keys(f"{prefix}*") == []
    assert other.get_item("keep").get() == 1

    other.clear()
