"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Item-based cache pool over a Redis-compatible key/value store.

Quick start::

    import redis
    from bpcache import CacheItem, RedisCacheItemPool

    pool = RedisCacheItemPool(redis.Redis(), prefix="BpCache:")
    pool.save(CacheItem("greeting", ["hello"]).expires_after(300))
    item = pool.get_item("greeting")
    assert item.is_hit()
"""

from .codec import JsonValueCodec, PickleValueCodec, ValueCodec, create_value_codec
from .collection import CacheItemCollection
from .errors import CacheDecodeError, CacheEncodeError, CacheError
from .factory import create_cache_pool_from_env, redis_url_from_env
from .pool import DEFAULT_KEY_PREFIX, RedisCacheItemPool
from .store import InMemoryKeyValueStore, KeyValueStore
from .timeutil import to_utc, utc_now
from .types import CacheItem, CacheItemLike

__all__ = [
    "CacheItem",
    "CacheItemLike",
    "CacheItemCollection",
    "RedisCacheItemPool",
    "DEFAULT_KEY_PREFIX",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "ValueCodec",
    "JsonValueCodec",
    "PickleValueCodec",
    "create_value_codec",
    "CacheError",
    "CacheDecodeError",
    "CacheEncodeError",
    "create_cache_pool_from_env",
    "redis_url_from_env",
    "utc_now",
    "to_utc",
]
