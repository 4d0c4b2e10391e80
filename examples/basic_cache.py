"""
basic_cache.py: minimal bpcache example.

Saves a few items (one expiring, two deferred) and reads them back.
Uses the in-memory store unless BPCACHE_BACKEND=redis is set.

Usage:
    export BPCACHE_BACKEND=redis BPCACHE_REDIS_URL=redis://localhost:6379/0
    python examples/basic_cache.py
"""

import logging

from bpcache import CacheItem, create_cache_pool_from_env


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    pool = create_cache_pool_from_env()

    pool.save(CacheItem("greeting", ["hello", "world"]).expires_after(300))
    pool.save_deferred(CacheItem("first", 1))
    pool.save_deferred(CacheItem("second", {"n": 2}))
    pool.commit()

    for item in pool.get_items(["greeting", "first", "second", "missing"]):
        print(item.get_key(), item.is_hit(), item.get(), item.expires())

    pool.clear()


if __name__ == "__main__":
    main()
