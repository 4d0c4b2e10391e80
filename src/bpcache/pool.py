"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Item-based cache pool over a Redis-compatible key/value store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

from .codec import ValueCodec, create_value_codec
from .collection import CacheItemCollection
from .store import KeyValueStore
from .timeutil import to_utc, utc_now
from .types import CacheItem, CacheItemLike

logger = logging.getLogger("bpcache.pool")

DEFAULT_KEY_PREFIX = "BpCache:"


class RedisCacheItemPool:
    """
    Cache pool storing encoded item values under prefixed Redis keys.

    Expiration is tracked by the store as a relative TTL and exposed to
    callers as an absolute UTC instant. The store handle is injected and
    never closed by the pool.

    The deferred queue is not synchronized; callers sharing one pool across
    threads must serialize `save_deferred` and `commit` themselves.

    Args:
        redis: A `redis.Redis` client or any `KeyValueStore`.
        prefix: Namespace prepended to every caller key.
        codec: Value codec id or instance; JSON when omitted.
    """

    def __init__(
        self,
        redis: KeyValueStore,
        *,
        prefix: str = DEFAULT_KEY_PREFIX,
        codec: str | ValueCodec | None = None,
    ) -> None:
        if not prefix:
            logger.warning(
                "Cache pool has an empty key prefix; clear() will delete every key in the store"
            )
        self._redis = redis
        self._prefix = prefix
        self._codec = create_value_codec(codec)
        self._deferred: list[CacheItemLike] = []

    @property
    def key_prefix(self) -> str:
        return self._prefix

    @property
    def codec(self) -> ValueCodec:
        return self._codec

    @property
    def deferred_count(self) -> int:
        """Number of items waiting for `commit`."""
        return len(self._deferred)

    def prefix_key(self, key: str) -> str:
        """Return the store key for caller key `key`."""
        return f"{self._prefix}{key}"

    def get_item(self, key: str) -> CacheItem:
        """
        Fetch one item.

        A missing key yields a miss item with no value and no expiration.
        A stored `None` is a hit whose value is `None`; use `is_hit()`, not
        the value, to tell the two apart.
        For a hit, the remaining TTL is converted to an absolute instant;
        the conversion is best-effort since the TTL may tick between reads.

        Raises:
            CacheDecodeError: Stored bytes could not be decoded.
        """
        redis_key = self.prefix_key(key)
        raw = self._redis.get(redis_key)
        if raw is None:
            logger.debug("Cache miss for key=%s", key)
            return CacheItem(key=key)

        remaining = self._redis.ttl(redis_key)
        expiration = (
            utc_now() + timedelta(seconds=int(remaining))
            if remaining is not None and remaining > 0
            else None
        )
        value = self._codec.decode(raw)
        logger.debug("Cache hit for key=%s (ttl=%s)", key, remaining)
        return CacheItem(key=key, value=value, expiration=expiration, hit=True)

    def get_items(self, keys: Iterable[str] = ()) -> CacheItemCollection:
        """Fetch items one by one, preserving the order of `keys`."""
        return CacheItemCollection(self.get_item(key) for key in keys)

    def has_item(self, key: str) -> bool:
        """Whether the key currently exists in the store."""
        return bool(self._redis.exists(self.prefix_key(key)))

    def clear(self) -> bool:
        """
        Delete every key under this pool's prefix.

        Keys are removed one call at a time. Always returns `True`; per-key
        delete counts are not reported to the caller.
        """
        matched = self._redis.keys(self.prefix_key("*"))
        removed = 0
        for redis_key in matched:
            removed += int(self._redis.delete(redis_key) or 0)
        logger.debug(
            "Cleared prefix=%s (matched=%d, removed=%d)",
            self._prefix,
            len(matched),
            removed,
        )
        return True

    def delete_item(self, key: str) -> bool:
        """Delete one key; `True` only if the store removed exactly one key."""
        return self._redis.delete(self.prefix_key(key)) == 1

    def delete_items(self, keys: Iterable[str]) -> bool:
        """
        Delete many keys with a single store call.

        Returns `True` iff the store removed as many keys as distinct keys
        were requested. An empty request performs no store call.
        """
        redis_keys = [self.prefix_key(key) for key in keys]
        if not redis_keys:
            return True
        removed = self._redis.delete(*redis_keys)
        return removed == len(set(redis_keys))

    def save(self, item: CacheItemLike) -> bool:
        """
        Persist an item immediately.

        Items exposing `expires()` with a datetime are written with a TTL of
        the whole seconds left until that instant. Zero or negative TTLs are
        passed to the store unchanged.

        Raises:
            CacheEncodeError: The value could not be encoded.
        """
        payload = self._codec.encode(item.get())
        redis_key = self.prefix_key(item.get_key())
        expires = self._expiration_of(item)

        if expires is not None:
            ttl_s = int(expires.timestamp()) - int(utc_now().timestamp())
            logger.debug("Saving key=%s with ttl=%ds", item.get_key(), ttl_s)
            return bool(self._redis.setex(redis_key, ttl_s, payload))

        logger.debug("Saving key=%s without expiration", item.get_key())
        return bool(self._redis.set(redis_key, payload))

    def save_deferred(self, item: CacheItemLike) -> bool:
        """Queue an item for the next `commit`; no store I/O happens here."""
        self._deferred.append(item)
        return True

    def commit(self) -> bool:
        """
        Save deferred items in insertion order, then empty the queue.

        The queue is emptied even if a save raises. Always returns `True`;
        failed saves are logged, not reported.
        """
        pending = self._deferred
        self._deferred = []
        failed: list[str] = []
        try:
            for item in pending:
                if not self.save(item):
                    failed.append(item.get_key())
        finally:
            pending.clear()
        if failed:
            logger.warning(
                "Deferred save failed for %d item(s): %s",
                len(failed),
                ", ".join(failed),
            )
        return True

    @staticmethod
    def _expiration_of(item: Any) -> datetime | None:
        """Read `expires()` from items that expose it."""
        expires = getattr(item, "expires", None)
        if not callable(expires):
            return None
        return to_utc(expires())
