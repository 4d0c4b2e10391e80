"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Factory helpers for building cache pools from environment variables.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from .codec import create_value_codec
from .pool import DEFAULT_KEY_PREFIX, RedisCacheItemPool
from .store import InMemoryKeyValueStore

logger = logging.getLogger("bpcache.factory")


def _env_first(*names: str, default: str | None = None) -> str | None:
    """
    Return the first non-empty environment variable in `names`.

    Args:
        *names: Environment variable names to check in order.
        default: Value returned if no non-empty variable is found.
    """
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


def redis_url_from_env() -> str:
    """
    Build a Redis URL from `BPCACHE_REDIS_*` variables.

    `BPCACHE_REDIS_URL` wins; otherwise host/port/db/password are combined.
    """
    url = _env_first("BPCACHE_REDIS_URL")
    if url:
        return url

    host = _env_first("BPCACHE_REDIS_HOST", default="localhost") or "localhost"
    port = _env_first("BPCACHE_REDIS_PORT", default="6379") or "6379"
    db = _env_first("BPCACHE_REDIS_DB", default="0") or "0"
    password = _env_first("BPCACHE_REDIS_PASSWORD", default="") or ""
    if password:
        return f"redis://:{password}@{host}:{port}/{db}"
    return f"redis://{host}:{port}/{db}"


def create_cache_pool_from_env(*, redis_client: Any | None = None) -> RedisCacheItemPool:
    """
    Create a cache pool from `BPCACHE_*` environment variables.

    Backends:
    - `inmemory` (default)
    - `redis`

    Redis resolution:
    - Uses the provided `redis_client` when supplied.
    - Otherwise builds a client from `redis_url_from_env()`.
    """
    backend = (_env_first("BPCACHE_BACKEND", default="inmemory") or "inmemory").lower()
    prefix = _env_first("BPCACHE_KEY_PREFIX", default=DEFAULT_KEY_PREFIX) or DEFAULT_KEY_PREFIX
    codec = create_value_codec(_env_first("BPCACHE_CODEC", default="json"))

    if backend in ("mem", "memory", "inmemory", "in_memory"):
        logger.debug("Using in-memory cache store (prefix=%s)", prefix)
        return RedisCacheItemPool(InMemoryKeyValueStore(), prefix=prefix, codec=codec)

    if backend in ("redis",):
        client = redis_client
        if client is None:
            try:
                import redis
            except ModuleNotFoundError as exc:  # pragma: no cover
                raise RuntimeError(
                    "Redis cache backend requires `redis` to be installed."
                ) from exc

            client = redis.Redis.from_url(redis_url_from_env())
        logger.debug("Using redis cache store (prefix=%s)", prefix)
        return RedisCacheItemPool(client, prefix=prefix, codec=codec)

    raise ValueError(f"Unknown BPCACHE_BACKEND: {backend}")
