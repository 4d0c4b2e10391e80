"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache item model and the item capability contract accepted by pools.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Protocol, runtime_checkable

from .timeutil import to_utc, utc_now


@runtime_checkable
class CacheItemLike(Protocol):
    """
    Minimal item capability contract.

    Any object exposing `get_key()` and `get()` can be saved by a pool.
    An `expires()` method returning an absolute datetime (or `None`) is
    honoured when present, but is not part of the required surface.
    """

    def get_key(self) -> str: ...

    def get(self) -> Any: ...


@dataclass(slots=True)
class CacheItem:
    """
    One cache entry: key, value, hit flag and absolute UTC expiration.

    Attributes:
        key: Caller-facing key, never prefixed.
        value: Cached value; `None` means absent.
        expiration: Absolute expiration instant, or `None` for no expiry.
        hit: Whether the item was read from the store. A stored `None` is
            still a hit.
    """

    key: str
    value: Any = None
    expiration: datetime | str | None = None
    hit: bool = False

    def __post_init__(self) -> None:
        self.expiration = to_utc(self.expiration)

    @classmethod
    def from_item(cls, item: CacheItemLike) -> CacheItem:
        """Return `item` unchanged if concrete, else copy it into a `CacheItem`."""
        if isinstance(item, CacheItem):
            return item

        expires = getattr(item, "expires", None)
        is_hit = getattr(item, "is_hit", None)
        return cls(
            key=item.get_key(),
            value=item.get(),
            expiration=expires() if callable(expires) else None,
            hit=bool(is_hit()) if callable(is_hit) else False,
        )

    def get_key(self) -> str:
        return self.key

    def get(self) -> Any:
        return self.value

    def is_hit(self) -> bool:
        return self.hit

    def expires(self) -> datetime | None:
        return self.expiration  # type: ignore[return-value]

    def set(self, value: Any) -> CacheItem:
        self.value = value
        return self

    def expires_at(self, expiration: datetime | str | None) -> CacheItem:
        """Set an absolute expiration; `None` removes it."""
        self.expiration = to_utc(expiration)
        return self

    def expires_after(self, ttl: int | timedelta | None) -> CacheItem:
        """
        Set expiration relative to now.

        Args:
            ttl: Seconds or `timedelta` from now; `None` removes expiration.
        """
        if ttl is None:
            self.expiration = None
            return self
        if isinstance(ttl, timedelta):
            self.expiration = to_utc(utc_now() + ttl)
            return self
        self.expiration = utc_now() + timedelta(seconds=int(ttl))
        return self
