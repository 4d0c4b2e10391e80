"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Backing store capability set and a process-local implementation.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Protocol


class KeyValueStore(Protocol):
    """
    Operations a pool needs from its backing store.

    Signatures follow the synchronous `redis.Redis` client so a redis-py
    connection satisfies this protocol without wrapping.
    """

    def get(self, name: str) -> bytes | str | None: ...

    def ttl(self, name: str) -> int: ...

    def exists(self, *names: str) -> int: ...

    def keys(self, pattern: str = "*") -> list[bytes | str]: ...

    def delete(self, *names: str | bytes) -> int: ...

    def setex(self, name: str, time: int, value: bytes) -> bool | None: ...

    def set(self, name: str, value: bytes) -> bool | None: ...


@dataclass(slots=True)
class _StoredValue:
    payload: bytes
    expires_at_s: float | None = None


class InMemoryKeyValueStore:
    """
    Process-local store with Redis key semantics, for development and tests.

    TTL sentinels match Redis: `-2` for a missing key, `-1` for a key without
    expiry. Expired keys are dropped lazily on access.
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._rows: dict[str, _StoredValue] = {}
        self._clock = clock

    def _live(self, name: str) -> _StoredValue | None:
        row = self._rows.get(name)
        if row is None:
            return None
        if row.expires_at_s is not None and row.expires_at_s <= self._clock():
            self._rows.pop(name, None)
            return None
        return row

    def get(self, name: str) -> bytes | None:
        row = self._live(name)
        return None if row is None else row.payload

    def ttl(self, name: str) -> int:
        row = self._live(name)
        if row is None:
            return -2
        if row.expires_at_s is None:
            return -1
        return max(0, math.floor(row.expires_at_s - self._clock() + 0.5))

    def exists(self, *names: str) -> int:
        return sum(1 for name in names if self._live(name) is not None)

    def keys(self, pattern: str = "*") -> list[str]:
        return [
            name
            for name in list(self._rows)
            if self._live(name) is not None and fnmatchcase(name, pattern)
        ]

    def delete(self, *names: str | bytes) -> int:
        removed = 0
        for name in names:
            if isinstance(name, bytes):
                name = name.decode("utf-8")
            if self._live(name) is not None:
                del self._rows[name]
                removed += 1
        return removed

    def setex(self, name: str, time: int, value: bytes) -> bool:
        if time <= 0:
            raise ValueError("invalid expire time in 'setex' command")
        self._rows[name] = _StoredValue(
            payload=bytes(value), expires_at_s=self._clock() + time
        )
        return True

    def set(self, name: str, value: bytes) -> bool:
        self._rows[name] = _StoredValue(payload=bytes(value))
        return True

    def flushall(self) -> bool:
        """Drop every key, regardless of prefix."""
        self._rows.clear()
        return True
