"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Ordered container returned by multi-key fetches.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from .types import CacheItem, CacheItemLike


class CacheItemCollection(Sequence[CacheItem]):
    """
    Ordered, indexable collection of `CacheItem` objects.

    Items added through the constructor or `add_item` are normalized with
    `CacheItem.from_item`, so any `CacheItemLike` is accepted.
    """

    def __init__(self, items: Iterable[CacheItemLike] = ()) -> None:
        self._items: list[CacheItem] = []
        for item in items:
            self.add_item(item)

    def add_item(self, item: CacheItemLike) -> CacheItemCollection:
        self._items.append(CacheItem.from_item(item))
        return self

    @overload
    def __getitem__(self, index: int) -> CacheItem: ...

    @overload
    def __getitem__(self, index: slice) -> CacheItemCollection: ...

    def __getitem__(self, index: int | slice) -> CacheItem | CacheItemCollection:
        if isinstance(index, slice):
            return CacheItemCollection(self._items[index])
        return self._items[index]

    def __setitem__(self, index: int, item: CacheItem) -> None:
        if not isinstance(item, CacheItem):
            raise TypeError(
                f"CacheItemCollection only stores CacheItem, got {type(item).__name__}"
            )
        self._items[index] = item

    def __delitem__(self, index: int) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CacheItem]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"CacheItemCollection({self._items!r})"

    def keys(self) -> list[str]:
        """Return item keys in collection order."""
        return [item.key for item in self._items]
