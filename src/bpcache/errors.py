"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by the cache adapter.
"""

from __future__ import annotations


class CacheError(RuntimeError):
    """Base class for errors raised by bpcache itself."""


class CacheDecodeError(CacheError):
    """Raised when stored bytes cannot be decoded back into a value."""


class CacheEncodeError(CacheError):
    """Raised when a value cannot be encoded for storage."""
