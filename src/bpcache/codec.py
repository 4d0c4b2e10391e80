"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Value codecs turning cached values into bytes and back.
"""

from __future__ import annotations

import json
import pickle
from typing import Any, Protocol

from .errors import CacheDecodeError, CacheEncodeError


class ValueCodec(Protocol):
    """Protocol for symmetric value encoders used by cache pools."""

    codec_id: str

    def encode(self, value: Any) -> bytes: ...

    def decode(self, payload: bytes | str) -> Any: ...


def _reject_lossy(value: Any, path: str = "value") -> None:
    """Raise `CacheEncodeError` for shapes JSON would silently change."""
    if isinstance(value, tuple):
        raise CacheEncodeError(f"{path} is a tuple; JSON would return it as a list")
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise CacheEncodeError(
                    f"{path} has non-string key {key!r}; JSON would return it as a string"
                )
            _reject_lossy(item, f"{path}[{key!r}]")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _reject_lossy(item, f"{path}[{index}]")


class JsonValueCodec:
    """
    Compact JSON codec for scalars, lists, string-keyed dicts and nesting.

    Values JSON cannot restore exactly (tuples, non-string mapping keys)
    are rejected on encode so every accepted value decodes back equal.
    """

    codec_id = "json"

    def encode(self, value: Any) -> bytes:
        try:
            _reject_lossy(value)
        except RecursionError as exc:
            raise CacheEncodeError("Value is nested too deeply or contains a cycle") from exc
        try:
            text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise CacheEncodeError(
                f"Value of type {type(value).__name__} is not JSON serializable"
            ) from exc
        return text.encode("utf-8")

    def decode(self, payload: bytes | str) -> Any:
        if isinstance(payload, bytes):
            try:
                payload = payload.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise CacheDecodeError("Stored payload is not valid UTF-8") from exc
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise CacheDecodeError(f"Stored payload is not valid JSON: {exc}") from exc


class PickleValueCodec:
    """
    Pickle codec for arbitrary Python objects.

    Only use against stores that no untrusted party can write to.
    """

    codec_id = "pickle"

    def __init__(self, *, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self._protocol = protocol

    def encode(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=self._protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as exc:
            raise CacheEncodeError(
                f"Value of type {type(value).__name__} cannot be pickled"
            ) from exc

    def decode(self, payload: bytes | str) -> Any:
        if isinstance(payload, str):
            payload = payload.encode("latin-1")
        try:
            return pickle.loads(payload)
        except Exception as exc:
            raise CacheDecodeError(f"Stored payload could not be unpickled: {exc}") from exc


def create_value_codec(codec: str | ValueCodec | None = None) -> ValueCodec:
    """Resolve a codec from id/instance/default (JSON)."""
    if codec is None:
        return JsonValueCodec()
    if not isinstance(codec, str):
        return codec

    key = codec.strip().lower()
    if key == "json":
        return JsonValueCodec()
    if key == "pickle":
        return PickleValueCodec()
    raise ValueError(f"Unknown value codec '{codec}'")
