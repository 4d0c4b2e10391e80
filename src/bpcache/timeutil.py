"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

UTC timestamp helpers shared by cache items and the pool.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current instant as an aware UTC datetime, whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def to_utc(value: datetime | str | None) -> datetime | None:
    """
    Normalize an expiration input to an aware UTC datetime.

    Strings are parsed as ISO-8601. Naive datetimes are treated as UTC.
    Sub-second precision is dropped because stores track TTLs in seconds.

    Args:
        value: Datetime, ISO-8601 string, or `None`.

    Returns:
        Aware UTC datetime, or `None` when `value` is `None`.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        value = datetime.fromisoformat(text)
    if not isinstance(value, datetime):
        raise TypeError(
            f"Expected datetime, ISO-8601 string or None, got {type(value).__name__}"
        )
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0)
