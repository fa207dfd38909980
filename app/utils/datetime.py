"""Helpers for working with UTC datetimes across the persistence boundary."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def utc_now_naive() -> datetime:
    """Return the current UTC time without ``tzinfo`` for storage."""

    return utc_now().replace(tzinfo=None)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Interpret ``value`` as UTC.

    SQLite hands back naive datetimes even when aware values were written, so
    naive values coming out of the database are assumed to be UTC already.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC with ``tzinfo`` stripped."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)
