"""Helpers for working with UTC timestamps."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return the current UTC time as an aware datetime."""

    return datetime.now(tz=timezone.utc)


def now_utc_naive() -> datetime:
    """Return the current UTC time without ``tzinfo``.

    Timestamps are stored in plain ``DATETIME`` columns, which do not keep the
    offset on every backend, so the persistence layer always writes naive UTC
    values.
    """

    return now_utc().replace(tzinfo=None)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive values read back from the database."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
