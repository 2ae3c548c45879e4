"""UTC timestamp helpers shared by the tables and the request layer.

Every datetime that reaches the store is timezone-aware UTC. SQLite hands
values back without tzinfo; ``as_utc`` reattaches it on the way out.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime
from sqlmodel import Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def current_month() -> str:
    """``YYYY-MM`` of the current UTC instant."""

    return utcnow().strftime("%Y-%m")


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive values as UTC and convert aware ones to UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 rendering with a trailing ``Z``."""

    aware = as_utc(value)
    if aware is None:
        return None
    return aware.isoformat().replace("+00:00", "Z")


def start_of_day_utc(value: date) -> datetime:
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def utc_datetime_field(**kwargs: Any) -> Any:
    """``Field`` backed by ``DateTime(timezone=True)``."""

    return Field(sa_type=DateTime(timezone=True), **kwargs)


__all__ = [
    "as_utc",
    "current_month",
    "isoformat_utc",
    "start_of_day_utc",
    "utc_datetime_field",
    "utcnow",
]
