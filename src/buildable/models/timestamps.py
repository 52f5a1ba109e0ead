"""Timestamp helpers shared by the table models.

Application code only handles timezone-aware UTC datetimes. The columns store
them without an offset so every backend compares them the same way, whatever
the server's local timezone is.
"""

from datetime import UTC, datetime

from sqlalchemy import types


def utc_now() -> datetime:
    """Current time as aware UTC."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Normalize to aware UTC; naive values are taken as UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class UTCTimestamp(types.TypeDecorator[datetime]):
    """Offset-free TIMESTAMP column that reads and writes aware UTC datetimes."""

    impl = types.DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        return as_utc(value).replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        return as_utc(value)
