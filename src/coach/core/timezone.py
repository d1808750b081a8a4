"""Timezone utilities; everything is kept in UTC."""

from datetime import date, datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

UTC = pytz.UTC


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Provider timestamps without an offset are UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def parse_provider_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a provider timestamp and return it in UTC.

    Accepts ISO-8601 with or without microseconds and with or without an
    offset. Empty values return None; unparseable ones raise ValueError.
    """
    if not value:
        return None
    return to_utc(date_parser.isoparse(value))


def parse_provider_date(value: Optional[str]) -> Optional[date]:
    """Parse a provider date or timestamp into a calendar date."""
    if not value:
        return None
    return date_parser.isoparse(value).date()
