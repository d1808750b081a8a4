"""Core utilities and shared functionality."""

from coach.core.timezone import (
    now_utc,
    to_utc,
    parse_provider_datetime,
    parse_provider_date,
    UTC,
)
from coach.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ResourceUnavailableError,
    AggregationError,
)
from coach.core.rwlock import ReadWriteLock

__all__ = [
    "now_utc",
    "to_utc",
    "parse_provider_datetime",
    "parse_provider_date",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ResourceUnavailableError",
    "AggregationError",
    "ReadWriteLock",
]
