"""Closed date interval used for transaction fetches."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

DAYS_PER_MONTH = Decimal("30")
MIN_MONTHS = Decimal("1") / DAYS_PER_MONTH


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive [date_from, date_to] interval.

    `months` is set for windows built from a calendar-month count; month-end
    clamping can stretch such a window by a few days, and the count stays
    authoritative.
    """

    date_from: date
    date_to: date
    months: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.date_from > self.date_to:
            raise ValueError(f"date_from {self.date_from} is after date_to {self.date_to}")

    @classmethod
    def trailing(cls, months: int, today: date) -> "DateRange":
        """Build the window covering the `months` calendar months up to `today`."""
        return cls(date_from=today - relativedelta(months=months), date_to=today, months=months)

    @property
    def months_covered(self) -> Decimal:
        """
        Span of the window in months.

        The calendar-month count when the window was built from one.
        Otherwise whole calendar months count as 1 each and leftover days as
        days/30. Never less than one day's worth so it is always a safe divisor.
        """
        if self.months is not None and self.months > 0:
            return Decimal(self.months)
        delta = relativedelta(self.date_to, self.date_from)
        months = Decimal(delta.years * 12 + delta.months) + Decimal(delta.days) / DAYS_PER_MONTH
        return max(months, MIN_MONTHS)
