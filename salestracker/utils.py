"""Date helpers shared by the services.

All datetimes handled by the application are naive and in UTC.
"""
import calendar
from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def add_months(day: date, months: int) -> date:
    """Shift the first day of ``day``'s month by ``months`` months."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last calendar day of the month containing ``day``."""
    first = date(day.year, day.month, 1)
    last = date(day.year, day.month, calendar.monthrange(day.year, day.month)[1])
    return first, last
