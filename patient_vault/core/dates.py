"""
Calendar-date helpers shared by the timeline and trend builders.
"""

import calendar
from datetime import date, datetime, time, timezone
from typing import Any, Optional


def to_calendar_date(value: Any) -> Optional[date]:
    """
    Coerce a date-like value to a calendar date.

    Accepts date and datetime objects and ISO strings, with or without a
    time part ("2024-03-01", "2024-03-01T10:15:00Z", "2024-03-01 10:15:00").

    Returns:
        The calendar date, or None when the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) < 10:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def subtract_months(day: date, months: int) -> date:
    """
    Step a date back by whole months.

    The day of month is clamped to the length of the target month, so
    March 31 minus one month is the last day of February.
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def format_display_date(day: date) -> str:
    """Short month/day/year label used on chart axes, e.g. 3/1/2024."""
    return f"{day.month}/{day.day}/{day.year}"


def to_instant(value: Optional[datetime], fallback_day: Optional[date] = None) -> Optional[datetime]:
    """
    Timezone-aware instant for ordering rows by when they were written.

    Naive timestamps are read as UTC. Without a timestamp the fallback day
    stands in at midnight UTC, so it sorts before any upload on that day.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if fallback_day is None:
        return None
    return datetime.combine(fallback_day, time.min, tzinfo=timezone.utc)
