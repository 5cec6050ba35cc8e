"""
Timeline Filter Engine - Text search, category and rolling time-window filters.

Each filter is an independent predicate over a single event, so the combined
result is the conjunction of the three regardless of evaluation order.
"""

from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional, Union

from ..models.timeline import EventType, TimelineEvent, TimelineView
from .dates import to_calendar_date, subtract_months
from .timeline import sort_events, group_by_day


class CategoryFilter(str, Enum):
    """Event type selector; ALL disables the filter."""
    ALL = "all"
    RECORD = EventType.RECORD.value
    PRESCRIPTION = EventType.PRESCRIPTION.value
    CHECKUP = EventType.CHECKUP.value
    MEDICATION = EventType.MEDICATION.value
    EMERGENCY = EventType.EMERGENCY.value


class TimeWindow(str, Enum):
    """Rolling look-back window; ALL disables the filter."""
    ALL = "all"
    ONE_MONTH = "1month"
    THREE_MONTHS = "3months"
    SIX_MONTHS = "6months"
    ONE_YEAR = "1year"


WINDOW_MONTHS = {
    TimeWindow.ONE_MONTH: 1,
    TimeWindow.THREE_MONTHS: 3,
    TimeWindow.SIX_MONTHS: 6,
    TimeWindow.ONE_YEAR: 12,
}


def _enum_value(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def matches_search(event: TimelineEvent, term: Optional[str]) -> bool:
    """
    Case-insensitive substring match on title or description.

    A blank or whitespace-only term matches everything. Otherwise the term is
    used as typed, surrounding spaces included, so " heart" does not match a
    title that begins with "Heart".
    """
    if term is None or not term.strip():
        return True
    needle = term.lower()
    return needle in event.title.lower() or needle in event.description.lower()


def matches_category(event: TimelineEvent, category: Union[CategoryFilter, EventType, str]) -> bool:
    selected = _enum_value(category)
    if selected == CategoryFilter.ALL.value:
        return True
    return _enum_value(event.type) == selected


def window_cutoff(window: Union[TimeWindow, str], now: Union[date, datetime]) -> Optional[date]:
    """
    Earliest date kept by a time window.

    Returns:
        The cutoff date, or None for the "all" window

    Raises:
        ValueError: If the window is not a known value
    """
    window = TimeWindow(_enum_value(window))
    if window == TimeWindow.ALL:
        return None
    today = to_calendar_date(now)
    if today is None:
        raise ValueError(f"Invalid reference time: {now!r}")
    return subtract_months(today, WINDOW_MONTHS[window])


def within_window(event: TimelineEvent, cutoff: Optional[date]) -> bool:
    """True when the event is on or after the cutoff; undated events never match a window."""
    if cutoff is None:
        return True
    event_date = to_calendar_date(event.date)
    if event_date is None:
        return False
    return event_date >= cutoff


def filter_events(
    events: Iterable[TimelineEvent],
    now: Union[date, datetime],
    search: Optional[str] = "",
    category: Union[CategoryFilter, EventType, str] = CategoryFilter.ALL,
    window: Union[TimeWindow, str] = TimeWindow.ALL,
) -> List[TimelineEvent]:
    """
    Apply search, category and time-window filters, then re-sort newest first.

    Args:
        events: Aggregated timeline events
        now: Reference time for the rolling window
        search: Free-text term; blank disables the filter
        category: Event type or "all"
        window: Time window or "all"

    Returns:
        Matching events sorted by date, newest first
    """
    cutoff = window_cutoff(window, now)

    filtered = [event for event in events if matches_search(event, search)]
    filtered = [event for event in filtered if matches_category(event, category)]
    filtered = [event for event in filtered if within_window(event, cutoff)]

    return sort_events(filtered)


def apply_filters(
    events: Iterable[TimelineEvent],
    now: Union[date, datetime],
    search: Optional[str] = "",
    category: Union[CategoryFilter, EventType, str] = CategoryFilter.ALL,
    window: Union[TimeWindow, str] = TimeWindow.ALL,
) -> TimelineView:
    """Filter events and return them both flat and grouped by day."""
    filtered = filter_events(events, now, search=search, category=category, window=window)
    return TimelineView(total=len(filtered), events=filtered, days=group_by_day(filtered))
