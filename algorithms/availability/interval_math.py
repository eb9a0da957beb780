"""
Interval predicates shared by the layout and availability engines.

All comparisons are made on absolute instants; civil dates are only used to
find day boundaries (all-day normalization, "today's schedule").
"""

from datetime import datetime, time, timedelta
from typing import Any, Optional, Tuple

from django.utils import timezone

from utils.converters import to_datetime


class TimeRange:
    """Represents a time range with start and end instants."""

    def __init__(self, start: Any, end: Any):
        """
        Initialize a time range.

        Bounds are parsed leniently; an unparseable bound is stored as None
        and makes the range invalid instead of raising.

        Args:
            start: Start of the range (datetime, date or ISO string)
            end: End of the range (datetime, date or ISO string)
        """
        self.start = to_datetime(start)
        self.end = to_datetime(end)

    def __str__(self) -> str:
        if not self.is_valid:
            return "invalid range"
        return (
            f"{timezone.localtime(self.start).strftime('%Y-%m-%d %H:%M')} - "
            f"{timezone.localtime(self.end).strftime('%H:%M')}"
        )

    @property
    def is_valid(self) -> bool:
        return self.start is not None and self.end is not None

    def overlaps(self, other: "TimeRange") -> bool:
        """
        Check if this time range overlaps with another.

        Args:
            other: Another time range

        Returns:
            True if the ranges overlap, False otherwise (including when
            either range is invalid)
        """
        if not (self.is_valid and other.is_valid):
            return False
        return overlaps(self.start, self.end, other.start, other.end)

    def contains(self, point: datetime) -> bool:
        """Half-open containment: start <= point < end."""
        return self.is_valid and self.start <= point < self.end

    @staticmethod
    def from_event(event) -> "TimeRange":
        return TimeRange(event.start, event.end)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """
    Strict interval overlap of [a_start, a_end) and [b_start, b_end).

    Touching intervals (one ends exactly when the other starts) do not
    overlap. The predicate is symmetric.
    """
    return a_start < b_end and a_end > b_start


def start_of_day(instant: datetime) -> datetime:
    """Local midnight of the civil date containing ``instant``."""
    local = timezone.localtime(instant)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def next_day(midnight: datetime) -> datetime:
    """Midnight of the following civil day."""
    return timezone.make_aware(datetime.combine(midnight.date() + timedelta(days=1), time.min))


def day_bounds(instant: datetime) -> Tuple[datetime, datetime]:
    """
    First and last representable instant of the civil day of ``instant``.

    Returns:
        (00:00:00.000000, 23:59:59.999999) in the current timezone
    """
    day_start = start_of_day(instant)
    return day_start, next_day(day_start) - timedelta(microseconds=1)


def normalize_all_day(start: datetime, end: datetime) -> Tuple[datetime, datetime]:
    """
    Canonical interval of an all-day event.

    The start is clamped to local midnight. An end that is not after the
    clamped start, or that falls on the same civil date, becomes the next
    midnight (exactly one day). Any other end is clamped to its own
    midnight and pushed to the next day if that collapses onto the start.

    Returns:
        (start, end) with end strictly after start, at least one day apart
    """
    day_start = start_of_day(start)

    if end <= day_start or timezone.localtime(end).date() == day_start.date():
        return day_start, next_day(day_start)

    day_end = start_of_day(end)
    if day_end <= day_start:
        day_end = next_day(day_start)
    return day_start, day_end


def effective_interval(event) -> Optional[Tuple[datetime, datetime]]:
    """
    The interval an event occupies for conflict purposes.

    Args:
        event: ScheduleEvent

    Returns:
        (start, end), all-day events normalized, or None when the event's
        dates could not be parsed
    """
    if not event.has_valid_dates:
        return None
    if event.is_all_day:
        return normalize_all_day(event.start, event.end)
    return event.start, event.end
