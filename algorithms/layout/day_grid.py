"""
Helpers for the time grid of day and week views.
"""

from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from algorithms.availability.resource_availability import VIEW_WEEK, view_window
from algorithms.layout.position_calculator import layout_defaults, pixels_per_hour
from algorithms.layout.timezone_clock import civil_time, get_zone
from apps.scheduleapp.records import ScheduleEvent
from utils.converters import to_date


def generate_time_slots(
    interval: int, start_hour: Optional[int] = None, end_hour: Optional[int] = None
) -> List[str]:
    """
    Labels of the time slot rows between two hours, e.g. ["08:00", "08:30"].

    The end hour itself is not included.
    """
    if start_hour is None:
        start_hour = getattr(settings, "SCHEDULE_START_HOUR", 8)
    if end_hour is None:
        end_hour = getattr(settings, "SCHEDULE_END_HOUR", 20)
    if interval <= 0:
        return []

    slots = []
    for hour in range(start_hour, end_hour):
        for minute in range(0, 60, interval):
            slots.append(f"{hour:02d}:{minute:02d}")
    return slots


def current_time_position(
    interval: Optional[int] = None,
    start_hour: Optional[int] = None,
    now: Optional[datetime] = None,
    timezone_id: Optional[str] = None,
) -> float:
    """
    Top offset in pixels of the "now" line.

    Args:
        interval: Minutes per time slot row
        start_hour: First visible hour
        now: Clock reading, defaults to django.utils.timezone.now()
        timezone_id: Calendar timezone

    Returns:
        Offset from the top of the grid; negative before the first hour
    """
    interval, start_hour, timezone_id = layout_defaults(interval, start_hour, timezone_id)
    clock = civil_time(now or timezone.now(), timezone_id)
    relative_minutes = clock["hour"] * 60 + clock["minute"] - start_hour * 60
    return (relative_minutes / 60) * pixels_per_hour(interval)


def is_current_time_in_range(
    start_hour: Optional[int] = None,
    end_hour: Optional[int] = None,
    now: Optional[datetime] = None,
    timezone_id: Optional[str] = None,
) -> bool:
    """Whether the current hour falls inside the visible hours."""
    if start_hour is None:
        start_hour = getattr(settings, "SCHEDULE_START_HOUR", 8)
    if end_hour is None:
        end_hour = getattr(settings, "SCHEDULE_END_HOUR", 20)
    if timezone_id is None:
        timezone_id = getattr(settings, "SCHEDULE_DEFAULT_TIMEZONE", settings.TIME_ZONE)
    hour = civil_time(now or timezone.now(), timezone_id)["hour"]
    return start_hour <= hour < end_hour


def civil_date(instant: Any, timezone_id: Optional[str] = None) -> Optional[date]:
    """
    Calendar date of ``instant`` on a wall clock in ``timezone_id``.

    Plain dates are returned as is. Without a timezone, or with an unknown
    one, the local (Django current) timezone is used.
    """
    zone = get_zone(timezone_id) if timezone_id else None
    if zone is None or not isinstance(instant, datetime):
        return to_date(instant)
    if timezone.is_naive(instant):
        instant = timezone.make_aware(instant)
    return instant.astimezone(zone).date()


def events_for_date(
    events: Iterable[Any], target: Any, timezone_id: Optional[str] = None
) -> List[Any]:
    """
    Event records whose start date, read in ``timezone_id``, is ``target``.

    Without a timezone the local (Django current) timezone is used.
    """
    target_date = civil_date(target, timezone_id)
    if target_date is None:
        return []

    matching = []
    for record in events:
        event = ScheduleEvent.from_record(record)
        if event.start is not None and civil_date(event.start, timezone_id) == target_date:
            matching.append(record)
    return matching


def split_all_day(events: Iterable[Any]) -> Tuple[List[Any], List[Any]]:
    """
    Separate all-day events from timed ones.

    Returns:
        (all_day_records, timed_records)
    """
    all_day, timed = [], []
    for record in events:
        if ScheduleEvent.from_record(record).is_all_day:
            all_day.append(record)
        else:
            timed.append(record)
    return all_day, timed


def sort_events_by_time(events: Iterable[Any]) -> List[Any]:
    """Event records sorted by start; records without a valid start go last."""
    dated, undated = [], []
    for record in events:
        event = ScheduleEvent.from_record(record)
        if event.start is None:
            undated.append(record)
        else:
            dated.append((event.start, record))
    dated.sort(key=lambda pair: pair[0])
    return [record for _, record in dated] + undated


def week_dates(target: Any, week_starts_on: Optional[int] = None) -> List[date]:
    """The seven civil dates of the week containing ``target``."""
    week_start, _ = view_window(target, VIEW_WEEK, week_starts_on)
    first = timezone.localtime(week_start).date()
    return [first + timedelta(days=offset) for offset in range(7)]
