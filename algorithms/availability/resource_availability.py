"""
Resource availability calculation.

Given a set of resources, the bookings against them and a candidate time
range, this module decides which resources are free, which bookings block
the others, and what each resource's day looks like. It also builds the
period availability response (day, week or month window) that schedule
sessions cache.

The functions here never raise for bad input: an invalid query range is
treated as unconstrained (every resource available) and events whose dates
cannot be parsed are skipped with a warning.
"""

import calendar
import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from algorithms.availability.interval_math import (
    TimeRange,
    day_bounds,
    effective_interval,
    next_day,
    overlaps,
)
from apps.scheduleapp.records import Resource, ResourceGroup, ScheduleEvent
from utils.converters import to_datetime

logger = logging.getLogger(__name__)

VIEW_DAY = "day"
VIEW_WEEK = "week"
VIEW_MONTH = "month"
VIEWS = (VIEW_DAY, VIEW_WEEK, VIEW_MONTH)


def _bookable_events(
    events: Iterable[Any], exclude_event_id: Optional[Any] = None
) -> List[Tuple[ScheduleEvent, Tuple[datetime, datetime]]]:
    """
    Normalize records and drop the ones that can never block a resource.

    Cancelled events, the excluded event and events with unparseable dates
    are removed. Each survivor is paired with its effective interval.
    """
    bookable = []
    for record in events:
        event = ScheduleEvent.from_record(record)
        if event.is_cancelled:
            continue
        if exclude_event_id is not None and event.id == exclude_event_id:
            continue

        interval = effective_interval(event)
        if interval is None:
            logger.warning(f"Skipping event {event.id}: start or end date could not be parsed")
            continue

        bookable.append((event, interval))
    return bookable


def get_resource_availability(
    resources: Iterable[Any],
    events: Iterable[Any],
    time_range: Any,
    exclude_event_id: Optional[Any] = None,
) -> List[Dict[str, Any]]:
    """
    Calculate availability of every resource for a candidate time range.

    Args:
        resources: Resource records
        events: Event records (any resource)
        time_range: TimeRange, a {"start", "end"} dict or a (start, end) pair
        exclude_event_id: Id of the booking being edited; never conflicts
            with itself

    Returns:
        One dict per resource, in input order:
        {
            'resource_id': Any,
            'is_available': bool,
            'conflicting_events': [original event records],
            'today_schedule': [original event records, sorted by start]
        }
    """
    resources = [Resource.from_record(r) for r in resources]

    if isinstance(time_range, dict):
        time_range = TimeRange(time_range.get("start"), time_range.get("end"))
    elif not isinstance(time_range, TimeRange):
        try:
            start, end = time_range
        except (TypeError, ValueError):
            start = end = None
        time_range = TimeRange(start, end)

    if not time_range.is_valid:
        logger.debug("Invalid availability range, reporting all resources as available")
        return [
            {
                "resource_id": resource.id,
                "is_available": True,
                "conflicting_events": [],
                "today_schedule": [],
            }
            for resource in resources
        ]

    query_start, query_end = time_range.start, time_range.end
    day_start, day_end = day_bounds(query_start)

    bookable = _bookable_events(events, exclude_event_id)

    results = []
    for resource in resources:
        resource_events = [
            (event, interval) for event, interval in bookable if event.resource_id == resource.id
        ]

        conflicts = [
            event.source
            for event, (start, end) in resource_events
            if overlaps(query_start, query_end, start, end)
        ]

        today = [
            event
            for event, (start, end) in resource_events
            if overlaps(day_start, day_end, start, end)
        ]
        today.sort(key=lambda event: event.start)

        results.append(
            {
                "resource_id": resource.id,
                "is_available": len(conflicts) == 0,
                "conflicting_events": conflicts,
                "today_schedule": [event.source for event in today],
            }
        )

    return results


def _midnight(day: date) -> datetime:
    return timezone.make_aware(datetime.combine(day, time.min))


def view_window(
    target: Any, view: str = VIEW_DAY, week_starts_on: Optional[int] = None
) -> Tuple[datetime, datetime]:
    """
    First and last instant of the day, week or month containing ``target``.

    Args:
        target: Date, datetime or ISO string
        view: 'day', 'week' or 'month'; anything else is treated as 'day'
        week_starts_on: 0 for Sunday, 1 for Monday (defaults to the
            SCHEDULE_WEEK_STARTS_ON setting)

    Returns:
        (window_start, window_end) with window_end at 23:59:59.999999
    """
    instant = to_datetime(target)
    if instant is None:
        instant = timezone.now()
        logger.warning(f"Unparseable date {target!r}, using today for the {view} window")

    if view not in VIEWS:
        logger.warning(f"Unknown view {view!r}, using the day window")
        view = VIEW_DAY

    day_start, day_end = day_bounds(instant)

    if view == VIEW_WEEK:
        if week_starts_on is None:
            week_starts_on = getattr(settings, "SCHEDULE_WEEK_STARTS_ON", 1)
        # Python counts Monday as 0, week_starts_on counts Sunday as 0
        sunday_based = (day_start.weekday() + 1) % 7
        diff = (sunday_based - week_starts_on) % 7
        first = day_start.date() - timedelta(days=diff)
        week_end = next_day(_midnight(first + timedelta(days=6))) - timedelta(microseconds=1)
        return _midnight(first), week_end

    if view == VIEW_MONTH:
        first = day_start.date().replace(day=1)
        last = first.replace(day=calendar.monthrange(first.year, first.month)[1])
        return _midnight(first), next_day(_midnight(last)) - timedelta(microseconds=1)

    return day_start, day_end


def get_period_availability(
    resources: Iterable[Any],
    events: Iterable[Any],
    target: Any,
    view: str = VIEW_DAY,
    week_starts_on: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build the availability response for a whole view window.

    A resource is available when none of its (non-cancelled) bookings
    touches the window. Events without a resource are ignored.

    Args:
        resources: Resource records
        events: Event records
        target: Any date inside the window
        view: 'day', 'week' or 'month'
        week_starts_on: First weekday for week windows

    Returns:
        {
            'start_date': datetime,
            'end_date': datetime,
            'view': str,
            'resources': [{
                'resource_id', 'resource_name', 'group_id',
                'is_available', 'bookings': [...]
            }]
        }
    """
    window_start, window_end = view_window(target, view, week_starts_on)

    period_events = [
        (event, interval)
        for event, interval in _bookable_events(events)
        if event.resource_id is not None and overlaps(window_start, window_end, *interval)
    ]

    availability = []
    for record in resources:
        resource = Resource.from_record(record)
        bookings = [
            _booking_summary(event) for event, _ in period_events if event.resource_id == resource.id
        ]
        availability.append(
            {
                "resource_id": resource.id,
                "resource_name": resource.name,
                "group_id": resource.group_id,
                "is_available": len(bookings) == 0,
                "bookings": bookings,
            }
        )

    return {
        "start_date": window_start,
        "end_date": window_end,
        "view": view if view in VIEWS else VIEW_DAY,
        "resources": availability,
    }


def _booking_summary(event: ScheduleEvent) -> Dict[str, Any]:
    return {
        "id": event.id,
        "event_id": event.id,
        "title": event.title,
        "start_date": event.start,
        "end_date": event.end,
        "is_all_day": event.is_all_day,
        "attendee": event.attendee,
        "resource_id": event.resource_id,
        "extended_props": event.extended_props,
    }


def filter_available_resources(
    resources: Iterable[Any], availability: Iterable[Dict[str, Any]]
) -> List[Any]:
    """
    Keep the resources an availability list reports as free.

    Resources missing from the list count as available.
    """
    status = {entry["resource_id"]: entry["is_available"] for entry in availability}
    return [
        record
        for record in resources
        if status.get(Resource.from_record(record).id, True)
    ]


def resource_display_name(resource_id: Any, resources: Iterable[Any], groups: Iterable[Any]) -> str:
    """
    Display name of a resource, suffixed with its group name when known.

    Unknown resource ids are returned as a string unchanged.
    """
    for record in resources:
        resource = Resource.from_record(record)
        if resource.id != resource_id:
            continue
        for group_record in groups:
            group = ResourceGroup.from_record(group_record)
            if group.id == resource.group_id:
                return f"{resource.name} ({group.name})"
        return resource.name
    return str(resource_id)

