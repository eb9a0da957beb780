# apps/scheduleapp/services/schedule_service.py
"""
Schedule session service.

A ScheduleService wraps one data source for the lifetime of a session. It
answers layout and availability queries through the algorithms package and
memoizes availability responses per (date, view) until the next booking
change.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.utils import timezone

from algorithms.availability.conflict_detector import ConflictDetector
from algorithms.availability.resource_availability import (
    VIEW_DAY,
    filter_available_resources,
    get_resource_availability,
    resource_display_name,
)
from algorithms.layout.day_grid import events_for_date, split_all_day, week_dates
from algorithms.layout.overlap_layout import calculate_events_with_layout
from apps.scheduleapp.records import Resource
from apps.scheduleapp.services.data_source import ScheduleDataSource
from core.cache.availability_cache import AvailabilityCache
from utils.converters import to_date

logger = logging.getLogger(__name__)


class ScheduleService:
    """
    Session facade over a schedule data source.
    """

    def __init__(
        self,
        data_source: ScheduleDataSource,
        cache: Optional[AvailabilityCache] = None,
        timezone_id: Optional[str] = None,
    ):
        """
        Initialize the session.

        Args:
            data_source: Backend holding events, resources and groups
            cache: Availability cache, a new private one when omitted
            timezone_id: Calendar timezone for layouts (defaults to the
                SCHEDULE_DEFAULT_TIMEZONE setting)
        """
        self.data_source = data_source
        self.cache = cache or AvailabilityCache()
        self.timezone_id = timezone_id or getattr(
            settings, "SCHEDULE_DEFAULT_TIMEZONE", settings.TIME_ZONE
        )
        self.conflict_detector = ConflictDetector()

    def close(self) -> None:
        self.cache.close()

    # Mutations

    def create_event(self, data: Dict[str, Any]) -> Any:
        """
        Create an event and drop every cached availability response.

        Errors raised by the data source propagate and leave the cache
        untouched.
        """
        event = self.data_source.create_event(data)
        self.cache.invalidate_all()
        return event

    def update_event(self, event_id: Any, data: Dict[str, Any]) -> Any:
        event = self.data_source.update_event(event_id, data)
        self.cache.invalidate_all()
        return event

    def delete_event(self, event_id: Any) -> None:
        self.data_source.delete_event(event_id)
        self.cache.invalidate_all()

    # Availability

    def fetch_resource_availability(self, target: Any, view: str = VIEW_DAY) -> Any:
        """
        Availability response for a date and view, served from the cache when
        possible.

        Args:
            target: Any date of the wanted day, week or month
            view: 'day', 'week' or 'month'

        Returns:
            The data source's availability response, or an empty list when
            the data source failed (nothing is cached in that case)
        """
        day = self._resolve_date(target)
        cached = self.cache.get(day, view)
        if cached is not None:
            return cached

        try:
            result = self.data_source.get_resource_availability(day, view)
        except Exception as e:
            logger.exception(f"Error fetching resource availability for {target} ({view}): {e}")
            return []

        self.cache.put(day, view, result)
        return result

    def get_resource_availability_from_cache(self, target: Any, view: str = VIEW_DAY) -> Any:
        """Cached availability response, or None when nothing is cached."""
        return self.cache.get(self._resolve_date(target), view)

    def _resolve_date(self, target: Any):
        day = to_date(target)
        if day is None:
            day = timezone.localdate()
            logger.warning(f"Unparseable date {target!r}, using today ({day}) for availability")
        return day

    def resource_availability(
        self, time_range: Any, exclude_event_id: Optional[Any] = None
    ) -> List[Dict[str, Any]]:
        """
        Availability of every resource for a candidate booking range.

        Args:
            time_range: TimeRange, {"start", "end"} dict or (start, end) pair
            exclude_event_id: Booking being edited
        """
        return get_resource_availability(
            self.data_source.list_resources(),
            self.data_source.list_events(),
            time_range,
            exclude_event_id,
        )

    def available_resources(
        self, time_range: Any, exclude_event_id: Optional[Any] = None
    ) -> List[Any]:
        resources = self.data_source.list_resources()
        availability = get_resource_availability(
            resources, self.data_source.list_events(), time_range, exclude_event_id
        )
        return filter_available_resources(resources, availability)

    def find_conflict(
        self,
        start: Any,
        duration_hours: Any,
        resource_id: Any,
        current_event_id: Optional[Any] = None,
    ) -> Optional[Dict[str, Any]]:
        return self.conflict_detector.find_conflict(
            start, duration_hours, resource_id, self.data_source.list_events(), current_event_id
        )

    def resource_display_names(self, resource_ids: Optional[Iterable[Any]] = None) -> Dict[Any, str]:
        """
        Display names ("name (group)") keyed by resource id.

        Args:
            resource_ids: Ids to name, every known resource when omitted
        """
        resources = self.data_source.list_resources()
        groups = self.data_source.list_groups()
        if resource_ids is None:
            resource_ids = [Resource.from_record(r).id for r in resources]
        return {
            resource_id: resource_display_name(resource_id, resources, groups)
            for resource_id in resource_ids
        }

    # Layout

    def layout_day(
        self,
        target: Any,
        slot_minutes: Optional[int] = None,
        start_hour: Optional[int] = None,
        events: Optional[Iterable[Any]] = None,
    ) -> Dict[str, Any]:
        """
        Day view of the events starting on ``target``.

        All-day events are listed apart; timed events are laid out in
        columns.

        Returns:
            {'all_day': [records], 'timed': [layout dicts]}
        """
        if events is None:
            events = self.data_source.list_events()

        all_day, timed = split_all_day(events_for_date(events, target, self.timezone_id))
        return {
            "all_day": all_day,
            "timed": calculate_events_with_layout(
                timed, slot_minutes, start_hour, self.timezone_id
            ),
        }

    def layout_week(
        self,
        target: Any,
        slot_minutes: Optional[int] = None,
        start_hour: Optional[int] = None,
        week_starts_on: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Day views of the week containing ``target``.

        Returns:
            Seven {'date', 'all_day', 'timed'} dicts, first weekday first
        """
        events = self.data_source.list_events()
        week = []
        for day in week_dates(target, week_starts_on):
            layout = self.layout_day(day, slot_minutes, start_hour, events=events)
            layout["date"] = day
            week.append(layout)
        return week
