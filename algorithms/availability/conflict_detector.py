"""
Double-booking detection.

This module checks a single candidate booking against the existing ones on
its resource, and marks every pair of existing bookings that share a
resource and overlap in time.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Iterable, Optional, Set

from algorithms.availability.interval_math import effective_interval, overlaps
from apps.scheduleapp.records import ScheduleEvent
from utils.converters import to_datetime

logger = logging.getLogger(__name__)

CONFLICT_DOUBLE_BOOKING = "double-booking"


class ConflictDetector:
    """
    Detects resource double-bookings between a candidate booking and the
    existing schedule.
    """

    def check_schedule_conflict(
        self, candidate: Any, existing_events: Iterable[Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Check a new or edited booking against existing bookings.

        Only bookings on the candidate's resource are considered, cancelled
        bookings never conflict and the candidate never conflicts with
        itself.

        Args:
            candidate: Event record with start/end dates and a resource
            existing_events: Existing event records

        Returns:
            None when free, otherwise the first conflict found:
            {
                'resource_id': Any,
                'existing_schedule': original record of the blocking booking,
                'new_schedule': the candidate record,
                'conflict_type': 'double-booking'
            }
        """
        new_event = ScheduleEvent.from_record(candidate)
        new_interval = effective_interval(new_event)
        if new_interval is None or new_event.resource_id is None:
            return None

        for record in existing_events:
            existing = ScheduleEvent.from_record(record)
            if existing.is_cancelled or existing.resource_id != new_event.resource_id:
                continue
            if new_event.id is not None and existing.id == new_event.id:
                continue

            interval = effective_interval(existing)
            if interval is None:
                logger.warning(f"Ignoring event {existing.id} with unparseable dates")
                continue

            if overlaps(*new_interval, *interval):
                logger.debug(f"Booking on {new_event.resource_id} conflicts with event {existing.id}")
                return {
                    "resource_id": new_event.resource_id,
                    "existing_schedule": existing.source,
                    "new_schedule": new_event.source,
                    "conflict_type": CONFLICT_DOUBLE_BOOKING,
                }

        return None

    def find_conflict(
        self,
        start: Any,
        duration_hours: Any,
        resource_id: Any,
        events: Iterable[Any],
        current_event_id: Optional[Any] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Check a booking described by its start and duration.

        Args:
            start: Start instant (datetime or ISO string)
            duration_hours: Length in hours; unparseable values count as 0
            resource_id: Resource to book
            events: Existing event records
            current_event_id: Id of the booking being edited

        Returns:
            Conflict dict as returned by check_schedule_conflict, or None
            when there is no resource or the start cannot be parsed
        """
        start_at = to_datetime(start)
        if not resource_id or start_at is None:
            return None

        try:
            hours = float(duration_hours or 0)
        except (TypeError, ValueError):
            hours = 0.0

        candidate = ScheduleEvent(
            id=current_event_id,
            start=start_at,
            end=start_at + timedelta(hours=hours),
            resource_id=resource_id,
        )
        return self.check_schedule_conflict(candidate, events)

    def detect_conflicts(self, events: Iterable[Any]) -> Set[Any]:
        """
        Find every booking that double-books its resource.

        Args:
            events: Event records

        Returns:
            Set of ids of bookings that overlap another non-cancelled booking
            on the same resource
        """
        candidates = []
        for record in events:
            event = ScheduleEvent.from_record(record)
            if event.is_cancelled or event.resource_id is None:
                continue
            interval = effective_interval(event)
            if interval is not None:
                candidates.append((event, interval))

        conflicting = set()
        for i, (current, current_interval) in enumerate(candidates):
            for other, other_interval in candidates[i + 1 :]:
                if current.resource_id != other.resource_id:
                    continue
                if overlaps(*current_interval, *other_interval):
                    conflicting.add(current.id)
                    conflicting.add(other.id)

        return conflicting
