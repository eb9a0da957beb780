"""
Vertical placement of events on a single-day timeline.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings

from algorithms.layout.timezone_clock import civil_time
from apps.scheduleapp.records import ScheduleEvent

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def layout_defaults(
    slot_minutes: Optional[int] = None,
    start_hour: Optional[int] = None,
    timezone_id: Optional[str] = None,
):
    """Fill unset layout parameters from the SCHEDULE_* settings."""
    if not slot_minutes or slot_minutes <= 0:
        if slot_minutes is not None:
            logger.warning(f"Slot interval {slot_minutes!r} is not positive, using the default")
        slot_minutes = getattr(settings, "SCHEDULE_SLOT_INTERVAL", 30)
    if start_hour is None:
        start_hour = getattr(settings, "SCHEDULE_START_HOUR", 8)
    if timezone_id is None:
        timezone_id = getattr(settings, "SCHEDULE_DEFAULT_TIMEZONE", settings.TIME_ZONE)
    return slot_minutes, start_hour, timezone_id


def pixels_per_hour(slot_minutes: int) -> float:
    slot_height = getattr(settings, "SCHEDULE_TIME_SLOT_HEIGHT", 60)
    return slot_height * (60 / slot_minutes)


def calculate_event_position(
    event: Any,
    slot_minutes: Optional[int] = None,
    start_hour: Optional[int] = None,
    timezone_id: Optional[str] = None,
) -> Dict[str, float]:
    """
    Calculate the top offset and height of an event in pixels.

    The event's civil start and end minutes are read in ``timezone_id``. An
    end that reads earlier than the start is taken to be on the next day.
    Zero or negative heights are returned as is; clamping is up to the
    caller.

    Args:
        event: Event record or ScheduleEvent
        slot_minutes: Minutes per time slot row
        start_hour: First visible hour of the timeline
        timezone_id: Calendar timezone

    Returns:
        {'top': float, 'height': float}
    """
    slot_minutes, start_hour, timezone_id = layout_defaults(slot_minutes, start_hour, timezone_id)
    event = ScheduleEvent.from_record(event)

    if not event.has_valid_dates:
        logger.warning(f"Event {event.id} has unparseable dates, placing it at the top")
        return {"top": 0.0, "height": 0.0}

    start = civil_time(event.start, timezone_id)
    end = civil_time(event.end, timezone_id)

    start_total_minutes = start["hour"] * 60 + start["minute"]
    end_total_minutes = end["hour"] * 60 + end["minute"]
    # Only one midnight crossing is corrected; longer spans are not modelled
    if end_total_minutes < start_total_minutes:
        end_total_minutes += MINUTES_PER_DAY

    hour_height = pixels_per_hour(slot_minutes)
    relative_start_minutes = start_total_minutes - start_hour * 60
    duration_minutes = end_total_minutes - start_total_minutes

    return {
        "top": (relative_start_minutes / 60) * hour_height,
        "height": (duration_minutes / 60) * hour_height,
    }
