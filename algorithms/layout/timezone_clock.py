"""
Civil clock readings for absolute instants.

Layout positions are computed from the wall-clock hour and minute an
instant shows in the calendar's timezone. Timezone rules come from pytz.
"""

import logging
from typing import Any, Dict

import pytz
from django.utils import timezone

from utils.converters import to_datetime

logger = logging.getLogger(__name__)


def get_zone(timezone_id: Any):
    """
    Resolve a timezone identifier.

    Returns:
        pytz timezone, or None when the identifier is unknown or malformed
    """
    try:
        return pytz.timezone(timezone_id)
    except (pytz.UnknownTimeZoneError, AttributeError, TypeError):
        return None


def civil_time(instant: Any, timezone_id: Any) -> Dict[str, int]:
    """
    Hour and minute shown by a wall clock in ``timezone_id`` at ``instant``.

    An unknown timezone is logged and the instant is read in the local
    (Django current) timezone instead; nothing is raised.

    Args:
        instant: Aware or naive datetime, or ISO string; naive values are
            read in the local timezone
        timezone_id: IANA identifier such as "Asia/Tokyo"

    Returns:
        {'hour': 0-23, 'minute': 0-59}
    """
    moment = to_datetime(instant)
    if moment is None:
        logger.warning(f"Cannot read a civil time from {instant!r}, using midnight")
        return {"hour": 0, "minute": 0}

    zone = get_zone(timezone_id)
    if zone is None:
        logger.error(f"Invalid timezone {timezone_id!r}, falling back to local time")
        local = timezone.localtime(moment)
    else:
        local = moment.astimezone(zone)

    # Some clock engines report midnight as hour 24
    return {"hour": local.hour % 24, "minute": local.minute}
