"""
Data type conversion utilities for Schedule Kit.

This module provides functions for converting loosely typed event and
resource records (as delivered by a data source) into the values the
schedule engines compare.
"""

import datetime
from typing import Any, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

TRUE_STRINGS = ("true", "1")


def to_boolean(value: Any) -> bool:
    """
    Convert a flag that may arrive as bool, number or string to boolean.

    Only ``True``, ``1``, ``"true"`` and ``"1"`` count as set; anything else,
    including ``"yes"`` or ``2``, is treated as unset.

    Args:
        value: Input value (string, int, bool, etc.)

    Returns:
        Boolean representation of the value
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, (int, float)):
        return value == 1

    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS

    return False


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """
    Convert a value to integer.

    Args:
        value: Input value
        default: Default value if conversion fails

    Returns:
        Integer or default if conversion fails
    """
    if value is None:
        return default

    try:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return default

        return int(float(value))
    except (ValueError, TypeError):
        return default


def to_date(value: Any) -> Optional[datetime.date]:
    """
    Convert a value to a civil date.

    Aware datetimes are converted to the current timezone first so the date
    is the one a local reader would see.

    Args:
        value: Input value (string, date object, etc.)

    Returns:
        Date object or None if conversion fails
    """
    if value is None:
        return None

    if isinstance(value, datetime.datetime):
        if timezone.is_aware(value):
            return timezone.localtime(value).date()
        return value.date()

    if isinstance(value, datetime.date):
        return value

    if isinstance(value, str):
        try:
            parsed = parse_date(value)
            if parsed:
                return parsed

            parsed = parse_datetime(value)
            if parsed:
                return to_date(parsed)
        except ValueError:
            pass

    return None


def to_datetime(value: Any) -> Optional[datetime.datetime]:
    """
    Convert a value to an aware datetime.

    Naive values are interpreted in the current timezone. Strings may be ISO
    datetimes (with ``Z`` or an offset) or plain dates, which become local
    midnight.

    Args:
        value: Input value (string, datetime object, etc.)

    Returns:
        Aware datetime or None if conversion fails
    """
    if value is None:
        return None

    if isinstance(value, datetime.datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value)
        return value

    if isinstance(value, datetime.date):
        return timezone.make_aware(datetime.datetime.combine(value, datetime.time.min))

    if isinstance(value, str):
        value = value.strip()
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        try:
            parsed = parse_datetime(value)
            if parsed:
                return to_datetime(parsed)

            parsed = parse_date(value)
            if parsed:
                return to_datetime(parsed)
        except (ValueError, OverflowError):
            pass

    return None
