# tests/helpers.py
from datetime import datetime

from django.utils import timezone


def at(*args):
    """Aware datetime in the current (test) timezone."""
    return timezone.make_aware(datetime(*args))


def booking(id, start, end, resource_id="r1", **extra):
    """Event record the way a data source delivers it."""
    record = {
        "id": id,
        "start_date": start,
        "end_date": end,
        "resource_id": resource_id,
        "title": f"Booking {id}",
        "status": "booked",
    }
    record.update(extra)
    return record
