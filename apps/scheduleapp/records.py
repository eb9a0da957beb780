# apps/scheduleapp/records.py
"""
Read-only views over the event, resource and group records a data source
delivers.

Records arrive as dicts (snake_case or camelCase keys) or as objects with
attributes. They are wrapped once at ingestion so the engines read one
normalized shape, while the caller's original record is kept on ``source``
and handed back in every result.
"""

import re
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from utils.converters import to_boolean, to_datetime, to_int

STATUS_BOOKED = "booked"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def field_spellings(name: str) -> Tuple[str, str]:
    """The (snake_case, camelCase) spellings of a field name in either form."""
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()
    return snake, _camel(snake)


def read_field(record: Any, name: str, default: Any = None) -> Any:
    """
    Read a field from a dict or attribute record.

    The snake_case name is tried first, then its camelCase spelling.

    Args:
        record: Dict or object
        name: snake_case field name
        default: Value returned when neither spelling is present

    Returns:
        The field value or default
    """
    for key in (name, _camel(name)):
        if isinstance(record, dict):
            if key in record:
                return record[key]
        elif hasattr(record, key):
            return getattr(record, key)
    return default


def coerce_all_day(record: Any) -> bool:
    """
    Derive the all-day flag of an event record.

    The top-level field wins when present; otherwise the ``isAllDay`` entry
    of the free-form extended props is used.
    """
    value = read_field(record, "is_all_day")
    if value is None:
        extended = read_field(record, "extended_props") or {}
        if isinstance(extended, dict):
            value = extended.get("isAllDay", extended.get("is_all_day"))
    return to_boolean(value)


class ScheduleEvent:
    """A booking on the schedule, normalized from a raw record."""

    def __init__(
        self,
        id: Any,
        start: Optional[datetime],
        end: Optional[datetime],
        resource_id: Any = None,
        group_id: Any = None,
        title: str = "",
        status: str = STATUS_BOOKED,
        is_all_day: bool = False,
        attendee: str = "",
        extended_props: Optional[Dict[str, Any]] = None,
        source: Any = None,
    ):
        """
        Initialize an event.

        Args:
            id: Opaque event identity
            start: Start instant, None when the record's date was unparseable
            end: End instant, None when the record's date was unparseable
            resource_id: Booked resource, None for unassigned events
            group_id: Resource group the event belongs to
            title: Display title
            status: booked, completed, cancelled or a domain specific value
            is_all_day: Normalized all-day flag
            attendee: Free-form attendee text
            extended_props: Free-form metadata
            source: The original record this event was read from
        """
        self.id = id
        self.start = start
        self.end = end
        self.resource_id = resource_id
        self.group_id = group_id
        self.title = title
        self.status = status
        self.is_all_day = is_all_day
        self.attendee = attendee
        self.extended_props = extended_props or {}
        self.source = source if source is not None else self

    def __repr__(self) -> str:
        return f"<ScheduleEvent {self.id} {self.start} - {self.end} [{self.status}]>"

    @property
    def has_valid_dates(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def is_cancelled(self) -> bool:
        return self.status == STATUS_CANCELLED

    @staticmethod
    def from_record(record: Any) -> "ScheduleEvent":
        """
        Create a ScheduleEvent from a dict or attribute record.

        Already normalized events are returned unchanged.

        Args:
            record: Dict with start_date/end_date (or startDate/endDate) keys,
                or an object exposing the same attributes

        Returns:
            ScheduleEvent wrapping the record
        """
        if isinstance(record, ScheduleEvent):
            return record

        return ScheduleEvent(
            id=read_field(record, "id"),
            start=to_datetime(read_field(record, "start_date", read_field(record, "start"))),
            end=to_datetime(read_field(record, "end_date", read_field(record, "end"))),
            resource_id=read_field(record, "resource_id"),
            group_id=read_field(record, "group_id"),
            title=read_field(record, "title", ""),
            status=read_field(record, "status", STATUS_BOOKED),
            is_all_day=coerce_all_day(record),
            attendee=read_field(record, "attendee", ""),
            extended_props=read_field(record, "extended_props"),
            source=record,
        )


class Resource:
    """A bookable facility or person."""

    def __init__(self, id, name="", order=0, is_available=True, group_id=None, source=None):
        self.id = id
        self.name = name
        self.order = order
        self.is_available = is_available
        self.group_id = group_id
        self.source = source if source is not None else self

    def __repr__(self) -> str:
        return f"<Resource {self.id} {self.name!r}>"

    @staticmethod
    def from_record(record: Any) -> "Resource":
        if isinstance(record, Resource):
            return record

        available = read_field(record, "is_available", True)
        return Resource(
            id=read_field(record, "id"),
            name=read_field(record, "name", ""),
            order=to_int(read_field(record, "order"), 0),
            is_available=available if isinstance(available, bool) else to_boolean(available),
            group_id=read_field(record, "group_id"),
            source=record,
        )


class ResourceGroup:
    """Display grouping of resources; only used to compose display names."""

    def __init__(self, id, name="", display_mode="grid", dimension=1, source=None):
        self.id = id
        self.name = name
        self.display_mode = display_mode
        self.dimension = dimension
        self.source = source if source is not None else self

    def __repr__(self) -> str:
        return f"<ResourceGroup {self.id} {self.name!r}>"

    @staticmethod
    def from_record(record: Any) -> "ResourceGroup":
        if isinstance(record, ResourceGroup):
            return record

        return ResourceGroup(
            id=read_field(record, "id"),
            name=read_field(record, "name", ""),
            display_mode=read_field(record, "display_mode", "grid"),
            dimension=to_int(read_field(record, "dimension"), 1),
            source=record,
        )
