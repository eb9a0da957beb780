# apps/scheduleapp/services/data_source.py
"""
Access to stored events, resources and groups.

A schedule session only talks to its data source through this interface,
so the same session logic runs against a remote API client, a database or
the in-memory store used in tests.
"""

import copy
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from algorithms.availability.resource_availability import get_period_availability
from apps.scheduleapp.records import field_spellings, read_field
from core.exceptions import InvalidDataException, ResourceNotFoundException

logger = logging.getLogger(__name__)


class ScheduleDataSource(ABC):
    """
    Interface of a schedule backend.

    Subclasses may raise DataSourceException when the backend is
    unreachable.
    """

    @abstractmethod
    def list_events(self) -> List[Any]:
        pass

    @abstractmethod
    def list_resources(self) -> List[Any]:
        pass

    @abstractmethod
    def list_groups(self) -> List[Any]:
        pass

    @abstractmethod
    def create_event(self, data: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    def update_event(self, event_id: Any, data: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    def delete_event(self, event_id: Any) -> None:
        pass

    def get_resource_availability(self, target: Any, view: str = "day") -> Dict[str, Any]:
        """
        Availability response for the view window containing ``target``.

        The default implementation computes it from the listed events and
        resources; remote backends may override it to delegate the query.
        """
        return get_period_availability(
            self.list_resources(), self.list_events(), target, view
        )


class InMemoryScheduleDataSource(ScheduleDataSource):
    """
    Schedule backend holding dict records in process memory.

    Returned records are copies, so callers cannot mutate the store.
    """

    def __init__(self, events=None, resources=None, groups=None):
        self._lock = threading.RLock()
        self._events: Dict[Any, Dict[str, Any]] = {}
        self._resources = [dict(r) for r in resources or []]
        self._groups = [dict(g) for g in groups or []]

        for record in events or []:
            record = dict(record)
            record.setdefault("id", str(uuid.uuid4()))
            self._events[record["id"]] = record

    def list_events(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(record) for record in self._events.values()]

    def list_resources(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(record) for record in self._resources]

    def list_groups(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(record) for record in self._groups]

    def create_event(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Store a new event.

        Raises:
            InvalidDataException: If the event has no start or end date
        """
        if read_field(data, "start_date") is None or read_field(data, "end_date") is None:
            raise InvalidDataException("An event needs a start and an end date.")

        record = dict(data)
        with self._lock:
            record.setdefault("id", str(uuid.uuid4()))
            self._events[record["id"]] = record
            logger.info(f"Created event {record['id']}")
            return copy.deepcopy(record)

    def update_event(self, event_id: Any, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge ``data`` into an existing event.

        A field given in either spelling (start_date or startDate) replaces
        the stored value whatever spelling the record used.

        Raises:
            ResourceNotFoundException: If no event has this id
        """
        with self._lock:
            record = self._get(event_id)
            for key, value in data.items():
                if key == "id":
                    continue
                for spelling in field_spellings(key):
                    record.pop(spelling, None)
                record[key] = value
            logger.info(f"Updated event {event_id}")
            return copy.deepcopy(record)

    def delete_event(self, event_id: Any) -> None:
        with self._lock:
            self._get(event_id)
            del self._events[event_id]
            logger.info(f"Deleted event {event_id}")

    def _get(self, event_id: Any) -> Dict[str, Any]:
        try:
            return self._events[event_id]
        except KeyError:
            raise ResourceNotFoundException(f"Event {event_id} not found.")
