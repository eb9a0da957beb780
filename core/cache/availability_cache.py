"""
Availability Cache

Memoizes availability responses per (civil date, view) for one schedule
session. Entries never expire on their own; any event mutation clears the
whole cache, since a single booking change can affect many resources and
date windows.

Each instance owns a private Django LocMemCache. Its internal lock guards
get, put and clear, so an instance may be shared between threads.
"""

import logging
import sys
import uuid
from typing import Any, Optional

from django.core.cache.backends import locmem
from django.core.cache.backends.locmem import LocMemCache

from core.cache.key_generator import availability_cache_key

logger = logging.getLogger(__name__)

_MISSING = object()


class AvailabilityCache:
    """
    Per-session cache of availability responses keyed by date and view.
    """

    def __init__(self, name: Optional[str] = None):
        """
        Initialize an empty cache.

        Args:
            name: Optional label used in log messages
        """
        self.name = name or "availability"
        # LocMemCache shares storage between instances with the same location
        self._location = f"{self.name}-{uuid.uuid4().hex}"
        self._backend = LocMemCache(
            self._location,
            {"TIMEOUT": None, "OPTIONS": {"MAX_ENTRIES": sys.maxsize}},
        )

    def get(self, target: Any, view: str = "day", default: Any = None) -> Any:
        """
        Look up the response cached for a date and view.

        Args:
            target: Any instant or date on the wanted day
            view: 'day', 'week' or 'month'
            default: Returned on a miss

        Returns:
            Cached response or default
        """
        key = availability_cache_key(target, view)
        value = self._backend.get(key, _MISSING)
        if value is _MISSING:
            logger.debug(f"Cache MISS: {key} in {self.name}")
            return default

        logger.debug(f"Cache HIT: {key} in {self.name}")
        return value

    def contains(self, target: Any, view: str = "day") -> bool:
        return self._backend.has_key(availability_cache_key(target, view))

    def put(self, target: Any, view: str, result: Any) -> None:
        """
        Store the response for a date and view, replacing any previous one.
        """
        key = availability_cache_key(target, view)
        self._backend.set(key, result, timeout=None)
        logger.debug(f"Cache SET: {key} in {self.name}")

    def invalidate_all(self) -> None:
        """Drop every entry of this cache."""
        self._backend.clear()
        logger.debug(f"Cache CLEAR: {self.name}")

    def close(self) -> None:
        """Release the backend storage at the end of the session."""
        self.invalidate_all()
        self._backend.close()
        locmem._caches.pop(self._location, None)
        locmem._expire_info.pop(self._location, None)
        locmem._locks.pop(self._location, None)
