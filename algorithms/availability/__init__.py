"""
Availability calculation algorithms.

This package decides whether bookings collide with each other or with a
candidate time range.

Key components:
- interval_math: Strict overlap predicate and all-day normalization
- resource_availability: Per-resource availability and period availability
- ConflictDetector: Double-booking detection for a single booking or a schedule
"""

from .conflict_detector import ConflictDetector
from .resource_availability import get_period_availability, get_resource_availability

__all__ = ["ConflictDetector", "get_resource_availability", "get_period_availability"]
