"""
Layout algorithms for day and week timelines.

Key components:
- timezone_clock: Civil hour and minute of an instant in a named timezone
- position_calculator: Pixel offset and height of an event
- overlap_layout: Column assignment for overlapping events
- day_grid: Time slot labels, "now" line and per-day event selection
"""

from .overlap_layout import calculate_events_with_layout
from .position_calculator import calculate_event_position
from .timezone_clock import civil_time

__all__ = ["civil_time", "calculate_event_position", "calculate_events_with_layout"]
