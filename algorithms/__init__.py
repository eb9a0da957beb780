"""
Schedule Kit Algorithms Package.

This package contains the algorithmic core of the schedule toolkit. Every
function here is pure: it reads plain event and resource records and
returns geometry or availability results without touching shared state.

The algorithms are organized into the following subpackages:
- availability: Interval overlap, conflict detection and resource availability
- layout: Timezone-aware positioning and overlap column layout for day views
"""

__version__ = "1.0.0"
