"""
Schedule Kit – centralised custom exceptions.

Import these from `core.exceptions` across the project instead of redefining
ad-hoc `Exception` subclasses in each app.
"""

from .custom_exceptions import (
    DataSourceException,
    InvalidDataException,
    ResourceNotFoundException,
    ScheduleError,
)

__all__ = [
    "ScheduleError",
    "InvalidDataException",
    "ResourceNotFoundException",
    "DataSourceException",
]
