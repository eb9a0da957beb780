"""
Custom exceptions for Schedule Kit.

This module defines the exception hierarchy used by the data-access layer
and schedule sessions. The algorithms never raise these: they fall back to
permissive results instead.
"""


class ScheduleError(Exception):
    """Base exception for all schedule-related exceptions."""

    default_message = "An unexpected scheduling error occurred."

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self):
        """Convert exception to dictionary representation."""
        error_dict = {
            "message": str(self.message),
            "code": self.__class__.__name__,
        }

        if self.errors:
            error_dict["errors"] = self.errors

        return error_dict


class InvalidDataException(ScheduleError):
    """Exception raised when event or resource data is invalid."""

    default_message = "Invalid data provided."


class ResourceNotFoundException(ScheduleError):
    """Exception raised when a requested event or resource is not found."""

    default_message = "The requested item was not found."


class DataSourceException(ScheduleError):
    """Exception raised when the schedule data source cannot be reached."""

    default_message = "The schedule data source is currently unavailable."
