from .data_source import InMemoryScheduleDataSource, ScheduleDataSource
from .schedule_service import ScheduleService

__all__ = ["ScheduleDataSource", "InMemoryScheduleDataSource", "ScheduleService"]
