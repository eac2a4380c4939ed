from .gtfs_repository import IGtfsRepository
from .schedule_repository import IScheduleRepository

__all__ = [
    "IGtfsRepository",
    "IScheduleRepository",
]
