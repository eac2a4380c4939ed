from .http_schedule_repository import HttpScheduleRepository
from .local_gtfs_repository import LocalGtfsRepository
from .local_schedule_repository import LocalScheduleRepository
from .s3_schedule_repository import S3ScheduleRepository

__all__ = [
    "HttpScheduleRepository",
    "LocalGtfsRepository",
    "LocalScheduleRepository",
    "S3ScheduleRepository",
]
