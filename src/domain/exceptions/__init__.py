from .schedule import (
    DataFetchError,
    InterpolationError,
    MalformedRowError,
    MissingSourceError,
    MissingTableError,
    ScheduleError,
)

__all__ = [
    "DataFetchError",
    "InterpolationError",
    "MalformedRowError",
    "MissingSourceError",
    "MissingTableError",
    "ScheduleError",
]
