class ScheduleError(Exception):
    """Base exception for schedule preprocessing and simulation failures."""


class MissingSourceError(ScheduleError):
    """Raised when no GTFS directory can be found under the search root."""


class MissingTableError(ScheduleError):
    """Raised when a required GTFS table file is absent."""

    def __init__(self, table: str, path: str | None = None) -> None:
        self.table = table
        self.path = path
        where = f" at {path}" if path else ""
        super().__init__(f"Missing GTFS table {table}{where}")


class MalformedRowError(ScheduleError):
    """Raised while parsing a single table row; callers skip the row."""

    def __init__(self, table: str, reason: str) -> None:
        self.table = table
        self.reason = reason
        super().__init__(f"{table}: {reason}")


class InterpolationError(ScheduleError):
    """Raised when a position cannot be derived from a shape's geometry."""


class DataFetchError(ScheduleError):
    """Raised when a schedule artifact cannot be fetched or decoded."""
