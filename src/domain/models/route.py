from __future__ import annotations

from dataclasses import dataclass, field

from .geo import GeoPoint
from .stop import Stop

DEFAULT_TRIP_DURATION_S = 1800
DEFAULT_ROUTE_COLOR = "#0178BC"


@dataclass(frozen=True, slots=True)
class FrequencyBand:
    """A vehicle departs every ``headway_s`` for departures in [start_s, end_s).

    Times are seconds since service day midnight (may exceed 24h).
    """

    start_s: int
    end_s: int
    headway_s: int
    trip_duration_s: int

    @property
    def is_valid(self) -> bool:
        return self.headway_s > 0 and self.start_s < self.end_s


@dataclass(frozen=True, slots=True)
class StopOnShape:
    stop_id: str
    name: str
    location: GeoPoint
    dist_along_shape: float = 0.0
    arrival_s: int | None = None

    def to_stop(self) -> Stop:
        return Stop(id=self.stop_id, name=self.name, location=self.location)


@dataclass(frozen=True, slots=True)
class Shape:
    shape_id: str
    headsign: str
    direction: int
    coordinates: tuple[GeoPoint, ...]
    stops: tuple[StopOnShape, ...] = ()

    @property
    def total_stop_distance(self) -> float:
        """Distance of the last stop along the shape; 1 when unknown."""

        if not self.stops:
            return 1.0
        return self.stops[-1].dist_along_shape or 1.0


@dataclass(frozen=True, slots=True)
class Route:
    id: str
    short_name: str
    long_name: str
    color: str
    shapes: tuple[Shape, ...]
    trip_duration_s: int = DEFAULT_TRIP_DURATION_S
    frequencies: tuple[FrequencyBand, ...] = ()

    def __post_init__(self) -> None:
        if not self.shapes:
            raise ValueError(f"Route {self.id} has no shapes")

    @property
    def primary_shape(self) -> Shape:
        return self.shapes[0]


@dataclass(frozen=True, slots=True)
class ScheduleDocument:
    """The two artifacts produced by preprocessing."""

    routes: tuple[Route, ...] = field(default_factory=tuple)
    stops: tuple[Stop, ...] = field(default_factory=tuple)

    def route_by_id(self, route_id: str) -> Route | None:
        return next((r for r in self.routes if r.id == route_id), None)
