from __future__ import annotations

from dataclasses import dataclass, field

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class VehiclePosition:
    """A simulated vehicle in transit on a route at one instant."""

    route_id: str
    shape_index: int
    location: GeoPoint
    progress: float
    departure_s: int
    short_name: str = ""
    headsign: str = ""
    color: str | None = None
    selected: bool = False


@dataclass(frozen=True, slots=True)
class FrameStats:
    routes: int
    vehicles: int


@dataclass(frozen=True, slots=True)
class Frame:
    simulated_time_s: float
    vehicles: tuple[VehiclePosition, ...] = ()
    visited_stop_ids: frozenset[str] = field(default_factory=frozenset)
    route_count: int = 0

    @property
    def stats(self) -> FrameStats:
        return FrameStats(
            routes=self.route_count,
            vehicles=len(self.vehicles),
        )
