from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable

from src.domain.algorithms.positions import (
    ShapeGeometry,
    active_departures,
    clamp_progress,
    evict_expired,
    still_visited,
    visited_stop_ids,
)
from src.domain.exceptions import InterpolationError
from src.domain.models import Frame, Route, ScheduleDocument, VehiclePosition

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VisitedStops:
    """Stop id -> wall-clock time it was last visited.

    A stop stays visited for ``respawn_s`` real seconds after the last visit.
    """

    respawn_s: float = 4.0
    visited_at: dict[str, float] = field(default_factory=dict)

    def mark(self, stop_ids: Iterable[str], now: float) -> None:
        for sid in stop_ids:
            self.visited_at[sid] = now

    def is_visited(self, stop_id: str, now: float) -> bool:
        ts = self.visited_at.get(stop_id)
        return ts is not None and now - ts < self.respawn_s

    def evict(self, now: float) -> None:
        evict_expired(self.visited_at, now, self.respawn_s)

    def peek(self, now: float) -> frozenset[str]:
        return still_visited(self.visited_at, now, self.respawn_s)

    def snapshot(self, now: float) -> frozenset[str]:
        self.evict(now)
        return self.peek(now)


@dataclass(slots=True)
class PositionEngine:
    """Derives per-frame vehicle positions from a loaded schedule document.

    The document is read-only; the only state kept between calls is the
    visited-stop map.
    """

    document: ScheduleDocument
    visited: VisitedStops = field(default_factory=VisitedStops)
    wall_clock: Callable[[], float] = time.monotonic

    _geometry: dict[str, ShapeGeometry | None] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        # Only the first shape of each route carries vehicles.
        for route in self.document.routes:
            self._geometry[route.id] = ShapeGeometry.for_shape(route.primary_shape)

    @property
    def routes(self) -> tuple[Route, ...]:
        return self.document.routes

    def route_vehicles(
        self, route: Route, simulated_time_s: float, *, selected: bool = False
    ) -> tuple[list[VehiclePosition], set[str]]:
        geom = self._geometry.get(route.id)
        if geom is None:
            return [], set()

        shape = route.primary_shape
        vehicles: list[VehiclePosition] = []
        visited: set[str] = set()
        for dep in active_departures(route, simulated_time_s):
            p = clamp_progress(dep.progress)
            try:
                location = geom.position_at(p)
            except (InterpolationError, ArithmeticError) as exc:
                logger.debug(
                    "Omitting vehicle on route %s (dep %s): %s",
                    route.id,
                    dep.departure_s,
                    exc,
                )
                continue

            vehicles.append(
                VehiclePosition(
                    route_id=route.id,
                    shape_index=0,
                    location=location,
                    progress=p,
                    departure_s=dep.departure_s,
                    short_name=route.short_name,
                    headsign=shape.headsign,
                    color=route.color,
                    selected=selected,
                )
            )
            visited |= visited_stop_ids(shape, p)
        return vehicles, visited

    def compute_frame(
        self,
        simulated_time_s: float,
        *,
        selected_route_id: str | None = None,
        record_visits: bool = True,
    ) -> Frame:
        """Vehicles at ``simulated_time_s`` plus the stops currently lit.

        With ``record_visits=False`` the visited map is left untouched, so an
        out-of-band preview does not light stops on the shared map.
        """

        vehicles: list[VehiclePosition] = []
        now_visited: set[str] = set()
        for route in self.document.routes:
            route_vehicles, route_visited = self.route_vehicles(
                route,
                simulated_time_s,
                selected=route.id == selected_route_id,
            )
            vehicles.extend(route_vehicles)
            now_visited |= route_visited

        now = self.wall_clock()
        if record_visits:
            self.visited.mark(now_visited, now)
            visited_ids = self.visited.snapshot(now)
        else:
            visited_ids = self.visited.peek(now) | now_visited

        return Frame(
            simulated_time_s=simulated_time_s,
            vehicles=tuple(vehicles),
            visited_stop_ids=visited_ids,
            route_count=len(self.document.routes),
        )
