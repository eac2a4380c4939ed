from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, MutableMapping

from src.domain.algorithms.geo_utils import (
    cumulative_distances_m,
    interpolate_along_polyline,
)
from src.domain.models import GeoPoint, Route, Shape
from src.domain.models.route import DEFAULT_TRIP_DURATION_S

MIN_PROGRESS = 0.001
MAX_PROGRESS = 0.999
VISIT_TOLERANCE = 0.015
MIN_ROUTE_LENGTH_M = 50.0


@dataclass(frozen=True, slots=True)
class ActiveDeparture:
    departure_s: int
    progress: float


def _trip_duration(band_duration_s: int, route_duration_s: int) -> int:
    if band_duration_s > 0:
        return band_duration_s
    if route_duration_s > 0:
        return route_duration_s
    return DEFAULT_TRIP_DURATION_S


def active_departures(route: Route, t: float) -> list[ActiveDeparture]:
    """Vehicles in transit on ``route`` at simulated time ``t``.

    One synthetic departure per headway inside each band; a departure is active
    while 0 <= t - dep <= trip duration.
    """

    out: list[ActiveDeparture] = []
    for band in route.frequencies:
        if band.headway_s <= 0:
            continue
        duration = _trip_duration(band.trip_duration_s, route.trip_duration_s)

        for dep in range(band.start_s, band.end_s, band.headway_s):
            elapsed = t - dep
            if elapsed < 0 or elapsed > duration:
                continue
            out.append(ActiveDeparture(departure_s=dep, progress=elapsed / duration))
    return out


def clamp_progress(progress: float) -> float:
    return max(MIN_PROGRESS, min(MAX_PROGRESS, progress))


@dataclass(frozen=True, slots=True)
class ShapeGeometry:
    """Precomputed arc-length table for a shape's polyline."""

    points: tuple[GeoPoint, ...]
    cumulative_m: tuple[float, ...]

    @property
    def length_m(self) -> float:
        return self.cumulative_m[-1] if self.cumulative_m else 0.0

    @staticmethod
    def for_shape(
        shape: Shape, min_length_m: float = MIN_ROUTE_LENGTH_M
    ) -> "ShapeGeometry | None":
        if len(shape.coordinates) < 2:
            return None
        geom = ShapeGeometry(
            points=shape.coordinates,
            cumulative_m=cumulative_distances_m(shape.coordinates),
        )
        if not geom.length_m > min_length_m:
            return None
        return geom

    def position_at(self, progress: float) -> GeoPoint:
        return interpolate_along_polyline(
            self.points, self.cumulative_m, progress * self.length_m
        )


def visited_stop_ids(shape: Shape, progress: float) -> set[str]:
    """Stops whose relative distance along the shape is within tolerance.

    A geometric proxy only; scheduled arrival times are not consulted.
    """

    total = shape.total_stop_distance
    return {
        s.stop_id
        for s in shape.stops
        if abs(progress - s.dist_along_shape / total) < VISIT_TOLERANCE
    }


def evict_expired(
    visited_at: MutableMapping[str, float], now: float, respawn_s: float
) -> None:
    """Drop entries whose respawn window has elapsed."""

    expired = [sid for sid, ts in visited_at.items() if now - ts >= respawn_s]
    for sid in expired:
        del visited_at[sid]


def still_visited(
    visited_at: Mapping[str, float], now: float, respawn_s: float
) -> frozenset[str]:
    return frozenset(sid for sid, ts in visited_at.items() if now - ts < respawn_s)
