from __future__ import annotations

from dataclasses import dataclass

from src.domain.algorithms.frequencies import merge_bands, trip_duration_s
from src.domain.algorithms.geo_utils import COORD_PRECISION, simplify_polyline
from src.domain.models import (
    FrequencyBand,
    GeoPoint,
    Route,
    ScheduleDocument,
    Shape,
    Stop,
    StopOnShape,
)
from src.domain.models.gtfs import GtfsFeed, GtfsStopTime, GtfsTrip
from src.domain.models.route import DEFAULT_ROUTE_COLOR


@dataclass(frozen=True, slots=True)
class ShapeVariant:
    """Representative trip for one (direction, shape) pair of a route."""

    shape_id: str
    trip_id: str
    headsign: str
    direction: int


def representative_trips(
    trips: tuple[GtfsTrip, ...],
) -> dict[str, dict[tuple[int, str], ShapeVariant]]:
    """Group trips per route, keeping the first trip per (direction, shape)."""

    out: dict[str, dict[tuple[int, str], ShapeVariant]] = {}
    for trip in trips:
        variants = out.setdefault(trip.route_id, {})
        key = (trip.direction_id, trip.shape_id)
        if key in variants:
            continue
        variants[key] = ShapeVariant(
            shape_id=trip.shape_id,
            trip_id=trip.trip_id,
            headsign=trip.headsign,
            direction=trip.direction_id,
        )
    return out


def _ordered_shapes(feed: GtfsFeed) -> dict[str, tuple[GeoPoint, ...]]:
    tmp: dict[str, list[tuple[int, GeoPoint]]] = {}
    for pt in feed.shape_points:
        tmp.setdefault(pt.shape_id, []).append((pt.sequence, pt.location))

    # list.sort is stable, so duplicate sequence numbers keep file order.
    shapes: dict[str, tuple[GeoPoint, ...]] = {}
    for shape_id, pts in tmp.items():
        pts.sort(key=lambda x: x[0])
        shapes[shape_id] = tuple(p for _, p in pts)
    return shapes


def _ordered_stop_times(feed: GtfsFeed) -> dict[str, list[GtfsStopTime]]:
    by_trip: dict[str, list[GtfsStopTime]] = {}
    for st in feed.stop_times:
        by_trip.setdefault(st.trip_id, []).append(st)
    for entries in by_trip.values():
        entries.sort(key=lambda st: st.sequence)
    return by_trip


def _route_bands(
    feed: GtfsFeed,
    trip_route: dict[str, str],
    stop_times_by_trip: dict[str, list[GtfsStopTime]],
) -> dict[str, tuple[FrequencyBand, ...]]:
    raw: dict[str, list[FrequencyBand]] = {}
    for freq in feed.frequencies:
        route_id = trip_route.get(freq.trip_id)
        if route_id is None:
            continue
        visits = stop_times_by_trip.get(freq.trip_id, [])
        raw.setdefault(route_id, []).append(
            FrequencyBand(
                start_s=freq.start_s,
                end_s=freq.end_s,
                headway_s=freq.headway_s,
                trip_duration_s=trip_duration_s(v.arrival_s for v in visits),
            )
        )
    return {route_id: merge_bands(bands) for route_id, bands in raw.items()}


def _shape_stops(
    visits: list[GtfsStopTime], stops_by_id: dict[str, Stop]
) -> tuple[StopOnShape, ...]:
    out: list[StopOnShape] = []
    for visit in visits:
        stop = stops_by_id.get(visit.stop_id)
        if stop is None:
            continue
        out.append(
            StopOnShape(
                stop_id=stop.id,
                name=stop.name,
                location=stop.location.rounded(COORD_PRECISION),
                dist_along_shape=visit.dist_traveled,
                arrival_s=visit.arrival_s,
            )
        )
    return tuple(out)


def build_schedule(feed: GtfsFeed) -> ScheduleDocument:
    """Denormalize a GTFS feed into per-route schedules and a unique stop list.

    Deterministic: the same feed always yields an equal document, which the
    codec serializes to identical bytes.
    """

    trip_route = {t.trip_id: t.route_id for t in feed.trips}
    variants_by_route = representative_trips(feed.trips)
    shapes_by_id = _ordered_shapes(feed)
    stops_by_id = {s.id: s for s in feed.stops}
    stop_times_by_trip = _ordered_stop_times(feed)
    bands_by_route = _route_bands(feed, trip_route, stop_times_by_trip)

    routes: list[Route] = []
    for gtfs_route in feed.routes:
        variants = variants_by_route.get(gtfs_route.route_id)
        if not variants:
            continue

        shapes: list[Shape] = []
        for variant in variants.values():
            pts = shapes_by_id.get(variant.shape_id)
            if not pts or len(pts) < 2:
                continue
            shapes.append(
                Shape(
                    shape_id=variant.shape_id,
                    headsign=variant.headsign,
                    direction=variant.direction,
                    coordinates=simplify_polyline(pts),
                    stops=_shape_stops(
                        stop_times_by_trip.get(variant.trip_id, []), stops_by_id
                    ),
                )
            )

        if not shapes:
            continue

        routes.append(
            Route(
                id=gtfs_route.route_id,
                short_name=gtfs_route.short_name,
                long_name=gtfs_route.long_name,
                color=f"#{gtfs_route.color}" if gtfs_route.color else DEFAULT_ROUTE_COLOR,
                shapes=tuple(shapes),
                trip_duration_s=trip_duration_s(s.arrival_s for s in shapes[0].stops),
                frequencies=bands_by_route.get(gtfs_route.route_id, ()),
            )
        )

    return ScheduleDocument(routes=tuple(routes), stops=unique_stops(routes))


def unique_stops(routes: list[Route] | tuple[Route, ...]) -> tuple[Stop, ...]:
    """First-seen traversal over routes, shapes and their stops."""

    seen: set[str] = set()
    out: list[Stop] = []
    for route in routes:
        for shape in route.shapes:
            for s in shape.stops:
                if s.stop_id in seen:
                    continue
                seen.add(s.stop_id)
                out.append(s.to_stop())
    return tuple(out)
