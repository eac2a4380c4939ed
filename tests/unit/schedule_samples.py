from __future__ import annotations

from src.domain.models import (
    FrequencyBand,
    GeoPoint,
    Route,
    ScheduleDocument,
    Shape,
    StopOnShape,
)

# Along the equator, longitude is proportional to arc length: 0.01 deg ~ 1113 m.
LINE = (
    GeoPoint(lat=0.0, lon=0.0),
    GeoPoint(lat=0.0, lon=0.004),
    GeoPoint(lat=0.0, lon=0.01),
)

STOPS = (
    StopOnShape(stop_id="A", name="Start", location=LINE[0], dist_along_shape=0.0, arrival_s=0),
    StopOnShape(
        stop_id="B", name="Middle", location=GeoPoint(lat=0.0, lon=0.005), dist_along_shape=500.0, arrival_s=900
    ),
    StopOnShape(stop_id="C", name="End", location=LINE[-1], dist_along_shape=1000.0, arrival_s=1800),
)

MORNING_BAND = FrequencyBand(start_s=28800, end_s=32400, headway_s=600, trip_duration_s=1800)


def make_route(
    route_id: str = "R1",
    *,
    short_name: str = "1",
    long_name: str = "Sol - Norte",
    frequencies: tuple[FrequencyBand, ...] = (MORNING_BAND,),
    coordinates: tuple[GeoPoint, ...] = LINE,
) -> Route:
    return Route(
        id=route_id,
        short_name=short_name,
        long_name=long_name,
        color="#FF0000",
        shapes=(
            Shape(
                shape_id=f"{route_id}-S",
                headsign="Norte",
                direction=0,
                coordinates=coordinates,
                stops=STOPS,
            ),
        ),
        trip_duration_s=1800,
        frequencies=frequencies,
    )


def make_document(*routes: Route) -> ScheduleDocument:
    routes = routes or (make_route(),)
    return ScheduleDocument(
        routes=routes,
        stops=tuple(s.to_stop() for s in STOPS),
    )
