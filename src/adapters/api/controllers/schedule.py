from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_schedule_view_service
from src.adapters.api.schemas.schedule import (
    FrequencyBandSchema,
    GeoPointSchema,
    RouteDetailSchema,
    ShapeSchema,
    StopOnShapeSchema,
    StopRoutesSchema,
    StopSchema,
    TransitRouteSchema,
)
from src.app.services.schedule_view_service import ScheduleViewService
from src.domain.algorithms.time_format import format_band
from src.domain.models import GeoPoint, Route

router = APIRouter(tags=["schedule"])


def _point(p: GeoPoint) -> GeoPointSchema:
    return GeoPointSchema(lat=p.lat, lon=p.lon)


def _route_summary(r: Route) -> TransitRouteSchema:
    return TransitRouteSchema(
        route_id=r.id,
        short_name=r.short_name,
        long_name=r.long_name,
        color=r.color,
        trip_duration_s=r.trip_duration_s,
    )


@router.get("/routes", response_model=list[TransitRouteSchema])
def list_routes(
    q: str | None = Query(default=None),
    service: ScheduleViewService = Depends(get_schedule_view_service),
) -> list[TransitRouteSchema]:
    return [_route_summary(r) for r in service.search_routes(q)]


@router.get("/routes/{route_id}", response_model=RouteDetailSchema)
def get_route(
    route_id: str,
    service: ScheduleViewService = Depends(get_schedule_view_service),
) -> RouteDetailSchema:
    r = service.get_route(route_id)
    if r is None:
        raise HTTPException(status_code=404, detail="Route not found")

    return RouteDetailSchema(
        **_route_summary(r).model_dump(),
        shapes=[
            ShapeSchema(
                shape_id=sh.shape_id,
                headsign=sh.headsign,
                direction=sh.direction,
                points=[_point(p) for p in sh.coordinates],
                stops=[
                    StopOnShapeSchema(
                        stop_id=s.stop_id,
                        name=s.name,
                        location=_point(s.location),
                        dist_along_shape=s.dist_along_shape,
                        arrival_s=s.arrival_s,
                    )
                    for s in sh.stops
                ],
            )
            for sh in r.shapes
        ],
        frequencies=[
            FrequencyBandSchema(
                start_s=b.start_s,
                end_s=b.end_s,
                headway_s=b.headway_s,
                trip_duration_s=b.trip_duration_s,
                label=format_band(b),
            )
            for b in r.frequencies
        ],
    )


@router.get("/stops", response_model=list[StopSchema])
def list_stops(
    service: ScheduleViewService = Depends(get_schedule_view_service),
) -> list[StopSchema]:
    return [
        StopSchema(stop_id=s.id, name=s.name, location=_point(s.location))
        for s in service.list_stops()
    ]


@router.get("/stops/{stop_id}/routes", response_model=StopRoutesSchema)
def get_stop_routes(
    stop_id: str,
    service: ScheduleViewService = Depends(get_schedule_view_service),
) -> StopRoutesSchema:
    return StopRoutesSchema(
        stop_id=stop_id, routes=list(service.routes_serving_stop(stop_id))
    )
