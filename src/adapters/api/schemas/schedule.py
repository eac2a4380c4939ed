from __future__ import annotations

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class FrequencyBandSchema(BaseModel):
    start_s: int
    end_s: int
    headway_s: int
    trip_duration_s: int
    label: str


class StopSchema(BaseModel):
    stop_id: str
    name: str
    location: GeoPointSchema


class StopOnShapeSchema(StopSchema):
    dist_along_shape: float
    arrival_s: int | None = None


class ShapeSchema(BaseModel):
    shape_id: str
    headsign: str
    direction: int
    points: list[GeoPointSchema]
    stops: list[StopOnShapeSchema]


class TransitRouteSchema(BaseModel):
    route_id: str
    short_name: str
    long_name: str
    color: str
    trip_duration_s: int


class RouteDetailSchema(TransitRouteSchema):
    shapes: list[ShapeSchema]
    frequencies: list[FrequencyBandSchema]


class StopRoutesSchema(BaseModel):
    stop_id: str
    routes: list[str]
