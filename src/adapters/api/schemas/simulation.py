from __future__ import annotations

from pydantic import BaseModel, Field

from src.adapters.api.schemas.schedule import GeoPointSchema


class VehicleSchema(BaseModel):
    route_id: str
    shape_index: int
    location: GeoPointSchema
    progress: float
    departure_s: int
    short_name: str = ""
    headsign: str = ""
    color: str | None = None
    selected: bool = False


class FrameStatsSchema(BaseModel):
    routes: int
    vehicles: int


class FrameSchema(BaseModel):
    simulated_time_s: float
    clock: str
    vehicles: list[VehicleSchema]
    visited_stop_ids: list[str]
    stats: FrameStatsSchema


class ClockSchema(BaseModel):
    simulated_time_s: float
    clock: str
    rate: float
    paused: bool
    t_min_s: float
    t_max_s: float


class RateRequestSchema(BaseModel):
    multiplier: float = Field(..., ge=0.0)


class SeekRequestSchema(BaseModel):
    simulated_time_s: float


class AdvanceRequestSchema(BaseModel):
    real_delta_s: float = Field(..., ge=0.0)
