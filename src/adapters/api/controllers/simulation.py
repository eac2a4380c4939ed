from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_position_engine, get_simulation_clock
from src.adapters.api.schemas.schedule import GeoPointSchema
from src.adapters.api.schemas.simulation import (
    AdvanceRequestSchema,
    ClockSchema,
    FrameSchema,
    FrameStatsSchema,
    RateRequestSchema,
    SeekRequestSchema,
    VehicleSchema,
)
from src.app.services.position_engine import PositionEngine
from src.app.services.simulation_clock import SimulationClock
from src.domain.algorithms.time_format import format_clock

router = APIRouter(tags=["simulation"])

# Handlers are coroutines so they share the event loop thread with the frame
# loop; the engine and clock are not thread-safe.


def _clock_schema(clock: SimulationClock) -> ClockSchema:
    return ClockSchema(
        simulated_time_s=clock.value,
        clock=format_clock(clock.value),
        rate=clock.rate,
        paused=clock.paused,
        t_min_s=clock.t_min_s,
        t_max_s=clock.t_max_s,
    )


@router.get("/frame", response_model=FrameSchema)
async def get_frame(
    t: float | None = Query(default=None, description="Simulated seconds since midnight"),
    selected_route_id: str | None = Query(default=None),
    engine: PositionEngine = Depends(get_position_engine),
    clock: SimulationClock = Depends(get_simulation_clock),
) -> FrameSchema:
    # An explicit t is a preview and must not light stops on the shared map.
    sim_t = clock.value if t is None else t
    frame = engine.compute_frame(
        sim_t, selected_route_id=selected_route_id, record_visits=t is None
    )
    stats = frame.stats
    return FrameSchema(
        simulated_time_s=frame.simulated_time_s,
        clock=format_clock(frame.simulated_time_s),
        vehicles=[
            VehicleSchema(
                route_id=v.route_id,
                shape_index=v.shape_index,
                location=GeoPointSchema(lat=v.location.lat, lon=v.location.lon),
                progress=v.progress,
                departure_s=v.departure_s,
                short_name=v.short_name,
                headsign=v.headsign,
                color=v.color,
                selected=v.selected,
            )
            for v in frame.vehicles
        ],
        visited_stop_ids=sorted(frame.visited_stop_ids),
        stats=FrameStatsSchema(routes=stats.routes, vehicles=stats.vehicles),
    )


@router.get("/clock", response_model=ClockSchema)
async def get_clock(clock: SimulationClock = Depends(get_simulation_clock)) -> ClockSchema:
    return _clock_schema(clock)


@router.post("/clock/pause", response_model=ClockSchema)
async def pause_clock(clock: SimulationClock = Depends(get_simulation_clock)) -> ClockSchema:
    clock.pause()
    return _clock_schema(clock)


@router.post("/clock/resume", response_model=ClockSchema)
async def resume_clock(clock: SimulationClock = Depends(get_simulation_clock)) -> ClockSchema:
    clock.resume()
    return _clock_schema(clock)


@router.post("/clock/rate", response_model=ClockSchema)
async def set_clock_rate(
    req: RateRequestSchema, clock: SimulationClock = Depends(get_simulation_clock)
) -> ClockSchema:
    clock.set_rate(req.multiplier)
    return _clock_schema(clock)


@router.post("/clock/seek", response_model=ClockSchema)
async def seek_clock(
    req: SeekRequestSchema, clock: SimulationClock = Depends(get_simulation_clock)
) -> ClockSchema:
    clock.seek(req.simulated_time_s)
    return _clock_schema(clock)


@router.post("/clock/advance", response_model=ClockSchema)
async def advance_clock(
    req: AdvanceRequestSchema, clock: SimulationClock = Depends(get_simulation_clock)
) -> ClockSchema:
    if clock.paused:
        raise HTTPException(status_code=409, detail="Clock is paused")
    clock.advance(req.real_delta_s)
    return _clock_schema(clock)
