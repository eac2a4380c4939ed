from __future__ import annotations

import os
from functools import lru_cache

from src.adapters.persistence.http_schedule_repository import HttpScheduleRepository
from src.adapters.persistence.local_schedule_repository import LocalScheduleRepository
from src.adapters.persistence.s3_schedule_repository import S3ScheduleRepository
from src.app.config import SimulationConfig
from src.app.ports.output import IScheduleRepository
from src.app.services.position_engine import PositionEngine, VisitedStops
from src.app.services.schedule_view_service import ScheduleViewService
from src.app.services.simulation_clock import SimulationClock
from src.domain.models import ScheduleDocument


def get_schedule_repository() -> IScheduleRepository:
    source = (os.getenv("SCHEDULE_SOURCE") or "local").strip().lower()
    if source == "s3":
        return S3ScheduleRepository()
    if source == "http":
        return HttpScheduleRepository()
    if source != "local":
        raise RuntimeError(f"Unsupported SCHEDULE_SOURCE: {source}")
    return LocalScheduleRepository()


# The document is loaded once per process and shared read-only.
@lru_cache(maxsize=1)
def get_schedule_document() -> ScheduleDocument:
    return get_schedule_repository().load_document()


@lru_cache(maxsize=1)
def get_simulation_config() -> SimulationConfig:
    return SimulationConfig.from_env()


@lru_cache(maxsize=1)
def get_position_engine() -> PositionEngine:
    cfg = get_simulation_config()
    return PositionEngine(
        document=get_schedule_document(),
        visited=VisitedStops(respawn_s=cfg.respawn_s),
    )


@lru_cache(maxsize=1)
def get_simulation_clock() -> SimulationClock:
    return SimulationClock.from_config(get_simulation_config())


@lru_cache(maxsize=1)
def get_schedule_view_service() -> ScheduleViewService:
    return ScheduleViewService(document=get_schedule_document())
