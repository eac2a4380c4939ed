from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.schedule import router as schedule_router
from src.adapters.api.controllers.simulation import router as simulation_router
from src.adapters.api.dependencies import (
    get_position_engine,
    get_schedule_view_service,
    get_simulation_clock,
    get_simulation_config,
)
from src.app.services.frame_loop import FrameLoop
from src.domain.exceptions import DataFetchError


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the schedule and build the shared services before serving.

    An unreachable artifact fails startup with ``DataFetchError``. With
    SIM_AUTOPLAY set, a background frame loop drives the shared clock.
    """

    engine = get_position_engine()
    clock = get_simulation_clock()
    get_schedule_view_service()

    autoplay = (os.getenv("SIM_AUTOPLAY") or "").strip().lower() in {"1", "true", "yes", "on"}
    loop: FrameLoop | None = None
    if autoplay:
        loop = FrameLoop(
            engine=engine,
            clock=clock,
            interval_s=get_simulation_config().frame_interval_s,
        )
        loop.start()
        app.state.frame_loop = loop
    try:
        yield
    finally:
        if loop is not None:
            await loop.stop()


app = FastAPI(title="Busband", lifespan=lifespan)
app.include_router(schedule_router)
app.include_router(simulation_router)


@app.exception_handler(DataFetchError)
async def data_fetch_error_handler(request: Request, exc: DataFetchError) -> JSONResponse:
    """Schedule artifacts are unavailable; report it as a load-progress message."""

    logging.getLogger("uvicorn.error").error(
        "Schedule unavailable: %s", exc, extra={"path": str(request.url.path)}
    )
    return JSONResponse(status_code=503, content={"detail": f"Error: {exc}"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so the frontend can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = (os.getenv("BUSBAND_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal or isinstance(exc, (FileNotFoundError, RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
