from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from src.app.services.position_engine import PositionEngine
from src.app.services.simulation_clock import SimulationClock
from src.domain.models import Frame

logger = logging.getLogger(__name__)

FrameSink = Callable[[Frame], None]


@dataclass(slots=True)
class FrameLoop:
    """Periodic driver: advances the clock and publishes a frame each tick.

    Single task on the running event loop. ``stop()`` cancels the pending tick
    and waits for it, so no frame is computed after teardown.
    """

    engine: PositionEngine
    clock: SimulationClock
    sink: FrameSink | None = None
    interval_s: float = 1 / 30
    selected_route_id: str | None = None
    monotonic: Callable[[], float] = time.monotonic

    last_frame: Frame | None = None
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    _last_tick: float | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._last_tick = None
        self._task = asyncio.get_running_loop().create_task(self._run())

    def pause(self) -> None:
        self.clock.pause()
        # Real time spent paused must not be replayed on resume.
        self._last_tick = None

    def resume(self) -> None:
        self.clock.resume()
        self._last_tick = None

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def tick(self) -> Frame:
        now = self.monotonic()
        if self._last_tick is not None and not self.clock.paused:
            self.clock.advance(now - self._last_tick)
        self._last_tick = now

        frame = self.engine.compute_frame(
            self.clock.value, selected_route_id=self.selected_route_id
        )
        self.last_frame = frame
        if self.sink is not None:
            try:
                self.sink(frame)
            except Exception:
                logger.exception("Frame sink failed")
        return frame

    async def _run(self) -> None:
        while True:
            try:
                self.tick()
            except Exception:
                logger.exception("Frame tick failed")
            await asyncio.sleep(self.interval_s)
