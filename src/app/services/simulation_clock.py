from __future__ import annotations

from dataclasses import dataclass

from src.app.config import SimulationConfig


@dataclass(slots=True)
class SimulationClock:
    """Simulated service-day clock driven by real elapsed time.

    Advancing past ``t_max_s`` wraps back to ``t_min_s`` (day-cycle reset).
    Pausing freezes the value; resuming continues from it.
    """

    value: float = 8 * 3600
    rate: float = 60.0
    t_min_s: float = 5 * 3600
    t_max_s: float = 26 * 3600
    paused: bool = False

    def __post_init__(self) -> None:
        if self.t_min_s >= self.t_max_s:
            raise ValueError("t_min_s must be lower than t_max_s")
        if self.rate < 0:
            raise ValueError(f"Invalid rate: {self.rate}")

    @staticmethod
    def from_config(cfg: SimulationConfig) -> "SimulationClock":
        return SimulationClock(
            value=cfg.start_s,
            rate=cfg.rate,
            t_min_s=cfg.t_min_s,
            t_max_s=cfg.t_max_s,
        )

    def advance(self, real_delta_s: float) -> float:
        if self.paused or real_delta_s <= 0:
            return self.value
        n = self.value + real_delta_s * self.rate
        if n > self.t_max_s:
            n = self.t_min_s
        self.value = n
        return self.value

    def set_rate(self, multiplier: float) -> None:
        if multiplier < 0:
            raise ValueError(f"Invalid rate: {multiplier}")
        self.rate = float(multiplier)

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def seek(self, simulated_time_s: float) -> float:
        self.value = max(self.t_min_s, min(self.t_max_s, float(simulated_time_s)))
        return self.value
