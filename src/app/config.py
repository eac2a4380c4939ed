from __future__ import annotations

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return float(raw)


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Clock and visitation tuning for the simulated service day.

    Env vars:
      - SIM_RATE: simulated seconds per real second (default 60)
      - SIM_START_S: initial simulated time (default 08:00)
      - SIM_T_MIN_S / SIM_T_MAX_S: day-cycle bounds (default 05:00 / 26:00)
      - PELLET_RESPAWN_S: real seconds a visited stop stays visited (default 4)
      - FRAME_INTERVAL_S: frame loop period (default 1/30)
    """

    rate: float = 60.0
    start_s: float = 8 * 3600
    t_min_s: float = 5 * 3600
    t_max_s: float = 26 * 3600
    respawn_s: float = 4.0
    frame_interval_s: float = 1 / 30

    @staticmethod
    def from_env() -> "SimulationConfig":
        return SimulationConfig(
            rate=_env_float("SIM_RATE", 60.0),
            start_s=_env_float("SIM_START_S", 8 * 3600),
            t_min_s=_env_float("SIM_T_MIN_S", 5 * 3600),
            t_max_s=_env_float("SIM_T_MAX_S", 26 * 3600),
            respawn_s=_env_float("PELLET_RESPAWN_S", 4.0),
            frame_interval_s=_env_float("FRAME_INTERVAL_S", 1 / 30),
        )
