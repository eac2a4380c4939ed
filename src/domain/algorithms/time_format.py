from __future__ import annotations

from src.domain.models import FrequencyBand


def format_clock(seconds: float) -> str:
    """Seconds since service day midnight as a wall-clock "HH:MM"."""

    total = int(seconds)
    hours = (total // 3600) % 24
    minutes = (total % 3600) // 60
    return f"{hours:02d}:{minutes:02d}"


def format_band(band: FrequencyBand) -> str:
    every_min = round(band.headway_s / 60)
    return (
        f"{format_clock(band.start_s)} – {format_clock(band.end_s)}"
        f"  ·  every {every_min} min"
    )
