from __future__ import annotations

from typing import Iterable

from src.domain.models.route import DEFAULT_TRIP_DURATION_S, FrequencyBand


def trip_duration_s(arrivals: Iterable[int | None]) -> int:
    """Elapsed scheduled time between the first and last timed stop.

    Falls back to 1800s when fewer than two stops carry an arrival time.
    """

    timed = [a for a in arrivals if a is not None]
    if len(timed) < 2:
        return DEFAULT_TRIP_DURATION_S
    return timed[-1] - timed[0]


def merge_bands(bands: Iterable[FrequencyBand]) -> tuple[FrequencyBand, ...]:
    """Collapse bands sharing a (start, end) window into the tightest headway.

    Invalid bands (non-positive headway, empty window) are dropped. On equal
    headways the first band seen wins. Output is ordered by start time.
    """

    merged: dict[tuple[int, int], FrequencyBand] = {}
    for band in bands:
        if not band.is_valid:
            continue
        key = (band.start_s, band.end_s)
        current = merged.get(key)
        if current is None or band.headway_s < current.headway_s:
            merged[key] = band

    return tuple(sorted(merged.values(), key=lambda b: b.start_s))
