from __future__ import annotations

import math
from bisect import bisect_left

from src.domain.exceptions import InterpolationError
from src.domain.models import GeoPoint

COORD_PRECISION = 6  # ~0.11 m


def haversine_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters."""

    r = 6371000.0
    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lon)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    return 2.0 * r * math.asin(math.sqrt(min(1.0, s)))


def cumulative_distances_m(points: tuple[GeoPoint, ...]) -> tuple[float, ...]:
    if len(points) < 2:
        return (0.0,) * len(points)

    out: list[float] = [0.0]
    total = 0.0
    for i in range(1, len(points)):
        total += haversine_distance_m(points[i - 1], points[i])
        out.append(total)
    return tuple(out)


def interpolate_along_polyline(
    points: tuple[GeoPoint, ...], cumulative_m: tuple[float, ...], distance_m: float
) -> GeoPoint:
    """Point at ``distance_m`` along the polyline, at constant speed per segment."""

    if len(points) < 2 or len(cumulative_m) != len(points):
        raise InterpolationError("Polyline needs at least two points")

    total_m = cumulative_m[-1]
    if not math.isfinite(total_m) or total_m <= 0.0:
        raise InterpolationError(f"Degenerate polyline length: {total_m}")
    if not math.isfinite(distance_m):
        raise InterpolationError(f"Invalid distance along polyline: {distance_m}")

    d = max(0.0, min(float(distance_m), float(total_m)))

    i = max(1, bisect_left(cumulative_m, d))
    d0 = cumulative_m[i - 1]
    d1 = cumulative_m[i]
    denom = max(1e-9, d1 - d0)
    t = (d - d0) / denom
    p0 = points[i - 1]
    p1 = points[i]
    try:
        return GeoPoint(
            lat=p0.lat + (p1.lat - p0.lat) * t,
            lon=p0.lon + (p1.lon - p0.lon) * t,
        )
    except ValueError as exc:
        raise InterpolationError(str(exc)) from exc


def simplification_stride(n_points: int) -> int:
    if n_points > 200:
        return 3
    if n_points > 100:
        return 2
    return 1


def simplify_polyline(
    points: tuple[GeoPoint, ...] | list[GeoPoint], ndigits: int = COORD_PRECISION
) -> tuple[GeoPoint, ...]:
    """Keep every Nth point plus both endpoints, rounded to ``ndigits``."""

    last = len(points) - 1
    step = simplification_stride(len(points))
    return tuple(
        p.rounded(ndigits)
        for i, p in enumerate(points)
        if i == 0 or i == last or i % step == 0
    )
