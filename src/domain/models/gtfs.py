from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from src.domain.exceptions import MalformedRowError
from src.domain.models.geo import GeoPoint
from src.domain.models.stop import Stop

Row = Mapping[str, str]


def parse_gtfs_time_to_seconds(raw: str) -> int:
    # GTFS time can be H:MM:SS with H possibly > 24; no modulo on purpose.
    parts = raw.strip().split(":")
    if len(parts) == 2:
        parts.append("0")
    if len(parts) != 3:
        raise ValueError(f"Invalid GTFS time: {raw!r}")
    hh, mm, ss = (int(p) if p else 0 for p in parts)
    return hh * 3600 + mm * 60 + ss


def _field(row: Row, name: str) -> str:
    return (row.get(name) or "").strip()


def _required(row: Row, name: str, table: str) -> str:
    value = _field(row, name)
    if not value:
        raise MalformedRowError(table, f"missing {name}")
    return value


def _int(row: Row, name: str, table: str) -> int:
    try:
        return int(_field(row, name))
    except ValueError as exc:
        raise MalformedRowError(table, f"{name} is not an integer") from exc


def _location(row: Row, lat_name: str, lon_name: str, table: str) -> GeoPoint:
    try:
        lat = float(_field(row, lat_name))
        lon = float(_field(row, lon_name))
        # GeoPoint rejects NaN because NaN fails every range comparison.
        return GeoPoint(lat=lat, lon=lon)
    except ValueError as exc:
        raise MalformedRowError(table, str(exc) or "invalid coordinates") from exc


@dataclass(frozen=True, slots=True)
class GtfsRoute:
    route_id: str
    short_name: str = ""
    long_name: str = ""
    color: str | None = None  # hex without '#', per GTFS

    @staticmethod
    def from_row(row: Row) -> "GtfsRoute":
        return GtfsRoute(
            route_id=_required(row, "route_id", "routes"),
            short_name=_field(row, "route_short_name"),
            long_name=_field(row, "route_long_name"),
            color=_field(row, "route_color") or None,
        )


@dataclass(frozen=True, slots=True)
class GtfsTrip:
    trip_id: str
    route_id: str
    direction_id: int = 0
    shape_id: str = ""
    headsign: str = ""

    @staticmethod
    def from_row(row: Row) -> "GtfsTrip":
        try:
            direction_id = int(_field(row, "direction_id") or 0)
        except ValueError:
            direction_id = 0
        return GtfsTrip(
            trip_id=_required(row, "trip_id", "trips"),
            route_id=_required(row, "route_id", "trips"),
            direction_id=direction_id,
            shape_id=_field(row, "shape_id"),
            headsign=_field(row, "trip_headsign"),
        )


@dataclass(frozen=True, slots=True)
class GtfsShapePoint:
    shape_id: str
    sequence: int
    location: GeoPoint

    @staticmethod
    def from_row(row: Row) -> "GtfsShapePoint":
        return GtfsShapePoint(
            shape_id=_required(row, "shape_id", "shapes"),
            sequence=_int(row, "shape_pt_sequence", "shapes"),
            location=_location(row, "shape_pt_lat", "shape_pt_lon", "shapes"),
        )


def stop_from_row(row: Row) -> Stop:
    stop_id = _required(row, "stop_id", "stops")
    return Stop(
        id=stop_id,
        name=_field(row, "stop_name") or stop_id,
        location=_location(row, "stop_lat", "stop_lon", "stops"),
    )


@dataclass(frozen=True, slots=True)
class GtfsStopTime:
    """One stop visit of a trip.

    ``arrival_s`` is None for untimed stops (blank arrival_time).
    ``dist_traveled`` falls back to 0 when the optional column is blank.
    """

    trip_id: str
    stop_id: str
    sequence: int
    dist_traveled: float = 0.0
    arrival_s: int | None = None

    @staticmethod
    def from_row(row: Row) -> "GtfsStopTime":
        try:
            dist = float(_field(row, "shape_dist_traveled") or 0.0)
        except ValueError:
            dist = 0.0
        if not math.isfinite(dist):
            dist = 0.0

        raw_arrival = _field(row, "arrival_time")
        try:
            arrival_s = parse_gtfs_time_to_seconds(raw_arrival) if raw_arrival else None
        except ValueError as exc:
            raise MalformedRowError("stop_times", str(exc)) from exc

        return GtfsStopTime(
            trip_id=_required(row, "trip_id", "stop_times"),
            stop_id=_required(row, "stop_id", "stop_times"),
            sequence=_int(row, "stop_sequence", "stop_times"),
            dist_traveled=dist,
            arrival_s=arrival_s,
        )


@dataclass(frozen=True, slots=True)
class GtfsFrequency:
    trip_id: str
    start_s: int
    end_s: int
    headway_s: int

    @staticmethod
    def from_row(row: Row) -> "GtfsFrequency":
        try:
            start_s = parse_gtfs_time_to_seconds(_field(row, "start_time"))
            end_s = parse_gtfs_time_to_seconds(_field(row, "end_time"))
        except ValueError as exc:
            raise MalformedRowError("frequencies", str(exc)) from exc
        return GtfsFrequency(
            trip_id=_required(row, "trip_id", "frequencies"),
            start_s=start_s,
            end_s=end_s,
            headway_s=_int(row, "headway_secs", "frequencies"),
        )


@dataclass(frozen=True, slots=True)
class GtfsFeed:
    """Typed rows of the six tables the schedule builder consumes.

    Every collection keeps file order; the builder's first-seen rules depend on it.
    """

    routes: tuple[GtfsRoute, ...] = ()
    trips: tuple[GtfsTrip, ...] = ()
    shape_points: tuple[GtfsShapePoint, ...] = ()
    stops: tuple[Stop, ...] = ()
    stop_times: tuple[GtfsStopTime, ...] = ()
    frequencies: tuple[GtfsFrequency, ...] = ()
