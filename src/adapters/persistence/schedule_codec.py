"""JSON encoding of the schedule artifacts.

Keys are camelCase and coordinates are [lon, lat] so the documents can be fed
straight to a map renderer. Encoding is compact and deterministic: the same
document always produces the same bytes.
"""

from __future__ import annotations

import json
from typing import Any

from src.domain.exceptions import DataFetchError
from src.domain.models import (
    FrequencyBand,
    GeoPoint,
    Route,
    ScheduleDocument,
    Shape,
    Stop,
    StopOnShape,
)


def _coords(p: GeoPoint) -> list[float]:
    return list(p.lon_lat)


def band_to_dict(band: FrequencyBand) -> dict[str, Any]:
    return {
        "startSec": band.start_s,
        "endSec": band.end_s,
        "headway": band.headway_s,
        "tripDur": band.trip_duration_s,
    }


def stop_to_dict(stop: Stop) -> dict[str, Any]:
    return {"id": stop.id, "name": stop.name, "coords": _coords(stop.location)}


def _stop_on_shape_to_dict(s: StopOnShape) -> dict[str, Any]:
    return {
        "id": s.stop_id,
        "name": s.name,
        "coords": _coords(s.location),
        "dist": s.dist_along_shape,
        "arr": s.arrival_s,
    }


def shape_to_dict(shape: Shape) -> dict[str, Any]:
    return {
        "shapeId": shape.shape_id,
        "headsign": shape.headsign,
        "direction": shape.direction,
        "coordinates": [_coords(p) for p in shape.coordinates],
        "stops": [_stop_on_shape_to_dict(s) for s in shape.stops],
    }


def route_to_dict(route: Route) -> dict[str, Any]:
    return {
        "id": route.id,
        "shortName": route.short_name,
        "longName": route.long_name,
        "color": route.color,
        "shapes": [shape_to_dict(sh) for sh in route.shapes],
        "tripDuration": route.trip_duration_s,
        "frequencies": [band_to_dict(b) for b in route.frequencies],
    }


def _dumps(payload: Any) -> bytes:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode(
        "utf-8"
    )


def encode_routes(routes: tuple[Route, ...]) -> bytes:
    return _dumps([route_to_dict(r) for r in routes])


def encode_stops(stops: tuple[Stop, ...]) -> bytes:
    return _dumps([stop_to_dict(s) for s in stops])


def _point(raw: Any) -> GeoPoint:
    lon, lat = raw
    return GeoPoint.from_lon_lat((lon, lat))


def _band(raw: dict[str, Any]) -> FrequencyBand:
    return FrequencyBand(
        start_s=int(raw["startSec"]),
        end_s=int(raw["endSec"]),
        headway_s=int(raw["headway"]),
        trip_duration_s=int(raw.get("tripDur") or 0),
    )


def _stop_on_shape(raw: dict[str, Any]) -> StopOnShape:
    arr = raw.get("arr")
    return StopOnShape(
        stop_id=str(raw["id"]),
        name=str(raw.get("name") or ""),
        location=_point(raw["coords"]),
        dist_along_shape=float(raw.get("dist") or 0.0),
        arrival_s=int(arr) if arr is not None else None,
    )


def _shape(raw: dict[str, Any]) -> Shape:
    return Shape(
        shape_id=str(raw["shapeId"]),
        headsign=str(raw.get("headsign") or ""),
        direction=int(raw.get("direction") or 0),
        coordinates=tuple(_point(c) for c in raw["coordinates"]),
        stops=tuple(_stop_on_shape(s) for s in raw.get("stops") or ()),
    )


def _route(raw: dict[str, Any]) -> Route:
    return Route(
        id=str(raw["id"]),
        short_name=str(raw.get("shortName") or ""),
        long_name=str(raw.get("longName") or ""),
        color=str(raw["color"]),
        shapes=tuple(_shape(sh) for sh in raw["shapes"]),
        trip_duration_s=int(raw["tripDuration"]),
        frequencies=tuple(_band(b) for b in raw.get("frequencies") or ()),
    )


def _stop(raw: dict[str, Any]) -> Stop:
    return Stop(id=str(raw["id"]), name=str(raw.get("name") or ""), location=_point(raw["coords"]))


def decode_document(routes_raw: bytes, stops_raw: bytes) -> ScheduleDocument:
    """Rebuild a ScheduleDocument; any structural problem becomes DataFetchError."""

    try:
        routes = tuple(_route(r) for r in json.loads(routes_raw))
        stops = tuple(_stop(s) for s in json.loads(stops_raw))
    except (ValueError, KeyError, TypeError) as exc:
        raise DataFetchError(f"Invalid schedule artifact: {exc}") from exc
    return ScheduleDocument(routes=routes, stops=stops)
