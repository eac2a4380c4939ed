from __future__ import annotations

import pytest

from src.domain.algorithms.positions import (
    ShapeGeometry,
    active_departures,
    clamp_progress,
    evict_expired,
    visited_stop_ids,
)
from src.domain.models import FrequencyBand, GeoPoint
from tests.unit.schedule_samples import make_route


def test_band_example_has_single_vehicle_from_first_departure() -> None:
    route = make_route()

    active = active_departures(route, 29100)

    assert len(active) == 1
    assert active[0].departure_s == 28800
    assert active[0].progress == pytest.approx(300 / 1800)


def test_half_way_progress_with_overlapping_departures() -> None:
    route = make_route()

    active = active_departures(route, 29700)

    assert [(a.departure_s, a.progress) for a in active] == [
        (28800, 0.5),
        (29400, pytest.approx(300 / 1800)),
    ]


@pytest.mark.parametrize("t", [28799, 30900])
def test_first_departure_inactive_outside_its_trip(t: int) -> None:
    route = make_route()
    assert 28800 not in {a.departure_s for a in active_departures(route, t)}


def test_trip_end_is_inclusive() -> None:
    route = make_route()
    deps = {a.departure_s: a.progress for a in active_departures(route, 30600)}
    assert deps[28800] == 1.0


@pytest.mark.parametrize(
    "bands",
    [
        (),
        (FrequencyBand(start_s=28800, end_s=32400, headway_s=0, trip_duration_s=1800),),
        (FrequencyBand(start_s=28800, end_s=32400, headway_s=-60, trip_duration_s=1800),),
    ],
)
def test_routes_without_valid_bands_have_no_vehicles(bands) -> None:
    route = make_route(frequencies=bands)
    for t in (0, 28800, 30000, 90000):
        assert active_departures(route, t) == []


def test_band_without_duration_uses_route_default() -> None:
    route = make_route(
        frequencies=(FrequencyBand(start_s=0, end_s=600, headway_s=600, trip_duration_s=0),)
    )
    (only,) = active_departures(route, 900)
    assert only.progress == pytest.approx(0.5)


def test_clamp_progress_keeps_away_from_endpoints() -> None:
    assert clamp_progress(0.0) == 0.001
    assert clamp_progress(1.0) == 0.999
    assert clamp_progress(0.4) == 0.4


def test_geometry_positions_at_constant_speed() -> None:
    geom = ShapeGeometry.for_shape(make_route().primary_shape)
    assert geom is not None

    p = geom.position_at(0.5)

    assert p.lat == pytest.approx(0.0)
    assert p.lon == pytest.approx(0.005, abs=1e-6)


def test_geometry_too_short_is_rejected() -> None:
    tiny = (GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.0, lon=0.0001))
    assert ShapeGeometry.for_shape(make_route(coordinates=tiny).primary_shape) is None


def test_visited_stops_use_relative_distance_tolerance() -> None:
    shape = make_route().primary_shape

    assert visited_stop_ids(shape, 0.5) == {"B"}
    assert visited_stop_ids(shape, 0.51) == {"B"}
    assert visited_stop_ids(shape, 0.52) == set()
    assert visited_stop_ids(shape, 0.999) == {"C"}


def test_evict_expired_drops_entries_at_respawn_boundary() -> None:
    visited = {"A": 10.0, "B": 12.0}

    evict_expired(visited, now=14.0, respawn_s=4.0)

    assert visited == {"B": 12.0}
