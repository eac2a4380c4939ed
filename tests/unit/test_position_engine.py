from __future__ import annotations

from dataclasses import dataclass

import pytest

from src.app.services.position_engine import PositionEngine, VisitedStops
from src.domain.algorithms.positions import ShapeGeometry
from src.domain.exceptions import InterpolationError
from src.domain.models import FrequencyBand, GeoPoint
from tests.unit.schedule_samples import make_document, make_route


@dataclass(slots=True)
class FakeWallClock:
    now: float = 100.0

    def __call__(self) -> float:
        return self.now


def _engine(*routes, respawn_s: float = 4.0) -> tuple[PositionEngine, FakeWallClock]:
    wall = FakeWallClock()
    engine = PositionEngine(
        document=make_document(*routes),
        visited=VisitedStops(respawn_s=respawn_s),
        wall_clock=wall,
    )
    return engine, wall


def test_compute_frame_places_vehicles_along_first_shape() -> None:
    engine, _ = _engine()

    frame = engine.compute_frame(29700)

    assert [v.departure_s for v in frame.vehicles] == [28800, 29400]
    half_way = frame.vehicles[0]
    assert half_way.route_id == "R1"
    assert half_way.shape_index == 0
    assert half_way.progress == 0.5
    assert half_way.location.lon == pytest.approx(0.005, abs=1e-6)
    assert half_way.short_name == "1"
    assert half_way.headsign == "Norte"
    assert frame.stats.vehicles == 2
    assert frame.stats.routes == 1


def test_compute_frame_is_deterministic_for_a_given_time() -> None:
    engine, _ = _engine(make_route("R1"), make_route("R2", short_name="2"))

    first = engine.compute_frame(30000)
    second = engine.compute_frame(30000)

    assert first.vehicles == second.vehicles
    assert {v.route_id for v in first.vehicles} == {"R1", "R2"}


def test_route_without_bands_yields_no_vehicles() -> None:
    engine, _ = _engine(make_route(frequencies=()))
    assert engine.compute_frame(29700).vehicles == ()


def test_selected_route_is_flagged() -> None:
    engine, _ = _engine(make_route("R1"), make_route("R2", short_name="2"))

    frame = engine.compute_frame(29100, selected_route_id="R2")

    assert {v.route_id: v.selected for v in frame.vehicles} == {"R1": False, "R2": True}


def test_visited_stop_decays_after_respawn_interval() -> None:
    engine, wall = _engine(respawn_s=4.0)

    # Vehicle at progress 0.5 sits on stop B.
    assert "B" in engine.compute_frame(29700).visited_stop_ids

    # No vehicles at t=0, only the remembered visit remains.
    wall.now = 103.9
    assert engine.compute_frame(0).visited_stop_ids == frozenset({"B"})
    wall.now = 104.0
    assert engine.compute_frame(0).visited_stop_ids == frozenset()


def test_visited_stops_is_visited_window() -> None:
    visited = VisitedStops(respawn_s=4.0)
    visited.mark(["A"], now=10.0)

    assert visited.is_visited("A", 10.0)
    assert visited.is_visited("A", 13.999)
    assert not visited.is_visited("A", 14.0)
    assert not visited.is_visited("B", 10.0)

    visited.evict(14.0)
    assert visited.visited_at == {}


def test_interpolation_failure_omits_only_that_vehicle(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    original = ShapeGeometry.position_at

    def flaky(self: ShapeGeometry, progress: float) -> GeoPoint:
        if progress == 0.5:
            raise InterpolationError("self-intersecting")
        return original(self, progress)

    monkeypatch.setattr(ShapeGeometry, "position_at", flaky)
    engine, _ = _engine()

    frame = engine.compute_frame(29700)

    assert [v.departure_s for v in frame.vehicles] == [29400]


def test_degenerate_route_geometry_is_skipped() -> None:
    flat = (GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.0, lon=0.0))
    engine, _ = _engine(
        make_route("R1", coordinates=flat),
        make_route(
            "R2",
            frequencies=(
                FrequencyBand(start_s=28800, end_s=29400, headway_s=600, trip_duration_s=1800),
            ),
        ),
    )

    frame = engine.compute_frame(29100)

    assert [v.route_id for v in frame.vehicles] == ["R2"]
