from __future__ import annotations

import pytest

from src.domain.exceptions import MalformedRowError
from src.domain.models.gtfs import (
    GtfsFrequency,
    GtfsShapePoint,
    GtfsStopTime,
    GtfsTrip,
    parse_gtfs_time_to_seconds,
    stop_from_row,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("7:05:30", 7 * 3600 + 5 * 60 + 30),
        ("07:00:00", 25200),
        ("25:10:00", 25 * 3600 + 600),
        ("8:15", 8 * 3600 + 15 * 60),
    ],
)
def test_parse_gtfs_time_keeps_post_midnight_hours(raw: str, expected: int) -> None:
    assert parse_gtfs_time_to_seconds(raw) == expected


def test_parse_gtfs_time_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_gtfs_time_to_seconds("soon")


def test_trip_direction_defaults_to_zero() -> None:
    trip = GtfsTrip.from_row({"trip_id": "T1", "route_id": "R1", "direction_id": ""})
    assert trip.direction_id == 0
    assert trip.shape_id == ""


def test_shape_point_with_nan_latitude_is_malformed() -> None:
    with pytest.raises(MalformedRowError):
        GtfsShapePoint.from_row(
            {
                "shape_id": "S1",
                "shape_pt_lat": "NaN",
                "shape_pt_lon": "-3.7",
                "shape_pt_sequence": "1",
            }
        )


def test_stop_without_coordinates_is_malformed() -> None:
    with pytest.raises(MalformedRowError):
        stop_from_row({"stop_id": "A", "stop_name": "Sol", "stop_lat": "", "stop_lon": ""})


def test_stop_time_defaults_distance_and_allows_untimed_stops() -> None:
    st = GtfsStopTime.from_row(
        {
            "trip_id": "T1",
            "stop_id": "A",
            "stop_sequence": "3",
            "shape_dist_traveled": "",
            "arrival_time": "",
        }
    )
    assert st.dist_traveled == 0.0
    assert st.arrival_s is None


def test_frequency_with_non_numeric_headway_is_malformed() -> None:
    with pytest.raises(MalformedRowError):
        GtfsFrequency.from_row(
            {
                "trip_id": "T1",
                "start_time": "07:00:00",
                "end_time": "08:00:00",
                "headway_secs": "often",
            }
        )
