import pytest
from src.domain.models.geo import GeoPoint


def test_geo_point_accepts_valid_coordinates() -> None:
    p = GeoPoint(lat=40.4168, lon=-3.7038)
    assert p.lat == 40.4168
    assert p.lon == -3.7038
    assert p.lon_lat == (-3.7038, 40.4168)


@pytest.mark.parametrize(
    ("lat", "lon"),
    [
        (-90.0001, 0.0),
        (90.0001, 0.0),
        (0.0, -180.0001),
        (0.0, 180.0001),
        (float("nan"), 0.0),
    ],
)
def test_geo_point_rejects_out_of_range_coordinates(lat: float, lon: float) -> None:
    with pytest.raises(ValueError):
        GeoPoint(lat=lat, lon=lon)


def test_geo_point_from_lon_lat_swaps_axes() -> None:
    assert GeoPoint.from_lon_lat((-3.7, 40.4)) == GeoPoint(lat=40.4, lon=-3.7)
