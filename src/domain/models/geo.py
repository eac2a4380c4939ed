from __future__ import annotations

from dataclasses import dataclass

LonLat = tuple[float, float]


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")

    @property
    def lon_lat(self) -> LonLat:
        """GeoJSON axis order, as written to the schedule artifacts."""

        return (self.lon, self.lat)

    @staticmethod
    def from_lon_lat(coords: LonLat) -> "GeoPoint":
        lon, lat = coords
        return GeoPoint(lat=float(lat), lon=float(lon))

    def rounded(self, ndigits: int = 6) -> "GeoPoint":
        return GeoPoint(lat=round(self.lat, ndigits), lon=round(self.lon, ndigits))
