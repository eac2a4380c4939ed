from .frame import Frame, FrameStats, VehiclePosition
from .geo import GeoPoint, LonLat
from .route import FrequencyBand, Route, ScheduleDocument, Shape, StopOnShape
from .stop import Stop

__all__ = [
    "Frame",
    "FrameStats",
    "FrequencyBand",
    "GeoPoint",
    "LonLat",
    "Route",
    "ScheduleDocument",
    "Shape",
    "Stop",
    "StopOnShape",
    "VehiclePosition",
]
