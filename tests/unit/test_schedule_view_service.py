from __future__ import annotations

from src.app.services.schedule_view_service import ScheduleViewService
from src.domain.algorithms.time_format import format_band, format_clock
from src.domain.models import FrequencyBand
from tests.unit.schedule_samples import make_document, make_route


def _service() -> ScheduleViewService:
    return ScheduleViewService(
        document=make_document(
            make_route("R10", short_name="10", long_name="Sol - Norte"),
            make_route("R2", short_name="2", long_name="Atocha - Cibeles"),
            make_route("R9", short_name="N9", long_name="Búho Norte"),
        )
    )


def test_search_matches_short_or_long_name_case_insensitively() -> None:
    svc = _service()

    assert [r.id for r in svc.search_routes("norte")] == ["R10", "R9"]
    assert [r.id for r in svc.search_routes("2")] == ["R2"]
    assert len(svc.search_routes("")) == 3


def test_search_is_limited() -> None:
    assert len(_service().search_routes(None, limit=2)) == 2


def test_routes_serving_stop_sorted_naturally() -> None:
    svc = _service()

    assert svc.routes_serving_stop("B") == ("2", "10", "N9")
    assert svc.routes_serving_stop("missing") == ()


def test_format_clock_wraps_hours_for_display() -> None:
    assert format_clock(8 * 3600 + 5 * 60 + 59) == "08:05"
    assert format_clock(25 * 3600 + 30 * 60) == "01:30"


def test_format_band_reports_headway_in_minutes() -> None:
    band = FrequencyBand(start_s=25200, end_s=32400, headway_s=600, trip_duration_s=1800)
    assert format_band(band) == "07:00 – 09:00  ·  every 10 min"
