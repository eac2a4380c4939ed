from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.domain.models import Route, ScheduleDocument, Stop

SEARCH_LIMIT = 60


def _natural_key(value: str) -> list[tuple[int, int | str]]:
    # "10" sorts after "9"; text parts compare case-insensitively.
    parts = re.split(r"(\d+)", value)
    return [(0, int(p)) if p.isdigit() else (1, p.lower()) for p in parts if p]


@dataclass(slots=True)
class ScheduleViewService:
    """Read-side queries the presentation layer needs besides frames.

    - Searches routes by line number or name.
    - Lists stops and which lines serve each one.
    """

    document: ScheduleDocument

    _stop_routes: dict[str, set[str]] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        for route in self.document.routes:
            for shape in route.shapes:
                for s in shape.stops:
                    self._stop_routes.setdefault(s.stop_id, set()).add(
                        route.short_name
                    )

    def get_route(self, route_id: str) -> Route | None:
        return self.document.route_by_id(route_id)

    def search_routes(self, query: str | None, *, limit: int = SEARCH_LIMIT) -> tuple[Route, ...]:
        q = (query or "").strip().lower()
        if not q:
            return self.document.routes[:limit]
        matches = [
            r
            for r in self.document.routes
            if q in r.short_name.lower() or q in r.long_name.lower()
        ]
        return tuple(matches[:limit])

    def list_stops(self) -> tuple[Stop, ...]:
        return self.document.stops

    def routes_serving_stop(self, stop_id: str) -> tuple[str, ...]:
        """Short names of the lines calling at a stop, in natural order."""

        names = self._stop_routes.get(stop_id, set())
        return tuple(sorted(names, key=_natural_key))
