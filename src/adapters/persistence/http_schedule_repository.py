from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

from src.adapters.persistence.schedule_codec import decode_document
from src.app.ports.output import IScheduleRepository
from src.domain.exceptions import DataFetchError
from src.domain.models import ScheduleDocument


@dataclass(slots=True)
class HttpScheduleRepository(IScheduleRepository):
    """Fetches the published schedule artifacts over HTTP (read-only).

    Env vars:
      - SCHEDULE_BASE_URL: URL prefix the artifacts are served under
      - SCHEDULE_ROUTES_FILE / SCHEDULE_STOPS_FILE: artifact names
      - SCHEDULE_HTTP_TIMEOUT_S: request timeout (default 10)
    """

    base_url: str | None = None
    timeout_s: float = 10.0
    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = os.getenv("SCHEDULE_BASE_URL")
        if os.getenv("SCHEDULE_HTTP_TIMEOUT_S"):
            self.timeout_s = float(os.environ["SCHEDULE_HTTP_TIMEOUT_S"])

    def _url(self, name: str) -> str:
        if not self.base_url:
            raise DataFetchError("Missing SCHEDULE_BASE_URL")
        return f"{self.base_url.rstrip('/')}/{name}"

    def _fetch(self, client: httpx.Client, name: str) -> bytes:
        url = self._url(name)
        try:
            resp = client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise DataFetchError(f"Failed {name}: {exc}") from exc
        return resp.content

    def load_document(self) -> ScheduleDocument:
        routes_name = os.getenv("SCHEDULE_ROUTES_FILE") or "routes.json"
        stops_name = os.getenv("SCHEDULE_STOPS_FILE") or "stops.json"
        with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
            routes_raw = self._fetch(client, routes_name)
            stops_raw = self._fetch(client, stops_name)
        return decode_document(routes_raw, stops_raw)

    def save_document(self, document: ScheduleDocument) -> None:
        raise RuntimeError("HTTP schedule source is read-only")
