from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from src.adapters.persistence.schedule_codec import (
    decode_document,
    encode_routes,
    encode_stops,
)
from src.app.ports.output import IScheduleRepository
from src.domain.exceptions import DataFetchError
from src.domain.models import ScheduleDocument

logger = logging.getLogger(__name__)


def _write_atomic(path: Path, payload: bytes) -> Path:
    """Write to a sibling temp file; the caller renames it into place."""

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(payload)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return Path(tmp_name)


@dataclass(slots=True)
class LocalScheduleRepository(IScheduleRepository):
    """Schedule artifacts stored as two JSON files in a directory.

    Env vars:
      - SCHEDULE_DIR: output/input directory (default: data/schedule)
      - SCHEDULE_ROUTES_FILE: routes document name (default: routes.json)
      - SCHEDULE_STOPS_FILE: stops document name (default: stops.json)
    """

    base_path: str | Path | None = None
    routes_file: str | None = None
    stops_file: str | None = None

    def _base(self) -> Path:
        return Path(self.base_path or os.getenv("SCHEDULE_DIR") or "data/schedule")

    def routes_path(self) -> Path:
        name = self.routes_file or os.getenv("SCHEDULE_ROUTES_FILE") or "routes.json"
        return self._base() / name

    def stops_path(self) -> Path:
        name = self.stops_file or os.getenv("SCHEDULE_STOPS_FILE") or "stops.json"
        return self._base() / name

    def load_document(self) -> ScheduleDocument:
        try:
            routes_raw = self.routes_path().read_bytes()
            stops_raw = self.stops_path().read_bytes()
        except OSError as exc:
            raise DataFetchError(f"Cannot read schedule artifact: {exc}") from exc
        return decode_document(routes_raw, stops_raw)

    def save_document(self, document: ScheduleDocument) -> None:
        routes_path = self.routes_path()
        stops_path = self.stops_path()
        routes_path.parent.mkdir(parents=True, exist_ok=True)
        stops_path.parent.mkdir(parents=True, exist_ok=True)

        # Encode everything before touching the filesystem.
        routes_payload = encode_routes(document.routes)
        stops_payload = encode_stops(document.stops)

        tmp_routes = _write_atomic(routes_path, routes_payload)
        try:
            tmp_stops = _write_atomic(stops_path, stops_payload)
        except OSError:
            tmp_routes.unlink(missing_ok=True)
            raise

        os.replace(tmp_routes, routes_path)
        os.replace(tmp_stops, stops_path)

        logger.info(
            "Wrote %s (%.2f MB) and %s (%.2f MB)",
            routes_path,
            len(routes_payload) / 1e6,
            stops_path,
            len(stops_payload) / 1e6,
        )
