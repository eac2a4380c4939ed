from __future__ import annotations

import csv
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from src.app.ports.output import IGtfsRepository
from src.domain.exceptions import MalformedRowError, MissingSourceError, MissingTableError
from src.domain.models.gtfs import (
    GtfsFeed,
    GtfsFrequency,
    GtfsRoute,
    GtfsShapePoint,
    GtfsStopTime,
    GtfsTrip,
    Row,
    stop_from_row,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUIRED_TABLES = (
    "routes",
    "trips",
    "shapes",
    "stops",
    "stop_times",
    "frequencies",
)


def find_gtfs_dir(root: str | Path, match: str) -> Path:
    """Return the first directory under ``root`` whose name contains ``match``.

    A root that already holds routes.txt is treated as the GTFS directory itself.
    """

    base = Path(root)
    if not base.is_dir():
        raise MissingSourceError(f"GTFS search root does not exist: {base}")
    if (base / "routes.txt").is_file():
        return base

    needle = match.lower()
    for entry in sorted(base.iterdir(), key=lambda p: p.name):
        if entry.is_dir() and needle in entry.name.lower():
            return entry

    raise MissingSourceError(f"No GTFS directory matching {match!r} under {base}")


def read_table(path: str | Path) -> list[dict[str, str]]:
    """Parse a comma-delimited table into row mappings keyed by the header.

    Blank lines are ignored; short rows are padded with empty strings.
    """

    p = Path(path)
    if not p.is_file():
        raise MissingTableError(p.stem, str(p))

    # utf-8-sig strips the BOM some agencies prepend to the header.
    with p.open("r", encoding="utf-8-sig", newline="") as fp:
        reader = csv.reader(fp)
        header: list[str] | None = None
        rows: list[dict[str, str]] = []
        for values in reader:
            if not any(v.strip() for v in values):
                continue
            if header is None:
                header = [h.strip() for h in values]
                continue
            rows.append(
                {
                    name: (values[i].strip() if i < len(values) else "")
                    for i, name in enumerate(header)
                }
            )
    return rows


def parse_rows(
    table: str, rows: list[dict[str, str]], parse: Callable[[Row], T]
) -> tuple[T, ...]:
    """Apply a typed row parser, skipping rows that fail with MalformedRowError."""

    out: list[T] = []
    skipped = 0
    for row in rows:
        try:
            out.append(parse(row))
        except MalformedRowError as exc:
            skipped += 1
            logger.debug("Skipping malformed row: %s", exc)
    if skipped:
        logger.info("%s.txt: skipped %d malformed rows", table, skipped)
    return tuple(out)


@dataclass(slots=True)
class LocalGtfsRepository(IGtfsRepository):
    """Loads the GTFS tables from a directory of .txt files.

    Env vars:
      - GTFS_ROOT: directory searched for the GTFS folder (default: current dir)
      - GTFS_DIR_MATCH: substring identifying the GTFS folder name (default: gtfs)
    """

    root: str | Path | None = None
    match: str | None = None

    def _root(self) -> Path:
        return Path(self.root or os.getenv("GTFS_ROOT") or ".")

    def _match(self) -> str:
        return self.match or os.getenv("GTFS_DIR_MATCH") or "gtfs"

    def gtfs_dir(self) -> Path:
        return find_gtfs_dir(self._root(), self._match())

    def load_feed(self) -> GtfsFeed:
        base = self.gtfs_dir()
        logger.info("Reading GTFS tables from %s", base)

        # Fail before parsing anything if a table is missing.
        for table in REQUIRED_TABLES:
            path = base / f"{table}.txt"
            if not path.is_file():
                raise MissingTableError(table, str(path))

        def load(table: str, parse: Callable[[Row], T]) -> tuple[T, ...]:
            rows = read_table(base / f"{table}.txt")
            logger.info("%s.txt: %d rows", table, len(rows))
            return parse_rows(table, rows, parse)

        return GtfsFeed(
            routes=load("routes", GtfsRoute.from_row),
            trips=load("trips", GtfsTrip.from_row),
            shape_points=load("shapes", GtfsShapePoint.from_row),
            stops=load("stops", stop_from_row),
            stop_times=load("stop_times", GtfsStopTime.from_row),
            frequencies=load("frequencies", GtfsFrequency.from_row),
        )
